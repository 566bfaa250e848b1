"""Database session management with connection pooling"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from swiftsplit_parser.config import settings
from swiftsplit_parser.infrastructure.database.models import Base

_engine_options = {"pool_pre_ping": True}  # Verify connections before using
if settings.database_url.startswith("sqlite"):
    _engine_options["connect_args"] = {"check_same_thread": False}
else:
    # Recycle after 1 hour to avoid stale connections
    _engine_options.update(pool_size=5, max_overflow=5, pool_recycle=3600)

engine = create_engine(settings.database_url, **_engine_options)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Create the payment history table if it does not exist yet"""
    Base.metadata.create_all(bind=engine)
