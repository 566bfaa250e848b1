"""Data access layer for payment history"""

from datetime import datetime
from typing import Callable, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from swiftsplit_parser.config import settings
from swiftsplit_parser.infrastructure.database.models import PaymentRecord
from swiftsplit_parser.infrastructure.database.session import SessionLocal
from swiftsplit_parser.utils.date_utils import lookback_start


class PaymentHistoryRepository:
    """Repository for recent payments, read only"""

    def __init__(self, db: Session):
        self.db = db

    def count_recent_payments(self, payer: str, since: datetime) -> int:
        """Payments from payer created at or after since"""
        statement = (
            select(func.count())
            .select_from(PaymentRecord)
            .where(PaymentRecord.payer == payer)
            .where(PaymentRecord.created_at >= since)
        )
        return int(self.db.execute(statement).scalar_one())


class RecentPaymentHistory:
    """
    Frequency signal for risk scoring.

    Opens a short-lived session per lookup so one instance can be shared by
    concurrent parse calls.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        lookback_hours: Optional[int] = None,
    ):
        self.session_factory = session_factory
        self.lookback_hours = lookback_hours or settings.frequency_lookback_hours

    def count_recent_payments(self, payer: str, now: Optional[datetime] = None) -> int:
        since = lookback_start(self.lookback_hours, now=now)
        db = self.session_factory()
        try:
            return PaymentHistoryRepository(db).count_recent_payments(payer, since)
        finally:
            db.close()
