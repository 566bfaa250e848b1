"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Generator, List
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from swiftsplit_parser.domain.models import (
    ExtractedText,
    IntentCategory,
    PaymentIntent,
    PaymentSource,
    Recipient,
)
from swiftsplit_parser.infrastructure.database.models import Base, PaymentRecord


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(db: Session):
    """Session factory bound to the test database"""
    return TestingSessionLocal


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def seed_payments(db: Session, now: datetime):
    """Insert payment records for a payer, spaced an hour apart going back from now"""

    def _seed(payer: str, count: int, start_offset_hours: int = 1) -> List[PaymentRecord]:
        records = [
            PaymentRecord(
                payer=payer,
                recipient="Vendor",
                amount=Decimal("10.00"),
                currency="USDC",
                source="chat",
                created_at=now - timedelta(hours=start_offset_hours + i),
            )
            for i in range(count)
        ]
        db.add_all(records)
        db.commit()
        return records

    return _seed


@pytest.fixture
def sample_invoice_text() -> str:
    """Invoice text as it comes out of PDF extraction"""
    return "\n".join(
        [
            "ACME DESIGN STUDIO",
            "Invoice #INV-2024-001",
            "Date: 03/15/2024",
            "",
            "Bill To: Jane Cooper",
            "42 Market Street",
            "Description Qty Price",
            "Website design 1 $500.00",
            "Logo refresh 2 $150.00",
            "Thank you for your business",
            "Subtotal: $800.00",
            "Total: $800.00",
            "Amount Due: $800.00",
        ]
    )


@pytest.fixture
def make_intent():
    """Build a PaymentIntent with sensible defaults"""

    def _make(
        amounts=("100.00",),
        names=("John",),
        confidence: float = 0.95,
        purpose: str = "website",
        payer: str = "Client",
        intent: IntentCategory = IntentCategory.BASIC_PAYMENT,
    ) -> PaymentIntent:
        return PaymentIntent(
            payer=payer,
            recipients=tuple(Recipient(name=name) for name in names),
            amounts=tuple(Decimal(amount) for amount in amounts),
            currency="USDC",
            purpose=purpose,
            confidence=confidence,
            source=PaymentSource.CHAT,
            intent=intent,
        )

    return _make


class FakeExtractor:
    """Stands in for DocumentTextExtractor; returns canned text"""

    def __init__(self, text: str, method: str = "pdf-text"):
        self.text = text
        self.method = method
        self.calls = 0

    def extract(self, data: bytes, file_type: str) -> ExtractedText:
        self.calls += 1
        return ExtractedText(text=self.text, method=self.method, elapsed_ms=12.5)


class FixedHistory:
    """Payment history collaborator reporting a constant count"""

    def __init__(self, count: int):
        self.count = count
        self.payers: List[str] = []

    def count_recent_payments(self, payer: str) -> int:
        self.payers.append(payer)
        return self.count


@pytest.fixture
def fake_extractor(sample_invoice_text: str) -> FakeExtractor:
    return FakeExtractor(sample_invoice_text)


@pytest.fixture
def make_extractor():
    return FakeExtractor


@pytest.fixture
def fixed_history():
    return FixedHistory
