"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class IntentCategory(str, Enum):
    """Shape of a payment request"""

    BASIC_PAYMENT = "BASIC_PAYMENT"
    SPLIT_PAYMENT = "SPLIT_PAYMENT"
    TIP_PAYMENT = "TIP_PAYMENT"
    UNKNOWN = "UNKNOWN"


class PaymentSource(str, Enum):
    """Input modality a payment request arrived through"""

    CHAT = "chat"
    INVOICE = "invoice"
    VOICE = "voice"


@dataclass(frozen=True)
class IntentMatch:
    """Output of intent classification"""

    intent: IntentCategory
    groups: Dict[str, str]  # named captures: recipient, recipients, amount
    confidence: float

    @property
    def matched(self) -> bool:
        return self.intent is not IntentCategory.UNKNOWN


@dataclass(frozen=True)
class Recipient:
    """Payee; wallet is resolved downstream, never by the parser"""

    name: str
    wallet: Optional[str] = None
    share: Optional[Decimal] = None  # percentage of the total


@dataclass(frozen=True)
class LineItem:
    """Single invoice line"""

    description: str
    quantity: int
    unit_price: Decimal


@dataclass(frozen=True)
class InvoiceStructure:
    """Sections and fields recovered from invoice text"""

    sections: Dict[str, List[str]]
    invoice_number: Optional[str]
    invoice_date: Optional[str]
    payer: str
    recipient: str
    line_items: Tuple[LineItem, ...]
    total: Optional[Decimal]


@dataclass(frozen=True)
class ExtractedText:
    """Text pulled out of a document by the acquisition layer"""

    text: str
    method: str  # pdf-text | pdf-ocr | image-ocr
    elapsed_ms: float

    @property
    def word_count(self) -> int:
        return len(self.text.split())


@dataclass(frozen=True)
class PaymentIntent:
    """Normalized description of a requested payment"""

    payer: str
    recipients: Tuple[Recipient, ...]
    amounts: Tuple[Decimal, ...]
    currency: str
    purpose: str
    confidence: float
    source: PaymentSource
    intent: IntentCategory
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_amount(self) -> Decimal:
        return sum(self.amounts, Decimal("0"))


@dataclass(frozen=True)
class RiskAssessment:
    """Output of risk scoring"""

    score: int
    issues: List[str]
    warnings: List[str]
    is_approved: bool
    requires_review: bool
    assessed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_valid(self) -> bool:
        return not self.issues
