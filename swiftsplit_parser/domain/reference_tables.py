"""Static reference data shared read-only by every parse call.

Everything here is built once at import time and exposed as immutable
containers (tuples, frozensets, mapping proxies). Tuple order is significant
wherever a table is scanned first-match-wins.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Pattern, Tuple

from swiftsplit_parser.domain.models import IntentCategory

_NUMBER = r"\d{1,3}(?:,\d{3})+(?:\.\d{1,2})?|\d+(?:\.\d{1,2})?"
_AMOUNT = rf"\$?(?P<amount>{_NUMBER})"
_CURRENCY_WORD = r"(?:\s*(?:usdc|usd|dollars?|bucks))?"
_HANDLE = r"@?(?P<recipient>\w+)"

# First match wins; do not reorder.
INTENT_PATTERNS: Tuple[Tuple[IntentCategory, Pattern[str]], ...] = (
    (
        IntentCategory.BASIC_PAYMENT,
        re.compile(rf"\b(?:pay|send|transfer)\s+{_HANDLE}\s+{_AMOUNT}", re.IGNORECASE),
    ),
    (
        IntentCategory.BASIC_PAYMENT,
        re.compile(
            rf"\b(?:pay|send|transfer)\s+{_AMOUNT}{_CURRENCY_WORD}\s+to\s+{_HANDLE}",
            re.IGNORECASE,
        ),
    ),
    (
        IntentCategory.SPLIT_PAYMENT,
        re.compile(
            rf"\b(?:split|divide)\s+{_AMOUNT}{_CURRENCY_WORD}\s+(?:among|between|to|with)\s+"
            r"(?P<recipients>.+?)(?:\s+for\s+.+)?[.!]?$",
            re.IGNORECASE,
        ),
    ),
    (
        IntentCategory.TIP_PAYMENT,
        re.compile(rf"\btip\s+{_HANDLE}\s+{_AMOUNT}", re.IGNORECASE),
    ),
)

STRONG_INTENT_INDICATORS: Tuple[str, ...] = ("pay", "send", "transfer", "usdc", "tip")
WEAK_INTENT_INDICATORS: Tuple[str, ...] = ("money", "cash", "funds", "dollars")

# Split on ", " / "," or " and "
RECIPIENT_SEPARATOR = re.compile(r",\s*|\s+and\s+", re.IGNORECASE)

# Currency-like numeric tokens for the fallback amount scan
AMOUNT_TOKEN = re.compile(rf"\$?({_NUMBER})")

PURPOSE_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"\bfor\s+(.+?)(?:\s+(?:please|thanks)\b|\.|$)", re.IGNORECASE),
    re.compile(r"\bpayment\s+for\s+(.+)", re.IGNORECASE),
    re.compile(r"\bfor\s+(\w+\s+\w+)", re.IGNORECASE),
)

PAYMENT_PURPOSES: Tuple[str, ...] = (
    "website",
    "design",
    "development",
    "logo",
    "content",
    "writing",
    "marketing",
    "consulting",
)

DEFAULT_PURPOSE = "Professional services"

# Invoice purpose is derived from line item descriptions
INVOICE_SERVICE_TYPES: Tuple[str, ...] = (
    "design",
    "development",
    "consulting",
    "writing",
    "marketing",
    "support",
    "maintenance",
)

# (section, trigger keywords); checked in order, first hit switches section
SECTION_TRIGGERS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("recipient", ("bill to", "ship to")),
    ("payer", ("from", "vendor")),
    ("items", ("description", "item")),
    ("totals", ("total", "amount due")),
)

INVOICE_NUMBER_PATTERN = re.compile(
    r"invoice\s*(?:#|no\.?|number)?\s*:?\s*([a-z0-9\-]*\d[a-z0-9\-]*)", re.IGNORECASE
)
INVOICE_DATE_PATTERN = re.compile(r"(\d{4}-\d{2}-\d{2}|\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4})")
LINE_ITEM_PATTERN = re.compile(r"^(.+?)\s+(\d+)\s+\$?(\d[\d,]*(?:\.\d+)?)")

_MONEY = r"(\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)"

# First pattern that matches on the first qualifying line wins
TOTAL_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(rf"total\s*[:\s]\s*\$?{_MONEY}", re.IGNORECASE),
    re.compile(rf"amount\s*(?:due)?\s*[:\s]\s*\$?{_MONEY}", re.IGNORECASE),
    re.compile(rf"balance\s*(?:due)?\s*[:\s]\s*\$?{_MONEY}", re.IGNORECASE),
    re.compile(rf"\${_MONEY}(?!.*\$\d)"),
)


@dataclass(frozen=True)
class RiskPattern:
    """Pattern over the payment description that raises the risk score"""

    pattern: Pattern[str]
    severity: str  # high | medium
    reason: str


RISK_PATTERNS: Tuple[RiskPattern, ...] = (
    RiskPattern(re.compile(r"payment.*double", re.IGNORECASE), "high", "Duplicate payment request"),
    RiskPattern(re.compile(r"pay.*unknown", re.IGNORECASE), "medium", "Unknown recipient"),
    RiskPattern(re.compile(r"\$(\d{5,})", re.IGNORECASE), "high", "Unusually large amount"),
)

SEVERITY_POINTS = MappingProxyType({"high": 40, "medium": 20})

SUSPICIOUS_KEYWORDS: Tuple[str, ...] = (
    "urgent",
    "immediately",
    "asap",
    "emergency",
    "secret",
    "confidential",
    "wire transfer",
    "western union",
)

SUPPORTED_DOCUMENT_TYPES = frozenset({"pdf", "jpg", "jpeg", "png", "tiff"})
