"""Invoice document structure analysis over extracted text"""

import re
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from swiftsplit_parser.domain.exceptions import AmountNotFound
from swiftsplit_parser.domain.models import InvoiceStructure, LineItem
from swiftsplit_parser.domain.reference_tables import (
    DEFAULT_PURPOSE,
    INVOICE_DATE_PATTERN,
    INVOICE_NUMBER_PATTERN,
    INVOICE_SERVICE_TYPES,
    LINE_ITEM_PATTERN,
    SECTION_TRIGGERS,
    TOTAL_PATTERNS,
)
from swiftsplit_parser.utils.money import to_decimal

HEADER_FALLBACK_LINES = 10
MAX_NAME_LENGTH = 100
DEFAULT_PAYER = "Client"
DEFAULT_RECIPIENT = "Vendor"

_LABEL_PREFIX = re.compile(r"^[^:]*:\s*")
_NAME_CHARS = re.compile(r"[^a-zA-Z0-9\s\-&]")
_WHITESPACE = re.compile(r"\s+")


def split_lines(text: str) -> List[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def identify_sections(lines: Iterable[str]) -> Dict[str, List[str]]:
    """
    Assign each line to a section in a single forward pass.

    The current section starts at "header". A line containing a trigger
    keyword switches the section before it is filed, and the line is filed
    under the new section. Assignment is sticky until the next trigger.
    """
    sections: Dict[str, List[str]] = {}
    current = "header"

    for line in lines:
        lowered = line.lower()
        for section, triggers in SECTION_TRIGGERS:
            if any(trigger in lowered for trigger in triggers):
                current = section
                break
        sections.setdefault(current, []).append(line)

    return sections


def extract_header(header_lines: Iterable[str]) -> Tuple[Optional[str], Optional[str]]:
    """Invoice number and date; first match per field wins"""
    invoice_number = None
    invoice_date = None

    for line in header_lines:
        if invoice_number is None:
            match = INVOICE_NUMBER_PATTERN.search(line)
            if match:
                invoice_number = match.group(1)
        if invoice_date is None:
            match = INVOICE_DATE_PATTERN.search(line)
            if match:
                invoice_date = match.group(1)
        if invoice_number is not None and invoice_date is not None:
            break

    return invoice_number, invoice_date


def extract_line_items(item_lines: Iterable[str]) -> List[LineItem]:
    """Lines that are not 'description quantity price' are skipped"""
    items = []
    for line in item_lines:
        match = LINE_ITEM_PATTERN.match(line)
        if not match:
            continue
        price = to_decimal(match.group(3))
        if price is None:
            continue
        items.append(
            LineItem(
                description=match.group(1).strip(),
                quantity=int(match.group(2)) or 1,
                unit_price=price,
            )
        )
    return items


def extract_total(total_lines: Iterable[str]) -> Decimal:
    """
    Invoice total using explicit first-match precedence.

    Each line is tried against the total patterns in order; the first pattern
    yielding a positive value on the first qualifying line wins, even when a
    later line carries a larger amount.

    Raises:
        AmountNotFound: when no line yields a positive total
    """
    for line in total_lines:
        for pattern in TOTAL_PATTERNS:
            match = pattern.search(line)
            if not match:
                continue
            amount = to_decimal(match.group(1))
            if amount is not None and amount > 0:
                return amount

    raise AmountNotFound("Could not determine invoice amount")


def clean_name(name: str) -> str:
    cleaned = _NAME_CHARS.sub("", name)
    return _WHITESPACE.sub(" ", cleaned).strip()[:MAX_NAME_LENGTH]


def extract_party(section_lines: Optional[List[str]], default: str) -> str:
    """
    Party name from a payer/recipient section.

    The trigger line usually reads "Bill To: Jane Doe"; the label is dropped.
    When the label stands alone, the next line holds the name.
    """
    if not section_lines:
        return default

    first = section_lines[0]
    candidate = _LABEL_PREFIX.sub("", first) if ":" in first else ""
    if not candidate.strip() and len(section_lines) > 1:
        candidate = section_lines[1]

    return clean_name(candidate) or default


def determine_invoice_purpose(items: List[LineItem]) -> str:
    if not items:
        return DEFAULT_PURPOSE

    descriptions = [item.description.lower() for item in items]
    for service in INVOICE_SERVICE_TYPES:
        if any(service in description for description in descriptions):
            return service.capitalize()

    return items[0].description or DEFAULT_PURPOSE


def assess_extraction_quality(text: str) -> str:
    word_count = len(text.split())
    if word_count > 200:
        return "high"
    if word_count > 50:
        return "medium"
    return "low"


def calculate_invoice_confidence(word_count: int, structure: InvoiceStructure) -> float:
    """
    Confidence for the invoice path.

    Scoring:
    - 0.5 base
    - +0.2 when the extracted text exceeds 100 words
    - +0.1 invoice number found
    - +0.1 at least one line item parsed
    - +0.1 total extracted, otherwise -0.2
    """
    confidence = 0.5
    if word_count > 100:
        confidence += 0.2
    if structure.invoice_number:
        confidence += 0.1
    if structure.line_items:
        confidence += 0.1
    if structure.total is not None:
        confidence += 0.1
    else:
        confidence -= 0.2
    return round(min(max(confidence, 0.0), 1.0), 2)


def analyze_invoice_structure(text: str) -> InvoiceStructure:
    """
    Segment invoice text and pull out header fields, parties, items and total.

    The total is left as None when it cannot be found; callers decide whether
    that aborts the parse.
    """
    lines = split_lines(text)
    sections = identify_sections(lines)

    header_lines = sections.get("header") or lines[:HEADER_FALLBACK_LINES]
    invoice_number, invoice_date = extract_header(header_lines)

    try:
        total = extract_total(sections.get("totals") or lines)
    except AmountNotFound:
        total = None

    return InvoiceStructure(
        sections=sections,
        invoice_number=invoice_number,
        invoice_date=invoice_date,
        payer=extract_party(sections.get("payer"), DEFAULT_PAYER),
        recipient=extract_party(sections.get("recipient"), DEFAULT_RECIPIENT),
        line_items=tuple(extract_line_items(sections.get("items", []))),
        total=total,
    )
