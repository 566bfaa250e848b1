"""Assembly of PaymentIntents from classifier and analyzer output"""

from dataclasses import asdict, replace
from decimal import Decimal
from typing import Any, Dict, Optional

from swiftsplit_parser.domain.document import (
    assess_extraction_quality,
    calculate_invoice_confidence,
    determine_invoice_purpose,
)
from swiftsplit_parser.domain.exceptions import AmountNotFound, ValidationError
from swiftsplit_parser.domain.extraction import extract_amount, extract_purpose, extract_recipients
from swiftsplit_parser.domain.models import (
    ExtractedText,
    IntentCategory,
    IntentMatch,
    InvoiceStructure,
    PaymentIntent,
    PaymentSource,
    Recipient,
)
from swiftsplit_parser.domain.splits import calculate_equal_split
from swiftsplit_parser.utils.money import quantize_amount


def normalize_amount(amount: Any) -> Decimal:
    """Positive amount rounded to cents"""
    value = Decimal(str(amount))
    if value <= 0:
        raise ValidationError([f"Invalid amount: {amount}"])
    return quantize_amount(value)


def build_chat_intent(
    intent_match: IntentMatch,
    text: str,
    payer: str,
    currency: str,
    source: PaymentSource = PaymentSource.CHAT,
    extra_metadata: Optional[Dict[str, Any]] = None,
) -> PaymentIntent:
    """
    Build an intent from chat or transcribed voice text.

    Split payments with more than one recipient are divided equally; every
    other intent pays a single normalized amount.
    """
    recipients = extract_recipients(intent_match)
    amount = extract_amount(text, intent_match)
    purpose = extract_purpose(text)

    if intent_match.intent is IntentCategory.SPLIT_PAYMENT and len(recipients) > 1:
        recipients, amounts = calculate_equal_split(amount, recipients)
    else:
        recipients = [
            recipient if recipient.share is not None else replace(recipient, share=Decimal("100"))
            for recipient in recipients
        ]
        amounts = [normalize_amount(amount)] * len(recipients)

    metadata: Dict[str, Any] = {
        "extraction_method": "pattern",
        "word_count": len(text.split()),
    }
    if extra_metadata:
        metadata.update(extra_metadata)

    return PaymentIntent(
        payer=payer,
        recipients=tuple(recipients),
        amounts=tuple(amounts),
        currency=currency,
        purpose=purpose,
        confidence=intent_match.confidence,
        source=source,
        intent=intent_match.intent,
        metadata=metadata,
    )


def build_invoice_intent(
    structure: InvoiceStructure,
    extracted: ExtractedText,
    currency: str,
) -> PaymentIntent:
    """
    Build an intent from an analyzed invoice.

    Raises:
        AmountNotFound: when the invoice has no usable total
    """
    if structure.total is None:
        raise AmountNotFound("Could not determine invoice amount")

    items = list(structure.line_items)

    return PaymentIntent(
        payer=structure.payer,
        recipients=(Recipient(name=structure.recipient, share=Decimal("100")),),
        amounts=(normalize_amount(structure.total),),
        currency=currency,
        purpose=determine_invoice_purpose(items),
        confidence=calculate_invoice_confidence(extracted.word_count, structure),
        source=PaymentSource.INVOICE,
        intent=IntentCategory.BASIC_PAYMENT,
        metadata={
            "invoice_number": structure.invoice_number,
            "invoice_date": structure.invoice_date,
            "line_items": [asdict(item) for item in items],
            "extraction_quality": assess_extraction_quality(extracted.text),
            "extraction_method": extracted.method,
            "processing_time_ms": round(extracted.elapsed_ms, 2),
            "word_count": extracted.word_count,
        },
    )
