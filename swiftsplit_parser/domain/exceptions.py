"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    code = "DOMAIN_ERROR"


class IntentNotDetected(DomainException):
    """No payment pattern matched, or confidence fell below the floor"""

    code = "INTENT_NOT_DETECTED"


class AmountNotFound(DomainException):
    """No positive amount could be extracted from the input"""

    code = "AMOUNT_NOT_FOUND"


class UnsupportedFormat(DomainException):
    """Input format (file type or audio content type) is not accepted"""

    code = "UNSUPPORTED_FORMAT"


class AudioTooLarge(UnsupportedFormat):
    """Audio payload exceeds the configured size limit"""

    code = "AUDIO_TOO_LARGE"


class ExtractionError(DomainException):
    """Document text could not be extracted (direct or OCR)"""

    code = "EXTRACTION_ERROR"


class TranscriptionError(DomainException):
    """Speech-to-text service failed or returned an unusable response"""

    code = "TRANSCRIPTION_ERROR"


class ValidationError(DomainException):
    """PaymentIntent is structurally invalid"""

    code = "VALIDATION_ERROR"

    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__(f"Invalid payment intent: {', '.join(self.problems)}")


class InvalidInput(DomainException):
    """Input payload is missing fields or has the wrong shape"""

    code = "INVALID_INPUT"
