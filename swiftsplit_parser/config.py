"""Configuration management using Pydantic Settings"""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SWIFTSPLIT_",
        extra="ignore",
    )

    # Service
    service_name: str = "swiftsplit-parser"
    log_level: str = "INFO"

    # Payment intent defaults
    currency: str = "USDC"
    default_payer: str = "Client"

    # Intent detection
    intent_confidence_floor: float = 0.6

    # Risk scoring
    risk_min_confidence: float = 0.85
    large_amount_threshold: int = 10_000
    approval_threshold: int = 50
    frequency_threshold: int = 5
    frequency_lookback_hours: int = 24

    # Voice input
    max_audio_bytes: int = 10 * 1024 * 1024  # 10MB
    allowed_audio_types: List[str] = ["audio/mpeg", "audio/wav", "audio/mp4"]

    # Speech-to-text service
    transcription_api_base: str = "https://api.elevenlabs.io/v1"
    transcription_api_key: str = ""
    transcription_model_id: str = "scribe_v1"

    # HTTP Client
    http_timeout_seconds: float = 30.0
    transcription_max_retries: int = 3
    transcription_backoff_base: float = 1.0  # Exponential backoff base in seconds

    # Document text acquisition
    acquisition_timeout_seconds: float = 30.0
    acquisition_max_retries: int = 3
    acquisition_backoff_base: float = 1.0
    ocr_language: str = "eng"
    pdf_max_pages: int = 10
    pdf_render_dpi: int = 300

    # Payment history (risk frequency signal)
    database_url: str = "sqlite:///./swiftsplit.db"


settings = Settings()
