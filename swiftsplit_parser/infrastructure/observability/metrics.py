"""Prometheus metrics for monitoring parse outcomes, risk decisions, and text acquisition"""

from prometheus_client import Counter, Histogram

# Parse metrics
parse_counter = Counter(
    "swiftsplit_parse_total",
    "Total payment parse attempts",
    ["source", "outcome"],  # chat|invoice|voice, success|failure
)

risk_decision_counter = Counter(
    "swiftsplit_risk_decision_total",
    "Risk decisions by band",
    ["band"],  # low, elevated, review, critical
)

risk_score_histogram = Histogram(
    "swiftsplit_risk_score",
    "Risk score distribution",
    buckets=[0, 10, 25, 50, 75, 100],
)

# Text acquisition metrics
acquisition_latency_histogram = Histogram(
    "text_acquisition_latency_seconds",
    "Document text extraction time",
    ["method"],  # pdf-text | pdf-ocr | image-ocr
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

acquisition_failure_counter = Counter(
    "text_acquisition_failures_total",
    "Failed or timed out document text extraction attempts",
)

# Speech-to-text metrics
transcription_latency_histogram = Histogram(
    "transcription_latency_seconds",
    "Speech-to-text response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

transcription_failure_counter = Counter(
    "transcription_failures_total",
    "Failed speech-to-text calls",
)


def record_parse(source: str, success: bool) -> None:
    """Record parse outcome by input modality"""
    parse_counter.labels(source=source, outcome="success" if success else "failure").inc()


def record_risk_decision(score: int) -> None:
    """Record risk score metrics for monitoring review rates"""
    risk_score_histogram.observe(score)

    # Bucket scores for review-rate analysis
    if score < 25:
        band = "low"
    elif score < 50:
        band = "elevated"
    elif score < 75:
        band = "review"
    else:
        band = "critical"

    risk_decision_counter.labels(band=band).inc()
