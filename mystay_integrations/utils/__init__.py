"""
Utility modules for integration connectors
"""

from .pii_redactor import (
    PIIRedactor,
    PIIRedactorFilter,
    get_default_redactor,
    redact_pii,
    setup_logging_redaction,
)

from .logging import (
    ConnectorLogger,
    StructuredFormatter,
    log_performance,
    sanitize_url,
    correlation_id,
)

__all__ = [
    # PII Redaction
    "PIIRedactor",
    "PIIRedactorFilter",
    "get_default_redactor",
    "redact_pii",
    "setup_logging_redaction",
    # Logging
    "ConnectorLogger",
    "StructuredFormatter",
    "log_performance",
    "sanitize_url",
    "correlation_id",
]
