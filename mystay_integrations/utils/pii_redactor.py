"""
PII and credential redaction for integration logs
Pattern based: guest contact data, card and document numbers, provider secrets
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


# Keys whose values are never written to logs. Compared after lower-casing and
# dropping underscores/dashes so that camelCase and snake_case both match.
DEFAULT_SENSITIVE_KEYS = (
    "password",
    "secret",
    "token",
    "apikey",
    "authorization",
    "subscriptionkey",
    "email",
    "phone",
    "cardnumber",
    "cvv",
    "passport",
    "documentnumber",
    "dateofbirth",
    "imagedata",
)


def _normalize_key(key: str) -> str:
    return key.lower().replace("_", "").replace("-", "")


class PIIRedactor:
    """
    Redacts PII from free text and structured payloads.

    Detects:
    - Email addresses
    - International phone numbers
    - Card numbers
    - Room, confirmation and guest identifiers in prose
    - Bearer/Basic credentials in header dumps
    """

    TEXT_PATTERNS = [
        (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "<EMAIL>"),
        (re.compile(r"(?<![\w+])\+\d[\d\s().-]{7,}\d\b"), "<PHONE>"),
        (re.compile(r"\b(?:\d[ -]?){13,19}\b"), "<CREDIT_CARD>"),
        (re.compile(r"\b(Bearer|Basic)\s+[A-Za-z0-9._~+/=-]+", re.IGNORECASE), r"\1 <REDACTED>"),
    ]

    ROOM_NUMBER_PATTERN = re.compile(
        r"\b(room|suite|rm|chambre)\s*#?\s*(\d{1,4}[A-Za-z]?)\b", re.IGNORECASE
    )
    CONFIRMATION_NUMBER_PATTERN = re.compile(
        r"\b(confirmation|conf|booking)\s*#?\s*([A-Z0-9]{6,16})\b", re.IGNORECASE
    )
    GUEST_ID_PATTERN = re.compile(
        r"\b(guest|member|loyalty)\s*#?\s*([A-Z0-9-]{8,16})\b", re.IGNORECASE
    )

    def __init__(
        self,
        sensitive_keys: Optional[Iterable[str]] = None,
        redact_char: str = "*",
        enable_custom_patterns: bool = True,
    ):
        keys = list(DEFAULT_SENSITIVE_KEYS) + list(sensitive_keys or [])
        self.sensitive_keys = {_normalize_key(k) for k in keys}
        self.redact_char = redact_char
        self.enable_custom = enable_custom_patterns

    def redact_text(self, text: str) -> str:
        """Redact PII from a piece of text"""
        if not text:
            return text

        redacted = text
        for pattern, replacement in self.TEXT_PATTERNS:
            redacted = pattern.sub(replacement, redacted)

        if self.enable_custom:
            redacted = self.ROOM_NUMBER_PATTERN.sub(r"\1 <ROOM_NUMBER>", redacted)
            redacted = self.CONFIRMATION_NUMBER_PATTERN.sub(r"\1 <CONFIRMATION>", redacted)
            redacted = self.GUEST_ID_PATTERN.sub(r"\1 <GUEST_ID>", redacted)

        return redacted

    def is_sensitive_key(self, key: str) -> bool:
        normalized = _normalize_key(str(key))
        return any(s in normalized for s in self.sensitive_keys)

    def redact_dict(
        self, data: Dict[str, Any], sensitive_keys: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        """
        Redact PII from dictionary values, recursing into nested structures

        Args:
            data: Dictionary to redact
            sensitive_keys: Additional keys to fully redact

        Returns:
            New dictionary with redacted values
        """
        extra = {_normalize_key(k) for k in (sensitive_keys or [])}

        def _redact_value(key: str, value: Any) -> Any:
            normalized = _normalize_key(str(key))
            if self.is_sensitive_key(key) or any(s in normalized for s in extra):
                if value is None:
                    return None
                return f"<REDACTED_{str(key).upper()}>"

            if isinstance(value, dict):
                return self.redact_dict(value, sensitive_keys)
            if isinstance(value, list):
                return [_redact_value(key, item) for item in value]
            if isinstance(value, str):
                return self.redact_text(value)
            return value

        return {k: _redact_value(k, v) for k, v in data.items()}

    def redact_log_record(self, record: logging.LogRecord) -> logging.LogRecord:
        """Redact the message and arguments of a log record in place"""
        if isinstance(record.msg, str):
            record.msg = self.redact_text(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = self.redact_dict(record.args)
            else:
                record.args = tuple(
                    self.redact_text(arg) if isinstance(arg, str) else arg
                    for arg in record.args
                )

        return record


class PIIRedactorFilter(logging.Filter):
    """
    Logging filter that redacts PII from every record passing through

    Usage:
        logger = logging.getLogger(__name__)
        logger.addFilter(PIIRedactorFilter())
    """

    def __init__(self, redactor: Optional[PIIRedactor] = None):
        super().__init__()
        self.redactor = redactor or get_default_redactor()

    def filter(self, record: logging.LogRecord) -> bool:
        self.redactor.redact_log_record(record)
        return True


_default_redactor: Optional[PIIRedactor] = None


def get_default_redactor() -> PIIRedactor:
    """Get or create the default PII redactor instance"""
    global _default_redactor
    if _default_redactor is None:
        _default_redactor = PIIRedactor()
    return _default_redactor


def redact_pii(text: str) -> str:
    """Convenience function to redact PII from text"""
    return get_default_redactor().redact_text(text)


def setup_logging_redaction(target: Optional[logging.Logger] = None):
    """Attach the redaction filter to a logger and its handlers (root by default)"""
    target_logger = target or logging.getLogger()

    if any(isinstance(f, PIIRedactorFilter) for f in target_logger.filters):
        return

    target_logger.addFilter(PIIRedactorFilter())
    for handler in target_logger.handlers:
        handler.addFilter(PIIRedactorFilter())
