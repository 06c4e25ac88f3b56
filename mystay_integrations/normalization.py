"""
Tolerant field-fallback helpers shared by the response normalizers.

Providers disagree on casing (snake_case, PascalCase, camelCase) and nesting
for equivalent fields, so normalizers read through ordered fallback chains.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from dateutil import parser as date_parser

_CENTS = Decimal("0.01")


def as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def first_truthy(*values: Any, default: Any = None) -> Any:
    """First value that is truthy, else default"""
    for value in values:
        if value:
            return value
    return default


def first_present(*values: Any, default: Any = None) -> Any:
    """First value that is not None, else default"""
    for value in values:
        if value is not None:
            return value
    return default


def pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """First truthy data[key] across keys"""
    data = as_dict(data)
    return first_truthy(*(data.get(k) for k in keys), default=default)


def dig(data: Any, *path: str) -> Any:
    """Nested lookup that yields None on any missing or non-dict step"""
    current = data
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def normalize_amount(amount: Any) -> Optional[Decimal]:
    """Monetary amount as Decimal quantized to cents; None when absent or unparseable"""
    if amount is None or isinstance(amount, bool):
        return None
    if isinstance(amount, str):
        amount = amount.replace(",", "").strip()
        if not amount:
            return None
    try:
        return Decimal(str(amount)).quantize(_CENTS)
    except InvalidOperation:
        return None


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse ISO-ish timestamps and dates; None when missing or invalid"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return date_parser.parse(str(value))
    except (ValueError, OverflowError):
        return None


def normalize_date(value: Any) -> Optional[date]:
    """Normalize various date formats to a Python date"""
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def window_is_ordered(start: Any, end: Any, strict: bool = False) -> bool:
    """
    True when start precedes end (or equals it, unless strict).
    Missing or unparseable bounds count as ordered.
    """
    start_dt = parse_datetime(start)
    end_dt = parse_datetime(end)
    if start_dt is None or end_dt is None:
        return True
    # Compare naive against naive; drop tzinfo only when exactly one side has it
    if (start_dt.tzinfo is None) != (end_dt.tzinfo is None):
        start_dt = start_dt.replace(tzinfo=None)
        end_dt = end_dt.replace(tzinfo=None)
    return start_dt < end_dt if strict else start_dt <= end_dt
