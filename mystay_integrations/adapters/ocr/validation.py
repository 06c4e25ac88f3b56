"""
ID document validation

Pure checks over extracted document data. Problems are reported in the
result, never raised.
"""

from datetime import date
from typing import Any, Optional

from ...contracts import ExtractedIDData, IDValidationResult
from ...normalization import as_dict, normalize_date

DAYS_PER_YEAR = 365.25
ADULT_AGE = 18
MAX_AGE = 120

REQUIRED_FIELDS = (
    ("documentNumber", "Document number is required"),
    ("firstName", "First name is required"),
    ("lastName", "Last name is required"),
    ("dateOfBirth", "Date of birth is required"),
    ("expiryDate", "Expiry date is required"),
)


def validate_id_data(data: Any, today: Optional[date] = None) -> IDValidationResult:
    """
    Validate extracted ID fields

    Args:
        data: ExtractedIDData or its camelCase dict form
        today: Reference date for age and expiry checks; defaults to the current date

    Returns:
        IDValidationResult; is_valid is True only when errors is empty
    """
    fields = data.to_dict() if isinstance(data, ExtractedIDData) else as_dict(data)
    today = today or date.today()
    errors = []
    warnings = []

    for key, message in REQUIRED_FIELDS:
        if not fields.get(key):
            errors.append(message)

    if fields.get("dateOfBirth"):
        dob = normalize_date(fields["dateOfBirth"])
        if dob is None:
            errors.append("Invalid date of birth")
        else:
            age = (today - dob).days / DAYS_PER_YEAR
            if age < ADULT_AGE:
                warnings.append("Guest appears to be under 18")
            if age > MAX_AGE:
                errors.append("Invalid date of birth")

    if fields.get("expiryDate"):
        expiry = normalize_date(fields["expiryDate"])
        if expiry is None:
            errors.append("Invalid expiry date")
        elif expiry < today:
            errors.append("Document has expired")

    return IDValidationResult(is_valid=not errors, errors=errors, warnings=warnings)
