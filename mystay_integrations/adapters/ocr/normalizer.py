"""
Extracted ID normalization
"""

from typing import Any, Optional

from ...contracts import ExtractedIDData, utc_now_iso
from ...normalization import as_dict, pick


def normalize_id_data(raw: Any, provider: str, document_type: Optional[str] = None) -> ExtractedIDData:
    """Map an OCR provider's document fields onto ExtractedIDData"""
    data = as_dict(raw)
    return ExtractedIDData(
        document_type=pick(data, "documentType", default=document_type or "passport"),
        document_number=pick(data, "documentNumber", "document_number"),
        first_name=pick(data, "firstName", "given_name"),
        middle_name=pick(data, "middleName", "middle_name"),
        last_name=pick(data, "lastName", "family_name"),
        date_of_birth=pick(data, "dateOfBirth", "birth_date"),
        nationality=data.get("nationality"),
        sex=pick(data, "sex", "gender"),
        issue_date=pick(data, "issueDate", "issue_date"),
        expiry_date=pick(data, "expiryDate", "expiry_date"),
        issuing_country=pick(data, "issuingCountry", "issuing_country"),
        issuing_state=pick(data, "issuingState", "issuing_state"),
        address=data.get("address"),
        confidence=pick(data, "confidence", default=0.95),
        provider=provider,
        extracted_at=utc_now_iso(),
    )
