"""
Digital key response normalization
Alliants answers in camelCase, OpenKey in snake_case; some responses wrap the
record under "key".
"""

from typing import Any, Optional

from ...contracts import DigitalKey
from ...normalization import as_dict, first_truthy


def normalize_key(data: Any, provider: str, key_id: Optional[str] = None) -> DigitalKey:
    raw = as_dict(data)
    record = as_dict(raw.get("key")) or raw

    return DigitalKey(
        key_id=first_truthy(record.get("keyId"), record.get("key_id"), record.get("id"), key_id),
        guest_id=first_truthy(record.get("guestId"), record.get("guest_id")),
        room_number=first_truthy(record.get("roomNumber"), record.get("room_number")),
        valid_from=first_truthy(record.get("validFrom"), record.get("start_date")),
        valid_to=first_truthy(record.get("validTo"), record.get("end_date")),
        status=first_truthy(record.get("status"), default="active"),
        issued_at=first_truthy(record.get("issuedAt"), record.get("issued_at"), record.get("created_at")),
        revoked_at=first_truthy(record.get("revokedAt"), record.get("revoked_at")),
        updated_at=first_truthy(record.get("updatedAt"), record.get("updated_at")),
        email=first_truthy(record.get("guestEmail"), record.get("email")),
        provider=provider,
        raw=raw or None,
    )
