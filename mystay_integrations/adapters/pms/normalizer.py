"""
PMS response normalization

Maps provider reservation and folio payloads into the canonical models.
Both normalizers accept their own output, as canonical objects or as their
camelCase dicts, so normalizing twice gives the same record.
"""

from decimal import Decimal
from typing import Any, Optional

from ...contracts import CanonicalFolio, CanonicalModel, CanonicalReservation, FolioCharge, FolioPayment
from ...normalization import as_dict, as_list, first_truthy, normalize_amount


def _compose_name(first: Optional[str], last: Optional[str]) -> Optional[str]:
    name = " ".join(part for part in (first, last) if part).strip()
    return name or None


def normalize_reservation(data: Any, provider: str) -> CanonicalReservation:
    if isinstance(data, CanonicalModel):
        data = data.to_dict()
    data = as_dict(data)
    guest = as_dict(data.get("guest"))
    room = as_dict(data.get("room"))

    first_name = first_truthy(data.get("guestFirstName"), guest.get("firstName"))
    last_name = first_truthy(data.get("guestLastName"), guest.get("lastName"))

    return CanonicalReservation(
        id=first_truthy(data.get("id"), data.get("reservationId")),
        confirmation_number=data.get("confirmationNumber"),
        guest_first_name=first_name,
        guest_last_name=last_name,
        guest_name=first_truthy(
            data.get("guestName"), _compose_name(first_name, last_name), guest.get("name")
        ),
        guest_email=first_truthy(data.get("guestEmail"), guest.get("email")),
        guest_phone=first_truthy(data.get("guestPhone"), guest.get("phone")),
        check_in_date=first_truthy(data.get("checkInDate"), data.get("arrival")),
        check_out_date=first_truthy(data.get("checkOutDate"), data.get("departure")),
        nights=data.get("nights"),
        room_type=first_truthy(data.get("roomType"), room.get("type")),
        room_number=first_truthy(data.get("roomNumber"), room.get("number")),
        room_rate=data.get("roomRate"),
        total_amount=data.get("totalAmount"),
        currency=first_truthy(data.get("currency"), default="EUR"),
        status=data.get("status"),
        adults=first_truthy(data.get("adults"), data.get("numberOfGuests"), default=1),
        children=first_truthy(data.get("children"), default=0),
        special_requests=data.get("specialRequests"),
        packages=first_truthy(data.get("packages"), default=[]),
        source=first_truthy(data.get("source"), default="direct"),
        guest_id=data.get("guestId"),
        checked_in_at=data.get("checkedInAt"),
        checked_out_at=data.get("checkedOutAt"),
        created_at=data.get("createdAt"),
        provider=provider,
    )


def normalize_folio(data: Any, provider: str) -> CanonicalFolio:
    if isinstance(data, CanonicalModel):
        data = data.to_dict()
    if not data or not isinstance(data, dict):
        return CanonicalFolio(provider=provider)

    charges = [
        FolioCharge(
            id=c.get("id"),
            date=c.get("date"),
            description=c.get("description"),
            amount=normalize_amount(c.get("amount")),
            category=c.get("category"),
        )
        for c in as_list(data.get("charges"))
        if isinstance(c, dict)
    ]
    payments = [
        FolioPayment(
            id=p.get("id"),
            date=p.get("date"),
            description=p.get("description"),
            amount=normalize_amount(p.get("amount")),
            method=p.get("method"),
        )
        for p in as_list(data.get("payments"))
        if isinstance(p, dict)
    ]

    return CanonicalFolio(
        reservation_id=first_truthy(data.get("reservationId"), data.get("reservation_id")),
        charges=charges,
        payments=payments,
        balance=normalize_amount(data.get("balance")) or Decimal("0.00"),
        currency=first_truthy(data.get("currency"), default="EUR"),
        provider=provider,
    )
