"""
Mews Connector API provider

Every call is a POST under /api/connector/v1 carrying the static client and
access tokens in both headers and body. Mews answers in PascalCase; records
are mapped onto the canonical keys before normalization.
"""

from typing import Any, Dict, Optional

from ...contracts import BaseProvider, CanonicalFolio, CanonicalReservation
from ...factory import register_provider
from ...normalization import as_dict, as_list, dig, first_truthy
from ...provider_configs import parse_provider_config
from .normalizer import normalize_folio, normalize_reservation


def _money(value: Any) -> Any:
    """Mews amounts are either plain numbers or {Value, Currency} objects"""
    if isinstance(value, dict):
        return first_truthy(value.get("GrossValue"), value.get("Value"), default=0)
    return value


def _mews_reservation(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    reservations = as_list(data.get("Reservations"))
    if not reservations:
        return None
    reservation = as_dict(reservations[0])

    customer_id = first_truthy(reservation.get("AccountId"), reservation.get("CustomerId"))
    customer = next(
        (c for c in as_list(data.get("Customers")) if as_dict(c).get("Id") == customer_id),
        {},
    )

    mapped = {
        "id": reservation.get("Id"),
        "confirmationNumber": reservation.get("Number"),
        "status": reservation.get("State"),
        "checkInDate": reservation.get("StartUtc"),
        "checkOutDate": reservation.get("EndUtc"),
        "adults": reservation.get("AdultCount"),
        "children": reservation.get("ChildCount"),
        "guestId": customer_id,
        "guestFirstName": customer.get("FirstName"),
        "guestLastName": customer.get("LastName"),
        "guestEmail": customer.get("Email"),
        "guestPhone": customer.get("Phone"),
        "createdAt": reservation.get("CreatedUtc"),
        "source": reservation.get("Origin"),
    }
    return {k: v for k, v in mapped.items() if v is not None}


def _mews_folio(data: Dict[str, Any], reservation_id: str) -> Optional[Dict[str, Any]]:
    bills = as_list(data.get("Bills"))
    if not bills:
        return None
    bill = as_dict(bills[0])

    charges = [
        {
            "id": item.get("Id"),
            "date": item.get("ConsumedUtc"),
            "description": item.get("Name"),
            "amount": _money(item.get("Amount")),
            "category": item.get("Type"),
        }
        for item in map(as_dict, as_list(bill.get("Items")) or as_list(bill.get("OrderItems")))
    ]
    payments = [
        {
            "id": item.get("Id"),
            "date": item.get("ConsumedUtc"),
            "description": item.get("Name"),
            "amount": _money(item.get("Amount")),
            "method": item.get("Type"),
        }
        for item in map(as_dict, as_list(bill.get("Payments")) or as_list(bill.get("PaymentItems")))
    ]

    return {
        "reservationId": first_truthy(bill.get("ReservationId"), reservation_id),
        "charges": charges,
        "payments": payments,
        "balance": _money(bill.get("Balance")),
        "currency": first_truthy(bill.get("Currency"), dig(bill, "Balance", "Currency")),
    }


@register_provider("pms", "mews")
class MewsProvider(BaseProvider):
    """Mews Connector API; only reservation lookup, folio and profile update are offered"""

    domain = "pms"
    vendor_name = "mews"
    api_label = "Mews"

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.settings = parse_provider_config(self.domain, self.vendor_name, self.config).require()

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Client-Token": self.settings.client_token,
            "Access-Token": self.settings.access_token,
        }

    def _body(self, **fields) -> Dict[str, Any]:
        return {
            "ClientToken": self.settings.client_token,
            "AccessToken": self.settings.access_token,
            "Client": self.settings.client_name,
            **fields,
        }

    async def _post(self, operation: str, body: Dict[str, Any]) -> Any:
        url = f"{self.settings.base_url}/api/connector/v1/{operation}"
        return await self._request("POST", url, headers=self._headers(), json=body)

    async def get_reservation(self, confirmation_number: str) -> Optional[CanonicalReservation]:
        data = await self._post(
            "reservations/getAll",
            self._body(
                EnterpriseIds=[self.settings.enterprise_id],
                ReservationIds=[confirmation_number],
            ),
        )
        reservation = _mews_reservation(as_dict(data))
        return normalize_reservation(reservation, self.vendor_name) if reservation else None

    async def get_folio(self, reservation_id: str) -> CanonicalFolio:
        data = await self._post(
            "bills/getAll",
            self._body(EnterpriseId=self.settings.enterprise_id, ReservationIds=[reservation_id]),
        )
        return normalize_folio(_mews_folio(as_dict(data), reservation_id), self.vendor_name)

    async def update_guest_profile(self, guest_id: str, profile: Dict[str, Any]) -> Dict[str, Any]:
        return await self._post("customers/update", self._body(CustomerId=guest_id, **(profile or {})))

    async def health_check(self) -> Dict[str, Any]:
        data = as_dict(await self._post("configuration/get", self._body()))
        return {"connected": True, "property": data.get("Enterprise"), "provider": self.vendor_name}
