"""
Cloudbeds API v1.1 provider

A client-credentials token is requested from /api/v1.1/oauth immediately
before every call; tokens are never cached.
"""

from typing import Any, Dict, Optional

from ...contracts import BaseProvider, CanonicalFolio, CanonicalReservation
from ...factory import register_provider
from ...normalization import as_dict, as_list, first_truthy
from ...provider_configs import parse_provider_config
from .normalizer import normalize_folio, normalize_reservation


def _cloudbeds_reservation(data: Dict[str, Any]) -> Dict[str, Any]:
    mapped = {
        "id": data.get("reservationID"),
        "confirmationNumber": data.get("reservationID"),
        "guestId": data.get("guestID"),
        "guestName": data.get("guestName"),
        "guestEmail": data.get("guestEmail"),
        "guestPhone": data.get("guestPhone"),
        "checkInDate": data.get("startDate"),
        "checkOutDate": data.get("endDate"),
        "totalAmount": data.get("total"),
        "source": data.get("sourceName"),
        "createdAt": data.get("dateCreated"),
    }
    return {**data, **{k: v for k, v in mapped.items() if v is not None}}


def _cloudbeds_folio(data: Dict[str, Any], reservation_id: str) -> Dict[str, Any]:
    charges = [
        {
            "id": first_truthy(c.get("transactionID"), c.get("id")),
            "date": first_truthy(c.get("transactionDateTime"), c.get("date")),
            "description": c.get("description"),
            "amount": c.get("amount"),
            "category": first_truthy(c.get("transactionCategory"), c.get("category")),
        }
        for c in map(as_dict, as_list(data.get("charges")) or as_list(data.get("transactions")))
    ]
    payments = [
        {
            "id": first_truthy(p.get("paymentID"), p.get("id")),
            "date": first_truthy(p.get("paymentDateTime"), p.get("date")),
            "description": p.get("description"),
            "amount": p.get("amount"),
            "method": first_truthy(p.get("paymentType"), p.get("method")),
        }
        for p in map(as_dict, as_list(data.get("payments")))
    ]
    return {
        "reservationId": first_truthy(data.get("reservationID"), reservation_id),
        "charges": charges,
        "payments": payments,
        "balance": data.get("balance"),
        "currency": data.get("currency"),
    }


@register_provider("pms", "cloudbeds")
class CloudbedsProvider(BaseProvider):
    domain = "pms"
    vendor_name = "cloudbeds"
    api_label = "Cloudbeds"

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.settings = parse_provider_config(self.domain, self.vendor_name, self.config).require()

    def _url(self, path: str) -> str:
        return f"{self.settings.base_url}/api/v1.1/{path}"

    async def _access_token(self) -> str:
        data = as_dict(
            await self._request(
                "POST",
                self._url("oauth"),
                data={
                    "grant_type": "client_credentials",
                    "client_id": self.settings.client_id,
                    "client_secret": self.settings.client_secret,
                },
            )
        )
        token = data.get("access_token")
        if not token:
            raise self.api_error("token response carried no access_token")
        return token

    async def _call(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        token = await self._access_token()
        headers = {"Authorization": f"Bearer {token}"}
        data = as_dict(await self._request(method, self._url(path), headers=headers, **kwargs))
        # Cloudbeds wraps payloads as {"success": true, "data": {...}}
        return as_dict(data.get("data")) if "data" in data else data

    async def get_reservation(self, confirmation_number: str) -> Optional[CanonicalReservation]:
        data = await self._call(
            "GET",
            "getReservation",
            params={"propertyID": self.settings.property_id, "reservationID": confirmation_number},
        )
        if not data:
            return None
        return normalize_reservation(_cloudbeds_reservation(data), self.vendor_name)

    async def get_folio(self, reservation_id: str) -> CanonicalFolio:
        data = await self._call(
            "GET",
            "getFolio",
            params={"propertyID": self.settings.property_id, "reservationID": reservation_id},
        )
        if not data:
            return normalize_folio(None, self.vendor_name)
        return normalize_folio(_cloudbeds_folio(data, reservation_id), self.vendor_name)

    async def update_guest_profile(self, guest_id: str, profile: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call(
            "POST",
            "putGuest",
            json={"propertyID": self.settings.property_id, "guestID": guest_id, **(profile or {})},
        )

    async def health_check(self) -> Dict[str, Any]:
        await self._access_token()
        return {
            "connected": True,
            "property": {"id": self.settings.property_id},
            "provider": self.vendor_name,
        }
