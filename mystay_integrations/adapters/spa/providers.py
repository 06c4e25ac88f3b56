"""
Spa booking providers

The three vendor systems share the /sites/{siteId}/... resource layout with
Bearer API keys; they differ in default base URL and booking payload extras.
"none" stands in for hotels without a spa system.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from ...contracts import (
    BaseProvider,
    ConnectorNotInitializedError,
    SpaAvailability,
    SpaBooking,
    SpaPractitioner,
    SpaService,
)
from ...factory import register_provider
from ...normalization import as_dict, first_truthy
from ...provider_configs import parse_provider_config
from .normalizer import normalize_availability, normalize_booking, normalize_practitioners, normalize_services


class SpaApiProvider(BaseProvider):
    domain = "spa"
    default_base_url = ""

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.settings = parse_provider_config(self.domain, self.vendor_name, self.config).require()
        self.base_url = self.settings.base_url or self.resolve_default_base_url()

    def resolve_default_base_url(self) -> str:
        return self.default_base_url

    def _site_url(self, path: str) -> str:
        return f"{self.base_url}/sites/{quote(str(self.settings.site_id), safe='')}{path}"

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.settings.api_key}"}

    def _error_from_response(self, response: httpx.Response):
        try:
            body = as_dict(response.json())
        except ValueError:
            body = {}
        return self.api_error(
            first_truthy(body.get("message"), response.reason_phrase), status_code=response.status_code
        )

    async def _call(self, method: str, path: str, **kwargs) -> Any:
        return await self._request(method, self._site_url(path), headers=self._headers(), **kwargs)

    def booking_extras(self) -> Dict[str, Any]:
        return {}

    def build_booking_payload(self, booking: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "site_id": self.settings.site_id,
            "service_id": booking.get("serviceId"),
            "staff_id": booking.get("practitionerId"),
            "date": booking.get("date"),
            "time": booking.get("time"),
            "client": {
                "name": booking.get("guestName"),
                "email": booking.get("guestEmail"),
                "phone": booking.get("guestPhone"),
            },
            "notes": booking.get("specialRequests", ""),
            **self.booking_extras(),
        }

    async def get_services(self, category: Optional[str] = None) -> List[SpaService]:
        params = {"category": category} if category else None
        return normalize_services(await self._call("GET", "/services", params=params))

    async def get_practitioners(self, service_id: Optional[str] = None) -> List[SpaPractitioner]:
        params = {"service_id": service_id} if service_id else None
        return normalize_practitioners(await self._call("GET", "/staff", params=params))

    async def get_availability(
        self,
        service_id: str,
        date: str,
        practitioner_id: Optional[str] = None,
        duration: int = 60,
    ) -> SpaAvailability:
        params = {"service_id": service_id, "date": date, "duration": str(duration)}
        if practitioner_id:
            params["staff_id"] = practitioner_id
        return normalize_availability(await self._call("GET", "/availability", params=params))

    async def create_booking(self, booking: Dict[str, Any]) -> SpaBooking:
        data = await self._call("POST", "/appointments", json=self.build_booking_payload(booking))
        return normalize_booking(data)

    async def update_booking(self, booking_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call("PATCH", f"/appointments/{quote(str(booking_id), safe='')}", json=updates or {})

    async def cancel_booking(self, booking_id: str) -> Dict[str, Any]:
        await self._call("DELETE", f"/appointments/{quote(str(booking_id), safe='')}")
        return {"success": True, "bookingId": booking_id}

    async def get_practitioner_schedule(self, practitioner_id: str, start_date: str, end_date: str) -> Any:
        return await self._call(
            "GET",
            f"/staff/{quote(str(practitioner_id), safe='')}/schedule",
            params={"start_date": start_date, "end_date": end_date},
        )

    async def get_booking(self, booking_id: str) -> SpaBooking:
        data = await self._call("GET", f"/appointments/{quote(str(booking_id), safe='')}")
        return normalize_booking(data)

    async def submit_feedback(
        self,
        booking_id: str,
        rating: Any,
        comment: Optional[str] = None,
        practitioner_id: Optional[str] = None,
    ) -> Any:
        payload = {
            "appointment_id": booking_id,
            "rating": rating,
            "comment": comment,
            "staff_id": practitioner_id,
        }
        return await self._call("POST", "/feedback", json=payload)


@register_provider("spa", "spabooker")
class SpaBookerProvider(SpaApiProvider):
    vendor_name = "spabooker"
    api_label = "SpaBooker"
    default_base_url = "https://api.spabooker.com/v3"

    def booking_extras(self) -> Dict[str, Any]:
        return {"send_confirmation": True, "source": "hotel_app"}


@register_provider("spa", "mindbody")
class MindbodyProvider(SpaApiProvider):
    vendor_name = "mindbody"
    api_label = "Mindbody"
    default_base_url = "https://api.mindbodyonline.com/public/v6"

    def booking_extras(self) -> Dict[str, Any]:
        return {"send_email": True, "test": False}


@register_provider("spa", "generic")
class GenericSpaProvider(SpaApiProvider):
    vendor_name = "generic"
    api_label = "Spa API"
    default_base_url = "https://api.spa-booking.example.com"

    def resolve_default_base_url(self) -> str:
        custom = (self.settings.custom_url or "").strip().rstrip("/")
        return custom or self.default_base_url


@register_provider("spa", "none")
class UnconfiguredSpaProvider(BaseProvider):
    """Hotels without a spa system; every call reports spa_not_configured"""

    domain = "spa"
    vendor_name = "none"
    api_label = "Spa"
    base_url = ""

    def _not_configured(self) -> ConnectorNotInitializedError:
        return ConnectorNotInitializedError(self.domain, "Spa integration is not configured")

    def build_booking_payload(self, booking: Dict[str, Any]) -> Dict[str, Any]:
        raise self._not_configured()

    async def get_services(self, category: Optional[str] = None) -> List[SpaService]:
        raise self._not_configured()

    async def get_practitioners(self, service_id: Optional[str] = None) -> List[SpaPractitioner]:
        raise self._not_configured()

    async def get_availability(
        self,
        service_id: str,
        date: str,
        practitioner_id: Optional[str] = None,
        duration: int = 60,
    ) -> SpaAvailability:
        raise self._not_configured()

    async def create_booking(self, booking: Dict[str, Any]) -> SpaBooking:
        raise self._not_configured()

    async def update_booking(self, booking_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        raise self._not_configured()

    async def cancel_booking(self, booking_id: str) -> Dict[str, Any]:
        raise self._not_configured()

    async def get_practitioner_schedule(self, practitioner_id: str, start_date: str, end_date: str) -> Any:
        raise self._not_configured()

    async def get_booking(self, booking_id: str) -> SpaBooking:
        raise self._not_configured()

    async def submit_feedback(
        self,
        booking_id: str,
        rating: Any,
        comment: Optional[str] = None,
        practitioner_id: Optional[str] = None,
    ) -> Any:
        raise self._not_configured()
