"""
Opera Cloud PMS provider
REST resources under /v1/hotels/{resortId}, Basic auth when credentials are configured
"""

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from ...contracts import BaseProvider, CanonicalFolio, CanonicalReservation
from ...factory import register_provider
from ...normalization import as_dict, as_list
from ...provider_configs import parse_provider_config
from .normalizer import normalize_folio, normalize_reservation

RESERVATION_FILTERS = ("confirmationNumber", "guestEmail", "status")


def _clean_filters(filters: Optional[Dict[str, Any]], keys) -> Dict[str, str]:
    params = {}
    for key in keys:
        value = (filters or {}).get(key)
        if isinstance(value, str) and value.strip():
            params[key] = value.strip()
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            params[key] = str(value)
    return params


class OperaStyleProvider(BaseProvider):
    """Shared implementation for PMS APIs shaped like Opera's hotel resources"""

    domain = "pms"

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.settings = parse_provider_config(self.domain, self.vendor_name, self.config).require()

    @property
    def resort_id(self) -> Optional[str]:
        return self.settings.resort_id

    def _hotel_url(self, path: str = "") -> str:
        return f"{self.settings.base_url}/v1/hotels/{quote(str(self.resort_id), safe='')}{path}"

    def _reservation_url(self, reservation_id: str, suffix: str = "") -> str:
        return self._hotel_url(f"/reservations/{quote(str(reservation_id), safe='')}{suffix}")

    def _auth(self) -> Optional[httpx.BasicAuth]:
        username = getattr(self.settings, "username", None)
        password = getattr(self.settings, "password", None)
        if username and password:
            return httpx.BasicAuth(username, password)
        return None

    async def _call(self, method: str, url: str, **kwargs) -> Any:
        auth = self._auth()
        if auth is not None:
            kwargs["auth"] = auth
        return await self._request(method, url, **kwargs)

    def _normalize(self, data: Any) -> CanonicalReservation:
        return normalize_reservation(data, self.vendor_name)

    # Reservations
    async def get_reservation(self, confirmation_number: str) -> Optional[CanonicalReservation]:
        data = as_dict(
            await self._call(
                "GET",
                self._hotel_url("/reservations"),
                params={"confirmationNumber": confirmation_number},
            )
        )
        if isinstance(data.get("reservations"), list):
            reservations = data["reservations"]
            reservation = reservations[0] if reservations else None
        else:
            reservation = data.get("reservation")
        return self._normalize(reservation) if reservation else None

    async def list_reservations(self, filters: Optional[Dict[str, Any]] = None) -> List[CanonicalReservation]:
        params = _clean_filters(filters, RESERVATION_FILTERS)
        data = as_dict(await self._call("GET", self._hotel_url("/reservations"), params=params))
        return [self._normalize(r) for r in as_list(data.get("reservations"))]

    async def create_reservation(self, payload: Dict[str, Any]) -> Optional[CanonicalReservation]:
        data = as_dict(await self._call("POST", self._hotel_url("/reservations"), json=payload or {}))
        reservation = data.get("reservation")
        return self._normalize(reservation) if reservation else None

    async def update_reservation(
        self, reservation_id: str, patch: Dict[str, Any]
    ) -> Optional[CanonicalReservation]:
        data = as_dict(await self._call("PATCH", self._reservation_url(reservation_id), json=patch or {}))
        reservation = data.get("reservation")
        return self._normalize(reservation) if reservation else None

    async def get_folio(self, reservation_id: str) -> CanonicalFolio:
        data = await self._call("GET", self._reservation_url(reservation_id, "/folios"))
        folio = data.get("folio") if isinstance(data, dict) and "folio" in data else data
        return normalize_folio(folio, self.vendor_name)

    async def update_guest_profile(self, guest_id: str, profile: Dict[str, Any]) -> Dict[str, Any]:
        url = self._hotel_url(f"/profiles/{quote(str(guest_id), safe='')}")
        return await self._call("PUT", url, json=profile or {})

    # Front desk
    async def check_in(self, reservation_id: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self._call("POST", self._reservation_url(reservation_id, "/checkin"), json=options or {})

    async def check_out(self, reservation_id: str) -> Dict[str, Any]:
        return await self._call("POST", self._reservation_url(reservation_id, "/checkout"))

    async def add_charge(self, reservation_id: str, charge: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call("POST", self._reservation_url(reservation_id, "/charges"), json=charge or {})

    async def get_arrivals(self, date: Optional[str] = None) -> List[CanonicalReservation]:
        params = {"date": date} if date else None
        data = as_dict(await self._call("GET", self._hotel_url("/arrivals"), params=params))
        return [self._normalize(r) for r in as_list(data.get("arrivals"))]

    async def get_departures(self, date: Optional[str] = None) -> List[CanonicalReservation]:
        params = {"date": date} if date else None
        data = as_dict(await self._call("GET", self._hotel_url("/departures"), params=params))
        return [self._normalize(r) for r in as_list(data.get("departures"))]

    async def get_rooms(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        params = _clean_filters(filters, ("status", "floor"))
        data = as_dict(await self._call("GET", self._hotel_url("/rooms"), params=params))
        return as_list(data.get("rooms"))

    # Guest services catalogs
    async def get_menu(self) -> Optional[Dict[str, Any]]:
        data = as_dict(await self._call("GET", self._hotel_url("/menu")))
        return data.get("menu") or None

    async def get_spa_services(self) -> Optional[Any]:
        data = as_dict(await self._call("GET", self._hotel_url("/spa/services")))
        return data.get("services") or None

    async def get_spa_availability(self, date: Optional[str], service_id: Optional[str] = None) -> List[Any]:
        params = {}
        if date:
            params["date"] = date
        if service_id:
            params["serviceId"] = service_id
        data = as_dict(await self._call("GET", self._hotel_url("/spa/availability"), params=params))
        return as_list(data.get("slots"))

    async def health_check(self) -> Dict[str, Any]:
        url = f"{self.settings.base_url}/v1/properties/{quote(str(self.resort_id), safe='')}"
        data = as_dict(await self._call("GET", url))
        return {"connected": True, "property": data.get("property"), "provider": self.vendor_name}


@register_provider("pms", "opera")
class OperaProvider(OperaStyleProvider):
    """Oracle Opera Cloud property APIs"""

    vendor_name = "opera"
    api_label = "Opera"
