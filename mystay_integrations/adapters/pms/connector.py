"""
PMS connector

Resolves the provider implementation through the registry and exposes the
uniform PMS verbs. Verbs a provider's API does not offer raise
UnsupportedOperationError.
"""

from typing import Any, Dict, List, Optional

from ...contracts import (
    CanonicalFolio,
    CanonicalReservation,
    IntegrationError,
    InvalidRequestError,
    UnsupportedOperationError,
)
from ...factory import get_provider_class
from ...normalization import as_dict, first_truthy, window_is_ordered
from ...utils.logging import log_performance


def _check_stay_window(payload: Any):
    data = as_dict(payload)
    check_in = first_truthy(data.get("checkInDate"), data.get("arrival"))
    check_out = first_truthy(data.get("checkOutDate"), data.get("departure"))
    if not window_is_ordered(check_in, check_out, strict=True):
        raise InvalidRequestError("checkInDate must be before checkOutDate", field="checkOutDate")


class PMSConnector:
    """Property management system access for one hotel"""

    domain = "pms"

    def __init__(self, provider: str, config: Optional[Dict[str, Any]] = None):
        self.provider = provider
        self.config = dict(config or {})
        self.impl = get_provider_class(self.domain, provider)(self.config)
        self.logger = self.impl.logger

    async def _dispatch(self, operation: str, *args, **kwargs):
        method = getattr(self.impl, operation, None)
        if method is None:
            raise UnsupportedOperationError(self.domain, self.provider, operation)
        return await method(*args, **kwargs)

    @log_performance("get_reservation")
    async def get_reservation(self, confirmation_number: str) -> Optional[CanonicalReservation]:
        return await self._dispatch("get_reservation", confirmation_number)

    @log_performance("list_reservations")
    async def list_reservations(self, filters: Optional[Dict[str, Any]] = None) -> List[CanonicalReservation]:
        return await self._dispatch("list_reservations", filters or {})

    @log_performance("create_reservation")
    async def create_reservation(self, payload: Dict[str, Any]) -> Optional[CanonicalReservation]:
        _check_stay_window(payload)
        return await self._dispatch("create_reservation", payload or {})

    @log_performance("update_reservation")
    async def update_reservation(self, reservation_id: str, patch: Dict[str, Any]) -> Optional[CanonicalReservation]:
        _check_stay_window(patch)
        return await self._dispatch("update_reservation", reservation_id, patch or {})

    @log_performance("get_folio")
    async def get_folio(self, reservation_id: str) -> CanonicalFolio:
        return await self._dispatch("get_folio", reservation_id)

    @log_performance("update_guest_profile")
    async def update_guest_profile(self, guest_id: str, profile: Dict[str, Any]) -> Dict[str, Any]:
        return await self._dispatch("update_guest_profile", guest_id, profile or {})

    @log_performance("check_in")
    async def check_in(self, reservation_id: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self._dispatch("check_in", reservation_id, options or {})

    @log_performance("check_out")
    async def check_out(self, reservation_id: str) -> Dict[str, Any]:
        return await self._dispatch("check_out", reservation_id)

    @log_performance("add_charge")
    async def add_charge(self, reservation_id: str, charge: Dict[str, Any]) -> Dict[str, Any]:
        return await self._dispatch("add_charge", reservation_id, charge or {})

    @log_performance("get_arrivals")
    async def get_arrivals(self, date: Optional[str] = None) -> List[CanonicalReservation]:
        return await self._dispatch("get_arrivals", date)

    @log_performance("get_departures")
    async def get_departures(self, date: Optional[str] = None) -> List[CanonicalReservation]:
        return await self._dispatch("get_departures", date)

    @log_performance("get_rooms")
    async def get_rooms(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return await self._dispatch("get_rooms", filters or {})

    @log_performance("get_menu")
    async def get_menu(self) -> Optional[Dict[str, Any]]:
        return await self._dispatch("get_menu")

    @log_performance("get_spa_services")
    async def get_spa_services(self) -> Optional[Any]:
        return await self._dispatch("get_spa_services")

    @log_performance("get_spa_availability")
    async def get_spa_availability(self, date: Optional[str], service_id: Optional[str] = None) -> List[Any]:
        return await self._dispatch("get_spa_availability", date, service_id)

    async def health_check(self) -> Dict[str, Any]:
        """Probe the PMS; failures are reported in the result, never raised"""
        try:
            return await self._dispatch("health_check")
        except IntegrationError as e:
            self.logger.warning(f"PMS health check failed: {e.message}")
            return {"connected": False, "error": getattr(e, "reason", None) or e.message}
