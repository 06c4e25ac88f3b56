"""
Mock PMS provider

With a baseUrl it talks to a mock PMS server using the Opera REST shape.
Without one it answers from the built-in dataset in mock_data, with no
network access and without mutating the dataset.
"""

import copy
import itertools
from decimal import Decimal
from typing import Any, Dict, List, Optional

from ...contracts import CanonicalFolio, CanonicalReservation
from ...factory import register_provider
from ...normalization import as_dict, normalize_amount
from .mock_data import (
    FOLIOS,
    GUESTS,
    MENU,
    MOCK_TODAY,
    PROPERTY,
    RESERVATIONS,
    ROOMS,
    SPA_BLOCKED_HOURS,
    SPA_PRACTITIONERS,
    SPA_SERVICES,
)
from .normalizer import normalize_folio
from .opera import OperaStyleProvider

MOCK_TIMESTAMP = f"{MOCK_TODAY}T12:00:00Z"


@register_provider("pms", "mock")
class MockPMSProvider(OperaStyleProvider):
    vendor_name = "mock"
    api_label = "Mock PMS"

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self._ids = itertools.count(1)

    @property
    def remote(self) -> bool:
        return bool(self.settings.base_url)

    @property
    def resort_id(self) -> Optional[str]:
        return self.settings.resort_id or self.settings.property_id

    def _not_found(self, what: str):
        return self.api_error(f"{what} not found", status_code=404)

    def _find(self, reservation_id: str) -> Dict[str, Any]:
        reservation = RESERVATIONS.get(reservation_id)
        if reservation is None:
            raise self._not_found("Reservation")
        return copy.deepcopy(reservation)

    async def get_reservation(self, confirmation_number: str) -> Optional[CanonicalReservation]:
        if self.remote:
            return await super().get_reservation(confirmation_number)
        for reservation in RESERVATIONS.values():
            if reservation["confirmationNumber"] == confirmation_number:
                return self._normalize(copy.deepcopy(reservation))
        return None

    async def list_reservations(self, filters: Optional[Dict[str, Any]] = None) -> List[CanonicalReservation]:
        if self.remote:
            return await super().list_reservations(filters)

        filters = filters or {}
        confirmation = (filters.get("confirmationNumber") or "").strip()
        email = (filters.get("guestEmail") or "").strip().lower()
        status = (filters.get("status") or "").strip()

        results = []
        for reservation in RESERVATIONS.values():
            if confirmation and reservation["confirmationNumber"] != confirmation:
                continue
            if email and (reservation["guest"].get("email") or "").lower() != email:
                continue
            if status and reservation["status"] != status:
                continue
            results.append(self._normalize(copy.deepcopy(reservation)))
        return results

    async def create_reservation(self, payload: Dict[str, Any]) -> Optional[CanonicalReservation]:
        if self.remote:
            return await super().create_reservation(payload)

        n = next(self._ids)
        reservation = {
            "id": f"RES-MOCK-{n:04d}",
            "propertyId": PROPERTY["id"],
            "confirmationNumber": f"MOCK{n:06d}",
            "status": "confirmed",
            "createdAt": MOCK_TIMESTAMP,
            **(payload or {}),
        }
        return self._normalize(reservation)

    async def update_reservation(
        self, reservation_id: str, patch: Dict[str, Any]
    ) -> Optional[CanonicalReservation]:
        if self.remote:
            return await super().update_reservation(reservation_id, patch)

        reservation = self._find(reservation_id)
        reservation.update(patch or {})
        reservation["updatedAt"] = MOCK_TIMESTAMP
        return self._normalize(reservation)

    async def get_folio(self, reservation_id: str) -> CanonicalFolio:
        if self.remote:
            return await super().get_folio(reservation_id)

        folio = FOLIOS.get(reservation_id) or {
            "reservationId": reservation_id,
            "charges": [],
            "payments": [],
            "balance": 0,
            "currency": "EUR",
        }
        return normalize_folio(copy.deepcopy(folio), self.vendor_name)

    async def update_guest_profile(self, guest_id: str, profile: Dict[str, Any]) -> Dict[str, Any]:
        if self.remote:
            return await super().update_guest_profile(guest_id, profile)

        guest = GUESTS.get(guest_id)
        if guest is None:
            raise self._not_found("Profile")
        return {"profile": {**guest, **(profile or {}), "updatedAt": MOCK_TIMESTAMP}}

    async def check_in(self, reservation_id: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if self.remote:
            return await super().check_in(reservation_id, options)

        reservation = self._find(reservation_id)
        reservation["status"] = "checked_in"
        reservation["checkedInAt"] = MOCK_TIMESTAMP
        reservation["roomNumber"] = as_dict(options).get("roomNumber") or reservation.get("roomNumber")
        return {"success": True, "reservation": reservation}

    async def check_out(self, reservation_id: str) -> Dict[str, Any]:
        if self.remote:
            return await super().check_out(reservation_id)

        reservation = self._find(reservation_id)
        reservation["status"] = "checked_out"
        reservation["checkedOutAt"] = MOCK_TIMESTAMP
        folio = copy.deepcopy(FOLIOS.get(reservation_id)) or {"balance": 0, "charges": [], "payments": []}
        return {
            "success": True,
            "reservation": reservation,
            "folio": folio,
            "invoiceUrl": f"/invoices/{reservation_id}.pdf",
        }

    async def add_charge(self, reservation_id: str, charge: Dict[str, Any]) -> Dict[str, Any]:
        if self.remote:
            return await super().add_charge(reservation_id, charge)

        folio = copy.deepcopy(FOLIOS.get(reservation_id)) or {
            "reservationId": reservation_id,
            "charges": [],
            "payments": [],
            "balance": 0,
            "currency": "EUR",
        }
        n = next(self._ids)
        new_charge = {"id": f"CHG-MOCK-{n:04d}", "date": MOCK_TODAY, **(charge or {})}
        folio["charges"].append(new_charge)
        amount = normalize_amount(new_charge.get("amount")) or Decimal("0.00")
        folio["balance"] = (normalize_amount(folio["balance"]) or Decimal("0.00")) + amount
        return {"charge": new_charge, "folio": folio}

    async def get_arrivals(self, date: Optional[str] = None) -> List[CanonicalReservation]:
        if self.remote:
            return await super().get_arrivals(date)

        day = date or MOCK_TODAY
        return [
            self._normalize(copy.deepcopy(r))
            for r in RESERVATIONS.values()
            if r["checkInDate"] == day and r["status"] != "checked_out"
        ]

    async def get_departures(self, date: Optional[str] = None) -> List[CanonicalReservation]:
        if self.remote:
            return await super().get_departures(date)

        day = date or MOCK_TODAY
        return [
            self._normalize(copy.deepcopy(r))
            for r in RESERVATIONS.values()
            if r["checkOutDate"] == day and r["status"] == "checked_in"
        ]

    async def get_rooms(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        if self.remote:
            return await super().get_rooms(filters)

        filters = filters or {}
        rooms = copy.deepcopy(ROOMS)
        if filters.get("status"):
            rooms = [r for r in rooms if r["status"] == filters["status"]]
        if filters.get("floor"):
            rooms = [r for r in rooms if str(r["floor"]) == str(filters["floor"])]
        return rooms

    async def get_menu(self) -> Optional[Dict[str, Any]]:
        if self.remote:
            return await super().get_menu()
        return copy.deepcopy(MENU)

    async def get_spa_services(self) -> Optional[Any]:
        if self.remote:
            return await super().get_spa_services()
        return copy.deepcopy(SPA_SERVICES)

    async def get_spa_availability(self, date: Optional[str], service_id: Optional[str] = None) -> List[Any]:
        if self.remote:
            return await super().get_spa_availability(date, service_id)

        return [
            {
                "time": f"{hour:02d}:00",
                "available": True,
                "practitioner": SPA_PRACTITIONERS[hour % len(SPA_PRACTITIONERS)],
            }
            for hour in range(9, 20)
            if hour not in SPA_BLOCKED_HOURS
        ]

    async def health_check(self) -> Dict[str, Any]:
        if self.remote:
            return await super().health_check()
        return {"connected": True, "property": copy.deepcopy(PROPERTY), "provider": self.vendor_name}
