"""
Spa connector
Treatment catalog, practitioner schedules and appointment booking for one hotel
"""

from typing import Any, Dict, List, Optional

from ...contracts import SpaAvailability, SpaBooking, SpaPractitioner, SpaService
from ...factory import get_provider_class
from ...utils.logging import log_performance


class SpaConnector:
    domain = "spa"

    def __init__(self, provider: str, config: Optional[Dict[str, Any]] = None):
        self.provider = provider
        self.config = dict(config or {})
        self.impl = get_provider_class(self.domain, provider)(self.config)
        self.logger = self.impl.logger

    @property
    def base_url(self) -> str:
        return self.impl.base_url

    def build_booking_payload(self, booking: Dict[str, Any]) -> Dict[str, Any]:
        return self.impl.build_booking_payload(booking)

    @log_performance("get_services")
    async def get_services(self, category: Optional[str] = None) -> List[SpaService]:
        return await self.impl.get_services(category)

    @log_performance("get_practitioners")
    async def get_practitioners(self, service_id: Optional[str] = None) -> List[SpaPractitioner]:
        return await self.impl.get_practitioners(service_id)

    @log_performance("get_availability")
    async def get_availability(
        self,
        service_id: str,
        date: str,
        practitioner_id: Optional[str] = None,
        duration: int = 60,
    ) -> SpaAvailability:
        return await self.impl.get_availability(service_id, date, practitioner_id, duration)

    @log_performance("create_booking")
    async def create_booking(
        self,
        service_id: str,
        date: str,
        time: str,
        guest_name: Optional[str] = None,
        guest_email: Optional[str] = None,
        guest_phone: Optional[str] = None,
        practitioner_id: Optional[str] = None,
        special_requests: str = "",
    ) -> SpaBooking:
        """Book an appointment; the provider's confirmation is normalized to SpaBooking"""
        return await self.impl.create_booking(
            {
                "serviceId": service_id,
                "practitionerId": practitioner_id,
                "date": date,
                "time": time,
                "guestName": guest_name,
                "guestEmail": guest_email,
                "guestPhone": guest_phone,
                "specialRequests": special_requests,
            }
        )

    @log_performance("update_booking")
    async def update_booking(self, booking_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        return await self.impl.update_booking(booking_id, updates)

    @log_performance("cancel_booking")
    async def cancel_booking(self, booking_id: str) -> Dict[str, Any]:
        return await self.impl.cancel_booking(booking_id)

    @log_performance("get_practitioner_schedule")
    async def get_practitioner_schedule(self, practitioner_id: str, start_date: str, end_date: str) -> Any:
        return await self.impl.get_practitioner_schedule(practitioner_id, start_date, end_date)

    @log_performance("get_booking")
    async def get_booking(self, booking_id: str) -> SpaBooking:
        return await self.impl.get_booking(booking_id)

    @log_performance("submit_feedback")
    async def submit_feedback(
        self,
        booking_id: str,
        rating: Any,
        comment: Optional[str] = None,
        practitioner_id: Optional[str] = None,
    ) -> Any:
        return await self.impl.submit_feedback(booking_id, rating, comment, practitioner_id)
