"""
Unit tests for spa booking providers with HTTPX mocking
"""

import json

import pytest
from pytest_httpx import HTTPXMock

from mystay_integrations.adapters.spa import SpaConnector
from mystay_integrations.contracts import (
    ConnectorNotInitializedError,
    InvalidConfigError,
    ProviderApiError,
    SpaAvailability,
    SpaBooking,
)

SPABOOKER_SITE = "https://api.spabooker.com/v3/sites/SITE-1"
MINDBODY_SITE = "https://api.mindbodyonline.com/public/v6/sites/SITE-1"


@pytest.fixture
def spa_config():
    return {"siteId": "SITE-1", "apiKey": "spa-key", "hotelId": "hotel-1"}


class TestSpaBookerWithHTTPX:
    @pytest.fixture
    def connector(self, spa_config):
        return SpaConnector("spabooker", spa_config)

    def test_default_base_url(self, connector):
        assert connector.base_url == "https://api.spabooker.com/v3"

    def test_missing_site(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            SpaConnector("spabooker", {"apiKey": "spa-key"})

        assert exc_info.value.missing == ["siteId"]
        assert exc_info.value.code == "invalid_spa_config"

    def test_booking_payload(self, connector):
        payload = connector.build_booking_payload(
            {"serviceId": "S1", "date": "2026-02-01", "time": "10:00", "guestName": "Ana"}
        )

        assert payload == {
            "site_id": "SITE-1",
            "service_id": "S1",
            "staff_id": None,
            "date": "2026-02-01",
            "time": "10:00",
            "client": {"name": "Ana", "email": None, "phone": None},
            "notes": "",
            "send_confirmation": True,
            "source": "hotel_app",
        }

    @pytest.mark.asyncio
    async def test_get_services(self, connector, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            url=f"{SPABOOKER_SITE}/services?category=massage",
            json={"services": [{"id": "S1", "name": "Deep Tissue", "duration": 90, "price": 140}]},
        )

        services = await connector.get_services("massage")

        assert len(services) == 1
        assert services[0].name == "Deep Tissue"
        assert services[0].duration == 90
        assert services[0].category == "general"
        assert httpx_mock.get_request().headers["Authorization"] == "Bearer spa-key"

    @pytest.mark.asyncio
    async def test_get_practitioners(self, connector, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            url=f"{SPABOOKER_SITE}/staff",
            json={"staff": [{"id": "T1", "name": "Jean", "image_url": "https://img/jean.png", "specialties": ["facial"]}]},
        )

        practitioners = await connector.get_practitioners()

        assert practitioners[0].image_url == "https://img/jean.png"
        assert practitioners[0].specialties == ["facial"]
        assert practitioners[0].bio == ""

    @pytest.mark.asyncio
    async def test_get_availability(self, connector, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            url=f"{SPABOOKER_SITE}/availability?service_id=S1&date=2026-02-01&duration=90&staff_id=T1",
            json={"date": "2026-02-01", "slots": ["10:00", "11:30"]},
        )

        availability = await connector.get_availability("S1", "2026-02-01", practitioner_id="T1", duration=90)

        assert availability == SpaAvailability(date="2026-02-01", slots=["10:00", "11:30"])

    @pytest.mark.asyncio
    async def test_create_booking(self, connector, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST",
            url=f"{SPABOOKER_SITE}/appointments",
            json={
                "appointment_id": "A-1",
                "confirmation": "SPA-77",
                "status": "booked",
                "service_name": "Deep Tissue",
                "client": {"name": "Ana", "email": "ana@example.com"},
            },
        )

        booking = await connector.create_booking(
            "S1", "2026-02-01", "10:00", guest_name="Ana", guest_email="ana@example.com", special_requests="Quiet"
        )

        assert isinstance(booking, SpaBooking)
        assert booking.id == "A-1"
        assert booking.confirmation_number == "SPA-77"
        assert booking.guest == {"name": "Ana", "email": "ana@example.com", "phone": None}

        body = json.loads(httpx_mock.get_request().content)
        assert body["notes"] == "Quiet"
        assert body["client"]["email"] == "ana@example.com"
        assert body["source"] == "hotel_app"

    @pytest.mark.asyncio
    async def test_cancel_booking(self, connector, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="DELETE", url=f"{SPABOOKER_SITE}/appointments/A-1", status_code=204)

        assert await connector.cancel_booking("A-1") == {"success": True, "bookingId": "A-1"}

    @pytest.mark.asyncio
    async def test_schedule_and_feedback(self, connector, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            url=f"{SPABOOKER_SITE}/staff/T1/schedule?start_date=2026-02-01&end_date=2026-02-07",
            json={"shifts": []},
        )
        httpx_mock.add_response(method="POST", url=f"{SPABOOKER_SITE}/feedback", json={"id": "F-1"})

        assert await connector.get_practitioner_schedule("T1", "2026-02-01", "2026-02-07") == {"shifts": []}
        assert await connector.submit_feedback("A-1", 5, "Lovely") == {"id": "F-1"}

        assert json.loads(httpx_mock.get_requests()[1].content) == {
            "appointment_id": "A-1",
            "rating": 5,
            "comment": "Lovely",
            "staff_id": None,
        }

    @pytest.mark.asyncio
    async def test_error_prefers_body_message(self, connector, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST",
            url=f"{SPABOOKER_SITE}/appointments",
            status_code=409,
            json={"message": "Slot no longer available"},
        )

        with pytest.raises(ProviderApiError) as exc_info:
            await connector.create_booking("S1", "2026-02-01", "10:00")

        assert exc_info.value.status_code == 409
        assert exc_info.value.message == "SpaBooker API error: Slot no longer available"

    @pytest.mark.asyncio
    async def test_error_without_body(self, connector, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=f"{SPABOOKER_SITE}/appointments/A-1", status_code=500, text="<html/>")

        with pytest.raises(ProviderApiError) as exc_info:
            await connector.get_booking("A-1")

        assert exc_info.value.message == "SpaBooker API error: Internal Server Error"


class TestMindbodyWithHTTPX:
    @pytest.fixture
    def connector(self, spa_config):
        return SpaConnector("mindbody", spa_config)

    def test_booking_extras(self, connector):
        payload = connector.build_booking_payload({"serviceId": "S1"})

        assert payload["send_email"] is True
        assert payload["test"] is False
        assert "source" not in payload

    @pytest.mark.asyncio
    async def test_pascal_case_services(self, connector, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            url=f"{MINDBODY_SITE}/services",
            json={
                "SessionTypes": [
                    {"Id": 7, "Name": "Hot Stone", "DefaultTimeLength": 75, "OnlinePrice": 120, "ProgramId": 2}
                ]
            },
        )

        service = (await connector.get_services())[0]

        assert service.id == 7
        assert service.name == "Hot Stone"
        assert service.duration == 75
        assert service.price == 120
        assert service.category == 2

    @pytest.mark.asyncio
    async def test_pascal_case_booking(self, connector, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            url=f"{MINDBODY_SITE}/appointments/99",
            json={
                "Id": 99,
                "Status": "Booked",
                "StaffName": "Jean",
                "StartDate": "2026-02-01",
                "ClientName": "Ana",
                "ClientEmail": "ana@example.com",
            },
        )

        booking = await connector.get_booking("99")

        assert booking.id == 99
        assert booking.status == "Booked"
        assert booking.practitioner_name == "Jean"
        assert booking.date == "2026-02-01"
        assert booking.guest["email"] == "ana@example.com"

    @pytest.mark.asyncio
    async def test_available_times(self, connector, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            url=f"{MINDBODY_SITE}/availability?service_id=7&date=2026-02-01&duration=60",
            json={"AvailableTimes": ["09:00"]},
        )

        availability = await connector.get_availability("7", "2026-02-01")

        assert availability.slots == ["09:00"]
        assert availability.date is None


class TestGenericSpa:
    def test_custom_url(self, spa_config):
        connector = SpaConnector("generic", {**spa_config, "customUrl": " https://spa.hotel.example.com/api/ "})

        assert connector.base_url == "https://spa.hotel.example.com/api"

    def test_base_url_wins_over_custom_url(self, spa_config):
        connector = SpaConnector(
            "generic", {**spa_config, "baseUrl": "https://a.example.com", "customUrl": "https://b.example.com"}
        )

        assert connector.base_url == "https://a.example.com"

    def test_default_url(self, spa_config):
        assert SpaConnector("generic", spa_config).base_url == "https://api.spa-booking.example.com"

    @pytest.mark.asyncio
    async def test_update_booking(self, spa_config, httpx_mock: HTTPXMock):
        connector = SpaConnector("generic", {**spa_config, "customUrl": "https://spa.hotel.example.com"})
        httpx_mock.add_response(
            method="PATCH",
            url="https://spa.hotel.example.com/sites/SITE-1/appointments/A-1",
            json={"appointmentId": "A-1", "time": "11:00"},
        )

        result = await connector.update_booking("A-1", {"time": "11:00"})

        assert result == {"appointmentId": "A-1", "time": "11:00"}


class TestSpaWithoutProvider:
    """Hotels without a spa system"""

    def test_dispatch_accepts_none(self):
        assert SpaConnector("none", {}).provider == "none"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "call",
        [
            lambda spa: spa.get_services(),
            lambda spa: spa.get_practitioners(),
            lambda spa: spa.get_availability("SRV-1", "2026-03-01"),
            lambda spa: spa.create_booking("SRV-1", "2026-03-01", "10:00"),
            lambda spa: spa.cancel_booking("A-1"),
            lambda spa: spa.get_booking("A-1"),
        ],
    )
    async def test_every_call_reports_not_configured(self, httpx_mock: HTTPXMock, call):
        with pytest.raises(ConnectorNotInitializedError) as exc_info:
            await call(SpaConnector("none", {}))

        assert exc_info.value.code == "spa_not_configured"
        assert httpx_mock.get_requests() == []

    def test_booking_payload_not_configured(self):
        with pytest.raises(ConnectorNotInitializedError):
            SpaConnector("none", {}).build_booking_payload({"serviceId": "SRV-1"})
