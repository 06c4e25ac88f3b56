"""
Shared test fixtures for integration tests
Uses pytest-httpx for mocking HTTP calls and a file-backed SQLite database
for the config store
"""

import pytest
import pytest_asyncio
from typing import Dict, Any
from openai.types.chat import ChatCompletion
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from mystay_integrations.config_store import IntegrationConfigStore
from mystay_integrations.models import Base
from mystay_integrations.settings import IntegrationSettings

OPERA_BASE_URL = "https://opera.example.com"
MEWS_BASE_URL = "https://api.mews-demo.com"
CLOUDBEDS_BASE_URL = "https://hotels.cloudbeds.com"
STRIPE_URL = "https://api.stripe.com/v1"


# Database
@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Engine over a throwaway SQLite file with the schema created"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'integrations.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def config_store(session_factory):
    async with session_factory() as session:
        yield IntegrationConfigStore(session)


# Environment
@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove integration variables from the process environment and any .env"""
    for name in IntegrationSettings.model_fields:
        monkeypatch.delenv(name.upper(), raising=False)
    monkeypatch.delenv("OPENAI_BASE_URL", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def make_settings(clean_env):
    """Build IntegrationSettings from keyword values only"""

    def _make(**values) -> IntegrationSettings:
        return IntegrationSettings(_env_file=None, **values)

    return _make


# Provider configs
@pytest.fixture
def opera_config() -> Dict[str, Any]:
    return {
        "baseUrl": OPERA_BASE_URL,
        "resortId": "RESORT1",
        "username": "OPERA",
        "password": "secret",
        "hotelId": "hotel-1",
    }


@pytest.fixture
def mews_config() -> Dict[str, Any]:
    return {
        "baseUrl": MEWS_BASE_URL,
        "clientToken": "client-token",
        "accessToken": "access-token",
        "enterpriseId": "ENT-1",
    }


@pytest.fixture
def cloudbeds_config() -> Dict[str, Any]:
    return {
        "baseUrl": CLOUDBEDS_BASE_URL,
        "clientId": "cb-client",
        "clientSecret": "cb-secret",
        "propertyId": "PROP-9",
    }


@pytest.fixture
def stripe_config() -> Dict[str, Any]:
    return {"stripeSecretKey": "sk_test_123"}


@pytest.fixture
def concierge_config(clean_env) -> Dict[str, Any]:
    return {
        "apiKey": "sk-openai-test",
        "model": "gpt-4",
        "hotelName": "Hotel Lumiere",
        "hotelLocation": "Lyon",
        "hotelAmenities": ["Spa", "Rooftop bar"],
    }


# Provider responses
@pytest.fixture
def opera_reservation_response() -> Dict[str, Any]:
    """Opera reservation search result"""
    return {
        "reservations": [
            {
                "id": "R-100",
                "confirmationNumber": "ABC123",
                "status": "confirmed",
                "guest": {
                    "firstName": "Ana",
                    "lastName": "Silva",
                    "email": "ana@example.com",
                    "phone": "+351 912 345 678",
                },
                "arrival": "2026-03-01",
                "departure": "2026-03-04",
                "room": {"type": "Deluxe", "number": "402"},
                "totalAmount": 690,
                "currency": "EUR",
                "adults": 2,
            }
        ]
    }


@pytest.fixture
def opera_folio_response() -> Dict[str, Any]:
    return {
        "folio": {
            "reservationId": "R-100",
            "currency": "EUR",
            "charges": [
                {"id": "C1", "date": "2026-03-01", "description": "Room", "amount": "230.00", "category": "room"},
                {"id": "C2", "date": "2026-03-01", "description": "Bar", "amount": 18.5, "category": "bar"},
            ],
            "payments": [
                {"id": "P1", "date": "2026-03-01", "description": "Deposit", "amount": 100, "method": "card"},
            ],
            "balance": "148.50",
        }
    }


@pytest.fixture
def mews_reservation_response() -> Dict[str, Any]:
    """Mews reservations/getAll in PascalCase"""
    return {
        "Reservations": [
            {
                "Id": "mews-res-1",
                "Number": "52",
                "State": "Confirmed",
                "StartUtc": "2026-04-10T14:00:00Z",
                "EndUtc": "2026-04-12T10:00:00Z",
                "AdultCount": 2,
                "ChildCount": 1,
                "AccountId": "cust-7",
                "CreatedUtc": "2026-02-01T08:00:00Z",
            }
        ],
        "Customers": [
            {
                "Id": "cust-7",
                "FirstName": "Lena",
                "LastName": "Berg",
                "Email": "lena@example.com",
                "Phone": "+46 70 123 4567",
            }
        ],
    }


@pytest.fixture
def chat_completion():
    """Build a typed OpenAI chat completion around the given content"""

    def _build(content: str, total_tokens: int = 42) -> ChatCompletion:
        return ChatCompletion.model_validate({
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "created": 1760000000,
            "model": "gpt-4",
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": content},
                    "finish_reason": "stop",
                }
            ],
            "usage": {"prompt_tokens": 30, "completion_tokens": 12, "total_tokens": total_tokens},
        })

    return _build
