"""
Test the provider registry and per-hotel connector factories
"""

import pytest

from mystay_integrations.adapters.digital_key.connector import DigitalKeyConnector
from mystay_integrations.adapters.pms.connector import PMSConnector
from mystay_integrations.adapters.pms.opera import OperaProvider
from mystay_integrations.adapters.spa.connector import SpaConnector
from mystay_integrations.catalog import list_providers
from mystay_integrations.contracts import (
    BaseProvider,
    InvalidConfigError,
    UnsupportedOperationError,
    UnsupportedProviderError,
)
from mystay_integrations.factory import (
    ProviderRegistry,
    create_digital_key_connector_for_hotel,
    create_pms_connector_for_hotel,
    create_spa_connector_for_hotel,
    get_provider_class,
    get_registry,
    register_provider,
)


class TestProviderRegistry:
    """Registration and lookup by (domain, provider id)"""

    @pytest.mark.parametrize(
        "domain", ["pms", "payment", "digitalKey", "spa", "ocr", "aiConcierge"]
    )
    def test_every_catalogued_provider_is_registered(self, domain):
        registry = get_registry()
        for provider in list_providers(domain):
            assert registry.is_registered(domain, provider), f"{domain}/{provider}"

    def test_lookup(self):
        assert get_provider_class("pms", "opera") is OperaProvider

    def test_unknown_provider(self):
        with pytest.raises(UnsupportedProviderError) as exc_info:
            get_provider_class("pms", "protel")

        assert exc_info.value.code == "unsupported_provider"
        assert "protel" in exc_info.value.message

    def test_providers_are_namespaced_by_domain(self):
        with pytest.raises(UnsupportedProviderError):
            get_provider_class("pms", "alliants")

    def test_unhashable_provider_id(self):
        with pytest.raises(UnsupportedProviderError):
            get_provider_class("pms", ["opera"])

    def test_manual_registration(self):
        registry = ProviderRegistry()
        registry._discovered = True

        class EchoProvider(BaseProvider):
            domain = "pms"
            vendor_name = "echo"

        registry.register("pms", "echo", EchoProvider)

        assert registry.get_provider_class("pms", "echo") is EchoProvider
        assert registry.list_providers("pms") == ["echo"]

    def test_decorator_registers_every_id(self):
        @register_provider("test-domain", "first", "second")
        class TwoNames(BaseProvider):
            pass

        assert get_provider_class("test-domain", "first") is TwoNames
        assert get_provider_class("test-domain", "second") is TwoNames


class TestPMSConnectorDispatch:
    """Uniform verbs over providers with partial APIs"""

    def test_unknown_provider(self):
        with pytest.raises(UnsupportedProviderError):
            PMSConnector("protel", {})

    def test_required_config(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            PMSConnector("opera", {"baseUrl": "https://opera.example.com"})

        assert exc_info.value.code == "invalid_pms_config"
        assert exc_info.value.missing == ["resortId", "username", "password"]

    @pytest.mark.asyncio
    async def test_verb_missing_from_provider(self, mews_config, httpx_mock):
        connector = PMSConnector("mews", mews_config)

        with pytest.raises(UnsupportedOperationError) as exc_info:
            await connector.check_in("RES-1")

        assert exc_info.value.code == "unsupported_operation"
        assert exc_info.value.operation == "check_in"
        assert isinstance(exc_info.value, UnsupportedProviderError)


class TestPerHotelFactories:
    """Connectors built from a hotel's stored settings"""

    @pytest.mark.asyncio
    async def test_pms_defaults_to_mock(self, config_store):
        connector = await create_pms_connector_for_hotel(config_store, "hotel-1")

        assert isinstance(connector, PMSConnector)
        assert connector.provider == "mock"
        assert connector.config["hotelId"] == "hotel-1"

    @pytest.mark.asyncio
    async def test_pms_from_stored_settings(self, config_store, opera_config):
        await config_store.update("hotel-1", "pms", provider="opera", config=opera_config)

        connector = await create_pms_connector_for_hotel(config_store, "hotel-1")

        assert connector.provider == "opera"
        assert connector.impl.resort_id == "RESORT1"

    @pytest.mark.asyncio
    async def test_pms_with_incomplete_config(self, config_store):
        await config_store.update("hotel-1", "pms", provider="opera", config={"resortId": "R"})

        with pytest.raises(InvalidConfigError):
            await create_pms_connector_for_hotel(config_store, "hotel-1")

    @pytest.mark.asyncio
    async def test_digital_key_defaults_to_none(self, config_store):
        connector = await create_digital_key_connector_for_hotel(config_store, "hotel-2")

        assert isinstance(connector, DigitalKeyConnector)
        assert connector.provider == "none"

    @pytest.mark.asyncio
    async def test_digital_key_from_stored_settings(self, config_store):
        await config_store.update(
            "hotel-2",
            "digitalKey",
            provider="alliants",
            config={"baseUrl": "https://keys.example.com", "propertyId": "P1", "apiKey": "k"},
        )

        connector = await create_digital_key_connector_for_hotel(config_store, "hotel-2")

        assert connector.provider == "alliants"

    @pytest.mark.asyncio
    async def test_spa_absent_when_not_configured(self, config_store):
        assert await create_spa_connector_for_hotel(config_store, "hotel-3") is None

    @pytest.mark.asyncio
    async def test_spa_from_stored_settings(self, config_store):
        await config_store.update(
            "hotel-3", "spa", provider="mindbody", config={"siteId": "S1", "apiKey": "k"}
        )

        connector = await create_spa_connector_for_hotel(config_store, "hotel-3")

        assert isinstance(connector, SpaConnector)
        assert connector.base_url == "https://api.mindbodyonline.com/public/v6"
