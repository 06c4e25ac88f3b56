"""
MyStay Integrations - Provider registry and per-hotel connector factories
Provider implementations register themselves by (domain, provider id); factories
turn a hotel's stored settings into a ready connector.
"""

import importlib
import logging
import pkgutil
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Type

from .catalog import get_catalog
from .contracts import BaseProvider, UnsupportedProviderError

if TYPE_CHECKING:
    from .adapters.digital_key.connector import DigitalKeyConnector
    from .adapters.pms.connector import PMSConnector
    from .adapters.spa.connector import SpaConnector
    from .config_store import IntegrationConfigStore

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Registry of provider implementations, one namespace per domain"""

    def __init__(self):
        self._providers: Dict[str, Dict[str, Type[BaseProvider]]] = {}
        self._discovered = False

    def _discover_providers(self):
        """Import every adapter module so their @register_provider decorators run"""
        self._discovered = True
        adapters_path = Path(__file__).parent / "adapters"
        prefix = f"{__package__}.adapters."

        for module_info in pkgutil.walk_packages([str(adapters_path)], prefix=prefix):
            try:
                importlib.import_module(module_info.name)
            except ImportError as e:
                logger.error(f"Failed to load provider module {module_info.name}: {e}")

    def _ensure_discovered(self):
        if not self._discovered:
            self._discover_providers()

    def register(self, domain: str, provider: str, provider_class: Type[BaseProvider]):
        """Register an implementation for a provider id"""
        if not get_catalog().is_valid_provider(domain, provider):
            logger.warning(f"Registering {domain} provider '{provider}' that is not in the catalog")
        self._providers.setdefault(domain, {})[provider] = provider_class
        logger.debug(f"Registered {domain} provider: {provider} ({provider_class.__name__})")

    def get_provider_class(self, domain: str, provider: str) -> Type[BaseProvider]:
        """Get implementation class by domain and provider id"""
        self._ensure_discovered()
        try:
            return self._providers[domain][provider]
        except (KeyError, TypeError):
            raise UnsupportedProviderError(domain, provider) from None

    def list_providers(self, domain: str) -> List[str]:
        self._ensure_discovered()
        return list(self._providers.get(domain, {}).keys())

    def is_registered(self, domain: str, provider: str) -> bool:
        self._ensure_discovered()
        return provider in self._providers.get(domain, {})


# Global registry instance
_registry = ProviderRegistry()


def get_registry() -> ProviderRegistry:
    return _registry


def register_provider(domain: str, *providers: str):
    """
    Class decorator registering a provider implementation

    Usage:
        @register_provider("pms", "opera")
        class OperaProvider(BaseProvider):
            ...
    """

    def decorator(cls):
        for provider in providers:
            _registry.register(domain, provider, cls)
        return cls

    return decorator


def get_provider_class(domain: str, provider: str) -> Type[BaseProvider]:
    return _registry.get_provider_class(domain, provider)


def list_registered_providers(domain: str) -> List[str]:
    return _registry.list_providers(domain)


# Per-hotel factories
async def create_pms_connector_for_hotel(
    store: "IntegrationConfigStore", hotel_id: str
) -> "PMSConnector":
    """PMS connector from the hotel's settings; the built-in mock when none is configured"""
    from .adapters.pms.connector import PMSConnector

    settings = await store.get(hotel_id, "pms")
    if not settings.provider or settings.provider == "none":
        logger.info(f"No PMS configured for hotel {hotel_id}, using mock")
        return PMSConnector("mock", {"hotelId": hotel_id})

    return PMSConnector(settings.provider, {**settings.config, "hotelId": hotel_id})


async def create_digital_key_connector_for_hotel(
    store: "IntegrationConfigStore", hotel_id: str
) -> "DigitalKeyConnector":
    """Digital key connector from the hotel's settings; the 'none' mock when unconfigured"""
    from .adapters.digital_key.connector import DigitalKeyConnector

    settings = await store.get(hotel_id, "digitalKey")
    provider = settings.provider or "none"
    config = {} if provider == "none" else settings.config
    return DigitalKeyConnector(provider, {**config, "hotelId": hotel_id})


async def create_spa_connector_for_hotel(
    store: "IntegrationConfigStore", hotel_id: str
) -> Optional["SpaConnector"]:
    """Spa connector from the hotel's settings; None when the hotel has no spa provider"""
    from .adapters.spa.connector import SpaConnector

    settings = await store.get(hotel_id, "spa")
    if not settings.provider or settings.provider == "none":
        return None

    return SpaConnector(settings.provider, {**settings.config, "hotelId": hotel_id})
