"""
Integration manager

Holds one lazily built connector per integration domain for a hotel (or for
the process, when no hotel is given). Each domain's provider is resolved from
an explicit config, then the hotel's stored settings, then the environment,
then the domain default.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

from .adapters.ai.concierge import AIConcierge
from .adapters.digital_key.connector import DigitalKeyConnector
from .adapters.ocr.service import OCRService
from .adapters.payment.connector import PaymentConnector
from .adapters.pms.connector import PMSConnector
from .adapters.spa.connector import SpaConnector
from .catalog import PERSISTED_DOMAINS, default_provider
from .config_store import IntegrationConfigStore
from .contracts import ConnectorNotInitializedError, IntegrationError, IntegrationHealth, utc_now_iso
from .factory import get_provider_class
from .logging_adapter import get_safe_logger
from .metrics import connectors_created_total
from .normalization import as_dict
from .settings import IntegrationSettings

logger = get_safe_logger("mystay_integrations.manager")

DOMAINS = ("pms", "payment", "digitalKey", "spa", "ocr", "aiConcierge")

# (provider, config, source)
Resolution = Tuple[str, Dict[str, Any], str]


class IntegrationManager:
    """
    Lazily built, cached connectors for every integration domain

    Args:
        config: Explicit per-domain overrides, e.g.
            {"pms": {"provider": "opera", "config": {...}}}
        settings: Environment defaults; read from the process when omitted
        config_store: Store for the hotel's persisted settings
        hotel_id: Hotel whose stored settings apply
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        settings: Optional[IntegrationSettings] = None,
        config_store: Optional[IntegrationConfigStore] = None,
        hotel_id: Optional[str] = None,
    ):
        self.config = dict(config or {})
        self.settings = settings or IntegrationSettings()
        self.config_store = config_store
        self.hotel_id = hotel_id
        self._connectors: Dict[str, Any] = {}
        self.logger = logger.bind(hotel_id=hotel_id) if hotel_id else logger

    # Resolution
    def _explicit(self, domain: str) -> Optional[Resolution]:
        entry = as_dict(self.config.get(domain))
        if not entry.get("provider") and not entry.get("config"):
            return None
        provider = entry.get("provider") or default_provider(domain)
        return provider, as_dict(entry.get("config")), "explicit"

    async def _stored(self, domain: str) -> Optional[Resolution]:
        if self.config_store is None or not self.hotel_id or domain not in PERSISTED_DOMAINS:
            return None
        stored = await self.config_store.get(self.hotel_id, domain)
        # A default row with no config has never been set up for this hotel
        if stored.provider == default_provider(domain) and not stored.config:
            return None
        return stored.provider, stored.config, "store"

    def _from_env(self, domain: str) -> Optional[Resolution]:
        s = self.settings
        env: Dict[str, Tuple[Callable[[], bool], Callable[[], Optional[str]], Callable[[], Dict[str, Any]]]] = {
            "pms": (s.has_pms, lambda: s.pms_provider, s.pms_config),
            "payment": (s.has_payment, lambda: "stripe", s.payment_config),
            "digitalKey": (s.has_digital_key, lambda: s.digital_key_provider, s.digital_key_config),
            "spa": (s.has_spa, lambda: s.spa_provider, s.spa_config),
            "ocr": (s.has_ocr, lambda: s.ocr_provider, s.ocr_config),
            "aiConcierge": (s.has_ai, lambda: "openai", s.ai_config),
        }
        configured, provider, config = env[domain]
        if not configured():
            return None
        return provider(), config(), "env"

    async def _resolve(self, domain: str) -> Optional[Resolution]:
        resolved = self._explicit(domain) or await self._stored(domain) or self._from_env(domain)
        if resolved:
            return resolved
        if domain in ("pms", "digitalKey", "spa"):
            return default_provider(domain), {}, "default"
        return None

    # Construction
    def _with_hotel(self, config: Dict[str, Any]) -> Dict[str, Any]:
        if self.hotel_id:
            return {**config, "hotelId": self.hotel_id}
        return dict(config)

    def _build(self, domain: str, provider: str, config: Dict[str, Any]) -> Any:
        config = self._with_hotel(config)
        if domain == "pms":
            return PMSConnector(provider, config)
        if domain == "digitalKey":
            return DigitalKeyConnector(provider, config)
        if domain == "spa":
            if provider == "none":
                raise ConnectorNotInitializedError("spa", "Spa integration is not configured")
            return SpaConnector(provider, config)
        if domain == "ocr":
            return OCRService({**config, "provider": provider})
        return get_provider_class(domain, provider)(config)

    def _store_connector(self, domain: str, connector: Any, provider: str, source: str) -> Any:
        self._connectors[domain] = connector
        connectors_created_total.labels(domain=domain, source=source).inc()
        self.logger.info("integration_connector_created", domain=domain, provider=provider, source=source)
        return connector

    async def _get(self, domain: str) -> Any:
        if domain in self._connectors:
            return self._connectors[domain]

        resolved = await self._resolve(domain)
        if resolved is None:
            raise ConnectorNotInitializedError(domain)
        provider, config, source = resolved

        # Another caller may have finished while this one awaited the store
        if domain in self._connectors:
            return self._connectors[domain]

        return self._store_connector(domain, self._build(domain, provider, config), provider, source)

    # Getters
    async def get_pms(self) -> PMSConnector:
        return await self._get("pms")

    async def get_payment(self) -> PaymentConnector:
        return await self._get("payment")

    async def get_digital_key(self) -> DigitalKeyConnector:
        return await self._get("digitalKey")

    async def get_spa(self) -> SpaConnector:
        return await self._get("spa")

    async def get_ocr(self) -> OCRService:
        return await self._get("ocr")

    async def get_ai_concierge(self) -> AIConcierge:
        return await self._get("aiConcierge")

    def initialize_all(self) -> List[str]:
        """
        Build every connector whose environment variables are present

        Existing connectors for those domains are replaced. A domain whose
        configuration is rejected is logged and left uninitialized; the others
        are still built. Returns the domains that were initialized.
        """
        initialized = []
        failed = []
        for domain in DOMAINS:
            resolved = self._from_env(domain)
            if resolved is None:
                continue
            provider, config, source = resolved
            try:
                connector = self._build(domain, provider, config)
            except IntegrationError as e:
                self._connectors.pop(domain, None)
                self.logger.error(
                    "integration_initialization_failed",
                    domain=domain,
                    provider=provider,
                    error_code=e.code,
                    error=e.message,
                )
                failed.append(domain)
                continue
            self._store_connector(domain, connector, provider, source)
            initialized.append(domain)

        self.logger.info("integrations_initialized", domains=initialized, failed=failed)
        return initialized

    async def health_check(self) -> IntegrationHealth:
        """Which connectors exist; does not contact any provider"""
        return IntegrationHealth(
            pms="pms" in self._connectors,
            payment="payment" in self._connectors,
            digital_key="digitalKey" in self._connectors,
            spa="spa" in self._connectors,
            ocr="ocr" in self._connectors,
            ai_concierge="aiConcierge" in self._connectors,
            timestamp=utc_now_iso(),
        )

    def reset(self, domain: Optional[str] = None):
        if domain is None:
            self._connectors.clear()
        else:
            self._connectors.pop(domain, None)
