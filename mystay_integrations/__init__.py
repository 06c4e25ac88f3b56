"""
MyStay Integrations Package

This package connects hotel operations to third-party systems through one
interface per domain:
- PMS, payment, digital key, spa, OCR and AI concierge connectors
- Per-hotel provider selection persisted in the config store
- Vendor-specific adapters registered by (domain, provider id)
"""

from .catalog import (
    ProviderCatalog,
    get_catalog,
    is_valid_provider,
    list_providers,
    default_provider,
    config_template,
)

from .factory import (
    ProviderRegistry,
    get_registry,
    register_provider,
    get_provider_class,
    create_pms_connector_for_hotel,
    create_digital_key_connector_for_hotel,
    create_spa_connector_for_hotel,
)

from .contracts import (
    BaseProvider,
    IntegrationError,
    UnsupportedProviderError,
    UnsupportedOperationError,
    ProviderApiError,
    PaymentProviderError,
    InvalidProviderError,
    InvalidConfigError,
    InvalidRequestError,
    ConcurrentUpdateError,
    ConnectorNotInitializedError,
    # Domain models
    CanonicalReservation,
    CanonicalFolio,
    FolioCharge,
    FolioPayment,
    DigitalKey,
    SpaService,
    SpaPractitioner,
    SpaAvailability,
    SpaBooking,
    ExtractedIDData,
    IDValidationResult,
    IntegrationHealth,
    ConciergeReply,
    SentimentResult,
    ParseResult,
)

from .config_store import IntegrationConfigStore, ProviderConfig, UNSET, merge_config
from .settings import IntegrationSettings
from .manager import IntegrationManager

from .adapters.pms import PMSConnector
from .adapters.payment import PaymentConnector
from .adapters.digital_key import DigitalKeyConnector
from .adapters.spa import SpaConnector
from .adapters.ocr import OCRService
from .adapters.ai import AIConcierge

__all__ = [
    # Catalog
    "ProviderCatalog",
    "get_catalog",
    "is_valid_provider",
    "list_providers",
    "default_provider",
    "config_template",
    # Registry and factories
    "ProviderRegistry",
    "get_registry",
    "register_provider",
    "get_provider_class",
    "create_pms_connector_for_hotel",
    "create_digital_key_connector_for_hotel",
    "create_spa_connector_for_hotel",
    # Config
    "IntegrationConfigStore",
    "ProviderConfig",
    "UNSET",
    "merge_config",
    "IntegrationSettings",
    "IntegrationManager",
    # Connectors
    "BaseProvider",
    "PMSConnector",
    "PaymentConnector",
    "DigitalKeyConnector",
    "SpaConnector",
    "OCRService",
    "AIConcierge",
    # Errors
    "IntegrationError",
    "UnsupportedProviderError",
    "UnsupportedOperationError",
    "ProviderApiError",
    "PaymentProviderError",
    "InvalidProviderError",
    "InvalidConfigError",
    "InvalidRequestError",
    "ConcurrentUpdateError",
    "ConnectorNotInitializedError",
    # Domain models
    "CanonicalReservation",
    "CanonicalFolio",
    "FolioCharge",
    "FolioPayment",
    "DigitalKey",
    "SpaService",
    "SpaPractitioner",
    "SpaAvailability",
    "SpaBooking",
    "ExtractedIDData",
    "IDValidationResult",
    "IntegrationHealth",
    "ConciergeReply",
    "SentimentResult",
    "ParseResult",
]
