"""
Typed provider configuration

Each provider's settings are their own pydantic model, keyed by (domain, provider).
Types are checked when a hotel's config is written; required keys are checked
when a connector is built from it.
"""

from typing import Any, ClassVar, Dict, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .contracts import InvalidConfigError


class ProviderSettings(BaseModel):
    """Base for every provider config; unknown keys are kept as-is"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    domain: ClassVar[str] = ""
    provider: ClassVar[str] = ""
    required: ClassVar[Tuple[str, ...]] = ()

    def missing_keys(self) -> list:
        return [
            to_camel(name)
            for name in self.required
            if getattr(self, name, None) in (None, "")
        ]

    def require(self) -> "ProviderSettings":
        """Raise InvalidConfigError listing required keys that are absent or empty"""
        missing = self.missing_keys()
        if missing:
            raise InvalidConfigError(
                f"Missing required configuration for {self.provider}: {', '.join(missing)}",
                domain=self.domain,
                provider=self.provider,
                missing=missing,
            )
        return self

    def to_config(self) -> Dict[str, Any]:
        """Back to the stored camelCase shape, omitting unset keys"""
        return self.model_dump(by_alias=True, exclude_none=True)


class HttpProviderSettings(ProviderSettings):
    base_url: Optional[str] = None

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip("/") if v else v


class NoProviderConfig(ProviderSettings):
    """Settings for the 'none' providers and other keyless mocks"""


# PMS
class MockPMSConfig(HttpProviderSettings):
    domain = "pms"
    provider = "mock"

    resort_id: Optional[str] = None
    property_id: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def missing_keys(self) -> list:
        # Without a server URL the built-in dataset is served
        if self.base_url and not (self.resort_id or self.property_id):
            return ["resortId"]
        return []


class OperaConfig(HttpProviderSettings):
    domain = "pms"
    provider = "opera"
    required = ("base_url", "resort_id", "username", "password")

    resort_id: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None


class MewsConfig(HttpProviderSettings):
    domain = "pms"
    provider = "mews"
    required = ("base_url", "client_token", "access_token", "enterprise_id")

    client_token: Optional[str] = None
    access_token: Optional[str] = None
    enterprise_id: Optional[str] = None
    client_name: str = "MyStay"


class CloudbedsConfig(HttpProviderSettings):
    domain = "pms"
    provider = "cloudbeds"
    required = ("base_url", "client_id", "client_secret", "property_id")

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    property_id: Optional[str] = None


# Payment
class StripeConfig(HttpProviderSettings):
    domain = "payment"
    provider = "stripe"
    required = ("stripe_secret_key",)

    stripe_secret_key: Optional[str] = None


# Digital key
class AlliantsConfig(HttpProviderSettings):
    domain = "digitalKey"
    provider = "alliants"
    required = ("base_url", "property_id", "api_key")

    property_id: Optional[str] = None
    api_key: Optional[str] = None


class OpenKeyConfig(HttpProviderSettings):
    domain = "digitalKey"
    provider = "openkey"
    required = ("base_url", "client_id", "client_secret", "property_id")

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    property_id: Optional[str] = None


# Spa
class SpaConfig(HttpProviderSettings):
    domain = "spa"
    required = ("site_id", "api_key")

    site_id: Optional[str] = None
    api_key: Optional[str] = None


class SpaBookerConfig(SpaConfig):
    provider = "spabooker"


class MindbodyConfig(SpaConfig):
    provider = "mindbody"


class GenericSpaConfig(SpaConfig):
    provider = "generic"

    custom_url: Optional[str] = None


# OCR
class OCRConfig(HttpProviderSettings):
    domain = "ocr"

    api_key: Optional[str] = None


class TextractConfig(OCRConfig):
    provider = "aws-textract"
    required = ("base_url", "api_key")


class GoogleVisionConfig(OCRConfig):
    provider = "google-vision"
    required = ("api_key",)


class AzureVisionConfig(OCRConfig):
    provider = "azure-vision"
    required = ("base_url", "api_key")

    poll_attempts: int = 10
    poll_interval: float = 1.0


class MockOCRConfig(OCRConfig):
    provider = "mock"


# AI concierge
class AIConciergeConfig(HttpProviderSettings):
    domain = "aiConcierge"
    provider = "openai"
    required = ("api_key",)

    api_key: Optional[str] = None
    model: str = "gpt-4"
    hotel_name: str = "MyStay Hotel"
    hotel_description: Optional[str] = None
    hotel_location: Optional[str] = None
    hotel_amenities: Optional[list] = None


CONFIG_MODELS: Dict[Tuple[str, str], Type[ProviderSettings]] = {
    ("pms", "mock"): MockPMSConfig,
    ("pms", "opera"): OperaConfig,
    ("pms", "mews"): MewsConfig,
    ("pms", "cloudbeds"): CloudbedsConfig,
    ("payment", "stripe"): StripeConfig,
    ("digitalKey", "none"): NoProviderConfig,
    ("digitalKey", "alliants"): AlliantsConfig,
    ("digitalKey", "openkey"): OpenKeyConfig,
    ("spa", "none"): NoProviderConfig,
    ("spa", "spabooker"): SpaBookerConfig,
    ("spa", "mindbody"): MindbodyConfig,
    ("spa", "generic"): GenericSpaConfig,
    ("ocr", "mock"): MockOCRConfig,
    ("ocr", "aws-textract"): TextractConfig,
    ("ocr", "google-vision"): GoogleVisionConfig,
    ("ocr", "azure-vision"): AzureVisionConfig,
    ("aiConcierge", "openai"): AIConciergeConfig,
}


def config_model_for(domain: str, provider: str) -> Type[ProviderSettings]:
    return CONFIG_MODELS.get((domain, provider), NoProviderConfig)


def parse_provider_config(domain: str, provider: str, raw: Any) -> ProviderSettings:
    """
    Validate raw stored config against the provider's model

    Raises:
        InvalidConfigError: raw is not a mapping or a field has the wrong type
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise InvalidConfigError(
            f"{domain} config must be an object", domain=domain, provider=provider
        )

    model = config_model_for(domain, provider)
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise InvalidConfigError(
            f"Invalid {provider} configuration: {', '.join(fields)}",
            domain=domain,
            provider=provider,
        ) from e
