"""
Environment defaults for the integration layer

Used by the integration manager when neither an explicit config nor the
hotel's stored settings select a provider.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value not in (None, "")}


class IntegrationSettings(BaseSettings):
    """Provider selection and credentials read from the process environment"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # PMS
    pms_provider: Optional[str] = Field(None, description="mock, opera, mews or cloudbeds")
    pms_base_url: Optional[str] = None
    pms_resort_id: Optional[str] = None
    pms_username: Optional[str] = None
    pms_password: Optional[str] = None
    pms_client_token: Optional[str] = None
    pms_access_token: Optional[str] = None
    pms_enterprise_id: Optional[str] = None
    pms_client_id: Optional[str] = None
    pms_client_secret: Optional[str] = None
    pms_property_id: Optional[str] = None

    # Payment
    stripe_secret_key: Optional[str] = None

    # Digital key
    digital_key_provider: Optional[str] = Field(None, description="none, alliants or openkey")
    digital_key_base_url: Optional[str] = None
    digital_key_property_id: Optional[str] = None
    digital_key_api_key: Optional[str] = None
    digital_key_client_id: Optional[str] = None
    digital_key_client_secret: Optional[str] = None

    # Spa
    spa_provider: Optional[str] = Field(None, description="none, spabooker, mindbody or generic")
    spa_base_url: Optional[str] = None
    spa_site_id: Optional[str] = None
    spa_api_key: Optional[str] = None

    # OCR
    ocr_provider: Optional[str] = Field(None, description="mock, aws-textract, google-vision or azure-vision")
    ocr_api_key: Optional[str] = None
    ocr_base_url: Optional[str] = None

    # AI concierge
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4"
    hotel_name: str = "MyStay Hotel"
    hotel_description: Optional[str] = None
    hotel_location: Optional[str] = None
    hotel_amenities: Optional[str] = Field(None, description="Comma separated amenity list")

    @field_validator("pms_provider", "digital_key_provider", "spa_provider", "ocr_provider")
    @classmethod
    def normalize_provider(cls, v):
        return v.strip().lower() if isinstance(v, str) and v.strip() else None

    def amenities(self) -> List[str]:
        if not self.hotel_amenities:
            return []
        return [a.strip() for a in self.hotel_amenities.split(",") if a.strip()]

    def has_pms(self) -> bool:
        return bool(self.pms_provider)

    def pms_config(self) -> Dict[str, Any]:
        return _compact(
            {
                "baseUrl": self.pms_base_url,
                "resortId": self.pms_resort_id,
                "username": self.pms_username,
                "password": self.pms_password,
                "clientToken": self.pms_client_token,
                "accessToken": self.pms_access_token,
                "enterpriseId": self.pms_enterprise_id,
                "clientId": self.pms_client_id,
                "clientSecret": self.pms_client_secret,
                "propertyId": self.pms_property_id,
            }
        )

    def has_payment(self) -> bool:
        return bool(self.stripe_secret_key)

    def payment_config(self) -> Dict[str, Any]:
        return _compact({"stripeSecretKey": self.stripe_secret_key})

    def has_digital_key(self) -> bool:
        return bool(self.digital_key_provider) and self.digital_key_provider != "none"

    def digital_key_config(self) -> Dict[str, Any]:
        return _compact(
            {
                "baseUrl": self.digital_key_base_url,
                "propertyId": self.digital_key_property_id,
                "apiKey": self.digital_key_api_key,
                "clientId": self.digital_key_client_id,
                "clientSecret": self.digital_key_client_secret,
            }
        )

    def has_spa(self) -> bool:
        return bool(self.spa_provider) and self.spa_provider != "none"

    def spa_config(self) -> Dict[str, Any]:
        return _compact({"baseUrl": self.spa_base_url, "siteId": self.spa_site_id, "apiKey": self.spa_api_key})

    def has_ocr(self) -> bool:
        return bool(self.ocr_provider)

    def ocr_config(self) -> Dict[str, Any]:
        return _compact({"apiKey": self.ocr_api_key, "baseUrl": self.ocr_base_url})

    def has_ai(self) -> bool:
        return bool(self.openai_api_key)

    def ai_config(self) -> Dict[str, Any]:
        return _compact(
            {
                "apiKey": self.openai_api_key,
                "model": self.openai_model,
                "hotelName": self.hotel_name,
                "hotelDescription": self.hotel_description,
                "hotelLocation": self.hotel_location,
                "hotelAmenities": self.amenities() or None,
            }
        )
