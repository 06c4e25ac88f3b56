"""
SQLAlchemy model for per-hotel integration settings
"""

from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.orm import declarative_base

from .catalog import list_providers

Base = declarative_base()

# domain -> (provider column, config column)
DOMAIN_COLUMNS = {
    "pms": ("pms_provider", "pms_config"),
    "digitalKey": ("digital_key_provider", "digital_key_config"),
    "spa": ("spa_provider", "spa_config"),
}

DOMAIN_DEFAULTS = {
    "pms": "mock",
    "digitalKey": "none",
    "spa": "none",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _known_provider_check(domain: str) -> CheckConstraint:
    column = DOMAIN_COLUMNS[domain][0]
    allowed = ", ".join(f"'{provider}'" for provider in list_providers(domain))
    return CheckConstraint(f"{column} IN ({allowed})", name=f"check_{column}_known")


class HotelIntegration(Base):
    """One row per hotel holding the provider and config for each integration domain"""

    __tablename__ = 'hotel_integrations'

    # External hotel ID
    hotel_id = Column(String(255), primary_key=True)

    # PMS
    pms_provider = Column(String(50), nullable=False, default=DOMAIN_DEFAULTS["pms"])
    pms_config = Column(JSON, nullable=False, default=dict)

    # Digital key
    digital_key_provider = Column(String(50), nullable=False, default=DOMAIN_DEFAULTS["digitalKey"])
    digital_key_config = Column(JSON, nullable=False, default=dict)

    # Spa
    spa_provider = Column(String(50), nullable=False, default=DOMAIN_DEFAULTS["spa"])
    spa_config = Column(JSON, nullable=False, default=dict)

    # Optimistic concurrency token, bumped on every write
    version = Column(Integer, nullable=False, default=1)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint('version >= 1', name='check_integration_version_positive'),
        *(_known_provider_check(domain) for domain in DOMAIN_COLUMNS),
    )

    def provider_for(self, domain: str) -> str:
        return getattr(self, DOMAIN_COLUMNS[domain][0])

    def config_for(self, domain: str) -> Dict[str, Any]:
        return dict(getattr(self, DOMAIN_COLUMNS[domain][1]) or {})

    def __repr__(self):
        return (
            f"<HotelIntegration(hotel_id={self.hotel_id}, pms={self.pms_provider}, "
            f"digital_key={self.digital_key_provider}, spa={self.spa_provider}, version={self.version})>"
        )
