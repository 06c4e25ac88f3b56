"""
Per-hotel integration config store

Reads, lazily creates and updates the provider selection and configuration
for each hotel and integration domain (pms, digitalKey, spa).
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .catalog import PERSISTED_DOMAINS, is_valid_provider
from .contracts import (
    CanonicalModel,
    ConcurrentUpdateError,
    IntegrationError,
    InvalidConfigError,
    InvalidProviderError,
)
from .logging_adapter import get_safe_logger
from .metrics import config_updates_total
from .models import DOMAIN_COLUMNS, DOMAIN_DEFAULTS, HotelIntegration
from .provider_configs import parse_provider_config

logger = get_safe_logger("mystay_integrations.config_store")


class _Unset:
    def __repr__(self):
        return "UNSET"


UNSET: Any = _Unset()


@dataclass
class ProviderConfig(CanonicalModel):
    """The provider selection and config of one hotel for one domain"""

    hotel_id: str
    domain: str
    provider: str
    config: Dict[str, Any] = field(default_factory=dict)
    updated_at: Optional[datetime] = None
    version: int = 1

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["updatedAt"] = self.updated_at.isoformat() if self.updated_at else None
        return data


def merge_config(existing: Optional[Dict[str, Any]], patch: Any) -> Dict[str, Any]:
    """
    Merge a config patch key by key.

    None deletes the key, an empty string leaves the existing value alone,
    any other value overwrites or adds it. A non-mapping patch is ignored.
    """
    merged = dict(existing or {})
    if not isinstance(patch, dict):
        return merged

    for key, value in patch.items():
        if isinstance(value, str) and value == "":
            continue
        if value is None:
            merged.pop(key, None)
            continue
        merged[key] = value
    return merged


def _check_domain(domain: str):
    if domain not in PERSISTED_DOMAINS:
        raise IntegrationError(f"Unknown integration domain: {domain}", code="unknown_domain")


def _slice(row: HotelIntegration, domain: str) -> ProviderConfig:
    return ProviderConfig(
        hotel_id=row.hotel_id,
        domain=domain,
        provider=row.provider_for(domain),
        config=row.config_for(domain),
        updated_at=row.updated_at,
        version=row.version,
    )


class IntegrationConfigStore:
    """Repository for hotel_integrations rows"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _load(self, hotel_id: str) -> Optional[HotelIntegration]:
        stmt = (
            select(HotelIntegration)
            .where(HotelIntegration.hotel_id == hotel_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _ensure_row(self, hotel_id: str) -> HotelIntegration:
        """Return the hotel's row, inserting defaults when it does not exist yet"""
        row = await self._load(hotel_id)
        if row is not None:
            return row

        try:
            self.session.add(HotelIntegration(hotel_id=hotel_id))
            await self.session.commit()
            logger.info("integration_row_created", hotel_id=hotel_id)
        except IntegrityError:
            # Created by a concurrent request in between
            await self.session.rollback()
            logger.debug("integration_row_insert_raced", hotel_id=hotel_id)

        row = await self._load(hotel_id)
        if row is None:
            raise IntegrationError(
                f"Integration row for hotel {hotel_id} could not be created",
                code="integration_row_missing",
            )
        return row

    async def get(self, hotel_id: str, domain: str) -> ProviderConfig:
        """Get one domain's settings for a hotel, creating the default row if absent"""
        _check_domain(domain)
        row = await self._ensure_row(hotel_id)
        return _slice(row, domain)

    async def get_all(self, hotel_id: str) -> Dict[str, ProviderConfig]:
        """Settings for every persisted domain of a hotel"""
        row = await self._ensure_row(hotel_id)
        return {domain: _slice(row, domain) for domain in PERSISTED_DOMAINS}

    async def update(
        self,
        hotel_id: str,
        domain: str,
        provider: Any = UNSET,
        config: Any = UNSET,
        config_patch: Optional[Dict[str, Any]] = None,
        expected_version: Optional[int] = None,
    ) -> ProviderConfig:
        """
        Update a hotel's provider and/or config for one domain

        Args:
            hotel_id: Hotel identifier
            domain: pms, digitalKey or spa
            provider: New provider id; must be registered for the domain
            config: Full replacement config; wins over config_patch
            config_patch: Key-by-key merge, see merge_config
            expected_version: Version the caller last read; checked before writing

        Returns:
            The updated settings with a fresh updated_at

        Raises:
            InvalidProviderError: provider not registered for the domain
            InvalidConfigError: config not a mapping, or wrong value types
            ConcurrentUpdateError: the row changed since it was read
        """
        _check_domain(domain)

        if provider is not UNSET and not is_valid_provider(domain, provider):
            config_updates_total.labels(domain=domain, outcome="invalid_provider").inc()
            raise InvalidProviderError(domain, provider)

        if config is not UNSET and not isinstance(config, dict):
            config_updates_total.labels(domain=domain, outcome="invalid_config").inc()
            raise InvalidConfigError(f"{domain} config must be an object", domain=domain)

        row = await self._ensure_row(hotel_id)
        read_version = row.version

        if expected_version is not None and expected_version != read_version:
            await self.session.rollback()
            config_updates_total.labels(domain=domain, outcome="conflict").inc()
            raise ConcurrentUpdateError(hotel_id, domain, expected_version)

        next_provider = row.provider_for(domain) if provider is UNSET else provider
        if config is not UNSET:
            next_config = dict(config)
        else:
            next_config = merge_config(row.config_for(domain), config_patch)

        # Types are checked here; required keys only when a connector is built
        try:
            parse_provider_config(domain, next_provider, next_config)
        except InvalidConfigError:
            await self.session.rollback()
            config_updates_total.labels(domain=domain, outcome="invalid_config").inc()
            raise

        provider_column, config_column = DOMAIN_COLUMNS[domain]
        now = datetime.now(timezone.utc)
        stmt = (
            update(HotelIntegration)
            .where(HotelIntegration.hotel_id == hotel_id)
            .where(HotelIntegration.version == read_version)
            .values(
                {
                    provider_column: next_provider,
                    config_column: next_config,
                    "version": read_version + 1,
                    "updated_at": now,
                }
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)

        if result.rowcount != 1:
            await self.session.rollback()
            config_updates_total.labels(domain=domain, outcome="conflict").inc()
            logger.warning(
                "integration_config_conflict",
                hotel_id=hotel_id,
                domain=domain,
                read_version=read_version,
            )
            raise ConcurrentUpdateError(hotel_id, domain, read_version)

        await self.session.commit()
        config_updates_total.labels(domain=domain, outcome="updated").inc()
        logger.info(
            "integration_config_updated",
            hotel_id=hotel_id,
            domain=domain,
            provider=next_provider,
            config_keys=sorted(next_config.keys()),
            version=read_version + 1,
        )

        return ProviderConfig(
            hotel_id=hotel_id,
            domain=domain,
            provider=next_provider,
            config=next_config,
            updated_at=now,
            version=read_version + 1,
        )

    async def reset(self, hotel_id: str, domain: str) -> ProviderConfig:
        """Restore a domain to its default provider with an empty config"""
        return await self.update(
            hotel_id, domain, provider=DOMAIN_DEFAULTS[domain], config={}
        )
