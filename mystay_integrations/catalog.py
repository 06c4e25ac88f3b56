"""
Provider catalog
Static enumeration of valid provider ids per domain plus configuration templates
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

PERSISTED_DOMAINS = ("pms", "digitalKey", "spa")


class ProviderCatalog:
    """Lookup over providers.yaml; pure data, loaded once"""

    def __init__(self, path: Optional[Path] = None):
        self._path = path or Path(__file__).parent / "providers.yaml"
        self._domains: Dict[str, Any] = {}
        self._load()

    def _load(self):
        with open(self._path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        self._domains = data.get("domains", {})
        logger.debug(f"Loaded provider catalog with {len(self._domains)} domains")

    def list_domains(self) -> List[str]:
        return list(self._domains.keys())

    def list_providers(self, domain: str) -> List[str]:
        return list(self._domains.get(domain, {}).get("providers", {}).keys())

    def is_valid_provider(self, domain: str, provider: Any) -> bool:
        if not isinstance(provider, str):
            return False
        return provider in self._domains.get(domain, {}).get("providers", {})

    def default_provider(self, domain: str) -> Optional[str]:
        return self._domains.get(domain, {}).get("default")

    def config_template(self, domain: str, provider: str) -> Dict[str, Any]:
        """Example configuration for a provider; a copy so callers may edit it"""
        entry = self._domains.get(domain, {}).get("providers", {}).get(provider, {})
        return copy.deepcopy(entry.get("template") or {})

    def label(self, domain: str, provider: str) -> Optional[str]:
        return self._domains.get(domain, {}).get("providers", {}).get(provider, {}).get("label")

    def as_options(self) -> Dict[str, Any]:
        """Provider ids and templates per domain, shaped for a settings screen"""
        return {
            domain: {
                "default": self.default_provider(domain),
                "providers": self.list_providers(domain),
                "templates": {p: self.config_template(domain, p) for p in self.list_providers(domain)},
            }
            for domain in self.list_domains()
        }


# Global catalog instance
_catalog = ProviderCatalog()


def get_catalog() -> ProviderCatalog:
    return _catalog


def is_valid_provider(domain: str, provider: Any) -> bool:
    return _catalog.is_valid_provider(domain, provider)


def list_providers(domain: str) -> List[str]:
    return _catalog.list_providers(domain)


def default_provider(domain: str) -> Optional[str]:
    return _catalog.default_provider(domain)


def config_template(domain: str, provider: str) -> Dict[str, Any]:
    return _catalog.config_template(domain, provider)
