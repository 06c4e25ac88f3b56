"""
PMS connector and provider implementations (opera, mews, cloudbeds, mock)
"""

from .connector import PMSConnector
from .normalizer import normalize_folio, normalize_reservation

__all__ = ["PMSConnector", "normalize_folio", "normalize_reservation"]
