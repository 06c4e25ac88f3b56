"""
ID document OCR: extraction providers and pure validation
"""

from .normalizer import normalize_id_data
from .service import OCRService
from .validation import validate_id_data

__all__ = ["OCRService", "normalize_id_data", "validate_id_data"]
