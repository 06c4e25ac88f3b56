"""
OCR service
Extracts identity document fields from a scanned image
"""

from datetime import date
from typing import Any, Dict, Optional

from ...contracts import ExtractedIDData, IDValidationResult
from ...factory import get_provider_class
from ...utils.logging import log_performance
from .providers import ImageData
from .validation import validate_id_data


class OCRService:
    domain = "ocr"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = dict(config or {})
        self.provider = self.config.pop("provider", None) or "mock"
        self.impl = get_provider_class(self.domain, self.provider)(self.config)
        self.logger = self.impl.logger

    @log_performance("extract_id_data")
    async def extract_id_data(self, image_data: ImageData, document_type: str = "passport") -> ExtractedIDData:
        """
        Extract document fields from an image

        Args:
            image_data: Raw image bytes or a base64 string
            document_type: passport, drivers_license or national_id
        """
        return await self.impl.extract(image_data, document_type)

    def validate_id_data(self, data: Any, today: Optional[date] = None) -> IDValidationResult:
        return validate_id_data(data, today=today)
