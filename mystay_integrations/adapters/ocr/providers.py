"""
OCR extraction providers
"""

import asyncio
import base64
import binascii
import copy
from typing import Any, Dict, Optional, Union

from tenacity import AsyncRetrying, retry_if_result, stop_after_attempt, wait_fixed

from ...contracts import BaseProvider, ExtractedIDData, InvalidRequestError
from ...factory import register_provider
from ...normalization import as_dict
from ...provider_configs import parse_provider_config
from .normalizer import normalize_id_data

ImageData = Union[bytes, bytearray, str]

GOOGLE_VISION_URL = "https://vision.googleapis.com/v1"

AZURE_TERMINAL_STATUSES = ("succeeded", "failed")


def image_to_base64(image_data: ImageData) -> str:
    if isinstance(image_data, (bytes, bytearray)):
        return base64.b64encode(bytes(image_data)).decode("ascii")
    if isinstance(image_data, str) and image_data:
        return image_data
    raise InvalidRequestError("image data is required", field="imageData")


def image_to_bytes(image_data: ImageData) -> bytes:
    if isinstance(image_data, (bytes, bytearray)):
        return bytes(image_data)
    try:
        return base64.b64decode(image_to_base64(image_data), validate=True)
    except binascii.Error:
        raise InvalidRequestError("image data is not valid base64", field="imageData") from None


class OCRProviderBase(BaseProvider):
    domain = "ocr"

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.settings = parse_provider_config(self.domain, self.vendor_name, self.config).require()

    async def extract(self, image_data: ImageData, document_type: str) -> ExtractedIDData:
        raise NotImplementedError


@register_provider("ocr", "aws-textract")
class TextractProvider(OCRProviderBase):
    vendor_name = "aws-textract"
    api_label = "AWS Textract"

    async def extract(self, image_data: ImageData, document_type: str) -> ExtractedIDData:
        data = await self._request(
            "POST",
            f"{self.settings.base_url}/analyze-id",
            headers={"X-API-Key": self.settings.api_key},
            json={"documentType": document_type, "imageData": image_to_base64(image_data)},
        )
        return normalize_id_data(data, self.vendor_name, document_type)


@register_provider("ocr", "google-vision")
class GoogleVisionProvider(OCRProviderBase):
    vendor_name = "google-vision"
    api_label = "Google Vision"

    async def extract(self, image_data: ImageData, document_type: str) -> ExtractedIDData:
        base_url = self.settings.base_url or GOOGLE_VISION_URL
        data = await self._request(
            "POST",
            f"{base_url}/images:annotate",
            params={"key": self.settings.api_key},
            json={
                "requests": [
                    {
                        "image": {"content": image_to_base64(image_data)},
                        "features": [{"type": "DOCUMENT_TEXT_DETECTION"}],
                    }
                ]
            },
        )
        return normalize_id_data(data, self.vendor_name, document_type)


@register_provider("ocr", "azure-vision")
class AzureVisionProvider(OCRProviderBase):
    """Azure Read API: submit the image, then poll the Operation-Location URL"""

    vendor_name = "azure-vision"
    api_label = "Azure Vision"

    def _headers(self) -> Dict[str, str]:
        return {"Ocp-Apim-Subscription-Key": self.settings.api_key}

    async def _poll(self, operation_location: str) -> Dict[str, Any]:
        return as_dict(await self._request("GET", operation_location, headers=self._headers()))

    async def extract(self, image_data: ImageData, document_type: str) -> ExtractedIDData:
        response = await self._send(
            "POST",
            f"{self.settings.base_url}/vision/v3.2/read/analyze",
            headers={**self._headers(), "Content-Type": "application/octet-stream"},
            content=image_to_bytes(image_data),
        )
        operation_location = response.headers.get("Operation-Location")
        if not operation_location:
            raise self.api_error("response carried no Operation-Location header", response.status_code)

        interval = self.settings.poll_interval
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.settings.poll_attempts),
            wait=wait_fixed(interval),
            retry=retry_if_result(lambda r: r.get("status") not in AZURE_TERMINAL_STATUSES),
            retry_error_callback=lambda state: state.outcome.result(),
        )

        # The read operation is never complete on submission
        await asyncio.sleep(interval)
        result = await retrying(self._poll, operation_location)

        status = result.get("status")
        if status != "succeeded":
            self.logger.warning(f"Azure read operation ended with status {status}")
            raise self.api_error(f"read operation {status or 'did not complete'}")

        return normalize_id_data(result, self.vendor_name, document_type)


MOCK_DOCUMENTS = {
    "passport": {
        "documentType": "passport",
        "documentNumber": "P123456789",
        "firstName": "John",
        "lastName": "Doe",
        "middleName": "Michael",
        "dateOfBirth": "1985-06-15",
        "nationality": "USA",
        "sex": "M",
        "issueDate": "2020-01-15",
        "expiryDate": "2030-01-15",
        "issuingCountry": "USA",
    },
    "drivers_license": {
        "documentType": "drivers_license",
        "documentNumber": "DL987654321",
        "firstName": "Jane",
        "lastName": "Smith",
        "dateOfBirth": "1990-03-22",
        "address": "123 Main St, New York, NY 10001",
        "sex": "F",
        "issueDate": "2022-05-10",
        "expiryDate": "2028-03-22",
        "issuingState": "NY",
    },
    "national_id": {
        "documentType": "national_id",
        "documentNumber": "ID555444333",
        "firstName": "Carlos",
        "lastName": "Rodriguez",
        "dateOfBirth": "1988-11-30",
        "nationality": "MEX",
        "sex": "M",
        "issueDate": "2021-08-20",
        "expiryDate": "2031-08-20",
        "issuingCountry": "MEX",
    },
}


@register_provider("ocr", "mock")
class MockOCRProvider(OCRProviderBase):
    """Fixed sample documents, no network"""

    vendor_name = "mock"
    api_label = "Mock OCR"

    async def extract(self, image_data: Optional[ImageData], document_type: str) -> ExtractedIDData:
        document = MOCK_DOCUMENTS.get(document_type) or MOCK_DOCUMENTS["passport"]
        return normalize_id_data(copy.deepcopy(document), self.vendor_name)
