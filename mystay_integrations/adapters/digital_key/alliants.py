"""
Alliants mobile key provider (X-API-Key authentication)
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

from ...contracts import BaseProvider, DigitalKey
from ...factory import register_provider
from ...provider_configs import parse_provider_config
from .normalizer import normalize_key


@register_provider("digitalKey", "alliants")
class AlliantsKeyProvider(BaseProvider):
    domain = "digitalKey"
    vendor_name = "alliants"
    api_label = "Alliants"

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.settings = parse_provider_config(self.domain, self.vendor_name, self.config).require()

    def _url(self, key_id: Optional[str] = None) -> str:
        url = f"{self.settings.base_url}/api/v1/keys"
        return f"{url}/{quote(str(key_id), safe='')}" if key_id else url

    def _headers(self) -> Dict[str, str]:
        return {"X-API-Key": self.settings.api_key}

    async def issue_key(
        self,
        guest_id: str,
        room_number: str,
        check_in: str,
        check_out: str,
        guest_email: Optional[str] = None,
    ) -> DigitalKey:
        data = await self._request(
            "POST",
            self._url(),
            headers=self._headers(),
            json={
                "propertyId": self.settings.property_id,
                "guestId": guest_id,
                "roomNumber": room_number,
                "validFrom": check_in,
                "validTo": check_out,
                "guestEmail": guest_email,
            },
        )
        return normalize_key(data, self.vendor_name)

    async def revoke_key(self, key_id: str) -> DigitalKey:
        data = await self._request("DELETE", self._url(key_id), headers=self._headers())
        key = normalize_key(data, self.vendor_name, key_id=key_id)
        if not data:
            key.status = "revoked"
        return key

    async def extend_key(self, key_id: str, new_check_out: str) -> DigitalKey:
        data = await self._request(
            "PATCH", self._url(key_id), headers=self._headers(), json={"validTo": new_check_out}
        )
        return normalize_key(data, self.vendor_name, key_id=key_id)

    async def get_key_status(self, key_id: str) -> DigitalKey:
        data = await self._request("GET", self._url(key_id), headers=self._headers())
        return normalize_key(data, self.vendor_name, key_id=key_id)
