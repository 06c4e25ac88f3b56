"""
OpenKey mobile key provider

A client-credentials token is requested from /oauth/token (JSON body)
before every call; tokens are never cached.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

from ...contracts import BaseProvider, DigitalKey
from ...factory import register_provider
from ...normalization import as_dict
from ...provider_configs import parse_provider_config
from .normalizer import normalize_key


@register_provider("digitalKey", "openkey")
class OpenKeyProvider(BaseProvider):
    domain = "digitalKey"
    vendor_name = "openkey"
    api_label = "OpenKey"

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.settings = parse_provider_config(self.domain, self.vendor_name, self.config).require()

    def _url(self, key_id: Optional[str] = None) -> str:
        url = f"{self.settings.base_url}/v1/keys"
        return f"{url}/{quote(str(key_id), safe='')}" if key_id else url

    async def _access_token(self) -> str:
        data = as_dict(
            await self._request(
                "POST",
                f"{self.settings.base_url}/oauth/token",
                json={
                    "client_id": self.settings.client_id,
                    "client_secret": self.settings.client_secret,
                    "grant_type": "client_credentials",
                },
            )
        )
        token = data.get("access_token")
        if not token:
            raise self.api_error("token response carried no access_token")
        return token

    async def _call(self, method: str, url: str, **kwargs) -> Any:
        token = await self._access_token()
        return await self._request(method, url, headers={"Authorization": f"Bearer {token}"}, **kwargs)

    async def issue_key(
        self,
        guest_id: str,
        room_number: str,
        check_in: str,
        check_out: str,
        guest_email: Optional[str] = None,
    ) -> DigitalKey:
        data = await self._call(
            "POST",
            self._url(),
            json={
                "property_id": self.settings.property_id,
                "guest_id": guest_id,
                "room_number": room_number,
                "start_date": check_in,
                "end_date": check_out,
                "email": guest_email,
            },
        )
        return normalize_key(data, self.vendor_name)

    async def revoke_key(self, key_id: str) -> DigitalKey:
        data = await self._call("DELETE", self._url(key_id))
        key = normalize_key(data, self.vendor_name, key_id=key_id)
        if not data:
            key.status = "revoked"
        return key

    async def extend_key(self, key_id: str, new_check_out: str) -> DigitalKey:
        data = await self._call("PATCH", self._url(key_id), json={"end_date": new_check_out})
        return normalize_key(data, self.vendor_name, key_id=key_id)

    async def get_key_status(self, key_id: str) -> DigitalKey:
        data = await self._call("GET", self._url(key_id))
        return normalize_key(data, self.vendor_name, key_id=key_id)
