"""
Digital key connector
Mobile key issuance, revocation and validity changes for one hotel
"""

from typing import Any, Dict, Optional

from ...contracts import DigitalKey, InvalidRequestError
from ...factory import get_provider_class
from ...normalization import window_is_ordered
from ...utils.logging import log_performance


class DigitalKeyConnector:
    domain = "digitalKey"

    def __init__(self, provider: str, config: Optional[Dict[str, Any]] = None):
        self.provider = provider
        self.config = dict(config or {})
        self.impl = get_provider_class(self.domain, provider)(self.config)
        self.logger = self.impl.logger

    @log_performance("issue_key")
    async def issue_key(
        self,
        guest_id: str,
        room_number: str,
        check_in: str,
        check_out: str,
        guest_email: Optional[str] = None,
    ) -> DigitalKey:
        """
        Issue a mobile key valid from check_in to check_out

        Raises:
            InvalidRequestError: check_in is after check_out
        """
        if not window_is_ordered(check_in, check_out):
            raise InvalidRequestError("checkIn must not be after checkOut", field="checkOut")
        return await self.impl.issue_key(guest_id, room_number, check_in, check_out, guest_email)

    @log_performance("revoke_key")
    async def revoke_key(self, key_id: str) -> DigitalKey:
        return await self.impl.revoke_key(key_id)

    @log_performance("extend_key")
    async def extend_key(self, key_id: str, new_check_out: str) -> DigitalKey:
        return await self.impl.extend_key(key_id, new_check_out)

    @log_performance("get_key_status")
    async def get_key_status(self, key_id: str) -> DigitalKey:
        return await self.impl.get_key_status(key_id)
