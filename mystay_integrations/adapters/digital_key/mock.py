"""
Built-in digital key provider for hotels without a key system ("none")
"""

import threading
import time
from typing import Optional

from ...contracts import BaseProvider, DigitalKey, utc_now_iso
from ...factory import register_provider

_clock_lock = threading.Lock()
_last_key_ms = 0


def next_key_number() -> int:
    """Milliseconds on a monotonic clock, strictly increasing across calls"""
    global _last_key_ms
    with _clock_lock:
        _last_key_ms = max(int(time.monotonic() * 1000), _last_key_ms + 1)
        return _last_key_ms


@register_provider("digitalKey", "none")
class MockDigitalKeyProvider(BaseProvider):
    domain = "digitalKey"
    vendor_name = "none"
    api_label = "Mock digital key"

    async def issue_key(
        self,
        guest_id: str,
        room_number: str,
        check_in: str,
        check_out: str,
        guest_email: Optional[str] = None,
    ) -> DigitalKey:
        return DigitalKey(
            key_id=f"KEY-{next_key_number()}",
            guest_id=guest_id,
            room_number=room_number,
            valid_from=check_in,
            valid_to=check_out,
            status="active",
            issued_at=utc_now_iso(),
            email=guest_email,
            provider=self.vendor_name,
        )

    async def revoke_key(self, key_id: str) -> DigitalKey:
        return DigitalKey(key_id=key_id, status="revoked", revoked_at=utc_now_iso(), provider=self.vendor_name)

    async def extend_key(self, key_id: str, new_check_out: str) -> DigitalKey:
        return DigitalKey(
            key_id=key_id,
            valid_to=new_check_out,
            status="active",
            updated_at=utc_now_iso(),
            provider=self.vendor_name,
        )

    async def get_key_status(self, key_id: str) -> DigitalKey:
        return DigitalKey(
            key_id=key_id,
            status="active",
            room_number="305",
            valid_from="2026-01-15T14:00:00Z",
            valid_to="2026-01-20T11:00:00Z",
            provider=self.vendor_name,
        )
