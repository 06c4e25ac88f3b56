"""
MyStay Integration Contracts
Canonical models, provider interfaces and the error taxonomy shared by every connector
"""

import time
from abc import ABC
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Protocol

import httpx

from .metrics import record_provider_call
from .utils.logging import ConnectorLogger, sanitize_url


def _to_camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.title() for part in tail)


def _serialize(value: Any) -> Any:
    if isinstance(value, CanonicalModel):
        return value.to_dict()
    if isinstance(value, list):
        return [_serialize(v) for v in value]
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    return value


def domain_code(domain: str) -> str:
    """'digitalKey' -> 'digital_key', used to build error codes"""
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in domain)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class CanonicalModel:
    """Mixin rendering dataclass fields under their camelCase wire names"""

    _omit_none = False

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for f in fields(self):
            if not f.metadata.get("serialize", True):
                continue
            value = getattr(self, f.name)
            if value is None and self._omit_none:
                continue
            result[_to_camel(f.name)] = _serialize(value)
        return result


# Domain Models (vendor-agnostic)
@dataclass
class CanonicalReservation(CanonicalModel):
    id: Optional[str] = None
    confirmation_number: Optional[str] = None
    guest_first_name: Optional[str] = None
    guest_last_name: Optional[str] = None
    guest_name: Optional[str] = None
    guest_email: Optional[str] = None
    guest_phone: Optional[str] = None
    check_in_date: Optional[str] = None
    check_out_date: Optional[str] = None
    nights: Optional[int] = None
    room_type: Optional[str] = None
    room_number: Optional[str] = None
    room_rate: Any = None
    total_amount: Any = None
    currency: str = "EUR"
    status: Optional[str] = None
    adults: int = 1
    children: int = 0
    special_requests: Optional[str] = None
    packages: List[Any] = field(default_factory=list)
    source: str = "direct"
    guest_id: Optional[str] = None
    checked_in_at: Optional[str] = None
    checked_out_at: Optional[str] = None
    created_at: Optional[str] = None
    provider: Optional[str] = None


@dataclass
class FolioCharge(CanonicalModel):
    id: Optional[str]
    date: Optional[str]
    description: Optional[str]
    amount: Decimal
    category: Optional[str]


@dataclass
class FolioPayment(CanonicalModel):
    id: Optional[str]
    date: Optional[str]
    description: Optional[str]
    amount: Decimal
    method: Optional[str]


@dataclass
class CanonicalFolio(CanonicalModel):
    reservation_id: Optional[str] = None
    charges: List[FolioCharge] = field(default_factory=list)
    payments: List[FolioPayment] = field(default_factory=list)
    balance: Decimal = Decimal("0.00")
    currency: str = "EUR"
    provider: Optional[str] = None


@dataclass
class DigitalKey(CanonicalModel):
    _omit_none = True

    key_id: Optional[str]
    guest_id: Optional[str] = None
    room_number: Optional[str] = None
    valid_from: Optional[str] = None
    valid_to: Optional[str] = None
    status: str = "active"  # active, revoked
    issued_at: Optional[str] = None
    revoked_at: Optional[str] = None
    updated_at: Optional[str] = None
    email: Optional[str] = None
    provider: Optional[str] = None
    raw: Optional[Dict[str, Any]] = field(default=None, metadata={"serialize": False})


@dataclass
class SpaService(CanonicalModel):
    id: Optional[str]
    name: Optional[str]
    description: Optional[str] = None
    duration: int = 60
    price: Any = 0
    category: Any = "general"


@dataclass
class SpaPractitioner(CanonicalModel):
    id: Optional[str]
    name: Optional[str]
    bio: Optional[str] = None
    image_url: Optional[str] = None
    specialties: List[str] = field(default_factory=list)


@dataclass
class SpaAvailability(CanonicalModel):
    date: Optional[str]
    slots: List[Any] = field(default_factory=list)


@dataclass
class SpaBooking(CanonicalModel):
    id: Optional[str]
    confirmation_number: Optional[str] = None
    status: Optional[str] = None
    service_id: Optional[str] = None
    service_name: Optional[str] = None
    practitioner_id: Optional[str] = None
    practitioner_name: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    duration: Optional[int] = None
    guest: Dict[str, Optional[str]] = field(default_factory=dict)


@dataclass
class ExtractedIDData(CanonicalModel):
    document_type: Optional[str] = None
    document_number: Optional[str] = None
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[str] = None
    nationality: Optional[str] = None
    sex: Optional[str] = None
    issue_date: Optional[str] = None
    expiry_date: Optional[str] = None
    issuing_country: Optional[str] = None
    issuing_state: Optional[str] = None
    address: Optional[str] = None
    confidence: float = 0.95
    provider: Optional[str] = None
    extracted_at: Optional[str] = None


@dataclass
class IDValidationResult(CanonicalModel):
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class IntegrationHealth(CanonicalModel):
    pms: bool
    payment: bool
    digital_key: bool
    spa: bool
    ocr: bool
    ai_concierge: bool
    timestamp: str


@dataclass
class ConciergeReply(CanonicalModel):
    response: str
    requires_escalation: bool
    tokens_used: Optional[int]
    timestamp: str


@dataclass
class SentimentResult(CanonicalModel):
    sentiment: str = "neutral"
    confidence: float = 0.5
    urgency: str = "low"


@dataclass
class ParseResult:
    """Outcome of parsing model output; callers choose their own fallback"""

    ok: bool
    value: Any = None
    raw: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Any, raw: Optional[str] = None) -> "ParseResult":
        return cls(ok=True, value=value, raw=raw)

    @classmethod
    def failure(cls, error: str, raw: Optional[str] = None) -> "ParseResult":
        return cls(ok=False, raw=raw, error=error)

    def value_or(self, default: Any) -> Any:
        return self.value if self.ok else default


# Error types
class IntegrationError(Exception):
    """Base exception for integration layer operations"""

    code = "integration_error"

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.code
        self.details = details or {}


class UnsupportedProviderError(IntegrationError):
    """Dispatch on a provider id with no registered implementation"""

    code = "unsupported_provider"

    def __init__(self, domain: str, provider: Any, message: Optional[str] = None):
        super().__init__(
            message or f"Unsupported {domain} provider: {provider}",
            details={"domain": domain, "provider": provider},
        )
        self.domain = domain
        self.provider = provider


class UnsupportedOperationError(UnsupportedProviderError):
    """Provider is registered but its API does not offer the verb"""

    code = "unsupported_operation"

    def __init__(self, domain: str, provider: str, operation: str):
        super().__init__(domain, provider, f"{provider} does not support {operation}")
        self.operation = operation
        self.details["operation"] = operation


class ProviderApiError(IntegrationError):
    """Non-2xx (or unreachable) third-party response"""

    code = "provider_api_error"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
        provider: Optional[str] = None,
    ):
        super().__init__(
            message,
            details={"status_code": status_code, "reason": reason, "provider": provider},
        )
        self.status_code = status_code
        self.reason = reason
        self.provider = provider


class PaymentProviderError(ProviderApiError):
    """Payment processor rejected the request"""

    code = "payment_provider_error"


class InvalidProviderError(IntegrationError):
    """Provider id not registered for the domain on a config write"""

    def __init__(self, domain: str, provider: Any):
        super().__init__(
            f"Invalid {domain} provider: {provider}",
            code=f"invalid_{domain_code(domain)}_provider",
            details={"domain": domain, "provider": provider},
        )
        self.domain = domain
        self.provider = provider


class InvalidConfigError(IntegrationError):
    """Provider configuration is not an object, has wrong types or lacks required keys"""

    code = "invalid_config"

    def __init__(
        self,
        message: str,
        domain: Optional[str] = None,
        provider: Optional[str] = None,
        missing: Optional[List[str]] = None,
    ):
        super().__init__(
            message,
            code=f"invalid_{domain_code(domain)}_config" if domain else None,
            details={"domain": domain, "provider": provider, "missing": missing or []},
        )
        self.missing = missing or []


class InvalidRequestError(IntegrationError):
    """Caller supplied arguments the connector refuses to forward"""

    code = "invalid_request"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class ConcurrentUpdateError(IntegrationError):
    """Config row changed between read and write"""

    code = "concurrent_update"

    def __init__(self, hotel_id: str, domain: str, expected_version: Optional[int] = None):
        super().__init__(
            f"Integration config for hotel {hotel_id} ({domain}) was modified concurrently",
            details={"hotel_id": hotel_id, "domain": domain, "expected_version": expected_version},
        )


class ConnectorNotInitializedError(IntegrationError):
    """Manager asked for a domain with no usable configuration"""

    def __init__(self, domain: str, message: Optional[str] = None):
        super().__init__(
            message or f"{domain} connector is not configured",
            code=f"{domain_code(domain)}_not_configured",
            details={"domain": domain},
        )
        self.domain = domain


# Provider interfaces, one per domain
class PMSProvider(Protocol):
    vendor_name: str

    async def get_reservation(self, confirmation_number: str) -> Optional[CanonicalReservation]: ...

    async def list_reservations(self, filters: Dict[str, Any]) -> List[CanonicalReservation]: ...

    async def create_reservation(self, payload: Dict[str, Any]) -> Optional[CanonicalReservation]: ...

    async def update_reservation(
        self, reservation_id: str, patch: Dict[str, Any]
    ) -> Optional[CanonicalReservation]: ...

    async def get_folio(self, reservation_id: str) -> CanonicalFolio: ...

    async def update_guest_profile(self, guest_id: str, profile: Dict[str, Any]) -> Dict[str, Any]: ...

    async def check_in(self, reservation_id: str, options: Dict[str, Any]) -> Dict[str, Any]: ...

    async def check_out(self, reservation_id: str) -> Dict[str, Any]: ...

    async def add_charge(self, reservation_id: str, charge: Dict[str, Any]) -> Dict[str, Any]: ...

    async def get_arrivals(self, date: Optional[str] = None) -> List[CanonicalReservation]: ...

    async def get_departures(self, date: Optional[str] = None) -> List[CanonicalReservation]: ...

    async def get_rooms(self, filters: Dict[str, Any]) -> List[Dict[str, Any]]: ...

    async def get_menu(self) -> Optional[Dict[str, Any]]: ...

    async def get_spa_services(self) -> Optional[Any]: ...

    async def get_spa_availability(self, date: Optional[str], service_id: Optional[str] = None) -> List[Any]: ...

    async def health_check(self) -> Dict[str, Any]: ...


class PaymentProvider(Protocol):
    vendor_name: str

    async def create_authorization_hold(
        self,
        amount: Any,
        currency: str = "usd",
        customer_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]: ...

    async def capture_hold(self, payment_intent_id: str, amount_to_capture: Any = None) -> Dict[str, Any]: ...

    async def cancel_hold(self, payment_intent_id: str) -> Dict[str, Any]: ...

    async def create_charge(
        self,
        amount: Any,
        currency: str = "usd",
        customer_id: Optional[str] = None,
        description: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]: ...

    async def create_refund(
        self, payment_intent_id: str, amount: Any = None, reason: Optional[str] = None
    ) -> Dict[str, Any]: ...


class DigitalKeyProvider(Protocol):
    vendor_name: str

    async def issue_key(
        self,
        guest_id: str,
        room_number: str,
        check_in: str,
        check_out: str,
        guest_email: Optional[str] = None,
    ) -> DigitalKey: ...

    async def revoke_key(self, key_id: str) -> DigitalKey: ...

    async def extend_key(self, key_id: str, new_check_out: str) -> DigitalKey: ...

    async def get_key_status(self, key_id: str) -> DigitalKey: ...


class SpaProvider(Protocol):
    vendor_name: str

    def build_booking_payload(self, booking: Dict[str, Any]) -> Dict[str, Any]: ...

    async def get_services(self, category: Optional[str] = None) -> List[SpaService]: ...

    async def get_practitioners(self, service_id: Optional[str] = None) -> List[SpaPractitioner]: ...

    async def get_availability(
        self,
        service_id: str,
        date: str,
        practitioner_id: Optional[str] = None,
        duration: int = 60,
    ) -> SpaAvailability: ...

    async def create_booking(self, booking: Dict[str, Any]) -> SpaBooking: ...

    async def cancel_booking(self, booking_id: str) -> Dict[str, Any]: ...


class OCRProvider(Protocol):
    vendor_name: str

    async def extract(self, image_data: Any, document_type: str) -> ExtractedIDData: ...


# Base implementation with common functionality
class BaseProvider(ABC):
    """HTTP, logging and metrics plumbing shared by every provider implementation"""

    domain = "unknown"
    vendor_name = "unknown"
    api_label = "Provider"

    def __init__(self, config: Dict[str, Any]):
        self.config = dict(config or {})
        self.logger = ConnectorLogger(
            name=f"{self.__class__.__module__}.{self.__class__.__name__}",
            vendor=self.vendor_name,
            hotel_id=self.config.get("hotelId"),
        )

    def api_error(self, reason: Optional[str], status_code: Optional[int] = None) -> ProviderApiError:
        return ProviderApiError(
            f"{self.api_label} API error: {reason}",
            status_code=status_code,
            reason=reason,
            provider=self.vendor_name,
        )

    def _error_from_response(self, response: httpx.Response) -> ProviderApiError:
        return self.api_error(response.reason_phrase, status_code=response.status_code)

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Perform one HTTP exchange; non-2xx and transport failures raise ProviderApiError"""
        operation = f"{method} {sanitize_url(url)}"
        start_time = time.perf_counter()

        try:
            async with httpx.AsyncClient() as client:
                response = await client.request(method, url, **kwargs)
        except httpx.TransportError as e:
            duration = time.perf_counter() - start_time
            record_provider_call(self.domain, self.vendor_name, method, "transport_error", duration)
            error = self.api_error(str(e) or type(e).__name__)
            self.logger.log_api_call(operation=operation, duration_ms=duration * 1000, error=error)
            raise error from e

        duration = time.perf_counter() - start_time
        record_provider_call(self.domain, self.vendor_name, method, str(response.status_code), duration)

        if not response.is_success:
            error = self._error_from_response(response)
            self.logger.log_api_call(
                operation=operation,
                status_code=response.status_code,
                duration_ms=duration * 1000,
                error=error,
            )
            raise error

        self.logger.log_api_call(
            operation=operation,
            status_code=response.status_code,
            duration_ms=duration * 1000,
        )
        return response

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        response = await self._send(method, url, **kwargs)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise self.api_error("Invalid JSON in response body", status_code=response.status_code) from e
