"""
Stripe payment connector
Form-encoded requests against the PaymentIntents, Refunds, Customers and
PaymentMethods resources.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from ...contracts import BaseProvider, InvalidRequestError, PaymentProviderError
from ...factory import register_provider
from ...normalization import as_dict, dig, first_truthy
from ...provider_configs import parse_provider_config
from ...utils.logging import log_performance

STRIPE_API_URL = "https://api.stripe.com/v1"


def to_minor_units(amount: Any) -> int:
    """Major currency units to integer cents, rounding half up"""
    if amount is None or isinstance(amount, bool):
        raise InvalidRequestError("amount is required", field="amount")
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise InvalidRequestError(f"Invalid amount: {amount!r}", field="amount") from None
    if not value.is_finite() or value < 0:
        raise InvalidRequestError(f"Invalid amount: {amount!r}", field="amount")
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _metadata_fields(metadata: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {f"metadata[{key}]": value for key, value in (metadata or {}).items()}


def _form(**fields) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None}


@register_provider("payment", "stripe")
class PaymentConnector(BaseProvider):
    """Card payments for folio holds, service charges and staff tips"""

    domain = "payment"
    vendor_name = "stripe"
    api_label = "Stripe"

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.settings = parse_provider_config(self.domain, self.vendor_name, self.config).require()
        self.base_url = self.settings.base_url or STRIPE_API_URL

    def api_error(self, reason: Optional[str], status_code: Optional[int] = None) -> PaymentProviderError:
        return PaymentProviderError(
            f"{self.api_label} API error: {reason}",
            status_code=status_code,
            reason=reason,
            provider=self.vendor_name,
        )

    def _error_from_response(self, response: httpx.Response) -> PaymentProviderError:
        try:
            body = as_dict(response.json())
        except ValueError:
            body = {}
        reason = first_truthy(dig(body, "error", "message"), body.get("message"), response.reason_phrase)
        return self.api_error(reason, status_code=response.status_code)

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.settings.stripe_secret_key}"}

    async def post(self, path: str, form: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self._request(
            "POST", f"{self.base_url}{path}", headers=self._headers(), data=form or None
        )

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self._request("GET", f"{self.base_url}{path}", headers=self._headers(), params=params)

    # Holds
    @log_performance("create_authorization_hold")
    async def create_authorization_hold(
        self,
        amount: Any,
        currency: str = "usd",
        customer_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Authorize funds without capturing them"""
        return await self.post(
            "/payment_intents",
            _form(
                amount=to_minor_units(amount),
                currency=currency,
                customer=customer_id,
                description=description or "Hotel authorization hold",
                capture_method="manual",
                confirm="true",
            ),
        )

    @log_performance("capture_hold")
    async def capture_hold(self, payment_intent_id: str, amount_to_capture: Any = None) -> Dict[str, Any]:
        """Capture a hold, optionally for less than the authorized amount"""
        form = {}
        if amount_to_capture:
            form["amount_to_capture"] = to_minor_units(amount_to_capture)
        return await self.post(f"/payment_intents/{quote(payment_intent_id, safe='')}/capture", form)

    @log_performance("cancel_hold")
    async def cancel_hold(self, payment_intent_id: str) -> Dict[str, Any]:
        return await self.post(f"/payment_intents/{quote(payment_intent_id, safe='')}/cancel")

    # Charges
    @log_performance("create_charge")
    async def create_charge(
        self,
        amount: Any,
        currency: str = "usd",
        customer_id: Optional[str] = None,
        description: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return await self.post(
            "/payment_intents",
            _form(
                amount=to_minor_units(amount),
                currency=currency,
                customer=customer_id,
                description=description or "Hotel service charge",
                capture_method="automatic",
                confirm="true",
                **_metadata_fields(metadata),
            ),
        )

    async def process_tip(
        self,
        amount: Any,
        currency: str = "usd",
        customer_id: Optional[str] = None,
        staff_name: Optional[str] = None,
        department: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self.create_charge(
            amount,
            currency=currency,
            customer_id=customer_id,
            description=f"Tip for {staff_name} ({department})",
            metadata=_form(type="tip", staff_name=staff_name, department=department),
        )

    @log_performance("create_refund")
    async def create_refund(
        self, payment_intent_id: str, amount: Any = None, reason: Optional[str] = None
    ) -> Dict[str, Any]:
        """Full refund unless a partial amount is given"""
        form = {"payment_intent": payment_intent_id}
        if amount:
            form["amount"] = to_minor_units(amount)
        if reason:
            form["reason"] = reason
        return await self.post("/refunds", form)

    # Customers
    @log_performance("create_customer")
    async def create_customer(
        self,
        email: Optional[str] = None,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return await self.post(
            "/customers", _form(email=email, name=name, phone=phone, **_metadata_fields(metadata))
        )

    @log_performance("attach_payment_method")
    async def attach_payment_method(self, payment_method_id: str, customer_id: str) -> Dict[str, Any]:
        return await self.post(
            f"/payment_methods/{quote(payment_method_id, safe='')}/attach", {"customer": customer_id}
        )

    @log_performance("get_payment_intent")
    async def get_payment_intent(self, payment_intent_id: str) -> Dict[str, Any]:
        return await self.get(f"/payment_intents/{quote(payment_intent_id, safe='')}")

    @log_performance("list_payment_methods")
    async def list_payment_methods(self, customer_id: str) -> Dict[str, Any]:
        return await self.get("/payment_methods", params={"customer": customer_id, "type": "card"})
