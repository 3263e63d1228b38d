"""
PayPal order creation and capture.

Only the charge amount crosses this boundary: it always comes from
``PricingService.calculate_job_posting_price``. Provider responses are reduced
to an order id and status.
"""
import logging
from decimal import Decimal

import requests

from app.config import settings

logger = logging.getLogger(__name__)


class PaymentError(Exception):
    pass


def format_amount(amount: Decimal) -> str:
    return f"{Decimal(amount):.2f}"


class PayPalGateway:
    def __init__(
        self,
        client_id: str,
        client_secret: str,
        base_url: str,
        currency: str = "USD",
        timeout: float = 15.0,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.base_url = base_url.rstrip("/")
        self.currency = currency
        self.timeout = timeout

    def _access_token(self) -> str:
        if not self.client_id or not self.client_secret:
            raise PaymentError("PayPal credentials are not configured")
        try:
            resp = requests.post(
                f"{self.base_url}/v1/oauth2/token",
                auth=(self.client_id, self.client_secret),
                data={"grant_type": "client_credentials"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise PaymentError("PayPal token request failed") from exc
        if resp.status_code >= 400:
            raise PaymentError(f"PayPal token request failed with status {resp.status_code}")
        return resp.json()["access_token"]

    def _post(self, path: str, body: dict | None = None) -> dict:
        headers = {"Authorization": f"Bearer {self._access_token()}"}
        try:
            resp = requests.post(f"{self.base_url}{path}", json=body or {}, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise PaymentError(f"PayPal request to {path} failed") from exc
        if resp.status_code >= 400:
            raise PaymentError(f"PayPal request to {path} failed with status {resp.status_code}")
        return resp.json()

    def create_order(self, amount: Decimal) -> dict:
        value = format_amount(amount)
        data = self._post(
            "/v2/checkout/orders",
            {
                "intent": "CAPTURE",
                "purchase_units": [{"amount": {"currency_code": self.currency, "value": value}}],
            },
        )
        logger.info("Created PayPal order %s for %s %s", data.get("id"), value, self.currency)
        return {"order_id": data["id"], "status": data.get("status", "CREATED")}

    def capture_order(self, order_id: str) -> dict:
        data = self._post(f"/v2/checkout/orders/{order_id}/capture")
        logger.info("Captured PayPal order %s: %s", order_id, data.get("status"))
        return {"order_id": data.get("id", order_id), "status": data.get("status", "UNKNOWN")}


def get_payment_gateway() -> PayPalGateway:
    return PayPalGateway(
        client_id=settings.paypal_client_id,
        client_secret=settings.paypal_client_secret,
        base_url=settings.paypal_base_url,
        currency=settings.currency,
        timeout=settings.paypal_timeout_seconds,
    )
