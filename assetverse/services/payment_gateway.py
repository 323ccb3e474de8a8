# assetverse/services/payment_gateway.py
import logging
import uuid
from typing import Optional

import requests

from assetverse.config.settings import settings
from assetverse.errors import ExternalServiceError

logger = logging.getLogger(__name__)


class CheckoutGateway:
    """Creates hosted checkout sessions on a Stripe-compatible REST API

    Completion is not pushed back to us; the client posts the tracking id
    to ``/payments`` once the provider redirects it to the success page.
    """

    def __init__(self, api_base: str, secret_key: str, currency: str = "usd", timeout: float = 10):
        self.api_base = api_base.rstrip("/")
        self.secret_key = secret_key
        self.currency = currency
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "CheckoutGateway":
        cfg = settings.PAYMENTS
        return cls(cfg['api_base'], cfg['secret_key'], cfg['currency'], cfg['timeout'])

    @staticmethod
    def new_tracking_id() -> str:
        return uuid.uuid4().hex

    def create_checkout_session(self, package_name: str, price: float, employee_limit: int, tracking_id: Optional[str] = None) -> dict:
        if not self.secret_key:
            raise ExternalServiceError("Payments are not configured")

        tracking_id = tracking_id or self.new_tracking_id()
        payload = {
            "mode": "payment",
            "line_items[0][quantity]": 1,
            "line_items[0][price_data][currency]": self.currency,
            "line_items[0][price_data][unit_amount]": int(round(price * 100)),
            "line_items[0][price_data][product_data][name]": package_name,
            "metadata[package_name]": package_name,
            "metadata[employee_limit]": employee_limit,
            "metadata[tracking_id]": tracking_id,
            "success_url": settings.checkout_success_url(tracking_id),
            "cancel_url": settings.checkout_cancel_url(),
        }

        try:
            response = requests.post(
                f"{self.api_base}/checkout/sessions",
                data=payload,
                headers={"Authorization": f"Bearer {self.secret_key}"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            url = response.json()["url"]
        except (requests.RequestException, KeyError, ValueError) as e:
            logger.error(f"Checkout session for '{package_name}' failed: {e}")
            raise ExternalServiceError("Could not start checkout")

        logger.info(f"Checkout session created for '{package_name}' (tracking {tracking_id})")
        return {"url": url, "tracking_id": tracking_id}


checkout_gateway = CheckoutGateway.from_settings()
