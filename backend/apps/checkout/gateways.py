from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import stripe

from apps.common import get_logger

from .dtos import CheckoutSession, PricedLineItem
from .exceptions import CheckoutServiceError

logger = get_logger(__name__).bind(component="checkout", layer="gateway")


class StripeCheckoutGateway:
    """Creates coupons and hosted checkout sessions through Stripe.

    The API key is passed on every call instead of being assigned to
    ``stripe.api_key``, so several gateways can coexist in one process.
    """

    def __init__(
        self,
        api_key: str,
        *,
        success_url: str,
        cancel_url: str,
        allowed_countries: Sequence[str] = ("US", "CA"),
        payment_method_types: Sequence[str] = ("card",),
        client: Any = stripe,
    ):
        self.api_key = api_key
        self.success_url = success_url
        self.cancel_url = cancel_url
        self.allowed_countries = list(allowed_countries)
        self.payment_method_types = list(payment_method_types)
        self.client = client
        self.logger = logger.bind(gateway="StripeCheckoutGateway")

    def create_coupon(self, amount_minor: int, currency: str) -> str:
        try:
            coupon = self.client.Coupon.create(
                api_key=self.api_key,
                amount_off=amount_minor,
                currency=currency.lower(),
                duration="once",
                max_redemptions=1,
            )
        except stripe.StripeError as exc:
            self.logger.error(
                "Coupon creation failed",
                amount_minor=amount_minor,
                currency=currency,
                error=exc.__class__.__name__,
            )
            raise CheckoutServiceError("Coupon creation failed") from exc
        self.logger.info("Coupon created", coupon_id=coupon.id, amount_minor=amount_minor, currency=currency)
        return coupon.id

    def create_session(
        self,
        line_items: Sequence[PricedLineItem],
        currency: str,
        coupon_id: Optional[str] = None,
    ) -> CheckoutSession:
        params: Dict[str, Any] = {
            "payment_method_types": self.payment_method_types,
            "line_items": [self._line_item_payload(item) for item in line_items],
            "mode": "payment",
            "success_url": self.success_url,
            "cancel_url": self.cancel_url,
            "shipping_address_collection": {"allowed_countries": self.allowed_countries},
            "billing_address_collection": "required",
            "discounts": [{"coupon": coupon_id}] if coupon_id else [],
        }
        try:
            session = self.client.checkout.Session.create(api_key=self.api_key, **params)
        except stripe.StripeError as exc:
            self.logger.error(
                "Checkout session creation failed",
                currency=currency,
                line_items=len(line_items),
                coupon_id=coupon_id,
                error=exc.__class__.__name__,
            )
            raise CheckoutServiceError("Checkout session creation failed") from exc
        self.logger.info(
            "Checkout session created",
            session_id=session.id,
            currency=currency,
            coupon_id=coupon_id,
        )
        return CheckoutSession(id=session.id, coupon_id=coupon_id)

    @staticmethod
    def _line_item_payload(item: PricedLineItem) -> Dict[str, Any]:
        product_data: Dict[str, Any] = {"name": item.name}
        images: List[str] = [item.image_url] if item.image_url else []
        if images:
            product_data["images"] = images
        return {
            "price_data": {
                "currency": item.currency.lower(),
                "product_data": product_data,
                "unit_amount": item.unit_amount_minor,
            },
            "quantity": item.quantity,
        }
