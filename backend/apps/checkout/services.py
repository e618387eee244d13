from __future__ import annotations

from typing import Optional

from apps.common import get_logger

from .commands import CheckoutCommand
from .dtos import CheckoutSession, PricingResult
from .exceptions import MalformedCartError
from .protocols import (
    CheckoutGatewayProtocol,
    DiscountResolverProtocol,
    PricingEngineProtocol,
)

logger = get_logger(__name__).bind(component="checkout", layer="service")


class CheckoutService:
    """
    Runs the checkout pipeline: price, resolve discount, create coupon, create session.

    Stages run strictly in sequence; an exception from any stage aborts the
    rest, so a request either yields a session or nothing at all.
    """

    def __init__(
        self,
        pricing: PricingEngineProtocol,
        discounts: DiscountResolverProtocol,
        gateway: CheckoutGatewayProtocol,
    ):
        self.pricing = pricing
        self.discounts = discounts
        self.gateway = gateway
        self.logger = logger.bind(service="CheckoutService")

    def create_checkout_session(self, command: CheckoutCommand) -> CheckoutSession:
        log = self.logger.bind(**command.as_log_context())
        if not command.entries:
            log.warning("Rejected checkout without items")
            raise MalformedCartError("Cart must contain at least one item")

        pricing = self.price_cart(command)
        discount = self.resolve_discount(command.promo_code, pricing)
        coupon_id = self.create_coupon(discount, pricing.currency)
        session = self.gateway.create_session(
            pricing.line_items, pricing.currency, coupon_id=coupon_id
        )
        log.info(
            "Checkout session ready",
            session_id=session.id,
            total_minor=pricing.total_minor,
            discount_minor=discount,
        )
        return session

    def price_cart(self, command: CheckoutCommand) -> PricingResult:
        return self.pricing.price(command.entries, command.currency)

    def resolve_discount(self, promo_code: Optional[str], pricing: PricingResult) -> int:
        discount = self.discounts.resolve(promo_code, pricing.total_minor)
        if discount > pricing.total_minor:
            self.logger.warning(
                "Discount exceeds cart total, capping",
                promo_code=promo_code,
                discount_minor=discount,
                total_minor=pricing.total_minor,
            )
            discount = pricing.total_minor
        return discount

    def create_coupon(self, discount_minor: int, currency: str) -> Optional[str]:
        if discount_minor <= 0:
            return None
        return self.gateway.create_coupon(discount_minor, currency)
