from __future__ import annotations

from typing import Optional

from .config import CheckoutConfig
from .discounts import DiscountResolver
from .gateways import StripeCheckoutGateway
from .pricing import PricingEngine
from .rates import CurrencyLayerClient
from .services import CheckoutService


def build_checkout_service(config: Optional[CheckoutConfig] = None) -> CheckoutService:
    config = config or CheckoutConfig.from_settings()
    rate_oracle = CurrencyLayerClient(
        config.rate_access_key,
        base_url=config.rate_base_url,
        timeout=config.rate_timeout,
    )
    gateway = StripeCheckoutGateway(
        config.stripe_secret_key,
        success_url=config.success_url,
        cancel_url=config.cancel_url,
        allowed_countries=config.allowed_countries,
    )
    return CheckoutService(
        pricing=PricingEngine(rate_oracle, base_currency=config.base_currency),
        discounts=DiscountResolver(config.discount_rules),
        gateway=gateway,
    )
