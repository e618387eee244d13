from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from .discounts import DiscountRule, parse_discount_rules
from .utils import normalize_currency


@dataclass(frozen=True)
class CheckoutConfig:
    """Everything the checkout pipeline needs, resolved once at start-up."""

    stripe_secret_key: str
    rate_access_key: str
    success_url: str
    cancel_url: str
    rate_base_url: str = "https://api.currencylayer.com"
    rate_timeout: Optional[float] = 10.0
    base_currency: str = "USD"
    default_currency: str = "USD"
    allowed_countries: Tuple[str, ...] = ("US", "CA")
    discount_rules: Tuple[DiscountRule, ...] = field(default_factory=tuple)

    @property
    def is_complete(self) -> bool:
        return bool(self.stripe_secret_key and self.rate_access_key)

    def missing_credentials(self) -> Tuple[str, ...]:
        missing = []
        if not self.stripe_secret_key:
            missing.append("STRIPE_SECRET_KEY")
        if not self.rate_access_key:
            missing.append("CURRENCYLAYER_ACCESS_KEY")
        return tuple(missing)

    @classmethod
    def from_settings(cls, settings: Any = None) -> "CheckoutConfig":
        if settings is None:
            from django.conf import settings as django_settings

            settings = django_settings
        rules = parse_discount_rules(getattr(settings, "CHECKOUT_DISCOUNT_RULES", {}) or {})
        return cls(
            stripe_secret_key=getattr(settings, "STRIPE_SECRET_KEY", ""),
            rate_access_key=getattr(settings, "CURRENCYLAYER_ACCESS_KEY", ""),
            success_url=settings.CHECKOUT_SUCCESS_URL,
            cancel_url=settings.CHECKOUT_CANCEL_URL,
            rate_base_url=getattr(settings, "CURRENCYLAYER_BASE_URL", cls.rate_base_url),
            rate_timeout=getattr(settings, "RATE_TIMEOUT_SECONDS", cls.rate_timeout),
            base_currency=normalize_currency(getattr(settings, "CHECKOUT_BASE_CURRENCY", "USD")),
            default_currency=normalize_currency(getattr(settings, "CHECKOUT_DEFAULT_CURRENCY", "USD")),
            allowed_countries=tuple(getattr(settings, "CHECKOUT_ALLOWED_COUNTRIES", ("US", "CA"))),
            discount_rules=tuple(rules.values()),
        )
