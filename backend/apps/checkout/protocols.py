from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from apps.checkout.dtos import CheckoutSession, LineEntry, PricedLineItem, PricingResult


class RateOracleProtocol(Protocol):
    def convert(self, amount_minor: int, from_currency: str, to_currency: str) -> int:
        ...


class PricingEngineProtocol(Protocol):
    def price(self, entries: Iterable["LineEntry"], target_currency: str) -> "PricingResult":
        ...


class DiscountResolverProtocol(Protocol):
    def resolve(self, code: Optional[str], total_minor: int) -> int:
        ...


class CheckoutGatewayProtocol(Protocol):
    def create_coupon(self, amount_minor: int, currency: str) -> str:
        ...

    def create_session(
        self,
        line_items: Sequence["PricedLineItem"],
        currency: str,
        coupon_id: Optional[str] = None,
    ) -> "CheckoutSession":
        ...
