"""Request-scoped value objects passed between checkout pipeline stages."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional


@dataclass(frozen=True)
class LineEntry:
    name: str
    unit_price: Decimal
    quantity: int
    image_url: Optional[str] = None


@dataclass(frozen=True)
class AggregatedEntry:
    name: str
    unit_price: Decimal
    quantity: int
    image_url: Optional[str] = None


@dataclass(frozen=True)
class PricedLineItem:
    currency: str
    name: str
    unit_amount_minor: int
    quantity: int
    image_url: Optional[str] = None

    @property
    def subtotal_minor(self) -> int:
        return self.unit_amount_minor * self.quantity


@dataclass(frozen=True)
class PricingResult:
    currency: str
    base_currency: str
    base_total_minor: int
    total_minor: int
    line_items: List[PricedLineItem] = field(default_factory=list)

    @property
    def line_items_total_minor(self) -> int:
        return sum(item.subtotal_minor for item in self.line_items)


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    coupon_id: Optional[str] = None
