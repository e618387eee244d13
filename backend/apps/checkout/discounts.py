from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Mapping, Optional

from apps.common import get_logger

from .utils import round_half_up

logger = get_logger(__name__).bind(component="checkout", layer="discounts")

PERCENT_DIVISOR = Decimal("100")


@dataclass(frozen=True)
class DiscountRule:
    code: str
    percent: Optional[Decimal] = None
    amount_minor: Optional[int] = None

    def __post_init__(self):
        if (self.percent is None) == (self.amount_minor is None):
            raise ValueError(f"Discount rule {self.code!r} needs exactly one of percent or amount_minor")
        if self.percent is not None and self.percent < 0:
            raise ValueError(f"Discount rule {self.code!r} has a negative percent")
        if self.amount_minor is not None and self.amount_minor < 0:
            raise ValueError(f"Discount rule {self.code!r} has a negative amount")

    def amount_for(self, total_minor: int) -> int:
        if self.amount_minor is not None:
            return self.amount_minor
        return round_half_up(Decimal(total_minor) * self.percent / PERCENT_DIVISOR)

    @staticmethod
    def from_raw(code: str, raw: Mapping[str, Any]) -> "DiscountRule":
        if not isinstance(raw, Mapping):
            raise ValueError(f"Discount rule {code!r} must be an object")
        percent = raw.get("percent")
        amount = raw.get("amount_minor")
        try:
            return DiscountRule(
                code=code,
                percent=Decimal(str(percent)) if percent is not None else None,
                amount_minor=int(amount) if amount is not None else None,
            )
        except (InvalidOperation, TypeError) as exc:
            raise ValueError(f"Discount rule {code!r} is malformed") from exc


def parse_discount_rules(raw_rules: Mapping[str, Any]) -> Dict[str, DiscountRule]:
    return {code: DiscountRule.from_raw(code, raw) for code, raw in raw_rules.items()}


class DiscountResolver:
    def __init__(self, rules: Iterable[DiscountRule]):
        self.rules = {rule.code: rule for rule in rules}
        self.logger = logger.bind(service="DiscountResolver")

    def resolve(self, code: Optional[str], total_minor: int) -> int:
        if not code:
            return 0
        rule = self.rules.get(code)
        if rule is None:
            # Unknown codes are ignored rather than rejected.
            self.logger.info("Ignoring unknown promo code", promo_code=code)
            return 0
        amount = rule.amount_for(total_minor)
        self.logger.info(
            "Resolved promo code",
            promo_code=code,
            total_minor=total_minor,
            discount_minor=amount,
        )
        return amount
