from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List

from apps.common import get_logger

from .aggregation import aggregate_entries
from .dtos import LineEntry, PricedLineItem, PricingResult
from .exceptions import ZeroTotalError
from .protocols import RateOracleProtocol
from .utils import normalize_currency, round_half_up, to_minor_units

logger = get_logger(__name__).bind(component="checkout", layer="pricing")


class PricingEngine:
    """
    Prices a cart in the requested currency with a single rate lookup.

    Line amounts are first computed in base-currency minor units. Only the
    grand total is converted; each line is then rescaled by
    ``converted_total / base_total`` so the displayed unit prices stay
    consistent with the converted total.
    """

    def __init__(self, rate_oracle: RateOracleProtocol, base_currency: str = "USD"):
        self.rate_oracle = rate_oracle
        self.base_currency = normalize_currency(base_currency)
        self.logger = logger.bind(service="PricingEngine")

    def price(self, entries: Iterable[LineEntry], target_currency: str) -> PricingResult:
        target = normalize_currency(target_currency)
        aggregated = aggregate_entries(entries)

        base_units = [
            (entry, to_minor_units(entry.unit_price)) for entry in aggregated.values()
        ]
        base_total = sum(unit * entry.quantity for entry, unit in base_units)
        self.logger.debug(
            "Computed base total",
            entries=len(base_units),
            base_currency=self.base_currency,
            base_total_minor=base_total,
        )
        if base_total <= 0:
            raise ZeroTotalError("Cart total must be greater than zero")

        total = self.rate_oracle.convert(base_total, self.base_currency, target)

        line_items: List[PricedLineItem] = [
            PricedLineItem(
                currency=target,
                name=entry.name,
                unit_amount_minor=max(0, round_half_up(Decimal(unit * total) / Decimal(base_total))),
                quantity=entry.quantity,
                image_url=entry.image_url,
            )
            for entry, unit in base_units
        ]
        result = PricingResult(
            currency=target,
            base_currency=self.base_currency,
            base_total_minor=base_total,
            total_minor=total,
            line_items=line_items,
        )
        self.logger.info(
            "Priced cart",
            currency=target,
            base_total_minor=base_total,
            total_minor=total,
            line_items_total_minor=result.line_items_total_minor,
        )
        return result
