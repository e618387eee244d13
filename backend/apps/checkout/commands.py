from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from .dtos import LineEntry


@dataclass
class CheckoutCommand:
    currency: str
    entries: List[LineEntry] = field(default_factory=list)
    promo_code: Optional[str] = None

    @staticmethod
    def from_validated(data: Mapping[str, Any], default_currency: str) -> "CheckoutCommand":
        """Build a command from serializer output (camelCase request keys)."""
        entries: List[LineEntry] = []
        for raw in data.get("items") or []:
            entries.append(
                LineEntry(
                    name=raw["name"],
                    unit_price=Decimal(raw["price"]),
                    quantity=int(raw["quantity"]),
                    image_url=raw.get("image") or None,
                )
            )
        currency = (data.get("currency") or default_currency).strip().upper()
        promo_code = data.get("promoCode") or None
        return CheckoutCommand(currency=currency, entries=entries, promo_code=promo_code)

    def as_log_context(self) -> Dict[str, Any]:
        return {
            "currency": self.currency,
            "entries": len(self.entries),
            "promo_code": self.promo_code,
        }
