from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import requests

from apps.common import get_logger

from .exceptions import RateProviderError, RateUnavailableError
from .utils import normalize_currency, round_half_up

logger = get_logger(__name__).bind(component="checkout", layer="rates")


class CurrencyLayerClient:
    """Converts minor-unit amounts using the CurrencyLayer ``live`` endpoint.

    One HTTP request is made per conversion; nothing is cached. Identity
    conversions never touch the network.
    """

    def __init__(
        self,
        access_key: str,
        *,
        base_url: str = "https://api.currencylayer.com",
        timeout: Optional[float] = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.access_key = access_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.logger = logger.bind(client="CurrencyLayerClient")

    def convert(self, amount_minor: int, from_currency: str, to_currency: str) -> int:
        source = normalize_currency(from_currency)
        target = normalize_currency(to_currency)
        if source == target:
            self.logger.debug("Identity conversion, skipping lookup", currency=source)
            return amount_minor
        rate = self.fetch_rate(source, target)
        converted = round_half_up(Decimal(amount_minor) * rate)
        self.logger.info(
            "Converted amount",
            amount_minor=amount_minor,
            source=source,
            target=target,
            rate=rate,
            converted_minor=converted,
        )
        return converted

    def fetch_rate(self, source: str, target: str) -> Decimal:
        params = {
            "access_key": self.access_key,
            "source": source,
            "currencies": target,
        }
        try:
            response = self.session.get(
                f"{self.base_url}/live", params=params, timeout=self.timeout
            )
            response.raise_for_status()
            payload = response.json(parse_float=Decimal)
        except requests.RequestException as exc:
            self.logger.error(
                "Rate provider request failed",
                source=source,
                target=target,
                error=exc.__class__.__name__,
            )
            raise RateProviderError(f"Rate provider request failed: {exc.__class__.__name__}") from exc
        except ValueError as exc:
            self.logger.error("Rate provider returned an undecodable body", source=source, target=target)
            raise RateProviderError("Rate provider returned an undecodable body") from exc

        return self._extract_rate(payload, source, target)

    def _extract_rate(self, payload: Any, source: str, target: str) -> Decimal:
        if not isinstance(payload, dict) or payload.get("success") is not True:
            error = payload.get("error") if isinstance(payload, dict) else None
            self.logger.warning(
                "Rate provider reported failure",
                source=source,
                target=target,
                error=error,
            )
            raise RateUnavailableError(f"Rate provider reported failure for {source}{target}")

        quotes = payload.get("quotes") or {}
        raw_rate = quotes.get(f"{source}{target}") if isinstance(quotes, dict) else None
        try:
            rate = Decimal(str(raw_rate)) if raw_rate is not None else None
        except InvalidOperation:
            rate = None
        if rate is None or not rate.is_finite() or rate <= 0:
            self.logger.warning("Exchange rate missing from quotes", source=source, target=target)
            raise RateUnavailableError(f"Exchange rate not available for {source}{target}")
        return rate
