from __future__ import annotations

import math
from typing import Any, Dict, Optional

import requests

from app.errors import ProviderQuoteUnavailableError


def _to_float(value: Any, *, field_name: str) -> float:
    try:
        if value is None or value == "":
            raise ValueError(f"missing value for {field_name}")
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ProviderQuoteUnavailableError(f"invalid numeric value for {field_name}: {value!r}") from exc
    if not math.isfinite(number):
        raise ProviderQuoteUnavailableError(f"non-finite value for {field_name}: {value!r}")
    return number


def parse_change_percent(value: Any) -> float:
    """Parse Alpha Vantage percent strings such as ``"2.34%"``."""
    if isinstance(value, str):
        value = value.strip().replace("%", "", 1)
    return _to_float(value, field_name="10. change percent")


def parse_global_quote(payload: Any) -> Dict[str, float]:
    """Extract price/change/change_percent from a GLOBAL_QUOTE response body."""
    if not isinstance(payload, dict):
        raise ProviderQuoteUnavailableError("payload must be an object")

    quote = payload.get("Global Quote")
    if not isinstance(quote, dict) or not quote:
        # rate limit and invalid-symbol answers come back as Note/Information or {}
        raise ProviderQuoteUnavailableError("missing Global Quote in payload")

    return {
        "price": _to_float(quote.get("05. price"), field_name="05. price"),
        "change": _to_float(quote.get("09. change"), field_name="09. change"),
        "change_percent": parse_change_percent(quote.get("10. change percent")),
    }


class AlphaVantageRestClient:
    """Minimal Alpha Vantage GLOBAL_QUOTE client."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://www.alphavantage.co",
        session: Optional[Any] = None,
        timeout: float = 5,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def get_quote(self, symbol: str) -> Dict[str, Any]:
        response = self.session.get(
            f"{self.base_url}/query",
            params={
                "function": "GLOBAL_QUOTE",
                "symbol": symbol,
                "apikey": self.api_key,
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderQuoteUnavailableError("provider body is not valid JSON") from exc

        return {"symbol": symbol, **parse_global_quote(payload)}

    def close(self) -> None:
        close = getattr(self.session, "close", None)
        if callable(close):
            close()
