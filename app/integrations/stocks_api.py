from __future__ import annotations

from typing import Any, Optional

import requests

from app.errors import StocksFeedError
from app.schemas.quote import CompanyQuote


class StocksApiClient:
    """Client side of GET /api/stocks used by the landing view."""

    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[Any] = None,
        timeout: float = 5,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch_stocks(self) -> list[CompanyQuote]:
        try:
            response = self.session.get(f"{self.base_url}/api/stocks", timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise StocksFeedError("Failed to fetch stock data") from exc

        if not isinstance(payload, list):
            raise StocksFeedError("stocks payload must be a list")
        return [CompanyQuote.model_validate(row) for row in payload]
