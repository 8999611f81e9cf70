from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Literal, Sequence

from app.schemas.quote import Company, CompanyQuote, ProviderQuote, Quote, SyntheticQuote
from app.services.roster import TECH_COMPANIES, roster_tickers
from app.services.synthetic_quotes import generate_synthetic_quote

QuoteMode = Literal["live", "synthetic"]


class QuoteAggregatorService:
    """Provider-first quote resolver with silent synthetic fallback."""

    def __init__(
        self,
        *,
        rest_client,
        quote_mode: QuoteMode = "live",
        companies: Sequence[Company] = TECH_COMPANIES,
        synthetic_quote_factory: Callable[[], SyntheticQuote] | None = None,
    ) -> None:
        self.rest_client = rest_client
        self.quote_mode = quote_mode
        self.companies = tuple(companies)
        self.synthetic_quote_factory = synthetic_quote_factory or generate_synthetic_quote

        self.provider_quotes = 0
        self.synthetic_fallbacks = 0
        self.synthetic_direct = 0
        self.batches = 0
        self.last_batch_size = 0
        self._metrics_lock = threading.Lock()

    def _fetch_provider(self, symbol: str) -> ProviderQuote:
        payload = self.rest_client.get_quote(symbol)
        return ProviderQuote(
            price=float(payload["price"]),
            change=float(payload["change"]),
            change_percent=float(payload["change_percent"]),
        )

    def resolve_quote(self, symbol: str) -> Quote:
        if self.quote_mode == "synthetic":
            return self.synthetic_quote_factory()

        try:
            return self._fetch_provider(symbol)
        except Exception as exc:
            print(
                f"[QUOTE][provider_fallback] symbol={symbol} error={exc!r}",
                flush=True,
            )
            return self.synthetic_quote_factory()

    def resolve_quotes(self, symbols: Sequence[str]) -> list[Quote]:
        """Resolve every symbol concurrently; output order follows input order."""
        if not symbols:
            return []
        with ThreadPoolExecutor(max_workers=len(symbols), thread_name_prefix="quote-resolve") as pool:
            return list(pool.map(self.resolve_quote, symbols))

    def record_batch(self, quotes: Sequence[Quote]) -> tuple[int, int]:
        provider_count = sum(1 for q in quotes if q.source == "provider")
        synthetic_count = len(quotes) - provider_count
        with self._metrics_lock:
            self.provider_quotes += provider_count
            if self.quote_mode == "synthetic":
                self.synthetic_direct += synthetic_count
            else:
                self.synthetic_fallbacks += synthetic_count
            self.batches += 1
            self.last_batch_size = len(quotes)
        return provider_count, synthetic_count

    def get_company_quotes(self) -> list[CompanyQuote]:
        quotes = self.resolve_quotes(roster_tickers(self.companies))

        provider_count, synthetic_count = self.record_batch(quotes)

        print(
            "[QUOTE][batch_resolve] "
            f"mode={self.quote_mode} target_count={len(self.companies)} "
            f"provider_count={provider_count} synthetic_count={synthetic_count}",
            flush=True,
        )

        return [
            CompanyQuote.from_quote(company, quote)
            for company, quote in zip(self.companies, quotes)
        ]

    def metrics(self) -> dict[str, int | str]:
        with self._metrics_lock:
            return {
                "quote_mode": self.quote_mode,
                "provider_quotes": self.provider_quotes,
                "synthetic_fallbacks": self.synthetic_fallbacks,
                "synthetic_direct": self.synthetic_direct,
                "batches": self.batches,
                "last_batch_size": self.last_batch_size,
            }
