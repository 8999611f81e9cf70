from __future__ import annotations

import threading
import time
from typing import Callable, Sequence

from pydantic import BaseModel

from app.integrations.stocks_api import StocksApiClient
from app.schemas.quote import CompanyQuote
from app.ui.cards import CardView, format_card
from app.ui.typewriter import TitleTypewriter

TITLE_TEXT = "Top Tech Chats"
TITLE_TICK_SEC = 0.1
POLL_INTERVAL_SEC = 30.0
SKELETON_CARD_COUNT = 10
LOAD_ERROR_MESSAGE = "Failed to load stock data"


class LandingSnapshot(BaseModel):
    title: str
    loading: bool
    error: str | None
    skeleton_cards: int
    cards: list[CardView]


class LandingView:
    """View state for the landing page: title reveal plus a polled stock grid.

    ``start()`` acquires two timers (title ticker, poll ticker) and ``close()``
    cancels both. A closed view never applies late fetch results and cannot be
    started again.
    """

    def __init__(
        self,
        fetch_stocks: Callable[[], Sequence[CompanyQuote]],
        *,
        title_text: str = TITLE_TEXT,
        title_tick_sec: float = TITLE_TICK_SEC,
        poll_interval_sec: float = POLL_INTERVAL_SEC,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetch_stocks = fetch_stocks
        self.typewriter = TitleTypewriter(title_text)
        self.title_tick_sec = title_tick_sec
        self.poll_interval_sec = poll_interval_sec
        self._clock = clock

        self.stocks: list[CompanyQuote] = []
        self.error: str | None = None
        self.loading = True
        self.fetch_count = 0
        self._first_fetch_done = False
        self._inflight = 0

        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._threads: list[threading.Thread] = []
        self._started = False

    @property
    def closed(self) -> bool:
        return self._stop.is_set()

    def refresh(self) -> None:
        with self._lock:
            self._inflight += 1
            self.loading = True
            self.fetch_count += 1

        try:
            rows = list(self._fetch_stocks())
        except Exception as exc:
            print(f"[VIEW][poll_error] error={exc!r}", flush=True)
            with self._lock:
                if not self.closed:
                    self.error = LOAD_ERROR_MESSAGE
        else:
            with self._lock:
                if not self.closed:
                    self.stocks = rows
                    self.error = None
        finally:
            with self._lock:
                self._inflight -= 1
                self.loading = self._inflight > 0
                self._first_fetch_done = True

    def tick_title(self) -> bool:
        return self.typewriter.tick()

    def _run_title_ticker(self) -> None:
        while not self.typewriter.done:
            if self._stop.wait(self.title_tick_sec):
                return
            self.tick_title()

    def next_poll_delay(self, fetch_started: float) -> float:
        """Time left in the current poll interval, measured from fetch start."""
        elapsed = self._clock() - fetch_started
        return max(self.poll_interval_sec - elapsed, 0.0)

    def _run_poller(self) -> None:
        while True:
            fetch_started = self._clock()
            self.refresh()
            if self._stop.wait(self.next_poll_delay(fetch_started)):
                return

    def start(self) -> None:
        if self._started or self.closed:
            raise RuntimeError("landing view already started")
        self._started = True

        for name, target in (
            ("landing-title-ticker", self._run_title_ticker),
            ("landing-poller", self._run_poller),
        ):
            worker = threading.Thread(target=target, daemon=True, name=name)
            self._threads.append(worker)
            worker.start()
        print(
            f"[VIEW][view_start] title_tick_sec={self.title_tick_sec} "
            f"poll_interval_sec={self.poll_interval_sec}",
            flush=True,
        )

    def close(self, timeout: float = 1.0) -> None:
        self._stop.set()
        for worker in self._threads:
            if worker is not threading.current_thread():
                worker.join(timeout=timeout)
        print("[VIEW][view_stop] timers=cancelled", flush=True)

    def __enter__(self) -> "LandingView":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def snapshot(self) -> LandingSnapshot:
        with self._lock:
            first_load = self.loading and not self._first_fetch_done
            rows = list(self.stocks)
            error = self.error
            loading = self.loading

        return LandingSnapshot(
            title=self.typewriter.displayed_text,
            loading=loading,
            error=error,
            skeleton_cards=SKELETON_CARD_COUNT if first_load else 0,
            cards=[] if first_load else [format_card(row) for row in rows],
        )


def build_landing_view(base_url: str, **kwargs) -> LandingView:
    return LandingView(StocksApiClient(base_url).fetch_stocks, **kwargs)
