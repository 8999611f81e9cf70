from __future__ import annotations

import random

from app.schemas.quote import SyntheticQuote

# cent grid keeps the rounded values inside the half-open ranges
MIN_PRICE_CENTS = 5_000
MAX_PRICE_CENTS = 55_000
MIN_CHANGE_CENTS = -1_000
MAX_CHANGE_CENTS = 1_000


def generate_synthetic_quote(rng: random.Random | None = None) -> SyntheticQuote:
    """Random quote: price in [50, 550), change in [-10, 10), both to the cent."""
    source = rng or random
    price = source.randrange(MIN_PRICE_CENTS, MAX_PRICE_CENTS) / 100
    change = source.randrange(MIN_CHANGE_CENTS, MAX_CHANGE_CENTS) / 100
    return SyntheticQuote(
        price=price,
        change=change,
        change_percent=round(change / price * 100, 2),
    )
