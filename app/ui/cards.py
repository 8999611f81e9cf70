from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from app.schemas.quote import CompanyQuote


class CardView(BaseModel):
    name: str
    ticker: str
    price_text: str
    change_text: str
    change_percent_text: str
    trend: Literal["up", "down"]


def _fixed2(value: float) -> str:
    # normalise -0.0 so a flat quote never renders as "-0.00"
    return f"{value + 0.0:.2f}"


def format_card(row: CompanyQuote) -> CardView:
    sign = "+" if row.positive else ""
    return CardView(
        name=row.name,
        ticker=row.ticker,
        price_text=f"${_fixed2(row.price)}",
        change_text=f"{sign}{_fixed2(row.change)}",
        change_percent_text=f"({sign}{_fixed2(row.change_percent)}%)",
        trend="up" if row.positive else "down",
    )
