from typing import Sequence

from app.schemas.quote import Company

TECH_COMPANIES: tuple[Company, ...] = (
    Company(name="Apple Inc.", ticker="AAPL"),
    Company(name="Microsoft Corp.", ticker="MSFT"),
    Company(name="Alphabet Inc.", ticker="GOOGL"),
    Company(name="Amazon.com Inc.", ticker="AMZN"),
    Company(name="Tesla Inc.", ticker="TSLA"),
    Company(name="Meta Platforms", ticker="META"),
    Company(name="NVIDIA Corp.", ticker="NVDA"),
    Company(name="Netflix Inc.", ticker="NFLX"),
    Company(name="Salesforce Inc.", ticker="CRM"),
    Company(name="Oracle Corp.", ticker="ORCL"),
)


def roster_tickers(companies: Sequence[Company] = TECH_COMPANIES) -> list[str]:
    return [company.ticker for company in companies]
