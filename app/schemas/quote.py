from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Company(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    ticker: str


class ProviderQuote(BaseModel):
    source: Literal["provider"] = "provider"
    price: float = Field(ge=0, allow_inf_nan=False)
    change: float = Field(allow_inf_nan=False)
    change_percent: float = Field(allow_inf_nan=False)


class SyntheticQuote(BaseModel):
    source: Literal["synthetic"] = "synthetic"
    price: float = Field(ge=0)
    change: float
    change_percent: float


Quote = Union[ProviderQuote, SyntheticQuote]


class CompanyQuote(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    ticker: str
    price: float
    change: float
    change_percent: float = Field(alias="changePercent")
    positive: bool

    @classmethod
    def from_quote(cls, company: Company, quote: Quote) -> "CompanyQuote":
        return cls(
            name=company.name,
            ticker=company.ticker,
            price=quote.price,
            change=quote.change,
            change_percent=quote.change_percent,
            positive=quote.change > 0,
        )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
