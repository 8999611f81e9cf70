import os
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel

DEMO_API_KEY = "demo"
DEFAULT_PROVIDER_BASE_URL = "https://www.alphavantage.co"


class Settings(BaseModel):
    STOCKS_API_KEY: str = DEMO_API_KEY
    STOCKS_QUOTE_MODE: Literal["live", "synthetic"] = "live"
    STOCKS_PROVIDER_BASE_URL: str = DEFAULT_PROVIDER_BASE_URL

    @property
    def uses_demo_key(self) -> bool:
        return self.STOCKS_API_KEY == DEMO_API_KEY

    @classmethod
    def from_env(cls) -> "Settings":
        api_key = (os.getenv("STOCKS_API_KEY") or "").strip() or DEMO_API_KEY
        quote_mode = (os.getenv("STOCKS_QUOTE_MODE") or "live").strip().lower()
        base_url = (os.getenv("STOCKS_PROVIDER_BASE_URL") or "").strip().rstrip("/")

        return cls.model_validate(
            {
                "STOCKS_API_KEY": api_key,
                "STOCKS_QUOTE_MODE": quote_mode,
                "STOCKS_PROVIDER_BASE_URL": base_url or DEFAULT_PROVIDER_BASE_URL,
            }
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
