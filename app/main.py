from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.routes import router
from app.config.settings import Settings, get_settings
from app.integrations.alpha_vantage_rest import AlphaVantageRestClient
from app.services.quote_aggregator import QuoteAggregatorService


def build_quote_aggregator(settings: Settings) -> QuoteAggregatorService:
    rest_client = AlphaVantageRestClient(
        api_key=settings.STOCKS_API_KEY,
        base_url=settings.STOCKS_PROVIDER_BASE_URL,
    )
    return QuoteAggregatorService(
        rest_client=rest_client,
        quote_mode=settings.STOCKS_QUOTE_MODE,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.get_settings()
    print(
        f"[APP][startup] quote_mode={settings.STOCKS_QUOTE_MODE} "
        f"demo_key={int(settings.uses_demo_key)} provider={settings.STOCKS_PROVIDER_BASE_URL}",
        flush=True,
    )
    try:
        yield
    finally:
        rest_client = app.state.quote_aggregator.rest_client
        close = getattr(rest_client, "close", None)
        if callable(close):
            close()
        print("[APP][shutdown] provider_session=closed", flush=True)


app = FastAPI(title="Top Tech Chats", version="0.1.0", lifespan=lifespan)
app.include_router(router, prefix="/api")

app.state.get_settings = get_settings
app.state.quote_aggregator = build_quote_aggregator(get_settings())
