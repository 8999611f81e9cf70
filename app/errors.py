class ProviderQuoteUnavailableError(ValueError):
    """Provider answered without a usable Global Quote payload."""


class StocksFeedError(RuntimeError):
    """Landing view could not load /api/stocks."""
