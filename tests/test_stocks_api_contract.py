import unittest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from app.integrations.alpha_vantage_rest import AlphaVantageRestClient
from app.main import app
from app.schemas.quote import CompanyQuote
from app.services.quote_aggregator import QuoteAggregatorService

ROSTER = ["AAPL", "MSFT", "GOOGL", "AMZN", "TSLA", "META", "NVDA", "NFLX", "CRM", "ORCL"]


class FixedRestClient:
    def get_quote(self, symbol: str) -> dict:
        if symbol == "TSLA":
            raise TimeoutError("timeout:TSLA")
        return {"symbol": symbol, "price": 250.0, "change": -3.5, "change_percent": -1.38}


class BrokenAggregator:
    def get_company_quotes(self):
        raise RuntimeError("serializer exploded")

    def metrics(self):
        return {}


class NanRowAggregator:
    def get_company_quotes(self):
        return [
            CompanyQuote(
                name="Apple Inc.",
                ticker="AAPL",
                price=100.0,
                change=float("nan"),
                change_percent=float("nan"),
                positive=False,
            )
        ]

    def metrics(self):
        return {}


def _nan_provider_session():
    session = MagicMock()
    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.return_value = {
        "Global Quote": {
            "05. price": "100.0",
            "09. change": "NaN",
            "10. change percent": "NaN%",
        }
    }
    session.get.return_value = response
    return session


class StocksApiContractTest(unittest.TestCase):
    def setUp(self):
        self._original = app.state.quote_aggregator
        app.state.quote_aggregator = QuoteAggregatorService(rest_client=FixedRestClient())
        self.client = TestClient(app)

    def tearDown(self):
        app.state.quote_aggregator = self._original

    def test_stocks_returns_ten_rows_in_roster_order(self):
        r = self.client.get("/api/stocks")

        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertEqual(len(body), 10)
        self.assertEqual([row["ticker"] for row in body], ROSTER)
        self.assertEqual(
            set(body[0].keys()),
            {"name", "ticker", "price", "change", "changePercent", "positive"},
        )

    def test_stocks_row_fields_follow_provider_quote(self):
        body = self.client.get("/api/stocks").json()
        aapl = body[0]

        self.assertEqual(aapl["name"], "Apple Inc.")
        self.assertEqual(aapl["price"], 250.0)
        self.assertEqual(aapl["change"], -3.5)
        self.assertEqual(aapl["changePercent"], -1.38)
        self.assertIs(aapl["positive"], False)

    def test_provider_failure_is_not_surfaced(self):
        body = self.client.get("/api/stocks").json()
        tsla = body[4]

        self.assertEqual(tsla["ticker"], "TSLA")
        self.assertGreaterEqual(tsla["price"], 50)
        self.assertLess(tsla["price"], 550)
        self.assertEqual(tsla["positive"], tsla["change"] > 0)

    def test_unexpected_failure_returns_generic_500(self):
        app.state.quote_aggregator = BrokenAggregator()

        r = self.client.get("/api/stocks")

        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json(), {"error": "Failed to fetch stock data"})

    def test_nan_provider_values_fall_back_to_synthetic_quotes(self):
        app.state.quote_aggregator = QuoteAggregatorService(
            rest_client=AlphaVantageRestClient(api_key="demo", session=_nan_provider_session())
        )

        r = self.client.get("/api/stocks")

        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertEqual([row["ticker"] for row in body], ROSTER)
        for row in body:
            self.assertGreaterEqual(row["price"], 50)
            self.assertLess(row["price"], 550)
            self.assertGreaterEqual(row["change"], -10)
            self.assertLess(row["change"], 10)
        self.assertEqual(app.state.quote_aggregator.metrics()["synthetic_fallbacks"], 10)

    def test_row_that_cannot_be_encoded_returns_generic_500(self):
        app.state.quote_aggregator = NanRowAggregator()

        r = self.client.get("/api/stocks")

        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json(), {"error": "Failed to fetch stock data"})

    def test_quote_metrics_endpoint(self):
        self.client.get("/api/stocks")

        r = self.client.get("/api/metrics/quote")

        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertEqual(body["batches"], 1)
        self.assertEqual(body["provider_quotes"], 9)
        self.assertEqual(body["synthetic_fallbacks"], 1)


if __name__ == "__main__":
    unittest.main()
