"""Tests for the CoinGecko-backed actions."""
from __future__ import annotations

from unittest.mock import patch

import requests

from agent_plugins.core.market import (
    fetch_coingecko_trending,
    get_exchanges,
    get_global_data,
    get_simple_price,
)

GLOBAL = {
    "data": {
        "active_cryptocurrencies": 15234,
        "markets": 1180,
        "total_market_cap": {"usd": 2451234567890.12},
        "total_volume": {"usd": 98765432101.5},
        "market_cap_percentage": {"btc": 54.3219},
        "market_cap_change_percentage_24h_usd": -1.2312,
    }
}


def _cg_router(responses: dict):
    """Fake _cg_get: path -> payload."""
    def fake(path, params=None):
        if path not in responses:
            raise requests.HTTPError(f"404 for {path}")
        return responses[path]
    return fake


class TestGlobalData:
    @patch("agent_plugins.core.market._cg_get")
    def test_success(self, mock_get):
        mock_get.side_effect = _cg_router({"/global": GLOBAL})
        res = get_global_data()
        assert res.type == "success"
        assert "Active Cryptocurrencies: 15,234" in res.text
        assert "BTC Dominance: 54.32%" in res.text
        assert "24h Market Cap Change: -1.23%" in res.text
        assert res.data["markets"] == 1180

    @patch("agent_plugins.core.market._cg_get")
    def test_error_text(self, mock_get):
        mock_get.side_effect = requests.Timeout("timed out")
        seen = []
        res = get_global_data(callback=seen.append)
        assert res.type == "error"
        assert res.text == "Error fetching global data: timed out"
        assert [r.type for r in seen] == ["processing", "error"]


class TestExchanges:
    @patch("agent_plugins.core.market._cg_get")
    def test_top_ten_only(self, mock_get):
        rows = [{"id": f"ex{i}", "name": f"Exchange {i}", "country": "Malta" if i == 0 else None,
                 "trust_score": 10, "trade_volume_24h_btc": 1234.5} for i in range(15)]
        mock_get.side_effect = _cg_router({"/exchanges": rows})
        res = get_exchanges()
        assert res.type == "success"
        assert "Exchange 0 (Malta)" in res.text
        assert "Exchange 9\n" in res.text
        assert "Exchange 10" not in res.text
        assert "24h Volume (BTC): 1,234.5" in res.text


class TestSimplePrice:
    @patch("agent_plugins.core.market._cg_get")
    def test_normalizes_ids_and_currencies(self, mock_get):
        mock_get.return_value = {"bitcoin": {"usd": 65000, "eur": 60000.5}}
        res = get_simple_price(["Bitcoin ", ""], ["USD", "eur"])
        mock_get.assert_called_once_with("/simple/price", {"ids": "bitcoin", "vs_currencies": "usd,eur"})
        assert res.type == "success"
        assert "BITCOIN:" in res.text
        assert "USD: $65,000.00" in res.text
        assert "EUR: $60,000.50" in res.text

    @patch("agent_plugins.core.market._cg_get")
    def test_comma_string_and_default_currency(self, mock_get):
        mock_get.return_value = {"bitcoin": {"usd": 1}, "ethereum": {"usd": 0.00001234}}
        res = get_simple_price("bitcoin,ethereum")
        mock_get.assert_called_once_with("/simple/price", {"ids": "bitcoin,ethereum", "vs_currencies": "usd"})
        assert "USD: $0.00001234" in res.text

    @patch("agent_plugins.core.market._cg_get")
    def test_no_coins(self, mock_get):
        res = get_simple_price([])
        assert res.type == "error"
        mock_get.assert_not_called()

    @patch("agent_plugins.core.market._cg_get")
    def test_unknown_ids(self, mock_get):
        mock_get.return_value = {}
        res = get_simple_price(["notacoin"])
        assert res.type == "error"
        assert "notacoin" in res.text


class TestCoinGeckoTrending:
    @patch("agent_plugins.core.market._cg_get")
    def test_enriches_with_details(self, mock_get):
        mock_get.side_effect = _cg_router({
            "/search/trending": {"coins": [
                {"item": {"id": "pepe", "symbol": "pepe", "name": "Pepe"}},
                {"item": {"id": "bonk", "symbol": "bonk", "name": "Bonk"}},
            ]},
            "/coins/pepe": {"market_data": {
                "price_change_percentage_24h": 12.3456,
                "total_volume": {"usd": 1500000},
                "market_cap": {"usd": 4000000000},
            }},
        })
        tokens = fetch_coingecko_trending(limit=1)
        assert len(tokens) == 1
        t = tokens[0]
        assert (t.symbol, t.name, t.chain) == ("PEPE", "Pepe", "multi-chain")
        assert t.price_change_24h == "12.35%"
        assert t.volume_24h == "$1,500,000"
        assert t.market_cap == "$4,000,000,000"


class TestUnexpectedPayloads:
    @patch("agent_plugins.core.market._cg_get")
    def test_global_not_an_object(self, mock_get):
        mock_get.return_value = ["not", "an", "object"]
        res = get_global_data()
        assert res.type == "error"
        assert res.text.startswith("Error fetching global data: unexpected response from CoinGecko")

    @patch("agent_plugins.core.market._cg_get")
    def test_exchanges_not_an_array(self, mock_get):
        mock_get.return_value = {"error": "rate limited"}
        res = get_exchanges()
        assert res.type == "error"
        assert "unexpected response from CoinGecko" in res.text

    @patch("agent_plugins.core.market._cg_get")
    def test_price_string_body(self, mock_get):
        mock_get.return_value = "Throttled"
        res = get_simple_price(["bitcoin"])
        assert res.type == "error"
        assert "unexpected response" in res.text
