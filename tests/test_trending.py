"""Tests for GET_GLOBAL_TRENDING_TOKENS."""
from __future__ import annotations

from unittest.mock import patch

import requests

from agent_plugins.core.trending import fetch_dexscreener_trending, find_trending_tokens
from agent_plugins.models import TrendingToken

BOOSTS = [
    {"url": "https://dexscreener.com/solana/abc", "chainId": "solana", "tokenAddress": "AbC111",
     "amount": 500, "totalAmount": 500, "description": "a dog coin",
     "links": [{"type": "twitter", "url": "https://x.com/dog"}]},
    {"url": "https://dexscreener.com/base/0x1", "chainId": "base", "tokenAddress": "0x1",
     "amount": 10, "totalAmount": 20, "links": None},
    {"url": "https://dexscreener.com/solana/def", "chainId": "Solana", "tokenAddress": "DeF222",
     "amount": 30, "totalAmount": 30},
]


class TestDexScreener:
    @patch("agent_plugins.core.trending.http_get_json")
    def test_maps_boosts(self, mock_get):
        mock_get.return_value = BOOSTS
        tokens = fetch_dexscreener_trending()
        assert [t.tokenAddress for t in tokens] == ["AbC111", "0x1", "DeF222"]
        assert tokens[0].links == [{"type": "twitter", "url": "https://x.com/dog"}]
        assert tokens[1].links == []

    @patch("agent_plugins.core.trending.http_get_json")
    def test_failure_is_empty_list(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("down")
        assert fetch_dexscreener_trending() == []


class TestFindTrendingTokens:
    @patch("agent_plugins.core.trending.fetch_coingecko_trending")
    @patch("agent_plugins.core.trending.http_get_json")
    def test_dexscreener_filtered_by_chain(self, mock_get, mock_cg):
        mock_get.return_value = BOOSTS
        res = find_trending_tokens(chain="solana", limit=5, source="dexscreener")
        mock_cg.assert_not_called()
        assert res.type == "success"
        assert res.text.startswith("📈 Trending tokens on solana:")
        assert "Address: AbC111" in res.text
        assert "Address: DeF222" in res.text
        assert "Address: 0x1" not in res.text
        assert "Links: https://x.com/dog" in res.text
        assert "Description: a dog coin" in res.text

    @patch("agent_plugins.core.trending.fetch_coingecko_trending")
    @patch("agent_plugins.core.trending.http_get_json")
    def test_all_sources_respect_limit(self, mock_get, mock_cg):
        mock_get.return_value = BOOSTS
        mock_cg.return_value = [TrendingToken(chain="multi-chain", symbol="PEPE", name="Pepe",
                                              price_change_24h="5.00%", volume_24h="$1",
                                              market_cap="$2")]
        res = find_trending_tokens(limit=2)
        mock_cg.assert_called_once_with(2)
        assert "PEPE (Pepe)" in res.text
        assert "Price Change: 5.00%" in res.text
        assert len(res.data) == 3  # 1 coingecko + 2 dexscreener

    @patch("agent_plugins.core.trending.fetch_coingecko_trending")
    def test_coingecko_error(self, mock_cg):
        mock_cg.side_effect = requests.HTTPError("429 Too Many Requests")
        res = find_trending_tokens(source="coingecko")
        assert res.type == "error"
        assert res.text == "Error finding trending tokens: 429 Too Many Requests"

    def test_bad_source(self):
        res = find_trending_tokens(source="binance")
        assert res.type == "error"
        assert "unknown source" in res.text

    def test_bad_limit(self):
        assert find_trending_tokens(limit="many").type == "error"

    @patch("agent_plugins.core.trending.http_get_json")
    def test_object_body_is_empty_list(self, mock_get):
        mock_get.return_value = {"message": "not found"}
        assert fetch_dexscreener_trending() == []
