# agent_plugins/core/market.py
# Purpose: CoinGecko-backed actions: GET_GLOBAL_DATA, GET_EXCHANGES, GET_SIMPLE_PRICE,
# plus the CoinGecko half of GET_GLOBAL_TRENDING_TOKENS.
from __future__ import annotations

import os
from typing import Any, Dict, Iterable, List, Optional

import requests

from agent_plugins.models import ActionResponse, TrendingToken
from agent_plugins.utils.formatting import format_exchanges, format_global_data, format_number, format_prices
from agent_plugins.utils.ratelimit import expect_shape, http_get_json
from agent_plugins.utils.respond import Callback, emit

COINGECKO_API_BASE = "https://api.coingecko.com/api/v3"


def _dbg(msg: str) -> None:
    print(f"[MARKET] {msg}")


def _cg_get(path: str, params: Optional[dict] = None):
    headers = {}
    key = os.getenv("COINGECKO_API_KEY", "").strip()
    if key:
        headers["x-cg-demo-api-key"] = key
    return http_get_json("coingecko", f"{COINGECKO_API_BASE}{path}", params, headers=headers)


# ---------- fetchers ----------

def fetch_coingecko_trending(limit: int = 5) -> List[TrendingToken]:
    """Trending search coins, each enriched with /coins/{id} market data."""
    trending = expect_shape(_cg_get("/search/trending"), dict, "CoinGecko")
    coins = [c for c in (trending.get("coins") or []) if isinstance(c, dict)]
    coins = coins[:max(0, int(limit))]
    _dbg(f"trending coins={len(coins)} (limit={limit})")

    out: List[TrendingToken] = []
    for c in coins:
        item = c.get("item") or {}
        details = _cg_get(f"/coins/{item.get('id')}", {
            "localization": "false", "tickers": "false", "community_data": "false",
            "developer_data": "false",
        })
        md = details.get("market_data") if isinstance(details, dict) else None
        md = md if isinstance(md, dict) else {}
        change = md.get("price_change_percentage_24h")
        out.append(TrendingToken(
            chain="multi-chain",
            symbol=(item.get("symbol") or "").upper(),
            name=item.get("name"),
            price_change_24h=f"{change:.2f}%" if isinstance(change, (int, float)) else "N/A",
            volume_24h=f"${format_number((md.get('total_volume') or {}).get('usd') or 0)}",
            market_cap=f"${format_number((md.get('market_cap') or {}).get('usd') or 0)}",
        ))
    return out


def fetch_global_data() -> Dict[str, Any]:
    data = expect_shape(_cg_get("/global"), dict, "CoinGecko").get("data") or {}
    return expect_shape(data, dict, "CoinGecko")


def fetch_exchanges() -> List[Dict[str, Any]]:
    rows = expect_shape(_cg_get("/exchanges"), list, "CoinGecko")
    return [r for r in rows if isinstance(r, dict)]


def fetch_simple_price(coins: Iterable[str], vs_currencies: Iterable[str] = ("usd",)) -> Dict[str, Dict[str, float]]:
    prices = expect_shape(_cg_get("/simple/price", {
        "ids": ",".join(coins),
        "vs_currencies": ",".join(vs_currencies),
    }), dict, "CoinGecko")
    return {coin: quotes for coin, quotes in prices.items() if isinstance(quotes, dict)}


# ---------- actions ----------

def get_global_data(callback: Optional[Callback] = None) -> ActionResponse:
    emit(callback, "📊 Fetching global cryptocurrency data...", "processing")
    try:
        data = fetch_global_data()
        if not data:
            return emit(callback, "Error fetching global data: empty response", "error")
        _dbg(f"global OK active={data.get('active_cryptocurrencies')}")
        return emit(callback, format_global_data(data), "success", data)
    except (requests.RequestException, ValueError) as e:
        _dbg(f"global FAIL: {e}")
        return emit(callback, f"Error fetching global data: {e}", "error")


def get_exchanges(callback: Optional[Callback] = None) -> ActionResponse:
    emit(callback, "🏢 Fetching exchange data...", "processing")
    try:
        exchanges = fetch_exchanges()
        _dbg(f"exchanges OK count={len(exchanges)}")
        return emit(callback, format_exchanges(exchanges), "success", exchanges)
    except (requests.RequestException, ValueError) as e:
        _dbg(f"exchanges FAIL: {e}")
        return emit(callback, f"Error fetching exchanges data: {e}", "error")


def _clean_ids(values) -> List[str]:
    # "bitcoin, ethereum" or ["Bitcoin", "ethereum"] -> ["bitcoin", "ethereum"]
    if isinstance(values, str):
        values = values.split(",")
    return [v.strip().lower() for v in (values or []) if v and v.strip()]


def get_simple_price(coins: Iterable[str], vs_currencies: Optional[Iterable[str]] = None,
                     callback: Optional[Callback] = None) -> ActionResponse:
    emit(callback, "💰 Fetching coin prices...", "processing")

    ids = _clean_ids(coins)
    currencies = _clean_ids(vs_currencies) or ["usd"]
    if not ids:
        return emit(callback, "Error fetching price data: no coin ids given", "error")

    try:
        prices = fetch_simple_price(ids, currencies)
        _dbg(f"price OK ids={ids} vs={currencies} -> {prices}")
        if not prices:
            return emit(callback, f"Error fetching price data: unknown coin ids {', '.join(ids)}", "error")
        return emit(callback, format_prices(prices), "success", prices)
    except (requests.RequestException, ValueError) as e:
        _dbg(f"price FAIL: {e}")
        return emit(callback, f"Error fetching price data: {e}", "error")
