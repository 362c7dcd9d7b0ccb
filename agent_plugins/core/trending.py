# agent_plugins/core/trending.py
# Purpose: GET_GLOBAL_TRENDING_TOKENS. CoinGecko trending + DexScreener latest boosts.
from __future__ import annotations

from typing import List, Optional

import requests

from agent_plugins.core.market import fetch_coingecko_trending
from agent_plugins.models import ActionResponse, TrendingToken
from agent_plugins.utils.formatting import format_trending_tokens
from agent_plugins.utils.ratelimit import expect_shape, http_get_json
from agent_plugins.utils.respond import Callback, emit

DEXSCREENER_BOOSTS_URL = "https://api.dexscreener.com/token-boosts/latest/v1"
SOURCES = ("coingecko", "dexscreener", "all")
DEFAULT_LIMIT = 5


def _dbg(msg: str) -> None:
    print(f"[TRENDING] {msg}")


def fetch_dexscreener_trending() -> List[TrendingToken]:
    """Latest boosted tokens. Best-effort: any failure -> []."""
    try:
        boosts = expect_shape(http_get_json("dexscreener", DEXSCREENER_BOOSTS_URL) or [], list, "DexScreener")
        out = []
        for b in boosts:
            if not isinstance(b, dict):
                continue
            out.append(TrendingToken(
                chain=b.get("chainId") or "unknown",
                tokenAddress=b.get("tokenAddress"),
                description=b.get("description"),
                boost_amount=b.get("amount"),
                links=[l for l in (b.get("links") or []) if isinstance(l, dict)],
            ))
        _dbg(f"dexscreener boosts={len(out)}")
        return out
    except (requests.RequestException, ValueError) as e:
        # ValueError covers bad JSON, a non-array body and pydantic ValidationError
        _dbg(f"dexscreener FAIL: {e}")
        return []


def find_trending_tokens(chain: Optional[str] = None, limit: Optional[int] = DEFAULT_LIMIT,
                         source: Optional[str] = "all",
                         callback: Optional[Callback] = None) -> ActionResponse:
    src = (source or "all").strip().lower()
    if src not in SOURCES:
        return emit(callback, f"Error finding trending tokens: unknown source '{source}' "
                              f"(use {', '.join(SOURCES)})", "error")
    try:
        n = int(limit) if limit else DEFAULT_LIMIT
    except (TypeError, ValueError):
        return emit(callback, f"Error finding trending tokens: invalid limit '{limit}'", "error")
    if n < 1:
        return emit(callback, "Error finding trending tokens: limit must be positive", "error")

    _dbg(f"start chain={chain} limit={n} source={src}")
    tokens: List[TrendingToken] = []
    try:
        if src in ("all", "coingecko"):
            tokens.extend(fetch_coingecko_trending(n))

        if src in ("all", "dexscreener"):
            dex = fetch_dexscreener_trending()
            if chain:
                dex = [t for t in dex if t.chain.lower() == chain.lower()]
            tokens.extend(dex[:n])
    except (requests.RequestException, ValueError) as e:
        _dbg(f"FAIL: {e}")
        return emit(callback, f"Error finding trending tokens: {e}", "error")

    _dbg(f"done tokens={len(tokens)}")
    return emit(callback, format_trending_tokens(tokens, chain), "success",
                [t.model_dump() for t in tokens])
