# agent_plugins/core/pools.py
# Purpose: GET_NETWORK_TRENDING_TOKENS. Top DefiLlama yield pools on one chain, by TVL.
from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from agent_plugins.chains import is_supported_pool_chain
from agent_plugins.models import ActionResponse
from agent_plugins.utils.formatting import format_pools
from agent_plugins.utils.ratelimit import expect_shape, http_get_json
from agent_plugins.utils.respond import Callback, emit

DEFILLAMA_YIELDS_URL = "https://yields.llama.fi/pools"
MAX_POOLS = 100
# the pools dump is large; DefiLlama answers slowly
POOLS_TIMEOUT = 65


def _dbg(msg: str) -> None:
    print(f"[POOLS] {msg}")


def _tvl(pool: Dict[str, Any]) -> float:
    v = pool.get("tvlUsd")
    return float(v) if isinstance(v, (int, float)) else 0.0


def fetch_top_pools_by_tvl(chain: str, limit: int = MAX_POOLS) -> List[Dict[str, Any]]:
    """Pools whose `chain` equals `chain` exactly, highest tvlUsd first."""
    payload = expect_shape(http_get_json("defillama", DEFILLAMA_YIELDS_URL, timeout=POOLS_TIMEOUT),
                           dict, "DefiLlama")
    rows = expect_shape(payload.get("data") or [], list, "DefiLlama")
    pools = [p for p in rows if isinstance(p, dict) and p.get("chain") == chain]
    pools.sort(key=_tvl, reverse=True)
    _dbg(f"chain={chain} matched={len(pools)} keep={min(len(pools), limit)}")
    return pools[:limit]


def get_trending_tokens_on_chain(chain: Optional[str],
                                 callback: Optional[Callback] = None) -> ActionResponse:
    emit(callback, "🆕 Fetching trending tokens on network...", "processing")

    name = (chain or "").strip()
    if not is_supported_pool_chain(name):
        _dbg(f"unsupported chain: {chain!r}")
        return emit(callback, f"❌ Unsupported chain: {chain}. Please choose from the supported chains list.",
                    "error")

    try:
        pools = fetch_top_pools_by_tvl(name)
    except (requests.RequestException, ValueError) as e:
        _dbg(f"FAIL: {e}")
        return emit(callback, f"Error fetching trending tokens: {e}", "error")

    if not pools:
        return emit(callback, f"No trending tokens found for {name}", "success", [])
    return emit(callback, format_pools(pools), "success", pools)
