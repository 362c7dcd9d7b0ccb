# agent_plugins/plugins.py
# Purpose: The two plugins and their actions, as the agent sees them.
# Static table: name -> handler, parameter model, description, similes, example prompts.
from typing import Any, Dict, Optional

from agent_plugins.core.market import get_exchanges, get_global_data, get_simple_price
from agent_plugins.core.pools import get_trending_tokens_on_chain
from agent_plugins.core.search import get_page_content, search_google
from agent_plugins.core.security import check_token_security
from agent_plugins.core.trending import find_trending_tokens
from pydantic import ValidationError

from agent_plugins.models import (
    ActionResponse,
    NoParams,
    PageParams,
    PoolsParams,
    PriceParams,
    SearchParams,
    SecurityParams,
    TrendingParams,
)
from agent_plugins.utils.respond import Callback, emit

ACTIONS: Dict[str, Dict[str, Any]] = {
    "GET_GLOBAL_TRENDING_TOKENS": {
        "handler": find_trending_tokens,
        "params": TrendingParams,
        "description": "Find globally trending tokens across all chains using CoinGecko and DexScreener",
        "similes": ["GLOBAL_TRENDING_TOKENS", "WORLDWIDE_HOT_TOKENS", "ALL_CHAINS_TRENDING",
                    "CROSS_CHAIN_TRENDING", "GLOBAL_TOKEN_TRENDS"],
        "examples": ["Show me trending tokens on Ethereum"],
    },
    "GET_GLOBAL_DATA": {
        "handler": get_global_data,
        "params": NoParams,
        "description": "Get global cryptocurrency market data",
        "similes": ["GLOBAL_CRYPTO_DATA", "MARKET_OVERVIEW", "CRYPTO_STATS"],
        "examples": ["Show me global crypto market data"],
    },
    "GET_EXCHANGES": {
        "handler": get_exchanges,
        "params": NoParams,
        "description": "Get data for all supported cryptocurrency exchanges",
        "similes": ["LIST_EXCHANGES", "EXCHANGE_DATA", "TRADING_PLATFORMS"],
        "examples": ["List all cryptocurrency exchanges"],
    },
    "GET_SIMPLE_PRICE": {
        "handler": get_simple_price,
        "params": PriceParams,
        "description": "Get current prices for specified cryptocurrencies",
        "similes": ["CHECK_PRICES", "COIN_PRICES", "TOKEN_PRICES"],
        "examples": ["What's the price of Bitcoin and Ethereum in USD?"],
    },
    "CHECK_TOKEN_SECURITY": {
        "handler": check_token_security,
        "params": SecurityParams,
        "description": "Check token security-safety information using GoPlus Security API",
        "similes": ["TOKEN_SECURITY", "SECURITY_CHECK", "VERIFY_TOKEN", "TOKEN_AUDIT",
                    "CHECK_TOKEN_SAFETY"],
        "examples": ["Check security for token 0x1234... on Ethereum"],
    },
    "GET_NETWORK_TRENDING_TOKENS": {
        "handler": get_trending_tokens_on_chain,
        "params": PoolsParams,
        "description": "Find trending tokens and their pools on a specific blockchain network",
        "similes": ["NETWORK_TOKEN_TRENDS", "CHAIN_SPECIFIC_TOKENS", "BLOCKCHAIN_HOT_TOKENS",
                    "NETWORK_POPULAR_TOKENS", "CHAIN_TRENDING_TOKENS", "GET_CHAIN_TOKEN_TRENDING"],
        "examples": ["Show me trending tokens on Ethereum"],
    },
    "SEARCH_GOOGLE": {
        "handler": search_google,
        "params": SearchParams,
        "description": "Search Google for specific information using custom search API",
        "similes": ["GOOGLE_SEARCH", "WEB_SEARCH", "SEARCH_WEB", "FIND_ONLINE", "GOOGLE_QUERY"],
        "examples": ["Search for latest crypto market trends"],
    },
    "GET_PAGE_CONTENT": {
        "handler": get_page_content,
        "params": PageParams,
        "description": "Extract readable content from a webpage URL",
        "similes": ["READ_WEBPAGE", "FETCH_PAGE", "EXTRACT_CONTENT", "SCRAPE_PAGE", "URL_CONTENT"],
        "examples": ["Get content from https://example.com/crypto-news"],
    },
}

PLUGINS = [
    {
        "name": "token-trending",
        "description": "Plugin for finding trending tokens and pools across different chains",
        "actions": ["GET_GLOBAL_TRENDING_TOKENS", "GET_GLOBAL_DATA", "GET_EXCHANGES",
                    "GET_SIMPLE_PRICE", "CHECK_TOKEN_SECURITY", "GET_NETWORK_TRENDING_TOKENS"],
    },
    {
        "name": "google-search",
        "description": "Plugin for searching Google and extracting webpage content",
        "actions": ["SEARCH_GOOGLE", "GET_PAGE_CONTENT"],
    },
]


def resolve_action(name: str) -> str:
    """Action name or simile (case-insensitive) -> canonical action name."""
    key = (name or "").strip().upper()
    if key in ACTIONS:
        return key
    for action, spec in ACTIONS.items():
        if key in spec["similes"]:
            return action
    raise ValueError(f"Unknown action: {name}")


def _field(err: dict) -> str:
    # loc is (field,) or (field, union member, ...)
    loc = err.get("loc") or ()
    return str(loc[0]) if loc else "params"


def run_action(name: str, params: Optional[Dict[str, Any]] = None,
               callback: Optional[Callback] = None) -> ActionResponse:
    """
    Invoke an action by name. Params are checked against the action's model:
    unknown keys are ignored, missing ones default to None, and a value of the
    wrong type yields an error response without calling the handler.
    """
    action = resolve_action(name)
    spec = ACTIONS[action]
    try:
        kwargs = spec["params"].model_validate(params or {}).model_dump()
    except ValidationError as e:
        problems = "; ".join(f"{_field(err)}: {err['msg']}" for err in e.errors())
        print(f"[PLUGINS] {action} bad params -> {problems}")
        return emit(callback, f"❌ Invalid parameters for {action}: {problems}", "error")
    print(f"[PLUGINS] run {action} params={kwargs}")
    return spec["handler"](**kwargs, callback=callback)


def manifest() -> list:
    """JSON-safe view of PLUGINS (no handlers)."""
    return [
        {
            "name": plug["name"],
            "description": plug["description"],
            "actions": [
                {
                    "name": a,
                    "description": ACTIONS[a]["description"],
                    "similes": ACTIONS[a]["similes"],
                    "params": list(ACTIONS[a]["params"].model_fields),
                    "examples": ACTIONS[a]["examples"],
                }
                for a in plug["actions"]
            ],
        }
        for plug in PLUGINS
    ]
