# agent_plugins/models.py
from __future__ import annotations

from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class DexListing(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: Optional[str] = None
    liquidity_type: Optional[str] = None
    liquidity: Optional[str] = None
    pair: Optional[str] = None


class HolderInfo(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    address: Optional[str] = None
    tag: Optional[str] = None
    is_contract: Optional[int] = None
    balance: Optional[str] = None
    percent: Optional[str] = None
    is_locked: Optional[int] = None


class TokenSecurityFacts(BaseModel):
    """
    One GoPlus token_security record. Flags stay string-encoded exactly as the
    API sends them: "1" is true, anything else (including None) is false.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    # identity
    token_name: Optional[str] = None
    token_symbol: Optional[str] = None
    total_supply: Optional[str] = None

    # contract
    is_open_source: Optional[str] = None
    is_proxy: Optional[str] = None
    is_mintable: Optional[str] = None
    selfdestruct: Optional[str] = None
    creator_address: Optional[str] = None
    creator_balance: Optional[str] = None
    creator_percent: Optional[str] = None

    # ownership / honeypot
    hidden_owner: Optional[str] = None
    can_take_back_ownership: Optional[str] = None
    is_honeypot: Optional[str] = None
    honeypot_with_same_creator: Optional[str] = None

    # trading
    transfer_pausable: Optional[str] = None
    is_anti_whale: Optional[str] = None
    trading_cooldown: Optional[str] = None
    buy_tax: Optional[str] = None
    sell_tax: Optional[str] = None

    # dex / holders (display only)
    is_in_dex: Optional[str] = None
    dex: List[DexListing] = Field(default_factory=list)
    holder_count: Optional[str] = None
    holders: List[HolderInfo] = Field(default_factory=list)

    def flag(self, name: str) -> bool:
        return getattr(self, name, None) == "1"


class ActionResponse(BaseModel):
    """What an action hands back to the agent (and to its callback)."""
    text: str
    type: Literal["processing", "success", "error"] = "success"
    data: Any = None


class TrendingToken(BaseModel):
    chain: str
    symbol: Optional[str] = None
    name: Optional[str] = None
    price_change_24h: Optional[str] = None
    volume_24h: Optional[str] = None
    market_cap: Optional[str] = None
    tokenAddress: Optional[str] = None
    description: Optional[str] = None
    boost_amount: Optional[float] = None
    links: List[dict] = Field(default_factory=list)


class SearchResult(BaseModel):
    title: str = ""
    link: str = ""
    snippet: str = ""
    formattedUrl: str = ""


# ---------- action parameters ----------
# Numbers are not coerced into str fields: a JSON 123 for a query or address
# fails validation before any handler runs.

class _ActionParams(BaseModel):
    model_config = ConfigDict(extra="ignore")


class NoParams(_ActionParams):
    pass


class TrendingParams(_ActionParams):
    chain: Optional[str] = None
    limit: Optional[int] = None
    source: Optional[str] = None


class PriceParams(_ActionParams):
    coins: Optional[Union[str, List[str]]] = None
    vs_currencies: Optional[Union[str, List[str]]] = None


class SecurityParams(_ActionParams):
    # chain ids are numeric for EVM chains; 56 and "56" are the same chain
    chain_id: Optional[Union[str, int]] = None
    token_address: Optional[str] = None


class PoolsParams(_ActionParams):
    chain: Optional[str] = None


class SearchParams(_ActionParams):
    query: Optional[str] = None


class PageParams(_ActionParams):
    url: Optional[str] = None
