# agent_plugins/utils/formatting.py
# Purpose: Turn upstream JSON (GoPlus, CoinGecko, DexScreener, DefiLlama, Google)
# into the plain text the agent relays to the user.
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from agent_plugins.core.score import RiskAssessment, RiskTier
from agent_plugins.models import SearchResult, TokenSecurityFacts, TrendingToken
from agent_plugins.utils.addr import shorten_address

TIER_EMOJI = {
    RiskTier.CRITICAL: "🚨",
    RiskTier.HIGH: "⚠️",
    RiskTier.MEDIUM: "⚡",
    RiskTier.LOW: "📊",
    RiskTier.SAFE: "✅",
}

RECOMMENDATION_EMOJI = {
    RiskTier.CRITICAL: "🚫",
    RiskTier.HIGH: "⚠️",
    RiskTier.MEDIUM: "⚡",
    RiskTier.LOW: "📊",
    RiskTier.SAFE: "✅",
}

IL_RISK_EMOJI = {
    "no": "✅",
    "low": "📊",
    "medium": "⚡",
    "high": "⚠️",
    "very high": "🚨",
}

PAGE_CONTENT_LIMIT = 2000


# ---------- primitives ----------

def format_bool(value: Optional[str], is_risk: bool = False) -> str:
    yes = value == "1"
    if is_risk:
        return "🚨 YES" if yes else "✅ No"
    return "✅ Yes" if yes else "❌ No"


def format_number(value: Any, max_decimals: int = 2, min_decimals: int = 0) -> str:
    """1234567.891 -> '1,234,567.89'; trailing zeros dropped down to min_decimals; junk -> 'N/A'."""
    try:
        num = float(value)
    except (TypeError, ValueError):
        return "N/A"
    if num != num:  # NaN
        return "N/A"
    s = f"{num:,.{max_decimals}f}"
    if "." in s:
        whole, frac = s.split(".")
        frac = frac.rstrip("0").ljust(min_decimals, "0")
        s = f"{whole}.{frac}" if frac else whole
    return s


def format_pct(value: Optional[float]) -> str:
    if not value:
        return "N/A"
    return f"{value:.2f}%"


def tier_emoji(tier) -> str:
    try:
        return TIER_EMOJI[RiskTier(tier)]
    except ValueError:
        return "❓"


def il_risk_emoji(risk: Optional[str]) -> str:
    return IL_RISK_EMOJI.get((risk or "").lower(), "❓")


# ---------- token security ----------

def format_dex_info(info: TokenSecurityFacts) -> str:
    if info.is_in_dex != "1" or not info.dex:
        return "• Not listed on any DEX"
    return "\n".join(
        f"• {d.name} ({d.liquidity_type})\n"
        f"  Liquidity: ${format_number(d.liquidity)}\n"
        f"  Pair: {shorten_address(d.pair)}"
        for d in info.dex
    )


def format_holder_info(info: TokenSecurityFacts, top: int = 5) -> str:
    head = f"• Total Holders: {info.holder_count or 'N/A'}\n"
    if not info.holders:
        return head
    lines = []
    for h in info.holders[:top]:
        tag = f" ({h.tag})" if h.tag else ""
        lines.append(f"• {shorten_address(h.address)}{tag}: {format_number(h.percent)}%")
    return head + f"Top {top} Holders:\n" + "\n".join(lines)


def format_recommendation(assessment: RiskAssessment) -> str:
    emoji = RECOMMENDATION_EMOJI.get(assessment.tier, "❓")
    return f"{emoji} *RECOMMENDATION:* {assessment.recommendation}"


def format_security_response(info: TokenSecurityFacts, assessment: RiskAssessment) -> str:
    tier = assessment.tier
    return (
        f"{tier_emoji(tier)} *Token Security Analysis*\n\n"
        f"*Token Information:*\n"
        f"• Name: {info.token_name or 'N/A'} ({info.token_symbol or 'N/A'})\n"
        f"• Total Supply: {format_number(info.total_supply)}\n"
        f"• Creator: {shorten_address(info.creator_address)}\n"
        f"• Creator Balance: {format_number(info.creator_balance)} ({format_number(info.creator_percent)}%)\n\n"
        f"*Contract Security:*\n"
        f"• Open Source: {format_bool(info.is_open_source)}\n"
        f"• Proxy Contract: {format_bool(info.is_proxy)}\n"
        f"• Mintable: {format_bool(info.is_mintable)}\n\n"
        f"*Risk Factors:*\n"
        f"• Honeypot Risk: {format_bool(info.is_honeypot, True)}\n"
        f"• Similar Honeypots: {format_bool(info.honeypot_with_same_creator, True)}\n"
        f"• Hidden Owner: {format_bool(info.hidden_owner, True)}\n"
        f"• Can Take Back Ownership: {format_bool(info.can_take_back_ownership, True)}\n"
        f"• Self Destruct: {format_bool(info.selfdestruct, True)}\n\n"
        f"*Trading Information:*\n"
        f"• Buy Tax: {info.buy_tax if info.buy_tax is not None else 'N/A'}%\n"
        f"• Sell Tax: {info.sell_tax if info.sell_tax is not None else 'N/A'}%\n"
        f"• Transfer Pausable: {format_bool(info.transfer_pausable)}\n"
        f"• Anti-Whale: {format_bool(info.is_anti_whale)}\n"
        f"• Trading Cooldown: {format_bool(info.trading_cooldown)}\n\n"
        f"*DEX Presence:*\n"
        f"{format_dex_info(info)}\n\n"
        f"*Holder Distribution:*\n"
        f"{format_holder_info(info)}\n\n"
        f"*Overall Risk Level: {tier.value}* (score {assessment.score})\n"
        f"{format_recommendation(assessment)}"
    )


# ---------- market data ----------

def format_trending_tokens(tokens: Iterable[TrendingToken], chain: Optional[str] = None) -> str:
    header = f"📈 Trending tokens{f' on {chain}' if chain else ''}:\n\n"
    blocks = []
    for t in tokens:
        if t.symbol and t.price_change_24h:
            # CoinGecko style
            blocks.append(
                f"{t.symbol} ({t.name})\n"
                f"Price Change: {t.price_change_24h}\n"
                f"Volume: {t.volume_24h}\n"
                f"Market Cap: {t.market_cap}"
            )
        else:
            # DexScreener style
            details = (
                f"Chain: {t.chain}\n"
                f"Address: {t.tokenAddress}\n"
                f"Boost Amount: {format_number(t.boost_amount)}\n"
            )
            if t.description:
                details += f"Description: {t.description}\n"
            urls = [l.get("url") for l in t.links if l.get("url")]
            if urls:
                details += f"Links: {', '.join(urls)}\n"
            blocks.append(details)
    return header + "\n\n".join(blocks)


def format_global_data(data: Dict[str, Any]) -> str:
    mcap = (data.get("total_market_cap") or {}).get("usd")
    vol = (data.get("total_volume") or {}).get("usd")
    btc = (data.get("market_cap_percentage") or {}).get("btc")
    change = data.get("market_cap_change_percentage_24h_usd")
    return (
        "🌍 Global Cryptocurrency Market Data:\n\n"
        f"Active Cryptocurrencies: {format_number(data.get('active_cryptocurrencies'), 0)}\n"
        f"Active Markets: {format_number(data.get('markets'), 0)}\n"
        f"Total Market Cap (USD): ${format_number(mcap)}\n"
        f"24h Total Volume (USD): ${format_number(vol)}\n"
        f"BTC Dominance: {format_number(btc)}%\n"
        f"24h Market Cap Change: {format_number(change)}%"
    )


def format_exchanges(exchanges: List[Dict[str, Any]], top: int = 10) -> str:
    blocks = []
    for ex in exchanges[:top]:
        country = f" ({ex['country']})" if ex.get("country") else ""
        vol = ex.get("trade_volume_24h_btc")
        blocks.append(
            f"{ex.get('name')}{country}\n"
            f"Trust Score: {ex.get('trust_score') or 'N/A'}\n"
            f"24h Volume (BTC): {format_number(vol) if vol is not None else 'N/A'}"
        )
    return "📊 Top Cryptocurrency Exchanges:\n\n" + "\n\n".join(blocks)


def format_prices(prices: Dict[str, Dict[str, float]]) -> str:
    blocks = []
    for coin, quotes in prices.items():
        lines = [f"{coin.upper()}:"]
        for currency, price in quotes.items():
            lines.append(f"{currency.upper()}: ${format_number(price, 8, 2)}")
        blocks.append("\n".join(lines))
    return "💰 Current Price:\n\n" + "\n\n".join(blocks)


def format_pools(pools: List[Dict[str, Any]], top: int = 10) -> str:
    if not pools:
        return "❌ No pool data available"

    blocks = []
    for i, pool in enumerate(pools[:top], start=1):
        il = pool.get("ilRisk")
        prediction = ""
        preds = pool.get("predictions") or {}
        if preds.get("predictedClass"):
            prob = preds.get("predictedProbability")
            conf = f"{prob:.1f}" if isinstance(prob, (int, float)) else "N/A"
            prediction = f"\n   • Prediction: {preds['predictedClass']} ({conf}% confidence)"
        note = f"\n   • Note: {pool['poolMeta']}" if pool.get("poolMeta") else ""
        blocks.append(
            f"{i}. {pool.get('project')} ({pool.get('symbol')})\n"
            f"   • Chain: {pool.get('chain')}\n"
            f"   • TVL: ${format_number(pool.get('tvlUsd') or 0)}\n"
            f"   • Total APY: {format_pct(pool.get('apy'))}\n"
            f"   • Base APY: {format_pct(pool.get('apyBase'))}\n"
            f"   • Reward APY: {format_pct(pool.get('apyReward'))}\n"
            f"   • IL Risk: {il_risk_emoji(il)} {il}\n"
            f"   • Exposure: {pool.get('exposure') or 'Unknown'}"
            f"{prediction}{note}"
        )
    return "🏊 Top Pools by TVL:\n\n" + "\n\n".join(blocks)


# ---------- search ----------

def format_search_results(results: List[SearchResult]) -> str:
    if not results:
        return "No results found."
    return "🔍 Search Results:\n\n" + "\n\n".join(
        f"{i}. {r.title}\n   {r.snippet}\n   Link: {r.formattedUrl}"
        for i, r in enumerate(results, start=1)
    )


def format_page_content(title: str, content: str, limit: int = PAGE_CONTENT_LIMIT) -> str:
    body = content[:limit] + ("..." if len(content) > limit else "")
    return f"📄 {title or 'Untitled page'}\n\n📄 Content:\n{body}"
