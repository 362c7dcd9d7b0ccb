# agent_plugins/core/score.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from agent_plugins.models import TokenSecurityFacts

TAX_THRESHOLD_PCT = 10.0


class RiskTier(str, Enum):
    SAFE = "SAFE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _TIER_ORDER.index(self)


_TIER_ORDER = [RiskTier.SAFE, RiskTier.LOW, RiskTier.MEDIUM, RiskTier.HIGH, RiskTier.CRITICAL]

# Highest first; first match wins. Boundaries belong to the upper tier.
TIER_THRESHOLDS: Tuple[Tuple[int, RiskTier], ...] = (
    (100, RiskTier.CRITICAL),
    (70, RiskTier.HIGH),
    (40, RiskTier.MEDIUM),
    (20, RiskTier.LOW),
)

# (condition name, GoPlus field, weight). A flag triggers when the field is "1".
FLAG_WEIGHTS: Tuple[Tuple[str, str, int], ...] = (
    ("honeypot", "is_honeypot", 100),
    ("honeypot_same_creator", "honeypot_with_same_creator", 100),
    ("hidden_owner", "hidden_owner", 90),
    ("selfdestruct", "selfdestruct", 80),
    ("can_take_back_ownership", "can_take_back_ownership", 70),
)
HIGH_TAX_WEIGHT = 70
CLOSED_SOURCE_WEIGHT = 60
LATE_FLAG_WEIGHTS: Tuple[Tuple[str, str, int], ...] = (
    ("mintable", "is_mintable", 40),
    ("trading_cooldown", "trading_cooldown", 30),
    ("transfer_pausable", "transfer_pausable", 30),
    ("proxy", "is_proxy", 20),
)

RECOMMENDATIONS = {
    RiskTier.CRITICAL: "Do not interact with this token. Multiple critical security risks detected.",
    RiskTier.HIGH: "Extreme caution advised. High-risk security issues present.",
    RiskTier.MEDIUM: "Proceed with caution. Some security concerns identified.",
    RiskTier.LOW: "Generally safe, but always conduct your own research.",
    RiskTier.SAFE: "Token appears safe based on security analysis. Verify independently before trading.",
}


@dataclass(frozen=True)
class RiskAssessment:
    score: int
    tier: RiskTier
    recommendation: str
    reasons: Tuple[str, ...] = field(default_factory=tuple)


def _parse_tax(raw) -> Optional[float]:
    # Unparseable taxes come back as None and never count as "high".
    # TODO: decide whether an unreadable tax should count against the token (fails open today).
    if raw is None:
        return None
    try:
        return float(str(raw).strip())
    except ValueError:
        return None


def _is_high_tax(raw) -> bool:
    pct = _parse_tax(raw)
    return pct is not None and pct > TAX_THRESHOLD_PCT


def _triggered(facts: TokenSecurityFacts) -> Tuple[Tuple[str, int], ...]:
    hits = []

    # Critical / ownership
    for reason, fname, weight in FLAG_WEIGHTS:
        if facts.flag(fname):
            hits.append((reason, weight))

    # Taxes
    if _is_high_tax(facts.buy_tax) or _is_high_tax(facts.sell_tax):
        hits.append(("high_tax", HIGH_TAX_WEIGHT))

    # Source (explicit "0" only; an absent field is not evidence of closed source)
    if facts.is_open_source == "0":
        hits.append(("closed_source", CLOSED_SOURCE_WEIGHT))

    # Medium
    for reason, fname, weight in LATE_FLAG_WEIGHTS:
        if facts.flag(fname):
            hits.append((reason, weight))

    return tuple(hits)


def compute_risk_score(facts: TokenSecurityFacts) -> int:
    """Additive weighted sum of triggered conditions. No cap."""
    return sum(weight for _, weight in _triggered(facts))


def classify(score: int) -> RiskTier:
    for threshold, tier in TIER_THRESHOLDS:
        if score >= threshold:
            return tier
    return RiskTier.SAFE


def recommend(tier: RiskTier) -> str:
    return RECOMMENDATIONS[RiskTier(tier)]


def assess(facts: TokenSecurityFacts) -> RiskAssessment:
    hits = _triggered(facts)
    score = sum(weight for _, weight in hits)
    tier = classify(score)
    return RiskAssessment(
        score=score,
        tier=tier,
        recommendation=recommend(tier),
        reasons=tuple(reason for reason, _ in hits),
    )
