# agent_plugins/core/security.py
# Purpose: CHECK_TOKEN_SECURITY. GoPlus token_security lookup -> risk assessment -> text.
from __future__ import annotations

from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError

from agent_plugins.chains import GOPLUS_API_BASE, resolve_goplus_chain_id
from agent_plugins.core.score import assess
from agent_plugins.models import ActionResponse, TokenSecurityFacts
from agent_plugins.utils.addr import normalize_token_address
from agent_plugins.utils.formatting import format_security_response
from agent_plugins.utils.ratelimit import expect_shape, http_get_json
from agent_plugins.utils.respond import Callback, emit

NOT_FOUND_TEXT = "❌ Could not fetch security information for this token."


def _dbg(msg: str) -> None:
    print(f"[SECURITY] {msg}")


def fetch_token_security(chain_id: str, token_address: str) -> Optional[TokenSecurityFacts]:
    """
    GET /token_security/{chain_id}?contract_addresses=<addr>.
    GoPlus keys the result by lower-cased address. Returns None when the
    token is unknown to GoPlus; raises on transport / HTTP errors and
    ValueError on a payload that is not the expected JSON object.
    """
    url = f"{GOPLUS_API_BASE}/token_security/{chain_id}"
    data = http_get_json("goplus", url, {"contract_addresses": token_address})
    data = expect_shape(data, dict, "GoPlus")
    result = expect_shape(data.get("result") or {}, dict, "GoPlus")
    raw = result.get(token_address.lower())
    if raw is None:
        # Solana/Tron ids are case-sensitive; GoPlus echoes them verbatim
        raw = result.get(token_address)
    if not raw:
        _dbg(f"no record for {token_address} on chain {chain_id} (code={data.get('code')})")
        return None
    return TokenSecurityFacts.model_validate(raw)


def check_token_security(chain_id: Any, token_address: str,
                         callback: Optional[Callback] = None) -> ActionResponse:
    _dbg(f"check start chain={chain_id} addr={token_address}")
    emit(callback, "🔒 Analyzing token security...", "processing")

    # 1) Params
    try:
        cid = resolve_goplus_chain_id(chain_id)
        token = normalize_token_address(cid, token_address)
        _dbg(f"params OK chain={cid} token={token}")
    except ValueError as e:
        _dbg(f"params FAIL: {e}")
        return emit(callback, str(e), "error")

    # 2) Fetch
    try:
        facts = fetch_token_security(cid, token)
    except ValidationError as e:
        # must precede ValueError (pydantic's ValidationError subclasses it)
        _dbg(f"malformed GoPlus record: {e}")
        return emit(callback, "Error checking token security: malformed response from GoPlus", "error")
    except (requests.RequestException, ValueError) as e:
        _dbg(f"fetch FAIL: {e}")
        return emit(callback, f"Error checking token security: {e}", "error")

    if facts is None:
        return emit(callback, NOT_FOUND_TEXT, "error")

    # 3) Score
    assessment = assess(facts)
    _dbg(f"score={assessment.score} tier={assessment.tier.value} reasons={list(assessment.reasons)}")

    data: Dict[str, Any] = {
        "chain_id": cid,
        "address": token,
        "security": facts.model_dump(),
        "score": assessment.score,
        "risk_tier": assessment.tier.value,
        "reasons": list(assessment.reasons),
        "recommendation": assessment.recommendation,
    }
    return emit(callback, format_security_response(facts, assessment), "success", data)
