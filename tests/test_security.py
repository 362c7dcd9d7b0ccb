"""Tests for CHECK_TOKEN_SECURITY (GoPlus lookup + risk text)."""
from __future__ import annotations

from unittest.mock import patch

import requests

from agent_plugins.core.security import NOT_FOUND_TEXT, check_token_security, fetch_token_security

USDT = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
USDT_KEY = USDT.lower()


def _goplus_record(**overrides) -> dict:
    rec = {
        "token_name": "Tether USD",
        "token_symbol": "USDT",
        "total_supply": "39823829201.113",
        "is_open_source": "1",
        "is_proxy": "0",
        "is_mintable": "1",
        "creator_address": "0x36928500bc1dcd7af6a2b4008875cc336b927d57",
        "creator_balance": "0",
        "creator_percent": "0.000000",
        "is_honeypot": "0",
        "honeypot_with_same_creator": "0",
        "hidden_owner": "0",
        "can_take_back_ownership": "0",
        "selfdestruct": "0",
        "buy_tax": "0",
        "sell_tax": "0",
        "transfer_pausable": "1",
        "is_anti_whale": "0",
        "trading_cooldown": "0",
        "is_in_dex": "1",
        "dex": [{"name": "UniswapV2", "liquidity_type": "UniV2", "liquidity": "1234567.891",
                 "pair": "0x0d4a11d5eeaac28ec3f61d100daf4d40471f1852"}],
        "holder_count": "6000000",
        "holders": [
            {"address": "0xf977814e90da44bfa03b6295a0616a897441acec", "tag": "Binance",
             "is_contract": 0, "balance": "1", "percent": "0.0512", "is_locked": 0},
        ],
        "some_new_field": "ignored",
    }
    rec.update(overrides)
    return rec


def _payload(record, key=USDT_KEY) -> dict:
    return {"code": 1, "message": "OK", "result": {key: record} if record is not None else {}}


class TestFetchTokenSecurity:
    @patch("agent_plugins.core.security.http_get_json")
    def test_looks_up_lowercase_key(self, mock_get):
        mock_get.return_value = _payload(_goplus_record())

        facts = fetch_token_security("1", USDT)

        assert facts.token_symbol == "USDT"
        assert facts.dex[0].name == "UniswapV2"
        args = mock_get.call_args[0]
        assert args[0] == "goplus"
        assert args[1].endswith("/token_security/1")
        assert args[2] == {"contract_addresses": USDT}

    @patch("agent_plugins.core.security.http_get_json")
    def test_missing_record_returns_none(self, mock_get):
        mock_get.return_value = _payload(None)
        assert fetch_token_security("1", USDT) is None

    @patch("agent_plugins.core.security.http_get_json")
    def test_solana_key_kept_verbatim(self, mock_get):
        mint = "So11111111111111111111111111111111111111112"
        mock_get.return_value = _payload(_goplus_record(token_symbol="SOL"), key=mint)
        assert fetch_token_security("solana", mint).token_symbol == "SOL"


class TestCheckTokenSecurity:
    @patch("agent_plugins.core.security.http_get_json")
    def test_success_text_and_data(self, mock_get):
        mock_get.return_value = _payload(_goplus_record())
        seen = []

        res = check_token_security("1", USDT.lower(), callback=seen.append)

        assert res.type == "success"
        # mintable (40) + transfer pausable (30)
        assert res.data["score"] == 70
        assert res.data["risk_tier"] == "HIGH"
        assert res.data["reasons"] == ["mintable", "transfer_pausable"]
        assert res.data["address"] == USDT
        assert "*Overall Risk Level: HIGH*" in res.text
        assert "• Name: Tether USD (USDT)" in res.text
        assert "UniswapV2 (UniV2)" in res.text
        assert "Liquidity: $1,234,567.89" in res.text
        assert "(Binance)" in res.text
        assert [r.type for r in seen] == ["processing", "success"]

    @patch("agent_plugins.core.security.http_get_json")
    def test_chain_name_resolves(self, mock_get):
        mock_get.return_value = _payload(_goplus_record())
        res = check_token_security("Ethereum", USDT)
        assert res.type == "success"
        assert res.data["chain_id"] == "1"

    @patch("agent_plugins.core.security.http_get_json")
    def test_missing_chain_id(self, mock_get):
        res = check_token_security("missing", USDT)
        assert res.type == "error"
        assert "Chain ID is missing" in res.text
        mock_get.assert_not_called()

    @patch("agent_plugins.core.security.http_get_json")
    def test_bad_address_no_network(self, mock_get):
        res = check_token_security("1", "0x1234...")
        assert res.type == "error"
        assert "Ellipses" in res.text
        mock_get.assert_not_called()

    @patch("agent_plugins.core.security.http_get_json")
    def test_unknown_token(self, mock_get):
        mock_get.return_value = _payload(None)
        res = check_token_security("56", USDT)
        assert res.type == "error"
        assert res.text == NOT_FOUND_TEXT

    @patch("agent_plugins.core.security.http_get_json")
    def test_network_error_becomes_text(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("boom")
        res = check_token_security("1", USDT)
        assert res.type == "error"
        assert res.text == "Error checking token security: boom"

    @patch("agent_plugins.core.security.http_get_json")
    def test_malformed_record(self, mock_get):
        mock_get.return_value = _payload(_goplus_record(holders="not-a-list"))
        res = check_token_security("1", USDT)
        assert res.type == "error"
        assert "malformed response" in res.text

    @patch("agent_plugins.core.security.http_get_json")
    def test_honeypot_is_critical(self, mock_get):
        mock_get.return_value = _payload(_goplus_record(is_honeypot="1", buy_tax="abc"))
        res = check_token_security("1", USDT)
        assert res.data["risk_tier"] == "CRITICAL"
        assert "🚨 *Token Security Analysis*" in res.text
        assert "Do not interact" in res.text

    @patch("agent_plugins.core.security.http_get_json")
    def test_non_object_payload(self, mock_get):
        mock_get.return_value = ["oops"]
        res = check_token_security("1", USDT)
        assert res.type == "error"
        assert res.text.startswith("Error checking token security: unexpected response from GoPlus")

    @patch("agent_plugins.core.security.http_get_json")
    def test_result_not_an_object(self, mock_get):
        mock_get.return_value = {"code": 2, "result": "rate limit"}
        res = check_token_security("1", USDT)
        assert res.type == "error"
        assert "unexpected response from GoPlus" in res.text
