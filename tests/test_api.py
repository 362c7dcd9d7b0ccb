from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

import api
from agent_plugins.models import ActionResponse


@pytest.fixture
def client():
    return TestClient(api.app)


def _ok(text="ok", data=None):
    return ActionResponse(text=text, type="success", data=data)


class TestRoutes:
    def test_health(self, client):
        assert client.get("/api/health").json() == {"ok": True}

    def test_plugins(self, client):
        body = client.get("/api/plugins").json()
        assert [p["name"] for p in body["plugins"]] == ["token-trending", "google-search"]

    @patch("api.check_token_security")
    def test_security_defaults_to_ethereum(self, mock_check, client):
        mock_check.return_value = _ok("report", {"score": 0})
        r = client.get("/api/security/0xabc")
        assert r.status_code == 200
        assert r.json() == {"text": "report", "type": "success", "data": {"score": 0}}
        mock_check.assert_called_once_with("1", "0xabc")

    @patch("api.check_token_security")
    def test_action_errors_are_200(self, mock_check, client):
        mock_check.return_value = ActionResponse(text="❌ Chain ID is missing.", type="error")
        r = client.get("/api/security/0xabc", params={"chain": "missing"})
        assert r.status_code == 200
        assert r.json()["type"] == "error"

    @patch("api.find_trending_tokens")
    def test_trending_validates_source(self, mock_find, client):
        assert client.get("/api/trending", params={"source": "binance"}).status_code == 422
        mock_find.assert_not_called()

    @patch("api.get_simple_price")
    def test_price(self, mock_price, client):
        mock_price.return_value = _ok()
        client.get("/api/price", params={"coins": "bitcoin,ethereum", "vs": "eur"})
        mock_price.assert_called_once_with("bitcoin,ethereum", "eur")

    @patch("api.get_trending_tokens_on_chain")
    def test_pools(self, mock_pools, client):
        mock_pools.return_value = _ok()
        client.get("/api/pools/Solana")
        mock_pools.assert_called_once_with("Solana")


class TestActions:
    @patch("api.run_action")
    def test_dispatch(self, mock_run, client):
        mock_run.return_value = _ok("searched")
        r = client.post("/api/actions/WEB_SEARCH", json={"query": "btc"})
        assert r.json()["text"] == "searched"
        mock_run.assert_called_once_with("WEB_SEARCH", {"query": "btc"})

    def test_unknown_action_is_400(self, client):
        r = client.post("/api/actions/LAUNCH_ROCKET")
        assert r.status_code == 400
        assert "Unknown action" in r.json()["detail"]


class TestBatch:
    @patch("api.set_default_qps")
    @patch("api.check_token_security")
    def test_mixed_results(self, mock_check, mock_qps, client):
        def fake(chain, addr):
            if addr == "bad":
                return ActionResponse(text="Invalid address", type="error")
            return _ok("r", {"score": 100, "risk_tier": "CRITICAL", "reasons": ["honeypot"]})
        mock_check.side_effect = fake

        r = client.post("/api/batch", json={"chain": "56", "addresses": ["0xa", "bad"], "qps": 2})
        body = r.json()
        assert body["count"] == 2
        by_addr = {row["address"]: row for row in body["results"]}
        assert by_addr["0xa"]["risk_tier"] == "CRITICAL"
        assert by_addr["0xa"]["chain"] == "56"
        assert by_addr["bad"]["error"] == "Invalid address"
        mock_qps.assert_called_once_with(2.0)

    def test_empty_addresses(self, client):
        r = client.post("/api/batch", json={"addresses": []})
        assert r.status_code == 400

    def test_qps_must_be_positive(self, client):
        r = client.post("/api/batch", json={"addresses": ["0xa"], "qps": 0})
        assert r.status_code == 422


class TestActionParamTypes:
    @pytest.mark.parametrize("name, body", [
        ("GET_NETWORK_TRENDING_TOKENS", {"chain": 1}),
        ("SEARCH_GOOGLE", {"query": 123}),
        ("CHECK_TOKEN_SECURITY", {"token_address": 123}),
        ("GET_PAGE_CONTENT", {"url": 5}),
    ])
    @patch("agent_plugins.utils.ratelimit.requests.get")
    def test_wrong_type_is_error_response(self, mock_http, client, name, body):
        r = client.post(f"/api/actions/{name}", json=body)
        assert r.status_code == 200
        assert r.json()["type"] == "error"
        assert "Invalid parameters" in r.json()["text"]
        mock_http.assert_not_called()
