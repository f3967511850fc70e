import httpx
import pytest

from billingio import (
    BillingIOAPIError,
    BillingIOClient,
    BillingIOConfig,
    BillingIOConfigError,
    is_auth_error,
    is_not_found,
    is_rate_limited,
)
from billingio.debug import mask_api_key, scrub_headers

from .conftest import API_KEY


class TestRequests:

    def test_auth_and_user_agent_headers(self, client, fake_api):
        fake_api.add("GET", "/v1/health", (200, {"status": "ok", "version": "1.4.0"}))
        assert client.get("/health") == {"status": "ok", "version": "1.4.0"}

        req = fake_api.requests[0]
        assert req.headers["Authorization"] == f"Bearer {API_KEY}"
        assert req.headers["Accept"] == "application/json"
        assert req.headers["User-Agent"].startswith("billing-python/")
        assert "Content-Type" not in req.headers

    def test_post_sends_json_and_idempotency_key(self, client, fake_api):
        fake_api.add("POST", "/v1/checkouts", (201, {"checkout_id": "co_1"}))
        client.post("/checkouts", json={"amount_usd": 10}, idempotency_key="bio_abc")

        req = fake_api.requests[0]
        assert req.headers["Content-Type"] == "application/json"
        assert req.headers["Idempotency-Key"] == "bio_abc"
        assert fake_api.json_body() == {"amount_usd": 10}

    def test_post_without_body(self, client, fake_api):
        fake_api.add("POST", "/v1/payouts/po_1/execute", (200, {"payout_id": "po_1"}))
        client.post("/payouts/po_1/execute")
        req = fake_api.requests[0]
        assert req.content == b""
        assert "Content-Type" not in req.headers
        assert "Idempotency-Key" not in req.headers

    def test_query_params_are_cleaned(self, client, fake_api):
        fake_api.add("GET", "/v1/customers", (200, {"data": []}))
        client.get("/customers", params={"cursor": None, "status": "", "limit": 5, "live": True})
        assert fake_api.params() == {"limit": "5", "live": "true"}

    def test_delete_with_no_content(self, client, fake_api):
        fake_api.add("DELETE", "/v1/webhooks/we_1", (204, None))
        assert client.delete("/webhooks/we_1") is None

    def test_context_manager_closes(self, config, fake_api):
        with BillingIOClient(config, transport=httpx.MockTransport(fake_api)) as c:
            assert c.config.base_url == "https://api.billing.test/v1"
        assert c._client.is_closed


class TestErrors:

    def test_error_envelope_is_decoded(self, client, fake_api):
        fake_api.add(
            "GET",
            "/v1/checkouts/co_missing",
            lambda req: httpx.Response(
                404,
                headers={"X-Request-ID": "req_42"},
                json={"error": {"type": "not_found", "code": "checkout_not_found",
                                "message": "No checkout co_missing", "param": "checkout_id"}},
            ),
        )
        with pytest.raises(BillingIOAPIError) as exc:
            client.get("/checkouts/co_missing")

        err = exc.value
        assert err.status == 404
        assert err.type == "not_found"
        assert err.code == "checkout_not_found"
        assert err.param == "checkout_id"
        assert err.message_text == "No checkout co_missing"
        assert err.request_id == "req_42"
        assert err.method == "GET"
        assert err.url.endswith("/v1/checkouts/co_missing")
        assert is_not_found(err)
        assert not is_rate_limited(err)
        assert "req_id=req_42" in str(err)

    def test_non_json_error_body(self, client, fake_api):
        fake_api.add("GET", "/v1/health", (502, "Bad Gateway"))
        with pytest.raises(BillingIOAPIError) as exc:
            client.get("/health")
        err = exc.value
        assert err.type == "internal_error"
        assert err.code == "unknown"
        assert err.message_text == "unexpected error (HTTP 502): Bad Gateway"

    @pytest.mark.parametrize(
        "status, err_type, predicate",
        [
            (401, "authentication_error", is_auth_error),
            (429, "rate_limited", is_rate_limited),
        ],
    )
    def test_predicates(self, client, fake_api, status, err_type, predicate):
        fake_api.add("GET", "/v1/health", (status, {"error": {"type": err_type, "code": "x", "message": "m"}}))
        with pytest.raises(BillingIOAPIError) as exc:
            client.get("/health")
        assert predicate(exc.value)

    def test_network_failure(self, client, fake_api):
        def _boom(request):
            raise httpx.ConnectError("connection refused", request=request)

        fake_api.add("GET", "/v1/health", _boom)
        with pytest.raises(BillingIOAPIError) as exc:
            client.get("/health")
        err = exc.value
        assert err.status == -1
        assert isinstance(err.__cause__, httpx.ConnectError)
        assert "connection refused" in err.message_text

    def test_success_body_that_is_not_an_object(self, client, fake_api):
        fake_api.add("GET", "/v1/health", (200, [1, 2]))
        with pytest.raises(BillingIOAPIError) as exc:
            client.get("/health")
        assert exc.value.status == 200

    def test_to_dict_is_sanitized(self):
        err = BillingIOAPIError(400, {"error": {"type": "invalid_request", "code": "bad", "message": "nope"}})
        assert err.to_dict() == {
            "status": 400,
            "request_id": None,
            "method": None,
            "url": None,
            "type": "invalid_request",
            "code": "bad",
            "param": None,
            "message": "nope",
        }


class TestClientConfig:

    def test_missing_api_key_rejected(self, monkeypatch):
        monkeypatch.delenv("BILLINGIO_API_KEY", raising=False)
        with pytest.raises(BillingIOConfigError):
            BillingIOClient(BillingIOConfig(base_url="https://api.billing.test/v1"))


class TestRedaction:

    def test_scrub_headers(self):
        out = scrub_headers({
            "Authorization": f"Bearer {API_KEY}",
            "X-Billing-Signature": "t=1,v1=abc",
            "Idempotency-Key": "bio_1234567890",
            "Accept": "application/json",
        })
        assert API_KEY not in out["Authorization"]
        assert out["Authorization"].startswith("Bearer sk_test_***")
        assert out["X-Billing-Signature"] == "***"
        assert out["Idempotency-Key"] == "bio...90"
        assert out["Accept"] == "application/json"

    @pytest.mark.parametrize(
        "key, expected",
        [
            (None, "(empty)"),
            ("sk_live_abcdefghijkl", "sk_live_***ijkl"),
            ("sk_test_short", "sk_test_***"),
            ("other_key", "ot***"),
        ],
    )
    def test_mask_api_key(self, key, expected):
        assert mask_api_key(key) == expected
