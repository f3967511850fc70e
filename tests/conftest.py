import json
from typing import Any, Dict, List, Tuple

import httpx
import pytest

from billingio import BillingIOClient, BillingIOConfig


API_KEY = "sk_test_4f9a1c2b3d4e5f60"
BASE_URL = "https://api.billing.test/v1"
WEBHOOK_SECRET = "whsec_test_signing_secret"


class FakeAPI:
    """
    In-memory stand-in for the billing.io HTTP API, plugged into httpx via
    MockTransport. Responses queued for a route are served in order; the last
    one repeats.
    """

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, str], List[Any]] = {}

    def add(self, method: str, path: str, *responses: Any) -> None:
        """Each response is (status, body) or a callable(request) -> httpx.Response."""
        self._routes.setdefault((method, path), []).extend(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(
                404,
                json={"error": {"type": "not_found", "code": "route_not_found",
                                "message": f"no route {request.method} {request.url.path}"}},
            )
        resp = queue.pop(0) if len(queue) > 1 else queue[0]
        if callable(resp):
            return resp(request)
        status, body = resp
        if body is None:
            return httpx.Response(status)
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=body)

    def params(self, index: int = -1) -> Dict[str, str]:
        return dict(self.requests[index].url.params)

    def json_body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture
def fake_api():
    return FakeAPI()


@pytest.fixture
def config():
    return BillingIOConfig(api_key=API_KEY, base_url=BASE_URL, debug=False)


@pytest.fixture
def client(config, fake_api):
    c = BillingIOClient(config, transport=httpx.MockTransport(fake_api))
    yield c
    c.close()


@pytest.fixture
def webhook_secret():
    return WEBHOOK_SECRET


@pytest.fixture
def checkout_dict():
    return {
        "checkout_id": "co_1",
        "deposit_address": "TXYZ123",
        "chain": "tron",
        "token": "USDT",
        "amount_usd": 49.99,
        "amount_atomic": "49990000",
        "status": "confirmed",
        "tx_hash": "0xabc",
        "confirmations": 20,
        "required_confirmations": 20,
        "expires_at": "2026-10-19T11:00:00Z",
        "created_at": "2026-10-19T10:00:00Z",
    }


@pytest.fixture
def event_dict(checkout_dict):
    return {
        "event_id": "evt_1",
        "type": "checkout.completed",
        "checkout_id": "co_1",
        "data": checkout_dict,
        "created_at": "2026-10-19T10:05:00Z",
    }
