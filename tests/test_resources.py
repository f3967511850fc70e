import httpx
import pytest
from pydantic import ValidationError

from billingio import (
    BillingIOAPIError,
    Checkout,
    CheckoutStatus,
    EventType,
)
from billingio.resources import (
    AdjustmentsAPI,
    CheckoutsAPI,
    CustomersAPI,
    EntitlementsAPI,
    EventsAPI,
    HealthAPI,
    PaymentMethodsAPI,
    PayoutsAPI,
    RevenueEventsAPI,
    SettlementsAPI,
    SubscriptionPlansAPI,
    SubscriptionRenewalsAPI,
    SubscriptionsAPI,
    WebhooksAPI,
)


def _page(ids, key, has_more=False, next_cursor=None):
    return {"data": [{key: i} for i in ids], "has_more": has_more, "next_cursor": next_cursor}


class TestCheckouts:

    def test_create(self, client, fake_api):
        fake_api.add("POST", "/v1/checkouts", (201, {
            "checkout_id": "co_1", "status": "pending", "chain": "tron", "token": "USDT", "amount_usd": 25.0,
        }))
        co = CheckoutsAPI(client).create(
            amount_usd=25.0, chain="tron", token="USDT", metadata={"order": "42"}, idempotency_key="bio_k1",
        )
        assert isinstance(co, Checkout)
        assert co.status is CheckoutStatus.PENDING
        assert not co.is_terminal
        assert fake_api.json_body() == {"amount_usd": 25.0, "chain": "tron", "token": "USDT", "metadata": {"order": "42"}}
        assert fake_api.requests[0].headers["Idempotency-Key"] == "bio_k1"

    def test_create_rejects_bad_amount_before_sending(self, client, fake_api):
        with pytest.raises(ValidationError):
            CheckoutsAPI(client).create(amount_usd=0, chain="tron", token="USDT")
        assert fake_api.requests == []

    def test_get_and_status(self, client, fake_api):
        fake_api.add("GET", "/v1/checkouts/co_1", (200, {"checkout_id": "co_1", "status": "confirmed"}))
        fake_api.add("GET", "/v1/checkouts/co_1/status", (200, {
            "checkout_id": "co_1", "status": "confirming", "confirmations": 3, "required_confirmations": 20,
        }))
        api = CheckoutsAPI(client)
        assert api.get("co_1").is_terminal
        status = api.get_status("co_1")
        assert status.confirmations == 3

    @pytest.mark.parametrize("bad", ["", "   ", None])
    def test_empty_id_rejected(self, client, fake_api, bad):
        with pytest.raises(ValueError):
            CheckoutsAPI(client).get(bad)
        assert fake_api.requests == []

    def test_single_page_list(self, client, fake_api):
        fake_api.add("GET", "/v1/checkouts", (200, _page(["co_1", "co_2"], "checkout_id", True, "cur_2")))
        page = CheckoutsAPI(client).list(limit=2, status=CheckoutStatus.CONFIRMED)
        assert [c.checkout_id for c in page.data] == ["co_1", "co_2"]
        assert page.has_more is True
        assert page.next_cursor == "cur_2"
        assert fake_api.params() == {"limit": "2", "status": "confirmed"}

    def test_auto_paginate_follows_cursors(self, client, fake_api):
        fake_api.add(
            "GET",
            "/v1/checkouts",
            (200, _page(["co_1", "co_2"], "checkout_id", True, "cur_a")),
            (200, _page(["co_3"], "checkout_id", True, "cur_b")),
            (200, _page(["co_4"], "checkout_id")),
        )
        it = CheckoutsAPI(client).list_auto_paginate(limit=2, status="confirmed")
        assert fake_api.requests == []

        ids = [c.checkout_id for c in it]
        assert ids == ["co_1", "co_2", "co_3", "co_4"]
        assert [fake_api.params(i) for i in range(3)] == [
            {"limit": "2", "status": "confirmed"},
            {"limit": "2", "status": "confirmed", "cursor": "cur_a"},
            {"limit": "2", "status": "confirmed", "cursor": "cur_b"},
        ]

    def test_auto_paginate_snapshots_filters(self, client, fake_api):
        fake_api.add(
            "GET",
            "/v1/checkouts",
            (200, _page(["co_1"], "checkout_id", True, "cur_a")),
            (200, _page(["co_2"], "checkout_id")),
        )
        extra = {"chain": "tron"}
        it = CheckoutsAPI(client).list_auto_paginate(extra_params=extra)
        extra["chain"] = "arbitrum"
        extra["token"] = "USDC"

        assert it.advance()
        extra["chain"] = "base"
        assert it.advance()
        assert not it.advance()
        assert fake_api.params(0) == {"chain": "tron"}
        assert fake_api.params(1) == {"chain": "tron", "cursor": "cur_a"}

    def test_auto_paginate_surfaces_api_error(self, client, fake_api):
        fake_api.add(
            "GET",
            "/v1/checkouts",
            (200, _page(["co_1"], "checkout_id", True, "cur_a")),
            (500, {"error": {"type": "internal_error", "code": "boom", "message": "kaput"}}),
        )
        it = CheckoutsAPI(client).list_auto_paginate()
        assert it.advance()
        assert it.current().checkout_id == "co_1"
        assert not it.advance()
        err = it.last_error()
        assert isinstance(err, BillingIOAPIError)
        assert err.status == 500
        assert not it.advance()
        assert len(fake_api.requests) == 2

    def test_auto_paginate_empty_collection(self, client, fake_api):
        fake_api.add("GET", "/v1/checkouts", (200, {"data": [], "has_more": False, "next_cursor": None}))
        it = CheckoutsAPI(client).list_auto_paginate()
        assert not it.advance()
        assert it.last_error() is None

    def test_two_traversals_are_independent(self, client, fake_api):
        def _serve(request):
            cursor = request.url.params.get("cursor")
            if cursor is None:
                return httpx.Response(200, json=_page(["co_1"], "checkout_id", True, "cur_a"))
            return httpx.Response(200, json=_page(["co_2"], "checkout_id"))

        fake_api.add("GET", "/v1/checkouts", _serve)
        api = CheckoutsAPI(client)
        it1, it2 = api.list_auto_paginate(), api.list_auto_paginate()
        assert it1.advance()
        assert [c.checkout_id for c in it2] == ["co_1", "co_2"]
        assert it1.current().checkout_id == "co_1"
        assert [c.checkout_id for c in it1] == ["co_2"]

    def test_invalid_status_filter(self, client, fake_api):
        with pytest.raises(ValueError):
            CheckoutsAPI(client).list_auto_paginate(status="paid")
        assert fake_api.requests == []

    def test_invalid_limit(self, client):
        with pytest.raises(ValueError):
            CheckoutsAPI(client).list(limit=0)
        with pytest.raises(ValueError):
            CheckoutsAPI(client).list_auto_paginate(limit=True)


class TestWebhooksAndEvents:

    def test_webhook_create(self, client, fake_api):
        fake_api.add("POST", "/v1/webhooks", (201, {
            "webhook_id": "we_1", "url": "https://shop.test/hook", "secret": "whsec_x", "status": "active",
        }))
        ep = WebhooksAPI(client).create(
            url="https://shop.test/hook",
            events=[EventType.CHECKOUT_COMPLETED, "checkout.expired"],
            description="prod",
        )
        assert ep.secret == "whsec_x"
        assert fake_api.json_body() == {
            "url": "https://shop.test/hook",
            "events": ["checkout.completed", "checkout.expired"],
            "description": "prod",
        }

    def test_webhook_create_rejects_unknown_event(self, client, fake_api):
        with pytest.raises(ValueError):
            WebhooksAPI(client).create(url="https://shop.test/hook", events=["invoice.paid"])
        with pytest.raises(ValueError):
            WebhooksAPI(client).create(url="https://shop.test/hook", events=[])
        assert fake_api.requests == []

    def test_webhook_delete(self, client, fake_api):
        fake_api.add("DELETE", "/v1/webhooks/we_1", (204, None))
        assert WebhooksAPI(client).delete("we_1") is None
        assert fake_api.requests[0].method == "DELETE"

    def test_events_filters(self, client, fake_api):
        fake_api.add("GET", "/v1/events", (200, {
            "data": [{"event_id": "evt_1", "type": "checkout.expired", "checkout_id": "co_9",
                      "data": {"checkout_id": "co_9", "status": "expired"}}],
            "has_more": False,
            "next_cursor": None,
        }))
        events = list(EventsAPI(client).list_auto_paginate(type=EventType.CHECKOUT_EXPIRED, checkout_id="co_9"))
        assert [e.event_id for e in events] == ["evt_1"]
        assert events[0].type is EventType.CHECKOUT_EXPIRED
        assert events[0].data.status is CheckoutStatus.EXPIRED
        assert fake_api.params() == {"type": "checkout.expired", "checkout_id": "co_9"}

    def test_event_without_type_or_data(self, client, fake_api):
        fake_api.add("GET", "/v1/events", (200, _page(["evt_1", "evt_2"], "event_id")))
        page = EventsAPI(client).list()
        assert [e.event_id for e in page.data] == ["evt_1", "evt_2"]
        assert page.data[0].type is None
        assert page.data[0].data is None

    def test_new_values_do_not_break_traversal(self, client, fake_api):
        fake_api.add(
            "GET",
            "/v1/events",
            (200, {"data": [{"event_id": "evt_1", "type": "checkout.refunded"}], "has_more": True, "next_cursor": "c1"}),
            (200, {"data": [{"event_id": "evt_2", "type": "checkout.completed",
                             "data": {"checkout_id": "co_2", "chain": "ethereum", "token": "DAI"}}]}),
        )
        it = EventsAPI(client).list_auto_paginate()
        events = list(it)
        assert [e.type for e in events] == ["checkout.refunded", EventType.CHECKOUT_COMPLETED]
        assert events[1].data.chain == "ethereum"
        assert it.last_error() is None

    def test_checkout_with_unknown_status(self, client, fake_api):
        fake_api.add("GET", "/v1/checkouts/co_1", (200, {"checkout_id": "co_1", "status": "refunded", "chain": "solana"}))
        co = CheckoutsAPI(client).get("co_1")
        assert co.status == "refunded"
        assert co.chain == "solana"
        assert not co.is_terminal

    def test_event_get(self, client, fake_api):
        fake_api.add("GET", "/v1/events/evt_1", (200, {"event_id": "evt_1", "type": "checkout.completed"}))
        assert EventsAPI(client).get("evt_1").event_id == "evt_1"


class TestBillingResources:

    def test_health(self, client, fake_api):
        fake_api.add("GET", "/v1/health", (200, {"status": "ok", "version": "1.4.0"}))
        assert HealthAPI(client).get().status == "ok"

    def test_customer_update(self, client, fake_api):
        fake_api.add("PATCH", "/v1/customers/cus_1", (200, {"customer_id": "cus_1", "name": "Ada"}))
        cus = CustomersAPI(client).update("cus_1", name="Ada")
        assert cus.customer_id == "cus_1"
        assert fake_api.json_body() == {"name": "Ada"}

    def test_payment_method_set_default(self, client, fake_api):
        fake_api.add("POST", "/v1/payment-methods/pm_1/default", (200, {"payment_method_id": "pm_1"}))
        assert PaymentMethodsAPI(client).set_default("pm_1").payment_method_id == "pm_1"

    def test_subscription_plans_paginate(self, client, fake_api):
        fake_api.add(
            "GET",
            "/v1/subscriptions/plans",
            (200, _page(["plan_1"], "plan_id", True, "c1")),
            (200, _page(["plan_2"], "plan_id")),
        )
        assert [p.plan_id for p in SubscriptionPlansAPI(client).list_auto_paginate()] == ["plan_1", "plan_2"]

    def test_subscription_create(self, client, fake_api):
        fake_api.add("POST", "/v1/subscriptions", (201, {"subscription_id": "sub_1", "status": "active"}))
        sub = SubscriptionsAPI(client).create(customer_id="cus_1", plan_id="plan_1")
        assert sub.subscription_id == "sub_1"
        body = fake_api.json_body()
        assert body["customer_id"] == "cus_1"
        assert body["plan_id"] == "plan_1"

    def test_renewal_retry(self, client, fake_api):
        fake_api.add("POST", "/v1/subscriptions/renewals/ren_1/retry", (200, {"renewal_id": "ren_1"}))
        assert SubscriptionRenewalsAPI(client).retry("ren_1").renewal_id == "ren_1"

    def test_entitlement_check(self, client, fake_api):
        fake_api.add("GET", "/v1/subscriptions/entitlements/check", (200, {"entitled": True}))
        res = EntitlementsAPI(client).check(customer_id="cus_1", feature_key="api_access")
        assert res.entitled is True
        assert fake_api.params() == {"customer_id": "cus_1", "feature_key": "api_access"}

    def test_payout_execute(self, client, fake_api):
        fake_api.add("POST", "/v1/payouts/po_1/execute", (200, {"payout_id": "po_1", "status": "processing"}))
        assert PayoutsAPI(client).execute("po_1", idempotency_key="bio_x").payout_id == "po_1"
        assert fake_api.requests[0].headers["Idempotency-Key"] == "bio_x"

    def test_settlements_filter(self, client, fake_api):
        fake_api.add("GET", "/v1/payouts/settlements", (200, _page(["set_1"], "settlement_id")))
        page = SettlementsAPI(client).list(payout_id="po_1")
        assert page.data[0].settlement_id == "set_1"
        assert fake_api.params() == {"payout_id": "po_1"}

    def test_revenue_accounting(self, client, fake_api):
        fake_api.add("GET", "/v1/revenue/accounting", (200, {"total_revenue_usd": 120.5}))
        RevenueEventsAPI(client).accounting(period_start="2026-10-01")
        assert fake_api.params() == {"period_start": "2026-10-01"}

    def test_adjustment_create_validates_amount(self, client, fake_api):
        with pytest.raises(ValueError):
            AdjustmentsAPI(client).create(type="credit", amount_usd="10")
        assert fake_api.requests == []
