from __future__ import annotations

"""
Resource APIs for the billing.io SDK.

Each class wraps one REST resource and takes a ``BillingIOClient``:

    checkouts = CheckoutsAPI(client)
    for c in checkouts.list_auto_paginate(status="confirmed"):
        ...
"""

from .checkouts import CheckoutsAPI
from .webhooks import WebhooksAPI
from .events import EventsAPI
from .health import HealthAPI
from .customers import CustomersAPI
from .payment_methods import PaymentMethodsAPI
from .payment_links import PaymentLinksAPI
from .subscription_plans import SubscriptionPlansAPI
from .subscriptions import SubscriptionsAPI
from .subscription_renewals import SubscriptionRenewalsAPI
from .entitlements import EntitlementsAPI
from .payouts import PayoutsAPI
from .settlements import SettlementsAPI
from .revenue_events import RevenueEventsAPI
from .adjustments import AdjustmentsAPI

__all__ = (
    "CheckoutsAPI",
    "WebhooksAPI",
    "EventsAPI",
    "HealthAPI",
    "CustomersAPI",
    "PaymentMethodsAPI",
    "PaymentLinksAPI",
    "SubscriptionPlansAPI",
    "SubscriptionsAPI",
    "SubscriptionRenewalsAPI",
    "EntitlementsAPI",
    "PayoutsAPI",
    "SettlementsAPI",
    "RevenueEventsAPI",
    "AdjustmentsAPI",
)
