"""
billing.io Python SDK

- Typed resource APIs (checkouts, customers, subscriptions, payouts, ...)
- Lazy cursor auto-pagination for every list endpoint
- Webhook signature verification & event routing
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------
__version__ = "0.1.0"

# ---------------------------------------------------------------------------
# Public API re-exports
# ---------------------------------------------------------------------------
from .config import BillingIOConfig
from .client import BillingIOClient
from .errors import (
    BillingIOError,
    BillingIOConfigError,
    BillingIOAPIError,
    VerificationErrorKind,
    WebhookVerificationError,
    is_not_found,
    is_rate_limited,
    is_auth_error,
)
from .models import (
    Chain,
    Token,
    CheckoutStatus,
    EventType,
    WebhookEndpointStatus,
    ListPage,
    Checkout,
    WebhookEvent,
)
from .pagination import PageIterator
from .webhook import (
    SIGNATURE_HEADER,
    DEFAULT_TOLERANCE,
    WebhookRouter,
    construct_event,
    generate_signature_header,
    verify_signature,
    verify_signature_with_tolerance,
)
from .resources import (
    CheckoutsAPI,
    WebhooksAPI,
    EventsAPI,
    HealthAPI,
    CustomersAPI,
    PaymentMethodsAPI,
    PaymentLinksAPI,
    SubscriptionPlansAPI,
    SubscriptionsAPI,
    SubscriptionRenewalsAPI,
    EntitlementsAPI,
    PayoutsAPI,
    SettlementsAPI,
    RevenueEventsAPI,
    AdjustmentsAPI,
)
from .utils import make_idempotency_key, ensure_idempotency_key
from .debug import dprint, is_enabled as debug_enabled, set_debug as set_debug_enabled

dprint("SDK import", {"version": __version__})

__all__ = (
    "__version__",
    # core
    "BillingIOConfig",
    "BillingIOClient",
    "PageIterator",
    # errors
    "BillingIOError",
    "BillingIOConfigError",
    "BillingIOAPIError",
    "VerificationErrorKind",
    "WebhookVerificationError",
    "is_not_found",
    "is_rate_limited",
    "is_auth_error",
    # models
    "Chain",
    "Token",
    "CheckoutStatus",
    "EventType",
    "WebhookEndpointStatus",
    "ListPage",
    "Checkout",
    "WebhookEvent",
    # webhooks
    "SIGNATURE_HEADER",
    "DEFAULT_TOLERANCE",
    "WebhookRouter",
    "construct_event",
    "generate_signature_header",
    "verify_signature",
    "verify_signature_with_tolerance",
    # resources
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
    # utils
    "make_idempotency_key",
    "ensure_idempotency_key",
    # debug controls
    "debug_enabled",
    "set_debug_enabled",
)
