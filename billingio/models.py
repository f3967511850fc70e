from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from .utils import parse_timestamp

T = TypeVar("T")


# =============================================================================
# Base model: permissive to avoid breaking on API additions
# =============================================================================
class _APIModel(BaseModel):
    """
    Loose model that accepts extra fields so the SDK doesn't break
    when billing.io adds response properties.
    """
    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# =============================================================================
# Enums
# =============================================================================
class Chain(str, Enum):
    TRON = "tron"
    ARBITRUM = "arbitrum"


class Token(str, Enum):
    USDT = "USDT"
    USDC = "USDC"


class CheckoutStatus(str, Enum):
    PENDING = "pending"
    DETECTED = "detected"
    CONFIRMING = "confirming"
    CONFIRMED = "confirmed"
    EXPIRED = "expired"
    FAILED = "failed"


class EventType(str, Enum):
    CHECKOUT_CREATED = "checkout.created"
    CHECKOUT_PAYMENT_DETECTED = "checkout.payment_detected"
    CHECKOUT_CONFIRMING = "checkout.confirming"
    CHECKOUT_COMPLETED = "checkout.completed"
    CHECKOUT_EXPIRED = "checkout.expired"
    CHECKOUT_FAILED = "checkout.failed"


class WebhookEndpointStatus(str, Enum):
    ACTIVE = "active"
    DISABLED = "disabled"


def _known(enum_cls: type) -> BeforeValidator:
    """Map a wire value to its enum member; leave values this SDK doesn't know as str."""
    def _coerce(v: Any) -> Any:
        try:
            return enum_cls(v)
        except (ValueError, TypeError):
            return v
    return BeforeValidator(_coerce)


# Response-side fields: new values added by billing.io decode as plain str
OpenChain = Annotated[Union[Chain, str], _known(Chain)]
OpenToken = Annotated[Union[Token, str], _known(Token)]
OpenCheckoutStatus = Annotated[Union[CheckoutStatus, str], _known(CheckoutStatus)]
OpenEventType = Annotated[Union[EventType, str], _known(EventType)]
OpenWebhookEndpointStatus = Annotated[Union[WebhookEndpointStatus, str], _known(WebhookEndpointStatus)]


# =============================================================================
# List envelope
# =============================================================================
class ListPage(_APIModel, Generic[T]):
    """
    One page of a cursor-paginated list: ``{"data": [...], "has_more": bool,
    "next_cursor": str | null}``.
    """
    data: List[T] = Field(default_factory=list)
    has_more: bool = False
    next_cursor: Optional[str] = None


# =============================================================================
# Checkouts
# =============================================================================
class CheckoutCreate(_APIModel):
    """
    Request body for creating a checkout.
    """
    amount_usd: float
    chain: Chain
    token: Token
    expires_in_seconds: Optional[int] = None
    metadata: Optional[Dict[str, str]] = None

    @field_validator("amount_usd")
    @classmethod
    def _amount_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("amount_usd must be positive.")
        return v

    @field_validator("expires_in_seconds")
    @classmethod
    def _expiry_positive(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError("expires_in_seconds must be a positive integer.")
        return v


class Checkout(_APIModel):
    """
    Crypto payment checkout. Also embedded as the ``data`` snapshot of
    events and webhook deliveries.
    """
    checkout_id: str
    deposit_address: Optional[str] = None
    chain: Optional[OpenChain] = None
    token: Optional[OpenToken] = None
    amount_usd: Optional[float] = None
    amount_atomic: Optional[str] = None
    status: Optional[OpenCheckoutStatus] = None
    tx_hash: Optional[str] = None
    confirmations: int = 0
    required_confirmations: int = 0
    expires_at: Optional[str] = None
    detected_at: Optional[str] = None
    confirmed_at: Optional[str] = None
    created_at: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (CheckoutStatus.CONFIRMED, CheckoutStatus.EXPIRED, CheckoutStatus.FAILED)


class CheckoutStatusResponse(_APIModel):
    """Lightweight polling view of a checkout."""
    checkout_id: str
    status: OpenCheckoutStatus
    tx_hash: Optional[str] = None
    confirmations: int = 0
    required_confirmations: int = 0
    detected_at: Optional[str] = None
    confirmed_at: Optional[str] = None
    polling_interval_ms: Optional[int] = None


# =============================================================================
# Webhook endpoints & events
# =============================================================================
class WebhookEndpoint(_APIModel):
    """
    Registered webhook endpoint. ``secret`` is only returned on create;
    store it securely.
    """
    webhook_id: str
    url: str
    events: List[OpenEventType] = Field(default_factory=list)
    secret: Optional[str] = None
    description: Optional[str] = None
    status: Optional[OpenWebhookEndpointStatus] = None
    created_at: Optional[str] = None


class Event(_APIModel):
    event_id: str
    type: Optional[OpenEventType] = None
    checkout_id: Optional[str] = None
    data: Optional[Checkout] = None
    created_at: Optional[str] = None


class WebhookEvent(_APIModel):
    """
    Parsed payload of an inbound webhook delivery, returned only after the
    signature has been verified.
    """
    event_id: str
    type: OpenEventType
    checkout_id: str
    data: Checkout
    created_at: str

    @property
    def created_at_dt(self) -> Optional[datetime]:
        return parse_timestamp(self.created_at)


class HealthResponse(_APIModel):
    status: str
    version: Optional[str] = None


# =============================================================================
# Customers & payment methods
# =============================================================================
class Customer(_APIModel):
    customer_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    status: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None
    created_at: Optional[str] = None


class PaymentMethod(_APIModel):
    payment_method_id: str
    customer_id: Optional[str] = None
    chain: Optional[OpenChain] = None
    token: Optional[OpenToken] = None
    address: Optional[str] = None
    is_default: bool = False
    created_at: Optional[str] = None


class PaymentLink(_APIModel):
    payment_link_id: str
    url: Optional[str] = None
    amount_usd: Optional[float] = None
    chain: Optional[OpenChain] = None
    token: Optional[OpenToken] = None
    status: Optional[str] = None
    created_at: Optional[str] = None


# =============================================================================
# Subscriptions
# =============================================================================
class SubscriptionPlan(_APIModel):
    plan_id: str
    name: Optional[str] = None
    amount_usd: Optional[float] = None
    interval: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None


class Subscription(_APIModel):
    subscription_id: str
    customer_id: Optional[str] = None
    plan_id: Optional[str] = None
    status: Optional[str] = None
    current_period_start: Optional[str] = None
    current_period_end: Optional[str] = None
    created_at: Optional[str] = None


class SubscriptionRenewal(_APIModel):
    renewal_id: str
    subscription_id: Optional[str] = None
    checkout_id: Optional[str] = None
    status: Optional[str] = None
    attempt: Optional[int] = None
    created_at: Optional[str] = None


class Entitlement(_APIModel):
    entitlement_id: str
    subscription_id: Optional[str] = None
    feature_key: Optional[str] = None
    value: Optional[Any] = None
    created_at: Optional[str] = None


class EntitlementCheckResponse(_APIModel):
    entitled: bool
    feature_key: Optional[str] = None
    value: Optional[Any] = None


# =============================================================================
# Payouts & revenue
# =============================================================================
class Payout(_APIModel):
    payout_id: str
    amount_usd: Optional[float] = None
    chain: Optional[OpenChain] = None
    token: Optional[OpenToken] = None
    destination: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None


class Settlement(_APIModel):
    settlement_id: str
    payout_id: Optional[str] = None
    amount_usd: Optional[float] = None
    tx_hash: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None


class RevenueEvent(_APIModel):
    revenue_event_id: str
    type: Optional[str] = None
    amount_usd: Optional[float] = None
    checkout_id: Optional[str] = None
    created_at: Optional[str] = None


class AccountingSummary(_APIModel):
    period_start: Optional[str] = None
    period_end: Optional[str] = None
    gross_usd: Optional[float] = None
    net_usd: Optional[float] = None
    adjustments_usd: Optional[float] = None


class Adjustment(_APIModel):
    adjustment_id: str
    type: Optional[str] = None
    amount_usd: Optional[float] = None
    reason: Optional[str] = None
    created_at: Optional[str] = None


__all__ = [
    "Chain",
    "Token",
    "CheckoutStatus",
    "EventType",
    "WebhookEndpointStatus",
    "ListPage",
    "CheckoutCreate",
    "Checkout",
    "CheckoutStatusResponse",
    "WebhookEndpoint",
    "Event",
    "WebhookEvent",
    "HealthResponse",
    "Customer",
    "PaymentMethod",
    "PaymentLink",
    "SubscriptionPlan",
    "Subscription",
    "SubscriptionRenewal",
    "Entitlement",
    "EntitlementCheckResponse",
    "Payout",
    "Settlement",
    "RevenueEvent",
    "AccountingSummary",
    "Adjustment",
]
