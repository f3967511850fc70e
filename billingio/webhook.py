"""
Webhook signature verification and event dispatch.

Every delivery carries an ``X-Billing-Signature`` header of the form
``t=<unix seconds>,v1=<hex HMAC-SHA256>``, where the HMAC is computed with
the endpoint secret over ``"<t>.<raw body>"``. Always pass the raw request
body; re-serialized JSON will not match.

    event = verify_signature(request.body, request.headers["X-Billing-Signature"], secret)
"""

from __future__ import annotations

import hashlib
import hmac
import re
import time
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from .config import BillingIOConfig
from .debug import dprint
from .errors import VerificationErrorKind, WebhookVerificationError
from .models import EventType, WebhookEvent

SIGNATURE_HEADER = "X-Billing-Signature"

# Maximum age (seconds) of a delivery timestamp, in either direction.
DEFAULT_TOLERANCE = 300

_TIMESTAMP_RE = re.compile(r"[+-]?[0-9]+")

Payload = Union[str, bytes, bytearray]


# ------------------------
# Signing primitives
# ------------------------

def _to_bytes(value: Payload) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return value.encode("utf-8")


def compute_signature(payload: Payload, secret: str, timestamp: int) -> str:
    """Lowercase hex HMAC-SHA256 of ``"<timestamp>.<payload>"`` keyed with ``secret``."""
    signed = f"{int(timestamp)}.".encode("ascii") + _to_bytes(payload)
    return hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()


def generate_signature_header(payload: Payload, secret: str, timestamp: Optional[int] = None) -> str:
    """Build a header value the way billing.io does; useful for tests and local replay."""
    ts = int(time.time()) if timestamp is None else int(timestamp)
    return f"t={ts},v1={compute_signature(payload, secret, ts)}"


def _parse_sig_header(header: str) -> Tuple[int, str]:
    """
    Extract ``(timestamp, v1 signature)``. Segments that are not a single
    ``key=value`` pair, and unknown keys, are ignored.
    """
    parts: Dict[str, str] = {}
    for segment in header.split(","):
        segment = segment.strip()
        if segment.count("=") != 1:
            continue
        k, v = segment.split("=", 1)
        parts[k.strip()] = v.strip()

    ts_raw = parts.get("t")
    if not ts_raw:
        raise WebhookVerificationError(
            VerificationErrorKind.MALFORMED_HEADER_NO_TIMESTAMP,
            "invalid signature header format: missing timestamp (t=)",
        )
    if not _TIMESTAMP_RE.fullmatch(ts_raw):
        raise WebhookVerificationError(
            VerificationErrorKind.MALFORMED_HEADER_BAD_TIMESTAMP,
            "invalid signature header format: non-numeric timestamp",
        )

    sig = parts.get("v1")
    if not sig:
        raise WebhookVerificationError(
            VerificationErrorKind.MALFORMED_HEADER_NO_SIGNATURE,
            "invalid signature header format: missing signature (v1=)",
        )
    return int(ts_raw), sig


# ------------------------
# Verification
# ------------------------

def verify_signature_with_tolerance(
    payload: Payload,
    header: str,
    secret: str,
    tolerance: int,
    *,
    now: Optional[int] = None,
) -> WebhookEvent:
    """
    Verify a delivery and return the decoded event.

    Args:
      payload: raw request body, exactly as received.
      header: value of the ``X-Billing-Signature`` header.
      secret: the endpoint signing secret (``whsec_...``).
      tolerance: allowed clock skew in seconds; 0 disables the check.
      now: current unix time override (defaults to ``time.time()``).

    Raises:
      WebhookVerificationError: ``.kind`` says which check failed. The body
      is only decoded after the signature matched.
    """
    if not header:
        raise WebhookVerificationError(VerificationErrorKind.MISSING_SIGNATURE_HEADER, "missing signature header")
    if not secret:
        raise WebhookVerificationError(VerificationErrorKind.MISSING_SECRET, "missing webhook secret")

    timestamp, signature = _parse_sig_header(header)

    if tolerance > 0:
        current = int(time.time()) if now is None else int(now)
        if abs(current - timestamp) > tolerance:
            raise WebhookVerificationError(
                VerificationErrorKind.TIMESTAMP_OUTSIDE_TOLERANCE,
                f"timestamp outside tolerance: event={timestamp}, now={current}, tolerance={tolerance}s",
                timestamp=timestamp,
                now=current,
                tolerance=tolerance,
            )

    expected = compute_signature(payload, secret, timestamp)
    if not hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8")):
        raise WebhookVerificationError(VerificationErrorKind.SIGNATURE_MISMATCH, "signature mismatch")

    try:
        return WebhookEvent.model_validate_json(_to_bytes(payload))
    except ValidationError as e:
        raise WebhookVerificationError(
            VerificationErrorKind.INVALID_PAYLOAD,
            "invalid JSON in webhook body",
        ) from e


def verify_signature(payload: Payload, header: str, secret: str) -> WebhookEvent:
    """``verify_signature_with_tolerance`` with the default 300 second window."""
    return verify_signature_with_tolerance(payload, header, secret, DEFAULT_TOLERANCE)


def _get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    for k, v in headers.items():
        if k.lower() == name.lower():
            return v
    return None


def construct_event(
    body: Payload,
    headers: Mapping[str, str],
    secret: Optional[str] = None,
    *,
    tolerance: Optional[int] = None,
    config: Optional[BillingIOConfig] = None,
) -> WebhookEvent:
    """
    Verify straight from a request's header mapping (any casing of
    ``X-Billing-Signature``). A missing header is reported as
    ``missing_signature_header``.

    ``secret`` and ``tolerance`` default to ``config.webhook_secret`` and
    ``config.webhook_tolerance``; without a config they come from
    ``BILLINGIO_WEBHOOK_SECRET`` / ``BILLINGIO_WEBHOOK_TOLERANCE`` (300s).
    """
    if secret is None or tolerance is None:
        cfg = config or BillingIOConfig()
        if secret is None:
            secret = cfg.webhook_secret or ""
        if tolerance is None:
            tolerance = cfg.webhook_tolerance
    header = _get_header(headers, SIGNATURE_HEADER) or ""
    return verify_signature_with_tolerance(body, header, secret, tolerance)


# ------------------------
# Tiny event router
# ------------------------

Handler = Callable[[WebhookEvent], Any]


class WebhookRouter:
    """
    Minimal event router:
        router = WebhookRouter()
        @router.on(EventType.CHECKOUT_COMPLETED)
        def _paid(e): ...
        # wildcard handler:
        @router.on("*")
        def _all(e): ...

        event = construct_event(body, headers, secret)
        results = router.dispatch(event)

    Handler exceptions propagate to the caller; remaining handlers are not run.
    """
    def __init__(self) -> None:
        self._map: Dict[str, List[Handler]] = {}

    @staticmethod
    def _key(event_type: Union[EventType, str]) -> str:
        key = event_type.value if isinstance(event_type, EventType) else event_type
        if not key or not isinstance(key, str):
            raise ValueError("event_type must be an EventType or a non-empty string (or '*').")
        return key

    def on(self, event_type: Union[EventType, str]) -> Callable[[Handler], Handler]:
        key = self._key(event_type)

        def _decorator(func: Handler) -> Handler:
            self.add(key, func)
            return func

        return _decorator

    def add(self, event_type: Union[EventType, str], func: Handler) -> None:
        key = self._key(event_type)
        self._map.setdefault(key, []).append(func)
        dprint("webhook.router.add()", {"event_type": key, "handler": getattr(func, "__name__", "handler")})

    def handlers_for(self, event_type: Union[EventType, str]) -> Iterable[Handler]:
        return [*self._map.get(self._key(event_type), []), *self._map.get("*", [])]

    def dispatch(self, event: WebhookEvent) -> List[Any]:
        dprint("webhook.router.dispatch()", {"type": self._key(event.type), "event_id": event.event_id})
        return [fn(event) for fn in self.handlers_for(event.type)]


__all__ = [
    "SIGNATURE_HEADER",
    "DEFAULT_TOLERANCE",
    "compute_signature",
    "generate_signature_header",
    "verify_signature",
    "verify_signature_with_tolerance",
    "construct_event",
    "WebhookRouter",
]
