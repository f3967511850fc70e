from __future__ import annotations
import json
from enum import Enum
from typing import Any, Optional, Dict

from .debug import dprint, djson


class BillingIOError(Exception):
    """Base exception for all billing.io SDK errors."""
    pass


class BillingIOConfigError(BillingIOError):
    """Raised when configuration/credentials are invalid or missing."""
    pass


class BillingIOAPIError(BillingIOError):
    """
    Unified error for API requests.

    The API wraps failures in an envelope::

        {"error": {"type": "not_found", "code": "checkout_not_found",
                   "message": "...", "param": null}}

    Attributes
    ----------
    status : int
        HTTP status code (or -1 for network errors).
    payload : Any
        Parsed JSON or fallback body describing the error (kept verbatim).
    request_id : Optional[str]
        Server-provided request correlation id, if available.
    method, url : Optional[str]
        Best-effort request line that triggered the error.

    Convenience
    -----------
    .type            -> high-level category ("invalid_request", "not_found", ...)
    .code            -> machine-readable code ("checkout_not_found", ...)
    .param           -> offending request parameter, if any
    .message_text    -> human-friendly error message
    .to_dict()       -> sanitized summary dict for logging
    """

    def __init__(
        self,
        status: int,
        payload: Any,
        request_id: Optional[str] = None,
        *,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ):
        self.status = int(status)
        self.payload = payload
        self.request_id = request_id
        self.method = method
        self.url = url

        dprint("BillingIOAPIError", {
            "status": self.status,
            "request_id": self.request_id,
            "method": self.method,
            "url": self.url,
        })
        djson("BillingIOAPIError payload", self.payload)

        super().__init__(self._message())

    # ---------------- envelope accessors ----------------

    def _envelope(self) -> Dict[str, Any]:
        p = self.payload
        if isinstance(p, dict) and isinstance(p.get("error"), dict):
            return p["error"]
        return {}

    @property
    def type(self) -> str:
        t = self._envelope().get("type")
        return str(t) if t else "internal_error"

    @property
    def code(self) -> str:
        c = self._envelope().get("code")
        return str(c) if c else "unknown"

    @property
    def param(self) -> Optional[str]:
        p = self._envelope().get("param")
        return str(p) if p is not None else None

    @property
    def message_text(self) -> str:
        """
        Human-friendly message from the envelope, or a short preview of
        whatever body the server sent.
        """
        msg = self._envelope().get("message")
        if isinstance(msg, str) and msg.strip():
            return msg.strip()
        p = self.payload
        if isinstance(p, str):
            body = p.strip()
        elif isinstance(p, dict) and isinstance(p.get("message"), str):
            body = p["message"].strip()
        else:
            try:
                body = json.dumps(p, ensure_ascii=False)
            except (TypeError, ValueError):
                body = repr(p)
        if len(body) > 240:
            body = body[:237] + "..."
        return f"unexpected error (HTTP {self.status}): {body}"

    # ---------------- rendering & serialization ----------------

    def _message(self) -> str:
        rid = f" req_id={self.request_id}" if self.request_id else ""
        meth = f" {self.method}" if self.method else ""
        url = f" {self.url}" if self.url else ""
        param = f", param={self.param}" if self.param else ""
        return f"billingio:{meth}{url}{rid} {self.message_text} (code={self.code}, status={self.status}{param})"

    def __str__(self) -> str:
        return self._message()

    def __repr__(self) -> str:
        return f"BillingIOAPIError(status={self.status}, type={self.type!r}, code={self.code!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Sanitized summary for logs/telemetry; includes only non-sensitive fields."""
        return {
            "status": self.status,
            "request_id": self.request_id,
            "method": self.method,
            "url": self.url,
            "type": self.type,
            "code": self.code,
            "param": self.param,
            "message": self.message_text,
        }


def is_not_found(err: BaseException) -> bool:
    return isinstance(err, BillingIOAPIError) and err.type == "not_found"


def is_rate_limited(err: BaseException) -> bool:
    return isinstance(err, BillingIOAPIError) and err.type == "rate_limited"


def is_auth_error(err: BaseException) -> bool:
    return isinstance(err, BillingIOAPIError) and err.type == "authentication_error"


# ------------------------------------------------------------------------------
# Webhook verification
# ------------------------------------------------------------------------------

class VerificationErrorKind(str, Enum):
    MISSING_SIGNATURE_HEADER = "missing_signature_header"
    MISSING_SECRET = "missing_secret"
    MALFORMED_HEADER_NO_TIMESTAMP = "malformed_header_no_timestamp"
    MALFORMED_HEADER_BAD_TIMESTAMP = "malformed_header_bad_timestamp"
    MALFORMED_HEADER_NO_SIGNATURE = "malformed_header_no_signature"
    TIMESTAMP_OUTSIDE_TOLERANCE = "timestamp_outside_tolerance"
    SIGNATURE_MISMATCH = "signature_mismatch"
    INVALID_PAYLOAD = "invalid_payload"


class WebhookVerificationError(BillingIOError):
    """
    Raised when an inbound webhook cannot be trusted or decoded.

    ``kind`` tells callers *why*; extra keyword details (e.g. ``timestamp``,
    ``now``, ``tolerance`` for window failures) are kept on ``detail``.
    """

    def __init__(self, kind: VerificationErrorKind, message: str, **detail: Any):
        self.kind = kind
        self.message = message
        self.detail: Dict[str, Any] = detail
        super().__init__(f"billingio: webhook verification failed: {message}")

    def __repr__(self) -> str:
        return f"WebhookVerificationError(kind={self.kind.value!r}, message={self.message!r})"


__all__ = [
    "BillingIOError",
    "BillingIOConfigError",
    "BillingIOAPIError",
    "is_not_found",
    "is_rate_limited",
    "is_auth_error",
    "VerificationErrorKind",
    "WebhookVerificationError",
]
