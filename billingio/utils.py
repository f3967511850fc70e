from __future__ import annotations
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from dateutil.parser import isoparse

from .debug import dprint


# ==============================================================================
# Idempotency keys
# ==============================================================================

def make_idempotency_key(prefix: Optional[str] = "bio") -> str:
    """
    Generate a safe Idempotency-Key string. Length kept < 64 chars.
    """
    base = (prefix or "bio").strip() or "bio"
    key = f"{base}_{uuid.uuid4().hex}"
    if len(key) > 64:
        key = key[:64]
    dprint("utils.make_idempotency_key()", {"key": key})
    return key


def ensure_idempotency_key(existing: Optional[str], prefix: Optional[str] = "bio") -> str:
    """
    Return existing if provided, otherwise generate a new one.
    """
    if isinstance(existing, str) and existing.strip():
        return existing.strip()
    return make_idempotency_key(prefix=prefix)


# ==============================================================================
# Query params
# ==============================================================================

def _param_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    # str-Enums (CheckoutStatus, EventType, ...) go out as their wire value
    return str(getattr(value, "value", value))


def clean_params(params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """
    Drop None/empty values and stringify the rest; the API treats an absent
    filter and an empty one the same way.
    """
    out: Dict[str, str] = {}
    for k, v in (params or {}).items():
        if v is None:
            continue
        s = _param_str(v)
        if s == "":
            continue
        out[str(k)] = s
    return out


# ==============================================================================
# Time helpers
# ==============================================================================

def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an API timestamp string. Returns None for empty input; naive values
    are assumed to be UTC.
    """
    if not value:
        return None
    dt = isoparse(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


__all__ = [
    "make_idempotency_key",
    "ensure_idempotency_key",
    "clean_params",
    "parse_timestamp",
]
