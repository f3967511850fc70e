from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Optional, Dict

from dotenv import load_dotenv

from .debug import mask_api_key
from .errors import BillingIOConfigError

load_dotenv()


DEFAULT_BASE_URL = "https://api.billing.io/v1"
DEFAULT_TIMEOUT = 30.0
DEFAULT_WEBHOOK_TOLERANCE = 300


# ----------------------------- helpers -----------------------------

def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    v = value.strip().lower()
    return v not in ("0", "false", "no", "off", "")


def _parse_float(value: Optional[str], default: float) -> float:
    try:
        return float(value) if value is not None else default
    except ValueError:
        return default


def _parse_int(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


def _normalize_base_url(url: Optional[str]) -> str:
    url = (url or "").strip()
    if not url:
        return DEFAULT_BASE_URL
    return url.rstrip("/")


def _dprint(enabled: bool, *args) -> None:
    if enabled:
        print("[BillingIO][Config]", *args)


# ----------------------------- config -----------------------------

@dataclass
class BillingIOConfig:
    """
    Configuration with precedence:
      explicit kwargs > environment (.env) > defaults

    API calls require ``api_key``. ``webhook_secret`` is only needed by the
    receiving side (see ``billingio.webhook``).
    """

    # Credentials
    api_key: Optional[str] = None

    # Routing / network
    base_url: Optional[str] = None
    timeout: Optional[float] = None

    # Webhooks
    webhook_secret: Optional[str] = None
    webhook_tolerance: Optional[int] = None

    # Diagnostics
    debug: Optional[bool] = None

    # Where each field was sourced from (arg/env/default)
    _source: Dict[str, str] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        env = os.environ

        if not self.api_key:
            self.api_key = env.get("BILLINGIO_API_KEY", "")
            self._source["api_key"] = "env"
        else:
            self._source["api_key"] = "arg"

        if not self.base_url:
            self.base_url = _normalize_base_url(env.get("BILLINGIO_BASE_URL"))
            self._source["base_url"] = "env/default"
        else:
            self.base_url = _normalize_base_url(self.base_url)
            self._source["base_url"] = "arg"

        if self.timeout is None:
            self.timeout = _parse_float(env.get("BILLINGIO_TIMEOUT"), DEFAULT_TIMEOUT)
            self._source["timeout"] = "env/default"
        else:
            self.timeout = float(self.timeout)
            self._source["timeout"] = "arg"

        if not self.webhook_secret:
            self.webhook_secret = env.get("BILLINGIO_WEBHOOK_SECRET", "")
            self._source["webhook_secret"] = "env"
        else:
            self._source["webhook_secret"] = "arg"

        if self.webhook_tolerance is None:
            self.webhook_tolerance = _parse_int(env.get("BILLINGIO_WEBHOOK_TOLERANCE"), DEFAULT_WEBHOOK_TOLERANCE)
            self._source["webhook_tolerance"] = "env/default"
        else:
            self.webhook_tolerance = int(self.webhook_tolerance)
            self._source["webhook_tolerance"] = "arg"
        if self.webhook_tolerance < 0:
            raise BillingIOConfigError("webhook_tolerance must be >= 0 (0 disables the timestamp check).")

        if self.debug is None:
            self.debug = _parse_bool(env.get("BILLINGIO_DEBUG"), False)
            self._source["debug"] = "env/default"
        else:
            self.debug = bool(self.debug)
            self._source["debug"] = "arg"

        _dprint(bool(self.debug), "Loaded config:", {**self.masked(), "source": self._source})

    # -------- validation & utils --------
    def validate(self) -> "BillingIOConfig":
        """Validate presence of the API key for server-side API calls."""
        if not self.api_key:
            _dprint(bool(self.debug), "Validation failed: api_key missing")
            raise BillingIOConfigError("BILLINGIO_API_KEY is required for API calls.")
        _dprint(bool(self.debug), "Validation OK")
        return self

    def require_webhook_secret(self) -> str:
        """Ensure a webhook signing secret is present (receiving side)."""
        if not self.webhook_secret:
            raise BillingIOConfigError("BILLINGIO_WEBHOOK_SECRET is required to verify webhooks.")
        return self.webhook_secret

    def masked(self) -> dict:
        """Return a sanitized dict for logging/diagnostics."""
        return {
            "api_key": mask_api_key(self.api_key),
            "base_url": self.base_url,
            "timeout": self.timeout,
            "webhook_secret": "***" if self.webhook_secret else "(empty)",
            "webhook_tolerance": self.webhook_tolerance,
            "debug": self.debug,
        }

    def copy_with(
        self,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        webhook_secret: Optional[str] = None,
        webhook_tolerance: Optional[int] = None,
        debug: Optional[bool] = None,
    ) -> "BillingIOConfig":
        """Create a modified copy (handy in tests)."""
        return replace(
            self,
            api_key=self.api_key if api_key is None else api_key,
            base_url=_normalize_base_url(base_url if base_url is not None else self.base_url),
            timeout=self.timeout if timeout is None else float(timeout),
            webhook_secret=self.webhook_secret if webhook_secret is None else webhook_secret,
            webhook_tolerance=self.webhook_tolerance if webhook_tolerance is None else int(webhook_tolerance),
            debug=self.debug if debug is None else bool(debug),
        )

    # -------- alt constructors --------
    @classmethod
    def from_env(cls) -> "BillingIOConfig":
        """Build config strictly from environment (.env considered if loaded)."""
        return cls().validate()


__all__ = ["BillingIOConfig", "DEFAULT_BASE_URL", "DEFAULT_WEBHOOK_TOLERANCE"]
