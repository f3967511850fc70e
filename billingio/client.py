from __future__ import annotations

import platform
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

from . import __version__ as SDK_VERSION
from .config import BillingIOConfig
from .debug import dprint, djson, scrub_headers
from .errors import BillingIOAPIError
from .utils import clean_params


# -------------------- constants --------------------

REQUEST_ID_HEADERS: Tuple[str, ...] = ("X-Request-ID", "X-Request-Id")

RATE_HEADERS: Tuple[str, ...] = (
    "X-RateLimit-Limit",
    "X-RateLimit-Remaining",
    "X-RateLimit-Reset",
)


def _first_header(headers: httpx.Headers, names: Tuple[str, ...]) -> Optional[str]:
    for n in names:
        v = headers.get(n)
        if v:
            return v
    return None


class BillingIOClient:
    """
    Lightweight sync client for the billing.io REST API.

    - Adds ``Authorization: Bearer <api_key>``.
    - Supports Idempotency-Key on mutating requests.
    - Decodes the ``{"error": {...}}`` envelope of non-2xx responses into
      ``BillingIOAPIError``.
    - No retries: wrap calls yourself (``BillingIOAPIError.status`` /
      ``is_rate_limited``) if you need them.
    - Prints sanitized debug logs (Authorization redacted).

    ``transport`` lets tests (or callers with special networking needs) plug
    in any ``httpx.BaseTransport``, e.g. ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: BillingIOConfig,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.config = config.validate()
        self.user_agent = f"billing-python/{SDK_VERSION} Python/{platform.python_version()}"

        self._client = httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            headers={"User-Agent": self.user_agent},
            transport=transport,
        )
        dprint(
            "Client init",
            {
                "base_url": self.config.base_url,
                "timeout": self.config.timeout,
                "debug": self.config.debug,
                "sdk_version": SDK_VERSION,
            },
        )

    # ------------ context manager support ------------
    def __enter__(self) -> "BillingIOClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------ internal helpers ------------
    def _headers(
        self,
        *,
        with_body: bool = False,
        idempotency_key: Optional[str] = None,
        extra: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, str]:
        h: Dict[str, str] = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Accept": "application/json",
        }
        if with_body:
            h["Content-Type"] = "application/json"
        if idempotency_key:
            h["Idempotency-Key"] = idempotency_key
        if extra:
            h.update(extra)
        djson("Request headers", scrub_headers(h))
        return h

    def _extract_meta(self, r: httpx.Response) -> Dict[str, Any]:
        meta: Dict[str, Any] = {k: r.headers.get(k) for k in RATE_HEADERS if k in r.headers}
        req_id = _first_header(r.headers, REQUEST_ID_HEADERS)
        if req_id:
            meta["request_id"] = req_id
        return meta

    def _handle(self, r: httpx.Response) -> Dict[str, Any]:
        meta = self._extract_meta(r)
        dprint("Response", {"status": r.status_code, "request_id": meta.get("request_id")})

        if r.status_code == 204 or not r.content:
            body: Any = {}
        else:
            try:
                body = r.json()
            except ValueError:
                body = r.text

        djson("Response body", body)

        if r.status_code >= 400:
            raise BillingIOAPIError(
                r.status_code,
                body,
                meta.get("request_id"),
                method=r.request.method,
                url=str(r.request.url),
            )

        if not isinstance(body, dict):
            # 2xx but not a JSON object; surface it rather than guess
            raise BillingIOAPIError(
                r.status_code,
                {"message": f"failed to decode response: {body!r}"[:300]},
                meta.get("request_id"),
                method=r.request.method,
                url=str(r.request.url),
            )
        return body

    def _send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        headers: Dict[str, str],
    ) -> httpx.Response:
        q = clean_params(params)
        dprint("HTTP send", {"method": method, "path": path, "params": q})
        try:
            return self._client.request(method, path, params=q or None, json=json, headers=headers)
        except httpx.HTTPError as e:
            dprint("Network error", {"error": repr(e)})
            raise BillingIOAPIError(-1, {"message": f"request failed: {e}"}, None, method=method, url=path) from e

    # ------------ public request helpers ------------
    def get(
        self,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        extra_headers: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        r = self._send("GET", path, params=params, headers=self._headers(extra=extra_headers))
        return self._handle(r)

    def post(
        self,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        idempotency_key: Optional[str] = None,
        extra_headers: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        if json is not None:
            djson("Request JSON", json)
        r = self._send(
            "POST",
            path,
            json=json,
            headers=self._headers(with_body=json is not None, idempotency_key=idempotency_key, extra=extra_headers),
        )
        return self._handle(r)

    def patch(
        self,
        path: str,
        *,
        json: Dict[str, Any],
        extra_headers: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        djson("Request JSON", json)
        r = self._send("PATCH", path, json=json, headers=self._headers(with_body=True, extra=extra_headers))
        return self._handle(r)

    def delete(
        self,
        path: str,
        *,
        extra_headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        r = self._send("DELETE", path, headers=self._headers(extra=extra_headers))
        self._handle(r)

    def close(self) -> None:
        dprint("Client close()")
        self._client.close()


__all__ = ["BillingIOClient"]
