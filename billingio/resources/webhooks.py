from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence, Union

from ..client import BillingIOClient
from ..debug import dprint, djson
from ..models import EventType, ListPage, WebhookEndpoint
from ..pagination import PageIterator
from ._base import _list_params, _paginate, _require_enum, _validate_id

_BASE = "/webhooks"


class WebhooksAPI:
    """
    Webhook endpoint management (registering where deliveries go).

    Verifying the deliveries themselves lives in ``billingio.webhook``.
    """

    def __init__(self, client: BillingIOClient):
        self.client = client

    def create(
        self,
        *,
        url: str,
        events: Sequence[Union[EventType, str]],
        description: Optional[str] = None,
        **extra: Any,
    ) -> WebhookEndpoint:
        """
        Register an endpoint. The returned ``WebhookEndpoint.secret`` is the
        signing secret and is only shown once.
        """
        _validate_id("url", url)
        if not events:
            raise ValueError("events must list at least one EventType.")
        event_values: List[str] = [_require_enum(EventType, e, "events").value for e in events]

        body: Dict[str, Any] = {"url": url, "events": event_values}
        if description:
            body["description"] = description
        body.update(extra)

        dprint("webhooks.create()", {"url": url, "events": event_values})
        djson("webhooks.create body", body)
        resp = self.client.post(_BASE, json=body)
        return WebhookEndpoint.model_validate(resp)

    def get(self, webhook_id: str) -> WebhookEndpoint:
        _validate_id("webhook_id", webhook_id)
        dprint("webhooks.get()", {"webhook_id": webhook_id})
        resp = self.client.get(f"{_BASE}/{webhook_id}")
        return WebhookEndpoint.model_validate(resp)

    def delete(self, webhook_id: str) -> None:
        _validate_id("webhook_id", webhook_id)
        dprint("webhooks.delete()", {"webhook_id": webhook_id})
        self.client.delete(f"{_BASE}/{webhook_id}")

    def list(
        self,
        *,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> ListPage[WebhookEndpoint]:
        return self._list(_list_params(cursor=cursor, limit=limit, extra_params=extra_params))

    def list_auto_paginate(
        self,
        *,
        limit: Optional[int] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> PageIterator[WebhookEndpoint]:
        return _paginate("webhooks", self._list, _list_params(limit=limit, extra_params=extra_params))

    def _list(self, params: Dict[str, Any]) -> ListPage[WebhookEndpoint]:
        dprint("webhooks.list()", {"params": params})
        resp = self.client.get(_BASE, params=params)
        return ListPage[WebhookEndpoint].model_validate(resp)


__all__ = ["WebhooksAPI"]
