from __future__ import annotations
from typing import Any, Dict, Optional, Union

from ..client import BillingIOClient
from ..debug import dprint
from ..models import Event, EventType, ListPage
from ..pagination import PageIterator
from ._base import _enum_or_none, _list_params, _paginate, _validate_id

_BASE = "/events"


class EventsAPI:
    """
    Event log (the same records that are pushed as webhooks), newest first.
    Handy for reconciling after an endpoint outage.
    """

    def __init__(self, client: BillingIOClient):
        self.client = client

    def get(self, event_id: str) -> Event:
        _validate_id("event_id", event_id)
        dprint("events.get()", {"event_id": event_id})
        resp = self.client.get(f"{_BASE}/{event_id}")
        return Event.model_validate(resp)

    def list(
        self,
        *,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        type: Union[EventType, str, None] = None,
        checkout_id: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> ListPage[Event]:
        params = _list_params(
            cursor=cursor,
            limit=limit,
            type=_enum_or_none(EventType, type, "type"),
            checkout_id=checkout_id,
            extra_params=extra_params,
        )
        return self._list(params)

    def list_auto_paginate(
        self,
        *,
        limit: Optional[int] = None,
        type: Union[EventType, str, None] = None,
        checkout_id: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> PageIterator[Event]:
        params = _list_params(
            limit=limit,
            type=_enum_or_none(EventType, type, "type"),
            checkout_id=checkout_id,
            extra_params=extra_params,
        )
        return _paginate("events", self._list, params)

    def _list(self, params: Dict[str, Any]) -> ListPage[Event]:
        dprint("events.list()", {"params": params})
        resp = self.client.get(_BASE, params=params)
        return ListPage[Event].model_validate(resp)


__all__ = ["EventsAPI"]
