from __future__ import annotations
from typing import Any, Dict, Optional

from ..client import BillingIOClient
from ..debug import dprint
from ..models import AccountingSummary, ListPage, RevenueEvent
from ..pagination import PageIterator
from ._base import _list_params, _paginate

_BASE = "/revenue/events"


class RevenueEventsAPI:
    """Revenue ledger entries and the aggregated accounting summary."""

    def __init__(self, client: BillingIOClient):
        self.client = client

    def accounting(
        self,
        *,
        period_start: Optional[str] = None,
        period_end: Optional[str] = None,
    ) -> AccountingSummary:
        """
        Aggregated revenue for ``[period_start, period_end]`` (ISO-8601 dates;
        either bound may be omitted).
        """
        params = {"period_start": period_start, "period_end": period_end}
        dprint("revenue_events.accounting()", params)
        resp = self.client.get("/revenue/accounting", params=params)
        return AccountingSummary.model_validate(resp)

    def list(
        self,
        *,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        type: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> ListPage[RevenueEvent]:
        return self._list(_list_params(cursor=cursor, limit=limit, type=type, extra_params=extra_params))

    def list_auto_paginate(
        self,
        *,
        limit: Optional[int] = None,
        type: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> PageIterator[RevenueEvent]:
        return _paginate("revenue_events", self._list, _list_params(limit=limit, type=type, extra_params=extra_params))

    def _list(self, params: Dict[str, Any]) -> ListPage[RevenueEvent]:
        dprint("revenue_events.list()", {"params": params})
        resp = self.client.get(_BASE, params=params)
        return ListPage[RevenueEvent].model_validate(resp)


__all__ = ["RevenueEventsAPI"]
