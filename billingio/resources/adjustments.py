from __future__ import annotations
from typing import Any, Dict, Optional

from ..client import BillingIOClient
from ..debug import dprint, djson
from ..models import Adjustment, ListPage
from ..pagination import PageIterator
from ._base import _list_params, _paginate, _validate_id

_BASE = "/revenue/adjustments"


class AdjustmentsAPI:
    """Manual revenue adjustments (credits, write-offs, corrections)."""

    def __init__(self, client: BillingIOClient):
        self.client = client

    def create(
        self,
        *,
        type: str,
        amount_usd: float,
        reason: Optional[str] = None,
        **extra: Any,
    ) -> Adjustment:
        _validate_id("type", type)
        if not isinstance(amount_usd, (int, float)) or isinstance(amount_usd, bool):
            raise ValueError("amount_usd must be a number.")
        body: Dict[str, Any] = {"type": type, "amount_usd": amount_usd, **extra}
        if reason:
            body["reason"] = reason
        djson("adjustments.create body", body)
        resp = self.client.post(_BASE, json=body)
        return Adjustment.model_validate(resp)

    def list(
        self,
        *,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        type: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> ListPage[Adjustment]:
        return self._list(_list_params(cursor=cursor, limit=limit, type=type, extra_params=extra_params))

    def list_auto_paginate(
        self,
        *,
        limit: Optional[int] = None,
        type: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> PageIterator[Adjustment]:
        return _paginate("adjustments", self._list, _list_params(limit=limit, type=type, extra_params=extra_params))

    def _list(self, params: Dict[str, Any]) -> ListPage[Adjustment]:
        dprint("adjustments.list()", {"params": params})
        resp = self.client.get(_BASE, params=params)
        return ListPage[Adjustment].model_validate(resp)


__all__ = ["AdjustmentsAPI"]
