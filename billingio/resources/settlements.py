from __future__ import annotations
from typing import Any, Dict, Optional

from ..client import BillingIOClient
from ..debug import dprint
from ..models import ListPage, Settlement
from ..pagination import PageIterator
from ._base import _list_params, _paginate

_BASE = "/payouts/settlements"


class SettlementsAPI:
    """On-chain settlements of executed payouts (read-only)."""

    def __init__(self, client: BillingIOClient):
        self.client = client

    def list(
        self,
        *,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        payout_id: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> ListPage[Settlement]:
        return self._list(_list_params(cursor=cursor, limit=limit, payout_id=payout_id, extra_params=extra_params))

    def list_auto_paginate(
        self,
        *,
        limit: Optional[int] = None,
        payout_id: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> PageIterator[Settlement]:
        params = _list_params(limit=limit, payout_id=payout_id, extra_params=extra_params)
        return _paginate("settlements", self._list, params)

    def _list(self, params: Dict[str, Any]) -> ListPage[Settlement]:
        dprint("settlements.list()", {"params": params})
        resp = self.client.get(_BASE, params=params)
        return ListPage[Settlement].model_validate(resp)


__all__ = ["SettlementsAPI"]
