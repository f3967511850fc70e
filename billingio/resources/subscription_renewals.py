from __future__ import annotations
from typing import Any, Dict, Optional

from ..client import BillingIOClient
from ..debug import dprint
from ..models import ListPage, SubscriptionRenewal
from ..pagination import PageIterator
from ._base import _list_params, _paginate, _validate_id

_BASE = "/subscriptions/renewals"


class SubscriptionRenewalsAPI:
    """Per-period renewal attempts; failed ones can be retried."""

    def __init__(self, client: BillingIOClient):
        self.client = client

    def retry(self, renewal_id: str) -> SubscriptionRenewal:
        """Ask the server to re-attempt a failed renewal."""
        _validate_id("renewal_id", renewal_id)
        dprint("subscription_renewals.retry()", {"renewal_id": renewal_id})
        resp = self.client.post(f"{_BASE}/{renewal_id}/retry")
        return SubscriptionRenewal.model_validate(resp)

    def list(
        self,
        *,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        subscription_id: Optional[str] = None,
        status: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> ListPage[SubscriptionRenewal]:
        params = _list_params(
            cursor=cursor,
            limit=limit,
            subscription_id=subscription_id,
            status=status,
            extra_params=extra_params,
        )
        return self._list(params)

    def list_auto_paginate(
        self,
        *,
        limit: Optional[int] = None,
        subscription_id: Optional[str] = None,
        status: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> PageIterator[SubscriptionRenewal]:
        params = _list_params(limit=limit, subscription_id=subscription_id, status=status, extra_params=extra_params)
        return _paginate("subscription_renewals", self._list, params)

    def _list(self, params: Dict[str, Any]) -> ListPage[SubscriptionRenewal]:
        dprint("subscription_renewals.list()", {"params": params})
        resp = self.client.get(_BASE, params=params)
        return ListPage[SubscriptionRenewal].model_validate(resp)


__all__ = ["SubscriptionRenewalsAPI"]
