from __future__ import annotations
from typing import Any, Dict, Optional

from ..client import BillingIOClient
from ..debug import dprint, djson
from ..models import ListPage, SubscriptionPlan
from ..pagination import PageIterator
from ._base import _list_params, _paginate, _validate_id

_BASE = "/subscriptions/plans"

_VALID_INTERVALS = {"daily", "weekly", "monthly", "quarterly", "yearly"}


class SubscriptionPlansAPI:
    """Price/interval templates that subscriptions are created from."""

    def __init__(self, client: BillingIOClient):
        self.client = client

    def create(
        self,
        *,
        name: str,
        amount_usd: float,
        interval: str,
        **extra: Any,
    ) -> SubscriptionPlan:
        _validate_id("name", name)
        if not isinstance(amount_usd, (int, float)) or amount_usd <= 0:
            raise ValueError("amount_usd must be positive.")
        interval = (interval or "").strip().lower()
        if interval not in _VALID_INTERVALS:
            raise ValueError(f"interval must be one of {sorted(_VALID_INTERVALS)}")

        body: Dict[str, Any] = {"name": name, "amount_usd": amount_usd, "interval": interval, **extra}
        djson("subscription_plans.create body", body)
        resp = self.client.post(_BASE, json=body)
        return SubscriptionPlan.model_validate(resp)

    def update(self, plan_id: str, **fields: Any) -> SubscriptionPlan:
        _validate_id("plan_id", plan_id)
        if not fields:
            raise ValueError("update() needs at least one field to change.")
        djson("subscription_plans.update body", fields)
        resp = self.client.patch(f"{_BASE}/{plan_id}", json=fields)
        return SubscriptionPlan.model_validate(resp)

    def list(
        self,
        *,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        status: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> ListPage[SubscriptionPlan]:
        return self._list(_list_params(cursor=cursor, limit=limit, status=status, extra_params=extra_params))

    def list_auto_paginate(
        self,
        *,
        limit: Optional[int] = None,
        status: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> PageIterator[SubscriptionPlan]:
        params = _list_params(limit=limit, status=status, extra_params=extra_params)
        return _paginate("subscription_plans", self._list, params)

    def _list(self, params: Dict[str, Any]) -> ListPage[SubscriptionPlan]:
        dprint("subscription_plans.list()", {"params": params})
        resp = self.client.get(_BASE, params=params)
        return ListPage[SubscriptionPlan].model_validate(resp)


__all__ = ["SubscriptionPlansAPI"]
