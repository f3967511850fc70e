from __future__ import annotations
from typing import Any, Dict, Optional

from ..client import BillingIOClient
from ..debug import dprint, djson
from ..models import ListPage, Subscription
from ..pagination import PageIterator
from ._base import _list_params, _paginate, _validate_id

_BASE = "/subscriptions"


class SubscriptionsAPI:
    """
    Subscriptions API.

    - Create a subscription binding a customer to a plan.
    - ``update`` PATCHes the given fields (e.g. ``status="canceled"``,
      ``plan_id=...`` to switch plans).
    - Filter lists by customer, plan or status.
    """

    def __init__(self, client: BillingIOClient):
        self.client = client

    # ------------------------ create ------------------------

    def create(
        self,
        *,
        customer_id: str,
        plan_id: str,
        payment_method_id: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
        **extra: Any,
    ) -> Subscription:
        _validate_id("customer_id", customer_id)
        _validate_id("plan_id", plan_id)

        body: Dict[str, Any] = {"customer_id": customer_id, "plan_id": plan_id}
        if payment_method_id:
            body["payment_method_id"] = payment_method_id
        if metadata:
            body["metadata"] = metadata
        body.update(extra)

        dprint("subscriptions.create()", {"customer_id": customer_id, "plan_id": plan_id})
        djson("subscriptions.create body", body)
        resp = self.client.post(_BASE, json=body)
        return Subscription.model_validate(resp)

    # ------------------------ update ------------------------

    def update(self, subscription_id: str, **fields: Any) -> Subscription:
        _validate_id("subscription_id", subscription_id)
        if not fields:
            raise ValueError("update() needs at least one field to change.")
        djson("subscriptions.update body", fields)
        resp = self.client.patch(f"{_BASE}/{subscription_id}", json=fields)
        return Subscription.model_validate(resp)

    # ------------------------ list ------------------------

    def list(
        self,
        *,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        customer_id: Optional[str] = None,
        plan_id: Optional[str] = None,
        status: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> ListPage[Subscription]:
        params = _list_params(
            cursor=cursor,
            limit=limit,
            customer_id=customer_id,
            plan_id=plan_id,
            status=status,
            extra_params=extra_params,
        )
        return self._list(params)

    def list_auto_paginate(
        self,
        *,
        limit: Optional[int] = None,
        customer_id: Optional[str] = None,
        plan_id: Optional[str] = None,
        status: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> PageIterator[Subscription]:
        params = _list_params(
            limit=limit,
            customer_id=customer_id,
            plan_id=plan_id,
            status=status,
            extra_params=extra_params,
        )
        return _paginate("subscriptions", self._list, params)

    def _list(self, params: Dict[str, Any]) -> ListPage[Subscription]:
        dprint("subscriptions.list()", {"params": params})
        resp = self.client.get(_BASE, params=params)
        return ListPage[Subscription].model_validate(resp)


__all__ = ["SubscriptionsAPI"]
