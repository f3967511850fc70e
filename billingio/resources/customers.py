from __future__ import annotations
from typing import Any, Dict, Optional

from ..client import BillingIOClient
from ..debug import dprint, djson
from ..models import Customer, ListPage
from ..pagination import PageIterator
from ._base import _list_params, _paginate, _validate_id

_BASE = "/customers"


class CustomersAPI:
    """Customers: the payers that subscriptions and payment methods hang off."""

    def __init__(self, client: BillingIOClient):
        self.client = client

    def create(
        self,
        *,
        email: Optional[str] = None,
        name: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
        **extra: Any,
    ) -> Customer:
        body: Dict[str, Any] = {"email": email, "name": name, "metadata": metadata, **extra}
        body = {k: v for k, v in body.items() if v is not None}
        djson("customers.create body", body)
        resp = self.client.post(_BASE, json=body)
        return Customer.model_validate(resp)

    def get(self, customer_id: str) -> Customer:
        _validate_id("customer_id", customer_id)
        dprint("customers.get()", {"customer_id": customer_id})
        resp = self.client.get(f"{_BASE}/{customer_id}")
        return Customer.model_validate(resp)

    def update(self, customer_id: str, **fields: Any) -> Customer:
        """PATCH only the given fields (``email=...``, ``metadata=...``)."""
        _validate_id("customer_id", customer_id)
        if not fields:
            raise ValueError("update() needs at least one field to change.")
        djson("customers.update body", fields)
        resp = self.client.patch(f"{_BASE}/{customer_id}", json=fields)
        return Customer.model_validate(resp)

    def list(
        self,
        *,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        status: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> ListPage[Customer]:
        return self._list(_list_params(cursor=cursor, limit=limit, status=status, extra_params=extra_params))

    def list_auto_paginate(
        self,
        *,
        limit: Optional[int] = None,
        status: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> PageIterator[Customer]:
        return _paginate("customers", self._list, _list_params(limit=limit, status=status, extra_params=extra_params))

    def _list(self, params: Dict[str, Any]) -> ListPage[Customer]:
        dprint("customers.list()", {"params": params})
        resp = self.client.get(_BASE, params=params)
        return ListPage[Customer].model_validate(resp)


__all__ = ["CustomersAPI"]
