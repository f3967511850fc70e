from __future__ import annotations
from typing import Any, Dict, Optional, Union

from ..client import BillingIOClient
from ..debug import dprint, djson
from ..models import Chain, ListPage, PaymentMethod, Token
from ..pagination import PageIterator
from ._base import _list_params, _paginate, _require_enum, _validate_id

_BASE = "/payment-methods"


class PaymentMethodsAPI:
    """Saved payer wallets (chain + token + address) attached to a customer."""

    def __init__(self, client: BillingIOClient):
        self.client = client

    def create(
        self,
        *,
        customer_id: str,
        chain: Union[Chain, str],
        token: Union[Token, str],
        address: str,
        **extra: Any,
    ) -> PaymentMethod:
        _validate_id("customer_id", customer_id)
        _validate_id("address", address)
        body: Dict[str, Any] = {
            "customer_id": customer_id,
            "chain": _require_enum(Chain, chain, "chain").value,
            "token": _require_enum(Token, token, "token").value,
            "address": address,
            **extra,
        }
        djson("payment_methods.create body", body)
        resp = self.client.post(_BASE, json=body)
        return PaymentMethod.model_validate(resp)

    def update(self, payment_method_id: str, **fields: Any) -> PaymentMethod:
        _validate_id("payment_method_id", payment_method_id)
        if not fields:
            raise ValueError("update() needs at least one field to change.")
        djson("payment_methods.update body", fields)
        resp = self.client.patch(f"{_BASE}/{payment_method_id}", json=fields)
        return PaymentMethod.model_validate(resp)

    def delete(self, payment_method_id: str) -> None:
        _validate_id("payment_method_id", payment_method_id)
        dprint("payment_methods.delete()", {"payment_method_id": payment_method_id})
        self.client.delete(f"{_BASE}/{payment_method_id}")

    def set_default(self, payment_method_id: str) -> PaymentMethod:
        """Mark as the default method for its customer."""
        _validate_id("payment_method_id", payment_method_id)
        dprint("payment_methods.set_default()", {"payment_method_id": payment_method_id})
        resp = self.client.post(f"{_BASE}/{payment_method_id}/default")
        return PaymentMethod.model_validate(resp)

    def list(
        self,
        *,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        customer_id: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> ListPage[PaymentMethod]:
        return self._list(_list_params(cursor=cursor, limit=limit, customer_id=customer_id, extra_params=extra_params))

    def list_auto_paginate(
        self,
        *,
        limit: Optional[int] = None,
        customer_id: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> PageIterator[PaymentMethod]:
        params = _list_params(limit=limit, customer_id=customer_id, extra_params=extra_params)
        return _paginate("payment_methods", self._list, params)

    def _list(self, params: Dict[str, Any]) -> ListPage[PaymentMethod]:
        dprint("payment_methods.list()", {"params": params})
        resp = self.client.get(_BASE, params=params)
        return ListPage[PaymentMethod].model_validate(resp)


__all__ = ["PaymentMethodsAPI"]
