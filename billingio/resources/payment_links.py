from __future__ import annotations
from typing import Any, Dict, Optional, Union

from ..client import BillingIOClient
from ..debug import dprint, djson
from ..models import Chain, ListPage, PaymentLink, Token
from ..pagination import PageIterator
from ._base import _list_params, _paginate, _require_enum

_BASE = "/payment-links"


class PaymentLinksAPI:
    """Shareable hosted payment pages; each visit opens a fresh checkout."""

    def __init__(self, client: BillingIOClient):
        self.client = client

    def create(
        self,
        *,
        amount_usd: float,
        chain: Union[Chain, str],
        token: Union[Token, str],
        metadata: Optional[Dict[str, str]] = None,
        **extra: Any,
    ) -> PaymentLink:
        if not isinstance(amount_usd, (int, float)) or amount_usd <= 0:
            raise ValueError("amount_usd must be positive.")
        body: Dict[str, Any] = {
            "amount_usd": amount_usd,
            "chain": _require_enum(Chain, chain, "chain").value,
            "token": _require_enum(Token, token, "token").value,
            **extra,
        }
        if metadata:
            body["metadata"] = metadata
        djson("payment_links.create body", body)
        resp = self.client.post(_BASE, json=body)
        return PaymentLink.model_validate(resp)

    def list(
        self,
        *,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> ListPage[PaymentLink]:
        return self._list(_list_params(cursor=cursor, limit=limit, extra_params=extra_params))

    def list_auto_paginate(
        self,
        *,
        limit: Optional[int] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> PageIterator[PaymentLink]:
        return _paginate("payment_links", self._list, _list_params(limit=limit, extra_params=extra_params))

    def _list(self, params: Dict[str, Any]) -> ListPage[PaymentLink]:
        dprint("payment_links.list()", {"params": params})
        resp = self.client.get(_BASE, params=params)
        return ListPage[PaymentLink].model_validate(resp)


__all__ = ["PaymentLinksAPI"]
