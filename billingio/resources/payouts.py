from __future__ import annotations
from typing import Any, Dict, Optional, Union

from ..client import BillingIOClient
from ..debug import dprint, djson
from ..models import Chain, ListPage, Payout, Token
from ..pagination import PageIterator
from ._base import _list_params, _paginate, _require_enum, _validate_id

_BASE = "/payouts"


class PayoutsAPI:
    """
    Payouts of collected funds to a merchant wallet.

    Payouts are created as pending intents and only move money once
    ``execute`` is called.
    """

    def __init__(self, client: BillingIOClient):
        self.client = client

    def create(
        self,
        *,
        amount_usd: float,
        chain: Union[Chain, str],
        token: Union[Token, str],
        destination: str,
        idempotency_key: Optional[str] = None,
        **extra: Any,
    ) -> Payout:
        if not isinstance(amount_usd, (int, float)) or amount_usd <= 0:
            raise ValueError("amount_usd must be positive.")
        _validate_id("destination", destination)
        body: Dict[str, Any] = {
            "amount_usd": amount_usd,
            "chain": _require_enum(Chain, chain, "chain").value,
            "token": _require_enum(Token, token, "token").value,
            "destination": destination,
            **extra,
        }
        dprint("payouts.create()", {"amount_usd": amount_usd, "idempotency_key_present": bool(idempotency_key)})
        djson("payouts.create body", body)
        resp = self.client.post(_BASE, json=body, idempotency_key=idempotency_key)
        return Payout.model_validate(resp)

    def update(self, payout_id: str, **fields: Any) -> Payout:
        _validate_id("payout_id", payout_id)
        if not fields:
            raise ValueError("update() needs at least one field to change.")
        djson("payouts.update body", fields)
        resp = self.client.patch(f"{_BASE}/{payout_id}", json=fields)
        return Payout.model_validate(resp)

    def execute(self, payout_id: str, *, idempotency_key: Optional[str] = None) -> Payout:
        """Trigger a pending payout."""
        _validate_id("payout_id", payout_id)
        dprint("payouts.execute()", {"payout_id": payout_id, "idempotency_key_present": bool(idempotency_key)})
        resp = self.client.post(f"{_BASE}/{payout_id}/execute", idempotency_key=idempotency_key)
        return Payout.model_validate(resp)

    def list(
        self,
        *,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        status: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> ListPage[Payout]:
        return self._list(_list_params(cursor=cursor, limit=limit, status=status, extra_params=extra_params))

    def list_auto_paginate(
        self,
        *,
        limit: Optional[int] = None,
        status: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> PageIterator[Payout]:
        return _paginate("payouts", self._list, _list_params(limit=limit, status=status, extra_params=extra_params))

    def _list(self, params: Dict[str, Any]) -> ListPage[Payout]:
        dprint("payouts.list()", {"params": params})
        resp = self.client.get(_BASE, params=params)
        return ListPage[Payout].model_validate(resp)


__all__ = ["PayoutsAPI"]
