from __future__ import annotations
from typing import Any, Dict, Optional, Union

from ..client import BillingIOClient
from ..debug import dprint, djson
from ..models import (
    Chain,
    Checkout,
    CheckoutCreate,
    CheckoutStatus,
    CheckoutStatusResponse,
    ListPage,
    Token,
)
from ..pagination import PageIterator
from ._base import _enum_or_none, _list_params, _paginate, _validate_id

_BASE = "/checkouts"


class CheckoutsAPI:
    """
    Crypto payment checkouts.

    - ``create`` accepts an ``idempotency_key``; reuse it when retrying so a
      network hiccup never produces two checkouts.
    - ``get_status`` is the lightweight endpoint meant for polling.
    - ``list_auto_paginate`` walks every checkout, newest first.
    """

    def __init__(self, client: BillingIOClient):
        self.client = client

    # ---- Create ----
    def create(
        self,
        *,
        amount_usd: float,
        chain: Union[Chain, str],
        token: Union[Token, str],
        expires_in_seconds: Optional[int] = None,
        metadata: Optional[Dict[str, str]] = None,
        idempotency_key: Optional[str] = None,
        **extra: Any,
    ) -> Checkout:
        """
        Create a checkout for ``amount_usd`` paid in ``token`` on ``chain``.

        Raises
        ------
        pydantic.ValidationError
            Bad amount/chain/token before anything is sent.
        BillingIOAPIError
            If the API rejects the request.
        """
        body = CheckoutCreate(
            amount_usd=amount_usd,
            chain=chain,
            token=token,
            expires_in_seconds=expires_in_seconds,
            metadata=metadata,
        ).model_dump(mode="json", exclude_none=True)
        body.update(extra)

        dprint("checkouts.create()", {
            "amount_usd": amount_usd,
            "chain": body["chain"],
            "token": body["token"],
            "idempotency_key_present": bool(idempotency_key),
        })
        djson("checkouts.create body", body)

        resp = self.client.post(_BASE, json=body, idempotency_key=idempotency_key)
        return Checkout.model_validate(resp)

    # ---- Read ----
    def get(self, checkout_id: str) -> Checkout:
        _validate_id("checkout_id", checkout_id)
        dprint("checkouts.get()", {"checkout_id": checkout_id})
        resp = self.client.get(f"{_BASE}/{checkout_id}")
        return Checkout.model_validate(resp)

    def get_status(self, checkout_id: str) -> CheckoutStatusResponse:
        """Polling view: status, confirmations and the suggested polling interval."""
        _validate_id("checkout_id", checkout_id)
        dprint("checkouts.get_status()", {"checkout_id": checkout_id})
        resp = self.client.get(f"{_BASE}/{checkout_id}/status")
        return CheckoutStatusResponse.model_validate(resp)

    # ---- List ----
    def list(
        self,
        *,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        status: Union[CheckoutStatus, str, None] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> ListPage[Checkout]:
        """One page of checkouts, newest first."""
        params = _list_params(
            cursor=cursor,
            limit=limit,
            status=_enum_or_none(CheckoutStatus, status, "status"),
            extra_params=extra_params,
        )
        return self._list(params)

    def list_auto_paginate(
        self,
        *,
        limit: Optional[int] = None,
        status: Union[CheckoutStatus, str, None] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> PageIterator[Checkout]:
        """Iterate over every checkout matching the filters, fetching pages lazily."""
        params = _list_params(
            limit=limit,
            status=_enum_or_none(CheckoutStatus, status, "status"),
            extra_params=extra_params,
        )
        return _paginate("checkouts", self._list, params)

    def _list(self, params: Dict[str, Any]) -> ListPage[Checkout]:
        dprint("checkouts.list()", {"params": params})
        resp = self.client.get(_BASE, params=params)
        return ListPage[Checkout].model_validate(resp)


__all__ = ["CheckoutsAPI"]
