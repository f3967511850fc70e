from __future__ import annotations
from typing import Any, Dict, Optional

from ..client import BillingIOClient
from ..debug import dprint, djson
from ..models import Entitlement, EntitlementCheckResponse, ListPage
from ..pagination import PageIterator
from ._base import _list_params, _paginate, _validate_id

_BASE = "/subscriptions/entitlements"


class EntitlementsAPI:
    """
    Feature entitlements granted by subscriptions.

    ``check(customer_id=..., feature_key=...)`` is the hot-path call for
    gating features in your app.
    """

    def __init__(self, client: BillingIOClient):
        self.client = client

    def create(
        self,
        *,
        subscription_id: str,
        feature_key: str,
        value: Any = None,
        **extra: Any,
    ) -> Entitlement:
        _validate_id("subscription_id", subscription_id)
        _validate_id("feature_key", feature_key)
        body: Dict[str, Any] = {"subscription_id": subscription_id, "feature_key": feature_key, **extra}
        if value is not None:
            body["value"] = value
        djson("entitlements.create body", body)
        resp = self.client.post(_BASE, json=body)
        return Entitlement.model_validate(resp)

    def update(self, entitlement_id: str, **fields: Any) -> Entitlement:
        _validate_id("entitlement_id", entitlement_id)
        if not fields:
            raise ValueError("update() needs at least one field to change.")
        djson("entitlements.update body", fields)
        resp = self.client.patch(f"{_BASE}/{entitlement_id}", json=fields)
        return Entitlement.model_validate(resp)

    def delete(self, entitlement_id: str) -> None:
        _validate_id("entitlement_id", entitlement_id)
        dprint("entitlements.delete()", {"entitlement_id": entitlement_id})
        self.client.delete(f"{_BASE}/{entitlement_id}")

    def check(self, *, customer_id: str, feature_key: str) -> EntitlementCheckResponse:
        _validate_id("customer_id", customer_id)
        _validate_id("feature_key", feature_key)
        dprint("entitlements.check()", {"customer_id": customer_id, "feature_key": feature_key})
        resp = self.client.get(f"{_BASE}/check", params={"customer_id": customer_id, "feature_key": feature_key})
        return EntitlementCheckResponse.model_validate(resp)

    def list(
        self,
        *,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
        subscription_id: Optional[str] = None,
        feature_key: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> ListPage[Entitlement]:
        params = _list_params(
            cursor=cursor,
            limit=limit,
            subscription_id=subscription_id,
            feature_key=feature_key,
            extra_params=extra_params,
        )
        return self._list(params)

    def list_auto_paginate(
        self,
        *,
        limit: Optional[int] = None,
        subscription_id: Optional[str] = None,
        feature_key: Optional[str] = None,
        extra_params: Optional[Dict[str, Any]] = None,
    ) -> PageIterator[Entitlement]:
        params = _list_params(
            limit=limit,
            subscription_id=subscription_id,
            feature_key=feature_key,
            extra_params=extra_params,
        )
        return _paginate("entitlements", self._list, params)

    def _list(self, params: Dict[str, Any]) -> ListPage[Entitlement]:
        dprint("entitlements.list()", {"params": params})
        resp = self.client.get(_BASE, params=params)
        return ListPage[Entitlement].model_validate(resp)


__all__ = ["EntitlementsAPI"]
