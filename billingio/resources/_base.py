from __future__ import annotations
import copy
from enum import Enum
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from ..debug import dprint
from ..models import ListPage
from ..pagination import PageIterator

T = TypeVar("T")
E = TypeVar("E", bound=Enum)


# ------------------------ validation helpers ------------------------

def _validate_id(name: str, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} is required and must be a non-empty string.")

def _validate_limit(limit: Optional[int]) -> None:
    if limit is not None and (not isinstance(limit, int) or isinstance(limit, bool) or limit <= 0):
        raise ValueError("limit must be a positive integer.")

def _enum_or_none(enum_cls: Type[E], value: Any, name: str) -> Optional[E]:
    if value is None or value == "":
        return None
    return _require_enum(enum_cls, value, name)

def _require_enum(enum_cls: Type[E], value: Any, name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = [m.value for m in enum_cls]
        raise ValueError(f"{name} must be one of {allowed}") from None


def _list_params(
    *,
    cursor: Optional[str] = None,
    limit: Optional[int] = None,
    extra_params: Optional[Dict[str, Any]] = None,
    **filters: Any,
) -> Dict[str, Any]:
    _validate_limit(limit)
    params: Dict[str, Any] = {"cursor": cursor, "limit": limit, **filters}
    if extra_params:
        params.update(extra_params)
    return params


# ------------------------ auto-pagination ------------------------

def _paginate(
    label: str,
    list_page: Callable[[Dict[str, Any]], ListPage[T]],
    params: Dict[str, Any],
) -> PageIterator[T]:
    """
    Bind a list call to every filter except the cursor. The filters are
    deep-copied here, so later changes to the caller's objects do not leak
    into the traversal.
    """
    snapshot = copy.deepcopy(params)
    snapshot.pop("cursor", None)
    dprint(f"{label}.list_auto_paginate()", {"params": snapshot})

    def _fetch(cursor: Optional[str]):
        page = list_page({**snapshot, "cursor": cursor})
        return page.data, page.has_more, page.next_cursor

    return PageIterator(_fetch)
