"""
Cursor-based auto-pagination.

Every list endpoint returns ``{"data": [...], "has_more": bool,
"next_cursor": str | null}``. ``PageIterator`` hides the page boundaries and
walks the whole result set one item at a time, fetching pages lazily:

    it = CheckoutsAPI(client).list_auto_paginate(status="confirmed")
    while it.advance():
        print(it.current().checkout_id)
    if it.last_error() is not None:
        raise it.last_error()

or simply ``for checkout in it: ...`` (a fetch failure is re-raised at the
end of the loop).
"""

from __future__ import annotations

from typing import Callable, Generic, Iterator, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

# (items, has_more, next_cursor)
PageResult = Tuple[Sequence[T], bool, Optional[str]]

# Fetches the page at ``cursor`` (None = first page). Raises on failure.
PageFetcher = Callable[[Optional[str]], PageResult]


class PageIterator(Generic[T]):
    """
    Lazy, single-pass iterator over a paginated collection.

    Not safe for concurrent use; create one instance per traversal. The
    iterator never retries: the first exception raised by ``fetch_page``
    ends the traversal and is kept for ``last_error()``.

    An empty page ends the traversal even if the server claims more pages
    exist, and so does a page that reports ``has_more`` without handing out
    a new cursor.
    """

    def __init__(self, fetch_page: PageFetcher):
        self._fetch_page = fetch_page
        self._items: Tuple[T, ...] = ()
        self._index = 0
        self._cursor: Optional[str] = None
        self._has_more = True  # at least one page until told otherwise
        self._started = False
        self._done = False
        self._err: Optional[Exception] = None

    def advance(self) -> bool:
        """
        Move to the next item. Returns True when ``current()`` holds a valid
        item, False once the traversal is over (check ``last_error()`` to
        tell exhaustion from failure).
        """
        if self._err is not None or self._done:
            return False

        if self._started:
            self._index += 1
            if self._index < len(self._items):
                return True
            if not self._has_more:
                self._done = True
                return False

        return self._fetch_next()

    def current(self) -> T:
        """
        Item at the current position. Only valid after ``advance()`` returned
        True; anything else is a caller error and is not checked.
        """
        return self._items[self._index]

    def last_error(self) -> Optional[Exception]:
        """The exception that ended the traversal, if any."""
        return self._err

    def __iter__(self) -> Iterator[T]:
        while self.advance():
            yield self.current()
        if self._err is not None:
            raise self._err

    # ------------------------------------------------------------------

    def _fetch_next(self) -> bool:
        self._started = True
        used_cursor = self._cursor
        try:
            items, has_more, next_cursor = self._fetch_page(used_cursor)
        except Exception as e:
            self._err = e
            return False

        self._items = tuple(items)
        self._index = 0
        self._cursor = next_cursor
        # A "more pages" claim is only honoured if the cursor actually moves.
        self._has_more = bool(has_more) and next_cursor is not None and next_cursor != used_cursor

        if not self._items:
            self._done = True
            return False
        return True


__all__ = ["PageIterator", "PageFetcher", "PageResult"]
