"""Paged Collection: ordered mutable sequence with fixed-size pages and one movable cursor.

Invariants:
    - page_count == ceil(len / page_size); an empty collection has 0 pages
    - cursor stays within [-1, page_count]; -1 and page_count are the
      out-of-bounds sentinels reached by stepping past either end
    - Every structural mutation recomputes page_count and resets cursor to 0
    - Out-of-range reads return None, never raise
    - Out-of-range inserts raise InvalidInputError and leave the collection unchanged

Design Decisions:
    - Reads that navigate (page_at, current_page, next_page, prev_page,
      first_page, last_page, page_containing, element_at) move the cursor as
      part of their contract. They are navigation calls, not pure queries.
    - Pages are returned as new lists: callers cannot mutate the backing
      sequence through a page (mutation goes through the methods that repaginate)
    - Iteration is independent of the cursor and restarts on every iter() call
"""

import math
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, TypeVar

from user_registry.core.errors import InvalidInputError

E = TypeVar("E")


class PagedCollection(Generic[E]):
    """Ordered list of elements paginated in fixed-size pages."""

    def __init__(self, page_size: int, elements: Iterable[E] = ()):
        if page_size < 1:
            raise InvalidInputError(
                f"Page size must be positive, got {page_size}", "page_size",
            )
        self._page_size = page_size
        self._elements: list[E] = list(elements)
        self._page_count = 0
        self._cursor = 0
        self._repaginate()

    # ─── Dimensions ──────────────────────────────────────────────

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def last_page_index(self) -> int:
        """Index of the last page; -1 when empty."""
        return self._page_count - 1

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._elements)

    def is_empty(self) -> bool:
        return not self._elements

    def all_elements(self) -> list[E]:
        """Whole contents, no pagination."""
        return list(self._elements)

    def __iter__(self) -> Iterator[E]:
        return iter(list(self._elements))

    def __contains__(self, element: object) -> bool:
        return element in self._elements

    def contains(self, element: E) -> bool:
        return element in self._elements

    # ─── Navigation (reads that move the cursor) ─────────────────

    def page_at(self, page_index: int) -> list[E] | None:
        """Return page `page_index` and move the cursor there, or None if out of range."""
        if page_index < 0 or page_index > self.last_page_index:
            return None
        self._cursor = page_index
        start = page_index * self._page_size
        return self._elements[start:min(len(self._elements), start + self._page_size)]

    def element_at(self, page_index: int, position_index: int) -> E | None:
        """Element at a position inside a page (position relative to that page's slice)."""
        page = self.page_at(page_index)
        if page is None or position_index < 0 or position_index >= len(page):
            return None
        return page[position_index]

    def current_page(self) -> list[E] | None:
        """Return the page under the cursor, then advance the cursor if the read succeeded."""
        page = self.page_at(self._cursor)
        if page is not None:
            self._cursor += 1
        return page

    def set_cursor(self, page_index: int) -> None:
        """Move the cursor; out-of-range requests collapse to -1 or last_page_index + 1."""
        if page_index < 0:
            self._cursor = -1
        elif page_index > self.last_page_index:
            self._cursor = self.last_page_index + 1
        else:
            self._cursor = page_index

    def first_page(self) -> list[E] | None:
        self._cursor = 0
        return self.page_at(self._cursor)

    def last_page(self) -> list[E] | None:
        self._cursor = self.last_page_index
        return self.page_at(self._cursor)

    def next_page(self) -> list[E] | None:
        """Step the cursor forward one page and return it; pin past the end on overflow."""
        self._cursor += 1
        if self._cursor <= self.last_page_index:
            return self.page_at(self._cursor)
        self._cursor = self.last_page_index + 1
        return None

    def prev_page(self) -> list[E] | None:
        """Step the cursor back one page and return it; pin to -1 on underflow."""
        self._cursor -= 1
        if self._cursor >= 0:
            return self.page_at(self._cursor)
        self._cursor = -1
        return None

    def page_containing(self, element: E) -> list[E] | None:
        """Page holding the first element equal to `element` (moves the cursor), or None."""
        try:
            index = self._elements.index(element)
        except ValueError:
            return None
        return self.page_at(index // self._page_size)

    # ─── Mutation (always repaginates) ───────────────────────────

    def append(self, element: E) -> None:
        self._elements.append(element)
        self._repaginate()

    def insert(self, index: int, element: E) -> None:
        """Insert at a global position in [0, len], shifting later elements right."""
        self._check_insert_index(index)
        self._elements.insert(index, element)
        self._repaginate()

    def insert_in_page(self, page_index: int, position_index: int, element: E) -> None:
        """Insert at a position within a page, shifting later elements right."""
        if not 0 <= page_index <= self._page_count:
            raise InvalidInputError(
                f"Page index {page_index} out of range [0, {self._page_count}]",
                "page_index",
            )
        if not 0 <= position_index <= self._page_size:
            raise InvalidInputError(
                f"Position {position_index} out of range [0, {self._page_size}]",
                "position_index",
            )
        index = page_index * self._page_size + position_index
        self._check_insert_index(index)
        self._elements.insert(index, element)
        self._repaginate()

    def extend(self, elements: Iterable[E]) -> None:
        self._elements.extend(elements)
        self._repaginate()

    def remove(self, element: E) -> bool:
        """Remove the first element equal to `element`. Returns False if absent."""
        try:
            self._elements.remove(element)
            removed = True
        except ValueError:
            removed = False
        self._repaginate()
        return removed

    def clear(self) -> None:
        self._elements.clear()
        self._repaginate()

    def sort(
        self, key: Callable[[E], Any] | None = None, reverse: bool = False,
    ) -> None:
        self._elements.sort(key=key, reverse=reverse)
        self._repaginate()

    def _repaginate(self) -> None:
        """Recompute page count and forget the navigation position."""
        self._page_count = math.ceil(len(self._elements) / self._page_size)
        self._cursor = 0

    def _check_insert_index(self, index: int) -> None:
        if not 0 <= index <= len(self._elements):
            raise InvalidInputError(
                f"Insert position {index} out of range [0, {len(self._elements)}]",
                "index",
            )
