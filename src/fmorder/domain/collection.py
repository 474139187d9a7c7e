"""PageList — the ordered collection of pages.

INVARIANTS (hold after every public mutating call):

1. Ordered pages (``value is not None``) carry exactly the values
   ``0..k-1`` with no duplicates, where ``k`` is their count.
2. Walking the list front to back, ordered pages appear in ascending
   value order.
3. Unordered pages may sit anywhere between them.
4. Index-taking operations raise :class:`IndexOutOfRangeError` instead of
   wrapping or clamping.

``sort_and_renumber`` establishes 1 and 2 once at load time. The
incremental operations preserve them: ``toggle_value`` only shifts the
values of ordered pages *after* the index, so their relative order is
unchanged, and ``swap_with_value`` trades values whenever two ordered pages
trade places.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from enum import StrEnum
from pathlib import Path

from fmorder.domain.page import Page
from fmorder.errors import IndexOutOfRangeError, NoSuchNeighborError

logger = logging.getLogger(__name__)

PageWriter = Callable[[Page], None]


class SwapDirection(StrEnum):
    """Which neighbour a page trades places with."""

    PREV = "previous"
    NEXT = "next"


def _sort_key(page: Page) -> tuple[int, int]:
    # Ordered pages first by value, unordered pages after them; ties keep
    # their original order because list.sort is stable.
    if page.value is None:
        return (1, 0)
    return (0, page.value)


class PageList:
    """Pages plus the name of the front-matter key being sequenced.

    The backing list is private; use :meth:`get`, ``len()`` and iteration.
    """

    def __init__(self, pages: Iterable[Page], key: str) -> None:
        self._pages: list[Page] = list(pages)
        self._key = key

    @classmethod
    def from_pages(cls, pages: Iterable[Page], key: str) -> PageList:
        """Build a list and bring it into canonical order."""
        page_list = cls(pages, key)
        page_list.sort_and_renumber()
        return page_list

    # --- Accessors ---

    @property
    def key(self) -> str:
        return self._key

    def __len__(self) -> int:
        return len(self._pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(self._pages)

    def get(self, index: int) -> Page:
        """Return the page at *index*.

        Raises:
            IndexOutOfRangeError: *index* is outside ``[0, len)``.
        """
        self._check_index(index)
        return self._pages[index]

    @property
    def ordered_count(self) -> int:
        return sum(1 for page in self._pages if page.value is not None)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._pages):
            raise IndexOutOfRangeError(index, len(self._pages))

    # --- Ordering operations ---

    def sort_and_renumber(self) -> None:
        """Sort by value (unordered last) and renumber ordered pages from 0."""
        self._pages.sort(key=_sort_key)
        counter = 0
        for page in self._pages:
            if page.value is not None:
                page.value = counter
                counter += 1

    def toggle_value(self, index: int) -> None:
        """Move the page at *index* into or out of the ordered subset.

        Leaving: the page loses its value and every later ordered page
        moves down by one to close the gap.

        Joining: the page takes the value right after the last ordered page
        before it (0 if there is none) and every later ordered page moves up
        by one. The page keeps its physical position.

        Raises:
            IndexOutOfRangeError: *index* is outside ``[0, len)``.
        """
        self._check_index(index)
        page = self._pages[index]

        if page.value is not None:
            page.value = None
            shift = -1
        else:
            previous = -1
            for before in self._pages[:index]:
                if before.value is not None:
                    previous = before.value
            page.value = previous + 1
            shift = 1

        for after in self._pages[index + 1 :]:
            if after.value is not None:
                after.value += shift

        logger.debug("Toggled %s -> %s", page.path, page.value)

    def swap_with_value(self, index: int, direction: SwapDirection) -> None:
        """Swap the page at *index* with its neighbour in *direction*.

        When both pages are ordered their values are exchanged too, so the
        value stays with the position.

        Raises:
            IndexOutOfRangeError: *index* is outside ``[0, len)``.
            NoSuchNeighborError: The neighbour would be outside ``[0, len)``.
        """
        self._check_index(index)
        neighbor = index - 1 if direction is SwapDirection.PREV else index + 1
        if not 0 <= neighbor < len(self._pages):
            raise NoSuchNeighborError(index, direction.value)

        page, other = self._pages[index], self._pages[neighbor]
        if page.value is not None and other.value is not None:
            page.value, other.value = other.value, page.value
        self._pages[index], self._pages[neighbor] = other, page

        logger.debug("Swapped %s with %s neighbour %s", page.path, direction.value, other.path)

    # --- Materialization ---

    def substitute_value(self) -> None:
        """Copy every page's value into its front-matter map."""
        for page in self._pages:
            page.substitute_value(self._key)

    def persist(self, write_page: PageWriter) -> list[Path]:
        """Write every page whose value changed since loading.

        Pages are written one at a time in list order. The first failure
        propagates: pages before it stay written, pages after it are never
        attempted.

        Returns:
            Paths of the pages that were written.
        """
        written: list[Path] = []
        for page in self._pages:
            if not page.changed:
                continue
            write_page(page)
            written.append(page.path)
        return written
