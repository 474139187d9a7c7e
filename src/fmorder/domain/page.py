"""Page — one discovered document and its ordering state."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.scalarbool import ScalarBoolean

from fmorder.errors import NonIntegerOrderingKeyError

TITLE_KEY = "title"


def extract_order_value(frontmatter: CommentedMap, key: str, *, path: Path) -> int | None:
    """Read the ordering value stored under *key*.

    Missing keys and explicit nulls mean "not ordered". Booleans are
    rejected even though Python treats them as ints.

    Raises:
        NonIntegerOrderingKeyError: The key holds a non-integer value.
    """
    raw: Any = frontmatter.get(key)
    if raw is None:
        return None
    if isinstance(raw, (bool, ScalarBoolean)) or not isinstance(raw, int):
        raise NonIntegerOrderingKeyError(
            f"front-matter key {key!r} is not an integer ({raw!r})", path=path
        )
    return int(raw)


def extract_title(frontmatter: CommentedMap) -> str | None:
    raw = frontmatter.get(TITLE_KEY)
    return str(raw) if isinstance(raw, str) else None


class Page:
    """A document with front matter.

    ``value`` is the in-memory ordering value and is only changed by
    :class:`~fmorder.domain.collection.PageList`. ``original_value`` is the
    value found on disk and never changes; comparing the two decides
    whether the file needs rewriting.
    """

    def __init__(
        self,
        path: Path,
        frontmatter: CommentedMap,
        value: int | None,
        *,
        title: str | None = None,
    ) -> None:
        self.path = path
        self.frontmatter = frontmatter
        self.value = value
        self._original_value = value
        self._title = title

    @classmethod
    def from_frontmatter(cls, path: Path, frontmatter: CommentedMap, key: str) -> Page:
        """Build a page, reading the ordering value and title from *frontmatter*."""
        value = extract_order_value(frontmatter, key, path=path)
        return cls(path, frontmatter, value, title=extract_title(frontmatter))

    @property
    def original_value(self) -> int | None:
        return self._original_value

    @property
    def title(self) -> str | None:
        return self._title

    @property
    def ordered(self) -> bool:
        """Whether the page belongs to the ordered subset."""
        return self.value is not None

    @property
    def changed(self) -> bool:
        """Whether the ordering value differs from the one on disk."""
        return self.value != self._original_value

    def substitute_value(self, key: str) -> None:
        """Write ``value`` into the front-matter map, or drop *key* when unset."""
        if self.value is None:
            self.frontmatter.pop(key, None)
        else:
            self.frontmatter[key] = self.value

    def __repr__(self) -> str:
        return f"Page(path={str(self.path)!r}, value={self.value!r})"
