"""Filesystem operations: document discovery, loading and rewriting.

INVARIANT: Only the front-matter block of a document is ever rewritten.
The body is copied from the file on disk at write time, unchanged.

Pure parsing/rendering lives in :mod:`fmorder.domain.frontmatter`
(infrastructure -> domain, never the reverse). This module owns the
actual file I/O.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path

from fmorder.domain.collection import PageList
from fmorder.domain.frontmatter import parse_frontmatter, render_frontmatter, split_frontmatter
from fmorder.domain.page import Page
from fmorder.errors import (
    DirectoryReadError,
    FileReadError,
    FileWriteError,
    FmorderError,
    NoFrontMatterError,
)

logger = logging.getLogger(__name__)

PAGE_SUFFIXES = frozenset({".md", ".html"})


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def _read_text(path: Path) -> str:
    # newline="" keeps \r\n intact so bodies round-trip byte for byte.
    try:
        with path.open(encoding="utf-8", newline="") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(f"failed to read ({exc})", path=path) from exc


def read_page(path: Path, key: str) -> Page:
    """Read a document and build its :class:`Page`.

    Raises:
        NoFrontMatterError: The document has no usable front matter.
        FrontMatterParseError: The front matter is not valid YAML.
        NonIntegerOrderingKeyError: *key* holds a non-integer value.
    """
    content = _read_text(path)
    try:
        frontmatter, _body = parse_frontmatter(content)
    except FmorderError as exc:
        if exc.path is None:
            exc.path = path
        raise
    return Page.from_frontmatter(path, frontmatter, key)


def write_page(page: Page) -> None:
    """Rewrite the front matter of *page* on disk.

    The body is re-read from the current file. The new content goes to a
    temporary file first, which is then copied over the original, so a
    failed render or write never truncates the document.

    Raises:
        SerializationError: The front matter cannot be rendered.
        FileWriteError: The file could not be read back or replaced.
    """
    try:
        split = split_frontmatter(_read_text(page.path))
    except FileReadError as exc:
        raise FileWriteError(exc.message, path=page.path) from exc
    if split is None:
        raise FileWriteError("front matter disappeared since loading", path=page.path)

    try:
        rendered = render_frontmatter(page.frontmatter, split.body)
    except FmorderError as exc:
        exc.path = page.path
        raise

    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", newline="", suffix=page.path.suffix, delete=False
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(rendered)
        shutil.copyfile(tmp_path, page.path)
    except OSError as exc:
        logger.error("Failed to write %s: %s", page.path, exc)
        raise FileWriteError(f"failed to write ({exc})", path=page.path) from exc
    finally:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)

    logger.info("Wrote %s (value %s -> %s)", page.path, page.original_value, page.value)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def find_page_files(target: Path, *, recursive: bool = False) -> list[Path]:
    """Discover candidate documents under *target*.

    Regular files ending in ``.md`` or ``.html`` directly inside *target*
    qualify; with *recursive*, subdirectories are walked depth-first.
    Entries are visited in name order.

    Raises:
        DirectoryReadError: A directory could not be listed.
    """
    try:
        entries = sorted(target.iterdir())
    except OSError as exc:
        raise DirectoryReadError(f"failed to open directory ({exc})", path=target) from exc

    results: list[Path] = []
    for path in entries:
        if path.is_file():
            if path.suffix in PAGE_SUFFIXES:
                results.append(path)
        elif recursive and path.is_dir():
            results.extend(find_page_files(path, recursive=True))
    return results


def load_page_list(target: Path, key: str, *, recursive: bool = False) -> PageList:
    """Scan *target* and build the sorted, renumbered :class:`PageList`.

    Documents without front matter are skipped; any other problem aborts
    loading.
    """
    pages: list[Page] = []
    for path in find_page_files(target, recursive=recursive):
        try:
            page = read_page(path, key)
        except NoFrontMatterError:
            logger.debug("Skipping %s: no front matter", path)
            continue
        pages.append(page)

    logger.debug("Loaded %d page(s) from %s", len(pages), target)
    return PageList.from_pages(pages, key)
