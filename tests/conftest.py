"""Shared pytest fixtures and test helpers for fmorder tests."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest
from click.testing import CliRunner
from ruamel.yaml.comments import CommentedMap

from fmorder.domain.collection import PageList
from fmorder.domain.page import Page

KEY = "order"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """Empty directory for test documents."""
    root = tmp_path / "docs"
    root.mkdir()
    return root


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_doc(
    directory: Path,
    name: str,
    *,
    value: int | str | None = None,
    title: str | None = None,
    body: str = "Body text.\n",
    key: str = KEY,
) -> Path:
    """Write a document with front matter and return its path."""
    lines = ["---\n"]
    if title is not None:
        lines.append(f"title: {title}\n")
    if value is not None:
        lines.append(f"{key}: {value}\n")
    lines.append("layout: post\n")
    lines.append("---\n")
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(lines) + body, encoding="utf-8")
    return path


def make_page(name: str, value: int | None, *, key: str = KEY) -> Page:
    """Build an in-memory page without touching the filesystem."""
    fm = CommentedMap()
    fm["title"] = name
    if value is not None:
        fm[key] = value
    return Page.from_frontmatter(Path("/docs") / f"{name}.md", fm, key)


def make_list(values: Sequence[int | None], *, sort: bool = True) -> PageList:
    """Build a PageList whose pages are named ``p0``, ``p1``, ... in input order."""
    pages = [make_page(f"p{i}", value) for i, value in enumerate(values)]
    if sort:
        return PageList.from_pages(pages, KEY)
    return PageList(pages, KEY)


def names(pages: PageList) -> list[str]:
    return [page.path.stem for page in pages]


def values(pages: PageList) -> list[int | None]:
    return [page.value for page in pages]


def assert_dense(pages: PageList) -> None:
    """Ordered values are exactly 0..k-1 and appear in ascending list order."""
    ordered = [v for v in values(pages) if v is not None]
    assert sorted(ordered) == list(range(len(ordered)))
    assert ordered == sorted(ordered)
