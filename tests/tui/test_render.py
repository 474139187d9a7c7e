"""Tests for the screen renderers."""

from __future__ import annotations

from io import StringIO
from pathlib import Path

import pytest
from ruamel.yaml.comments import CommentedMap

from fmorder.config.models import KeyBindings
from fmorder.domain.collection import PageList
from fmorder.domain.page import Page
from fmorder.output.console import create_console
from fmorder.tui.controller import Controller
from fmorder.tui.render import (
    BROWSE_SYMBOL,
    REORDER_SYMBOL,
    guidance_text,
    render_screen,
    visible_window,
)
from tests.conftest import KEY, make_list


def _render(controller: Controller, *, height: int = 20) -> str:
    console = create_console(file=StringIO(), no_color=True, width=100, height=height)
    console.print(render_screen(controller, height=height))
    return console.file.getvalue()


def _controller(values: list[int | None]) -> Controller:
    return Controller(make_list(values), KeyBindings(), write=lambda page: None)


def _single_page(title: str, path: Path) -> Controller:
    fm = CommentedMap()
    fm["title"] = title
    page = Page.from_frontmatter(path, fm, KEY)
    return Controller(PageList.from_pages([page], KEY), KeyBindings(), write=lambda p: None)


class TestVisibleWindow:
    @pytest.mark.parametrize(
        ("cursor", "total", "rows", "expected"),
        [
            (0, 3, 10, (0, 3)),
            (0, 10, 4, (0, 4)),
            (3, 10, 4, (0, 4)),
            (4, 10, 4, (1, 5)),
            (9, 10, 4, (6, 10)),
            (0, 5, 0, (0, 1)),
        ],
    )
    def test_window(self, cursor: int, total: int, rows: int, expected: tuple[int, int]) -> None:
        assert visible_window(cursor, total, rows) == expected


class TestPageTable:
    def test_columns_and_rows(self) -> None:
        output = _render(_controller([0, None]))
        assert "Title" in output
        assert "File" in output
        assert "Directory" in output
        assert "p0.md" in output
        assert "p1.md" in output
        assert "/docs" in output

    def test_excluded_marker(self) -> None:
        output = _render(_controller([0, None]))
        p0_line = next(line for line in output.splitlines() if "p0.md" in line)
        p1_line = next(line for line in output.splitlines() if "p1.md" in line)
        assert " x " not in p0_line
        assert " x " in p1_line

    def test_browse_symbol_on_cursor_row(self) -> None:
        controller = _controller([0, 1])
        controller.handle("k")
        output = _render(controller)
        p1_line = next(line for line in output.splitlines() if "p1.md" in line)
        assert BROWSE_SYMBOL.strip() in p1_line
        assert REORDER_SYMBOL.strip() not in output

    def test_reorder_symbol(self) -> None:
        controller = _controller([0, 1])
        controller.handle("p")
        output = _render(controller)
        p0_line = next(line for line in output.splitlines() if "p0.md" in line)
        assert REORDER_SYMBOL.strip() in p0_line

    def test_guidance_line_first(self) -> None:
        output = _render(_controller([0]))
        assert output.splitlines()[0].strip().startswith("Quit [q]")
        assert "Save [s]" in output.splitlines()[0]

    @pytest.mark.parametrize(
        "title",
        ["Notes on [/usr] paths", "Use [bold] here", "[link=x]y[/link]"],
    )
    def test_titles_render_literally(self, title: str) -> None:
        output = _render(_single_page(title, Path("/docs/a.md")))
        assert title in output

    def test_paths_render_literally(self) -> None:
        output = _render(_single_page("T", Path("/docs/[red]x/[b]a.md")))
        assert "/docs/[red]x" in output
        assert "[b]a.md" in output

    def test_long_list_keeps_cursor_visible(self) -> None:
        controller = _controller(list(range(30)))
        for _ in range(25):
            controller.handle("k")
        output = _render(controller, height=10)
        assert "p25.md" in output
        assert "p0.md" not in output


class TestPrompts:
    def test_confirm_quit(self) -> None:
        controller = _controller([0])
        controller.handle("q")
        output = _render(controller)
        assert "Quit without saving?" in output
        assert "Y / [n]" in output
        assert "p0.md" not in output

    def test_confirm_save(self) -> None:
        controller = _controller([0])
        controller.handle("s")
        output = _render(controller)
        assert "Save and quit?" in output


class TestGuidanceText:
    def test_plain_text(self) -> None:
        controller = _controller([0])
        controller.handle("p")
        text = guidance_text(controller)
        assert text.plain == " Quit [q], Up [i], Down [k], Done [p]"
