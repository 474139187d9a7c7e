"""Screen renderers for the interactive session.

Each renderer turns the controller's current state into a Rich renderable.
:func:`render_screen` dispatches on ``controller.mode``; modes without a
renderer fall through to an empty screen.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from rich.align import Align
from rich.console import Group
from rich.table import Table
from rich.text import Text

from fmorder.tui.controller import Controller, Mode

if TYPE_CHECKING:
    from rich.console import RenderableType

BROWSE_SYMBOL = " >  "
REORDER_SYMBOL = " >> "
EXCLUDED_MARKER = "x"

# Guidance line, blank line, table header.
_CHROME_LINES = 3


# ── Public API ────────────────────────────────────────────────────────


def render_screen(controller: Controller, *, height: int) -> RenderableType:
    """Render the full screen for the controller's current mode."""
    renderer = _MODE_RENDERERS.get(controller.mode, _render_blank)
    return renderer(controller, height)


def guidance_text(controller: Controller) -> Text:
    """One line listing the inputs valid in the current mode."""
    text = Text(" ")
    for i, (label, key) in enumerate(controller.guidance()):
        if i:
            text.append(", ")
        text.append(label)
        text.append(" [")
        text.append(key, style="fmorder.key")
        text.append("]")
    return text


def visible_window(cursor: int, total: int, rows: int) -> tuple[int, int]:
    """Return the ``[start, stop)`` slice of rows that keeps *cursor* on screen."""
    rows = max(rows, 1)
    if total <= rows:
        return 0, total
    start = max(cursor - rows + 1, 0)
    return start, min(start + rows, total)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_pages(controller: Controller, height: int) -> RenderableType:
    reordering = controller.mode is Mode.ORDERED
    symbol = REORDER_SYMBOL if reordering else BROWSE_SYMBOL
    cursor_style = "fmorder.reorder" if reordering else "fmorder.cursor"

    table = Table(
        box=None,
        show_edge=False,
        pad_edge=False,
        padding=(0, 1),
        header_style="fmorder.header",
    )
    table.add_column("", no_wrap=True, width=len(symbol))
    table.add_column("Title", no_wrap=True)
    table.add_column("", no_wrap=True, width=1)
    table.add_column("File", no_wrap=True)
    table.add_column("Directory", no_wrap=True, style="fmorder.path")

    pages = controller.pages
    start, stop = visible_window(controller.cursor, len(pages), height - _CHROME_LINES)
    for index in range(start, stop):
        page = pages.get(index)
        selected = index == controller.cursor
        table.add_row(
            symbol if selected else " " * len(symbol),
            Text(page.title or ""),
            "" if page.ordered else EXCLUDED_MARKER,
            Text(page.path.name),
            Text(str(page.path.parent)),
            style=cursor_style if selected else None,
        )

    return Group(guidance_text(controller), Text(""), table)


def _render_prompt(question: str, controller: Controller, height: int) -> RenderableType:
    prompt = Group(
        Text(question, style="fmorder.prompt", justify="center"),
        Text(""),
        Text(f"{controller.keys.confirm} / [n]", justify="center"),
    )
    return Align.center(prompt, vertical="middle", height=max(height, 3))


def _render_confirm_quit(controller: Controller, height: int) -> RenderableType:
    return _render_prompt("Quit without saving?", controller, height)


def _render_confirm_save(controller: Controller, height: int) -> RenderableType:
    return _render_prompt("Save and quit?", controller, height)


def _render_blank(controller: Controller, height: int) -> RenderableType:
    return Text("")


_MODE_RENDERERS: dict[Mode, Callable[[Controller, int], RenderableType]] = {
    Mode.UNORDERED: _render_pages,
    Mode.ORDERED: _render_pages,
    Mode.CONFIRM_QUIT: _render_confirm_quit,
    Mode.CONFIRM_SAVE: _render_confirm_save,
}
