"""Rich Console factory, theme and end-of-run summary for fmorder.

The interactive screen and the summary printed after it share one theme.
In non-TTY environments (tests, pipes) Rich drops the color codes.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import IO

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

FMORDER_THEME = Theme(
    {
        "fmorder.ok": "bold green",
        "fmorder.key": "bold cyan",
        "fmorder.header": "underline",
        "fmorder.cursor": "bold",
        "fmorder.reorder": "bold reverse",
        "fmorder.prompt": "bold",
        "fmorder.path": "dim",
    }
)


def create_console(
    *,
    file: IO[str] | None = None,
    no_color: bool = False,
    width: int | None = None,
    height: int | None = None,
) -> Console:
    """Create a themed Console.

    Args:
        file: Output stream; defaults to stdout.
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width.
        height: Override terminal height.
    """
    return Console(
        file=file,
        theme=FMORDER_THEME,
        no_color=no_color,
        highlight=False,
        width=width,
        height=height,
    )


def print_summary(console: Console, written: Sequence[Path], key: str) -> None:
    """Report which files a save rewrote."""
    if not written:
        console.print(Text("No changes", style="fmorder.ok"), Text(f"  {key}"))
        return
    console.print(
        Text("Saved", style="fmorder.ok"),
        Text(f"  {key} in {len(written)} file(s)"),
    )
    for path in written:
        console.print(Text(f"  {path}", style="fmorder.path"))
