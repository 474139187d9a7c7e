"""Interactive session loop.

One key is read, handed to the controller and followed by one full redraw
before the next key is read. The terminal runs in Rich's alternate screen
with the cursor hidden; leaving the ``with`` block restores both, whether
the loop ends normally, raises, or is interrupted. Log records meant for
the terminal are held until the screen is gone.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import click
from rich.console import Console

from fmorder.config.logging import hold_terminal_logs
from fmorder.tui.controller import Controller
from fmorder.tui.render import render_screen

logger = logging.getLogger(__name__)

KeyReader = Callable[[], str]


def run_session(
    controller: Controller,
    console: Console,
    *,
    read_key: KeyReader | None = None,
) -> None:
    """Run the key/redraw loop until the controller terminates.

    Args:
        controller: State machine receiving the keys.
        console: Console owning the terminal.
        read_key: Blocking single-key reader; defaults to ``click.getchar``,
            which puts the terminal in raw mode for the duration of a read.
    """
    reader = read_key or click.getchar

    with hold_terminal_logs(), console.screen(hide_cursor=True) as screen:
        logger.debug(
            "Session started with %d page(s), %d ordered",
            len(controller.pages),
            controller.pages.ordered_count,
        )
        screen.update(render_screen(controller, height=console.size.height))
        while not controller.terminated:
            controller.handle(reader())
            if not controller.terminated:
                screen.update(render_screen(controller, height=console.size.height))

    logger.debug("Session ended (saved=%s)", controller.saved)
