"""Pydantic configuration models with code-baked defaults.

Key bindings are fixed: one frozen :class:`KeyBindings` instance is built
at startup and handed to the interaction controller by reference.
"""

from __future__ import annotations

from pydantic import BaseModel

# Escape sequences ``click.getchar`` returns for the arrow keys
# (ANSI normal mode, ANSI application mode, Windows console).
ARROW_UP_SEQUENCES: tuple[str, ...] = ("\x1b[A", "\x1bOA", "\xe0H", "\x00H")
ARROW_DOWN_SEQUENCES: tuple[str, ...] = ("\x1b[B", "\x1bOB", "\xe0P", "\x00P")


class KeyBindings(BaseModel):
    """Interactive key bindings, frozen after construction."""

    model_config = {"frozen": True}

    up: str = "i"
    down: str = "k"
    reorder: str = "p"
    toggle: str = "x"
    quit: str = "q"
    save: str = "s"
    confirm: str = "Y"
    arrow_up: tuple[str, ...] = ARROW_UP_SEQUENCES
    arrow_down: tuple[str, ...] = ARROW_DOWN_SEQUENCES

    def is_up(self, key: str) -> bool:
        return key == self.up or key in self.arrow_up

    def is_down(self, key: str) -> bool:
        return key == self.down or key in self.arrow_down
