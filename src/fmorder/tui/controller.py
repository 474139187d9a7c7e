"""Interaction controller — the mode state machine behind the TUI.

The controller turns raw key strings into :class:`Action` values, applies
them to the :class:`PageList` according to the current :class:`Mode`, and
keeps the cursor in step with the list. It never draws anything itself;
:mod:`fmorder.tui.render` projects its state onto the screen.

Transitions (anything not listed leaves the state untouched)::

    UNORDERED    QUIT / SAVE        -> CONFIRM_QUIT / CONFIRM_SAVE
    UNORDERED    UP / DOWN          move cursor (clamped)
    UNORDERED    TOGGLE_MEMBERSHIP  toggle_value(cursor)
    UNORDERED    TOGGLE_REORDER     -> ORDERED
    ORDERED      QUIT               -> CONFIRM_QUIT
    ORDERED      UP / DOWN          swap_with_value(cursor), cursor follows
    ORDERED      TOGGLE_REORDER     -> UNORDERED
    CONFIRM_*    CONFIRM            -> TERMINATED (saving first for SAVE)
    CONFIRM_*    anything else      -> mode the prompt was opened from

Errors from the page list propagate: a bad index here means cursor and
list went out of sync, which is a bug rather than a user mistake.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum
from pathlib import Path

from fmorder.config.models import KeyBindings
from fmorder.domain.collection import PageList, PageWriter, SwapDirection
from fmorder.errors import SessionTerminatedError
from fmorder.infrastructure.filesystem import write_page

logger = logging.getLogger(__name__)


class Mode(StrEnum):
    """Interaction modes."""

    UNORDERED = "unordered"
    ORDERED = "ordered"
    CONFIRM_QUIT = "confirm_quit"
    CONFIRM_SAVE = "confirm_save"
    TERMINATED = "terminated"


class Action(StrEnum):
    """Input events, independent of the physical key that produced them."""

    UP = "up"
    DOWN = "down"
    TOGGLE_MEMBERSHIP = "toggle_membership"
    TOGGLE_REORDER = "toggle_reorder"
    QUIT = "quit"
    SAVE = "save"
    CONFIRM = "confirm"


def resolve_action(key: str, keys: KeyBindings) -> Action | None:
    """Map a raw key string to an :class:`Action` (None if unbound)."""
    if keys.is_up(key):
        return Action.UP
    if keys.is_down(key):
        return Action.DOWN
    bound = {
        keys.toggle: Action.TOGGLE_MEMBERSHIP,
        keys.reorder: Action.TOGGLE_REORDER,
        keys.quit: Action.QUIT,
        keys.save: Action.SAVE,
        keys.confirm: Action.CONFIRM,
    }
    return bound.get(key)


class Controller:
    """Drives a :class:`PageList` from key presses.

    Attributes:
        pages: The list being edited.
        keys: Key bindings used to resolve raw keys.
        cursor: Index of the highlighted page.
        mode: Current interaction mode.
        previous_mode: Mode to return to when a prompt is cancelled.
        saved: Whether the session ended through a confirmed save.
        written: Paths rewritten by the save, in write order.
    """

    def __init__(
        self,
        pages: PageList,
        keys: KeyBindings,
        *,
        write: PageWriter = write_page,
    ) -> None:
        self.pages = pages
        self.keys = keys
        self.cursor = 0
        self.mode = Mode.UNORDERED
        self.previous_mode = Mode.UNORDERED
        self.saved = False
        self.written: list[Path] = []
        self._write = write
        self._handlers: dict[Mode, Callable[[Action | None], None]] = {
            Mode.UNORDERED: self._unordered,
            Mode.ORDERED: self._ordered,
            Mode.CONFIRM_QUIT: self._confirm_quit,
            Mode.CONFIRM_SAVE: self._confirm_save,
        }

    @property
    def terminated(self) -> bool:
        return self.mode is Mode.TERMINATED

    @property
    def last_index(self) -> int:
        return max(len(self.pages) - 1, 0)

    def handle(self, key: str) -> None:
        """Process one raw key press.

        Raises:
            SessionTerminatedError: The session already ended.
        """
        if self.terminated:
            raise SessionTerminatedError("session already terminated")
        action = resolve_action(key, self.keys)
        self._handlers[self.mode](action)

    def _enter(self, mode: Mode) -> None:
        if mode in (Mode.CONFIRM_QUIT, Mode.CONFIRM_SAVE):
            self.previous_mode = self.mode
        logger.debug("Mode %s -> %s", self.mode.value, mode.value)
        self.mode = mode

    # --- Per-mode handlers ---

    def _unordered(self, action: Action | None) -> None:
        if action is Action.QUIT:
            self._enter(Mode.CONFIRM_QUIT)
        elif action is Action.SAVE:
            self._enter(Mode.CONFIRM_SAVE)
        elif action is Action.UP:
            self.cursor = max(self.cursor - 1, 0)
        elif action is Action.DOWN:
            self.cursor = min(self.cursor + 1, self.last_index)
        elif action is Action.TOGGLE_MEMBERSHIP:
            self.pages.toggle_value(self.cursor)
        elif action is Action.TOGGLE_REORDER:
            self._enter(Mode.ORDERED)

    def _ordered(self, action: Action | None) -> None:
        if action is Action.QUIT:
            self._enter(Mode.CONFIRM_QUIT)
        elif action is Action.UP:
            if self.cursor > 0:
                self.pages.swap_with_value(self.cursor, SwapDirection.PREV)
                self.cursor -= 1
        elif action is Action.DOWN:
            if self.cursor < len(self.pages) - 1:
                self.pages.swap_with_value(self.cursor, SwapDirection.NEXT)
                self.cursor += 1
        elif action is Action.TOGGLE_REORDER:
            self._enter(Mode.UNORDERED)

    def _confirm_quit(self, action: Action | None) -> None:
        if action is Action.CONFIRM:
            self._enter(Mode.TERMINATED)
        else:
            self.mode = self.previous_mode

    def _confirm_save(self, action: Action | None) -> None:
        if action is not Action.CONFIRM:
            self.mode = self.previous_mode
            return
        self.pages.substitute_value()
        self.written = self.pages.persist(self._write)
        self.saved = True
        self._enter(Mode.TERMINATED)

    # --- Guidance ---

    def guidance(self) -> list[tuple[str, str]]:
        """Return ``(label, key)`` pairs for the inputs valid right now."""
        keys = self.keys
        if self.mode is Mode.UNORDERED:
            membership = "Include"
            if len(self.pages) and self.pages.get(self.cursor).ordered:
                membership = "Exclude"
            return [
                ("Quit", keys.quit),
                ("Up", keys.up),
                ("Down", keys.down),
                ("Reorder", keys.reorder),
                (membership, keys.toggle),
                ("Save", keys.save),
            ]
        if self.mode is Mode.ORDERED:
            return [
                ("Quit", keys.quit),
                ("Up", keys.up),
                ("Down", keys.down),
                ("Done", keys.reorder),
            ]
        if self.mode in (Mode.CONFIRM_QUIT, Mode.CONFIRM_SAVE):
            return [("Yes", keys.confirm), ("No", "any other key")]
        return []
