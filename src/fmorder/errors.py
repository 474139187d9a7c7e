"""Exception hierarchy for fmorder.

Only :class:`NoFrontMatterError` is recoverable: the repository skips the
document and moves on. Every other error aborts the run; the CLI turns it
into a one-line message and exit code 1 once the terminal is restored.
"""

from __future__ import annotations

from pathlib import Path


class FmorderError(Exception):
    """Base class for every error raised by fmorder."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.message}: {self.path}"


# --- Loading ---


class NoFrontMatterError(FmorderError):
    """The document carries no front-matter block (not fatal)."""


class FrontMatterParseError(FmorderError):
    """The front-matter block is not valid YAML."""


class NonIntegerOrderingKeyError(FmorderError):
    """The ordering key holds something other than an integer."""


class DirectoryReadError(FmorderError):
    """A target directory could not be listed."""


class FileReadError(FmorderError):
    """A candidate document could not be read."""


# --- Collection ---


class IndexOutOfRangeError(FmorderError, IndexError):
    """An index-taking operation received an index outside the collection."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"index {index} out of range for {length} page(s)")
        self.index = index
        self.length = length


class NoSuchNeighborError(FmorderError):
    """A swap asked for a neighbour beyond either end of the collection."""

    def __init__(self, index: int, direction: str) -> None:
        super().__init__(f"page {index} has no {direction} neighbour")
        self.index = index
        self.direction = direction


# --- Persisting ---


class SerializationError(FmorderError):
    """Updated front matter could not be rendered back to YAML."""


class FileWriteError(FmorderError):
    """A rewritten document could not be written to disk."""


# --- Session ---


class SessionTerminatedError(FmorderError):
    """A key was handed to a controller that already terminated."""
