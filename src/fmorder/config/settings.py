"""Unified settings — CLI flags, env vars, and code defaults in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``FMORDER_*`` prefix
  3. Code defaults — baked into the field definitions

The command line deliberately stays at ``--key``, ``--target`` and
``--recursive``; logging switches are read from the environment only
(``FMORDER_VERBOSE=1``, ``FMORDER_LOG_JSON=1``,
``FMORDER_LOG_FILE=fmorder.log``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class FmorderSettings(BaseSettings):
    """Settings for one fmorder run, frozen after construction.

    Attributes:
        key: Front-matter field that receives the ordering value.
        target: Directory scanned for documents.
        recursive: Descend into subdirectories of *target*.
        verbose: Enable DEBUG logging for the ``fmorder`` logger.
        log_json: Emit JSON log lines instead of the console renderer.
        log_file: Write log records to this file instead of stderr.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FMORDER_",
    }

    key: str
    target: Path = Field(default_factory=lambda: Path("."))
    recursive: bool = False

    verbose: bool = False
    log_json: bool = False
    log_file: Path | None = None

    @field_validator("key")
    @classmethod
    def _key_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "ordering key must not be empty"
            raise ValueError(msg)
        return value

    @classmethod
    def from_cli(
        cls,
        *,
        key: str,
        target: Path | str = ".",
        recursive: bool = False,
        **overrides: Any,
    ) -> FmorderSettings:
        """Construct settings from the CLI invocation.

        CLI values win over ``FMORDER_*`` environment variables; fields the
        CLI does not expose (logging switches) fall back to the environment.
        """
        return cls(key=key, target=Path(target), recursive=recursive, **overrides)
