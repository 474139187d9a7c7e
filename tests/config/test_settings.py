"""Tests for FmorderSettings and KeyBindings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from fmorder.config.models import ARROW_DOWN_SEQUENCES, ARROW_UP_SEQUENCES, KeyBindings
from fmorder.config.settings import FmorderSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "FMORDER_KEY",
        "FMORDER_TARGET",
        "FMORDER_VERBOSE",
        "FMORDER_LOG_JSON",
        "FMORDER_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


class TestKeyBindings:
    def test_defaults(self) -> None:
        keys = KeyBindings()
        assert (keys.up, keys.down) == ("i", "k")
        assert (keys.reorder, keys.toggle) == ("p", "x")
        assert (keys.quit, keys.save, keys.confirm) == ("q", "s", "Y")

    def test_frozen(self) -> None:
        keys = KeyBindings()
        with pytest.raises(ValidationError):
            keys.up = "w"  # type: ignore[misc]

    def test_arrows(self) -> None:
        keys = KeyBindings()
        assert all(keys.is_up(seq) for seq in ARROW_UP_SEQUENCES)
        assert all(keys.is_down(seq) for seq in ARROW_DOWN_SEQUENCES)
        assert not keys.is_up("k")
        assert not keys.is_down("i")


class TestFmorderSettings:
    def test_from_cli(self) -> None:
        settings = FmorderSettings.from_cli(key="weight", target="content", recursive=True)
        assert settings.key == "weight"
        assert settings.target == Path("content")
        assert settings.recursive
        assert not settings.verbose

    def test_defaults(self) -> None:
        settings = FmorderSettings.from_cli(key="order")
        assert settings.target == Path(".")
        assert not settings.recursive

    def test_blank_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            FmorderSettings.from_cli(key="  ")

    def test_logging_switches_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FMORDER_VERBOSE", "1")
        monkeypatch.setenv("FMORDER_LOG_JSON", "true")
        settings = FmorderSettings.from_cli(key="order")
        assert settings.verbose
        assert settings.log_json

    def test_cli_wins_over_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FMORDER_KEY", "from_env")
        settings = FmorderSettings.from_cli(key="from_cli")
        assert settings.key == "from_cli"

    def test_frozen(self) -> None:
        settings = FmorderSettings.from_cli(key="order")
        with pytest.raises(ValidationError):
            settings.key = "other"  # type: ignore[misc]

    def test_log_file_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FMORDER_LOG_FILE", "run.log")
        settings = FmorderSettings.from_cli(key="order")
        assert settings.log_file == Path("run.log")

    def test_log_file_defaults_to_none(self) -> None:
        assert FmorderSettings.from_cli(key="order").log_file is None

    def test_bad_env_switch_names_the_field(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FMORDER_VERBOSE", "maybe")
        with pytest.raises(ValidationError) as excinfo:
            FmorderSettings.from_cli(key="order")
        assert excinfo.value.errors()[0]["loc"] == ("verbose",)
