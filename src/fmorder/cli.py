"""Command-line entry point for fmorder."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from pydantic import ValidationError

from fmorder.config.logging import configure_logging
from fmorder.config.models import KeyBindings
from fmorder.config.settings import FmorderSettings
from fmorder.errors import FmorderError
from fmorder.infrastructure.filesystem import load_page_list
from fmorder.output.console import create_console, print_summary
from fmorder.tui.controller import Controller
from fmorder.tui.session import run_session

logger = logging.getLogger(__name__)


def _settings_error(exc: ValidationError) -> click.ClickException:
    """Blame --key for key errors and the FMORDER_* variable for the rest."""
    errors = exc.errors()
    for error in errors:
        if error["loc"][:1] == ("key",):
            return click.BadParameter(error["msg"], param_hint="--key")
    error = errors[0]
    field = str(error["loc"][0]) if error["loc"] else "settings"
    return click.ClickException(f"invalid FMORDER_{field.upper()}: {error['msg']}")


@click.command()
@click.option("--key", required=True, help="Front-matter key that receives the order.")
@click.option(
    "-t",
    "--target",
    type=click.Path(path_type=Path),
    default=".",
    show_default=True,
    help="Directory containing the documents.",
)
@click.option("-r", "--recursive", is_flag=True, help="Descend into subdirectories.")
def cli(key: str, target: Path, recursive: bool) -> None:
    """Assign sequential values to a YAML front-matter key, interactively.

    Scans TARGET for .md and .html files with front matter, lets you pick
    and reorder the ones that should carry KEY, then rewrites KEY as
    0, 1, 2, ... in the chosen order.
    """
    try:
        settings = FmorderSettings.from_cli(key=key, target=target, recursive=recursive)
    except ValidationError as exc:
        raise _settings_error(exc) from exc

    configure_logging(
        verbose=settings.verbose,
        log_json=settings.log_json,
        log_file=settings.log_file,
    )

    try:
        pages = load_page_list(settings.target, settings.key, recursive=settings.recursive)
    except FmorderError as exc:
        raise click.ClickException(str(exc)) from exc

    if not len(pages):
        click.echo(f"No documents with front matter found in {settings.target}")
        return

    console = create_console()
    controller = Controller(pages, KeyBindings())
    try:
        run_session(controller, console)
    except FmorderError as exc:
        logger.debug("Session aborted", exc_info=True)
        raise click.ClickException(str(exc)) from exc
    except (KeyboardInterrupt, EOFError) as exc:
        raise click.Abort from exc

    if controller.saved:
        print_summary(console, controller.written, settings.key)
