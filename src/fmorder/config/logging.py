"""structlog configuration for fmorder.

Records go to stderr by default, or to ``FMORDER_LOG_FILE`` when set, as
console lines or (``FMORDER_LOG_JSON=1``) JSON lines.

The interactive screen owns the terminal while it is open, so
:func:`hold_terminal_logs` parks terminal-bound records until the screen
closes and then replays them. File handlers keep writing live.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from logging.handlers import BufferingHandler
from pathlib import Path

import structlog


def _stamp_from_record(
    _logger: object, _name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    # Held records are formatted late; stamp them with their creation time.
    record = event_dict.get("_record")
    if "timestamp" not in event_dict and record is not None:
        event_dict["timestamp"] = datetime.fromtimestamp(record.created, tz=UTC).isoformat()
    return event_dict


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    log_file: Path | None = None,
) -> None:
    """Route the ``fmorder`` loggers through one structlog formatter.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
        log_file: Append records to this file instead of stderr.
    """
    if log_file is not None:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
        colors = False
    else:
        handler = logging.StreamHandler(sys.stderr)
        colors = sys.stderr.isatty()

    foreign_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _stamp_from_record,
    ]

    render_chain: list[structlog.types.Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if log_json:
        render_chain += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        render_chain.append(structlog.dev.ConsoleRenderer(colors=colors))

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=foreign_chain,
            processors=render_chain,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("fmorder").setLevel(logging.DEBUG if verbose else logging.WARNING)


class _HeldRecords(BufferingHandler):
    """Collects records for a set of handlers and replays them on flush."""

    def __init__(self, targets: list[logging.Handler]) -> None:
        super().__init__(capacity=0)
        self.targets = targets

    def shouldFlush(self, record: logging.LogRecord) -> bool:  # noqa: N802
        return False

    def flush(self) -> None:
        self.acquire()
        try:
            for record in self.buffer:
                for target in self.targets:
                    if record.levelno >= target.level:
                        target.handle(record)
            self.buffer.clear()
        finally:
            self.release()


@contextmanager
def hold_terminal_logs() -> Iterator[None]:
    """Hold back root records bound for a terminal stream until the block exits."""
    root = logging.getLogger()
    held = [
        h
        for h in root.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]
    if not held:
        yield
        return

    parked = _HeldRecords(held)
    for handler in held:
        root.removeHandler(handler)
    root.addHandler(parked)
    try:
        yield
    finally:
        root.removeHandler(parked)
        for handler in held:
            root.addHandler(handler)
        parked.close()
