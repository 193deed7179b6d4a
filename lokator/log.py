"""Structured logging for lokator.

Resolution steps log at debug, the selected data file at info, misses and
ambiguous matches at warning. Importing lokator configures nothing; the
pytest plugin calls ``configure_logging`` once per session and other
harnesses may call it themselves.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO, Union

import structlog
from structlog.types import Processor

from lokator.errors import ConfigError

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}
DEFAULT_LEVEL = "warning"


class _CurrentStderr:
    """Writes to whatever ``sys.stderr`` is at the time of the call.

    pytest replaces sys.stderr while it captures a test's output, and a
    PrintLogger keeps the file object it was created with.
    """

    def write(self, text: str) -> int:
        return sys.stderr.write(text)

    def flush(self) -> None:
        sys.stderr.flush()


_current_stderr: TextIO = _CurrentStderr()  # type: ignore[assignment]


def resolve_level(level: Union[int, str]) -> int:
    """Turn a level name (``"debug"``, ``"INFO"``...) or number into a logging level."""
    if isinstance(level, int):
        return level
    try:
        return LEVELS[level.strip().lower()]
    except KeyError:
        known = ", ".join(LEVELS)
        raise ConfigError(f"Unknown log level '{level}' (expected one of: {known})") from None


def level_for_verbosity(verbosity: int) -> int:
    """Map pytest's ``-v`` count to a threshold: warnings, then info, then debug."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(level: Union[int, str] = DEFAULT_LEVEL, json_logs: bool = False) -> None:
    threshold = resolve_level(level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if json_logs:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    # Module loggers are created at import time, before this runs, so they
    # must not freeze whichever configuration they first saw.
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=_current_stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(logger=name)


__all__ = ["LEVELS", "DEFAULT_LEVEL", "configure_logging", "get_logger", "level_for_verbosity", "resolve_level"]
