"""Console logging for Proact runs.

A run is reported on stdout in one of three modes:
- human: `[INFO] Wrote 6 artifact(s) for my-project`
- verbose: `[DEBUG][09:30:12] write docs/tools.md (812 bytes)`, adds the file
  operations a run performs (mkdir -p, write, append)
- json: one object per line for CI, e.g.
  `{"level": "DEBUG", "ts": "...", "msg": "Created: docs/tools.md", "decision": "create", ...}`

Structured fields attached with `ProactLogger.structured` are only rendered
in json mode.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from enum import Enum
from typing import Any, TextIO

LOGGER_NAME = "proact"

FIELDS_ATTR = "proact_fields"

RESET = "\033[0m"

_LEVEL_COLORS = {
    logging.DEBUG: "\033[90m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[31m",
}


class LogMode(Enum):
    """Logging output mode."""

    HUMAN = "human"
    VERBOSE = "verbose"
    JSON = "json"


class ConsoleFormatter(logging.Formatter):
    """`[LEVEL] message`, or `[LEVEL][HH:MM:SS] message` with timestamps."""

    def __init__(self, timestamps: bool = False, use_colors: bool = False) -> None:
        super().__init__()
        self.timestamps = timestamps
        self.use_colors = use_colors

    def _level_tag(self, record: logging.LogRecord) -> str:
        tag = f"[{record.levelname}]"
        if not self.use_colors:
            return tag
        return f"{_LEVEL_COLORS.get(record.levelno, RESET)}{tag}{RESET}"

    def format(self, record: logging.LogRecord) -> str:
        prefix = self._level_tag(record)
        if self.timestamps:
            prefix += datetime.fromtimestamp(record.created).strftime("[%H:%M:%S]")
        return f"{prefix} {record.getMessage()}"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with any structured fields merged in."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "level": record.levelname,
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "msg": record.getMessage(),
            "logger": record.name,
        }
        entry.update(getattr(record, FIELDS_ATTR, {}))
        return json.dumps(entry, default=str)


class ProactLogger(logging.Logger):
    """Logger that can attach machine-readable fields to a message."""

    def structured(self, level: int, msg: str, **fields: Any) -> None:
        """Log msg with fields that json mode emits alongside it.

        Args:
            level: Log level
            msg: Human-readable message
            **fields: Extra keys for the JSON record
        """
        if self.isEnabledFor(level):
            self.log(level, msg, extra={FIELDS_ATTR: fields}, stacklevel=2)


logging.setLoggerClass(ProactLogger)


def get_logger(name: str = LOGGER_NAME) -> ProactLogger:
    """Get a Proact logger (`proact` or one of its children)."""
    return logging.getLogger(name)  # type: ignore[return-value]


def _make_formatter(mode: LogMode, stream: TextIO) -> logging.Formatter:
    if mode is LogMode.JSON:
        return JSONFormatter()
    use_colors = hasattr(stream, "isatty") and stream.isatty()
    return ConsoleFormatter(timestamps=mode is LogMode.VERBOSE, use_colors=use_colors)


def setup_logging(
    mode: LogMode = LogMode.HUMAN,
    level: int = logging.INFO,
    stream: TextIO | None = None,
) -> None:
    """Route the proact logger to stream in the given mode.

    Replaces any handler installed by an earlier call.

    Args:
        mode: Output mode
        level: Minimum level
        stream: Output stream (default: the current sys.stdout)
    """
    stream = stream or sys.stdout

    handler = logging.StreamHandler(stream)
    handler.setFormatter(_make_formatter(mode, stream))

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)


def mode_for_flags(
    verbose: bool = False,
    quiet: bool = False,
    ci: bool = False,
) -> tuple[LogMode, int]:
    """Map CLI flags to an output mode and level.

    --ci selects json output, --verbose adds timestamps and DEBUG records,
    --quiet caps output at warnings whatever else is set.
    """
    if ci:
        mode = LogMode.JSON
    elif verbose:
        mode = LogMode.VERBOSE
    else:
        mode = LogMode.HUMAN

    if quiet:
        return mode, logging.WARNING
    return mode, logging.DEBUG if verbose else logging.INFO


def configure_from_cli(
    verbose: bool = False,
    quiet: bool = False,
    ci: bool = False,
) -> None:
    """Configure logging from the global CLI flags."""
    mode, level = mode_for_flags(verbose=verbose, quiet=quiet, ci=ci)
    setup_logging(mode=mode, level=level)
