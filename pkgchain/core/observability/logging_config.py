"""
Logging configuration — central setup for the CLI entrypoint.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Levels are resolved in precedence order:
    CLI flag  >  PKGCHAIN_LOG_LEVEL env var  >  WARNING (default)

Optional file output via PKGCHAIN_LOG_FILE / PKGCHAIN_LOG_FILE_LEVEL.

The command transcript (every pacman/yay/flatpak invocation, its exit
status and captured stderr) is logged at DEBUG on ``COMMAND_LOGGER``.
It bypasses the console level when ``show_commands`` is set, and is
always written to the log file when there is one: after a failed
batch the file holds the stderr of every failed install.
"""

from __future__ import annotations

import logging
import sys

COMMAND_LOGGER = "pkgchain.commands"

# ── Format strings ──────────────────────────────────────────────

# WARNING level — minimal, no noise
_FMT_MINIMAL = "%(message)s"

# INFO level — timestamped with module context
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_DATEFMT_VERBOSE = "%H:%M:%S"

# DEBUG level and file output — full diagnostic with file:line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# Transcript lines on the console, e.g. "  │ $ sudo pacman -S --noconfirm vlc"
_FMT_COMMAND = "  │ %(message)s"


class _TranscriptFilter(logging.Filter):
    """Pass records at ``level`` and above, plus the command transcript."""

    def __init__(self, level: int, transcript: bool):
        super().__init__()
        self.level = level
        self.transcript = transcript

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno >= self.level:
            return True
        return self.transcript and _is_command_record(record)


class _ConsoleFormatter(logging.Formatter):
    """Regular format, except transcript lines below the console level."""

    def __init__(self, fmt: str, datefmt: str | None, level: int):
        super().__init__(fmt, datefmt=datefmt)
        self._command = logging.Formatter(_FMT_COMMAND)
        self._level = level

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno < self._level and _is_command_record(record):
            return self._command.format(record)
        return super().format(record)


def _is_command_record(record: logging.LogRecord) -> bool:
    return record.name == COMMAND_LOGGER or record.name.startswith(COMMAND_LOGGER + ".")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    show_commands: bool = False,
) -> None:
    """Configure Python logging for the entire process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.
        show_commands: Echo the command transcript on the console
            whatever ``level`` is.
    """
    numeric_level = _parse_level(level)

    # ── Console handler (stderr) ────────────────────────────────
    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_DEBUG
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_VERBOSE
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.addFilter(_TranscriptFilter(numeric_level, show_commands))
    console.setFormatter(_ConsoleFormatter(fmt, datefmt, numeric_level))

    # ── Root logger ─────────────────────────────────────────────
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    # Effective root level = minimum of console and file levels
    effective_level = numeric_level

    # ── File handler (optional, always carries the transcript) ──
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.addFilter(_TranscriptFilter(file_level, True))
        fh.setFormatter(logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)

    # Transcript records must be created even when the root level is higher
    transcript = logging.getLogger(COMMAND_LOGGER)
    transcript.setLevel(logging.DEBUG if (show_commands or log_file) else logging.NOTSET)

    # Don't propagate exceptions from logging itself
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
