"""
Tabula Structured Logger
=========================

Provides :class:`TabulaLogger`, a structured logging facade that emits
both human-friendly Rich console output and machine-parseable JSON logs
to rotating log files.

Every logger lives under the ``tabula`` namespace. A logger created
without handlers of its own propagates to the ``tabula`` root, which
:func:`configure_logging` wires up once per process from
:class:`~shared.config.GlobalConfig`.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

ROOT_LOGGER_NAME = "tabula"

# ---------------------------------------------------------------------------
# Rich theme consistent with TabulaConsole colour palette
# ---------------------------------------------------------------------------
_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
        "log.level.critical": "bold white on red",
    }
)


def _level(name: Optional[str]) -> int:
    if name is None:
        return logging.NOTSET
    return getattr(logging, name.upper(), logging.INFO)


# ========================== JSON Formatter =================================


class _JSONFormatter(logging.Formatter):
    """Emit each log record as a single-line JSON object.

    Output fields::

        {
          "timestamp": "...",
          "level": "INFO",
          "logger": "tabula.vigenere.session",
          "message": "...",
          "tool_name": "vigenere.session",
          "operation": "encipher_file",
          "extra": { ... },
          "exc_info": "..."
        }
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for attr in ("tool_name", "operation"):
            val = getattr(record, attr, None)
            if val is not None:
                entry[attr] = val

        extra = getattr(record, "tabula_extra", None)
        if extra is not None:
            entry["extra"] = extra

        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


_TEXT_FORMATTER = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)


# ========================== Rich Console Handler ===========================


class _ColorConsoleHandler(RichHandler):
    """Thin wrapper over :class:`rich.logging.RichHandler` applying the
    Tabula theme. Always writes to stderr so stdout stays free for
    cipher output.
    """

    def __init__(self, **kwargs: Any) -> None:
        console = Console(theme=_LOG_THEME, stderr=True)
        super().__init__(
            console=console,
            show_path=False,
            show_time=True,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            markup=False,
            **kwargs,
        )


def _file_handler(
    log_file: str | Path,
    level: int,
    json_logs: bool,
    max_bytes: int,
    backup_count: int,
) -> RotatingFileHandler:
    file_path = Path(log_file)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    fh = RotatingFileHandler(
        filename=str(file_path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    fh.setLevel(level)
    fh.setFormatter(_JSONFormatter() if json_logs else _TEXT_FORMATTER)
    return fh


# ========================== Process-wide setup =============================


def configure_logging(
    *,
    log_level: str = "WARNING",
    log_file: str | Path | None = None,
    json_logs: bool = False,
    console_output: bool = True,
    max_bytes: int = 10_485_760,
    backup_count: int = 5,
) -> logging.Logger:
    """Attach handlers to the ``tabula`` root logger.

    Safe to call repeatedly: existing handlers are replaced.

    Args:
        log_level:      Minimum severity for the whole namespace.
        log_file:       Rotating log file path. ``None`` disables file logging.
        json_logs:      Emit JSON lines to the file handler.
        console_output: Attach the Rich stderr handler.
        max_bytes:      Log-file size before rotation (default 10 MiB).
        backup_count:   Rotated files to keep.

    Returns:
        The configured ``tabula`` logger.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    level = _level(log_level)
    root.setLevel(level)
    root.propagate = False
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if console_output:
        root.addHandler(_ColorConsoleHandler(level=level))
    if log_file is not None:
        root.addHandler(
            _file_handler(log_file, level, json_logs, max_bytes, backup_count)
        )
    if not root.handlers:
        root.addHandler(logging.NullHandler())
    return root


# ========================== TabulaLogger ===================================


class TabulaLogger:
    """Structured, context-aware logger for Tabula tools.

    Each instance is bound to a *tool_name* (e.g. ``"vigenere.session"``)
    and can carry a temporary *operation* context via a context manager.

    Features:
      - Colour-coded Rich console output.
      - Optional JSON-lines file logging with rotation.
      - Context-aware (tool_name, operation) fields in every record.
      - Timing helper for measuring operation duration.

    Usage::

        log = TabulaLogger("vigenere.session")
        log.info("Session started")
        with log.operation("encipher_file"):
            log.debug("Reading %s", path)

    Args:
        tool_name:       Identifying name for the Tabula module.
        log_level:       Minimum severity, or ``None`` to inherit from the
                         ``tabula`` root.
        log_file:        Path to a rotating log file. ``None`` disables file logging.
        json_logs:       If ``True`` the file handler emits JSON lines.
        max_bytes:       Maximum log-file size before rotation (default 10 MiB).
        backup_count:    Number of rotated backup files to keep.
        console_output:  If ``True`` attach a colour Rich console handler.
    """

    def __init__(
        self,
        tool_name: str,
        *,
        log_level: Optional[str] = None,
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
        console_output: bool = False,
    ) -> None:
        self._tool_name = tool_name
        self._operation: str | None = None

        self._logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{tool_name}")
        level = _level(log_level)
        self._logger.setLevel(level)

        # Prevent duplicate handlers on re-instantiation
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()

        if console_output:
            self._logger.addHandler(_ColorConsoleHandler(level=level))
        if log_file is not None:
            self._logger.addHandler(
                _file_handler(log_file, level, json_logs, max_bytes, backup_count)
            )

        # Loggers with their own handlers stay out of the root's output.
        self._logger.propagate = not self._logger.handlers

    # ------------------------------------------------------------------ #
    #  Context management -- operation scope
    # ------------------------------------------------------------------ #

    class _OperationContext:
        """Context manager that temporarily binds an operation name."""

        def __init__(self, parent: TabulaLogger, operation: str) -> None:
            self._parent = parent
            self._operation = operation
            self._prev: str | None = None

        def __enter__(self) -> TabulaLogger:
            self._prev = self._parent._operation
            self._parent._operation = self._operation
            return self._parent

        def __exit__(self, *exc: Any) -> None:
            self._parent._operation = self._prev

    def operation(self, name: str) -> _OperationContext:
        """Return a context manager that sets the *operation* field.

        While active, every log record will include ``operation=<name>``.
        """
        return self._OperationContext(self, name)

    # ------------------------------------------------------------------ #
    #  Log methods
    # ------------------------------------------------------------------ #

    def _enrich(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        """Inject Tabula context into the log record via *extra*."""
        extra = kwargs.pop("extra", {}) or {}

        context: dict[str, Any] = {}
        standard_keys = {"exc_info", "stack_info", "stacklevel"}
        for key in list(kwargs):
            if key not in standard_keys:
                context[key] = kwargs.pop(key)

        extra["tool_name"] = self._tool_name
        extra["operation"] = self._operation
        if context:
            extra["tabula_extra"] = context

        kwargs["extra"] = extra
        return kwargs

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a DEBUG-level message."""
        kwargs = self._enrich(kwargs)
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log an INFO-level message."""
        kwargs = self._enrich(kwargs)
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a WARNING-level message."""
        kwargs = self._enrich(kwargs)
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log an ERROR-level message."""
        kwargs = self._enrich(kwargs)
        self._logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log an ERROR-level message with full exception traceback."""
        kwargs["exc_info"] = kwargs.get("exc_info", True)
        kwargs = self._enrich(kwargs)
        self._logger.error(msg, *args, **kwargs)

    # ------------------------------------------------------------------ #
    #  Timing helper
    # ------------------------------------------------------------------ #

    class _TimingContext:
        """Context manager for measuring and logging elapsed time."""

        def __init__(self, logger_inst: TabulaLogger, label: str) -> None:
            self._logger = logger_inst
            self._label = label
            self._start: float = 0.0
            self._stop: float | None = None

        def __enter__(self) -> TabulaLogger._TimingContext:
            self._start = time.perf_counter()
            self._logger.debug("Started: %s", self._label)
            return self

        def __exit__(self, *exc: Any) -> None:
            self._stop = time.perf_counter()
            self._logger.info(
                "Completed: %s (%.3f sec)",
                self._label,
                self._stop - self._start,
            )

        @property
        def elapsed(self) -> float:
            """Seconds elapsed since entering the context (frozen on exit)."""
            end = self._stop if self._stop is not None else time.perf_counter()
            return end - self._start

    def timed(self, label: str) -> _TimingContext:
        """Context manager that logs start / finish and elapsed time.

        Usage::

            with log.timed("encipher notes.txt") as timer:
                ...
            report.elapsed_seconds = timer.elapsed
        """
        return self._TimingContext(self, label)

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def tool_name(self) -> str:
        """Name of the Tabula tool this logger is bound to."""
        return self._tool_name

    @property
    def underlying(self) -> logging.Logger:
        """Direct access to the stdlib :class:`logging.Logger`."""
        return self._logger
