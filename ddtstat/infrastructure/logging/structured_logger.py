"""
Structured logger implementation writing diagnostics to stderr.
"""
import json
import logging
import sys
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Any, Optional, TextIO

from ...core.interfaces.logger_interface import ILogger


# Level names as they appear in text output
LEVEL_LABELS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "FATAL",
}

# Verbosity steps, most verbose first
LEVEL_ORDER = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'stack_info',
    'exc_info', 'exc_text', 'message', 'timestamp', 'taskName'
}


@dataclass(frozen=True)
class LogConfig:
    """Threshold and output format of the diagnostic sink."""
    level: str = "WARNING"
    format: str = "text"

    def with_verbosity(self, verbose: int = 0, quiet: bool = False) -> 'LogConfig':
        """Shift the threshold one step per -v, or to CRITICAL with -q."""
        if quiet:
            return LogConfig(level="CRITICAL", format=self.format)
        index = LEVEL_ORDER.index(self.level) if self.level in LEVEL_ORDER else LEVEL_ORDER.index("WARNING")
        return LogConfig(level=LEVEL_ORDER[max(0, index - verbose)], format=self.format)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec='seconds')


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    extras = {}
    for key, value in record.__dict__.items():
        if key in _RESERVED_ATTRS:
            continue
        # Ensure value is JSON serializable
        try:
            json.dumps(value)
            extras[key] = value
        except (TypeError, ValueError):
            extras[key] = str(value)
    return extras


class TextFormatter(logging.Formatter):
    """`<timestamp> [LEVEL] message key=value ...`"""

    def format(self, record: logging.LogRecord) -> str:
        label = LEVEL_LABELS.get(record.levelno, record.levelname)
        line = f"{getattr(record, 'timestamp', _timestamp())} [{label}] {record.getMessage()}"

        extras = _extra_fields(record)
        if extras:
            line += " " + " ".join(f"{key}={value}" for key, value in extras.items())

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured JSON logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry = {
            "timestamp": getattr(record, 'timestamp', _timestamp()),
            "level": LEVEL_LABELS.get(record.levelno, record.levelname),
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        log_entry.update(_extra_fields(record))

        try:
            return json.dumps(log_entry, ensure_ascii=False, separators=(',', ':'))
        except (TypeError, ValueError):
            return str(log_entry)


class StructuredLogger(ILogger):
    """Structured logger bound to one stream handler."""

    def __init__(self, name: str = "ddtstat", config: Optional[LogConfig] = None,
                 stream: Optional[TextIO] = None):
        self.name = name
        self.config = config or LogConfig()
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, self.config.level.upper(), logging.WARNING))

        formatter = StructuredFormatter() if self.config.format == "json" else TextFormatter()

        # Replace handlers so reconfiguration within one process takes effect
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        handler.setFormatter(formatter)
        self.logger.addHandler(handler)

        # Prevent duplicate logs
        self.logger.propagate = False

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.WARNING, message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.ERROR, message, extra)

    def critical(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.CRITICAL, message, extra)

    def _log(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Internal logging method with structured context."""
        if not self.logger.isEnabledFor(level):
            return

        record = self.logger.makeRecord(
            name=self.name,
            level=level,
            fn="",
            lno=0,
            msg=message,
            args=(),
            exc_info=None
        )

        for key, value in (extra or {}).items():
            setattr(record, key, value)

        record.timestamp = _timestamp()

        self.logger.handle(record)


class ContextLogger(StructuredLogger):
    """Logger with persistent context that gets added to all log messages."""

    def __init__(self, name: str = "ddtstat", config: Optional[LogConfig] = None,
                 stream: Optional[TextIO] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(name, config, stream)
        self.context = context or {}
        self._context_lock = threading.Lock()

    def add_context(self, key: str, value: Any) -> None:
        with self._context_lock:
            self.context[key] = value

    def remove_context(self, key: str) -> None:
        with self._context_lock:
            self.context.pop(key, None)

    def _log(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Internal logging method with merged context."""
        with self._context_lock:
            merged_extra = self.context.copy()
        if extra:
            merged_extra.update(extra)

        super()._log(level, message, merged_extra)
