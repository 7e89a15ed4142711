"""
Structured logging for Moodwave.

Every line carries the component and operation that produced it, plus a
short operation id so lines from concurrent playlist requests can be told
apart. Output is one JSON object per line, or a readable text line.
"""
import copy
import json
import logging
import sys
import time
import traceback
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Generator, Iterator, Optional, Tuple


SECRET_MARKERS = ('password', 'secret', 'token', 'key', 'auth')
REDACTED = "***REDACTED***"


@dataclass(frozen=True)
class OperationContext:
    """Component and operation a group of log lines belongs to."""
    component: str
    operation: str
    operation_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component": self.component,
            "operation": self.operation,
            "operation_id": self.operation_id,
            "metadata": dict(self.metadata),
        }


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, 'operation', None)
        if context is not None:
            entry["context"] = context.to_dict()
        entry.update(getattr(record, 'fields', None) or {})
        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, tb = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc),
                "traceback": traceback.format_exception(exc_type, exc, tb),
            }
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    def __init__(self):
        super().__init__("%(asctime)s %(levelname)-7s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = getattr(record, 'operation', None)
        if context is not None:
            line = f"{line} [{context.component}.{context.operation} {context.operation_id}]"
        fields = getattr(record, 'fields', None)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


FORMATTERS = {
    "json": JSONFormatter,
    "text": TextFormatter,
}


def _configure(name: str, level: str, fmt: str) -> logging.Logger:
    if fmt not in FORMATTERS:
        raise ValueError(f"Unknown log format '{fmt}', expected one of {sorted(FORMATTERS)}")
    logger = logging.getLogger(name)
    logger.setLevel(logging.getLevelName(level.upper()))
    # One handler per logger name, replaced when the format changes.
    logger.handlers = [h for h in logger.handlers if not getattr(h, '_moodwave', False)]
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(FORMATTERS[fmt]())
    handler._moodwave = True
    logger.addHandler(handler)
    logger.propagate = False
    return logger


class StructuredLogger:
    """Logger that attaches keyword fields and an operation context to each line."""

    def __init__(self, name: str, level: str = "INFO", fmt: str = "json"):
        """Initialize the structured logger.

        Args:
            name: Logger name, e.g. ``moodwave.engine``
            level: Logging level name (DEBUG, INFO, WARNING, ERROR)
            fmt: Output format, 'json' or 'text'
        """
        self.name = name
        self.fmt = fmt
        self.logger = _configure(name, level, fmt)
        self.context: Optional[OperationContext] = None

    def _log(self, level: int, message: str, exc_info: bool = False, **fields: Any) -> None:
        if not self.logger.isEnabledFor(level):
            return
        self.logger.log(level, message, exc_info=exc_info,
                        extra={'operation': self.context, 'fields': fields})

    def debug(self, message: str, **fields: Any) -> None:
        self._log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self._log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._log(logging.WARNING, message, **fields)

    def error(self, message: str, exc_info: bool = False, **fields: Any) -> None:
        self._log(logging.ERROR, message, exc_info=exc_info, **fields)

    def metric(self, name: str, value: float, unit: str = "ms") -> None:
        self._log(logging.INFO, f"Metric: {name}", metric_name=name,
                  metric_value=round(value, 3), metric_unit=unit)

    def bind(self, context: OperationContext) -> 'StructuredLogger':
        """Copy of this logger that tags every line with ``context``."""
        bound = copy.copy(self)
        bound.context = context
        return bound

    @contextmanager
    def operation_context(self, component: str, operation: str,
                          **metadata: Any) -> Generator['StructuredLogger', None, None]:
        """Log the start and end of an operation and yield a bound logger.

        A failing operation is logged with its exception and re-raised.
        """
        log = self.bind(OperationContext(component, operation, metadata=metadata))
        log.info(f"Starting operation: {operation}", operation_status="started")
        start = time.perf_counter()
        try:
            yield log
        except Exception as e:
            log.error(
                f"Failed operation: {operation}",
                exc_info=True,
                operation_status="failed",
                duration_ms=round((time.perf_counter() - start) * 1000, 3),
                error_type=type(e).__name__
            )
            raise
        log.info(
            f"Completed operation: {operation}",
            operation_status="completed",
            duration_ms=round((time.perf_counter() - start) * 1000, 3)
        )

    def log_playlist(self, playlist: Any, **fields: Any) -> None:
        """One summary line for a generated playlist."""
        tracks = playlist.tracks
        self.info(
            "Playlist generated",
            playlist_name=playlist.name,
            num_tracks=len(tracks),
            total_duration_ms=playlist.total_duration_ms,
            top_emotion=playlist.target.top_emotion,
            genres=list(playlist.genres),
            best_score=round(tracks[0].mood_score, 4) if tracks else None,
            worst_score=round(tracks[-1].mood_score, 4) if tracks else None,
            **fields
        )

    def log_config(self, config: Dict[str, Any]) -> None:
        """Log a nested config as flat dotted keys with secrets redacted."""
        self.info("Configuration loaded", config=dict(_flatten(config)))


def _flatten(data: Dict[str, Any], prefix: str = "") -> Iterator[Tuple[str, Any]]:
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            yield from _flatten(value, dotted + ".")
        elif any(marker in key.lower() for marker in SECRET_MARKERS):
            yield dotted, REDACTED
        else:
            yield dotted, value
