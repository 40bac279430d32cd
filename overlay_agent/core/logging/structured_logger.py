import logging
import sys
from typing import Any, Optional

from .constants import DEFAULT_LEVEL, LOG_JSON, LOG_LEVEL_MAP
from .formatters import JsonFormatter, SmartFormatter


def _configure_root_logger():
    root = logging.getLogger()
    if not root.handlers:
        root.addHandler(logging.NullHandler())


_configure_root_logger()


def _make_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if LOG_JSON else SmartFormatter(use_colors=True))
    handler.setLevel(level)
    return handler


class StructuredLogger:
    """Logger whose keyword arguments become structured fields.

    ``bind()`` returns a logger that adds fixed fields to every record, so a
    parser can tag each line with its channel policy once.
    """

    def __init__(self, name: str, level: Optional[int] = None, **fields: Any):
        self._logger = logging.getLogger(name)
        self._fields = fields
        effective_level = level or DEFAULT_LEVEL
        self._logger.setLevel(effective_level)

        if not self._logger.handlers:
            self._logger.addHandler(_make_handler(effective_level))
            self._logger.propagate = False

    @property
    def name(self) -> str:
        return self._logger.name

    def bind(self, **fields: Any) -> "StructuredLogger":
        child = StructuredLogger.__new__(StructuredLogger)
        child._logger = self._logger
        child._fields = {**self._fields, **fields}
        return child

    def _emit(self, level: int, msg: str, exc_info=None, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        record = self._logger.makeRecord(self._logger.name, level, "", 0, msg, (), exc_info)
        record.extra_data = {**self._fields, **kwargs}
        self._logger.handle(record)
        if level >= logging.WARNING:
            for h in self._logger.handlers:
                h.flush()

    def debug(self, msg: str, **kwargs) -> None:
        self._emit(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs) -> None:
        self._emit(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs) -> None:
        self._emit(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs) -> None:
        self._emit(logging.ERROR, msg, **kwargs)

    def exception(self, msg: str, **kwargs) -> None:
        self._emit(logging.ERROR, msg, exc_info=sys.exc_info(), **kwargs)


_loggers: dict[str, StructuredLogger] = {}


def get_logger(name: str = "overlay_agent") -> StructuredLogger:
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name)
    return _loggers[name]


def set_log_level(level: str) -> None:
    """Set every logger created through get_logger(); unknown names mean DEBUG."""
    numeric = LOG_LEVEL_MAP.get(level.upper(), logging.DEBUG)
    for logger in _loggers.values():
        logger._logger.setLevel(numeric)
        for h in logger._logger.handlers:
            h.setLevel(numeric)
