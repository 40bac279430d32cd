import json
import logging
from dataclasses import asdict, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from .constants import (
    LEVEL_STYLES,
    LOG_TZ,
    MODULE_ABBREV,
    MODULE_COLORS,
    Colors,
    _COLORS,
    get_request_id,
)

# Free-text fields are clipped harder than the default so one line stays one line.
FIELD_MAX_LEN = {
    "prompt": 40,
    "url": 48,
    "instruction": 40,
}


def log_value(value: Any) -> Any:
    """Reduce enums and parse records to plain JSON-friendly values."""
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if is_dataclass(value) and not isinstance(value, type):
        return {k: v for k, v in asdict(value).items() if v is not None}
    return value


def _module_display(name: str) -> str:

    name_parts = name.split(".")
    prefix = name_parts[0].lower()
    mod_abbrev = MODULE_ABBREV.get(prefix, prefix[:3].upper())

    if len(name_parts) > 1:
        submod = ".".join(name_parts[1:])
        if len(submod) > 9:
            submod = submod[:8] + "…"
        module_display = f"{mod_abbrev}|{submod}"
    else:
        module_display = mod_abbrev

    if len(module_display) > 14:
        module_display = module_display[:13] + "…"
    return module_display


class SmartFormatter(logging.Formatter):
    """Console formatter: ``HH:MM:SS.mmm LEVEL [MOD|sub] message | key=value``."""

    HIGHLIGHT_KEYS = {
        "action": "ACTION",
        "overlay_mode": "MODE",
        "channel": "MODE",
        "parser": "MODE",
        "use_parent_image": "SUCCESS",
        "error": "ERROR",
    }

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and Colors._enabled()

    def _c(self, key: str) -> str:
        if not self.use_colors:
            return ""
        return _COLORS.get(key, "")

    def _format_value(self, value: Any, max_len: int = 60) -> str:
        value = log_value(value)

        if value is None:
            return "-"
        if isinstance(value, bool):
            return "yes" if value else "no"
        if isinstance(value, float):
            return f"{value:g}"
        if isinstance(value, int):
            return str(value)

        if isinstance(value, (list, tuple)):
            if len(value) <= 3:
                return f"[{', '.join(str(v) for v in value)}]"
            return f"[{len(value)} items]"

        if isinstance(value, dict):
            # Small parse records read better inline than as a key count.
            if 0 < len(value) <= 3:
                return "{" + ",".join(f"{k}:{v}" for k, v in value.items()) + "}"
            return f"{{{len(value)} keys}}"

        s = str(value).replace("\n", "⏎")
        if len(s) > max_len:
            return s[:max_len - 3] + "..."
        return s

    def _get_module_color(self, name: str) -> str:
        if not self.use_colors:
            return ""
        prefix = name.split(".")[0].lower()
        return MODULE_COLORS.get(prefix, _COLORS.get("MODULE", ""))

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        label, color_key = LEVEL_STYLES.get(level, (level[:5], "INFO"))

        c_reset = self._c("RESET")
        c_level = self._c(color_key)
        c_sep = self._c("SEPARATOR")

        now = datetime.now(LOG_TZ)
        timestamp = now.strftime("%H:%M:%S") + f".{now.microsecond // 1000:03d}"

        req_id = get_request_id()
        req = f"{req_id[:8]}│" if req_id else ""

        line = (
            f"{self._c('TIME')}{timestamp}{c_reset} {c_level}{label}{c_reset} "
            f"[{req}{self._get_module_color(record.name)}{_module_display(record.name):14}{c_reset}] "
            f"{record.getMessage()}"
        )

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            extras = []
            for key, value in extra_data.items():
                highlight = self.HIGHLIGHT_KEYS.get(key.lower())
                key_color = self._c(highlight) if highlight else self._c("KEY")
                formatted = self._format_value(value, FIELD_MAX_LEN.get(key, 60))
                extras.append(f"{key_color}{key}{c_reset}={self._c('VALUE')}{formatted}{c_reset}")
            line += f" {c_sep}│{c_reset} " + " ".join(extras)

        if record.exc_info:
            line += f"\n{c_level}{self.formatException(record.exc_info)}{c_reset}"

        return line


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log shippers (``LOG_JSON=1``)."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.now(LOG_TZ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        req_id = get_request_id()
        if req_id:
            payload["req"] = req_id

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            payload.update({key: log_value(value) for key, value in extra_data.items()})

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)
