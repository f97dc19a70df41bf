"""
Logging helpers for txgas.

txgas logs through the standard library under the "txgas" logger
hierarchy. As a library it installs only a NullHandler; applications opt
in to output with configure_logging().

Example:
    ```python
    from txgas.utils.logging import configure_logging

    configure_logging("DEBUG", json_format=True)
    ```
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Union

ROOT_LOGGER_NAME = "txgas"

# LogRecord attributes that are not user supplied `extra` fields
_RESERVED_ATTRS = frozenset(
    {
        "args", "asctime", "created", "exc_info", "exc_text", "filename",
        "funcName", "levelname", "levelno", "lineno", "module", "msecs",
        "message", "msg", "name", "pathname", "process", "processName",
        "relativeCreated", "stack_info", "taskName", "thread", "threadName",
    }
)

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class JsonFormatter(logging.Formatter):
    """Render records as one JSON object per line, including `extra` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                payload[key] = value
        return json.dumps(payload, ensure_ascii=False, default=str)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger inside the txgas hierarchy.

    Args:
        name: Usually the calling module's __name__

    Returns:
        Logger named `name` if it already lives under "txgas", else "txgas.<name>"
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    *,
    json_format: bool = False,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """
    Send txgas logs somewhere visible.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: Log level for the txgas hierarchy
        json_format: Emit JSON lines instead of plain text
        handler: Handler to use (defaults to a StreamHandler on stderr)

    Returns:
        The configured "txgas" root logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(root.handlers):
        if getattr(existing, "_txgas_configured", False):
            root.removeHandler(existing)

    handler = handler or logging.StreamHandler()
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    setattr(handler, "_txgas_configured", True)

    root.addHandler(handler)
    root.setLevel(level)
    return root


def set_level(level: Union[int, str]) -> None:
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


def enable_debug() -> None:
    set_level(logging.DEBUG)


def disable_logging() -> None:
    """Silence every txgas logger until the level is set again."""
    set_level(logging.CRITICAL + 1)
