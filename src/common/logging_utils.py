"""Centralized logging helpers.

Every module logs through ``logging.getLogger(__name__)``; this module only
configures the root logger once and provides helpers for structured DEBUG
events so callers can attach a consistent set of fields.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from constants import Constants

_CONTEXT_KEYS = ("event", "component", "action", "outcome", "target")


class _ContextFormatter(logging.Formatter):
    """Append ``key=value`` pairs carried in ``record.context`` to the message."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = getattr(record, "context", None)
        if not context:
            return base
        pairs = " ".join(f"{k}={v}" for k, v in context.items() if v is not None)
        return f"{base} [{pairs}]" if pairs else base


def _level_from_env(default: int = logging.INFO) -> int:
    name = os.environ.get(Constants.ENV_LOG_LEVEL, "").strip().upper()
    if not name:
        return default
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else default


def configure_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> None:
    """Configure the root logger.

    The level comes from ``level`` when given, else from the
    ``PACSTATE_LOG_LEVEL`` environment variable, else INFO. Calling this
    more than once replaces the handlers installed by a previous call.

    Args:
        level: Explicit logging level.
        log_file: Optional path; when set, records are also written there.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_pacstate", False):
            root.removeHandler(handler)
            handler.close()

    console = logging.StreamHandler()
    console.setFormatter(_ContextFormatter(Constants.LOG_FORMAT))
    console._pacstate = True  # type: ignore[attr-defined]
    root.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(_ContextFormatter(Constants.LOG_FILE_FORMAT))
        file_handler._pacstate = True  # type: ignore[attr-defined]
        root.addHandler(file_handler)

    root.setLevel(level if level is not None else _level_from_env())


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build the ``extra`` mapping for a structured log call.

    Known keys (event, component, action, outcome, target) come first;
    any other keyword is kept in insertion order after them.
    """
    context: Dict[str, Any] = {k: fields.pop(k) for k in _CONTEXT_KEYS if k in fields}
    context.update(fields)
    return {"context": context}
