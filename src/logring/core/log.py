from __future__ import annotations

import logging
import os
import sys
import json
from typing import Optional

_configured = False

TEXT_FORMAT = "[%(asctime)s] %(levelname)s %(name)s | %(message)s"


def _maybe_load_dotenv() -> None:
    try:
        # Optional: load .env if python-dotenv is installed
        from dotenv import load_dotenv  # type: ignore
        load_dotenv()
    except ImportError:
        pass


def _parse_level(level: str, default: int = logging.INFO) -> int:
    lvl = getattr(logging, level.upper(), None)
    return lvl if isinstance(lvl, int) else default


class JsonHandler(logging.StreamHandler):
    """Lightweight JSON logger for stdout."""
    def __init__(self, stream=None):
        super().__init__(stream=stream or sys.stdout)

    def format(self, record: logging.LogRecord) -> str:
        obj = {
            "ts": record.created,
            "lvl": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        # Include extras if present (safe subset)
        for k in ("filename", "lineno", "funcName"):
            obj[k] = getattr(record, k, None)
        return json.dumps(obj, ensure_ascii=False)


def setup(level: Optional[str] = None, json_mode: Optional[bool] = None, *, force: bool = False) -> None:
    """Configure root logger.
    - Reads LOG_LEVEL, LOG_JSON from env if args are None
    - If already configured, do nothing unless force=True
    """
    global _configured
    if _configured and not force:
        return

    _maybe_load_dotenv()

    py_level = _parse_level(level or os.getenv("LOG_LEVEL", "INFO"))
    json_flag = json_mode if json_mode is not None else (os.getenv("LOG_JSON", "0") == "1")

    root = logging.getLogger()
    # Reset handlers to avoid duplicate logs (pytest re-runs etc.)
    root.handlers.clear()
    root.setLevel(py_level)

    if json_flag:
        handler: logging.Handler = JsonHandler()
    else:
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=TEXT_FORMAT))
    root.addHandler(handler)

    _configured = True


def get(name: str) -> logging.Logger:
    """Helper to get a namespaced logger."""
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Dynamically adjust root log level (e.g., during tests)."""
    logging.getLogger().setLevel(_parse_level(level))
