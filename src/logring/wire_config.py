# src/logring/wire_config.py
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Any, Dict, List

try:
    import yaml  # PyYAML
except ImportError as e:
    raise RuntimeError("Please install PyYAML: pip install pyyaml") from e

from logring.core import log
from logring.core.handler import RingLogHandler

DEFAULT_CAPACITY = 256

_log = log.get("logring.wire_config")


def _default_capacity() -> int:
    return int(os.getenv("LOGRING_CAPACITY", str(DEFAULT_CAPACITY)))


def _logger_names(cfg: Dict[str, Any]) -> List[str]:
    names = cfg.get("loggers")
    if names is None:
        return [""]  # "" = root logger
    if isinstance(names, str):
        return [names]
    if not isinstance(names, list):
        raise ValueError(f"handler {cfg.get('name')!r}: 'loggers' must be a list")
    return [str(n) for n in names] or [""]


def build_handler(cfg: Dict[str, Any]) -> RingLogHandler:
    """Build one RingLogHandler from a config mapping (not attached yet)."""
    cap = cfg.get("capacity")
    h = RingLogHandler(
        capacity=_default_capacity() if cap is None else int(cap),
        name=cfg.get("name"),
        level=log._parse_level(str(cfg.get("level", "NOTSET")), default=logging.NOTSET),
    )
    fmt = cfg.get("format")
    if fmt:
        h.setFormatter(logging.Formatter(fmt=fmt))
    return h


def attach(h: RingLogHandler, names: List[str]) -> None:
    for name in names:
        logging.getLogger(name or None).addHandler(h)
    _log.debug("ring handler %s capacity=%d loggers=%s", h.name, h.capacity, names)


def build_from_yaml(yaml_path: str) -> List[RingLogHandler]:
    """อ่าน logring.yaml แล้วติดตั้ง ring handlers ตามที่กำหนด

    Every entry is validated and built before any handler is attached.
    """
    log._maybe_load_dotenv()
    data = yaml.safe_load(Path(yaml_path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{yaml_path}: top level must be a mapping")

    specs = data.get("handlers") or []
    if not isinstance(specs, list):
        raise ValueError(f"{yaml_path}: 'handlers' must be a list")

    built = []
    for i, s in enumerate(specs):
        s = s or {}
        if not isinstance(s, dict):
            raise ValueError(f"{yaml_path}: handlers[{i}] must be a mapping")
        built.append((build_handler(s), _logger_names(s)))

    for h, names in built:
        attach(h, names)
    handlers = [h for h, _ in built]
    _log.info("installed %d ring handler(s) from %s", len(handlers), yaml_path)
    return handlers


def detach(handlers: List[RingLogHandler]) -> None:
    """Remove handlers from every logger they were attached to."""
    loggers = [logging.getLogger()] + [
        lg for lg in logging.Logger.manager.loggerDict.values() if isinstance(lg, logging.Logger)
    ]
    for h in handlers:
        for lg in loggers:
            if h in lg.handlers:
                lg.removeHandler(h)
        h.close()
