"""
Structured logging module using structlog

Features
--------
• Structured logging with automatic context
• Console output rendered as pretty (colour when supported) or JSON lines
• Optional file logging with rotation
• Per-library level overrides (httpx, LiteLLM, …)
"""
from __future__ import annotations
import json
import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List

import structlog

_RENDERERS = ("json", "pretty")

_SHARED_PROCESSORS: List[Any] = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="ISO"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
]


def _supports_colour() -> bool:
    """True if stdout seems to handle ANSI colour codes."""
    if os.getenv("NO_COLOR"):
        return False
    if sys.platform == "win32" and os.getenv("TERM") != "xterm":
        return False
    return sys.stdout.isatty()


def _read_cfg(path: str | Path | None) -> Dict[str, Any]:
    if not path:
        return {}
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Logging config file not found: {p}")
    try:
        return json.loads(p.read_text()).get("logging", {})
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in logging config: {e}") from e


def _level(name: str | None, default: int) -> int:
    return getattr(logging, str(name or "").upper(), default)


def _console_renderer(console_cfg: Dict[str, Any]):
    choice = (os.getenv("LOG_CONSOLE_RENDERER") or console_cfg.get("renderer", "pretty")).lower()
    if choice not in _RENDERERS:
        raise ValueError(
            f"Invalid console logging renderer option: {choice!r}. Allowed: {', '.join(_RENDERERS)}"
        )
    if choice == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=_supports_colour())


def _formatter(renderer) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_SHARED_PROCESSORS,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )


def init_logger(config_path: str | Path | None = None) -> None:
    """Configure structlog with console and optional file output."""
    cfg = _read_cfg(config_path)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(_level(cfg.get("level"), logging.INFO))

    console_cfg = cfg.get("console", {})
    if console_cfg.get("enabled", True):
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(_level(console_cfg.get("level"), logging.NOTSET))
        console.setFormatter(_formatter(_console_renderer(console_cfg)))
        root.addHandler(console)

    file_cfg = cfg.get("file", {})
    if file_cfg.get("enabled", False):
        path = Path(file_cfg.get("path", "logs/app.log"))
        path.parent.mkdir(parents=True, exist_ok=True)

        rotation = file_cfg.get("rotation", {})
        if rotation.get("enabled", True):
            handler: logging.FileHandler = RotatingFileHandler(
                path,
                maxBytes=rotation.get("max_bytes", 10_000_000),
                backupCount=rotation.get("backup_count", 5),
            )
        else:
            handler = logging.FileHandler(path)

        handler.setLevel(_level(file_cfg.get("level"), logging.DEBUG))
        handler.setFormatter(_formatter(structlog.processors.JSONRenderer()))
        root.addHandler(handler)

    for library, level in cfg.get("libraries", {}).items():
        logging.getLogger(library).setLevel(_level(level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    """Get a structlog logger instance."""
    return structlog.get_logger(name)
