"""
Logging setup for sha-calc:
- Rich console on stderr for humans (default).
- Optional JSON lines on stderr.
- Optional rotating file log.

Handlers write synchronously so log lines never reorder against the
digest / OK / FAILED lines printed on stdout.

Usage:
    from logs import init_logging, get_logger

    init_logging(level="DEBUG")
    log = get_logger("sha_calc.cli")

Env vars:
    SHACALC_LOG_LEVEL   = DEBUG|INFO|WARNING|ERROR (default WARNING)
    SHACALC_LOG_JSON    = 0|1  (default 0)
    SHACALC_LOG_TO_FILE = 0|1  (default 0)
    SHACALC_LOG_FILE    = path to log file (default .sha-calc/logs/app.log)
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

APP_LOGGER = "sha_calc"
DEFAULT_LOG_FILE = Path(".sha-calc/logs/app.log")


@dataclass
class LogConfig:
    level: str = "WARNING"
    json: bool = False
    to_file: bool = False
    file_path: Path = DEFAULT_LOG_FILE
    max_bytes: int = 1024 * 1024
    backup_count: int = 2


_CONSOLE = Console(stderr=True, highlight=False, soft_wrap=True)
_HANDLERS: list[logging.Handler] = []


class JsonFormatter(logging.Formatter):
    """One JSON object per record; keys stay stable for ingestion."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload = {
            "level": record.levelname,
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0") == "1"


def _build_handlers(cfg: LogConfig) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    if cfg.json:
        stream_handler = logging.StreamHandler(stream=sys.stderr)
        stream_handler.setFormatter(JsonFormatter())
        handlers.append(stream_handler)
    else:
        rich_handler = RichHandler(
            console=_CONSOLE, show_time=False, show_path=False, markup=False
        )
        rich_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(rich_handler)

    if cfg.to_file:
        try:
            cfg.file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                cfg.file_path,
                maxBytes=cfg.max_bytes,
                backupCount=cfg.backup_count,
                encoding="utf-8",
            )
        except OSError as exc:
            # stdout/stderr output of the tool must not depend on the log file
            print(
                f"sha-calc: log file unavailable ({cfg.file_path}): {exc}",
                file=sys.stderr,
            )
        else:
            file_handler.setFormatter(
                JsonFormatter()
                if cfg.json
                else logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
            handlers.append(file_handler)

    return handlers


def init_logging(
    level: Optional[str] = None,
    *,
    json: Optional[bool] = None,
    to_file: Optional[bool] = None,
    file_path: Optional[Path] = None,
) -> None:
    """
    Configure the `sha_calc` logger tree. Calling again replaces the sinks,
    so the CLI can be invoked repeatedly in one process (tests) without
    stacking handlers.
    """
    cfg = LogConfig(
        level=(level or os.getenv("SHACALC_LOG_LEVEL") or "WARNING").upper(),
        json=json if json is not None else _env_flag("SHACALC_LOG_JSON"),
        to_file=to_file if to_file is not None else _env_flag("SHACALC_LOG_TO_FILE"),
        file_path=Path(os.getenv("SHACALC_LOG_FILE") or (file_path or DEFAULT_LOG_FILE)),
    )

    logger = logging.getLogger(APP_LOGGER)
    for handler in _HANDLERS:
        logger.removeHandler(handler)
        handler.close()
    _HANDLERS.clear()

    logger.setLevel(getattr(logging, cfg.level, logging.WARNING))
    logger.propagate = False
    for handler in _build_handlers(cfg):
        logger.addHandler(handler)
        _HANDLERS.append(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Namespaced logger under `sha_calc`. Cheap; call `init_logging()` once in
    the CLI entrypoint to attach sinks.
    """
    return logging.getLogger(name or APP_LOGGER)
