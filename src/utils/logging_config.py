"""Logging configuration for the map engine, driven by environment variables."""

import os
import logging
import sys
from typing import Dict
from pythonjsonlogger import jsonlogger

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")


def parse_level_overrides(value: str) -> Dict[str, int]:
    """
    Parse ``"logger=LEVEL,logger=LEVEL"`` into a level map.

    Malformed entries and unknown level names are skipped.
    """
    overrides: Dict[str, int] = {}
    for entry in value.split(","):
        name, sep, level_name = entry.partition("=")
        name, level_name = name.strip(), level_name.strip().upper()
        if not sep or not name:
            continue
        level = logging.getLevelName(level_name)
        if isinstance(level, int):
            overrides[name] = level
    return overrides


class LoggingConfig:
    """Logging settings read once at import."""

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "json").lower()
    LOG_MASK_SENSITIVE = os.environ.get("LOG_MASK_SENSITIVE", "true").lower() == "true"
    LOG_SLOW_OPERATION_THRESHOLD_MS = int(os.environ.get("LOG_SLOW_OPERATION_THRESHOLD_MS", "1000"))
    # e.g. "src.services.cluster_engine=WARNING" to silence per-render debug output
    LOG_LEVEL_OVERRIDES = parse_level_overrides(os.environ.get("LOG_LEVEL_OVERRIDES", ""))

    _configured = False

    @classmethod
    def build_formatter(cls) -> logging.Formatter:
        if cls.LOG_FORMAT == "json":
            return jsonlogger.JsonFormatter(
                "%(timestamp)s %(levelname)s %(name)s %(message)s",
                rename_fields={"levelname": "level"},
                timestamp=True
            )
        return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    @classmethod
    def setup_logging(cls, force: bool = False) -> None:
        """Install the stdout handler. Repeated calls are no-ops unless ``force`` is set."""
        if cls._configured and not force:
            return

        level = getattr(logging, cls.LOG_LEVEL, logging.INFO)
        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(cls.build_formatter())
        root_logger.addHandler(handler)

        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
        for name, override in cls.LOG_LEVEL_OVERRIDES.items():
            logging.getLogger(name).setLevel(override)

        cls._configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)
