"""Process-wide logging setup driven by `LoggingConfig`.

Loggers live under the ``odash`` namespace; handlers are attached once.
"""
from __future__ import annotations

import json
import logging
import sys

from core.config.schemas.observability import LoggingConfig

ROOT_LOGGER = "odash"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload = {
            "ts": round(record.created, 3),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def get_logger(area: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{area}")


def configure_logging(cfg: LoggingConfig | None = None) -> logging.Logger:
    """Attach a stderr handler to the ``odash`` logger (idempotent)."""
    cfg = cfg or LoggingConfig()
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(_LEVELS[cfg.level])
    for h in list(logger.handlers):
        if getattr(h, "_odash_handler", False):
            logger.removeHandler(h)
    handler = logging.StreamHandler(sys.stderr)
    if cfg.format == "json":
        handler.setFormatter(JsonLineFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("[%(name)s] %(levelname)s %(message)s")
        )
    handler._odash_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "get_logger", "JsonLineFormatter"]
