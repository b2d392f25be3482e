from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional

from .config import as_bool

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", json_logs: bool = True, force: bool = True) -> None:
    logger = logging.getLogger()
    if not force and logger.handlers:
        return
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter() if json_logs else logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    # Remove default handlers
    logger.handlers = []
    logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def setup_logging_from_config(logging_cfg: Optional[Dict[str, Any]], force: bool = True) -> None:
    """Apply the ``logging`` section of the detector config."""
    logging_cfg = logging_cfg or {}
    setup_logging(
        level=str(logging_cfg.get("level", "INFO")).upper(),
        json_logs=as_bool(logging_cfg.get("json", True), "logging.json"),
        force=force,
    )
