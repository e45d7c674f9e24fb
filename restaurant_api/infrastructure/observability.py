"""Structured Logging — one JSON object per line for the API and the loader.

Invariants:
    - Every line carries timestamp, level, logger, and message
    - Request and record context (restaurant_id, error_code, path, method,
      page, per_page, borough) is copied from `extra=` when present, never None
    - setup_logging() installs exactly one handler of its own on the root
      logger, however many times it is called (lifespan, loader CLI)

Design Decisions:
    - Formatter is local: the API needs a fixed, small key set, not a framework
    - Handlers added by others (pytest caplog, uvicorn) are left in place
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_KEYS = (
    "restaurant_id", "error_code", "path", "method",
    "page", "per_page", "borough",
)

_HANDLER_NAME = "restaurant_api"


class JSONFormatter(logging.Formatter):
    """Render a record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update({
            key: record.__dict__[key]
            for key in EXTRA_KEYS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Install the restaurant_api handler on the root logger (json or text)."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
