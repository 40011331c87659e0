"""Logging helpers shared by the ManifestTools library and CLI."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Optional

__all__ = ["JSONFormatter", "setup_logging"]

_MANAGED_ATTR = "_manifest_tools_managed"

# LogRecord attributes that are never copied into JSON payloads as extras.
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Formatter emitting one JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        """Render ``record`` as a JSON string, including ``extra=`` fields."""

        now = datetime.now(timezone.utc)
        payload = {
            "timestamp": now.isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(
    *,
    level: str = "INFO",
    json_logs: bool = False,
    stream: Optional[IO[str]] = None,
    propagate: bool = False,
) -> logging.Logger:
    """Configure the ``ManifestTools`` logger with a single managed stream handler.

    Handlers installed by earlier calls are replaced, so repeated CLI
    invocations in one process do not duplicate output.
    """

    logger = logging.getLogger("ManifestTools")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in list(logger.handlers):
        if getattr(handler, _MANAGED_ATTR, False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_logs:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    setattr(handler, _MANAGED_ATTR, True)
    logger.addHandler(handler)

    logger.propagate = propagate
    return logger
