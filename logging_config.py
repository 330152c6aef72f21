# logging_config.py
import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

# Structured extras copied onto the log line when a caller passes them via `extra=`
_EXTRA_KEYS = ("lease_id", "payment_id", "owner_id", "tenant_id", "status_code")


class JsonFormatter(logging.Formatter):
     """One JSON object per line: timestamp, level, logger, message, extras, exception."""

     def format(self, record: logging.LogRecord) -> str:
          payload: dict[str, Any] = {
               "ts": datetime.now(timezone.utc).isoformat(),
               "level": record.levelname,
               "logger": record.name,
               "message": record.getMessage(),
          }

          for key in _EXTRA_KEYS:
               if hasattr(record, key):
                    payload[key] = getattr(record, key)

          if record.exc_info:
               payload["exc_info"] = self.formatException(record.exc_info)

          return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging() -> None:
     level = (os.getenv("LOG_LEVEL") or "INFO").upper()

     root = logging.getLogger()
     root.setLevel(level)

     # uvicorn --reload re-imports the app; avoid stacking handlers
     for handler in list(root.handlers):
          root.removeHandler(handler)

     handler = logging.StreamHandler(sys.stdout)
     handler.setLevel(level)
     handler.setFormatter(JsonFormatter())
     root.addHandler(handler)

     logging.getLogger("uvicorn.access").setLevel(level)
     logging.getLogger("sqlalchemy.engine").setLevel((os.getenv("SQL_LOG_LEVEL") or "WARNING").upper())
