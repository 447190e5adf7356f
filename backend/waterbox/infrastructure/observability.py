"""Registry Logging — one JSON object per line, keyed by the records involved.

Invariants:
    - Each line has timestamp (the record's creation time, UTC), level, logger,
      service and message
    - box_id, assignment_id, transfer_id, caller_id, error_code and path are
      copied from `extra` when set, so a box's history can be grepped by id
    - setup_logging() replaces previously installed root handlers; calling it
      twice never duplicates output

Design Decisions:
    - "text" format for local runs and tests, "json" everywhere else
    - SQLAlchemy engine logging stays at WARNING unless LOG_LEVEL is DEBUG:
      statement echo would drown the lifecycle lines
"""

import json
import logging
from datetime import datetime, timezone

SERVICE_NAME = "waterbox-api"

RECORD_FIELDS: tuple[str, ...] = (
    "box_id", "assignment_id", "transfer_id", "caller_id", "error_code", "path",
)


class JSONFormatter(logging.Formatter):
    """Render a LogRecord as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": SERVICE_NAME,
            "message": record.getMessage(),
        }
        line.update({
            key: getattr(record, key)
            for key in RECORD_FIELDS
            if getattr(record, key, None) is not None
        })
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)

    numeric = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric)
    logging.getLogger("sqlalchemy.engine").setLevel(
        numeric if numeric <= logging.DEBUG else logging.WARNING,
    )
