"""Structured JSON logging for applications embedding SafeURL.

Denials are logged by ``safeurl.core.policy`` and the httpx transports with
the fields in ``DECISION_FIELDS`` attached; ``JsonFormatter`` lifts them into
the JSON object so log pipelines can filter on ``reason`` or ``host``.
Nothing here runs on import.
"""

import json
import logging
from datetime import datetime, timezone

DECISION_FIELDS = ("url", "host", "method", "reason", "detailed_reason", "address")


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with decision fields when present."""

    def format(self, record: logging.LogRecord) -> str:
        log: dict = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        decision = {
            name: getattr(record, name)
            for name in DECISION_FIELDS
            if getattr(record, name, None) is not None
        }
        if decision:
            log["decision"] = decision
        if record.exc_info and record.exc_info[0]:
            log["exc_type"] = record.exc_info[0].__name__
        return json.dumps(log, default=str)


def configure_logging(level: int | str = logging.INFO) -> logging.Handler:
    """Install a JSON stream handler on the root logger and return it."""
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level, handlers=[handler], force=True)
    return handler
