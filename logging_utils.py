import json
import logging
import sys
from datetime import datetime, timezone

# Logs go to stdout so container runtimes can collect them.
logger = logging.getLogger("api")
logger.setLevel(logging.INFO)
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    logger.addHandler(handler)


def _emit(level, fields):
    """Writes one JSON line. Structured logs are easier to search than text."""
    log_entry = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": level,
    }
    log_entry.update(fields)
    logger.log(getattr(logging, level, logging.INFO), json.dumps(log_entry, default=str))


def log_request(request_id, method, path, status, latency, **extras):
    """
    One line per HTTP request.
    Extra fields (result, outbound, delivered, ...) are merged in so logs can
    be searched like: 'result="ignored"'
    """
    fields = {
        "request_id": request_id,
        "method": method,
        "path": path,
        "status": status,
        "latency_ms": round(latency * 1000, 2),  # Convert seconds to ms
    }
    fields.update(extras)
    _emit("INFO", fields)


def log_event(event, level="INFO", **extras):
    """Dispatch decisions and outbound deliveries."""
    fields = {"event": event}
    fields.update(extras)
    _emit(level, fields)
