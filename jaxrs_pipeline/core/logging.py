"""JSON line logging for pipeline runs.

One object per record on stdout, so a build server can follow a run phase by
phase. Besides the base fields, records raised by the orchestrator carry the
pipeline ``phase`` they were logged in and, once chosen, the output ``backend``:

    {"ts": "...", "level": "INFO", "logger": "jaxrs_pipeline.services.analysis_service",
     "msg": "Analysis took 812 ms", "phase": "analyzing"}
    {"ts": "...", "level": "ERROR", "logger": "jaxrs_pipeline.services.analysis_service",
     "msg": "JAX-RS analysis failed while assembling_classpath: ...", "phase": "assembling_classpath"}

Tracebacks, when attached, go under ``exc``.
"""

from __future__ import annotations

import enum
import json
import logging
import os
import sys
from datetime import datetime, timezone

# attached by the pipeline through extra={}
_EXTRA_FIELDS = ("phase", "backend")

_QUIET_LOGGERS = ("uvicorn.access", "httpcore", "httpx")


def _plain(value):
    return value.value if isinstance(value, enum.Enum) else value


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update({key: _plain(getattr(record, key)) for key in _EXTRA_FIELDS if hasattr(record, key)})
        if record.exc_info and record.exc_info[0] is not None:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(level_name: str | None = None) -> None:
    """Send every record to stdout as JSON.

    ``level_name`` (e.g. from ``--log-level``) beats ``LOG_LEVEL``; unknown
    names fall back to INFO.
    """
    level = getattr(logging, (level_name or os.getenv("LOG_LEVEL", "INFO")).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    # replaces whatever handlers a host (uvicorn, a build tool) installed first
    root.handlers[:] = [handler]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
