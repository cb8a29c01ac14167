# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Structured JSON logging — one JSON line per record, carrying request
context (request id, method, path) when the caller supplies it.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional

from starlette.requests import Request

from donor_service.core.config import settings

# Attributes copied from ``extra=`` onto the JSON line when present.
CONTEXT_FIELDS: tuple[str, ...] = ("request_id", "method", "path")


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": settings.SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value
        if record.exc_info and record.exc_info[1]:
            log_data["error"] = str(record.exc_info[1])
            log_data["error_type"] = type(record.exc_info[1]).__name__
        return json.dumps(log_data)


def request_context(request: Optional[Request]) -> dict[str, Any]:
    """Build the ``extra=`` mapping for a log call made while serving ``request``."""
    if request is None:
        return {}
    return {
        "request_id": getattr(request.state, "request_id", None),
        "method": request.method,
        "path": request.url.path,
    }


def get_logger(name: str | None = None) -> logging.Logger:
    logger = logging.getLogger(name or settings.SERVICE_NAME)
    if not logger.handlers:
        logger.setLevel(getattr(logging, settings.LOG_LEVEL, logging.INFO))
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        logger.propagate = False
    return logger
