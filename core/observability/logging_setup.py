"""
Books API logging setup

Structured JSON logs for every module logger:
- One stdout handler on the root logger
- Request id taken from the request-context ContextVar
- Human-readable fallback for local development
"""
from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Any, Optional

from pythonjsonlogger.json import JsonFormatter

# Set by RequestContextMiddleware for the duration of a request
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestJsonFormatter(JsonFormatter):
    """JSON formatter adding service and request correlation fields."""

    def __init__(self, service_name: str = "books-api", **kwargs: Any):
        self.service_name = service_name
        super().__init__(**kwargs)

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = self.service_name

        request_id = request_id_var.get()
        if request_id:
            log_record["request_id"] = request_id


def setup_logging(
    service_name: str = "books-api",
    log_level: str = "INFO",
    json_output: bool = True,
) -> logging.Logger:
    """Configure the root logger and return it."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        formatter: logging.Formatter = RequestJsonFormatter(
            service_name=service_name,
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    return root_logger
