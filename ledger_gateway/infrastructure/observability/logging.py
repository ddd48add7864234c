"""Structured JSON logging for the ledger gateway"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from ledger_gateway.config import settings

# Chatty third-party loggers kept at WARNING (httpx logs every request at INFO)
QUIET_LOGGERS = ("httpx", "httpcore")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping UTC time, level and service name"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Send all records to stdout as one JSON object per line"""
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_view_computed(
    request_id: str,
    view: str,
    record_count: int,
    duration_ms: float,
) -> None:
    """One line per aggregated view: which view, over how many records, how long"""
    logging.info(
        "View computed",
        extra={
            "request_id": request_id,
            "view": view,
            "step": "view_complete",
            "record_count": record_count,
            "duration_ms": round(duration_ms, 2),
        },
    )


def log_tally_sync(sync_type: str, sync_status: str, transaction_count: int | None, details: str | None = None) -> None:
    """Outcome of a Tally sync trigger; failures go out at ERROR"""
    level = logging.INFO if sync_status == "success" else logging.ERROR
    logging.log(
        level,
        "Tally sync finished",
        extra={
            "step": "tally_sync",
            "sync_type": sync_type,
            "sync_status": sync_status,
            "transaction_count": transaction_count,
            "details": details,
        },
    )
