"""Dependency injection for FastAPI endpoints"""

from datetime import date
from typing import Optional

from fastapi import Query, Request

from ledger_gateway.config import settings
from ledger_gateway.infrastructure.clients.erp import ErpClient
from ledger_gateway.infrastructure.clients.tally import TallySyncClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_erp_client() -> ErpClient:
    """Provide ERP API client instance"""
    return ErpClient()


def get_tally_client() -> TallySyncClient:
    """Provide Tally sync client instance"""
    return TallySyncClient()


def get_today() -> date:
    """Reference date for ageing and overdue calculations"""
    return date.today()


def get_strict(
    strict: Optional[bool] = Query(None, description="Reject bad data instead of coercing it to zero"),
) -> bool:
    """Per-request strict validation, falling back to the configured default"""
    return settings.strict_validation if strict is None else strict
