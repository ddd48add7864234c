"""FastAPI application factory"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from ledger_gateway.api.dependencies import get_request_id
from ledger_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from ledger_gateway.api.v1 import bnpl, dashboard, ledgers, parties, tally
from ledger_gateway.domain.exceptions import DomainException, NetworkError, NotFoundError, ValidationError
from ledger_gateway.infrastructure.observability.logging import setup_logging
from ledger_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)

# Domain error -> (HTTP status, client-facing detail)
ERROR_RESPONSES = {
    NetworkError: (503, "ERP service unavailable"),
    NotFoundError: (404, None),
    ValidationError: (422, None),
}


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Map domain errors raised anywhere in a view to HTTP responses"""
    request_id = get_request_id(request)
    status_code, detail = next(
        (response for error_type, response in ERROR_RESPONSES.items() if isinstance(exc, error_type)),
        (500, "Internal server error"),
    )

    if status_code >= 500:
        logging.error(f"{type(exc).__name__}: {exc}", extra={"request_id": request_id})
    else:
        logging.warning(f"{type(exc).__name__}: {exc}", extra={"request_id": request_id})

    return JSONResponse(status_code=status_code, content={"detail": detail or str(exc)})


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Ledger Gateway",
        description="Receivables, payables, ageing and BNPL views over the ERP API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(DomainException, domain_exception_handler)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(ledgers.receivables_router, prefix="/v1", tags=["receivables"])
    app.include_router(ledgers.payables_router, prefix="/v1", tags=["payables"])
    app.include_router(parties.router, prefix="/v1", tags=["parties"])
    app.include_router(bnpl.router, prefix="/v1", tags=["bnpl"])
    app.include_router(tally.router, prefix="/v1", tags=["tally"])

    return app


app = create_app()
