"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from debt_reconciler.api.middleware import RequestIDMiddleware, MetricsMiddleware
from debt_reconciler.api.v1 import debts
from debt_reconciler.domain.exceptions import OrphanedRecordsError
from debt_reconciler.infrastructure.observability.logging import setup_logging
from debt_reconciler.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Debt Reconciler",
        description="Remaining balance and next payment date for debts in payment plans",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(OrphanedRecordsError, debts.orphaned_records_handler)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(debts.router, prefix="/v1", tags=["debts"])

    return app


app = create_app()
