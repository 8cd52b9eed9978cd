"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.responses import Response

from loan_intake.api.dependencies import require_access_token
from loan_intake.api.errors import register_exception_handlers
from loan_intake.api.middleware import MetricsMiddleware, RequestIDMiddleware
from loan_intake.api.v1 import customers, loan_applications
from loan_intake.config import settings
from loan_intake.infrastructure.database.session import get_db, init_db
from loan_intake.infrastructure.observability.logging import setup_logging

# Setup structured logging
setup_logging(settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Loan Intake Service",
        description="Customer and loan application intake with amortized payment calculation",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    if settings.cors_origin_list:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origin_list,
            allow_methods=["GET", "POST", "PATCH", "DELETE"],
            allow_headers=["Content-Type", "x-access-token"],
        )

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    def health_check(db: Session = Depends(get_db)):
        try:
            db.execute(text("SELECT 1"))
            database = "ok"
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            database = "unavailable"
        return {"status": "ok", "service": settings.service_name, "database": database}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers; everything under /api requires the access token
    protected = [Depends(require_access_token)]
    app.include_router(customers.router, prefix="/api/v1", tags=["customers"], dependencies=protected)
    app.include_router(loan_applications.router, prefix="/api/v1", tags=["loan-applications"], dependencies=protected)

    return app


app = create_app()
