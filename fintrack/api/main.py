"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from fintrack.api.middleware import RequestIDMiddleware, MetricsMiddleware
from fintrack.api.v1 import assets, budgets, debts, goals, insights, reports, transactions
from fintrack.infrastructure.database.models import Base
from fintrack.infrastructure.database.seed import seed_sample_data
from fintrack.infrastructure.database.session import SessionLocal, engine
from fintrack.infrastructure.observability.logging import setup_logging
from fintrack.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and optionally load sample data"""
    Base.metadata.create_all(bind=engine)
    if settings.seed_sample_data:
        db = SessionLocal()
        try:
            seed_sample_data(db)
        finally:
            db.close()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="FinTrack",
        description="Personal finance tracking: budgets, transactions, assets, debts, goals and AI insights",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(budgets.router, prefix="/v1", tags=["budgets"])
    app.include_router(assets.router, prefix="/v1", tags=["assets"])
    app.include_router(debts.router, prefix="/v1", tags=["debts"])
    app.include_router(goals.router, prefix="/v1", tags=["goals"])
    app.include_router(reports.router, prefix="/v1", tags=["reports"])
    app.include_router(insights.router, prefix="/v1", tags=["insights"])

    return app


app = create_app()
