"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from debt_advisor.api.middleware import RequestIDMiddleware, MetricsMiddleware
from debt_advisor.api.v1 import history, payoff, recommendations, summary
from debt_advisor.infrastructure.observability.logging import setup_logging
from debt_advisor.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Debt Advisor",
        description="Debt payoff projections, recommendations and savings insights",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
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
    app.include_router(payoff.router, prefix="/v1", tags=["payoff"])
    app.include_router(recommendations.router, prefix="/v1", tags=["recommendations"])
    app.include_router(summary.router, prefix="/v1", tags=["summary"])
    app.include_router(history.router, prefix="/v1", tags=["history"])

    return app


app = create_app()
