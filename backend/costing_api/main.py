"""
Costing API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from redis import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from shared.config.settings import settings
from shared.infrastructure.correlation import CorrelationIdMiddleware
from shared.infrastructure.db import SessionLocal
from shared.infrastructure.redis import get_redis_sync_client

from costing_api.core import lifespan, register_exception_handlers
from costing_api.routers import ingredients_router, recipes_router


app = FastAPI(
    title="Costing API",
    description="Ingredient price ledger and recipe cost breakdowns",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(CorrelationIdMiddleware)
register_exception_handlers(app)


# =============================================================================
# Health Check
# =============================================================================


@app.get("/api/health")
def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "service": "costing-api",
        "environment": settings.environment,
    }


@app.get("/api/health/detailed")
def detailed_health_check():
    """
    Health check that verifies connectivity to the database and, when the
    price cache lives there, to Redis.
    """
    checks = {
        "service": "costing-api",
        "environment": settings.environment,
        "dependencies": {},
    }
    all_healthy = True

    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        checks["dependencies"]["database"] = {"status": "healthy"}
    except SQLAlchemyError as e:
        checks["dependencies"]["database"] = {"status": "unhealthy", "error": str(e)}
        all_healthy = False

    if settings.price_cache_backend == "redis":
        try:
            get_redis_sync_client().ping()
            checks["dependencies"]["redis"] = {"status": "healthy"}
        except RedisError as e:
            checks["dependencies"]["redis"] = {"status": "unhealthy", "error": str(e)}
            all_healthy = False

    checks["status"] = "healthy" if all_healthy else "degraded"

    if not all_healthy:
        return JSONResponse(content=checks, status_code=503)

    return checks


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(ingredients_router)
app.include_router(recipes_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "costing_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=True,
    )
