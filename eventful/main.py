"""
Main FastAPI application for Eventful.
Entry point for the events, registrations and likes service.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
import uvicorn

from . import __version__
from .core.config import config
from .api.dependencies import db_connection, redis_connection, SignInRequired
from .api.router import router
from .models.validation import RecordInvalid

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info("Starting Eventful...")

    try:
        database_url = await config.get_database_url()
        db_connection.initialize(database_url)
        db_connection.get_manager().create_tables()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to start Eventful: {e}")
        raise

    # Listings are served uncached when Redis is unavailable
    try:
        redis_connection.initialize(await config.get_redis_url())
        await redis_connection.get_manager().redis_client.ping()
        logger.info("Redis initialized and ping successful")
    except Exception as e:
        logger.warning(f"Redis unavailable, event listings will not be cached: {e}")
        await redis_connection.close()

    logger.info("Eventful started successfully")

    yield

    logger.info("Shutting down Eventful...")
    try:
        await redis_connection.close()
        logger.info("Eventful shut down successfully")
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")


app = FastAPI(
    title="Eventful",
    description="Events, registrations and likes",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    """Add CORS headers to all responses."""
    response = await call_next(request)

    try:
        origins = await config.get_cors_origins()
        origin = request.headers.get("origin")

        if origin in origins:
            response.headers["Access-Control-Allow-Origin"] = origin
        elif "*" in origins:
            response.headers["Access-Control-Allow-Origin"] = "*"

        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PATCH, DELETE, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
        response.headers["Access-Control-Allow-Credentials"] = "true"

    except Exception as e:
        logger.warning(f"Failed to set CORS headers: {e}")

    return response


@app.exception_handler(SignInRequired)
async def sign_in_required_handler(request: Request, exc: SignInRequired):
    """Send anonymous users to the sign-in page instead of failing."""
    logger.info(f"Sign-in required for {request.method} {request.url.path}")
    return RedirectResponse(
        url=str(request.url_for("new_session")),
        status_code=status.HTTP_302_FOUND
    )


@app.exception_handler(RecordInvalid)
async def record_invalid_handler(request: Request, exc: RecordInvalid):
    """Report validation failures keyed by field."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": str(exc),
            "errors": exc.errors.to_dict(),
            "success": False
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred",
            "success": False
        }
    )


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        Service health status
    """
    database_ok = db_connection.health_check()
    redis_ok = False
    if redis_connection._initialized:
        try:
            redis_ok = bool(await redis_connection.redis_client.ping())
        except Exception as e:
            logger.warning(f"Redis health check failed: {e}")

    body = {
        "status": "healthy" if database_ok else "unhealthy",
        "service": "eventful",
        "version": __version__,
        "database": "connected" if database_ok else "disconnected",
        "redis": "connected" if redis_ok else "disconnected"
    }
    if not database_ok:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)
    return body


@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint.

    Returns:
        Service information
    """
    return {
        "service": "Eventful",
        "version": __version__,
        "description": "Events, registrations and likes",
        "docs": "/docs",
        "health": "/health",
        "events": "/events"
    }


app.include_router(router)


if __name__ == "__main__":
    uvicorn.run(
        "eventful.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
