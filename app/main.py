"""
Main FastAPI application for the Event Manager Service.
Entry point for the users and events API.
"""

import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
import uvicorn

from .core.config import AppConfig
from .core.logging import setup_logging
from .api.cors import ContainerCORSMiddleware
from .api.errors import register_exception_handlers
from .api.router import router as api_router
from .services.container import create_container_from_config
from .services.seed import seed_demo_user

logger = logging.getLogger(__name__)

SERVICE_NAME = "event-manager"
SERVICE_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Builds the service container on startup and releases it on shutdown.
    A container installed beforehand (e.g. by tests) is used as is.
    """
    owns_container = getattr(app.state, "container", None) is None

    if owns_container:
        config = AppConfig()
        setup_logging(await config.get_log_level(), SERVICE_NAME)
        logger.info("Starting Event Manager Service...")

        try:
            app.state.container = await create_container_from_config(config)

            if await config.get_seed_demo_user():
                seed_demo_user(app.state.container)

            logger.info("Event Manager Service started successfully")

        except Exception as e:
            logger.error(f"Failed to start Event Manager Service: {e}")
            raise

    yield

    if owns_container:
        logger.info("Shutting down Event Manager Service...")
        container = app.state.container
        try:
            container.database.dispose()
            logger.info("Database connections closed")

            if container.config is not None:
                await container.config.close()
                logger.info("Config connections closed")

            logger.info("Event Manager Service shut down successfully")

        except Exception as e:
            logger.error(f"Error during shutdown: {e}")
        finally:
            app.state.container = None


# Create FastAPI application
app = FastAPI(
    title="Event Manager Service",
    description="Users and events management API",
    version=SERVICE_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


# Add CORS middleware; origins come from the service container
app.add_middleware(
    ContainerCORSMiddleware,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


register_exception_handlers(app)


@app.get("/health", tags=["Health"])
def health_check(request: Request):
    """
    Health check endpoint.

    Returns:
        Service health status
    """
    container = getattr(request.app.state, "container", None)
    healthy = container is not None and container.database.health_check()

    body = {
        "status": "healthy" if healthy else "unhealthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "database": "connected" if healthy else "disconnected",
    }
    if healthy:
        return body
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)


@app.get("/", tags=["Root"])
def root():
    """Service information."""
    return {
        "service": "Event Manager Service",
        "version": SERVICE_VERSION,
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/info", tags=["Info"])
def service_info():
    """Detailed service information."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": "Users and events management API",
        "endpoints": {
            "events": "/api/events",
            "users": "/api/users",
            "health": "/health",
            "docs": "/docs"
        },
        "features": [
            "User management",
            "Event management with owner-only changes",
            "Filtered, sorted and paginated event search",
            "Upcoming published events"
        ]
    }


# Include API routers
app.include_router(api_router)


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "false").lower() == "true",
        log_level=os.getenv("LOG_LEVEL", "info").lower()
    )
