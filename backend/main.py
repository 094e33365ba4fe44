"""
Daybook - Main Application Entry Point

Personal daily-schedule timeline: routines, fixed events and custom blocks.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from daybook.core.config import get_settings
from daybook.core.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting Daybook in {settings.ENVIRONMENT} mode...")

    if settings.is_local:
        from daybook.infrastructure.local.database import init_db

        await init_db()

    yield

    # Shutdown
    logger.info("Shutting down Daybook...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Daybook",
        description="Daily schedule timeline",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    from daybook.api import custom_events, fixed_events, routines, timeline

    app.include_router(timeline.router, prefix="/api", tags=["timeline"])
    app.include_router(routines.router, prefix="/api/routines", tags=["routines"])
    app.include_router(custom_events.router, prefix="/api/custom-events", tags=["custom_events"])
    app.include_router(fixed_events.router, prefix="/api", tags=["fixed_events"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": "0.1.0"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
