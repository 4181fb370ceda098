"""
R&D Job Manager - Main Application Entry Point

FastAPI application serving the job board API, the email webhook, the
Google Sheets connection flow and the WebSocket push channel.
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from .database import init_database, close_database, get_database
from .database.repositories.settings import get_settings_repository
from .utils.background_tasks import drain_background_tasks
from .web import api_router, webhooks_router, sheets_router, realtime_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown."""
    logger.info(f"Starting {settings.app_name}...")

    if await init_database():
        logger.info("Database initialized")
        try:
            await get_settings_repository().seed_defaults()
        except Exception as e:
            logger.warning(f"Failed to seed default settings: {e}")
    else:
        logger.error("Database failed to initialize; API calls will fail")

    yield

    logger.info("Shutting down...")

    try:
        await drain_background_tasks()
    except Exception as e:
        logger.warning(f"Failed to drain background tasks during shutdown: {e}")

    try:
        await close_database()
    except Exception as e:
        logger.warning(f"Failed to close database during shutdown: {e}")

    logger.info("Shutdown complete")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Job board for SPK/SPD work orders with live updates and a Google Sheets mirror",
    version=VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
app.include_router(webhooks_router)
app.include_router(sheets_router)
app.include_router(realtime_router)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": VERSION
    }


@app.get("/health")
async def health_check():
    """Detailed health check endpoint."""
    try:
        db_health = await get_database().health_check()
    except Exception as e:
        db_health = {"status": "error", "error": str(e)}

    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "services": {
            "database": db_health.get("status", "unknown"),
            "google_oauth": bool(settings.google_client_id),
        }
    }


# Error handlers
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "detail": str(exc)}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "rnd_jobs.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
