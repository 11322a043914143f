from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from eduverse import __version__
from eduverse.core.config import settings
from eduverse.core.database import init_db, close_db, db_watchdog
from eduverse.core.logging_config import logger
from eduverse.core.middleware import RequestLoggingMiddleware
from eduverse.api.router import api_router
from eduverse.services.response_mapper import register_exception_handlers
import eduverse.models  # noqa: F401  Import models so metadata knows about them


async def ensure_database_ready() -> bool:
    """Create tables if needed and optionally seed empty ones"""
    try:
        await init_db()
        logger.info("[Startup] Database tables ready")
    except Exception as e:
        logger.error(f"[Startup] Failed to prepare database: {e}")
        return False

    if settings.SEED_ON_STARTUP:
        from eduverse.db.seed_data import seed_all
        await seed_all()
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info("=" * 60)

    db_ready = await ensure_database_ready()
    if not db_ready:
        logger.warning("[Startup] Database not ready - requests may fail until it recovers")

    if settings.DB_WATCHDOG_ENABLED:
        await db_watchdog.start()

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    if settings.DB_WATCHDOG_ENABLED:
        await db_watchdog.stop()
    await close_db()


app = FastAPI(
    title=settings.APP_NAME,
    description="Assignments, notices, resources, submissions and timetable for the academic portal",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    redirect_slashes=False
)

# Middleware (last added runs first)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Response-Time"],
)

register_exception_handlers(app)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "version": __version__,
        "environment": settings.ENVIRONMENT
    }


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


app.include_router(api_router, prefix=settings.API_PREFIX)


def run() -> None:
    """Console entry point: serve the API with uvicorn"""
    import uvicorn
    uvicorn.run(
        "eduverse.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG
    )


if __name__ == "__main__":
    run()
