"""
FastAPI application entry
App setup, CORS, startup/shutdown lifecycle
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from qahq.config import settings
from qahq.database.connection import init_db, close_db
from qahq.api.router import api_router
from qahq.core.task_scheduler import task_scheduler

# ========== Logging ==========
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

# Quiet high-volume library loggers
logging.getLogger("aiosqlite").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("apscheduler.scheduler").setLevel(logging.WARNING)
logging.getLogger("apscheduler.executors.default").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)


# ========== Lifespan ==========
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan
    Startup: database (must succeed) -> scheduler (optional, may fail)
    Shutdown: scheduler -> database, each step on its own
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}...")

    if not settings.DATABASE_URL_OVERRIDE:
        os.makedirs(os.path.dirname(settings.DATABASE_PATH), exist_ok=True)

    await init_db()
    logger.info("Database initialized")

    if settings.SCHEDULER_ENABLED:
        try:
            task_scheduler.start()
        except Exception as e:
            logger.error(f"Task scheduler failed to start (daily generation disabled): {e}")
    else:
        logger.info("Scheduler disabled, daily generation runs via /api/cron or the CLI")

    logger.info(f"Application ready on http://{settings.HOST}:{settings.PORT}")

    yield

    logger.info("Shutting down...")

    try:
        task_scheduler.shutdown()
    except Exception as e:
        logger.error(f"Failed to stop task scheduler: {e}")

    try:
        await close_db()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Failed to close database: {e}")


# ========== FastAPI app ==========
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Q&A article site backend: idea queue, daily AI generation, content API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ========== CORS ==========
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ========== Routes ==========
app.include_router(api_router)


@app.get("/", tags=["System"])
async def root():
    """System info"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health", tags=["System"])
async def health_check():
    return {"status": "ok"}
