"""
API router aggregation
Every sub-router is mounted under the /api prefix
"""

from fastapi import APIRouter

from qahq.api.auth import router as auth_router
from qahq.api.categories import router as categories_router
from qahq.api.cron import router as cron_router
from qahq.api.ideas import router as ideas_router
from qahq.api.questions import router as questions_router
from qahq.api.subscribe import router as subscribe_router

api_router = APIRouter(prefix="/api")

# Sub-routers carry their own prefixes
api_router.include_router(auth_router)
api_router.include_router(categories_router)
api_router.include_router(cron_router)
api_router.include_router(ideas_router)
api_router.include_router(questions_router)
api_router.include_router(subscribe_router)
