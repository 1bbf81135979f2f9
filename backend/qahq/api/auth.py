"""
Admin session API
Exchanges the admin password for an admin_session cookie
"""

import logging

from fastapi import APIRouter, HTTPException, Response

from qahq.api.deps import ADMIN_SESSION_COOKIE, admin_session_token, secret_matches
from qahq.config import settings
from qahq.schemas.auth import AdminLoginRequest, AdminLoginResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=AdminLoginResponse)
async def login(req: AdminLoginRequest, response: Response):
    """Check the admin password and set the session cookie"""
    if not req.password:
        raise HTTPException(400, "Password is required")
    if not secret_matches(req.password, settings.ADMIN_SECRET):
        logger.warning("Failed admin login attempt")
        raise HTTPException(401, "Invalid password")

    response.set_cookie(
        ADMIN_SESSION_COOKIE,
        admin_session_token(),
        max_age=settings.ADMIN_SESSION_MAX_AGE,
        httponly=True,
        secure=settings.ADMIN_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
    logger.info("Admin logged in")
    return AdminLoginResponse(success=True)


@router.post("/logout", response_model=AdminLoginResponse)
async def logout(response: Response):
    response.delete_cookie(
        ADMIN_SESSION_COOKIE,
        httponly=True,
        secure=settings.ADMIN_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
    return AdminLoginResponse(success=True)
