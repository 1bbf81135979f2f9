"""
Shared API dependencies
Store / processor providers and the admin guard
"""

import hashlib
import hmac
import secrets
from typing import Optional

from fastapi import Cookie, Header, HTTPException

from qahq.config import settings
from qahq.core.content_store import ContentStore
from qahq.core.factory import build_content_store, build_idea_queue_processor
from qahq.core.idea_queue import IdeaQueueProcessor


def get_content_store() -> ContentStore:
    return build_content_store()


def get_idea_queue_processor() -> IdeaQueueProcessor:
    return build_idea_queue_processor()


def secret_matches(provided: Optional[str], expected: Optional[str]) -> bool:
    """Exact match; an unset expected secret never matches"""
    if not expected or provided is None:
        return False
    return secrets.compare_digest(provided.encode(), expected.encode())


ADMIN_SESSION_COOKIE = "admin_session"


def admin_session_token() -> Optional[str]:
    """
    Cookie value issued on admin login
    Derived from ADMIN_SECRET, so the secret itself never reaches the
    browser and rotating it logs every session out.
    """
    if not settings.ADMIN_SECRET:
        return None
    return hmac.new(
        settings.ADMIN_SECRET.encode(), ADMIN_SESSION_COOKIE.encode(), hashlib.sha256
    ).hexdigest()


async def require_admin(
    x_admin_secret: Optional[str] = Header(None),
    admin_session: Optional[str] = Cookie(None),
) -> None:
    """Admin guard: x-admin-secret header or admin_session cookie"""
    expected = settings.ADMIN_SECRET
    if secret_matches(x_admin_secret, expected) or secret_matches(
        admin_session, admin_session_token()
    ):
        return
    raise HTTPException(401, "Unauthorized")
