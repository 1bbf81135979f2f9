"""
Newsletter subscription API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from qahq.api.deps import get_content_store
from qahq.core.content_store import ContentStore
from qahq.schemas.subscriber import SubscribeRequest, SubscribeResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Subscribers"])


@router.post("/subscribe", response_model=SubscribeResponse)
async def subscribe(
    req: SubscribeRequest, store: ContentStore = Depends(get_content_store)
):
    email = req.email.strip().lower()
    if "@" not in email:
        raise HTTPException(400, "Valid email is required")

    if not await store.add_subscriber(email):
        return SubscribeResponse(message="Already subscribed")
    logger.info(f"New subscriber: {email}")
    return SubscribeResponse(message="Subscribed successfully")
