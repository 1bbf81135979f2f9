"""
Daily generation trigger
Called by an external scheduler with the shared cron secret
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from fastapi.responses import JSONResponse

from qahq.api.deps import get_idea_queue_processor, secret_matches
from qahq.config import settings
from qahq.core.idea_queue import IdeaQueueProcessor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cron", tags=["Cron"])


@router.post("/generate-questions")
async def generate_questions(
    x_cron_secret: Optional[str] = Header(None),
    processor: IdeaQueueProcessor = Depends(get_idea_queue_processor),
):
    """Run one batch of the idea -> question pipeline"""
    if not secret_matches(x_cron_secret, settings.CRON_SECRET):
        raise HTTPException(401, "Unauthorized")

    try:
        result = await processor.run()
    except Exception as e:
        logger.error(f"Cron job error: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": str(e) or "Internal server error"},
        )

    data = result.to_dict()
    # "status" reports that the request finished; the run's own outcome
    # (quota_met, no_ideas, ...) moves to run_status
    data["run_status"] = data.pop("status")
    return {"message": result.summary, **data, "status": "completed"}
