"""
Idea admin API
Create, bulk import, list, reset and status reconciliation
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from qahq.api.deps import get_content_store, require_admin
from qahq.core.categories import resolve_category
from qahq.core.content_store import ContentStore
from qahq.core.exceptions import InvalidCategoryError
from qahq.core.idea_cleanup import reconcile_idea_statuses
from qahq.core.idea_queue import parse_tags
from qahq.models.idea import IDEA_STATUSES
from qahq.schemas.idea import (
    IdeaCreateRequest,
    BulkImportRequest,
    IdeaResponse,
    IdeaListResponse,
    BulkImportBatchResult,
    BulkImportResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/ideas", tags=["Ideas"], dependencies=[Depends(require_admin)]
)

# Rows per INSERT transaction during bulk import
BULK_IMPORT_BATCH_SIZE = 50
DEFAULT_IMPORT_CATEGORY = "general_health"


@router.post("", response_model=IdeaResponse)
async def create_idea(
    req: IdeaCreateRequest, store: ContentStore = Depends(get_content_store)
):
    """Create one idea, waiting as "pending" for the next run"""
    proposed = req.proposed_question.strip()
    if not proposed:
        raise HTTPException(400, "Proposed question is required")
    if not req.category.strip():
        raise HTTPException(400, "Category is required")

    category = resolve_category(req.category)
    if category is None:
        raise HTTPException(400, str(InvalidCategoryError(req.category)))

    idea = await store.create_idea(
        proposed_question=proposed,
        category=category.value,
        tags=parse_tags(req.tags),
        notes=(req.notes or "").strip() or None,
        priority=req.priority or None,
        status="pending",
    )
    logger.info(f"Idea created: {idea.id} ({proposed})")
    return IdeaResponse.model_validate(idea)


@router.post("/bulk-import", response_model=BulkImportResponse)
async def bulk_import_ideas(
    req: BulkImportRequest, store: ContentStore = Depends(get_content_store)
):
    """
    Import many ideas

    Rows without a question are dropped; a missing category defaults to
    general_health. Rows go in batches and a failing batch does not stop
    the following ones.
    """
    rows = []
    for item in req.ideas:
        proposed = (item.proposed_question or "").strip()
        if not proposed:
            continue
        rows.append({
            "proposed_question": proposed,
            "category": item.category or DEFAULT_IMPORT_CATEGORY,
            "tags": parse_tags(item.tags),
            "notes": (item.notes or "").strip() or None,
            "priority": item.priority or None,
            "status": "pending",
        })

    if not rows:
        raise HTTPException(400, "No valid ideas to import")

    results: list[BulkImportBatchResult] = []
    for start in range(0, len(rows), BULK_IMPORT_BATCH_SIZE):
        batch_no = start // BULK_IMPORT_BATCH_SIZE + 1
        batch = rows[start:start + BULK_IMPORT_BATCH_SIZE]
        try:
            created = await store.create_ideas(batch)
        except Exception as e:
            logger.error(f"Error inserting idea batch {batch_no}: {e}")
            results.append(BulkImportBatchResult(batch=batch_no, error=str(e)))
            continue
        results.append(BulkImportBatchResult(batch=batch_no, inserted=len(created)))

    inserted = sum(r.inserted or 0 for r in results)
    logger.info(f"Bulk import: {inserted}/{len(rows)} ideas inserted")
    return BulkImportResponse(
        message=f"Imported {inserted} ideas",
        total=len(rows),
        inserted=inserted,
        results=results,
    )


@router.get("", response_model=IdeaListResponse)
async def list_ideas(
    status: Optional[str] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    store: ContentStore = Depends(get_content_store),
):
    """List ideas, newest first"""
    if status and status not in IDEA_STATUSES:
        raise HTTPException(400, f"Unknown idea status: {status}")
    total, ideas = await store.list_ideas(
        status=status, limit=page_size, offset=(page - 1) * page_size
    )
    return IdeaListResponse(
        total=total,
        items=[IdeaResponse.model_validate(i) for i in ideas],
    )


@router.post("/cleanup-statuses")
async def cleanup_idea_statuses(store: ContentStore = Depends(get_content_store)):
    """Mark waiting ideas already answered by a published question as generated"""
    report = await reconcile_idea_statuses(store)
    return report.to_dict()


@router.post("/{idea_id}/reset", response_model=IdeaResponse)
async def reset_idea(idea_id: str, store: ContentStore = Depends(get_content_store)):
    """Put an idea back in the queue as "new" (e.g. one stuck in processing)"""
    try:
        await store.update_idea(
            idea_id,
            status="new",
            processing_started_at=None,
            processed_at=None,
            generated_question_id=None,
        )
    except LookupError:
        raise HTTPException(404, "Idea not found")
    logger.info(f"Idea {idea_id} reset to new")
    return IdeaResponse.model_validate(await store.get_idea(idea_id))
