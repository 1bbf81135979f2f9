"""
Questions API
Public reads of published questions, admin create / update
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError

from qahq.api.deps import get_content_store, require_admin
from qahq.core.categories import normalize_category, resolve_category
from qahq.core.content_store import ContentStore
from qahq.core.exceptions import InvalidCategoryError
from qahq.core.slug import slugify
from qahq.schemas.question import (
    QuestionCreateRequest,
    QuestionUpdateRequest,
    QuestionResponse,
    QuestionListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/questions", tags=["Questions"])


def _utcnow():
    return datetime.now(timezone.utc)


def _category_or_400(raw: str) -> str:
    category = resolve_category(raw)
    if category is None:
        raise HTTPException(400, str(InvalidCategoryError(raw)))
    return category.value


def _slug_or_400(raw: str) -> str:
    slug = slugify(raw)
    if not slug:
        raise HTTPException(400, f"Invalid slug: {raw}")
    return slug


# ==================== Public ====================

@router.get("", response_model=QuestionListResponse)
async def list_questions(
    category: Optional[str] = None,
    q: Optional[str] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    store: ContentStore = Depends(get_content_store),
):
    """Published questions, optional category filter and text search"""
    total, questions = await store.list_questions(
        status="published",
        category=normalize_category(category),
        search=q or None,
        limit=page_size,
        offset=(page - 1) * page_size,
    )
    return QuestionListResponse(
        total=total,
        items=[QuestionResponse.model_validate(x) for x in questions],
    )


@router.get("/{slug}", response_model=QuestionResponse)
async def get_question(slug: str, store: ContentStore = Depends(get_content_store)):
    """One published question by slug"""
    question = await store.get_question_by_slug(slug)
    if not question:
        raise HTTPException(404, "Question not found")
    return QuestionResponse.model_validate(question)


# ==================== Admin ====================

@router.post(
    "", response_model=QuestionResponse, dependencies=[Depends(require_admin)]
)
async def create_question(
    req: QuestionCreateRequest, store: ContentStore = Depends(get_content_store)
):
    """Create a question; publishing without a date stamps it now"""
    data = req.model_dump()
    data["slug"] = _slug_or_400(req.slug)
    data["category"] = _category_or_400(req.category)
    if data["status"] == "published" and not data["published_at"]:
        data["published_at"] = _utcnow()

    try:
        question = await store.insert_question(data)
    except IntegrityError:
        raise HTTPException(400, f"Slug already exists: {data['slug']}")
    logger.info(f"Question created: {question.id} ({question.slug})")
    return QuestionResponse.model_validate(question)


@router.put(
    "/{question_id}",
    response_model=QuestionResponse,
    dependencies=[Depends(require_admin)],
)
async def update_question(
    question_id: str,
    req: QuestionUpdateRequest,
    store: ContentStore = Depends(get_content_store),
):
    """Update a question; first publication stamps published_at"""
    existing = await store.get_question(question_id)
    if not existing:
        raise HTTPException(404, "Question not found")

    data = req.model_dump(exclude_unset=True)
    if data.get("slug") is not None:
        data["slug"] = _slug_or_400(data["slug"])
    if "category" in data and data["category"] is not None:
        data["category"] = _category_or_400(data["category"])
    if (
        data.get("status") == "published"
        and not data.get("published_at")
        and existing.published_at is None
    ):
        data["published_at"] = _utcnow()

    try:
        question = await store.update_question(question_id, data)
    except IntegrityError:
        raise HTTPException(400, f"Slug already exists: {data.get('slug')}")
    if not question:
        raise HTTPException(404, "Question not found")
    logger.info(f"Question updated: {question_id}")
    return QuestionResponse.model_validate(question)
