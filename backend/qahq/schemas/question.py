"""
Question request/response models
"""

from datetime import datetime
from typing import Any, Literal, Optional
from pydantic import BaseModel, Field

Verdict = Literal["works", "doesnt_work", "mixed"]
QuestionStatus = Literal["draft", "approved", "scheduled", "published"]


# ==================== Requests ====================

class QuestionCreateRequest(BaseModel):
    """Create a question by hand"""
    question: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    short_answer: Optional[str] = None
    verdict: Optional[Verdict] = None
    summary: Optional[str] = None
    body_markdown: Optional[str] = None
    evidence_json: Optional[list[dict[str, Any]]] = None
    sources: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    status: QuestionStatus = "draft"
    published_at: Optional[datetime] = None


class QuestionUpdateRequest(BaseModel):
    """Partial update, only the fields sent are written"""
    question: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    short_answer: Optional[str] = None
    verdict: Optional[Verdict] = None
    summary: Optional[str] = None
    body_markdown: Optional[str] = None
    evidence_json: Optional[list[dict[str, Any]]] = None
    sources: Optional[list[str]] = None
    tags: Optional[list[str]] = None
    status: Optional[QuestionStatus] = None
    published_at: Optional[datetime] = None


# ==================== Responses ====================

class QuestionResponse(BaseModel):
    """Question"""
    id: str
    slug: str
    question: str
    short_answer: Optional[str]
    verdict: Optional[str]
    category: str
    summary: Optional[str]
    body_markdown: Optional[str]
    evidence_json: Optional[list[dict[str, Any]]]
    sources: Optional[list[str]]
    tags: Optional[list[str]]
    status: str
    published_at: Optional[datetime]
    created_at: datetime
    updated_at: Optional[datetime]

    model_config = {"from_attributes": True}


class QuestionListResponse(BaseModel):
    """Question list"""
    total: int
    items: list[QuestionResponse]
