"""
Idea request/response models
"""

from datetime import datetime
from typing import Optional, Union
from pydantic import BaseModel, Field


# ==================== Requests ====================

class IdeaCreateRequest(BaseModel):
    """Create one idea"""
    proposed_question: str = Field(..., description="Question the article should answer")
    category: str = Field(..., description="Category id or a known alias")
    tags: list[str] = Field(default_factory=list)
    notes: Optional[str] = None
    priority: Optional[int] = None


class BulkIdeaItem(BaseModel):
    """One row of a bulk import; incomplete rows are skipped, not rejected"""
    proposed_question: Optional[str] = None
    category: Optional[str] = None
    tags: Union[list[str], str, None] = None
    notes: Optional[str] = None
    priority: Optional[int] = None


class BulkImportRequest(BaseModel):
    """Bulk import ideas"""
    ideas: list[BulkIdeaItem]


# ==================== Responses ====================

class IdeaResponse(BaseModel):
    """Idea"""
    id: str
    proposed_question: str
    category: Optional[str]
    tags: Union[list[str], str, None]
    notes: Optional[str]
    priority: Optional[int]
    status: str
    created_at: datetime
    processing_started_at: Optional[datetime]
    processed_at: Optional[datetime]
    generated_question_id: Optional[str]

    model_config = {"from_attributes": True}


class IdeaListResponse(BaseModel):
    """Idea list"""
    total: int
    items: list[IdeaResponse]


class BulkImportBatchResult(BaseModel):
    batch: int
    inserted: Optional[int] = None
    error: Optional[str] = None


class BulkImportResponse(BaseModel):
    """Bulk import outcome"""
    message: str
    total: int
    inserted: int
    results: list[BulkImportBatchResult]
