"""
Idea model
Candidate topics waiting to be turned into published questions
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Integer, String, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column

from qahq.models.base import Base, UTCDateTime


def _utcnow():
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


# Statuses the pipeline picks up ("pending" is the legacy synonym of "new")
IDEA_SELECTABLE_STATUSES = ("new", "pending")
# Terminal statuses, only an operator moves an idea out of these
IDEA_TERMINAL_STATUSES = ("generated", "duplicate", "error")
IDEA_STATUSES = IDEA_SELECTABLE_STATUSES + ("processing",) + IDEA_TERMINAL_STATUSES


class Idea(Base):
    """Ideas table"""
    __tablename__ = "ideas"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    # Proposed question text
    proposed_question: Mapped[str] = mapped_column(Text, nullable=False)
    # Category as entered by the editor (resolved by the pipeline)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, default=None)
    # Tags: JSON list, older rows may hold a comma separated string
    tags: Mapped[list | str | None] = mapped_column(JSON, nullable=True, default=list)
    # Editor notes passed to the generator
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)
    priority: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=None)
    # new/pending/processing/generated/duplicate/error
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="new", index=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=_utcnow)
    # Set when a pipeline run claims the idea
    processing_started_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True, default=None)
    # Set when the idea reaches a terminal status
    processed_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True, default=None)
    # Question produced from this idea
    generated_question_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, default=None)
