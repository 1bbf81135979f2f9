"""
Question model
Published Q&A articles
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column

from qahq.models.base import Base, UTCDateTime


def _utcnow():
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


VERDICTS = ("works", "doesnt_work", "mixed")


class Question(Base):
    """Questions table"""
    __tablename__ = "questions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    # URL slug, unique across all questions
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    # Question text
    question: Mapped[str] = mapped_column(Text, nullable=False)
    short_answer: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)
    # works/doesnt_work/mixed
    verdict: Mapped[Optional[str]] = mapped_column(String(20), nullable=True, default=None)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)
    # Article body (Markdown with ## sections)
    body_markdown: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)
    # [{"title", "url", "explanation"}, ...]
    evidence_json: Mapped[list | None] = mapped_column(JSON, nullable=True, default=None)
    # Source URLs
    sources: Mapped[list | None] = mapped_column(JSON, nullable=True, default=list)
    tags: Mapped[list | None] = mapped_column(JSON, nullable=True, default=list)
    # draft/approved/scheduled/published
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft", index=True)
    published_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True, default=None, index=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=_utcnow)
    updated_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True, default=None, onupdate=_utcnow)
