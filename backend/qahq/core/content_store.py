"""
Content store
Reads and writes of the ideas / questions / subscribers tables

Every method opens its own short session; callers pass in the session
factory so tests can run against an in-memory database.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import select, update, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from qahq.models.idea import Idea
from qahq.models.question import Question
from qahq.models.subscriber import Subscriber
from qahq.core.similarity import normalize_question_key

logger = logging.getLogger(__name__)


class ContentStore:
    """SQLAlchemy-backed content store"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    # ==================== Ideas ====================

    async def fetch_ideas_by_status(
        self,
        statuses: Iterable[str],
        limit: Optional[int] = None,
        oldest_first: bool = False,
    ) -> list[Idea]:
        """Ideas whose status is one of statuses"""
        stmt = select(Idea).where(Idea.status.in_(list(statuses)))
        if oldest_first:
            stmt = stmt.order_by(Idea.created_at.asc())
        if limit is not None:
            stmt = stmt.limit(limit)
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def mark_ideas_processing(
        self, idea_ids: list[str], started_at: datetime
    ) -> None:
        """Claim ideas for a run in one bulk UPDATE"""
        if not idea_ids:
            return
        async with self.session_factory() as session:
            await session.execute(
                update(Idea)
                .where(Idea.id.in_(idea_ids))
                .values(status="processing", processing_started_at=started_at)
            )
            await session.commit()
        logger.debug(f"Claimed {len(idea_ids)} ideas for processing")

    async def update_idea(self, idea_id: str, **fields) -> None:
        """
        Update one idea's columns

        Raises:
            LookupError: no idea with that id
        """
        async with self.session_factory() as session:
            result = await session.execute(
                update(Idea).where(Idea.id == idea_id).values(**fields)
            )
            await session.commit()
        if result.rowcount == 0:
            raise LookupError(f"Idea not found: {idea_id}")

    async def get_idea(self, idea_id: str) -> Optional[Idea]:
        async with self.session_factory() as session:
            return await session.get(Idea, idea_id)

    async def list_ideas(
        self, status: Optional[str] = None, limit: int = 100, offset: int = 0
    ) -> tuple[int, list[Idea]]:
        """Paginated ideas, newest first"""
        query = select(Idea)
        count_query = select(func.count(Idea.id))
        if status:
            query = query.where(Idea.status == status)
            count_query = count_query.where(Idea.status == status)
        query = query.order_by(Idea.created_at.desc()).offset(offset).limit(limit)

        async with self.session_factory() as session:
            total = (await session.execute(count_query)).scalar() or 0
            result = await session.execute(query)
            return total, list(result.scalars().all())

    async def create_idea(self, **fields) -> Idea:
        async with self.session_factory() as session:
            idea = Idea(**fields)
            session.add(idea)
            await session.commit()
            await session.refresh(idea)
            return idea

    async def create_ideas(self, rows: list[dict]) -> list[Idea]:
        """Insert several ideas in one transaction"""
        async with self.session_factory() as session:
            ideas = [Idea(**row) for row in rows]
            session.add_all(ideas)
            await session.commit()
            return ideas

    # ==================== Questions ====================

    async def count_published_between(self, start: datetime, end: datetime) -> int:
        """Published questions with start <= published_at < end"""
        stmt = select(func.count(Question.id)).where(
            Question.status == "published",
            Question.published_at >= start,
            Question.published_at < end,
        )
        async with self.session_factory() as session:
            return (await session.execute(stmt)).scalar() or 0

    async def list_question_keys(self) -> set[str]:
        """Normalized (lower-case, trimmed) texts of every question"""
        async with self.session_factory() as session:
            result = await session.execute(select(Question.question))
            return {normalize_question_key(row[0]) for row in result.all()}

    async def find_question_by_text(self, text: str) -> Optional[Question]:
        """Question whose text equals text ignoring case and surrounding whitespace"""
        key = normalize_question_key(text)
        if not key:
            return None
        stmt = select(Question).where(
            func.lower(func.trim(Question.question)) == key
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            for question in result.scalars().all():
                if normalize_question_key(question.question) == key:
                    return question
        return None

    async def slug_exists(self, slug: str) -> bool:
        stmt = select(Question.id).where(Question.slug == slug).limit(1)
        async with self.session_factory() as session:
            return (await session.execute(stmt)).first() is not None

    async def insert_question(self, data: dict) -> Question:
        """
        Insert a question, id is assigned by the store

        Raises:
            IntegrityError: slug already taken
        """
        async with self.session_factory() as session:
            question = Question(**data)
            session.add(question)
            await session.commit()
            await session.refresh(question)
            return question

    async def get_question(self, question_id: str) -> Optional[Question]:
        async with self.session_factory() as session:
            return await session.get(Question, question_id)

    async def get_question_by_slug(
        self, slug: str, status: Optional[str] = "published"
    ) -> Optional[Question]:
        stmt = select(Question).where(Question.slug == slug)
        if status:
            stmt = stmt.where(Question.status == status)
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.scalars().first()

    async def update_question(self, question_id: str, data: dict) -> Optional[Question]:
        """Apply data to a question, None when it does not exist"""
        async with self.session_factory() as session:
            question = await session.get(Question, question_id)
            if not question:
                return None
            for key, value in data.items():
                setattr(question, key, value)
            await session.commit()
            await session.refresh(question)
            return question

    async def list_questions(
        self,
        status: Optional[str] = "published",
        category: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[int, list[Question]]:
        """Paginated questions, most recently published first"""
        query = select(Question)
        count_query = select(func.count(Question.id))
        filters = []
        if status:
            filters.append(Question.status == status)
        if category:
            filters.append(Question.category == category)
        if search:
            pattern = f"%{search.strip()}%"
            filters.append(
                or_(
                    Question.question.ilike(pattern),
                    Question.short_answer.ilike(pattern),
                    Question.summary.ilike(pattern),
                )
            )
        if filters:
            query = query.where(*filters)
            count_query = count_query.where(*filters)
        query = (
            query.order_by(Question.published_at.desc(), Question.created_at.desc())
            .offset(offset)
            .limit(limit)
        )

        async with self.session_factory() as session:
            total = (await session.execute(count_query)).scalar() or 0
            result = await session.execute(query)
            return total, list(result.scalars().all())

    async def list_published_questions(self) -> list[Question]:
        """All published questions, oldest first"""
        stmt = (
            select(Question)
            .where(Question.status == "published")
            .order_by(Question.created_at.asc())
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def list_related_questions(
        self, category: str, exclude_slug: str, limit: int = 20
    ) -> list[Question]:
        """Newest published questions of a category, excluding one slug"""
        stmt = (
            select(Question)
            .where(
                Question.category == category,
                Question.slug != exclude_slug,
                Question.status == "published",
            )
            .order_by(Question.created_at.desc())
            .limit(limit)
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    # ==================== Subscribers ====================

    async def add_subscriber(self, email: str) -> bool:
        """Store an email, False when it was already subscribed"""
        async with self.session_factory() as session:
            session.add(Subscriber(email=email))
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                return False
        return True
