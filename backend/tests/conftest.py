"""Pytest fixtures for the Question and Answer HQ backend tests."""

import asyncio
from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import qahq.models  # noqa: F401
from qahq.core.ai_providers.base import GenerationResult
from qahq.core.content_store import ContentStore
from qahq.core.slug import slugify
from qahq.models.base import Base

# Fixed "now" used by processor tests
NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


def fixed_clock():
    return NOW


async def _create_schema(engine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def session_factory(tmp_path):
    """Session factory bound to a fresh SQLite file.

    NullPool keeps no connection between asyncio.run calls, so every test
    step can run on its own event loop.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
    )
    asyncio.run(_create_schema(engine))
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    asyncio.run(engine.dispose())


@pytest.fixture
def store(session_factory):
    return ContentStore(session_factory)


@pytest.fixture
def add_idea(store):
    """Insert an idea and return it."""
    def _add(proposed_question, category="science", status="new", **fields):
        return asyncio.run(store.create_idea(
            proposed_question=proposed_question,
            category=category,
            status=status,
            **fields,
        ))
    return _add


@pytest.fixture
def add_question(store):
    """Insert a question and return it."""
    def _add(question, slug=None, category="science", status="published", **fields):
        data = {
            "question": question,
            "slug": slug or slugify(question),
            "category": category,
            "status": status,
        }
        if status == "published":
            data["published_at"] = fields.pop("published_at", datetime(2026, 1, 1, tzinfo=timezone.utc))
        data.update(fields)
        return asyncio.run(store.insert_question(data))
    return _add


def make_result(question, **overrides) -> GenerationResult:
    """Generator output for question with sensible defaults."""
    data = {
        "question": question,
        "slug": slugify(question),
        "short_answer": "Short answer.",
        "verdict": "works",
        "summary": "Summary.",
        "body_markdown": "## Overview\n\nBody.",
        "evidence": [{"title": "Study", "url": "https://example.org", "explanation": "Why"}],
        "sources": ["https://example.org"],
        "tags": ["tag"],
    }
    data.update(overrides)
    return GenerationResult(**data)


class FakeGenerator:
    """Stands in for AnswerGenerator.

    Echoes the proposed question by default; responses maps a proposed
    question to a GenerationResult or an exception to raise.
    """

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.calls = []

    async def generate(self, question, category, tags, notes=None):
        self.calls.append({
            "question": question,
            "category": category,
            "tags": tags,
            "notes": notes,
        })
        response = self.responses.get(question)
        if isinstance(response, Exception):
            raise response
        if response is not None:
            return response
        return make_result(question)


@pytest.fixture
def fake_generator():
    return FakeGenerator()
