"""
Wiring of the pipeline's collaborators
Shared by the HTTP trigger, the scheduler and the CLI
"""

from typing import Optional

from qahq.config import settings
from qahq.core.answer_generator import AnswerGenerator, build_default_provider
from qahq.core.content_store import ContentStore
from qahq.core.idea_queue import IdeaQueueProcessor
from qahq.database.connection import async_session_factory


def build_content_store() -> ContentStore:
    return ContentStore(async_session_factory)


def build_answer_generator() -> AnswerGenerator:
    return AnswerGenerator(build_default_provider())


def build_idea_queue_processor(
    batch_size: Optional[int] = None,
    pool_size: Optional[int] = None,
) -> IdeaQueueProcessor:
    """Processor backed by the configured database and OpenAI provider"""
    return IdeaQueueProcessor(
        store=build_content_store(),
        generator=build_answer_generator(),
        batch_size=batch_size if batch_size is not None else settings.DAILY_BATCH_SIZE,
        pool_size=pool_size if pool_size is not None else settings.IDEA_POOL_SIZE,
        related_limit=settings.RELATED_QUESTIONS_LIMIT,
    )
