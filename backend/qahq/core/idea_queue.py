"""
Idea queue processor
Daily idea -> published question pipeline

Core flow:
1. Check today's publication count against the daily quota
2. Sample a pool of new ideas, drop ones whose text is already published
3. Shuffle, pick as many as the quota still allows
4. Claim the picks in one bulk "processing" update
5. One by one: generate -> duplicate / slug check -> insert -> link idea
Each idea ends in generated / duplicate / error; one idea failing never
stops the others.
"""

import logging
import random
from dataclasses import dataclass, field, asdict
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from qahq.core.answer_generator import AnswerGenerator
from qahq.core.categories import resolve_category
from qahq.core.content_store import ContentStore
from qahq.core.exceptions import InvalidCategoryError
from qahq.core.similarity import normalize_question_key
from qahq.models.idea import Idea, IDEA_SELECTABLE_STATUSES

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5
DEFAULT_POOL_SIZE = 50
# Below this many candidates the related block is left out
MIN_RELATED_QUESTIONS = 3
RELATED_CANDIDATES = 20


def _utcnow():
    return datetime.now(timezone.utc)


def parse_tags(raw) -> list[str]:
    """Tags from a comma separated string or a list"""
    if isinstance(raw, str):
        items = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        items = raw
    else:
        return []
    return [str(t).strip() for t in items if str(t).strip()]


@dataclass
class IdeaResult:
    """Outcome of one idea in a run"""
    idea_id: str
    outcome: str  # generated / duplicate / error
    slug: Optional[str] = None
    question_id: Optional[str] = None
    duplicate_of: Optional[str] = None
    message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.outcome == "generated"


@dataclass
class GenerationRunSummary:
    """What one run did"""
    status: str  # quota_met / no_ideas / all_duplicates / dry_run / completed
    batch_size: int
    published_today: int
    remaining: int
    attempted: int = 0
    successful: int = 0
    failed: int = 0
    duplicates: int = 0
    created_slugs: list[str] = field(default_factory=list)
    selected_idea_ids: list[str] = field(default_factory=list)
    results: list[IdeaResult] = field(default_factory=list)
    summary: str = ""

    @property
    def total_published_today(self) -> int:
        return self.published_today + self.successful

    def to_dict(self) -> dict:
        data = asdict(self)
        data["total_published_today"] = self.total_published_today
        return data


class IdeaQueueProcessor:
    """
    Converts a bounded batch of ideas into published questions

    store and generator are injected; nothing here touches module-level
    clients.
    """

    def __init__(
        self,
        store: ContentStore,
        generator: AnswerGenerator,
        batch_size: int = DEFAULT_BATCH_SIZE,
        pool_size: int = DEFAULT_POOL_SIZE,
        related_limit: int = 6,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.generator = generator
        self.batch_size = batch_size
        self.pool_size = pool_size
        self.related_limit = related_limit
        self.rng = rng or random.Random()
        self.clock = clock

    async def run(self, dry_run: bool = False) -> GenerationRunSummary:
        """
        Run one batch

        Run-level failures (counting, pool fetch, claiming) propagate to
        the caller; per-idea failures are recorded in the summary.
        """
        batch_size = self.batch_size
        logger.info(
            f"Starting daily question generation "
            f"(batch_size={batch_size}, pool_size={self.pool_size}, dry_run={dry_run})"
        )

        # 1. Quota (UTC calendar day)
        now = self.clock()
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        tomorrow_start = today_start + timedelta(days=1)
        published_today = await self.store.count_published_between(
            today_start, tomorrow_start
        )
        remaining = max(0, batch_size - published_today)
        logger.info(f"Published today: {published_today}, remaining: {remaining}")

        if remaining == 0:
            return GenerationRunSummary(
                status="quota_met",
                batch_size=batch_size,
                published_today=published_today,
                remaining=0,
                summary=(
                    f"Already published {published_today} questions today. "
                    f"Target of {batch_size} reached."
                ),
            )

        # 2. Pool
        pool = await self.store.fetch_ideas_by_status(
            IDEA_SELECTABLE_STATUSES, limit=self.pool_size
        )
        if not pool:
            return GenerationRunSummary(
                status="no_ideas",
                batch_size=batch_size,
                published_today=published_today,
                remaining=remaining,
                summary="No new ideas to process.",
            )
        logger.info(f"Found {len(pool)} ideas waiting for generation")

        # 3. Drop ideas whose text is already a question
        existing_keys = await self.store.list_question_keys()
        unique_ideas = [
            idea for idea in pool
            if normalize_question_key(idea.proposed_question) not in existing_keys
        ]
        if not unique_ideas:
            return GenerationRunSummary(
                status="all_duplicates",
                batch_size=batch_size,
                published_today=published_today,
                remaining=remaining,
                summary="No unique ideas available (all would be duplicates).",
            )
        logger.info(
            f"Filtered to {len(unique_ideas)} unique ideas "
            f"(excluded {len(pool) - len(unique_ideas)} duplicates)"
        )

        # 4. Random pick
        self.rng.shuffle(unique_ideas)
        selected = unique_ideas[:remaining]
        selected_ids = [idea.id for idea in selected]

        if dry_run:
            return GenerationRunSummary(
                status="dry_run",
                batch_size=batch_size,
                published_today=published_today,
                remaining=remaining,
                selected_idea_ids=selected_ids,
                summary=f"DRY RUN: Would process {len(selected)} ideas.",
            )

        # 5. Claim
        await self.store.mark_ideas_processing(selected_ids, self.clock())
        logger.info(f"Marked {len(selected_ids)} ideas as processing")

        # 6. Sequential processing
        results: list[IdeaResult] = []
        successful = 0
        for idea in selected:
            # selected is capped at remaining, so this only fires if the
            # selection rule changes
            if successful >= remaining:
                logger.info(
                    f"Reached target of {remaining} successful publishes, stopping early"
                )
                break

            try:
                result = await self._process_idea(idea)
            except Exception as e:
                logger.error(f"Error processing idea {idea.id}: {e}")
                result = await self._fail(idea, str(e) or type(e).__name__)

            results.append(result)
            if result.success:
                successful += 1

        return self._build_summary(
            batch_size, published_today, remaining, selected_ids, results
        )

    async def _process_idea(self, idea: Idea) -> IdeaResult:
        logger.info(f"Processing idea {idea.id}: {idea.proposed_question}")

        # a. category
        category = resolve_category(idea.category)
        if category is None:
            logger.error(f"Invalid category {idea.category!r} for idea {idea.id}")
            return await self._fail(idea, str(InvalidCategoryError(idea.category)))

        # b. tags
        idea_tags = parse_tags(idea.tags)

        # c. generation
        try:
            generated = await self.generator.generate(
                idea.proposed_question,
                category.value,
                idea_tags,
                idea.notes or None,
            )
        except Exception as e:
            logger.error(f"Generator error for idea {idea.id}: {e}")
            return await self._fail(idea, f"Generator error: {e}")

        # d. duplicate text (the generated wording may differ from the proposal)
        try:
            duplicate = await self.store.find_question_by_text(generated.question)
        except Exception as e:
            return await self._fail(idea, f"Error checking duplicate: {e}")
        if duplicate is not None:
            logger.info(
                f"Duplicate question text for idea {idea.id} "
                f"(matches question {duplicate.id})"
            )
            await self._mark(idea.id, "duplicate")
            return IdeaResult(
                idea_id=idea.id,
                outcome="duplicate",
                duplicate_of=duplicate.id,
                message="Duplicate question text detected",
            )

        # e. slug collision
        try:
            slug_taken = await self.store.slug_exists(generated.slug)
        except Exception as e:
            return await self._fail(idea, f"Error checking slug: {e}")
        if slug_taken:
            logger.info(f"Slug collision for idea {idea.id}: {generated.slug}")
            await self._mark(idea.id, "duplicate")
            return IdeaResult(
                idea_id=idea.id,
                outcome="duplicate",
                slug=generated.slug,
                message="Duplicate slug detected",
            )

        # f. insert, auto-published
        related_block = await self._related_questions_block(
            category.value, generated.slug
        )
        body = "\n\n".join(
            part for part in (generated.body_markdown, related_block) if part
        )
        question_data = {
            "slug": generated.slug,
            "question": generated.question,
            "short_answer": generated.short_answer or None,
            "verdict": generated.verdict,
            "category": category.value,
            "summary": generated.summary or None,
            "body_markdown": body or None,
            "evidence_json": generated.evidence or None,
            "sources": generated.sources,
            "tags": generated.tags or idea_tags,
            "status": "published",
            "published_at": self.clock(),
        }
        try:
            question = await self.store.insert_question(question_data)
        except Exception as e:
            logger.error(f"Error creating question for idea {idea.id}: {e}")
            return await self._fail(idea, f"Error creating question: {e}")
        logger.info(f"Created question {question.id} ({question.slug}) for idea {idea.id}")

        # g. link idea; a second, minimal update keeps it from staying "processing"
        try:
            await self.store.update_idea(
                idea.id,
                status="generated",
                generated_question_id=question.id,
                processed_at=self.clock(),
            )
        except Exception as e:
            logger.error(f"Error updating idea {idea.id} to generated: {e}")
            try:
                await self._mark(idea.id, "generated")
            except Exception as retry_err:
                logger.error(
                    f"Retry failed, idea {idea.id} left in processing: {retry_err}"
                )

        # h. success
        return IdeaResult(
            idea_id=idea.id,
            outcome="generated",
            slug=question.slug,
            question_id=question.id,
        )

    async def _related_questions_block(self, category: str, exclude_slug: str) -> str:
        """Markdown list of recent questions of the same category"""
        try:
            candidates = await self.store.list_related_questions(
                category, exclude_slug, limit=RELATED_CANDIDATES
            )
        except Exception as e:
            logger.warning(f"Related questions lookup failed, skipping block: {e}")
            return ""
        if len(candidates) < MIN_RELATED_QUESTIONS:
            return ""
        links = candidates[: self.related_limit]
        return "\n".join(
            ["## Related Questions"]
            + [f"- [{q.question}](/questions/{q.slug})" for q in links]
        )

    async def _mark(self, idea_id: str, status: str) -> None:
        await self.store.update_idea(idea_id, status=status, processed_at=self.clock())

    async def _fail(self, idea: Idea, message: str) -> IdeaResult:
        """Mark an idea as error and describe why"""
        try:
            await self._mark(idea.id, "error")
        except Exception as e:
            logger.error(f"Error marking idea {idea.id} as error: {e}")
        return IdeaResult(idea_id=idea.id, outcome="error", message=message)

    @staticmethod
    def _build_summary(
        batch_size: int,
        published_today: int,
        remaining: int,
        selected_ids: list[str],
        results: list[IdeaResult],
    ) -> GenerationRunSummary:
        successful = sum(1 for r in results if r.outcome == "generated")
        duplicates = sum(1 for r in results if r.outcome == "duplicate")
        failed = sum(1 for r in results if r.outcome == "error")

        summary = GenerationRunSummary(
            status="completed",
            batch_size=batch_size,
            published_today=published_today,
            remaining=remaining,
            attempted=len(results),
            successful=successful,
            failed=failed,
            duplicates=duplicates,
            created_slugs=[r.slug for r in results if r.success and r.slug],
            selected_idea_ids=selected_ids,
            results=results,
        )
        summary.summary = (
            f"Processed {len(results)} ideas ({successful} successful, "
            f"{failed} failed, {duplicates} duplicates). "
            f"Total published today: {summary.total_published_today}/{batch_size}"
        )
        logger.info(summary.summary)
        return summary
