"""
Idea status reconciliation
Marks waiting ideas as generated when a published question already covers them.
Uses the fuzzy word-overlap match; the daily pipeline keeps its exact match.
"""

import logging
from dataclasses import dataclass, field, asdict
from typing import Optional

from qahq.core.content_store import ContentStore
from qahq.core.similarity import are_questions_similar
from qahq.models.idea import IDEA_SELECTABLE_STATUSES

logger = logging.getLogger(__name__)


@dataclass
class CleanupItem:
    idea_id: str
    proposed_question: str
    status: str  # updated / no_match / error
    matched_question: Optional[str] = None
    matched_question_id: Optional[str] = None
    error: Optional[str] = None


@dataclass
class CleanupReport:
    total: int = 0
    updated: int = 0
    results: list[CleanupItem] = field(default_factory=list)

    @property
    def not_found(self) -> int:
        return self.total - self.updated

    @property
    def message(self) -> str:
        if not self.total:
            return 'No ideas with status "new" or "pending" found'
        return f"Cleanup complete. Updated {self.updated} of {self.total} ideas."

    def to_dict(self) -> dict:
        data = asdict(self)
        data["not_found"] = self.not_found
        data["message"] = self.message
        return data


async def reconcile_idea_statuses(store: ContentStore) -> CleanupReport:
    """
    Link waiting ideas to published questions that already answer them

    Ideas are checked oldest first; each takes the oldest matching question.
    A failed update is reported for that idea and the rest carry on.
    """
    ideas = await store.fetch_ideas_by_status(
        IDEA_SELECTABLE_STATUSES, oldest_first=True
    )
    report = CleanupReport(total=len(ideas))
    if not ideas:
        return report

    questions = await store.list_published_questions()

    for idea in ideas:
        matched = next(
            (
                q for q in questions
                if are_questions_similar(idea.proposed_question, q.question)
            ),
            None,
        )
        if matched is None:
            report.results.append(CleanupItem(
                idea_id=idea.id,
                proposed_question=idea.proposed_question,
                status="no_match",
            ))
            continue

        try:
            await store.update_idea(
                idea.id,
                status="generated",
                generated_question_id=matched.id,
                processed_at=matched.created_at,
            )
        except Exception as e:
            logger.error(f"Cleanup failed to update idea {idea.id}: {e}")
            report.results.append(CleanupItem(
                idea_id=idea.id,
                proposed_question=idea.proposed_question,
                status="error",
                error=str(e),
            ))
            continue

        report.updated += 1
        report.results.append(CleanupItem(
            idea_id=idea.id,
            proposed_question=idea.proposed_question,
            status="updated",
            matched_question=matched.question,
            matched_question_id=matched.id,
        ))

    logger.info(report.message)
    return report
