"""
Task scheduler
APScheduler job that runs the daily idea -> question generation in-process
"""

import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from qahq.config import settings
from qahq.core.idea_queue import GenerationRunSummary

logger = logging.getLogger(__name__)

DAILY_GENERATION_JOB_ID = "daily_question_generation"


class TaskScheduler:
    """
    Daily generation scheduler
    Overlapping runs are prevented by max_instances=1; a manual HTTP/CLI
    trigger can still overlap with it.
    """

    def __init__(self):
        self.scheduler = AsyncIOScheduler(timezone=settings.SCHEDULER_TIMEZONE)
        self._running = False

    def start(self):
        """Start the scheduler"""
        if self._running:
            return

        self.scheduler.add_job(
            self.run_daily_generation,
            CronTrigger(
                hour=settings.GENERATION_HOUR_UTC,
                minute=settings.GENERATION_MINUTE,
                timezone=settings.SCHEDULER_TIMEZONE,
            ),
            id=DAILY_GENERATION_JOB_ID,
            name="Daily question generation",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

        self.scheduler.start()
        self._running = True
        logger.info(
            f"Task scheduler started (daily generation at "
            f"{settings.GENERATION_HOUR_UTC:02d}:{settings.GENERATION_MINUTE:02d} "
            f"{settings.SCHEDULER_TIMEZONE})"
        )

    def shutdown(self):
        """Stop the scheduler"""
        if self._running:
            self.scheduler.shutdown(wait=False)
            self._running = False
            logger.info("Task scheduler stopped")

    @property
    def is_running(self) -> bool:
        return self._running

    async def run_daily_generation(self) -> Optional[GenerationRunSummary]:
        """
        Scheduled job body
        Errors are logged; the scheduler has nobody to report them to.
        """
        from qahq.core.factory import build_idea_queue_processor

        try:
            result = await build_idea_queue_processor().run()
        except Exception as e:
            logger.error(f"Daily question generation failed: {e}")
            return None
        logger.info(f"Daily question generation finished: {result.summary}")
        return result


# Global singleton
task_scheduler = TaskScheduler()
