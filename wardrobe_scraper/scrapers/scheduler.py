"""APScheduler-based scraping scheduler.

Triggers a full scrape on a cron cadence. Runs are time-boxed and
serialized: a trigger that fires while a run is still in flight is skipped.
"""

import asyncio
from typing import Optional

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from wardrobe_scraper.core.exceptions import ScheduleSetupError
from wardrobe_scraper.scrapers.scraper_service import RunReport, ScraperService

logger = structlog.get_logger(__name__)

DEFAULT_CRON = "59 23 * * *"  # Daily at 23:59 UTC
JOB_ID = "scrape_all"


def derive_cron_expression(schedule: str) -> str:
    """Convert a 6-field cron (with seconds) into the 5-field form.

    The leading seconds field is dropped at the first whitespace. Input
    shorter than 10 characters, without whitespace, or whose remainder is
    not exactly five fields falls back to DEFAULT_CRON.

    Examples:
        "0 59 23 * * *" -> "59 23 * * *"
        "bad" -> "59 23 * * *"
    """
    if not schedule or len(schedule) < 10:
        return DEFAULT_CRON

    parts = schedule.split(None, 1)
    if len(parts) != 2:
        return DEFAULT_CRON

    remainder = parts[1].strip()
    if len(remainder.split()) != 5:
        return DEFAULT_CRON

    return remainder


class ScraperScheduler:
    """Runs ScraperService.run_all on a recurring cron schedule.

    This scheduler:
    - Registers one cron job (UTC) with max_instances=1
    - Serializes runs with a lock so the startup run and cron runs never overlap
    - Bounds every run with a timeout and logs instead of raising
    - Cancels an in-flight run on stop()
    """

    def __init__(
        self,
        scraper_service: ScraperService,
        schedule: str,
        run_timeout: float = 1800.0,
        logger=None,
    ):
        """Initialize scraper scheduler.

        Args:
            scraper_service: Orchestrator to run
            schedule: 6-field cron expression from configuration
            run_timeout: Seconds one run may take before it is cancelled
        """
        self.scraper_service = scraper_service
        self.schedule = schedule
        self.run_timeout = run_timeout
        self.scheduler = AsyncIOScheduler(timezone="UTC")
        self.logger = (logger or structlog.get_logger(__name__)).bind(service="scraper_scheduler")
        self._lock = asyncio.Lock()
        self._current_run: Optional[asyncio.Task] = None

    def start(self) -> None:
        """Register the cron job and start the scheduler.

        Must be called from within a running event loop.

        Raises:
            ScheduleSetupError: If the job cannot be registered
        """
        cron = derive_cron_expression(self.schedule)
        if cron == DEFAULT_CRON and not self.schedule.strip().endswith(DEFAULT_CRON):
            self.logger.warning("schedule_fallback", schedule=self.schedule, cron=cron)

        try:
            trigger = self._build_trigger(cron)
            self.scheduler.add_job(
                self._run_scheduled,
                trigger=trigger,
                id=JOB_ID,
                name="Scrape all sources",
                replace_existing=True,
                max_instances=1,
                coalesce=True,
            )
            self.scheduler.start()
        except Exception as e:
            raise ScheduleSetupError(f"Failed to schedule scraping job: {e}") from e

        job = self.scheduler.get_job(JOB_ID)
        self.logger.info(
            "scheduler_started",
            schedule=self.schedule,
            cron=cron,
            next_run=job.next_run_time.isoformat() if job and job.next_run_time else None,
        )

    def _build_trigger(self, cron: str) -> CronTrigger:
        try:
            return CronTrigger.from_crontab(cron, timezone="UTC")
        except ValueError as e:
            # Five fields that APScheduler still rejects (e.g. "99 99 * * *")
            self.logger.warning("schedule_rejected", cron=cron, error=str(e), fallback=DEFAULT_CRON)
            return CronTrigger.from_crontab(DEFAULT_CRON, timezone="UTC")

    async def stop(self) -> None:
        """Stop admitting runs and cancel the one in flight, if any."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            # AsyncIOScheduler queues the actual shutdown on the loop
            await asyncio.sleep(0)

        task = self._current_run
        if task is not None and not task.done():
            self.logger.info("cancelling_in_flight_run")
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        self.logger.info("scheduler_stopped")

    async def run_once(self) -> Optional[RunReport]:
        """Run one full scrape unless another run is in progress.

        Returns:
            RunReport, or None if the run was skipped, timed out or failed
        """
        if self._lock.locked():
            self.logger.warning("run_skipped_overlap")
            return None

        async with self._lock:
            self._current_run = asyncio.current_task()
            self.logger.info("scrape_run_started")
            try:
                report = await asyncio.wait_for(self.scraper_service.run_all(), timeout=self.run_timeout)
            except asyncio.TimeoutError:
                self.logger.error("scrape_run_timeout", timeout_seconds=self.run_timeout)
                return None
            except Exception as e:
                self.logger.error("scrape_run_failed", error=str(e), exc_info=True)
                return None
            finally:
                self._current_run = None

        self.logger.info("scrape_run_completed", total_listings=report.total_persisted)
        return report

    async def _run_scheduled(self) -> None:
        """Entry point APScheduler calls on every cron fire."""
        await self.run_once()

    def is_running(self) -> bool:
        return self.scheduler.running
