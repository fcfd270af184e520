# activities/scheduler.py
"""
Scheduled sweep of ended activities.

A cron trigger fires at the top of every hour (wall-clock aligned,
project time zone) and runs
:meth:`ActivityService.mark_ended_activities`. Errors raised by a
run are logged and do not stop the scheduler; activities left
behind are still published and past due, so the next tick picks
them up.
"""

from typing import Optional
import logging

from apscheduler.schedulers.base import BaseScheduler
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger
from django.conf import settings
from django.db import close_old_connections

from .services import ActivityService, SweepReport

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "mark-ended-activities"


def run_sweep(service: Optional[ActivityService] = None) -> Optional[SweepReport]:
    """
    Run one sweep, never raising.

    Parameters
    ----------
    service : ActivityService, optional
        The service to use; a default one is built otherwise.

    Returns
    -------
    SweepReport or None
        The sweep report, or None if the sweep itself failed.
    """
    logger.info("Running scheduled task: mark ended activities")
    try:
        report = (service or ActivityService()).mark_ended_activities()
    except Exception:
        logger.exception("Error in scheduled task: mark ended activities")
        return None
    logger.info("Scheduled task completed: mark ended activities (%s)", report)
    return report


def scheduled_sweep() -> None:
    """Job entry point: run a sweep on fresh database connections."""
    close_old_connections()
    try:
        run_sweep()
    finally:
        close_old_connections()


def sweep_trigger() -> CronTrigger:
    """Return the hourly cron trigger in the project time zone."""
    return CronTrigger(
        minute=getattr(settings, "ACTIVITY_SWEEP_CRON_MINUTE", "0"),
        timezone=settings.TIME_ZONE,
    )


def build_scheduler(scheduler: Optional[BaseScheduler] = None) -> BaseScheduler:
    """
    Register the sweep job on a scheduler.

    Parameters
    ----------
    scheduler : BaseScheduler, optional
        Scheduler to configure, a new :class:`BlockingScheduler`
        by default.

    Returns
    -------
    BaseScheduler
        The scheduler, not started.
    """
    scheduler = scheduler or BlockingScheduler(timezone=settings.TIME_ZONE)
    scheduler.add_job(
        scheduled_sweep,
        trigger=sweep_trigger(),
        id=SWEEP_JOB_ID,
        name="Mark ended activities",
        replace_existing=True,
        coalesce=True,
        max_instances=1,
        misfire_grace_time=15 * 60,
    )
    return scheduler
