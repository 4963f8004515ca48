"""Periodic clock jobs using APScheduler."""

import logging
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler

from .config import TICK_INTERVAL
from .entries import EntryStore
from .player import NotificationPlayer
from .renderer import DisplayRenderer

_LOGGER = logging.getLogger(__name__)

# Global scheduler instance
_scheduler: Optional[BackgroundScheduler] = None

# Job IDs
COUNTDOWN_JOB_ID = "timer_countdown"
ALARM_CHECK_JOB_ID = "alarm_check"
RENDER_JOB_ID = "render"


def _countdown_tick(store: EntryStore, player: NotificationPlayer):
    """Called once per tick to run the timers down."""
    finished = store.countdown_tick()
    if finished:
        _LOGGER.info("%d timer(s) finished", len(finished))
        player.trigger()


def _alarm_check(store: EntryStore, player: NotificationPlayer):
    """Called once per tick to compare alarms with the wall clock."""
    fired = store.scan_alarms()
    if fired:
        for alarm in fired:
            _LOGGER.info("Alarm triggered for %s", alarm.clock())
        player.trigger()


def get_scheduler() -> BackgroundScheduler:
    """Get or create the scheduler instance."""
    global _scheduler

    if _scheduler is None:
        _scheduler = BackgroundScheduler()

    return _scheduler


def _add_tick_job(scheduler: BackgroundScheduler, func, job_id: str, args: list):
    # One pass at a time per job; a late tick is run once, not replayed
    scheduler.add_job(
        func,
        "interval",
        seconds=TICK_INTERVAL,
        args=args,
        id=job_id,
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )


def start_scheduler(store: EntryStore, player: NotificationPlayer, renderer: DisplayRenderer):
    """Start the countdown, alarm and render jobs."""
    scheduler = get_scheduler()

    if scheduler.running:
        return

    _add_tick_job(scheduler, _countdown_tick, COUNTDOWN_JOB_ID, [store, player])
    _add_tick_job(scheduler, _alarm_check, ALARM_CHECK_JOB_ID, [store, player])
    _add_tick_job(scheduler, renderer.refresh, RENDER_JOB_ID, [])

    scheduler.start()
    _LOGGER.info("Scheduler started (tick every %ss)", TICK_INTERVAL)


def stop_scheduler():
    """Stop the periodic jobs."""
    global _scheduler

    if _scheduler is not None and _scheduler.running:
        _scheduler.shutdown(wait=True)  # let a running pass finish before curses exits
        _LOGGER.info("Scheduler stopped")

    _scheduler = None
