# ABOUTME: Cron-based job scheduling using APScheduler.
# ABOUTME: Runs the pull pipeline on the configured schedule.

import logging
import signal
import sys
from typing import Callable

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from .config import Config, ConfigError

logger = logging.getLogger(__name__)


def run_scheduler(config: Config, pull_fn: Callable[[Config], None]) -> None:
    """Run the pull scheduler indefinitely.

    Args:
        config: Application configuration with schedule.
        pull_fn: Function to call for each pull run.
    """
    if not config.schedule:
        raise ConfigError("'schedule' must be set in the config file to use serve")

    try:
        trigger = CronTrigger.from_crontab(config.schedule)
    except ValueError as e:
        raise ConfigError(f"Invalid schedule '{config.schedule}': {e}")

    scheduler = BlockingScheduler()
    scheduler.add_job(
        lambda: pull_fn(config),
        trigger,
        id="notion_pull",
        max_instances=1,
    )

    def shutdown(signum, frame):
        logger.info("Received shutdown signal, stopping scheduler...")
        scheduler.shutdown(wait=False)
        sys.exit(0)

    signal.signal(signal.SIGTERM, shutdown)
    signal.signal(signal.SIGINT, shutdown)

    logger.info(f"Starting scheduler with schedule: {config.schedule}")
    logger.info("Waiting for next scheduled pull...")

    scheduler.start()
