"""Celery tasks for ride-related background processing."""

from celery import shared_task
import logging

logger = logging.getLogger(__name__)


@shared_task(ignore_result=True)
def run_matching_cycle_task():
    """
    Celery beat entrypoint for the matching engine.

    Scheduled every MATCHING_INTERVAL_SECONDS. A failed read only loses this
    tick; the next scheduled run starts from scratch.
    """
    from services.matching import RepositoryError, run_matching_cycle

    try:
        result = run_matching_cycle()
    except RepositoryError:
        logger.exception("Matching cycle aborted")
        return 0

    return result.matched_count
