"""
Celery tasks for finance app.
"""
import logging
from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(name='finance.run_weekly_settlements')
def run_weekly_settlements():
    """
    Periodic task: settle every shop's completed bookings dated before the
    start of the current week.

    Runs daily at midnight; shops already settled for the period have no
    eligible bookings left, so repeated runs are harmless.

    Returns:
        Ids of the settlements created
    """
    from apps.finance.services.settlement import run_settlement_job

    settlements = run_settlement_job()
    return [str(settlement.id) for settlement in settlements]
