"""
Celery tasks for bookings app.
"""
import logging
from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(name='bookings.close_missed_bookings')
def close_missed_bookings():
    """
    Periodic task: close bookings whose time has passed without a check-in.

    Runs every 30 minutes (see CELERY beat schedule). Upcoming bookings
    become no-shows, pending ones are cancelled.
    """
    from apps.bookings.services.status import mark_missed_bookings

    try:
        count = mark_missed_bookings()
        if count:
            logger.info(f"Closed {count} missed bookings")
        return count
    except Exception as e:
        logger.error(f"Error closing missed bookings: {str(e)}")
        raise
