"""
Booking status state machine.

    pending    -> upcoming | cancelled
    upcoming   -> checked-in | cancelled | no-show
    checked-in -> completed
    blocked    -> cancelled

Check-in requires the customer's 4-digit PIN.
"""
import logging
from datetime import datetime
from typing import Optional

from django.db import transaction

from apps.bookings.models import Booking
from apps.core.exceptions import ValidationError, AuthorizationError, StateError
from apps.core.utils.constants import (
    BOOKING_STATUSES,
    BOOKING_STATUS_PENDING,
    BOOKING_STATUS_UPCOMING,
    BOOKING_STATUS_CHECKED_IN,
    BOOKING_STATUS_COMPLETED,
    BOOKING_STATUS_CANCELLED,
    BOOKING_STATUS_NO_SHOW,
    BOOKING_STATUS_BLOCKED,
    MINUTES_PER_DAY,
)
from apps.core.utils.helpers import get_object_or_error
from apps.core.utils.time_utils import shop_now, time_to_minutes

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    BOOKING_STATUS_PENDING: {BOOKING_STATUS_UPCOMING, BOOKING_STATUS_CANCELLED},
    BOOKING_STATUS_UPCOMING: {BOOKING_STATUS_CHECKED_IN, BOOKING_STATUS_CANCELLED, BOOKING_STATUS_NO_SHOW},
    BOOKING_STATUS_CHECKED_IN: {BOOKING_STATUS_COMPLETED},
    BOOKING_STATUS_BLOCKED: {BOOKING_STATUS_CANCELLED},
}

# Status a booking is moved to once its time has passed
MISSED_STATUS_MAP = {
    BOOKING_STATUS_UPCOMING: BOOKING_STATUS_NO_SHOW,
    BOOKING_STATUS_PENDING: BOOKING_STATUS_CANCELLED,
}


def can_transition(current: str, new_status: str) -> bool:
    return new_status in ALLOWED_TRANSITIONS.get(current, set())


def transition_status(booking_id, new_status: str, pin: Optional[str] = None) -> Booking:
    """
    Move a booking to ``new_status``.

    Raises:
        ValidationError: unknown status, or check-in without a PIN
        NotFoundError: no such booking
        StateError: transition not allowed from the current status
        AuthorizationError: wrong PIN on check-in
    """
    if new_status not in dict(BOOKING_STATUSES):
        raise ValidationError(f'Unknown status "{new_status}".')

    with transaction.atomic():
        booking = get_object_or_error(
            Booking.objects.select_for_update(),
            booking_id,
            'Booking not found'
        )

        if not can_transition(booking.status, new_status):
            logger.warning(f"Rejected transition {booking.status} -> {new_status} for booking {booking.id}")
            raise StateError(f'Cannot change status from "{booking.status}" to "{new_status}".')

        if new_status == BOOKING_STATUS_CHECKED_IN:
            if not pin:
                raise ValidationError('Customer PIN required for check-in.')
            if str(pin).strip() != booking.booking_key:
                logger.warning(f"Invalid check-in PIN for booking {booking.id}")
                raise AuthorizationError('Invalid PIN.')

        previous = booking.status
        booking.status = new_status
        booking.save(update_fields=['status', 'updated_at'])

    logger.info(f"Booking {booking.id} status {previous} -> {new_status}")
    return booking


def mark_missed_bookings(now: Optional[datetime] = None) -> int:
    """
    Close bookings whose end time has passed without a check-in: upcoming
    ones become no-shows and unapproved pending ones are cancelled.

    Returns:
        Number of bookings updated
    """
    today, now_minutes = shop_now(now)
    candidates = Booking.objects.filter(
        status__in=list(MISSED_STATUS_MAP),
        date__lte=today,
    ).only('id', 'date', 'start_time', 'total_duration', 'status')

    count = 0
    for booking in candidates:
        # End measured from today's midnight; earlier dates shift back a day each
        days_ago = (today - booking.date).days
        end = time_to_minutes(booking.start_time) + booking.total_duration - days_ago * MINUTES_PER_DAY
        if end > now_minutes:
            continue
        try:
            transition_status(booking.id, MISSED_STATUS_MAP[booking.status])
            count += 1
        except StateError:
            # Status changed since the scan
            logger.info(f"Booking {booking.id} changed before it could be closed")

    return count
