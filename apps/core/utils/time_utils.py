"""
Shop-local time helpers.

All scheduling math works in minutes from midnight of a calendar date.
A value above 1440 is a point on the following day (overnight shifts).
"""
import re
from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple, Union

import pytz
from django.conf import settings
from django.utils import timezone

from apps.core.exceptions import ValidationError
from apps.core.utils.constants import MINUTES_PER_DAY

_HHMM = re.compile(r'^(\d{1,2}):(\d{2})(?::\d{2})?$')


def time_to_minutes(value: Union[str, time, None]) -> int:
    """
    Convert "HH:mm" (or a ``datetime.time``) to minutes from midnight.

    Raises:
        ValidationError: if the string is not a valid clock time
    """
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if not value:
        raise ValidationError('Time is required.')
    match = _HHMM.match(str(value).strip())
    if not match:
        raise ValidationError(f'Invalid time "{value}", expected HH:mm.')
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValidationError(f'Invalid time "{value}", expected HH:mm.')
    return hours * 60 + minutes


def minutes_to_time(total_minutes: int) -> str:
    """Convert minutes to "HH:mm", wrapping into the 0-24h range."""
    normalized = total_minutes % MINUTES_PER_DAY
    return f'{normalized // 60:02d}:{normalized % 60:02d}'


def minutes_to_clock(total_minutes: int) -> time:
    normalized = total_minutes % MINUTES_PER_DAY
    return time(normalized // 60, normalized % 60)


def parse_date(value: Union[str, date, None]) -> date:
    """Accept a ``date`` or a "YYYY-MM-DD" string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value), '%Y-%m-%d').date()
    except (TypeError, ValueError):
        raise ValidationError(f'Invalid date "{value}", expected YYYY-MM-DD.')


def get_shop_timezone():
    return pytz.timezone(settings.SHOP_TIME_ZONE)


def shop_now(now: Optional[datetime] = None) -> Tuple[date, int]:
    """
    Current shop-local date and minutes from midnight.

    Args:
        now: aware datetime to use instead of the wall clock (tests)
    """
    now = now or timezone.now()
    if timezone.is_naive(now):
        now = get_shop_timezone().localize(now)
    local = now.astimezone(get_shop_timezone())
    return local.date(), local.hour * 60 + local.minute


def previous_day(target_date: date) -> date:
    return target_date - timedelta(days=1)


def next_day(target_date: date) -> date:
    return target_date + timedelta(days=1)


def month_bounds(target_date: date) -> Tuple[date, date]:
    """First and last day of the calendar month containing ``target_date``."""
    first = target_date.replace(day=1)
    following = (first + timedelta(days=32)).replace(day=1)
    return first, following - timedelta(days=1)


def start_of_week(target_date: date) -> date:
    """Monday of the week containing ``target_date``."""
    return target_date - timedelta(days=target_date.weekday())
