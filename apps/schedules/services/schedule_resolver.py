"""
Barber schedule resolution.

Resolves a barber's effective working window for one calendar date:

1. an exact-date ``BarberSpecialHours`` entry wins
2. otherwise the weekday ``BarberWeeklySchedule`` entry, if the barber has a weekly pattern
3. otherwise the barber's default hours, without breaks

Minutes are measured from midnight of the target date. A shift ending before
it starts crosses midnight, so its end is pushed past 1440
(22:00-02:00 resolves to 1320-1560).
"""
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Tuple

from apps.core.utils.constants import MINUTES_PER_DAY
from apps.core.utils.time_utils import time_to_minutes


# Map Python weekday integers to day names
WEEKDAY_TO_DAY = {
    0: 'monday',
    1: 'tuesday',
    2: 'wednesday',
    3: 'thursday',
    4: 'friday',
    5: 'saturday',
    6: 'sunday',
}


@dataclass(frozen=True)
class Break:
    start: int
    end: int


@dataclass(frozen=True)
class ResolvedSchedule:
    """Effective hours of one barber on one date."""
    is_open: bool
    start_minutes: int
    end_minutes: int
    breaks: Tuple[Break, ...] = ()

    @property
    def is_overnight(self) -> bool:
        return self.end_minutes > MINUTES_PER_DAY

    @property
    def spillover_end(self) -> int:
        """Minutes of the shift that fall on the next calendar day."""
        return max(self.end_minutes - MINUTES_PER_DAY, 0)

    def as_dict(self) -> dict:
        return {
            'is_open': self.is_open,
            'start': self.start_minutes,
            'end': self.end_minutes,
            'breaks': [{'start': b.start, 'end': b.end} for b in self.breaks],
        }


def _window(start_hour: str, end_hour: str) -> Tuple[int, int]:
    start = time_to_minutes(start_hour)
    end = time_to_minutes(end_hour)
    if end < start:
        end += MINUTES_PER_DAY
    return start, end


def _breaks(raw_breaks: Optional[Iterable[dict]], start: int, end: int) -> Tuple[Break, ...]:
    resolved = []
    for raw in raw_breaks or []:
        b_start = time_to_minutes(raw.get('start_time'))
        b_end = time_to_minutes(raw.get('end_time'))
        if end > MINUTES_PER_DAY and b_start < start:
            # Break inside the after-midnight part of an overnight shift
            b_start += MINUTES_PER_DAY
            b_end += MINUTES_PER_DAY
        if b_end < b_start:
            b_end += MINUTES_PER_DAY
        resolved.append(Break(start=b_start, end=b_end))
    return tuple(sorted(resolved, key=lambda b: b.start))


def _find_special(barber, target_date: date):
    # Iterate instead of filtering so prefetched rows are reused
    for entry in barber.special_hours.all():
        if entry.date == target_date:
            return entry
    return None


def _find_weekly(weekly_entries, target_date: date):
    day_name = WEEKDAY_TO_DAY[target_date.weekday()]
    for entry in weekly_entries:
        if entry.day_of_week == day_name:
            return entry
    return None


def resolve_schedule(barber, target_date: date) -> ResolvedSchedule:
    """
    Resolve the effective schedule of ``barber`` on ``target_date``.

    Blank hours on a special or weekly entry fall back to the barber's
    default hours. The ``is_available`` duty toggle is not considered here.
    """
    special = _find_special(barber, target_date)
    if special is not None:
        start, end = _window(
            special.start_hour or barber.default_start_hour,
            special.end_hour or barber.default_end_hour,
        )
        return ResolvedSchedule(is_open=special.is_open, start_minutes=start, end_minutes=end)

    weekly_entries = list(barber.weekly_schedules.all())
    if weekly_entries:
        weekly = _find_weekly(weekly_entries, target_date)
        if weekly is not None:
            start, end = _window(
                weekly.start_hour or barber.default_start_hour,
                weekly.end_hour or barber.default_end_hour,
            )
            return ResolvedSchedule(
                is_open=weekly.is_open,
                start_minutes=start,
                end_minutes=end,
                breaks=_breaks(weekly.breaks, start, end),
            )

    start, end = _window(barber.default_start_hour, barber.default_end_hour)
    return ResolvedSchedule(is_open=True, start_minutes=start, end_minutes=end)
