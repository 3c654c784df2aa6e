"""
Barber availability checks.

Decides whether a candidate interval (barber, date, start, duration + buffer)
is bookable:

- it must fit today's resolved schedule, or the after-midnight part of
  yesterday's overnight shift (candidate shifted by +1440)
- it must not overlap a break
- it must not overlap any non-cancelled booking of the barber; bookings of
  the prior and following date are moved into today's timeline by -1440/+1440

Overlap is half-open: a booking ending exactly when another starts (buffer
included) does not conflict.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List
from uuid import UUID

from apps.bookings.models import Booking
from apps.core.utils.constants import MINUTES_PER_DAY
from apps.core.utils.time_utils import time_to_minutes, previous_day, next_day
from apps.schedules.services.schedule_resolver import ResolvedSchedule, resolve_schedule


@dataclass(frozen=True)
class BusyInterval:
    """Time a barber is occupied, in minutes of the target date's timeline."""
    start: int
    end: int

    def overlaps(self, start: int, end: int) -> bool:
        return start < self.end and end > self.start


@dataclass
class BarberDay:
    """
    Everything needed to answer availability questions for one barber on
    one date without touching the database again.
    """
    barber: object
    target_date: date
    today: ResolvedSchedule
    yesterday: ResolvedSchedule
    busy: List[BusyInterval] = field(default_factory=list)

    @property
    def barber_id(self) -> UUID:
        return self.barber.id

    def fits_schedule(self, start: int, end: int) -> bool:
        if _fits(self.today, start, end):
            return True
        # Overnight spillover from the previous day's shift
        if self.yesterday.is_open and self.yesterday.is_overnight:
            return _fits(self.yesterday, start + MINUTES_PER_DAY, end + MINUTES_PER_DAY)
        return False

    def has_conflict(self, start: int, end: int) -> bool:
        return any(interval.overlaps(start, end) for interval in self.busy)

    def is_free(self, start: int, duration: int, buffer: int = 0) -> bool:
        """
        Check a candidate starting at ``start`` minutes and occupying
        ``duration + buffer`` minutes.
        """
        if not self.barber.is_available:
            return False
        end = start + duration + buffer
        if not self.fits_schedule(start, end):
            return False
        return not self.has_conflict(start, end)


def _fits(schedule: ResolvedSchedule, start: int, end: int) -> bool:
    if not schedule.is_open:
        return False
    if start < schedule.start_minutes or end > schedule.end_minutes:
        return False
    for br in schedule.breaks:
        if start < br.end and end > br.start:
            return False
    return True


def booking_interval(booking: Booking, day_offset: int = 0) -> BusyInterval:
    """
    Occupied interval of an existing booking: its service time plus the
    buffer it reserved when it was created.
    """
    start = time_to_minutes(booking.start_time) + day_offset
    end = start + booking.total_duration + (booking.buffer_minutes or 0)
    return BusyInterval(start=start, end=end)


class AvailabilityEngine:
    """
    Availability calculator for barbers.

    Example usage:
        day = AvailabilityEngine.load_day(barber, date(2024, 12, 10))
        day.is_free(start=600, duration=30, buffer=5)

        AvailabilityEngine.is_available(barber, date(2024, 12, 10), '10:00', 30, 5)
    """

    @staticmethod
    def _busy_intervals(barber_ids: Iterable[UUID], target_date: date) -> Dict[UUID, List[BusyInterval]]:
        prev_date = previous_day(target_date)
        following_date = next_day(target_date)
        offsets = {
            prev_date: -MINUTES_PER_DAY,
            target_date: 0,
            following_date: MINUTES_PER_DAY,
        }

        bookings = Booking.objects.active().filter(
            barber_id__in=list(barber_ids),
            date__in=list(offsets),
        ).only('barber_id', 'date', 'start_time', 'total_duration', 'buffer_minutes')

        busy = defaultdict(list)
        for booking in bookings:
            busy[booking.barber_id].append(booking_interval(booking, offsets[booking.date]))
        return busy

    @classmethod
    def load_days(cls, barbers: Iterable, target_date: date) -> List[BarberDay]:
        """
        Build a BarberDay for each barber with a single booking query.
        Barbers should be fetched with their schedule rows prefetched.
        """
        barbers = list(barbers)
        busy = cls._busy_intervals([b.id for b in barbers], target_date)
        prev_date = previous_day(target_date)
        return [
            BarberDay(
                barber=barber,
                target_date=target_date,
                today=resolve_schedule(barber, target_date),
                yesterday=resolve_schedule(barber, prev_date),
                busy=busy.get(barber.id, []),
            )
            for barber in barbers
        ]

    @classmethod
    def load_day(cls, barber, target_date: date) -> BarberDay:
        return cls.load_days([barber], target_date)[0]

    @classmethod
    def is_available(cls, barber, target_date: date, start_time, duration: int, buffer: int = 0) -> bool:
        """
        One-shot check. ``start_time`` is "HH:mm", a ``time`` or minutes.
        """
        start = start_time if isinstance(start_time, int) else time_to_minutes(start_time)
        return cls.load_day(barber, target_date).is_free(start, duration, buffer)
