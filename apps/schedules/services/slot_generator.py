"""
Bookable slot listing for a shop.

Walks the union of the candidate barbers' working windows on a 15-minute
grid. A grid point is offered when any candidate barber is free for the
service duration plus the shop buffer. When a grid point is blocked, the
next 14 one-minute offsets are probed and the first free one is offered
instead ("recovery slot"), so a short buffer does not hide a whole block.
"""
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional

from apps.core.utils.helpers import get_object_or_error
from apps.core.utils.constants import (
    MINUTES_PER_DAY,
    SLOT_GRID_MINUTES,
    RECOVERY_PROBE_MINUTES,
    DEFAULT_SERVICE_DURATION,
)
from apps.core.utils.time_utils import minutes_to_time, shop_now
from apps.schedules.services.availability import AvailabilityEngine, BarberDay
from apps.staff.models import Barber

logger = logging.getLogger(__name__)

ANY_BARBER = 'any'


def candidate_barbers(shop, barber_id=None):
    """
    Barbers to consider for a shop: the requested one, or every on-duty
    barber when ``barber_id`` is empty or "any".
    """
    queryset = Barber.objects.filter(shop=shop).prefetch_related('weekly_schedules', 'special_hours')
    if barber_id and str(barber_id) != ANY_BARBER:
        return [get_object_or_error(queryset, barber_id, 'Barber not found')]
    return list(queryset.filter(is_available=True))


class SlotGenerator:
    """
    Example usage:
        generator = SlotGenerator(shop, date(2024, 12, 10), duration=45)
        generator.get_available_slots()   # ['10:00', '10:15', '10:32', ...]
    """

    def __init__(
        self,
        shop,
        target_date: date,
        duration: Optional[int] = None,
        barber_id=None,
        now: Optional[datetime] = None
    ):
        self.shop = shop
        self.target_date = target_date
        self.duration = duration or DEFAULT_SERVICE_DURATION
        self.barber_id = barber_id
        self.now = now
        self._days: Optional[List[BarberDay]] = None

    @property
    def buffer(self) -> int:
        return self.shop.buffer_time or 0

    @property
    def barber_days(self) -> List[BarberDay]:
        if self._days is None:
            barbers = candidate_barbers(self.shop, self.barber_id)
            self._days = AvailabilityEngine.load_days(barbers, self.target_date)
        return self._days

    def _window(self):
        """
        Union of the candidates' open windows on the target date, or None.
        """
        min_start = MINUTES_PER_DAY
        max_end = 0
        for day in self.barber_days:
            if day.today.is_open:
                min_start = min(min_start, day.today.start_minutes)
                max_end = max(max_end, day.today.end_minutes)
            if day.yesterday.is_open and day.yesterday.is_overnight:
                # Yesterday's shift runs from 00:00 today
                min_start = 0
                max_end = max(max_end, day.yesterday.spillover_end)
        if max_end == 0 or min_start >= max_end:
            return None
        return min_start, max_end

    def _earliest_allowed(self) -> Optional[int]:
        """Minute before which nothing may be offered today, None on later dates."""
        today, current_minutes = shop_now(self.now)
        if self.target_date == today:
            return current_minutes + (self.shop.min_booking_notice or 0)
        return None

    def _is_bookable(self, minute: int) -> bool:
        return any(day.is_free(minute, self.duration, self.buffer) for day in self.barber_days)

    def get_available_slots(self) -> List[str]:
        """
        Ordered, de-duplicated list of "HH:mm" start times. An empty list
        is a normal answer.
        """
        today, _ = shop_now(self.now)
        if self.target_date < today:
            return []
        if self.target_date > today + timedelta(days=self.shop.max_booking_notice):
            return []

        window = self._window()
        if window is None:
            return []
        min_start, max_end = window
        earliest = self._earliest_allowed()

        def allowed(minute: int) -> bool:
            return earliest is None or minute >= earliest

        slots = []
        current = min_start
        # Minutes past 1440 belong to the next date and are listed there
        while current < MINUTES_PER_DAY and current + self.duration <= max_end:
            if allowed(current) and self._is_bookable(current):
                slots.append(current)
            else:
                for offset in range(1, RECOVERY_PROBE_MINUTES + 1):
                    recovery = current + offset
                    if recovery >= MINUTES_PER_DAY or recovery + self.duration > max_end:
                        break
                    if allowed(recovery) and self._is_bookable(recovery):
                        slots.append(recovery)
                        break
            current += SLOT_GRID_MINUTES

        logger.debug(f"Generated {len(slots)} slots for shop {self.shop.id} on {self.target_date}")
        return [minutes_to_time(minute) for minute in slots]

    def earliest_slot(self) -> Optional[str]:
        """First offerable start time, used for the home-screen hint."""
        slots = self.get_available_slots()
        return slots[0] if slots else None
