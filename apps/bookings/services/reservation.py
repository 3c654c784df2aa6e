"""
Booking reservation: turns a slot choice into a persisted Booking.

Pre-checks run in a fixed order, each with its own message:
required fields, price, shop, timing policy, user id, monthly cash cap.
The availability re-check and the insert then happen inside one
transaction holding a row lock on the barber, so two concurrent attempts
on the same barber are serialised and the loser gets a ConflictError.
"""
import logging
import random
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional

from django.db import IntegrityError, transaction

from apps.bookings.models import Booking
from apps.core.exceptions import ValidationError, ConflictError, NotFoundError
from apps.core.utils.constants import (
    BOOKING_GRACE_PERIOD_MINUTES,
    BOOKING_STATUS_BLOCKED,
    BOOKING_STATUS_PENDING,
    BOOKING_STATUS_UPCOMING,
    BOOKING_TYPES,
    BOOKING_TYPE_BLOCKED,
    BOOKING_TYPE_ONLINE,
    BOOKING_TYPE_WALK_IN,
    MAX_BOOKING_PRICE,
    PAYMENT_METHOD_CASH,
    SETTLEMENT_STATUS_PENDING,
)
from apps.core.utils.helpers import generate_booking_key, get_object_or_error
from apps.core.utils.time_utils import (
    minutes_to_clock,
    month_bounds,
    parse_date,
    shop_now,
    time_to_minutes,
)
from apps.finance.services.financial_split import calculate_split, resolve_collector
from apps.finance.services.system_config import SystemConfigSnapshot, get_system_config
from apps.schedules.services.availability import AvailabilityEngine
from apps.schedules.services.slot_generator import ANY_BARBER, candidate_barbers
from apps.shops.models import Shop
from apps.staff.models import Barber

logger = logging.getLogger(__name__)

SPECIAL_TYPES = {BOOKING_TYPE_WALK_IN, BOOKING_TYPE_BLOCKED}


def is_cash(payment_method) -> bool:
    return str(payment_method or '').lower() == PAYMENT_METHOD_CASH


class BookingReservationService:
    """
    Write path for new bookings.

    Args:
        config: SystemConfig snapshot to price with; read once per call when omitted
        rng: random source used for "any barber" selection and the PIN
        now: aware datetime standing in for the wall clock
    """

    def __init__(
        self,
        config: Optional[SystemConfigSnapshot] = None,
        rng: Optional[random.Random] = None,
        now: Optional[datetime] = None
    ):
        self.config = config
        self.rng = rng or random.Random()
        self.now = now

    def reserve(
        self,
        shop_id,
        date,
        start_time,
        duration,
        original_price,
        barber_id=None,
        user_id=None,
        service_names: Optional[Iterable[str]] = None,
        payment_method: Optional[str] = None,
        booking_type: Optional[str] = None,
        notes: str = ''
    ) -> Booking:
        """
        Validate, assign a barber and persist a booking.

        Raises:
            ValidationError, NotFoundError, ConflictError
        """
        # Snapshot once so the whole calculation uses one set of rates
        config = self.config or get_system_config()
        booking_type = booking_type or BOOKING_TYPE_ONLINE
        payment_method = payment_method or PAYMENT_METHOD_CASH

        # (a) required fields
        if not shop_id or not date or not start_time or not duration:
            raise ValidationError('Missing required booking details.')
        if booking_type not in dict(BOOKING_TYPES):
            raise ValidationError(f'Invalid booking type "{booking_type}".')
        target_date = parse_date(date)
        start = time_to_minutes(start_time)
        duration = self._parse_duration(duration)

        # (b) price
        price = self._parse_price(original_price)

        # (c) shop
        shop = get_object_or_error(Shop.objects.all(), shop_id, 'Shop not found')
        if shop.is_disabled:
            raise NotFoundError('Shop not found')

        # (d) timing policy
        if booking_type not in SPECIAL_TYPES:
            self._check_timing(shop, target_date, start)

        # (e) online bookings belong to a customer
        if not user_id and booking_type not in SPECIAL_TYPES:
            raise ValidationError('User ID required for online bookings.')

        # (f) monthly cash cap
        if user_id and is_cash(payment_method):
            self._check_cash_cap(user_id, target_date, config)

        split = calculate_split(price, config.admin_commission_rate, config.user_discount_rate)
        fields = {
            'shop': shop,
            'user_id': user_id or '',
            'service_names': list(service_names or []),
            'date': target_date,
            'start_time': minutes_to_clock(start),
            'end_time': minutes_to_clock(start + duration),
            'total_duration': duration,
            'buffer_minutes': shop.buffer_time or 0,
            'status': self._initial_status(shop, booking_type),
            'type': booking_type,
            'payment_method': payment_method,
            'notes': notes or '',
            'amount_collected_by': resolve_collector(payment_method),
            'settlement_status': SETTLEMENT_STATUS_PENDING,
            'booking_key': generate_booking_key(self.rng),
            **split.as_dict(),
        }

        specific = bool(barber_id) and str(barber_id) != ANY_BARBER
        barbers = candidate_barbers(shop, barber_id)
        if specific:
            booking = self._reserve_first(barbers, target_date, start, duration, fields)
            if booking is None:
                raise ConflictError('Barber unavailable.')
        else:
            available = self._available_barbers(barbers, shop, target_date, start, duration)
            # Uniform pick; the rest of the shuffled list is the fail-over order
            self.rng.shuffle(available)
            booking = self._reserve_first(available, target_date, start, duration, fields)
            if booking is None:
                raise ConflictError('Slot no longer available.')

        logger.info(
            f"Reserved booking {booking.id} for barber {booking.barber_id} "
            f"on {booking.date} at {booking.start_time:%H:%M} ({booking.status})"
        )
        return booking

    def _parse_duration(self, duration) -> int:
        try:
            value = int(duration)
        except (TypeError, ValueError):
            raise ValidationError('Invalid duration.')
        if value <= 0:
            raise ValidationError('Invalid duration.')
        return value

    def _parse_price(self, original_price) -> Decimal:
        if original_price is None or isinstance(original_price, bool):
            raise ValidationError('Invalid total price.')
        try:
            price = Decimal(str(original_price))
        except (InvalidOperation, ValueError):
            raise ValidationError('Invalid total price.')
        if not price.is_finite() or price < 0 or price > MAX_BOOKING_PRICE:
            raise ValidationError('Invalid total price.')
        return price

    def _check_timing(self, shop: Shop, target_date: date, start: int) -> None:
        today, now_minutes = shop_now(self.now)

        if target_date < today:
            raise ValidationError('Cannot book for a past date.')

        max_notice = shop.max_booking_notice
        if target_date > today + timedelta(days=max_notice):
            raise ValidationError(f'Cannot book more than {max_notice} days in advance.')

        if target_date == today:
            # Grace period absorbs the time spent filling in the form
            min_notice = shop.min_booking_notice or 0
            if start < now_minutes - BOOKING_GRACE_PERIOD_MINUTES:
                raise ValidationError('Cannot book for a past time.')
            if start < now_minutes + min_notice - BOOKING_GRACE_PERIOD_MINUTES:
                raise ValidationError(f'Must book at least {min_notice} minutes in advance.')

    def _check_cash_cap(self, user_id, target_date: date, config: SystemConfigSnapshot) -> None:
        # Counted in the month of the booking, not the current month
        month_start, month_end = month_bounds(target_date)
        cash_count = Booking.objects.active().filter(
            user_id=user_id,
            payment_method__iexact=PAYMENT_METHOD_CASH,
            date__range=(month_start, month_end),
        ).count()

        max_cash = config.max_cash_bookings_per_month
        if cash_count >= max_cash:
            raise ValidationError(
                f'You have reached the limit of {max_cash} cash bookings per month. Please pay online.'
            )

    def _initial_status(self, shop: Shop, booking_type: str) -> str:
        if booking_type == BOOKING_TYPE_BLOCKED:
            return BOOKING_STATUS_BLOCKED
        if not shop.auto_approve_bookings and booking_type != BOOKING_TYPE_WALK_IN:
            return BOOKING_STATUS_PENDING
        return BOOKING_STATUS_UPCOMING

    def _available_barbers(self, barbers, shop, target_date, start, duration) -> List[Barber]:
        buffer = shop.buffer_time or 0
        return [
            day.barber
            for day in AvailabilityEngine.load_days(barbers, target_date)
            if day.is_free(start, duration, buffer)
        ]

    def _reserve_first(self, barbers, target_date, start, duration, fields) -> Optional[Booking]:
        for barber in barbers:
            booking = self._reserve_with(barber, target_date, start, duration, fields)
            if booking is not None:
                return booking
        return None

    def _reserve_with(self, barber, target_date, start, duration, fields) -> Optional[Booking]:
        """
        Lock the barber, re-check availability and insert. None means the
        barber is not free (or lost a race to a concurrent reservation).
        """
        try:
            with transaction.atomic():
                locked = Barber.objects.select_for_update().get(pk=barber.pk)
                day = AvailabilityEngine.load_day(locked, target_date)
                if not day.is_free(start, duration, fields['buffer_minutes']):
                    logger.warning(
                        f"Barber {barber.pk} not free on {target_date} at minute {start}"
                    )
                    return None
                return Booking.objects.create(barber=locked, **fields)
        except IntegrityError:
            logger.warning(f"Concurrent booking won the slot for barber {barber.pk} on {target_date}")
            return None
