"""
Shared fixtures.

Shop-local time is Asia/Kolkata (UTC+05:30). The default clock is
Monday 2024-12-09 09:00 shop time.
"""
import random
from datetime import date, datetime, time, timedelta
from decimal import Decimal

import pytest
import pytz
from django.core.cache import cache

from apps.bookings.models import Booking
from apps.core.utils.constants import (
    BOOKING_STATUS_UPCOMING,
    BOOKING_TYPE_ONLINE,
    COLLECTED_BY_BARBER,
    PAYMENT_METHOD_CASH,
    SETTLEMENT_STATUS_PENDING,
)
from apps.core.utils.time_utils import time_to_minutes, minutes_to_clock
from apps.finance.services.system_config import SystemConfigSnapshot
from apps.schedules.models import BarberWeeklySchedule, BarberSpecialHours
from apps.shops.models import Shop
from apps.staff.models import Barber

SHOP_TZ = pytz.timezone('Asia/Kolkata')

MONDAY = date(2024, 12, 9)
TUESDAY = date(2024, 12, 10)


def shop_time(day: date, hour: int, minute: int = 0) -> datetime:
    """Aware datetime for a shop-local wall clock time."""
    return SHOP_TZ.localize(datetime.combine(day, time(hour, minute)))


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def now():
    return shop_time(MONDAY, 9, 0)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def config():
    return SystemConfigSnapshot(
        admin_commission_rate=Decimal('10'),
        user_discount_rate=Decimal('5'),
        max_cash_bookings_per_month=5,
    )


@pytest.fixture
def shop(db):
    return Shop.objects.create(
        owner_id='owner_1',
        name='Fade Factory',
        address='12 MG Road',
        buffer_time=0,
        min_booking_notice=60,
        max_booking_notice=30,
        auto_approve_bookings=True,
    )


@pytest.fixture
def other_shop(db):
    return Shop.objects.create(owner_id='owner_2', name='Clip Joint')


@pytest.fixture
def make_barber(shop):
    def _make(name='Alex', start='10:00', end='20:00', target_shop=None, **kwargs):
        return Barber.objects.create(
            shop=target_shop or shop,
            name=name,
            default_start_hour=start,
            default_end_hour=end,
            **kwargs
        )
    return _make


@pytest.fixture
def barber(make_barber):
    return make_barber()


@pytest.fixture
def make_weekly():
    def _make(barber, day_of_week, start='', end='', is_open=True, breaks=None):
        return BarberWeeklySchedule.objects.create(
            barber=barber,
            day_of_week=day_of_week,
            start_hour=start,
            end_hour=end,
            is_open=is_open,
            breaks=breaks or [],
        )
    return _make


@pytest.fixture
def make_special():
    def _make(barber, day, start='', end='', is_open=True, reason=''):
        return BarberSpecialHours.objects.create(
            barber=barber,
            date=day,
            start_hour=start,
            end_hour=end,
            is_open=is_open,
            reason=reason,
        )
    return _make


@pytest.fixture
def make_booking():
    """
    Insert a booking row directly, bypassing the reservation checks.
    """
    def _make(barber, day, start='10:00', duration=30, buffer_minutes=0, **kwargs):
        start_minutes = time_to_minutes(start)
        fields = {
            'shop': barber.shop,
            'barber': barber,
            'user_id': 'customer_1',
            'service_names': ['Haircut'],
            'date': day,
            'start_time': minutes_to_clock(start_minutes),
            'end_time': minutes_to_clock(start_minutes + duration),
            'total_duration': duration,
            'buffer_minutes': buffer_minutes,
            'status': BOOKING_STATUS_UPCOMING,
            'type': BOOKING_TYPE_ONLINE,
            'payment_method': PAYMENT_METHOD_CASH,
            'booking_key': '4321',
            'original_price': Decimal('500.00'),
            'discount_amount': Decimal('0.00'),
            'final_price': Decimal('500.00'),
            'admin_commission': Decimal('50.00'),
            'admin_net_revenue': Decimal('50.00'),
            'barber_net_revenue': Decimal('450.00'),
            'amount_collected_by': COLLECTED_BY_BARBER,
            'settlement_status': SETTLEMENT_STATUS_PENDING,
        }
        fields.update(kwargs)
        return Booking.objects.create(**fields)
    return _make


@pytest.fixture
def api_client():
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def real_tomorrow():
    """Tomorrow on the real shop clock, for tests going through the HTTP layer."""
    from apps.core.utils.time_utils import shop_now
    return shop_now()[0] + timedelta(days=1)
