import uuid
from datetime import date

import pytest

from apps.bookings.models import Booking
from apps.bookings.services.status import can_transition, mark_missed_bookings, transition_status
from apps.bookings.tasks import close_missed_bookings
from apps.core.exceptions import AuthorizationError, NotFoundError, StateError, ValidationError
from apps.core.utils.constants import (
    BOOKING_STATUS_BLOCKED,
    BOOKING_STATUS_CANCELLED,
    BOOKING_STATUS_CHECKED_IN,
    BOOKING_STATUS_COMPLETED,
    BOOKING_STATUS_NO_SHOW,
    BOOKING_STATUS_PENDING,
    BOOKING_STATUS_UPCOMING,
)
from tests.conftest import MONDAY, TUESDAY, shop_time

pytestmark = pytest.mark.django_db


@pytest.mark.parametrize('current, new_status, allowed', [
    ('pending', 'upcoming', True),
    ('pending', 'cancelled', True),
    ('pending', 'checked-in', False),
    ('upcoming', 'checked-in', True),
    ('upcoming', 'cancelled', True),
    ('upcoming', 'no-show', True),
    ('upcoming', 'completed', False),
    ('checked-in', 'completed', True),
    ('checked-in', 'cancelled', False),
    ('blocked', 'cancelled', True),
    ('blocked', 'upcoming', False),
    ('completed', 'cancelled', False),
    ('cancelled', 'upcoming', False),
    ('no-show', 'upcoming', False),
])
def test_can_transition(current, new_status, allowed):
    assert can_transition(current, new_status) is allowed


def test_approve_pending(barber, make_booking):
    booking = make_booking(barber, TUESDAY, status=BOOKING_STATUS_PENDING)

    updated = transition_status(booking.id, BOOKING_STATUS_UPCOMING)

    assert updated.status == BOOKING_STATUS_UPCOMING
    booking.refresh_from_db()
    assert booking.status == BOOKING_STATUS_UPCOMING


def test_check_in_with_pin_then_complete(barber, make_booking):
    booking = make_booking(barber, TUESDAY, booking_key='4321')

    transition_status(booking.id, BOOKING_STATUS_CHECKED_IN, pin='4321')
    transition_status(booking.id, BOOKING_STATUS_COMPLETED)

    booking.refresh_from_db()
    assert booking.status == BOOKING_STATUS_COMPLETED


def test_check_in_pin_tolerates_whitespace(barber, make_booking):
    booking = make_booking(barber, TUESDAY, booking_key='4321')

    assert transition_status(booking.id, BOOKING_STATUS_CHECKED_IN, pin=' 4321 ').status == BOOKING_STATUS_CHECKED_IN


def test_check_in_requires_pin(barber, make_booking):
    booking = make_booking(barber, TUESDAY)

    with pytest.raises(ValidationError, match='Customer PIN required'):
        transition_status(booking.id, BOOKING_STATUS_CHECKED_IN)


def test_check_in_wrong_pin(barber, make_booking):
    booking = make_booking(barber, TUESDAY, booking_key='4321')

    with pytest.raises(AuthorizationError, match='Invalid PIN'):
        transition_status(booking.id, BOOKING_STATUS_CHECKED_IN, pin='1234')

    booking.refresh_from_db()
    assert booking.status == BOOKING_STATUS_UPCOMING


def test_disallowed_transition(barber, make_booking):
    booking = make_booking(barber, TUESDAY, status=BOOKING_STATUS_COMPLETED)

    with pytest.raises(StateError):
        transition_status(booking.id, BOOKING_STATUS_CANCELLED)

    booking.refresh_from_db()
    assert booking.status == BOOKING_STATUS_COMPLETED


def test_terminal_cancelled(barber, make_booking):
    booking = make_booking(barber, TUESDAY, status=BOOKING_STATUS_CANCELLED)

    with pytest.raises(StateError):
        transition_status(booking.id, BOOKING_STATUS_UPCOMING)


def test_release_blocked_time(barber, make_booking):
    booking = make_booking(barber, TUESDAY, status=BOOKING_STATUS_BLOCKED, type='blocked')

    assert transition_status(booking.id, BOOKING_STATUS_CANCELLED).status == BOOKING_STATUS_CANCELLED


def test_unknown_status(barber, make_booking):
    booking = make_booking(barber, TUESDAY)

    with pytest.raises(ValidationError, match='Unknown status'):
        transition_status(booking.id, 'archived')


def test_unknown_booking():
    with pytest.raises(NotFoundError):
        transition_status(uuid.uuid4(), BOOKING_STATUS_CANCELLED)


class TestMarkMissedBookings:

    def test_closes_past_bookings(self, barber, make_booking, now):
        sunday = date(2024, 12, 8)
        no_show = make_booking(barber, sunday, start='10:00')
        unapproved = make_booking(barber, sunday, start='11:00', status=BOOKING_STATUS_PENDING)
        checked_in = make_booking(barber, sunday, start='12:00', status=BOOKING_STATUS_CHECKED_IN)

        assert mark_missed_bookings(now) == 2

        for booking in (no_show, unapproved, checked_in):
            booking.refresh_from_db()
        assert no_show.status == BOOKING_STATUS_NO_SHOW
        assert unapproved.status == BOOKING_STATUS_CANCELLED
        assert checked_in.status == BOOKING_STATUS_CHECKED_IN

    def test_today_only_once_ended(self, make_barber, make_booking):
        barber = make_barber(start='07:00', end='20:00')
        ended = make_booking(barber, MONDAY, start='08:00', duration=30)
        running = make_booking(barber, MONDAY, start='08:45', duration=30)

        assert mark_missed_bookings(shop_time(MONDAY, 9, 0)) == 1

        ended.refresh_from_db()
        running.refresh_from_db()
        assert ended.status == BOOKING_STATUS_NO_SHOW
        assert running.status == BOOKING_STATUS_UPCOMING

    def test_overnight_booking_closed_after_its_end(self, barber, make_booking):
        booking = make_booking(barber, MONDAY, start='23:45', duration=60)

        assert mark_missed_bookings(shop_time(TUESDAY, 0, 5)) == 0
        booking.refresh_from_db()
        assert booking.status == BOOKING_STATUS_UPCOMING

        assert mark_missed_bookings(shop_time(TUESDAY, 0, 45)) == 1
        booking.refresh_from_db()
        assert booking.status == BOOKING_STATUS_NO_SHOW

    def test_ends_exactly_now(self, make_barber, make_booking):
        barber = make_barber(start='07:00', end='20:00')
        booking = make_booking(barber, MONDAY, start='08:30', duration=30)

        assert mark_missed_bookings(shop_time(MONDAY, 9, 0)) == 1

        booking.refresh_from_db()
        assert booking.status == BOOKING_STATUS_NO_SHOW

    def test_future_bookings_untouched(self, barber, make_booking, now):
        booking = make_booking(barber, TUESDAY)

        assert mark_missed_bookings(now) == 0

        booking.refresh_from_db()
        assert booking.status == BOOKING_STATUS_UPCOMING


def test_close_missed_bookings_task(barber, make_booking):
    booking = make_booking(barber, date(2020, 1, 6))

    assert close_missed_bookings.apply().get() == 1

    assert Booking.objects.get(pk=booking.pk).status == BOOKING_STATUS_NO_SHOW
