import pytest

from apps.schedules.services.schedule_resolver import Break, resolve_schedule
from tests.conftest import MONDAY, TUESDAY

pytestmark = pytest.mark.django_db


def test_default_hours_without_schedule_rows(barber):
    schedule = resolve_schedule(barber, MONDAY)

    assert schedule.is_open is True
    assert (schedule.start_minutes, schedule.end_minutes) == (600, 1200)
    assert schedule.breaks == ()
    assert not schedule.is_overnight


def test_weekly_overnight_shift_crosses_midnight(barber, make_weekly):
    make_weekly(barber, 'monday', start='22:00', end='02:00')

    schedule = resolve_schedule(barber, MONDAY)

    assert (schedule.start_minutes, schedule.end_minutes) == (1320, 1560)
    assert schedule.is_overnight
    assert schedule.spillover_end == 120


def test_special_hours_win_over_weekly(barber, make_weekly, make_special):
    make_weekly(barber, 'monday', start='09:00', end='17:00')
    make_special(barber, MONDAY, is_open=False, reason='Diwali')

    schedule = resolve_schedule(barber, MONDAY)

    assert schedule.is_open is False


def test_special_hours_carry_no_breaks(barber, make_weekly, make_special):
    make_weekly(barber, 'monday', start='09:00', end='17:00',
                breaks=[{'start_time': '13:00', 'end_time': '14:00'}])
    make_special(barber, MONDAY, start='12:00', end='18:00')

    schedule = resolve_schedule(barber, MONDAY)

    assert (schedule.start_minutes, schedule.end_minutes) == (720, 1080)
    assert schedule.breaks == ()


def test_blank_hours_fall_back_to_default(barber, make_weekly):
    make_weekly(barber, 'monday', start='', end='18:00')

    schedule = resolve_schedule(barber, MONDAY)

    assert (schedule.start_minutes, schedule.end_minutes) == (600, 1080)


def test_weekday_without_row_uses_default_hours(barber, make_weekly):
    make_weekly(barber, 'monday', start='22:00', end='02:00')

    schedule = resolve_schedule(barber, TUESDAY)

    assert schedule.is_open is True
    assert (schedule.start_minutes, schedule.end_minutes) == (600, 1200)


def test_closed_weekday(barber, make_weekly):
    make_weekly(barber, 'tuesday', is_open=False)

    assert resolve_schedule(barber, TUESDAY).is_open is False


def test_breaks_are_sorted_minutes(barber, make_weekly):
    make_weekly(barber, 'monday', start='09:00', end='19:00', breaks=[
        {'start_time': '16:00', 'end_time': '16:15'},
        {'start_time': '13:00', 'end_time': '13:45'},
    ])

    schedule = resolve_schedule(barber, MONDAY)

    assert schedule.breaks == (Break(780, 825), Break(960, 975))


def test_break_after_midnight_moves_to_next_day_part(barber, make_weekly):
    make_weekly(barber, 'monday', start='22:00', end='04:00', breaks=[
        {'start_time': '01:00', 'end_time': '01:30'},
    ])

    schedule = resolve_schedule(barber, MONDAY)

    assert schedule.breaks == (Break(1500, 1530),)


def test_as_dict(barber):
    assert resolve_schedule(barber, MONDAY).as_dict() == {
        'is_open': True,
        'start': 600,
        'end': 1200,
        'breaks': [],
    }
