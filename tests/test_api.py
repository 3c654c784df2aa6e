"""
HTTP layer tests. These go through the real shop clock, so they book
for tomorrow.
"""
import uuid
from datetime import date, timedelta
from decimal import Decimal

import pytest

from apps.bookings.models import Booking
from apps.core.utils.constants import (
    BOOKING_STATUS_CHECKED_IN,
    BOOKING_STATUS_COMPLETED,
    COLLECTED_BY_ADMIN,
    SETTLEMENT_ENTRY_COMPLETED,
    SETTLEMENT_STATUS_SETTLED,
)
from apps.finance.models import SystemConfig
from apps.finance.services.system_config import get_system_config
from apps.shops.models import Shop

pytestmark = pytest.mark.django_db

LAST_MONTH = date(2024, 11, 4)


def booking_payload(shop, day, **overrides):
    payload = {
        'shop_id': str(shop.id),
        'barber_id': 'any',
        'user_id': 'customer_1',
        'date': day.isoformat(),
        'start_time': '10:00',
        'total_duration': 30,
        'original_price': '500.00',
        'service_names': ['Haircut'],
        'payment_method': 'cash',
    }
    payload.update(overrides)
    return payload


class TestShopEndpoints:

    def test_create_and_list(self, api_client):
        response = api_client.post('/api/v1/shops/', {
            'owner_id': 'owner_9',
            'name': 'Sharp Cuts',
            'address': 'Brigade Road',
            'buffer_time': 5,
        }, format='json')

        assert response.status_code == 201
        assert response.data['barbers_count'] == 0
        assert response.data['min_booking_notice'] == 60

        listing = api_client.get('/api/v1/shops/', {'owner_id': 'owner_9'})
        assert listing.status_code == 200
        assert [shop['name'] for shop in listing.data['results']] == ['Sharp Cuts']

    def test_shops_cannot_be_deleted(self, api_client, shop):
        response = api_client.delete(f'/api/v1/shops/{shop.id}/')

        assert response.status_code == 405
        assert Shop.objects.filter(pk=shop.pk).exists()

    def test_earliest_slot(self, api_client, shop, barber, real_tomorrow):
        response = api_client.get(
            f'/api/v1/shops/{shop.id}/earliest-slot/',
            {'date': real_tomorrow.isoformat(), 'duration': 45},
        )

        assert response.status_code == 200
        assert response.data['earliest_slot'] == '10:00'

    def test_earliest_slot_without_barbers(self, api_client, shop, real_tomorrow):
        response = api_client.get(f'/api/v1/shops/{shop.id}/earliest-slot/', {'date': real_tomorrow.isoformat()})

        assert response.status_code == 200
        assert response.data['earliest_slot'] is None

    @pytest.mark.parametrize('duration', ['long', '-30', '0', '481'])
    def test_earliest_slot_invalid_duration(self, api_client, shop, duration):
        response = api_client.get(f'/api/v1/shops/{shop.id}/earliest-slot/', {'duration': duration})

        assert response.status_code == 400
        assert response.data['message'] == 'Invalid duration.'


class TestStaffEndpoints:

    def test_create_barber(self, api_client, shop):
        response = api_client.post('/api/v1/staff/', {
            'shop': str(shop.id),
            'name': 'Chris',
            'default_start_hour': '09:00',
            'default_end_hour': '18:00',
        }, format='json')

        assert response.status_code == 201
        assert response.data['shop_name'] == shop.name
        assert response.data['is_available'] is True

    def test_rejects_malformed_hours(self, api_client, shop):
        response = api_client.post('/api/v1/staff/', {
            'shop': str(shop.id),
            'name': 'Chris',
            'default_start_hour': '25:00',
        }, format='json')

        assert response.status_code == 400
        assert 'default_start_hour' in response.data['errors']

    def test_toggle_duty(self, api_client, barber):
        response = api_client.post(f'/api/v1/staff/{barber.id}/availability/', {'is_available': False}, format='json')

        assert response.status_code == 200
        barber.refresh_from_db()
        assert barber.is_available is False

    def test_filter_by_shop(self, api_client, shop, other_shop, make_barber):
        make_barber(name='Alex')
        make_barber(name='Stranger', target_shop=other_shop)

        response = api_client.get('/api/v1/staff/', {'shop_id': str(shop.id)})

        assert [b['name'] for b in response.data['results']] == ['Alex']


class TestScheduleEndpoints:

    def test_weekly_schedule_with_breaks(self, api_client, barber):
        response = api_client.post('/api/v1/schedules/weekly/', {
            'barber': str(barber.id),
            'day_of_week': 'monday',
            'is_open': True,
            'start_hour': '09:00',
            'end_hour': '17:00',
            'breaks': [{'start_time': '13:00', 'end_time': '14:00'}],
        }, format='json')

        assert response.status_code == 201
        assert response.data['breaks'] == [{'start_time': '13:00', 'end_time': '14:00'}]

    def test_weekly_schedule_rejects_bad_breaks(self, api_client, barber):
        response = api_client.post('/api/v1/schedules/weekly/', {
            'barber': str(barber.id),
            'day_of_week': 'monday',
            'breaks': [{'start_time': '13:00'}],
        }, format='json')

        assert response.status_code == 400
        assert 'breaks' in response.data['errors']

    def test_special_hours_date_range(self, api_client, barber, make_special):
        make_special(barber, date(2024, 12, 24), is_open=False, reason='Holiday')
        make_special(barber, date(2025, 1, 1), is_open=False)

        response = api_client.get('/api/v1/schedules/special-hours/', {
            'start_date': '2024-12-01',
            'end_date': '2024-12-31',
        })

        assert [entry['reason'] for entry in response.data['results']] == ['Holiday']

    def test_resolve_overnight(self, api_client, barber, make_weekly):
        make_weekly(barber, 'monday', start='22:00', end='02:00')

        response = api_client.get(f'/api/v1/schedules/barbers/{barber.id}/resolve/', {'date': '2024-12-09'})

        assert response.status_code == 200
        assert response.data['is_open'] is True
        assert response.data['start'] == 1320
        assert response.data['end'] == 1560

    def test_resolve_requires_date(self, api_client, barber):
        response = api_client.get(f'/api/v1/schedules/barbers/{barber.id}/resolve/')

        assert response.status_code == 400
        assert response.data['message'] == 'Query parameter "date" is required.'

    def test_resolve_unknown_barber(self, api_client):
        response = api_client.get(f'/api/v1/schedules/barbers/{uuid.uuid4()}/resolve/', {'date': '2024-12-09'})

        assert response.status_code == 404
        assert response.data['code'] == 'not_found'

    def test_slots(self, api_client, shop, make_barber, make_booking, real_tomorrow):
        barber = make_barber(start='10:00', end='11:00')
        make_booking(barber, real_tomorrow, start='10:00', duration=30)

        response = api_client.post('/api/v1/schedules/slots/', {
            'shop_id': str(shop.id),
            'date': real_tomorrow.isoformat(),
            'duration': 30,
            'barber_id': 'any',
        }, format='json')

        assert response.status_code == 200
        assert response.data['duration'] == 30
        assert response.data['slots'] == ['10:30']

    def test_slots_for_disabled_shop(self, api_client, shop, barber, real_tomorrow):
        shop.is_disabled = True
        shop.save()

        response = api_client.post('/api/v1/schedules/slots/', {
            'shop_id': str(shop.id),
            'date': real_tomorrow.isoformat(),
        }, format='json')

        assert response.status_code == 404

    def test_slots_reject_bad_duration(self, api_client, shop, real_tomorrow):
        response = api_client.post('/api/v1/schedules/slots/', {
            'shop_id': str(shop.id),
            'date': real_tomorrow.isoformat(),
            'duration': 0,
        }, format='json')

        assert response.status_code == 400
        assert 'duration' in response.data['errors']


class TestBookingEndpoints:

    def test_create(self, api_client, shop, barber, real_tomorrow):
        response = api_client.post('/api/v1/bookings/', booking_payload(shop, real_tomorrow), format='json')

        assert response.status_code == 201
        assert response.data['barber'] == barber.id
        assert response.data['status'] == 'upcoming'
        assert response.data['start_time'] == '10:00'
        assert response.data['end_time'] == '10:30'
        assert len(response.data['booking_key']) == 4

    def test_conflict(self, api_client, shop, barber, make_booking, real_tomorrow):
        make_booking(barber, real_tomorrow, start='10:00')

        response = api_client.post(
            '/api/v1/bookings/',
            booking_payload(shop, real_tomorrow, barber_id=str(barber.id)),
            format='json',
        )

        assert response.status_code == 409
        assert response.data['error'] is True
        assert response.data['message'] == 'Barber unavailable.'
        assert response.data['code'] == 'conflict'

    def test_validation_error_shape(self, api_client, shop, barber, real_tomorrow):
        response = api_client.post(
            '/api/v1/bookings/',
            booking_payload(shop, real_tomorrow, original_price='free'),
            format='json',
        )

        assert response.status_code == 400
        assert response.data['message'] == 'Invalid total price.'
        assert response.data['code'] == 'validation_error'
        assert Booking.objects.count() == 0

    def test_list_customer_history(self, api_client, barber, make_booking, real_tomorrow):
        make_booking(barber, real_tomorrow, start='10:00')
        make_booking(barber, real_tomorrow, start='11:00', user_id='someone_else')

        response = api_client.get('/api/v1/bookings/', {'user_id': 'customer_1'})

        assert response.status_code == 200
        assert response.data['count'] == 1
        assert response.data['results'][0]['user_id'] == 'customer_1'

    def test_shop_bookings_for_a_date(self, api_client, shop, barber, make_booking, real_tomorrow):
        make_booking(barber, real_tomorrow, start='11:00')
        make_booking(barber, real_tomorrow, start='10:00')
        make_booking(barber, real_tomorrow, start='12:00', status='cancelled')
        make_booking(barber, real_tomorrow + timedelta(days=1), start='10:00')

        response = api_client.get(f'/api/v1/bookings/shop/{shop.id}/', {'date': real_tomorrow.isoformat()})

        assert response.status_code == 200
        assert [b['start_time'] for b in response.data] == ['10:00', '11:00']

    def test_shop_bookings_for_a_range(self, api_client, shop, barber, make_booking, real_tomorrow):
        make_booking(barber, real_tomorrow, start='10:00')
        make_booking(barber, real_tomorrow + timedelta(days=1), start='10:00')
        make_booking(barber, real_tomorrow + timedelta(days=5), start='10:00')

        response = api_client.get(f'/api/v1/bookings/shop/{shop.id}/', {
            'start_date': real_tomorrow.isoformat(),
            'end_date': (real_tomorrow + timedelta(days=1)).isoformat(),
        })

        assert len(response.data) == 2

    def test_shop_bookings_half_open_range(self, api_client, shop):
        response = api_client.get(f'/api/v1/bookings/shop/{shop.id}/', {'start_date': '2024-12-01'})

        assert response.status_code == 400

    def test_shop_bookings_unknown_shop(self, api_client):
        response = api_client.get(f'/api/v1/bookings/shop/{uuid.uuid4()}/')

        assert response.status_code == 404

    def test_check_in_flow(self, api_client, barber, make_booking, real_tomorrow):
        booking = make_booking(barber, real_tomorrow, booking_key='4321')
        url = f'/api/v1/bookings/{booking.id}/status/'

        wrong = api_client.post(url, {'status': 'checked-in', 'pin': '0000'}, format='json')
        missing = api_client.post(url, {'status': 'checked-in'}, format='json')
        right = api_client.post(url, {'status': 'checked-in', 'pin': '4321'}, format='json')

        assert wrong.status_code == 403
        assert missing.status_code == 400
        assert right.status_code == 200
        assert right.data['status'] == BOOKING_STATUS_CHECKED_IN

    def test_disallowed_transition(self, api_client, barber, make_booking, real_tomorrow):
        booking = make_booking(barber, real_tomorrow, status=BOOKING_STATUS_COMPLETED)

        response = api_client.post(f'/api/v1/bookings/{booking.id}/status/', {'status': 'cancelled'}, format='json')

        assert response.status_code == 400
        assert response.data['code'] == 'invalid_state'

    def test_unknown_status_value(self, api_client, barber, make_booking, real_tomorrow):
        booking = make_booking(barber, real_tomorrow)

        response = api_client.post(f'/api/v1/bookings/{booking.id}/status/', {'status': 'archived'}, format='json')

        assert response.status_code == 400


class TestFinanceEndpoints:

    def test_system_config_defaults(self, api_client):
        response = api_client.get('/api/v1/finance/system-config/')

        assert response.status_code == 200
        assert Decimal(response.data['admin_commission_rate']) == Decimal('10')
        assert response.data['max_cash_bookings_per_month'] == 5
        assert SystemConfig.objects.count() == 1

    def test_system_config_update_applies_to_new_bookings(self, api_client):
        assert get_system_config().user_discount_rate == Decimal('0')

        response = api_client.patch('/api/v1/finance/system-config/', {'user_discount_rate': '5.00'}, format='json')

        assert response.status_code == 200
        assert get_system_config().user_discount_rate == Decimal('5.00')

    def test_system_config_rejects_rates_above_100(self, api_client):
        response = api_client.patch('/api/v1/finance/system-config/', {'admin_commission_rate': '120'}, format='json')

        assert response.status_code == 400

    def test_settlement_workflow(self, api_client, shop, barber, make_booking):
        booking = make_booking(
            barber, LAST_MONTH,
            status=BOOKING_STATUS_COMPLETED,
            payment_method='online',
            amount_collected_by=COLLECTED_BY_ADMIN,
        )

        preview = api_client.get('/api/v1/finance/settlements/preview/', {'cutoff_date': '2024-12-09'})
        assert preview.status_code == 200
        assert preview.data['shop_count'] == 1
        assert preview.data['shops'][0]['balance']['net'] == '450.00'

        pending = api_client.get(f'/api/v1/finance/shops/{shop.id}/pending/')
        assert [b['id'] for b in pending.data] == [str(booking.id)]

        commit = api_client.post('/api/v1/finance/settlements/commit/', {
            'shop_id': str(shop.id),
            'admin_id': 'admin_1',
        }, format='json')
        assert commit.status_code == 201
        assert commit.data['type'] == 'PAYOUT'
        assert commit.data['amount'] == '450.00'
        settlement_id = commit.data['id']

        again = api_client.post('/api/v1/finance/settlements/commit/', {'shop_id': str(shop.id)}, format='json')
        assert again.status_code == 400
        assert again.data['code'] == 'invalid_state'

        detail = api_client.get(f'/api/v1/finance/settlements/{settlement_id}/')
        assert [b['id'] for b in detail.data['bookings']] == [str(booking.id)]

        confirm = api_client.post(
            f'/api/v1/finance/settlements/{settlement_id}/confirm/',
            {'transaction_id': 'UTR123'},
            format='json',
        )
        assert confirm.status_code == 200
        assert confirm.data['status'] == SETTLEMENT_ENTRY_COMPLETED

        booking.refresh_from_db()
        assert booking.settlement_status == SETTLEMENT_STATUS_SETTLED

    def test_shop_summary(self, api_client, shop, barber, make_booking):
        make_booking(barber, LAST_MONTH, status=BOOKING_STATUS_COMPLETED)

        response = api_client.get(f'/api/v1/finance/shops/{shop.id}/summary/')

        assert response.status_code == 200
        assert response.data['total_earnings'] == '450.00'
        assert response.data['current_balance'] == '-50.00'
        assert response.data['pending_dues'] == '50.00'
        assert response.data['recent_settlements'] == []

    def test_summary_unknown_shop(self, api_client):
        response = api_client.get(f'/api/v1/finance/shops/{uuid.uuid4()}/summary/')

        assert response.status_code == 404
