"""
Booking serializers
"""
from rest_framework import serializers

from apps.core.utils.constants import BOOKING_STATUSES, BOOKING_TYPES
from .models import Booking


class BookingSerializer(serializers.ModelSerializer):
    """Detailed booking serializer for output"""
    shop_name = serializers.CharField(source='shop.name', read_only=True)
    barber_name = serializers.CharField(source='barber.name', read_only=True)
    start_time = serializers.TimeField(format='%H:%M', read_only=True)
    end_time = serializers.TimeField(format='%H:%M', read_only=True)

    class Meta:
        model = Booking
        fields = [
            'id', 'shop', 'shop_name', 'barber', 'barber_name', 'user_id',
            'service_names', 'date', 'start_time', 'end_time',
            'total_duration', 'buffer_minutes', 'status', 'type',
            'payment_method', 'booking_key', 'is_rated', 'notes',
            'original_price', 'discount_amount', 'final_price',
            'admin_commission', 'admin_net_revenue', 'barber_net_revenue',
            'amount_collected_by', 'settlement_status', 'settlement',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields


class BookingListSerializer(serializers.ModelSerializer):
    """Simplified booking serializer for lists"""
    shop_name = serializers.CharField(source='shop.name', read_only=True)
    barber_name = serializers.CharField(source='barber.name', read_only=True)
    start_time = serializers.TimeField(format='%H:%M', read_only=True)
    end_time = serializers.TimeField(format='%H:%M', read_only=True)

    class Meta:
        model = Booking
        fields = [
            'id', 'shop', 'shop_name', 'barber', 'barber_name', 'user_id',
            'service_names', 'date', 'start_time', 'end_time', 'status',
            'type', 'payment_method', 'final_price', 'created_at'
        ]


class BookingCreateSerializer(serializers.Serializer):
    """
    Input serializer for creating bookings.

    Fields are deliberately loose: the reservation service performs the
    business checks in a fixed order and reports the first failure.
    """
    shop_id = serializers.CharField(required=False, allow_blank=True)
    barber_id = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        help_text='Barber UUID, or "any" to let the system pick'
    )
    user_id = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=64)
    date = serializers.CharField(required=False, allow_blank=True, help_text='YYYY-MM-DD')
    start_time = serializers.CharField(required=False, allow_blank=True, help_text='HH:mm')
    total_duration = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    original_price = serializers.CharField(required=False, allow_null=True)
    service_names = serializers.ListField(child=serializers.CharField(), required=False)
    payment_method = serializers.CharField(required=False, allow_blank=True, max_length=20)
    type = serializers.ChoiceField(choices=BOOKING_TYPES, required=False)
    notes = serializers.CharField(required=False, allow_blank=True, max_length=500)


class BookingStatusSerializer(serializers.Serializer):
    """Input serializer for status transitions"""
    status = serializers.ChoiceField(choices=BOOKING_STATUSES)
    pin = serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=4,
        help_text='Customer check-in PIN, required for checked-in'
    )
