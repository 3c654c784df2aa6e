"""
Shop serializers
"""
from rest_framework import serializers
from .models import Shop


class ShopSerializer(serializers.ModelSerializer):
    """Shop with its booking policy"""
    barbers_count = serializers.IntegerField(source='barbers.count', read_only=True)

    class Meta:
        model = Shop
        fields = [
            'id', 'owner_id', 'name', 'address',
            'buffer_time', 'min_booking_notice', 'max_booking_notice',
            'auto_approve_bookings', 'block_custom_bookings', 'is_disabled',
            'barbers_count', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class EarliestSlotResponseSerializer(serializers.Serializer):
    """Earliest bookable start time of a shop on a date"""
    shop_id = serializers.UUIDField()
    date = serializers.DateField()
    earliest_slot = serializers.CharField(allow_null=True, help_text='"HH:mm", null when fully booked')
