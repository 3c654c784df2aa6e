"""
Barber schedule and slot serializers
"""
from rest_framework import serializers

from apps.core.validators import validate_hhmm, validate_breaks, validate_duration
from .models import BarberWeeklySchedule, BarberSpecialHours


class BarberWeeklyScheduleSerializer(serializers.ModelSerializer):
    """
    Recurring hours for one weekday. An ``end_hour`` earlier than
    ``start_hour`` is an overnight shift (e.g. 22:00-02:00).
    """
    barber_name = serializers.CharField(source='barber.name', read_only=True)
    start_hour = serializers.CharField(max_length=5, required=False, allow_blank=True, validators=[validate_hhmm])
    end_hour = serializers.CharField(max_length=5, required=False, allow_blank=True, validators=[validate_hhmm])
    breaks = serializers.JSONField(required=False, validators=[validate_breaks])

    class Meta:
        model = BarberWeeklySchedule
        fields = [
            'id', 'barber', 'barber_name', 'day_of_week', 'is_open',
            'start_hour', 'end_hour', 'breaks', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class BarberSpecialHoursSerializer(serializers.ModelSerializer):
    """Hours for one specific date, overriding the weekly pattern"""
    barber_name = serializers.CharField(source='barber.name', read_only=True)
    start_hour = serializers.CharField(max_length=5, required=False, allow_blank=True, validators=[validate_hhmm])
    end_hour = serializers.CharField(max_length=5, required=False, allow_blank=True, validators=[validate_hhmm])

    class Meta:
        model = BarberSpecialHours
        fields = [
            'id', 'barber', 'barber_name', 'date', 'is_open',
            'start_hour', 'end_hour', 'reason', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class BreakSerializer(serializers.Serializer):
    start = serializers.IntegerField(help_text="Minutes from midnight")
    end = serializers.IntegerField(help_text="Minutes from midnight")


class ResolvedScheduleSerializer(serializers.Serializer):
    """
    Effective hours of a barber on a date, in minutes from midnight.
    ``end`` above 1440 means the shift runs into the next day.
    """
    barber_id = serializers.UUIDField()
    date = serializers.DateField()
    is_open = serializers.BooleanField()
    start = serializers.IntegerField()
    end = serializers.IntegerField()
    breaks = BreakSerializer(many=True)


class SlotRequestSerializer(serializers.Serializer):
    """
    Input serializer for the slot listing.

    Slots are computed on the fly from barber schedules, breaks, existing
    bookings and the shop's buffer and notice policy.
    """
    shop_id = serializers.UUIDField(
        required=True,
        help_text="UUID of the shop"
    )
    date = serializers.DateField(
        required=True,
        help_text="Target date (YYYY-MM-DD format)"
    )
    duration = serializers.IntegerField(
        required=False,
        validators=[validate_duration],
        help_text="Total service duration in minutes. Defaults to 30."
    )
    barber_id = serializers.CharField(
        required=False,
        allow_blank=True,
        help_text='Barber UUID, or "any" for every on-duty barber'
    )


class SlotResponseSerializer(serializers.Serializer):
    """Response for the slot listing"""
    shop_id = serializers.UUIDField()
    date = serializers.DateField()
    duration = serializers.IntegerField()
    slots = serializers.ListField(child=serializers.CharField(), help_text='Ordered "HH:mm" start times')
