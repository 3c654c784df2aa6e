"""
Barber serializers
"""
from rest_framework import serializers

from apps.core.validators import validate_hhmm
from .models import Barber


class BarberSerializer(serializers.ModelSerializer):
    """Barber with default hours"""
    shop_name = serializers.CharField(source='shop.name', read_only=True)
    default_start_hour = serializers.CharField(max_length=5, required=False, validators=[validate_hhmm])
    default_end_hour = serializers.CharField(max_length=5, required=False, validators=[validate_hhmm])

    class Meta:
        model = Barber
        fields = [
            'id', 'shop', 'shop_name', 'name',
            'default_start_hour', 'default_end_hour', 'is_available',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class BarberAvailabilitySerializer(serializers.Serializer):
    """Input serializer for the on/off duty toggle"""
    is_available = serializers.BooleanField()
