"""
Finance serializers
"""
from rest_framework import serializers
from drf_spectacular.utils import extend_schema_field

from .models import SystemConfig, Settlement


class SystemConfigSerializer(serializers.ModelSerializer):
    """Platform rates applied to new bookings"""
    admin_commission_rate = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=0, max_value=100)
    user_discount_rate = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=0, max_value=100)

    class Meta:
        model = SystemConfig
        fields = [
            'admin_commission_rate', 'user_discount_rate',
            'max_cash_bookings_per_month', 'is_payment_test_mode', 'updated_at'
        ]
        read_only_fields = ['updated_at']


class SettlementSerializer(serializers.ModelSerializer):
    shop_name = serializers.CharField(source='shop.name', read_only=True)

    class Meta:
        model = Settlement
        fields = [
            'id', 'shop', 'shop_name', 'admin_id', 'type', 'amount', 'status',
            'date_range_start', 'date_range_end', 'booking_count',
            'transaction_id', 'notes', 'completed_at', 'created_at'
        ]
        read_only_fields = fields


class SettlementDetailSerializer(SettlementSerializer):
    """Settlement with the bookings it covers"""
    bookings = serializers.SerializerMethodField()

    @extend_schema_field(serializers.ListField)
    def get_bookings(self, obj):
        from apps.bookings.serializers import BookingListSerializer
        return BookingListSerializer(obj.bookings.select_related('shop', 'barber'), many=True).data

    class Meta(SettlementSerializer.Meta):
        fields = SettlementSerializer.Meta.fields + ['bookings']
        read_only_fields = fields


class SettlementCommitSerializer(serializers.Serializer):
    """Input serializer for settling one shop"""
    shop_id = serializers.UUIDField()
    booking_ids = serializers.ListField(
        child=serializers.UUIDField(),
        required=False,
        help_text='Restrict to these bookings; all eligible bookings when omitted'
    )
    cutoff_date = serializers.DateField(
        required=False,
        help_text='Only bookings dated before this day'
    )
    admin_id = serializers.CharField(required=False, allow_blank=True, max_length=64)


class SettlementConfirmSerializer(serializers.Serializer):
    """Input serializer for recording a completed transfer"""
    transaction_id = serializers.CharField(required=False, allow_blank=True, max_length=255)
    notes = serializers.CharField(required=False, allow_blank=True)


class NetBalanceSerializer(serializers.Serializer):
    net = serializers.DecimalField(max_digits=12, decimal_places=2, help_text='Positive: platform pays the shop')
    admin_owes_shop = serializers.DecimalField(max_digits=12, decimal_places=2)
    shop_owes_admin = serializers.DecimalField(max_digits=12, decimal_places=2)


class ShopBalanceSerializer(serializers.Serializer):
    shop_id = serializers.UUIDField()
    shop_name = serializers.CharField()
    booking_count = serializers.IntegerField()
    balance = NetBalanceSerializer()


class SettlementPreviewSerializer(serializers.Serializer):
    cutoff_date = serializers.DateField()
    shop_count = serializers.IntegerField()
    total_payout = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_collection = serializers.DecimalField(max_digits=12, decimal_places=2)
    shops = ShopBalanceSerializer(many=True)


class ShopFinanceSummarySerializer(serializers.Serializer):
    total_earnings = serializers.DecimalField(max_digits=12, decimal_places=2)
    current_balance = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text='Positive: the platform owes the shop. Negative: the shop owes the platform.'
    )
    pending_payout = serializers.DecimalField(max_digits=12, decimal_places=2)
    pending_dues = serializers.DecimalField(max_digits=12, decimal_places=2)
    recent_settlements = SettlementSerializer(many=True)
