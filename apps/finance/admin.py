from django.contrib import admin
from .models import SystemConfig, Settlement


@admin.register(SystemConfig)
class SystemConfigAdmin(admin.ModelAdmin):
    list_display = ['key', 'admin_commission_rate', 'user_discount_rate', 'max_cash_bookings_per_month', 'updated_at']


@admin.register(Settlement)
class SettlementAdmin(admin.ModelAdmin):
    list_display = ['shop', 'type', 'amount', 'status', 'date_range_start', 'date_range_end', 'booking_count', 'created_at']
    search_fields = ['shop__name', 'transaction_id']
    list_filter = ['type', 'status', 'created_at']
    readonly_fields = ['id', 'amount', 'type', 'booking_count', 'date_range_start', 'date_range_end', 'created_at', 'updated_at']
