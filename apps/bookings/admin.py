from django.contrib import admin
from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = [
        'date', 'start_time', 'shop', 'barber', 'status', 'type',
        'payment_method', 'final_price', 'settlement_status'
    ]
    search_fields = ['shop__name', 'barber__name', 'user_id', 'booking_key']
    list_filter = ['status', 'type', 'settlement_status', 'amount_collected_by', 'date']
    date_hierarchy = 'date'
    readonly_fields = [
        'id', 'original_price', 'discount_amount', 'final_price',
        'admin_commission', 'admin_net_revenue', 'barber_net_revenue',
        'amount_collected_by', 'settlement', 'created_at', 'updated_at'
    ]
