from django.contrib import admin
from .models import Shop


@admin.register(Shop)
class ShopAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner_id', 'buffer_time', 'auto_approve_bookings', 'is_disabled', 'created_at']
    search_fields = ['name', 'address', 'owner_id']
    list_filter = ['is_disabled', 'auto_approve_bookings', 'created_at']
