"""
Barber admin configuration
"""
from django.contrib import admin
from .models import Barber


@admin.register(Barber)
class BarberAdmin(admin.ModelAdmin):
    list_display = ['name', 'shop', 'default_start_hour', 'default_end_hour', 'is_available', 'created_at']
    list_filter = ['is_available', 'shop', 'created_at']
    search_fields = ['name', 'shop__name']
    readonly_fields = ['id', 'created_at', 'updated_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('shop', 'name', 'is_available')
        }),
        ('Default Hours', {
            'fields': ('default_start_hour', 'default_end_hour')
        }),
        ('Metadata', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
