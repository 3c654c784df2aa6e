from django.contrib import admin
from .models import BarberWeeklySchedule, BarberSpecialHours


@admin.register(BarberWeeklySchedule)
class BarberWeeklyScheduleAdmin(admin.ModelAdmin):
    list_display = ['barber', 'day_of_week', 'is_open', 'start_hour', 'end_hour']
    search_fields = ['barber__name', 'barber__shop__name']
    list_filter = ['day_of_week', 'is_open']


@admin.register(BarberSpecialHours)
class BarberSpecialHoursAdmin(admin.ModelAdmin):
    list_display = ['barber', 'date', 'is_open', 'start_hour', 'end_hour', 'reason']
    search_fields = ['barber__name', 'reason']
    list_filter = ['date', 'is_open']
    date_hierarchy = 'date'
