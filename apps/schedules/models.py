"""
Barber schedule models: weekly pattern and date-specific overrides
"""
from django.db import models
from apps.core.models import BaseModel
from apps.core.utils.constants import DAYS_OF_WEEK


class BarberWeeklySchedule(BaseModel):
    """
    Recurring hours for one weekday.

    ``end_hour`` earlier than ``start_hour`` means the shift runs past
    midnight. ``breaks`` is a list of {"start_time": "HH:mm", "end_time": "HH:mm"}.
    """
    barber = models.ForeignKey(
        'staff.Barber',
        on_delete=models.CASCADE,
        related_name='weekly_schedules'
    )

    day_of_week = models.CharField(max_length=10, choices=DAYS_OF_WEEK)
    is_open = models.BooleanField(default=True)
    start_hour = models.CharField(max_length=5, blank=True)
    end_hour = models.CharField(max_length=5, blank=True)
    breaks = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = 'barber_weekly_schedules'
        verbose_name = 'Barber Weekly Schedule'
        verbose_name_plural = 'Barber Weekly Schedules'
        unique_together = ['barber', 'day_of_week']
        ordering = ['day_of_week']

    def __str__(self):
        return f"{self.barber.name} - {self.day_of_week}"


class BarberSpecialHours(BaseModel):
    """
    Hours for one specific date (holiday, one-off change). Wins over the
    weekly pattern.
    """
    barber = models.ForeignKey(
        'staff.Barber',
        on_delete=models.CASCADE,
        related_name='special_hours'
    )

    date = models.DateField(db_index=True)
    is_open = models.BooleanField(default=True)
    start_hour = models.CharField(max_length=5, blank=True)
    end_hour = models.CharField(max_length=5, blank=True)
    reason = models.CharField(max_length=255, blank=True)

    class Meta:
        db_table = 'barber_special_hours'
        verbose_name = 'Barber Special Hours'
        verbose_name_plural = 'Barber Special Hours'
        unique_together = ['barber', 'date']
        ordering = ['date']

    def __str__(self):
        return f"{self.barber.name} - {self.date}"
