"""
Barber model
"""
from django.db import models
from apps.core.models import BaseModel
from apps.core.utils.constants import DEFAULT_START_HOUR, DEFAULT_END_HOUR


class Barber(BaseModel):
    """
    A barber working at exactly one shop.

    Weekly and date-specific hours live in ``apps.schedules``; the fields
    here are the fallback used when neither applies.
    """
    shop = models.ForeignKey(
        'shops.Shop',
        on_delete=models.CASCADE,
        related_name='barbers'
    )

    name = models.CharField(max_length=255)

    # Default working hours, "HH:mm"
    default_start_hour = models.CharField(max_length=5, default=DEFAULT_START_HOUR)
    default_end_hour = models.CharField(max_length=5, default=DEFAULT_END_HOUR)

    # Manual on/off duty toggle, independent of the schedule
    is_available = models.BooleanField(default=True)

    class Meta:
        db_table = 'barbers'
        verbose_name = 'Barber'
        verbose_name_plural = 'Barbers'
        ordering = ['name']
        indexes = [
            models.Index(fields=['shop', 'is_available'], name='barbers_shop_available_idx'),
        ]

    def __str__(self):
        return f"{self.name} - {self.shop.name}"
