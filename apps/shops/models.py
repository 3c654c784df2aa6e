"""
Shop model
"""
from django.core.validators import MinValueValidator
from django.db import models
from apps.core.models import BaseModel
from apps.core.utils.constants import (
    DEFAULT_BUFFER_TIME,
    DEFAULT_MIN_BOOKING_NOTICE,
    DEFAULT_MAX_BOOKING_NOTICE,
)


class Shop(BaseModel):
    """
    Salon shop with its booking policy
    """
    # Owner account lives in the external auth service
    owner_id = models.CharField(max_length=64, db_index=True)

    name = models.CharField(max_length=255)
    address = models.CharField(max_length=500, blank=True)

    # Scheduling policy
    buffer_time = models.PositiveIntegerField(
        default=DEFAULT_BUFFER_TIME,
        help_text='Minutes appended after every booking for cleanup'
    )
    min_booking_notice = models.PositiveIntegerField(
        default=DEFAULT_MIN_BOOKING_NOTICE,
        help_text='Minimum minutes between now and the booking start'
    )
    max_booking_notice = models.PositiveIntegerField(
        default=DEFAULT_MAX_BOOKING_NOTICE,
        validators=[MinValueValidator(0)],
        help_text='Maximum days in advance a booking can be made'
    )
    auto_approve_bookings = models.BooleanField(default=True)
    block_custom_bookings = models.BooleanField(
        default=False,
        help_text='Customers may only take the earliest slot (enforced by the client app)'
    )

    # Status
    is_disabled = models.BooleanField(default=False)

    class Meta:
        db_table = 'shops'
        verbose_name = 'Shop'
        verbose_name_plural = 'Shops'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['owner_id', 'is_disabled'], name='shops_owner_disabled_idx'),
        ]

    def __str__(self):
        return self.name
