"""
Booking model
"""
from django.db import models
from django.db.models import Q
from apps.core.models import BaseModel
from apps.core.utils.constants import (
    BOOKING_STATUSES,
    BOOKING_STATUS_UPCOMING,
    BOOKING_STATUS_CANCELLED,
    BOOKING_STATUS_COMPLETED,
    BOOKING_TYPES,
    BOOKING_TYPE_ONLINE,
    PAYMENT_METHOD_CASH,
    COLLECTORS,
    COLLECTED_BY_BARBER,
    BOOKING_SETTLEMENT_STATUSES,
    SETTLEMENT_STATUS_PENDING,
)


class BookingQuerySet(models.QuerySet):

    def active(self):
        """Bookings that occupy the barber's time."""
        return self.exclude(status=BOOKING_STATUS_CANCELLED)

    def settlement_eligible(self):
        """Completed and not yet part of any settlement."""
        return self.filter(status=BOOKING_STATUS_COMPLETED).filter(
            Q(settlement_status=SETTLEMENT_STATUS_PENDING) | Q(settlement_status__isnull=True)
        )


class Booking(BaseModel):
    """
    A reserved interval with one barber.

    The financial fields are a snapshot taken at creation and are never
    recomputed from the current SystemConfig.
    """
    shop = models.ForeignKey(
        'shops.Shop',
        on_delete=models.PROTECT,
        related_name='bookings'
    )

    barber = models.ForeignKey(
        'staff.Barber',
        on_delete=models.PROTECT,
        related_name='bookings'
    )

    # Customer account from the external auth service, empty for walk-ins/blocks
    user_id = models.CharField(max_length=64, blank=True, db_index=True)

    service_names = models.JSONField(default=list, blank=True)

    # Shop-local date and clock times; end_time wraps past midnight
    date = models.DateField(db_index=True)
    start_time = models.TimeField()
    end_time = models.TimeField()
    total_duration = models.PositiveIntegerField()
    buffer_minutes = models.PositiveIntegerField(
        default=0,
        help_text='Shop buffer at creation time, reserved after end_time'
    )

    status = models.CharField(
        max_length=20,
        choices=BOOKING_STATUSES,
        default=BOOKING_STATUS_UPCOMING,
        db_index=True
    )
    type = models.CharField(max_length=20, choices=BOOKING_TYPES, default=BOOKING_TYPE_ONLINE)
    payment_method = models.CharField(max_length=20, default=PAYMENT_METHOD_CASH)

    booking_key = models.CharField(max_length=4, help_text='Check-in PIN')
    is_rated = models.BooleanField(default=False)
    notes = models.TextField(blank=True)

    # Financial snapshot
    original_price = models.DecimalField(max_digits=10, decimal_places=2)
    discount_amount = models.DecimalField(max_digits=10, decimal_places=2)
    final_price = models.DecimalField(max_digits=10, decimal_places=2)
    admin_commission = models.DecimalField(max_digits=10, decimal_places=2)
    admin_net_revenue = models.DecimalField(max_digits=10, decimal_places=2)
    barber_net_revenue = models.DecimalField(max_digits=10, decimal_places=2)
    amount_collected_by = models.CharField(
        max_length=10,
        choices=COLLECTORS,
        default=COLLECTED_BY_BARBER
    )

    # Settlement
    settlement_status = models.CharField(
        max_length=10,
        choices=BOOKING_SETTLEMENT_STATUSES,
        default=SETTLEMENT_STATUS_PENDING,
        null=True,
        blank=True,
        db_index=True
    )
    settlement = models.ForeignKey(
        'finance.Settlement',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='bookings'
    )

    objects = BookingQuerySet.as_manager()

    class Meta:
        db_table = 'bookings'
        verbose_name = 'Booking'
        verbose_name_plural = 'Bookings'
        ordering = ['date', 'start_time']
        indexes = [
            models.Index(fields=['barber', 'date'], name='bookings_barber_date_idx'),
            models.Index(fields=['shop', 'date'], name='bookings_shop_date_idx'),
            models.Index(fields=['shop', 'status', 'settlement_status'], name='bookings_shop_settlement_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['barber', 'date', 'start_time'],
                condition=~Q(status=BOOKING_STATUS_CANCELLED),
                name='uq_active_booking_barber_start',
            ),
        ]

    def __str__(self):
        return f"{self.barber.name} - {self.date} {self.start_time:%H:%M} ({self.status})"
