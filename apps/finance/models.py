"""
Finance models.

This module contains:
- SystemConfig: platform-wide commission/discount/cash-cap settings (singleton)
- Settlement: ledger entry reconciling a shop's completed bookings
"""
from django.db import models
from apps.core.models import BaseModel
from apps.core.utils.constants import (
    SYSTEM_CONFIG_KEY,
    DEFAULT_ADMIN_COMMISSION_RATE,
    DEFAULT_USER_DISCOUNT_RATE,
    DEFAULT_MAX_CASH_BOOKINGS_PER_MONTH,
    SETTLEMENT_TYPES,
    SETTLEMENT_ENTRY_STATUSES,
    SETTLEMENT_ENTRY_PENDING,
)


class SystemConfig(BaseModel):
    """
    Global platform settings.

    Only read when a booking is created; changes never touch existing
    bookings. Use ``apps.finance.services.system_config.get_system_config``
    rather than querying this model directly.
    """
    key = models.CharField(max_length=20, unique=True, default=SYSTEM_CONFIG_KEY)

    admin_commission_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=DEFAULT_ADMIN_COMMISSION_RATE,
        help_text="Platform commission in percent of the original price"
    )
    user_discount_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=DEFAULT_USER_DISCOUNT_RATE,
        help_text="Customer discount in percent, absorbed by the platform"
    )
    max_cash_bookings_per_month = models.PositiveIntegerField(
        default=DEFAULT_MAX_CASH_BOOKINGS_PER_MONTH
    )
    is_payment_test_mode = models.BooleanField(default=False)

    class Meta:
        db_table = 'system_config'
        verbose_name = 'System Config'
        verbose_name_plural = 'System Config'

    def __str__(self):
        return f"SystemConfig ({self.key})"


class Settlement(BaseModel):
    """
    One reconciliation between the platform and a shop.

    PAYOUT: platform owes the shop ``amount``.
    COLLECTION: shop owes the platform ``amount``.
    Included bookings point back here through ``Booking.settlement``.
    """
    shop = models.ForeignKey(
        'shops.Shop',
        on_delete=models.PROTECT,
        related_name='settlements'
    )

    # Admin account (external) that triggered the settlement, empty for the job
    admin_id = models.CharField(max_length=64, blank=True)

    type = models.CharField(max_length=20, choices=SETTLEMENT_TYPES)
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Absolute net amount"
    )
    status = models.CharField(
        max_length=20,
        choices=SETTLEMENT_ENTRY_STATUSES,
        default=SETTLEMENT_ENTRY_PENDING,
        db_index=True
    )

    date_range_start = models.DateField()
    date_range_end = models.DateField()

    booking_count = models.PositiveIntegerField(default=0)
    transaction_id = models.CharField(
        max_length=255,
        blank=True,
        help_text="Reference of the manual transfer, recorded on confirmation"
    )
    notes = models.TextField(blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'settlements'
        verbose_name = 'Settlement'
        verbose_name_plural = 'Settlements'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['shop', 'status'], name='settlements_shop_status_idx'),
            models.Index(fields=['created_at'], name='settlements_created_idx'),
        ]

    def __str__(self):
        return f"{self.type} {self.amount} - {self.shop.name} ({self.status})"
