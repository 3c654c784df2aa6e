"""
Read access to the platform SystemConfig.

Callers get an immutable ``SystemConfigSnapshot`` taken at one instant, so a
concurrent admin update can never produce a half-old/half-new calculation.
The snapshot is cached and dropped whenever the row is saved.
"""
from dataclasses import dataclass, asdict
from decimal import Decimal

from django.conf import settings

from apps.core.utils.constants import (
    SYSTEM_CONFIG_KEY,
    DEFAULT_ADMIN_COMMISSION_RATE,
    DEFAULT_USER_DISCOUNT_RATE,
    DEFAULT_MAX_CASH_BOOKINGS_PER_MONTH,
)
from infrastructure.cache.redis_client import redis_client

CACHE_KEY = redis_client.make_key('system_config', SYSTEM_CONFIG_KEY)


@dataclass(frozen=True)
class SystemConfigSnapshot:
    admin_commission_rate: Decimal = DEFAULT_ADMIN_COMMISSION_RATE
    user_discount_rate: Decimal = DEFAULT_USER_DISCOUNT_RATE
    max_cash_bookings_per_month: int = DEFAULT_MAX_CASH_BOOKINGS_PER_MONTH
    is_payment_test_mode: bool = False

    def as_dict(self) -> dict:
        return asdict(self)


def _load_snapshot() -> SystemConfigSnapshot:
    from apps.finance.models import SystemConfig

    config = SystemConfig.objects.filter(key=SYSTEM_CONFIG_KEY).first()
    if config is None:
        return SystemConfigSnapshot()
    return SystemConfigSnapshot(
        admin_commission_rate=config.admin_commission_rate,
        user_discount_rate=config.user_discount_rate,
        max_cash_bookings_per_month=config.max_cash_bookings_per_month,
        is_payment_test_mode=config.is_payment_test_mode,
    )


def get_system_config() -> SystemConfigSnapshot:
    return redis_client.get_or_set(CACHE_KEY, _load_snapshot, timeout=settings.SYSTEM_CONFIG_CACHE_TTL)


def invalidate_system_config() -> None:
    redis_client.delete(CACHE_KEY)
