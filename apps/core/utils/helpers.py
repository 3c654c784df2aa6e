"""
Helper utilities
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
import random

CENT = Decimal('0.01')


def round_money(amount) -> Decimal:
    """
    Round to 2 decimal places, halves away from zero.
    """
    return Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)


def generate_booking_key(rng: Optional[random.Random] = None) -> str:
    """
    Random 4-digit check-in PIN (1000-9999).
    """
    rng = rng or random
    return str(rng.randint(1000, 9999))


def get_object_or_error(queryset, pk, message: str):
    """
    Fetch ``pk`` from ``queryset`` or raise NotFoundError with ``message``.
    Malformed ids count as not found.
    """
    from django.core.exceptions import ValidationError as DjangoValidationError
    from apps.core.exceptions import NotFoundError

    try:
        obj = queryset.filter(pk=pk).first()
    except (DjangoValidationError, ValueError, TypeError):
        obj = None
    if obj is None:
        raise NotFoundError(message)
    return obj
