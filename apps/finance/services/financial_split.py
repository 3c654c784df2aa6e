"""
Per-booking money split.

Computed once when a booking is created and stored on it verbatim:

- discount = price x discount%            (given to the customer)
- final price = price - discount          (what the customer pays)
- commission = price x commission%        (on the ORIGINAL price)
- admin net = commission - discount       (platform absorbs the discount)
- barber net = price - commission
"""
from dataclasses import dataclass, asdict
from decimal import Decimal

from apps.core.utils.constants import (
    ONLINE_PAYMENT_METHODS,
    COLLECTED_BY_ADMIN,
    COLLECTED_BY_BARBER,
)
from apps.core.utils.helpers import round_money

HUNDRED = Decimal('100')


@dataclass(frozen=True)
class FinancialSplit:
    original_price: Decimal
    discount_amount: Decimal
    final_price: Decimal
    admin_commission: Decimal
    admin_net_revenue: Decimal
    barber_net_revenue: Decimal

    def as_dict(self) -> dict:
        return asdict(self)


def calculate_split(original_price, admin_commission_rate, user_discount_rate) -> FinancialSplit:
    """
    Split ``original_price`` using the given percentage rates.

    Every amount is rounded to cents, halves away from zero.
    """
    price = Decimal(str(original_price))
    commission_rate = Decimal(str(admin_commission_rate))
    discount_rate = Decimal(str(user_discount_rate))

    discount_amount = round_money(price * discount_rate / HUNDRED)
    final_price = round_money(price - discount_amount)
    admin_commission = round_money(price * commission_rate / HUNDRED)
    admin_net_revenue = round_money(admin_commission - discount_amount)
    barber_net_revenue = round_money(price - admin_commission)

    return FinancialSplit(
        original_price=round_money(price),
        discount_amount=discount_amount,
        final_price=final_price,
        admin_commission=admin_commission,
        admin_net_revenue=admin_net_revenue,
        barber_net_revenue=barber_net_revenue,
    )


def resolve_collector(payment_method) -> str:
    """The platform holds online/UPI payments; the shop holds cash."""
    if payment_method and str(payment_method).lower() in ONLINE_PAYMENT_METHODS:
        return COLLECTED_BY_ADMIN
    return COLLECTED_BY_BARBER
