"""
Settlement batching.

Reconciles completed, unsettled bookings between the platform and each shop:

- online/UPI bookings: the platform holds the money and owes the shop the
  barber's net revenue
- cash bookings: the shop holds the money and owes the platform its net
  revenue (commission minus the discount it absorbed)

A positive net becomes a PAYOUT, a negative one a COLLECTION. A booking can
belong to at most one settlement: rows are locked and then claimed with a
conditional PENDING -> SETTLED update before anything is written.
"""
import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Optional

from django.db import transaction
from django.db.models import Q, Sum
from django.utils import timezone

from apps.bookings.models import Booking
from apps.core.exceptions import StateError
from apps.core.utils.constants import (
    COLLECTED_BY_ADMIN,
    COLLECTED_BY_BARBER,
    BOOKING_STATUS_COMPLETED,
    SETTLEMENT_STATUS_PENDING,
    SETTLEMENT_STATUS_SETTLED,
    SETTLEMENT_TYPE_PAYOUT,
    SETTLEMENT_TYPE_COLLECTION,
    SETTLEMENT_ENTRY_PENDING,
    SETTLEMENT_ENTRY_COMPLETED,
)
from apps.core.utils.helpers import get_object_or_error, round_money
from apps.core.utils.time_utils import parse_date, shop_now, start_of_week
from apps.finance.models import Settlement
from apps.shops.models import Shop

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')
RECENT_SETTLEMENTS_LIMIT = 5


@dataclass(frozen=True)
class NetBalance:
    """Positive ``net`` means the platform pays the shop."""
    net: Decimal
    admin_owes_shop: Decimal
    shop_owes_admin: Decimal

    @property
    def settlement_type(self) -> str:
        return SETTLEMENT_TYPE_PAYOUT if self.net >= 0 else SETTLEMENT_TYPE_COLLECTION

    @property
    def amount(self) -> Decimal:
        return abs(self.net)


@dataclass(frozen=True)
class ShopBalance:
    shop_id: uuid.UUID
    shop_name: str
    booking_count: int
    balance: NetBalance


@dataclass
class SettlementPreview:
    cutoff_date: date
    shop_count: int = 0
    total_payout: Decimal = ZERO
    total_collection: Decimal = ZERO
    shops: List[ShopBalance] = field(default_factory=list)


def calculate_net(bookings: Iterable[Booking]) -> NetBalance:
    admin_owes_shop = ZERO
    shop_owes_admin = ZERO
    for booking in bookings:
        if booking.amount_collected_by == COLLECTED_BY_ADMIN:
            admin_owes_shop += booking.barber_net_revenue or ZERO
        elif booking.amount_collected_by == COLLECTED_BY_BARBER:
            shop_owes_admin += booking.admin_net_revenue or ZERO

    return NetBalance(
        net=round_money(admin_owes_shop - shop_owes_admin),
        admin_owes_shop=round_money(admin_owes_shop),
        shop_owes_admin=round_money(shop_owes_admin),
    )


def _unsettled():
    return Q(settlement_status=SETTLEMENT_STATUS_PENDING) | Q(settlement_status__isnull=True)


class SettlementBatcher:
    """
    Example usage:
        SettlementBatcher.preview(date(2024, 12, 9))
        settlement = SettlementBatcher.commit(shop.id, cutoff_date=date(2024, 12, 9))
        SettlementBatcher.confirm(settlement.id, transaction_id='UTR123')
    """

    @staticmethod
    def preview(cutoff_date) -> SettlementPreview:
        """
        What a settlement run at ``cutoff_date`` would produce. Read only.
        """
        cutoff_date = parse_date(cutoff_date)
        bookings = (
            Booking.objects.settlement_eligible()
            .filter(date__lt=cutoff_date)
            .select_related('shop')
            .order_by('shop_id', 'date', 'start_time')
        )

        grouped = OrderedDict()
        for booking in bookings:
            grouped.setdefault(booking.shop_id, []).append(booking)

        preview = SettlementPreview(cutoff_date=cutoff_date)
        total_payout = ZERO
        total_collection = ZERO
        for shop_id, shop_bookings in grouped.items():
            balance = calculate_net(shop_bookings)
            if balance.net >= 0:
                total_payout += balance.net
            else:
                total_collection += abs(balance.net)
            preview.shops.append(ShopBalance(
                shop_id=shop_id,
                shop_name=shop_bookings[0].shop.name,
                booking_count=len(shop_bookings),
                balance=balance,
            ))

        preview.shop_count = len(preview.shops)
        preview.total_payout = round_money(total_payout)
        preview.total_collection = round_money(total_collection)
        return preview

    @staticmethod
    def commit(shop_id, booking_ids=None, cutoff_date=None, admin_id: str = '') -> Settlement:
        """
        Settle a shop's eligible bookings, optionally restricted to
        ``booking_ids`` and/or to dates before ``cutoff_date``.

        Raises:
            NotFoundError: unknown shop
            StateError: nothing left to settle (no rows are written)
        """
        shop = get_object_or_error(Shop.objects.all(), shop_id, 'Shop not found')
        settlement_id = uuid.uuid4()

        with transaction.atomic():
            eligible = Booking.objects.settlement_eligible().filter(shop=shop)
            if booking_ids is not None:
                eligible = eligible.filter(id__in=list(booking_ids))
            if cutoff_date:
                eligible = eligible.filter(date__lt=parse_date(cutoff_date))

            locked_ids = list(eligible.select_for_update().values_list('id', flat=True))

            # Only rows still unsettled at update time are claimed
            claimed = Booking.objects.filter(
                _unsettled(),
                id__in=locked_ids,
                status=BOOKING_STATUS_COMPLETED,
            ).update(
                settlement_status=SETTLEMENT_STATUS_SETTLED,
                settlement_id=settlement_id,
            )
            if claimed == 0:
                raise StateError('No pending bookings found to settle.')

            # Foreign keys are checked at commit, so the settlement row may follow the claim
            bookings = list(Booking.objects.filter(settlement_id=settlement_id))
            balance = calculate_net(bookings)
            dates = [b.date for b in bookings]

            settlement = Settlement.objects.create(
                id=settlement_id,
                shop=shop,
                admin_id=admin_id or '',
                type=balance.settlement_type,
                amount=balance.amount,
                status=SETTLEMENT_ENTRY_PENDING,
                date_range_start=min(dates),
                date_range_end=max(dates),
                booking_count=len(bookings),
            )

        logger.info(
            f"Settlement {settlement.id} for shop {shop.id}: "
            f"{settlement.type} {settlement.amount} over {settlement.booking_count} bookings"
        )
        return settlement

    @staticmethod
    def confirm(settlement_id, transaction_id: str = '', notes: str = '') -> Settlement:
        """Record that the money has moved."""
        with transaction.atomic():
            settlement = get_object_or_error(
                Settlement.objects.select_for_update(),
                settlement_id,
                'Settlement not found'
            )
            if settlement.status == SETTLEMENT_ENTRY_COMPLETED:
                raise StateError('Settlement is already completed.')

            settlement.status = SETTLEMENT_ENTRY_COMPLETED
            settlement.completed_at = timezone.now()
            if transaction_id:
                settlement.transaction_id = transaction_id
            if notes:
                settlement.notes = notes
            settlement.save(update_fields=['status', 'completed_at', 'transaction_id', 'notes', 'updated_at'])

        logger.info(f"Settlement {settlement.id} confirmed")
        return settlement


def run_settlement_job(now: Optional[datetime] = None) -> List[Settlement]:
    """
    Weekly reconciliation: settle every shop's completed bookings dated
    before Monday of the current week. A failing shop is logged and skipped.
    """
    today, _ = shop_now(now)
    cutoff = start_of_week(today)
    logger.info(f"Running settlement job with cutoff {cutoff}")

    shop_ids = (
        Booking.objects.settlement_eligible()
        .filter(date__lt=cutoff)
        .values_list('shop_id', flat=True)
        .distinct()
    )

    settlements = []
    for shop_id in list(shop_ids):
        try:
            settlements.append(SettlementBatcher.commit(shop_id, cutoff_date=cutoff))
        except StateError:
            # Claimed by a concurrent run between the scan and the commit
            logger.info(f"Nothing left to settle for shop {shop_id}")
        except Exception as e:
            logger.error(f"Settlement failed for shop {shop_id}: {str(e)}")

    logger.info(f"Settlement job created {len(settlements)} settlements")
    return settlements


def pending_bookings(shop_id):
    """Completed bookings of a shop not yet included in a settlement."""
    shop = get_object_or_error(Shop.objects.all(), shop_id, 'Shop not found')
    return Booking.objects.settlement_eligible().filter(shop=shop).order_by('date', 'start_time')


def shop_finance_summary(shop_id) -> dict:
    """
    Dashboard numbers for a shop: lifetime earnings, the live balance of
    unsettled bookings and the most recent settlements.
    """
    shop = get_object_or_error(Shop.objects.all(), shop_id, 'Shop not found')
    completed = Booking.objects.filter(shop=shop, status=BOOKING_STATUS_COMPLETED)

    total_earnings = completed.aggregate(total=Sum('barber_net_revenue'))['total'] or ZERO
    balance = calculate_net(completed.filter(_unsettled()))
    recent = list(Settlement.objects.filter(shop=shop).order_by('-created_at')[:RECENT_SETTLEMENTS_LIMIT])

    return {
        'total_earnings': round_money(total_earnings),
        'current_balance': balance.net,
        'pending_payout': balance.admin_owes_shop,
        'pending_dues': balance.shop_owes_admin,
        'recent_settlements': recent,
    }
