"""
Finance views: platform config, settlements and shop balances
"""
from dataclasses import asdict

from rest_framework import viewsets, generics, mixins, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter, OpenApiResponse, OpenApiTypes
from django_filters.rest_framework import DjangoFilterBackend

from apps.bookings.serializers import BookingListSerializer
from apps.core.utils.constants import SYSTEM_CONFIG_KEY
from apps.core.utils.time_utils import parse_date, shop_now, start_of_week
from .models import SystemConfig, Settlement
from .serializers import (
    SystemConfigSerializer,
    SettlementSerializer,
    SettlementDetailSerializer,
    SettlementCommitSerializer,
    SettlementConfirmSerializer,
    SettlementPreviewSerializer,
    ShopFinanceSummarySerializer,
)
from .services.settlement import SettlementBatcher, pending_bookings, shop_finance_summary


@extend_schema_view(
    get=extend_schema(
        tags=['Finance - Admin'],
        summary='Get platform rates',
    ),
    put=extend_schema(
        tags=['Finance - Admin'],
        summary='Update platform rates',
        description='New rates apply to bookings created afterwards; existing bookings keep their snapshot.'
    ),
    patch=extend_schema(
        tags=['Finance - Admin'],
        summary='Partially update platform rates',
    )
)
class SystemConfigView(generics.RetrieveUpdateAPIView):
    """
    The global SystemConfig row, created with defaults on first access.
    """
    serializer_class = SystemConfigSerializer

    def get_object(self):
        config, created = SystemConfig.objects.get_or_create(key=SYSTEM_CONFIG_KEY)
        return config


class SettlementViewSet(viewsets.GenericViewSet,
                        mixins.ListModelMixin,
                        mixins.RetrieveModelMixin):
    """
    Settlement history plus the preview / commit / confirm workflow.
    """
    queryset = Settlement.objects.select_related('shop')
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['shop', 'type', 'status']

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return SettlementDetailSerializer
        return SettlementSerializer

    @extend_schema(
        summary="Preview settlement run",
        description="""
        Net balances per shop for completed, unsettled bookings dated before
        the cutoff. Nothing is written. The cutoff defaults to Monday of the
        current week, the same cutoff the nightly job uses.
        """,
        parameters=[
            OpenApiParameter('cutoff_date', OpenApiTypes.DATE, description='Exclusive cutoff (YYYY-MM-DD)'),
        ],
        responses={200: SettlementPreviewSerializer},
        tags=['Finance - Admin']
    )
    @action(detail=False, methods=['get'])
    def preview(self, request):
        cutoff_param = request.query_params.get('cutoff_date')
        cutoff_date = parse_date(cutoff_param) if cutoff_param else start_of_week(shop_now()[0])

        preview = SettlementBatcher.preview(cutoff_date)
        return Response(SettlementPreviewSerializer(asdict(preview)).data)

    @extend_schema(
        summary="Settle a shop",
        description="""
        Close the books for a shop's completed, unsettled bookings (optionally
        a subset). Each booking can only ever be part of one settlement.
        """,
        request=SettlementCommitSerializer,
        responses={
            201: SettlementSerializer,
            400: OpenApiResponse(description="No pending bookings found to settle"),
            404: OpenApiResponse(description="Shop not found")
        },
        tags=['Finance - Admin']
    )
    @action(detail=False, methods=['post'])
    def commit(self, request):
        serializer = SettlementCommitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        settlement = SettlementBatcher.commit(
            data['shop_id'],
            booking_ids=data.get('booking_ids'),
            cutoff_date=data.get('cutoff_date'),
            admin_id=data.get('admin_id', ''),
        )
        return Response(SettlementSerializer(settlement).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Confirm settlement",
        description="Record that the money has been transferred.",
        request=SettlementConfirmSerializer,
        responses={
            200: SettlementSerializer,
            400: OpenApiResponse(description="Settlement already completed"),
            404: OpenApiResponse(description="Settlement not found")
        },
        tags=['Finance - Admin']
    )
    @action(detail=True, methods=['post'])
    def confirm(self, request, pk=None):
        serializer = SettlementConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        settlement = SettlementBatcher.confirm(
            pk,
            transaction_id=serializer.validated_data.get('transaction_id', ''),
            notes=serializer.validated_data.get('notes', ''),
        )
        return Response(SettlementSerializer(settlement).data)


class ShopFinanceSummaryView(APIView):
    """
    Revenue card of the shop owner dashboard.
    """

    @extend_schema(
        summary='Shop finance summary',
        description='Lifetime earnings, live balance of unsettled bookings and the last five settlements.',
        responses={
            200: ShopFinanceSummarySerializer,
            404: OpenApiResponse(description="Shop not found")
        },
        tags=['Finance - Shop Owner'],
    )
    def get(self, request, shop_id):
        summary = shop_finance_summary(shop_id)
        return Response(ShopFinanceSummarySerializer(summary).data)


class ShopPendingBookingsView(APIView):
    """
    Completed bookings of a shop that are waiting for settlement.
    """

    @extend_schema(
        summary='Unsettled bookings of a shop',
        responses={
            200: BookingListSerializer(many=True),
            404: OpenApiResponse(description="Shop not found")
        },
        tags=['Finance - Shop Owner'],
    )
    def get(self, request, shop_id):
        bookings = pending_bookings(shop_id).select_related('shop', 'barber')
        return Response(BookingListSerializer(bookings, many=True).data)
