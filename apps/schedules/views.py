"""
Barber schedule and slot views
"""
from rest_framework import viewsets, mixins
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse, OpenApiTypes, OpenApiExample
from django_filters.rest_framework import DjangoFilterBackend

from apps.core.exceptions import ValidationError, NotFoundError
from apps.core.utils.helpers import get_object_or_error
from apps.core.utils.time_utils import parse_date
from apps.shops.models import Shop
from apps.staff.models import Barber
from .models import BarberWeeklySchedule, BarberSpecialHours
from .serializers import (
    BarberWeeklyScheduleSerializer,
    BarberSpecialHoursSerializer,
    ResolvedScheduleSerializer,
    SlotRequestSerializer,
    SlotResponseSerializer,
)
from .services.schedule_resolver import resolve_schedule
from .services.slot_generator import SlotGenerator


class BarberWeeklyScheduleViewSet(viewsets.ModelViewSet):
    """
    ViewSet for a barber's weekly pattern, one row per weekday.
    """
    queryset = BarberWeeklySchedule.objects.select_related('barber')
    serializer_class = BarberWeeklyScheduleSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['barber', 'day_of_week', 'is_open']

    @extend_schema(
        summary="List weekly schedules",
        parameters=[
            OpenApiParameter('barber', OpenApiTypes.UUID, description='Filter by barber ID'),
            OpenApiParameter('day_of_week', str, description='monday ... sunday'),
        ],
        responses={200: BarberWeeklyScheduleSerializer(many=True)},
        tags=['Schedules - Shop Owner']
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)


class BarberSpecialHoursViewSet(viewsets.ModelViewSet):
    """
    ViewSet for date-specific hours (holidays, one-off changes).
    """
    queryset = BarberSpecialHours.objects.select_related('barber')
    serializer_class = BarberSpecialHoursSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['barber', 'date', 'is_open']

    def get_queryset(self):
        queryset = super().get_queryset()

        # Filter by date range if provided
        start_date = self.request.query_params.get('start_date')
        end_date = self.request.query_params.get('end_date')
        if start_date:
            queryset = queryset.filter(date__gte=start_date)
        if end_date:
            queryset = queryset.filter(date__lte=end_date)

        return queryset


class ScheduleViewSet(viewsets.GenericViewSet):
    """
    Read-only schedule lookups for a barber.
    """
    queryset = Barber.objects.prefetch_related('weekly_schedules', 'special_hours')

    @extend_schema(
        summary="Resolve a barber's schedule",
        description="""
        Effective working window of the barber on the given date.

        Date-specific hours win over the weekly pattern, which wins over
        the barber's default hours.
        """,
        parameters=[
            OpenApiParameter('date', OpenApiTypes.DATE, required=True, description='Target date (YYYY-MM-DD)'),
        ],
        responses={
            200: ResolvedScheduleSerializer,
            400: OpenApiResponse(description="Missing or invalid date"),
            404: OpenApiResponse(description="Barber not found")
        },
        tags=['Schedules - Public']
    )
    @action(detail=True, methods=['get'])
    def resolve(self, request, pk=None):
        barber = get_object_or_error(self.get_queryset(), pk, 'Barber not found')
        date_param = request.query_params.get('date')
        if not date_param:
            raise ValidationError('Query parameter "date" is required.')
        target_date = parse_date(date_param)

        schedule = resolve_schedule(barber, target_date)
        return Response({
            'barber_id': barber.id,
            'date': target_date,
            **schedule.as_dict(),
        })


class SlotListView(APIView):
    """
    Bookable start times for a shop on a date.
    """

    @extend_schema(
        summary="List available slots",
        description="""
        Calculate available start times on the fly.

        The system:
        1. Resolves each candidate barber's hours (including overnight spillover)
        2. Walks a 15-minute grid across the open window
        3. Offers a grid time when any barber is free for duration + shop buffer
        4. When a grid time is blocked, offers the first free minute within the next 14
        5. Hides times inside the shop's minimum notice for today
        """,
        request=SlotRequestSerializer,
        examples=[
            OpenApiExample(
                'Any barber',
                value={
                    'shop_id': 'd241ec69-f739-4040-94a0-b46286742dbe',
                    'date': '2024-12-10',
                    'duration': 45,
                    'barber_id': 'any'
                },
                request_only=True
            )
        ],
        responses={
            200: SlotResponseSerializer,
            400: OpenApiResponse(description="Invalid input"),
            404: OpenApiResponse(description="Shop or barber not found")
        },
        tags=['Schedules - Public']
    )
    def post(self, request):
        serializer = SlotRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        shop = get_object_or_error(Shop.objects.all(), data['shop_id'], 'Shop not found')
        if shop.is_disabled:
            raise NotFoundError('Shop not found')

        generator = SlotGenerator(
            shop,
            data['date'],
            duration=data.get('duration'),
            barber_id=data.get('barber_id') or None,
        )
        return Response({
            'shop_id': shop.id,
            'date': data['date'],
            'duration': generator.duration,
            'slots': generator.get_available_slots(),
        })
