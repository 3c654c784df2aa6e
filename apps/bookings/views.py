"""
Booking views
"""
from rest_framework import viewsets, status, mixins
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse, OpenApiExample, OpenApiTypes
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import OrderingFilter

from apps.core.exceptions import ValidationError
from apps.core.utils.helpers import get_object_or_error
from apps.core.utils.time_utils import parse_date
from apps.shops.models import Shop
from .models import Booking
from .serializers import (
    BookingSerializer,
    BookingListSerializer,
    BookingCreateSerializer,
    BookingStatusSerializer,
)
from .services.reservation import BookingReservationService
from .services.status import transition_status


class BookingViewSet(viewsets.GenericViewSet,
                     mixins.ListModelMixin,
                     mixins.RetrieveModelMixin):
    """
    ViewSet for managing bookings.

    Bookings are never deleted; cancel them through the status endpoint.
    """
    queryset = Booking.objects.select_related('shop', 'barber')
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_fields = ['status', 'shop', 'barber', 'type']
    ordering_fields = ['date', 'start_time', 'created_at']
    ordering = ['-date', '-start_time']

    def get_serializer_class(self):
        if self.action in ['list', 'shop_bookings']:
            return BookingListSerializer
        return BookingSerializer

    def get_queryset(self):
        queryset = super().get_queryset()

        # Customers see their own bookings
        user_id = self.request.query_params.get('user_id')
        if user_id:
            queryset = queryset.filter(user_id=user_id)

        return queryset

    @extend_schema(
        summary="List bookings",
        description="Get bookings, usually a customer's history via user_id.",
        parameters=[
            OpenApiParameter('user_id', str, description='Customer account id'),
            OpenApiParameter('status', str, description='Filter by status'),
            OpenApiParameter('shop', OpenApiTypes.UUID, description='Filter by shop UUID'),
        ],
        responses={200: BookingListSerializer(many=True)},
        tags=['Bookings - Customer']
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        summary="Create booking",
        description="""
        Reserve a slot.

        The system will:
        1. Validate the request, the shop's timing policy and the monthly cash cap
        2. Re-check the chosen barber (or pick a random free one for "any")
        3. Lock the barber and insert the booking atomically
        4. Snapshot the price split with the current platform rates

        409 means the slot was taken in the meantime; fetch slots again.
        """,
        request=BookingCreateSerializer,
        examples=[
            OpenApiExample(
                'Online booking, any barber',
                value={
                    'shop_id': 'd241ec69-f739-4040-94a0-b46286742dbe',
                    'barber_id': 'any',
                    'user_id': 'user_2abc',
                    'date': '2024-12-10',
                    'start_time': '10:15',
                    'total_duration': 45,
                    'original_price': '500.00',
                    'service_names': ['Haircut', 'Beard Trim'],
                    'payment_method': 'cash'
                },
                request_only=True
            )
        ],
        responses={
            201: BookingSerializer,
            400: OpenApiResponse(description="Invalid request or policy violation"),
            404: OpenApiResponse(description="Shop or barber not found"),
            409: OpenApiResponse(description="Slot no longer available")
        },
        tags=['Bookings - Customer']
    )
    def create(self, request):
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        booking = BookingReservationService().reserve(
            shop_id=data.get('shop_id'),
            date=data.get('date'),
            start_time=data.get('start_time'),
            duration=data.get('total_duration'),
            original_price=data.get('original_price'),
            barber_id=data.get('barber_id'),
            user_id=data.get('user_id'),
            service_names=data.get('service_names'),
            payment_method=data.get('payment_method'),
            booking_type=data.get('type'),
            notes=data.get('notes', ''),
        )
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Shop bookings",
        description="Non-cancelled bookings of a shop for one date or an inclusive date range.",
        parameters=[
            OpenApiParameter('date', OpenApiTypes.DATE, description='Single date (YYYY-MM-DD)'),
            OpenApiParameter('start_date', OpenApiTypes.DATE, description='Range start (YYYY-MM-DD)'),
            OpenApiParameter('end_date', OpenApiTypes.DATE, description='Range end (YYYY-MM-DD)'),
        ],
        responses={
            200: BookingListSerializer(many=True),
            404: OpenApiResponse(description="Shop not found")
        },
        tags=['Bookings - Shop Owner']
    )
    @action(detail=False, methods=['get'], url_path=r'shop/(?P<shop_id>[^/.]+)')
    def shop_bookings(self, request, shop_id=None):
        shop = get_object_or_error(Shop.objects.all(), shop_id, 'Shop not found')
        bookings = Booking.objects.active().filter(shop=shop).select_related('shop', 'barber')

        date_param = request.query_params.get('date')
        start_date = request.query_params.get('start_date')
        end_date = request.query_params.get('end_date')
        if date_param:
            bookings = bookings.filter(date=parse_date(date_param))
        elif start_date and end_date:
            bookings = bookings.filter(date__range=(parse_date(start_date), parse_date(end_date)))
        elif start_date or end_date:
            raise ValidationError('Both start_date and end_date are required for a range.')

        bookings = bookings.order_by('date', 'start_time')
        return Response(BookingListSerializer(bookings, many=True).data)

    @extend_schema(
        summary="Change booking status",
        description="""
        Move a booking through its lifecycle:

        - pending -> upcoming | cancelled
        - upcoming -> checked-in | cancelled | no-show
        - checked-in -> completed
        - blocked -> cancelled

        Check-in requires the customer's 4-digit PIN.
        """,
        request=BookingStatusSerializer,
        responses={
            200: BookingSerializer,
            400: OpenApiResponse(description="Unknown status, missing PIN or transition not allowed"),
            403: OpenApiResponse(description="Invalid PIN"),
            404: OpenApiResponse(description="Booking not found")
        },
        tags=['Bookings - Shop Owner']
    )
    @action(detail=True, methods=['post'], url_path='status')
    def update_status(self, request, pk=None):
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = transition_status(
            pk,
            serializer.validated_data['status'],
            pin=serializer.validated_data.get('pin') or None,
        )
        return Response(BookingSerializer(booking).data)
