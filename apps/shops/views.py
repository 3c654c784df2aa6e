"""
Shop views
"""
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse, OpenApiTypes
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import SearchFilter, OrderingFilter

from apps.core.exceptions import ValidationError
from apps.core.utils.constants import DEFAULT_SERVICE_DURATION, MAX_SERVICE_DURATION
from apps.core.utils.time_utils import parse_date, shop_now
from apps.schedules.services.slot_generator import SlotGenerator
from .models import Shop
from .serializers import ShopSerializer, EarliestSlotResponseSerializer


class ShopViewSet(viewsets.ModelViewSet):
    """
    ViewSet for managing shops and their booking policy.

    Owners are authenticated upstream; ``owner_id`` is the account id
    handed over by the auth service.
    """
    queryset = Shop.objects.all()
    serializer_class = ShopSerializer
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ['owner_id', 'is_disabled']
    search_fields = ['name', 'address']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']
    http_method_names = ['get', 'post', 'put', 'patch', 'head', 'options']

    @extend_schema(
        summary="List shops",
        parameters=[
            OpenApiParameter('owner_id', str, description='Filter by owner account id'),
            OpenApiParameter('is_disabled', bool, description='Filter by disabled flag'),
            OpenApiParameter('search', str, description='Search in name and address'),
        ],
        responses={200: ShopSerializer(many=True)},
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        summary="Earliest available slot",
        description="""
        First bookable start time for the given date (today by default),
        across all on-duty barbers. Used for the "next available" hint.
        """,
        parameters=[
            OpenApiParameter('date', OpenApiTypes.DATE, description='Target date (YYYY-MM-DD), defaults to today'),
            OpenApiParameter('duration', int, description='Service duration in minutes'),
        ],
        responses={
            200: EarliestSlotResponseSerializer,
            404: OpenApiResponse(description="Shop not found")
        },
    )
    @action(detail=True, methods=['get'], url_path='earliest-slot')
    def earliest_slot(self, request, pk=None):
        """Earliest open slot for the shop"""
        shop = self.get_object()

        date_param = request.query_params.get('date')
        target_date = parse_date(date_param) if date_param else shop_now()[0]
        try:
            duration = int(request.query_params.get('duration') or DEFAULT_SERVICE_DURATION)
        except ValueError:
            raise ValidationError('Invalid duration.')
        if duration < 1 or duration > MAX_SERVICE_DURATION:
            raise ValidationError('Invalid duration.')

        slot = SlotGenerator(shop, target_date, duration=duration).earliest_slot()
        return Response({
            'shop_id': shop.id,
            'date': target_date,
            'earliest_slot': slot,
        })
