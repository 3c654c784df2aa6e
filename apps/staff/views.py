"""
Barber views
"""
import logging

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiTypes
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import SearchFilter, OrderingFilter

from .models import Barber
from .serializers import BarberSerializer, BarberAvailabilitySerializer

logger = logging.getLogger(__name__)


class BarberViewSet(viewsets.ModelViewSet):
    """
    ViewSet for managing barbers.

    Barbers with bookings cannot be deleted; switch them off duty instead.
    """
    queryset = Barber.objects.select_related('shop')
    serializer_class = BarberSerializer
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ['shop', 'is_available']
    search_fields = ['name']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']
    http_method_names = ['get', 'post', 'put', 'patch', 'head', 'options']

    def get_queryset(self):
        queryset = super().get_queryset()

        # Filter by shop if provided
        shop_id = self.request.query_params.get('shop_id')
        if shop_id:
            queryset = queryset.filter(shop_id=shop_id)

        return queryset

    @extend_schema(
        summary="List barbers",
        parameters=[
            OpenApiParameter('shop_id', OpenApiTypes.UUID, description='Filter by shop ID'),
            OpenApiParameter('is_available', bool, description='Filter by duty toggle'),
        ],
        responses={200: BarberSerializer(many=True)},
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        summary="Toggle on/off duty",
        description="An off-duty barber is never offered for new bookings.",
        request=BarberAvailabilitySerializer,
        responses={200: BarberSerializer},
    )
    @action(detail=True, methods=['post'], url_path='availability')
    def set_availability(self, request, pk=None):
        barber = self.get_object()
        serializer = BarberAvailabilitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        barber.is_available = serializer.validated_data['is_available']
        barber.save(update_fields=['is_available', 'updated_at'])
        logger.info(f"Barber {barber.id} is_available={barber.is_available}")

        return Response(BarberSerializer(barber).data)
