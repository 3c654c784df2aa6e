"""
Barber URL configuration
"""
from rest_framework.routers import DefaultRouter
from .views import BarberViewSet

app_name = 'staff'

router = DefaultRouter()
router.register(r'', BarberViewSet, basename='barber')

urlpatterns = router.urls
