"""
URL configuration for the HairOne booking backend.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),

    # API v1 endpoints
    path('api/v1/shops/', include('apps.shops.urls')),
    path('api/v1/staff/', include('apps.staff.urls')),
    path('api/v1/schedules/', include('apps.schedules.urls')),
    path('api/v1/bookings/', include('apps.bookings.urls')),
    path('api/v1/finance/', include('apps.finance.urls')),
]
