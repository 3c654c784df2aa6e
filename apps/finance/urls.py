from django.urls import path
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'finance'

router = DefaultRouter()
router.register(r'settlements', views.SettlementViewSet, basename='settlement')

urlpatterns = [
    path('system-config/', views.SystemConfigView.as_view(), name='system-config'),
    path('shops/<str:shop_id>/summary/', views.ShopFinanceSummaryView.as_view(), name='shop-finance-summary'),
    path('shops/<str:shop_id>/pending/', views.ShopPendingBookingsView.as_view(), name='shop-pending-bookings'),
] + router.urls
