from django.urls import path
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'schedules'

router = DefaultRouter()
router.register(r'weekly', views.BarberWeeklyScheduleViewSet, basename='weekly-schedule')
router.register(r'special-hours', views.BarberSpecialHoursViewSet, basename='special-hours')
router.register(r'barbers', views.ScheduleViewSet, basename='barber-schedule')

urlpatterns = [
    path('slots/', views.SlotListView.as_view(), name='slot-list'),
] + router.urls
