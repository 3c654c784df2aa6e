"""
Celery application configuration for the HairOne backend.
"""
import os
from celery import Celery
from celery.schedules import crontab

# Set the default Django settings module
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

app = Celery('hairone')

# Using a string here means the worker doesn't have to serialize
# the configuration object to child processes.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Load task modules from all registered Django app configs.
app.autodiscover_tasks()

# Celery Beat Schedule for periodic tasks (shop-local time, see CELERY_TIMEZONE)
app.conf.beat_schedule = {
    # Upcoming bookings past their end become no-shows, stale pending ones are cancelled
    'close-missed-bookings': {
        'task': 'bookings.close_missed_bookings',
        'schedule': crontab(minute='*/30'),
    },

    # Settle completed bookings from previous weeks
    'run-weekly-settlements': {
        'task': 'finance.run_weekly_settlements',
        'schedule': crontab(hour=0, minute=0),
    },
}
