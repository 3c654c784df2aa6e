"""
Development settings

Local Postgres and Redis from .env; SQLite works too via
DATABASE_URL=sqlite:///db.sqlite3.
"""
from .base import *

DEBUG = True

ALLOWED_HOSTS = ['localhost', '127.0.0.1', '0.0.0.0']

# The mobile and web clients run on arbitrary dev ports
CORS_ALLOW_ALL_ORIGINS = True

# Serve the browsable API next to the JSON renderer
REST_FRAMEWORK['DEFAULT_RENDERER_CLASSES'] = [
    'rest_framework.renderers.JSONRenderer',
    'rest_framework.renderers.BrowsableAPIRenderer',
]

# Slot and reservation decisions are logged at DEBUG
LOGGING['loggers']['apps']['level'] = 'DEBUG'

# Run periodic jobs in-process when no worker is up
CELERY_TASK_ALWAYS_EAGER = env.bool('CELERY_TASK_ALWAYS_EAGER', default=False)
