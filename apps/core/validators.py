"""
Custom validators
"""
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _
import re

from apps.core.utils.constants import MAX_SERVICE_DURATION

HHMM_REGEX = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')


def validate_hhmm(value):
    """
    Validate a 24-hour "HH:mm" clock time
    """
    if value and not HHMM_REGEX.match(value):
        raise ValidationError(
            _('Time must be in the format "HH:mm" (00:00-23:59).')
        )


def validate_breaks(value):
    """
    Validate a list of {"start_time": "HH:mm", "end_time": "HH:mm"} breaks
    """
    if not isinstance(value, list):
        raise ValidationError(_('Breaks must be a list.'))
    for entry in value:
        if not isinstance(entry, dict) or 'start_time' not in entry or 'end_time' not in entry:
            raise ValidationError(_('Each break needs "start_time" and "end_time".'))
        validate_hhmm(entry['start_time'])
        validate_hhmm(entry['end_time'])


def validate_duration(value):
    """
    Validate duration in minutes (must be positive and reasonable)
    """
    if value <= 0 or value > MAX_SERVICE_DURATION:
        raise ValidationError(
            _('Duration must be between 1 and 480 minutes.')
        )
