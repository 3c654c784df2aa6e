"""
Abstract base model shared by every booking-core table
"""
import uuid
from django.db import models


class BaseModel(models.Model):
    """
    UUID primary key plus creation/modification timestamps.

    Ids may be assigned before the row is inserted; settlement ids are
    stamped on bookings first.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        get_latest_by = 'created_at'
