"""
Signals for finance app.
"""
from django.db import transaction
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver

from apps.finance.models import SystemConfig
from apps.finance.services.system_config import invalidate_system_config


@receiver(post_save, sender=SystemConfig)
@receiver(post_delete, sender=SystemConfig)
def drop_cached_system_config(sender, instance, **kwargs):
    """
    Next booking reads the new rates.

    Dropped now for readers inside this transaction and again after commit,
    once other connections can see the new row.
    """
    invalidate_system_config()
    transaction.on_commit(invalidate_system_config)
