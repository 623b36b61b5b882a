"""Django signals for cache invalidation."""

import logging

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from eventhub.cache import EVENT_LIST_KEY, event_detail_key
from eventhub.models import Event

logger = logging.getLogger(__name__)


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate caches when an event is saved or deleted."""
    cache.delete_many([EVENT_LIST_KEY, event_detail_key(str(instance.pk))])
    logger.debug("Invalidated catalog cache for event %s", instance.pk)
