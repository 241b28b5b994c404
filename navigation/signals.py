import logging

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from navigation.conf import NavigationSettings
from navigation.models import MenuItem
from navigation.services.cache import NavigationCache

logger = logging.getLogger(__name__)


@receiver(post_save, sender=MenuItem, dispatch_uid="navigation_clear_cache_on_save")
@receiver(post_delete, sender=MenuItem, dispatch_uid="navigation_clear_cache_on_delete")
def clear_navigation_cache(sender, instance, **kwargs):
    """Cached trees go stale whenever a menu row changes."""
    config = NavigationSettings.from_django()
    if not config.invalidate_on_change:
        return
    removed = NavigationCache.from_settings(config).clear()
    if removed:
        logger.info("Cleared %d navigation cache slot(s) after change to menu item %s", removed, instance.pk)
