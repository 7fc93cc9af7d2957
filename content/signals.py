from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import SiteContent
from .resolver import invalidate_content_cache


@receiver(post_save, sender=SiteContent)
@receiver(post_delete, sender=SiteContent)
def drop_cached_content(sender, **kwargs):
    invalidate_content_cache()
