from django.db import models


class SiteContent(models.Model):
    """
    Editable site text. Keys are namespaced strings ('hero_title', 'faq_data');
    values are plain text or JSON-encoded lists read by the public pages.
    """
    key = models.CharField(max_length=100, unique=True)
    value = models.TextField(blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['key']
        verbose_name = 'site content'
        verbose_name_plural = 'site content'

    def __str__(self):
        return self.key
