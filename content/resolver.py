import json
import logging

from django.conf import settings
from django.core.cache import cache
from django.db import DatabaseError

from .models import SiteContent

logger = logging.getLogger(__name__)


def _cache_key():
    return getattr(settings, 'CONTENT_CACHE_KEY', 'site-content')


def load_content_map():
    """Return every content row as a {key: value} dict, cached for a few minutes."""
    content_map = cache.get(_cache_key())
    if content_map is None:
        content_map = dict(SiteContent.objects.values_list('key', 'value'))
        cache.set(_cache_key(), content_map, getattr(settings, 'CONTENT_CACHE_TIMEOUT', 300))
    return content_map


def invalidate_content_cache():
    cache.delete(_cache_key())


class ContentSnapshot:
    """
    Read-only view over a content map.

    Lookups never raise: a missing key or an unparseable JSON value
    falls back to the default the caller supplies.
    """

    def __init__(self, mapping=None):
        self._map = dict(mapping or {})

    def __contains__(self, key):
        return key in self._map

    def __len__(self):
        return len(self._map)

    def get(self, key, fallback=''):
        if key in self._map:
            return self._map[key]
        return fallback

    def get_json(self, key, fallback=None, expect=None):
        raw = self._map.get(key)
        if not raw:
            return fallback
        try:
            value = json.loads(raw)
        except (TypeError, ValueError):
            logger.debug("Content key %s holds invalid JSON", key)
            return fallback
        if expect is not None and not isinstance(value, expect):
            logger.debug("Content key %s is %s, expected %s", key, type(value).__name__, expect.__name__)
            return fallback
        return value

    def as_dict(self):
        return dict(self._map)


def get_site_content():
    try:
        return ContentSnapshot(load_content_map())
    except DatabaseError:
        logger.warning("Could not load site content, using defaults", exc_info=True)
        return ContentSnapshot()


def save_content_value(key, value):
    """
    Write a single content value, creating the row if needed.

    Returns False when the stored value is already identical.
    """
    obj, created = SiteContent.objects.get_or_create(key=key, defaults={'value': value})
    if created:
        return True
    if obj.value == value:
        return False
    obj.value = value
    obj.save(update_fields=['value', 'updated_at'])
    return True
