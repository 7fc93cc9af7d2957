from django import template

from content.resolver import ContentSnapshot, get_site_content

register = template.Library()


def _snapshot(context):
    site = context.get('site')
    if isinstance(site, ContentSnapshot):
        return site
    return get_site_content()


@register.simple_tag(takes_context=True)
def content(context, key, fallback=''):
    """{% content "hero_title" "Default title" %}"""
    return _snapshot(context).get(key, fallback)


@register.simple_tag(takes_context=True)
def content_json(context, key, fallback=None):
    """{% content_json "faq_data" as faqs %}"""
    if fallback is None:
        fallback = []
    return _snapshot(context).get_json(key, fallback)

