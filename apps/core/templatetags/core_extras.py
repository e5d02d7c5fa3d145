from django import template

from apps.core.adapters.translator import CatalogTranslator

register = template.Library()


@register.filter
def t(key):
    """{{ 'dashboard.all_caught_up'|t }} - tekst w aktywnym języku."""
    return CatalogTranslator().translate(str(key))


@register.filter
def status_label(milestone):
    status = getattr(milestone.status, 'value', milestone.status)
    return CatalogTranslator().translate(f"timeline.status.{status}")
