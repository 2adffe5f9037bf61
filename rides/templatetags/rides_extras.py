from django import template

from ..rendering import whatsapp_link

register = template.Library()

@register.filter
def wa_link(phone):
    # usage: reg.phone_number|wa_link
    return whatsapp_link(phone or '')
