"""WhatsApp click-to-chat links with prefilled text."""
from urllib.parse import quote

from caterhub.core.config import settings

CATERING_INQUIRY = "Hi! I'm interested in your catering services. Could you please provide more information?"


def whatsapp_link(text: str = None, number: str = None) -> str:
    number = "".join(ch for ch in (number or settings.whatsapp_number) if ch.isdigit())
    url = f"https://wa.me/{number}"
    if text:
        url += f"?text={quote(text, safe='')}"
    return url


def menu_item_order_message(name: str, price_label: str, price_note: str, category_name: str) -> str:
    details = price_label + (f" - {price_note}" if price_note else "")
    business = settings.business_name.replace(" ", "")
    return f"Hello {business}! I'd like to order {name} ({details}) from your {category_name} menu."


def menu_item_order_link(name: str, price_label: str, price_note: str, category_name: str) -> str:
    return whatsapp_link(menu_item_order_message(name, price_label, price_note, category_name))


def catering_inquiry_link() -> str:
    return whatsapp_link(CATERING_INQUIRY)
