from __future__ import annotations

import logging

import httpx

from apps.api.data.service_catalog import COMPANY, service_display_name
from apps.api.utils.quote_email import quote_subject
from core.config import settings

logger = logging.getLogger(__name__)


class RelayError(Exception):
    """The form relay could not be reached or rejected the submission."""


def build_relay_form(quote) -> dict:
    return {
        "access_key": settings.relay_access_key,
        "name": quote.name,
        "phone": quote.phone,
        "email": quote.email,
        "service": service_display_name(quote.service),
        "message": quote.message,
        "subject": quote_subject(quote.service),
        "from_name": COMPANY["name"],
        "reply_to": quote.email,
    }


def send_quote(quote) -> None:
    """POST a quote to the form relay. Raises RelayError on any transport or HTTP failure."""
    try:
        r = httpx.post(settings.relay_url, data=build_relay_form(quote), timeout=settings.relay_timeout_s)
        r.raise_for_status()
    except httpx.HTTPError as e:
        raise RelayError(str(e) or e.__class__.__name__) from e
    logger.info("quote relayed for %s (%s)", quote.email, quote.service)
