"""
Postal code geocoding.
"""
import logging
from typing import Optional

import requests
from django.conf import settings

from ..domain.catalog import ParishLocator

logger = logging.getLogger(__name__)


class HttpParishLocator(ParishLocator):
    """
    Resolves a postal code to its parish through an HTTP lookup service.

    The service is called with ``codpostal1`` (prefix) and ``codpostal2``
    (suffix) and answers with a JSON list whose first entry carries the
    parish under ``localidade``.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: float = 5.0):
        self.base_url = base_url or getattr(settings, 'CART_POSTAL_CODE_LOOKUP_URL', '')
        self.timeout = timeout

    def locate(self, prefix: str, suffix: Optional[str]) -> Optional[str]:
        if not self.base_url:
            return None
        try:
            response = requests.get(
                self.base_url,
                params={'codpostal1': prefix, 'codpostal2': suffix or ''},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Postal code lookup failed for %s-%s: %s", prefix, suffix, e)
            return None

        if isinstance(payload, list) and payload:
            payload = payload[0]
        if not isinstance(payload, dict):
            return None
        return payload.get('localidade') or None
