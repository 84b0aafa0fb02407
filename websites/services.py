"""
Website registry lookups used by the ingestion endpoint.
"""
import logging
from typing import Optional

from .models import Website

logger = logging.getLogger(__name__)


def find_active_by_api_key(api_key: str) -> Optional[Website]:
    """
    Resolve an API key to an active website.

    Args:
        api_key: Key sent by the tracking client

    Returns:
        Website instance, or None when the key is unknown or the website is inactive
    """
    if not api_key:
        return None

    website = Website.objects.active().filter(api_key=api_key).first()
    if website is None:
        logger.debug("No active website for the supplied API key")
    return website
