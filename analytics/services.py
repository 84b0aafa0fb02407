"""
Analytics service functions for ingesting tracked events.

The ingestion pipeline is: authorize the API key against the website
registry, enrich the payload with request-derived metadata, then append
one AnalyticsEvent row.
"""
import ipaddress
import logging
from dataclasses import dataclass

from django.conf import settings

from websites.services import find_active_by_api_key
from .exceptions import InvalidApiKey
from .models import AnalyticsEvent

logger = logging.getLogger(__name__)

DEFAULT_IP_HEADERS = ['HTTP_X_FORWARDED_FOR', 'HTTP_X_REAL_IP', 'REMOTE_ADDR']
DEFAULT_FALLBACK_IP = '127.0.0.1'

# Mobile keywords are checked before tablet keywords, so a user agent
# matching both classifies as mobile.
DEVICE_RULES = (
    ('mobile', ('mobile', 'android', 'iphone')),
    ('tablet', ('tablet', 'ipad')),
)

# Chromium-based Edge also carries "chrome" and "safari", Chrome carries
# "safari": the more specific tokens come first.
BROWSER_RULES = (
    ('edge', ('edg/', 'edge/', 'edga/', 'edgios/')),
    ('firefox', ('firefox', 'fxios')),
    ('chrome', ('chrome', 'crios')),
    ('safari', ('safari',)),
)

# Android user agents contain "linux" and iOS ones contain "mac os x".
OS_RULES = (
    ('windows', ('windows',)),
    ('android', ('android',)),
    ('ios', ('iphone', 'ipad', 'ipod', 'ios')),
    ('macos', ('mac',)),
    ('linux', ('linux',)),
)


@dataclass(frozen=True)
class UserAgentInfo:
    """Device, browser and OS classification of a user agent string."""
    device_type: str
    browser: str
    os: str


def _match(ua, rules, default):
    for label, keywords in rules:
        if any(keyword in ua for keyword in keywords):
            return label
    return default


def parse_user_agent(user_agent):
    """
    Classify a user agent by case-insensitive substring matching.
    Rules run most specific first (Edge before Chrome, Android before Linux,
    iOS before macOS) since those agents also carry the broader token.

    Args:
        user_agent: Raw User-Agent string (may be empty)

    Returns:
        UserAgentInfo with device_type, browser and os
    """
    ua = (user_agent or '').lower()
    return UserAgentInfo(
        device_type=_match(ua, DEVICE_RULES, 'desktop'),
        browser=_match(ua, BROWSER_RULES, 'unknown'),
        os=_match(ua, OS_RULES, 'unknown'),
    )


def _is_ip_address(value):
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def get_client_ip(request):
    """
    Derive the client IP address from proxy headers.

    Checks X-Forwarded-For (first entry), then X-Real-IP, then the socket
    remote address. Values that are not valid IP addresses are skipped.

    Args:
        request: Django HttpRequest

    Returns:
        IP address string, the loopback fallback when nothing usable is present
    """
    headers = getattr(settings, 'ANALYTICS_IP_HEADERS', DEFAULT_IP_HEADERS)
    for header in headers:
        value = request.META.get(header, '')
        if not value:
            continue
        candidate = value.split(',')[0].strip()
        if _is_ip_address(candidate):
            return candidate
        logger.debug(f"Ignoring malformed IP address in {header}: {candidate!r}")

    return getattr(settings, 'ANALYTICS_FALLBACK_IP', DEFAULT_FALLBACK_IP)


def resolve_user_agent(payload_user_agent, request):
    """
    User agent reported by the client, else the request header, else ''.
    """
    return payload_user_agent or request.META.get('HTTP_USER_AGENT', '') or ''


def record_event(website, event_type, ip_address, user_agent, page_url=None, referrer=None,
                 session_id=None, user_id=None, metadata=None):
    """
    Append an enriched event to the event store.

    Args:
        website: Website instance the event belongs to
        event_type: Event type tag (pageview, click, ...)
        ip_address: Client IP derived from the request
        user_agent: User agent string used for classification
        page_url, referrer, session_id, user_id: Optional client context
        metadata: Dictionary of event metadata

    Returns:
        AnalyticsEvent instance
    """
    info = parse_user_agent(user_agent)

    return AnalyticsEvent.objects.create(
        website=website,
        event_type=event_type,
        page_url=page_url,
        referrer=referrer,
        user_agent=user_agent,
        ip_address=ip_address,
        device_type=info.device_type,
        browser=info.browser,
        os=info.os,
        session_id=session_id,
        user_id=user_id,
        metadata=metadata if metadata is not None else {},
    )


def ingest_event(request, data):
    """
    Authorize, enrich and persist one validated tracking payload.

    Args:
        request: Incoming request, used for IP and User-Agent headers
        data: validated_data from TrackEventSerializer

    Returns:
        AnalyticsEvent instance

    Raises:
        InvalidApiKey: If the key is unknown or the website is inactive
    """
    website = find_active_by_api_key(data['apiKey'])
    if website is None:
        raise InvalidApiKey(error_code='invalid_api_key')

    event = record_event(
        website=website,
        event_type=data['eventType'],
        ip_address=get_client_ip(request),
        user_agent=resolve_user_agent(data.get('userAgent'), request),
        page_url=data.get('pageUrl'),
        referrer=data.get('referrer'),
        session_id=data.get('sessionId'),
        user_id=data.get('userId'),
        metadata=data.get('metadata'),
    )

    logger.debug(f"Recorded {event.event_type} event {event.id} for website {website.id}")
    return event
