"""
Tracking client configuration.
"""
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Optional

logger = logging.getLogger(__name__)

# Development server used when the page itself is served from localhost.
LOCAL_ENDPOINT = 'http://localhost:8000'
DEFAULT_ENDPOINT = 'https://analytics.example.com'

# Wire-style option names accepted alongside the attribute names.
OPTION_ALIASES = {
    'apiKey': 'api_key',
    'autoTrack': 'auto_track',
    'trackPageViews': 'track_page_views',
    'trackClicks': 'track_clicks',
    'trackForms': 'track_forms',
    'trackPerformance': 'track_performance',
}


@dataclass
class AnalyticsConfig:
    """
    Options recognised by the tracking client.

    Attributes:
        api_key: Website API key (required)
        endpoint: Base URL of the analytics server; derived from the page host when empty
        auto_track: Attach listeners and fire the initial page view / performance collection
        track_page_views, track_clicks, track_forms, track_performance: Per-feature switches
        debug: Log initialisation details and transport failures
        timeout: Per-request timeout in seconds; None leaves requests unbounded
    """
    api_key: str = ''
    endpoint: str = ''
    auto_track: bool = True
    track_page_views: bool = True
    track_clicks: bool = True
    track_forms: bool = True
    track_performance: bool = True
    debug: bool = False
    timeout: Optional[float] = None

    def merge(self, value) -> 'AnalyticsConfig':
        """
        Return a copy updated from a bare API key, a mapping of options or
        another AnalyticsConfig.

        Raises:
            TypeError: If value is none of those
        """
        if value is None:
            return replace(self)
        if isinstance(value, AnalyticsConfig):
            return replace(value)
        if isinstance(value, str):
            return replace(self, api_key=value)
        if isinstance(value, Mapping):
            known = {f.name for f in fields(self)}
            changes = {}
            for key, option in value.items():
                name = OPTION_ALIASES.get(key, key)
                if name not in known:
                    logger.warning(f"Analytics: ignoring unknown option {key!r}")
                    continue
                changes[name] = option
            return replace(self, **changes)
        raise TypeError(f"Expected an API key or a configuration mapping, got {type(value).__name__}")

    def resolve_endpoint(self, hostname: str) -> str:
        """Configured endpoint, else one derived from the page host."""
        if self.endpoint:
            return self.endpoint.rstrip('/')
        if hostname == 'localhost':
            return LOCAL_ENDPOINT
        return os.environ.get('ANALYTICS_DEFAULT_ENDPOINT', DEFAULT_ENDPOINT).rstrip('/')
