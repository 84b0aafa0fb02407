"""
Tracking client for the site analytics platform.

Provides the Analytics client, its configuration and the Page model a host
integration uses to feed page activity to the client.
"""

from .client import Analytics, SENSITIVE_FIELDS, is_sensitive_field
from .config import AnalyticsConfig
from .events import TrackedEvent
from .page import Element, Form, NavigationTiming, Page, PerformanceEntry
from .transport import Transport, TransportError

__all__ = [
    'Analytics',
    'AnalyticsConfig',
    'Element',
    'Form',
    'NavigationTiming',
    'Page',
    'PerformanceEntry',
    'SENSITIVE_FIELDS',
    'TrackedEvent',
    'Transport',
    'TransportError',
    'is_sensitive_field',
]
