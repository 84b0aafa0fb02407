"""
Tracking client embedded in a monitored web page.

Observes page activity and reports it to the analytics ingestion endpoint.
One Analytics instance is created per embedding page.

Example:
    >>> page = Page(url='https://shop.example.com/', title='Shop')
    >>> analytics = Analytics(page, {'apiKey': 'ak_...'})
    >>> analytics.init()
    >>> analytics.set_user_id('customer-42')
    >>> analytics.track('signup', {'plan': 'pro'})
"""
import copy
import logging
import threading
import time
import uuid
from typing import Any, Dict, Optional

from .config import AnalyticsConfig
from .events import (
    CLICK,
    FORM_SUBMISSION,
    PAGE_EXIT,
    PAGE_VISIBILITY,
    PAGEVIEW,
    TrackedEvent,
)
from .performance import PERFORMANCE_DELAY, PerformanceCollector
from .transport import Transport

logger = logging.getLogger(__name__)

# Form fields whose name contains any of these (case-insensitive) are never reported.
SENSITIVE_FIELDS = (
    'password',
    'confirm_password',
    'credit_card',
    'creditcard',
    'ccnumber',
    'cvv',
    'ssn',
    'social_security',
)

CLICK_TEXT_LIMIT = 100


def is_sensitive_field(field_name: str) -> bool:
    lowered = field_name.lower()
    return any(sensitive in lowered for sensitive in SENSITIVE_FIELDS)


def _compact(data):
    """Drop unset (None or empty string) values."""
    return {key: value for key, value in data.items() if value is not None and value != ''}


def _form_value(value):
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def _start_timer(delay, callback):
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


class Analytics:
    """
    Tracking client bound to one page.

    The session identifier is an opaque random token; the session start time
    is kept separately and used for time-on-page.

    Args:
        page: Page the client observes
        config: API key string, option mapping or AnalyticsConfig applied at init()
        session: requests.Session-compatible object used by the transport
        executor: Executor running the transport's sends
        scheduler: Callable(delay_seconds, callback) used for delayed work
        clock: Callable returning the current time in seconds
    """

    def __init__(self, page, config=None, session=None, executor=None, scheduler=None, clock=None):
        self.page = page
        self.config = AnalyticsConfig().merge(config)
        self._clock = clock or time.time
        self.session_id = uuid.uuid4().hex
        self.session_started_at = self._clock()
        self.user_id: Optional[str] = None
        self.is_initialized = False
        self._session = session
        self._executor = executor
        self._scheduler = scheduler or _start_timer
        self._transport: Optional[Transport] = None
        self._listeners_attached = False
        self._performance: Optional[PerformanceCollector] = None

    def init(self, credential_or_config=None) -> bool:
        """
        Initialize the client.

        Args:
            credential_or_config: API key, option mapping or AnalyticsConfig
                merged over the constructor configuration

        Returns:
            True when initialized; False (after logging) when the configuration
            is unusable, in which case the client stays uninitialized
        """
        try:
            config = self.config.merge(credential_or_config)
        except TypeError as e:
            logger.error(f"Analytics: {e}")
            return False

        if not config.api_key:
            logger.error("Analytics: API key is required")
            return False

        config.endpoint = config.resolve_endpoint(self.page.hostname)
        self.config = config

        if self._transport is not None:
            self._transport.close()
        self._transport = Transport(
            config.endpoint,
            debug=config.debug,
            timeout=config.timeout,
            session=self._session,
            executor=self._executor,
        )
        self.is_initialized = True

        if config.debug:
            logger.info(f"Analytics initialized with endpoint {config.endpoint}")

        if config.auto_track:
            self._setup_auto_tracking()
            if config.track_page_views:
                self.track_page_view()
            if config.track_performance:
                self._track_performance()

        return True

    def shutdown(self) -> None:
        """Stop tracking. In-flight sends are abandoned, not awaited."""
        if self._transport is not None:
            self._transport.close()
            self._transport = None
        self.is_initialized = False

    def track(self, event_type: str, metadata: Optional[Dict[str, Any]] = None):
        """
        Send a custom event.

        Returns:
            Future resolving to True/False once delivery finishes, or None when
            nothing was sent
        """
        if not self.is_initialized:
            logger.warning("Analytics: SDK not initialized. Call init() first.")
            return None

        event = TrackedEvent(
            event_type=event_type,
            page_url=self.page.url,
            referrer=self.page.referrer or None,
            user_agent=self.page.user_agent or None,
            session_id=self.session_id,
            user_id=self.user_id,
            metadata=copy.deepcopy(metadata),
        )

        try:
            return self._transport.send(event.to_payload(self.config.api_key))
        except RuntimeError as e:
            if self.config.debug:
                logger.warning(f"Analytics: Could not dispatch {event_type} event: {e}")
            return None

    def track_page_view(self, url: Optional[str] = None):
        return self.track(PAGEVIEW, {
            'url': url or self.page.url,
            'title': self.page.title,
            'path': self.page.path,
        })

    def track_click(self, element, metadata: Optional[Dict[str, Any]] = None):
        click_data = _compact({
            'tagName': element.tag_name.lower(),
            'id': element.id,
            'className': element.class_name,
            'text': (element.text or '')[:CLICK_TEXT_LIMIT],
            'href': element.href,
        })
        click_data.update(metadata or {})
        return self.track(CLICK, click_data)

    def track_form_submission(self, form, metadata: Optional[Dict[str, Any]] = None):
        """
        Report a form submission.
        fieldCount counts every entry; sensitive fields are left out of 'fields'.
        """
        fields = {}
        field_count = 0
        for name, value in form.fields:
            field_count += 1
            if not is_sensitive_field(name):
                fields[name] = _form_value(value)

        submission_data = _compact({
            'formId': form.id,
            'formName': form.name,
            'action': form.action,
            'method': form.method or 'get',
            'fieldCount': field_count,
            'fields': fields or None,
        })
        submission_data.update(metadata or {})
        return self.track(FORM_SUBMISSION, submission_data)

    def set_user_id(self, user_id: str) -> None:
        self.user_id = user_id
        if self.config.debug:
            logger.info(f"Analytics: User ID set to {user_id}")

    def clear_user_id(self) -> None:
        self.user_id = None
        if self.config.debug:
            logger.info("Analytics: User ID cleared")

    def time_on_page_ms(self) -> int:
        return int(round((self._clock() - self.session_started_at) * 1000))

    # Automatic tracking

    def _setup_auto_tracking(self):
        if self._listeners_attached:
            return
        self._listeners_attached = True

        if self.config.track_clicks:
            self.page.add_listener('click', self._on_click)
        if self.config.track_forms:
            self.page.add_listener('submit', self._on_submit)
        self.page.add_listener('visibilitychange', self._on_visibility_change)
        self.page.add_listener('beforeunload', self._on_unload)

    def _on_click(self, element):
        if element is not None:
            self.track_click(element)

    def _on_submit(self, form):
        if form is not None:
            self.track_form_submission(form)

    def _on_visibility_change(self, _target=None):
        self.track(PAGE_VISIBILITY, {
            'visible': not self.page.hidden,
            'visibilityState': self.page.visibility_state,
        })

    def _on_unload(self, _target=None):
        self.track(PAGE_EXIT, {'timeOnPage': self.time_on_page_ms()})

    def _track_performance(self):
        if self._performance is not None:
            return
        self._performance = PerformanceCollector(self.page, self.track, debug=self.config.debug)

        if self.page.ready_state == 'complete':
            self._performance.collect()
        else:
            self.page.add_listener('load', self._on_load)

    def _on_load(self, _target=None):
        self._scheduler(PERFORMANCE_DELAY, self._performance.collect)
