"""
Model of the web page the tracking client is embedded in.

A host integration (headless browser bridge, server-side renderer, test
harness) owns a Page, feeds it the page's state and drives the DOM-like
events the client listens to: clicks, form submissions, visibility changes,
load completion and unload.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

# Performance entry types a modern browser can observe.
OBSERVABLE_ENTRY_TYPES = ('largest-contentful-paint', 'first-input', 'layout-shift')


@dataclass
class Element:
    """A clicked element."""
    tag_name: str
    id: str = ''
    class_name: str = ''
    text: str = ''
    href: str = ''


@dataclass
class Form:
    """
    A submitted form.

    fields holds (name, value) entries in document order; a name may repeat,
    e.g. for multi-select inputs.
    """
    id: str = ''
    name: str = ''
    action: str = ''
    method: str = ''
    fields: List[Tuple[str, Any]] = field(default_factory=list)


@dataclass
class NavigationTiming:
    """Navigation timing marks in milliseconds since navigation start."""
    fetch_start: float
    response_start: float


@dataclass
class PerformanceEntry:
    """
    A performance timeline entry.

    Paint and largest-contentful-paint entries use start_time; first-input
    entries add processing_start; layout-shift entries carry value and
    had_recent_input.
    """
    name: str = ''
    start_time: float = 0.0
    processing_start: Optional[float] = None
    value: float = 0.0
    had_recent_input: bool = False


class ObserverUnsupported(Exception):
    """Raised when the page cannot observe a performance entry type."""


class Page:
    """
    State and event hub of the embedding page.

    Listeners registered with add_listener receive a single argument: the
    event target (Element, Form) or None.
    """

    def __init__(
        self,
        url: str,
        title: str = '',
        referrer: str = '',
        user_agent: str = '',
        ready_state: str = 'loading',
        visibility_state: str = 'visible',
        navigation_timing: Optional[NavigationTiming] = None,
        paint_entries: Optional[List[PerformanceEntry]] = None,
        performance_supported: bool = True,
        observable_entry_types=OBSERVABLE_ENTRY_TYPES,
    ):
        self.url = url
        self.title = title
        self.referrer = referrer
        self.user_agent = user_agent
        self.ready_state = ready_state
        self.visibility_state = visibility_state
        self.navigation_timing = navigation_timing
        self.paint_entries = list(paint_entries or [])
        self.performance_supported = performance_supported
        self.observable_entry_types = tuple(observable_entry_types)
        self._listeners: Dict[str, List[Callable]] = defaultdict(list)
        self._observers: Dict[str, List[Callable]] = defaultdict(list)

    @property
    def hostname(self) -> str:
        return urlparse(self.url).hostname or ''

    @property
    def path(self) -> str:
        return urlparse(self.url).path or '/'

    @property
    def hidden(self) -> bool:
        return self.visibility_state != 'visible'

    # Listeners

    def add_listener(self, event_name: str, handler: Callable) -> None:
        self._listeners[event_name].append(handler)

    def remove_listener(self, event_name: str, handler: Callable) -> None:
        if handler in self._listeners[event_name]:
            self._listeners[event_name].remove(handler)

    def listener_count(self, event_name: str) -> int:
        return len(self._listeners[event_name])

    def dispatch(self, event_name: str, target: Any = None) -> None:
        """
        Call every listener for event_name.
        A failing listener is logged and does not stop the others, as in a browser.
        """
        for handler in list(self._listeners[event_name]):
            try:
                handler(target)
            except Exception:
                logger.exception(f"Listener for {event_name!r} raised")

    # Performance observers

    def observe(self, entry_type: str, callback: Callable[[List[PerformanceEntry]], None]) -> None:
        """
        Register callback for future entries of entry_type.

        Raises:
            ObserverUnsupported: If the page cannot observe entry_type
        """
        if not self.performance_supported or entry_type not in self.observable_entry_types:
            raise ObserverUnsupported(f"Cannot observe {entry_type!r} entries")
        self._observers[entry_type].append(callback)

    def record_entries(self, entry_type: str, entries: List[PerformanceEntry]) -> None:
        """Deliver a batch of performance entries to the observers of entry_type."""
        for callback in list(self._observers[entry_type]):
            try:
                callback(entries)
            except Exception:
                logger.exception(f"Performance observer for {entry_type!r} raised")

    # Host-driven page activity

    def click(self, element: Element) -> None:
        self.dispatch('click', element)

    def submit(self, form: Form) -> None:
        self.dispatch('submit', form)

    def set_visibility(self, visibility_state: str) -> None:
        self.visibility_state = visibility_state
        self.dispatch('visibilitychange')

    def complete_load(self) -> None:
        self.ready_state = 'complete'
        self.dispatch('load')

    def unload(self) -> None:
        self.dispatch('beforeunload')
