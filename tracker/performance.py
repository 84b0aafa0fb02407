"""
Page performance collection.
"""
import logging

from .events import PERFORMANCE, PERFORMANCE_METRIC
from .page import ObserverUnsupported

logger = logging.getLogger(__name__)

# Seconds to wait after the load event so late paint entries are recorded.
PERFORMANCE_DELAY = 1.0


class PerformanceCollector:
    """
    Reads load timings from a page and reports them through a track callable.

    collect() sends one 'performance' event with ttfb (time to first byte) and
    fcp (first contentful paint) when either is available, and registers
    observers that report lcp, fid and cls as separate 'performance_metric'
    events as the page records them.
    """

    def __init__(self, page, track, debug=False):
        self.page = page
        self.track = track
        self.debug = debug
        self.cumulative_layout_shift = 0.0

    def collect(self):
        if not self.page.performance_supported:
            return None

        data = {}
        navigation = self.page.navigation_timing
        if navigation is not None:
            data['ttfb'] = navigation.response_start - navigation.fetch_start

        for entry in self.page.paint_entries:
            if entry.name == 'first-contentful-paint':
                data['fcp'] = entry.start_time

        self._observe()

        if data:
            return self.track(PERFORMANCE, data)
        return None

    def _observe(self):
        observers = (
            ('largest-contentful-paint', self._on_largest_contentful_paint),
            ('first-input', self._on_first_input),
            ('layout-shift', self._on_layout_shift),
        )
        for entry_type, callback in observers:
            try:
                self.page.observe(entry_type, callback)
            except ObserverUnsupported as e:
                if self.debug:
                    logger.warning(f"Analytics: Could not observe performance metrics: {e}")
            except Exception as e:
                logger.warning(f"Analytics: Performance observer setup failed: {e}")

    def _on_largest_contentful_paint(self, entries):
        if entries:
            self._send_metric('lcp', entries[-1].start_time)

    def _on_first_input(self, entries):
        if entries and entries[0].processing_start is not None:
            first = entries[0]
            self._send_metric('fid', first.processing_start - first.start_time)

    def _on_layout_shift(self, entries):
        for entry in entries:
            if not entry.had_recent_input:
                self.cumulative_layout_shift += entry.value
        self._send_metric('cls', self.cumulative_layout_shift)

    def _send_metric(self, metric_type, value):
        self.track(PERFORMANCE_METRIC, {
            'metricType': metric_type,
            'value': round(value, 2),
        })
