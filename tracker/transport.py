"""
Fire-and-forget delivery of tracked events.

Every send is an independent POST submitted to a thread pool. There is no
batching, queueing beyond the pool, retry or ordering between sends; a
failed send is dropped.
"""
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

TRACK_PATH = '/api/analytics/track'


class TransportError(Exception):
    """The analytics server answered with a non-2xx status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}")


class Transport:
    """
    Posts event payloads to {endpoint}/api/analytics/track.

    Args:
        endpoint: Analytics server base URL
        debug: Log successes and failures
        timeout: Request timeout in seconds (None for no timeout)
        session: requests.Session-compatible object; a new Session by default
        executor: Executor running the sends; a private thread pool by default
        max_workers: Size of the private thread pool
    """

    def __init__(
        self,
        endpoint: str,
        debug: bool = False,
        timeout: Optional[float] = None,
        session=None,
        executor=None,
        max_workers: int = 4,
    ):
        self.url = f"{endpoint.rstrip('/')}{TRACK_PATH}"
        self.debug = debug
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self._owns_executor = executor is None
        self.executor = executor if executor is not None else ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix='analytics-transport',
        )

    def send(self, payload: Dict[str, Any]) -> Future:
        """Submit payload for delivery and return without waiting."""
        return self.executor.submit(self._post, payload)

    def _post(self, payload: Dict[str, Any]) -> bool:
        try:
            response = self.session.post(
                self.url,
                json=payload,
                headers={'Content-Type': 'application/json'},
                timeout=self.timeout,
            )
            if not 200 <= response.status_code < 300:
                raise TransportError(response.status_code)
        except Exception as e:
            # Failures stop here; nothing reaches the embedding page.
            if self.debug:
                logger.warning(f"Analytics: Failed to send {payload.get('eventType')} event: {e}")
            return False

        if self.debug:
            logger.info(f"Analytics: Event sent successfully: {payload.get('eventType')}")
        return True

    def close(self) -> None:
        """Stop accepting sends. In-flight requests are not awaited."""
        if self._owns_executor:
            self.executor.shutdown(wait=False)
        if self._owns_session:
            self.session.close()
