"""
Test doubles for the tracking client: a synchronous executor and a
session that records requests instead of sending them.
"""
from concurrent.futures import Future
from types import SimpleNamespace


class ImmediateExecutor:
    """Runs submitted work synchronously so tests can assert right after track()."""

    def __init__(self):
        self.shutdown_called = False

    def submit(self, fn, *args, **kwargs):
        if self.shutdown_called:
            raise RuntimeError('cannot schedule new futures after shutdown')
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future

    def shutdown(self, wait=True):
        self.shutdown_called = True


class RecordingSession:
    """requests.Session stand-in recording every POST."""

    def __init__(self, status_code=200, error=None):
        self.status_code = status_code
        self.error = error
        self.requests = []
        self.closed = False

    def post(self, url, json=None, headers=None, timeout=None):
        self.requests.append({'url': url, 'json': json, 'headers': headers, 'timeout': timeout})
        if self.error is not None:
            raise self.error
        return SimpleNamespace(status_code=self.status_code)

    def close(self):
        self.closed = True

    @property
    def payloads(self):
        return [request['json'] for request in self.requests]

    def payloads_of(self, event_type):
        return [payload for payload in self.payloads if payload['eventType'] == event_type]


class ManualScheduler:
    """Collects delayed callbacks; run_all() fires them."""

    def __init__(self):
        self.scheduled = []

    def __call__(self, delay, callback):
        self.scheduled.append((delay, callback))

    def run_all(self):
        pending, self.scheduled = self.scheduled, []
        for _delay, callback in pending:
            callback()


class DeferredExecutor:
    """Holds submitted work until run_pending(), like a busy thread pool."""

    def __init__(self):
        self.pending = []

    def submit(self, fn, *args, **kwargs):
        future = Future()
        self.pending.append((future, fn, args, kwargs))
        return future

    def run_pending(self):
        pending, self.pending = self.pending, []
        for future, fn, args, kwargs in pending:
            future.set_result(fn(*args, **kwargs))

    def shutdown(self, wait=True):
        pass
