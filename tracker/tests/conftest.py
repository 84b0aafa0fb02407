import pytest

from tracker.page import Page
from tracker.tests.helpers import ImmediateExecutor, ManualScheduler, RecordingSession

CHROME_MAC_UA = (
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)


@pytest.fixture
def page():
    return Page(
        url='https://shop.example.com/products/42?ref=home',
        title='Product 42',
        referrer='https://www.google.com/',
        user_agent=CHROME_MAC_UA,
    )


@pytest.fixture
def session():
    return RecordingSession()


@pytest.fixture
def executor():
    return ImmediateExecutor()


@pytest.fixture
def scheduler():
    return ManualScheduler()
