"""
Tests for analytics service functions.

Tests cover:
- User agent classification (device, browser, OS)
- Client IP derivation from proxy headers
- Event recording and API key authorization
"""
from unittest.mock import patch

import pytest
from django.test import RequestFactory

from analytics.exceptions import InvalidApiKey
from analytics.models import AnalyticsEvent
from analytics.services import (
    get_client_ip,
    ingest_event,
    parse_user_agent,
    record_event,
    resolve_user_agent,
)
from analytics.tests.user_agents import FIREFOX_WINDOWS_UA, IPHONE_UA

ANDROID_UA = (
    'Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36'
)
IPAD_UA = 'Mozilla/5.0 (iPad; CPU OS 12_2 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/12.1 Safari/605.1.15'
IPAD_MOBILE_UA = (
    'Mozilla/5.0 (iPad; CPU OS 17_0 like Mac OS X) AppleWebKit/605.1.15 '
    '(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1'
)
EDGE_WINDOWS_UA = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36 Edg/120.0.0.0'
)
SAFARI_MAC_UA = (
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 14_1) AppleWebKit/605.1.15 '
    '(KHTML, like Gecko) Version/17.1 Safari/605.1.15'
)
FIREFOX_LINUX_UA = 'Mozilla/5.0 (X11; Ubuntu; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0'


class TestParseUserAgent:
    """Tests for parse_user_agent()"""

    @pytest.mark.parametrize('user_agent,expected', [
        (IPHONE_UA, ('mobile', 'safari', 'ios')),
        (ANDROID_UA, ('mobile', 'chrome', 'android')),
        (IPAD_UA, ('tablet', 'safari', 'ios')),
        (FIREFOX_WINDOWS_UA, ('desktop', 'firefox', 'windows')),
        (EDGE_WINDOWS_UA, ('desktop', 'edge', 'windows')),
        (SAFARI_MAC_UA, ('desktop', 'safari', 'macos')),
        (FIREFOX_LINUX_UA, ('desktop', 'firefox', 'linux')),
        ('curl/8.4.0', ('desktop', 'unknown', 'unknown')),
        ('', ('desktop', 'unknown', 'unknown')),
        (None, ('desktop', 'unknown', 'unknown')),
    ])
    def test_classification(self, user_agent, expected):
        info = parse_user_agent(user_agent)

        assert (info.device_type, info.browser, info.os) == expected

    def test_mobile_wins_over_tablet(self):
        assert parse_user_agent(IPAD_MOBILE_UA).device_type == 'mobile'

    def test_specific_rules_win_over_broad_tokens(self):
        legacy_edge = parse_user_agent('Mozilla/5.0 (Windows NT 10.0) Chrome/70.0 Safari/537.36 Edge/18.17763')
        android = parse_user_agent(ANDROID_UA)
        iphone = parse_user_agent(IPHONE_UA)

        assert legacy_edge.browser == 'edge'
        assert android.os == 'android'
        assert iphone.os == 'ios'

    def test_case_insensitive(self):
        info = parse_user_agent('SOMETHING IPHONE FIREFOX')

        assert info.device_type == 'mobile'
        assert info.browser == 'firefox'
        assert info.os == 'ios'


class TestGetClientIp:
    """Tests for get_client_ip()"""

    def setup_method(self):
        self.factory = RequestFactory()

    def test_forwarded_for_takes_precedence(self):
        request = self.factory.post(
            '/api/analytics/track',
            HTTP_X_FORWARDED_FOR='1.2.3.4, 5.6.7.8',
            HTTP_X_REAL_IP='9.9.9.9',
        )

        assert get_client_ip(request) == '1.2.3.4'

    def test_real_ip_when_no_forwarded_for(self):
        request = self.factory.post('/api/analytics/track', HTTP_X_REAL_IP='9.9.9.9')

        assert get_client_ip(request) == '9.9.9.9'

    def test_remote_addr(self):
        request = self.factory.post('/api/analytics/track', REMOTE_ADDR='203.0.113.9')

        assert get_client_ip(request) == '203.0.113.9'

    def test_malformed_header_is_skipped(self):
        request = self.factory.post(
            '/api/analytics/track',
            HTTP_X_FORWARDED_FOR='unknown',
            HTTP_X_REAL_IP='9.9.9.9',
        )

        assert get_client_ip(request) == '9.9.9.9'

    def test_ipv6(self):
        request = self.factory.post('/api/analytics/track', HTTP_X_FORWARDED_FOR='2001:db8::1')

        assert get_client_ip(request) == '2001:db8::1'

    def test_fallback(self):
        request = self.factory.post('/api/analytics/track')
        request.META.pop('REMOTE_ADDR', None)

        assert get_client_ip(request) == '127.0.0.1'

    def test_fallback_setting(self, settings):
        settings.ANALYTICS_FALLBACK_IP = '0.0.0.0'
        request = self.factory.post('/api/analytics/track')
        request.META.pop('REMOTE_ADDR', None)

        assert get_client_ip(request) == '0.0.0.0'


class TestResolveUserAgent:
    """Tests for resolve_user_agent()"""

    def setup_method(self):
        self.factory = RequestFactory()

    def test_payload_value_wins(self):
        request = self.factory.post('/', HTTP_USER_AGENT='HeaderAgent')

        assert resolve_user_agent('PayloadAgent', request) == 'PayloadAgent'

    def test_header_fallback(self):
        request = self.factory.post('/', HTTP_USER_AGENT='HeaderAgent')

        assert resolve_user_agent('', request) == 'HeaderAgent'
        assert resolve_user_agent(None, request) == 'HeaderAgent'

    def test_empty_when_absent(self):
        assert resolve_user_agent(None, self.factory.post('/')) == ''


@pytest.mark.django_db
class TestRecordEvent:
    """Tests for record_event()"""

    def test_enriches_and_persists(self, website):
        event = record_event(
            website=website,
            event_type='pageview',
            ip_address='1.2.3.4',
            user_agent=IPHONE_UA,
            page_url='https://shop.example.com/',
            session_id='abc123',
            metadata={'path': '/'},
        )

        event.refresh_from_db()
        assert event.website == website
        assert event.device_type == 'mobile'
        assert event.browser == 'safari'
        assert event.os == 'ios'
        assert event.ip_address == '1.2.3.4'
        assert event.session_id == 'abc123'
        assert event.user_id is None
        assert event.referrer is None
        assert event.metadata == {'path': '/'}

    def test_metadata_defaults_to_empty_dict(self, website):
        event = record_event(website, 'signup', '1.2.3.4', '')

        assert event.metadata == {}
        assert event.user_agent == ''


@pytest.mark.django_db
class TestIngestEvent:
    """Tests for ingest_event()"""

    def setup_method(self):
        self.factory = RequestFactory()

    def test_records_event_for_active_website(self, website):
        request = self.factory.post('/api/analytics/track', HTTP_USER_AGENT=FIREFOX_WINDOWS_UA)

        event = ingest_event(request, {'apiKey': website.api_key, 'eventType': 'click'})

        assert event.website_id == website.id
        assert event.browser == 'firefox'
        assert event.user_agent == FIREFOX_WINDOWS_UA
        assert event.ip_address == '127.0.0.1'

    def test_unknown_key_raises(self, website):
        request = self.factory.post('/api/analytics/track')

        with pytest.raises(InvalidApiKey) as exc_info:
            ingest_event(request, {'apiKey': 'ak_unknown', 'eventType': 'click'})

        assert exc_info.value.status_code == 401
        assert AnalyticsEvent.objects.count() == 0

    def test_inactive_website_raises_same_error(self, inactive_website):
        request = self.factory.post('/api/analytics/track')

        with pytest.raises(InvalidApiKey) as exc_info:
            ingest_event(request, {'apiKey': inactive_website.api_key, 'eventType': 'click'})

        assert exc_info.value.message == 'Invalid API key or website inactive'

    @patch('analytics.services.record_event')
    def test_no_record_when_unauthorized(self, mock_record, website):
        with pytest.raises(InvalidApiKey):
            ingest_event(self.factory.post('/'), {'apiKey': 'ak_unknown', 'eventType': 'click'})

        mock_record.assert_not_called()
