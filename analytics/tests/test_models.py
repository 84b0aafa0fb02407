"""
Tests for the AnalyticsEvent model.
"""
import pytest

from analytics.exceptions import ImmutableEventError
from analytics.models import AnalyticsEvent


@pytest.mark.django_db
class TestAnalyticsEvent:

    def test_defaults(self, website):
        event = AnalyticsEvent.objects.create(website=website, event_type='signup')

        assert event.device_type == 'desktop'
        assert event.browser == 'unknown'
        assert event.os == 'unknown'
        assert event.metadata == {}
        assert event.user_agent == ''
        assert event.created_at is not None

    def test_str(self, website):
        event = AnalyticsEvent.objects.create(website=website, event_type='signup')

        assert str(event).startswith('Acme Store - signup - ')

    def test_stored_events_are_immutable(self, website):
        event = AnalyticsEvent.objects.create(website=website, event_type='signup')
        event.event_type = 'tampered'

        with pytest.raises(ImmutableEventError) as exc_info:
            event.save()

        assert exc_info.value.error_code == 'event_immutable'
        event.refresh_from_db()
        assert event.event_type == 'signup'

    def test_bulk_update_refused(self, website):
        AnalyticsEvent.objects.create(website=website, event_type='signup')

        with pytest.raises(ImmutableEventError):
            AnalyticsEvent.objects.filter(website=website).update(event_type='tampered')

        assert AnalyticsEvent.objects.get().event_type == 'signup'

    def test_bulk_update_objects_refused(self, website):
        event = AnalyticsEvent.objects.create(website=website, event_type='signup')
        event.event_type = 'tampered'

        with pytest.raises(ImmutableEventError):
            AnalyticsEvent.objects.bulk_update([event], ['event_type'])

        assert AnalyticsEvent.objects.get().event_type == 'signup'

    def test_deleted_with_website(self, website):
        AnalyticsEvent.objects.create(website=website, event_type='signup')
        website.delete()

        assert AnalyticsEvent.objects.count() == 0
