from rest_framework import serializers
from .models import AnalyticsEvent


class StrictCharField(serializers.CharField):
    """
    CharField that only accepts JSON strings.
    DRF's CharField coerces numbers and booleans to text; tracked payloads
    with such values are malformed and must be rejected instead.
    """
    default_error_messages = {
        'invalid': 'Not a valid string.',
    }

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail('invalid')
        return super().to_internal_value(data)


class TrackEventSerializer(serializers.Serializer):
    """
    Validates the wire payload sent by the tracking client.
    apiKey and eventType are required; every other field is optional.
    Field names follow the client's camelCase wire format.
    """
    apiKey = StrictCharField(max_length=128, trim_whitespace=False)
    eventType = StrictCharField(max_length=200, trim_whitespace=False)
    pageUrl = StrictCharField(required=False, allow_blank=True, trim_whitespace=False)
    referrer = StrictCharField(required=False, allow_blank=True, trim_whitespace=False)
    userAgent = StrictCharField(required=False, allow_blank=True, trim_whitespace=False)
    sessionId = StrictCharField(required=False, allow_blank=True, max_length=255)
    userId = StrictCharField(required=False, allow_blank=True, max_length=255)
    metadata = serializers.DictField(required=False)


class AnalyticsEventSerializer(serializers.ModelSerializer):
    """
    Serializer for stored analytics events.
    Read-only representation used by the event listing endpoint.
    """
    class Meta:
        model = AnalyticsEvent
        fields = [
            'id',
            'website',
            'event_type',
            'page_url',
            'referrer',
            'user_agent',
            'ip_address',
            'device_type',
            'browser',
            'os',
            'session_id',
            'user_id',
            'metadata',
            'created_at',
        ]
        read_only_fields = fields
