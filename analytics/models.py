import uuid
from django.db import models
from websites.models import Website
from .exceptions import ImmutableEventError


class AnalyticsEventQuerySet(models.QuerySet):

    def update(self, **kwargs):
        """Stored events are never modified; bulk updates are refused."""
        raise ImmutableEventError(
            message="Analytics events cannot be modified",
            error_code='event_immutable'
        )

    def bulk_update(self, objs, fields, batch_size=None):
        return self.update()


class AnalyticsEvent(models.Model):
    """
    An event reported by the tracking client, enriched on ingestion.
    Includes website, event type, page context, request-derived IP address and
    the device, browser and OS classified from the user agent.
    Rows are written once and never updated.
    """
    DEVICE_CHOICES = [
        ('desktop', 'Desktop'),
        ('mobile', 'Mobile'),
        ('tablet', 'Tablet'),
    ]
    BROWSER_CHOICES = [
        ('chrome', 'Chrome'),
        ('firefox', 'Firefox'),
        ('safari', 'Safari'),
        ('edge', 'Edge'),
        ('unknown', 'Unknown'),
    ]
    OS_CHOICES = [
        ('windows', 'Windows'),
        ('macos', 'macOS'),
        ('linux', 'Linux'),
        ('android', 'Android'),
        ('ios', 'iOS'),
        ('unknown', 'Unknown'),
    ]

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the event"
    )
    website = models.ForeignKey(
        Website,
        on_delete=models.CASCADE,
        related_name='events',
        help_text="Website this event was reported for"
    )
    event_type = models.CharField(max_length=200, db_index=True)
    page_url = models.TextField(null=True, blank=True)
    referrer = models.TextField(null=True, blank=True)
    user_agent = models.TextField(blank=True, default='')
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    device_type = models.CharField(max_length=20, choices=DEVICE_CHOICES, default='desktop')
    browser = models.CharField(max_length=20, choices=BROWSER_CHOICES, default='unknown')
    os = models.CharField(max_length=20, choices=OS_CHOICES, default='unknown')
    session_id = models.CharField(max_length=255, null=True, blank=True, db_index=True)
    user_id = models.CharField(max_length=255, null=True, blank=True, db_index=True)
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    objects = AnalyticsEventQuerySet.as_manager()

    class Meta:
        indexes = [
            models.Index(fields=["website", "created_at"], name="analytics_ev_web_created_idx"),
            models.Index(fields=["website", "event_type", "created_at"], name="analytics_ev_web_type_idx"),
        ]
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.website.name} - {self.event_type} - {self.created_at}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableEventError(
                message=f"Analytics event {self.pk} cannot be modified",
                error_code='event_immutable'
            )
        super().save(*args, **kwargs)
