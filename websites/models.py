import secrets
import uuid
from django.db import models
from organizations.models import Organization

API_KEY_PREFIX = 'ak_'


def generate_api_key():
    """
    Generate a new website API key.

    Keys are 'ak_' followed by 64 hex characters (32 random bytes).
    """
    return f"{API_KEY_PREFIX}{secrets.token_hex(32)}"


class WebsiteQuerySet(models.QuerySet):

    def active(self):
        """Websites that currently accept tracked events"""
        return self.filter(is_active=True)


class Website(models.Model):
    """
    A website registered by an organization for tracking.
    The API key identifies the website on every tracked event; only active
    websites accept events.
    """
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the website"
    )
    organization = models.ForeignKey(
        Organization,
        on_delete=models.CASCADE,
        related_name='websites',
        help_text="Organization that owns this website"
    )
    name = models.CharField(max_length=255)
    domain = models.CharField(
        max_length=255,
        help_text="Domain the tracking script is embedded on (e.g. example.com)"
    )
    api_key = models.CharField(
        max_length=128,
        unique=True,
        default=generate_api_key,
        editable=False,
        help_text="Public key sent by the tracking client with every event"
    )
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = WebsiteQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Website'
        verbose_name_plural = 'Websites'

    def __str__(self):
        return f"{self.name} ({self.domain})"

    def regenerate_api_key(self):
        """Replace the API key. Events sent with the old key are rejected afterwards."""
        self.api_key = generate_api_key()
        self.save(update_fields=['api_key', 'updated_at'])
        return self.api_key

    def activate(self):
        self.is_active = True
        self.save(update_fields=['is_active', 'updated_at'])

    def deactivate(self):
        self.is_active = False
        self.save(update_fields=['is_active', 'updated_at'])
