import uuid
from django.db import models
from django.utils.text import slugify


class Organization(models.Model):
    """
    Represents a tenant (customer company) of the analytics platform.
    Each organization owns one or more registered websites.
    """
    PLAN_CHOICES = [
        ('free', 'Free'),
        ('pro', 'Pro'),
        ('enterprise', 'Enterprise'),
    ]

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the organization"
    )
    name = models.CharField(
        max_length=255,
        help_text="Organization display name"
    )
    slug = models.SlugField(
        max_length=255,
        unique=True,
        help_text="URL-friendly identifier for the organization"
    )
    email = models.EmailField(
        blank=True,
        help_text="Billing and contact email address"
    )
    plan = models.CharField(
        max_length=20,
        choices=PLAN_CHOICES,
        default='free',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Organization'
        verbose_name_plural = 'Organizations'

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        """Derive a unique slug from the name when none is given"""
        if not self.slug:
            base_slug = slugify(self.name) or 'organization'
            slug = base_slug
            counter = 1

            while Organization.objects.filter(slug=slug).exclude(pk=self.pk).exists():
                slug = f"{base_slug}-{counter}"
                counter += 1

            self.slug = slug

        super().save(*args, **kwargs)

    def get_active_website_count(self):
        """Number of websites currently accepting events"""
        return self.websites.filter(is_active=True).count()
