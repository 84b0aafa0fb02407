from django.contrib import admin

from .models import AnalyticsEvent


@admin.register(AnalyticsEvent)
class AnalyticsEventAdmin(admin.ModelAdmin):
    """
    Read-only admin view for tracked events.
    Events are append-only; they cannot be added, edited or deleted here.
    """
    list_display = (
        "id",
        "website",
        "event_type",
        "page_url",
        "device_type",
        "browser",
        "os",
        "ip_address",
        "created_at",
    )
    list_filter = (
        "website",
        "event_type",
        "device_type",
        "browser",
        "os",
        "created_at",
    )
    search_fields = (
        "event_type",
        "page_url",
        "session_id",
        "user_id",
        "ip_address",
        "website__name",
        "website__domain",
    )
    ordering = ("-created_at",)
    readonly_fields = (
        "website",
        "event_type",
        "page_url",
        "referrer",
        "user_agent",
        "ip_address",
        "device_type",
        "browser",
        "os",
        "session_id",
        "user_id",
        "metadata",
        "created_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
