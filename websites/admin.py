from django.contrib import admin, messages

from .models import Website


@admin.register(Website)
class WebsiteAdmin(admin.ModelAdmin):
    """
    Admin view for registered websites.
    API keys are read-only and rotated through the regenerate action.
    """
    list_display = (
        "name",
        "domain",
        "organization",
        "is_active",
        "created_at",
    )
    list_filter = (
        "is_active",
        "organization",
        "created_at",
    )
    search_fields = (
        "name",
        "domain",
        "organization__name",
    )
    ordering = ("-created_at",)
    readonly_fields = (
        "id",
        "api_key",
        "created_at",
        "updated_at",
    )
    actions = ["regenerate_api_keys", "activate_websites", "deactivate_websites"]

    @admin.action(description="Regenerate API key for selected websites")
    def regenerate_api_keys(self, request, queryset):
        for website in queryset:
            website.regenerate_api_key()
        self.message_user(
            request,
            f"Regenerated API keys for {queryset.count()} website(s).",
            messages.SUCCESS,
        )

    @admin.action(description="Activate selected websites")
    def activate_websites(self, request, queryset):
        updated = queryset.update(is_active=True)
        self.message_user(request, f"Activated {updated} website(s).", messages.SUCCESS)

    @admin.action(description="Deactivate selected websites")
    def deactivate_websites(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f"Deactivated {updated} website(s).", messages.SUCCESS)
