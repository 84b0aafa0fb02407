"""
Django Admin configuration for Organizations app.

Tenants are managed here; each organization shows its registered
websites inline.
"""

from django.contrib import admin
from websites.models import Website
from .models import Organization


class WebsiteInline(admin.TabularInline):
    """
    Inline admin listing the websites an organization owns.
    API keys are generated by the system and never edited by hand.
    """
    model = Website
    extra = 0
    fields = ['name', 'domain', 'api_key', 'is_active', 'created_at']
    readonly_fields = ['api_key', 'created_at']


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = [
        'name',
        'slug',
        'email',
        'plan',
        'website_count_display',
        'created_at',
    ]
    list_filter = ['plan', 'created_at']
    search_fields = ['name', 'slug', 'email']
    readonly_fields = ['id', 'created_at', 'updated_at']
    inlines = [WebsiteInline]

    def website_count_display(self, obj):
        """Active website count for the list view"""
        return obj.get_active_website_count()
    website_count_display.short_description = 'Active websites'
