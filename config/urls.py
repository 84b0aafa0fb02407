"""
Root URL configuration.

- /admin/           Django admin (organizations, websites, read-only events)
- /api/analytics/   Event ingestion endpoint and read-only event listing
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/analytics/', include('analytics.urls')),
]
