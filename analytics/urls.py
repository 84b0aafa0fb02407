# analytics/urls.py
from django.urls import path, re_path, include
from rest_framework.routers import DefaultRouter
from .views import (
    EventViewSet,
    TrackEventView,
)

router = DefaultRouter()
router.register(r'events', EventViewSet, basename='event')

urlpatterns = [
    # Event ingestion endpoint; the tracking client posts without a trailing slash
    re_path(r'^track/?$', TrackEventView.as_view(), name='track-event'),

    # Read-only event listing (/events/)
    path('', include(router.urls)),
]
