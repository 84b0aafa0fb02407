import logging

from rest_framework import filters, status, viewsets
from rest_framework.exceptions import ParseError, UnsupportedMediaType, ValidationError
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView
from django.utils.dateparse import parse_date
from django_filters.rest_framework import DjangoFilterBackend

from . import services
from .exceptions import InvalidApiKey
from .models import AnalyticsEvent
from .serializers import AnalyticsEventSerializer, TrackEventSerializer

logger = logging.getLogger(__name__)


class TrackEventView(APIView):
    """
    Public endpoint receiving events from the tracking client.
    Authenticated by the website API key in the payload, not by a user session.
    Cross-origin access is granted by django-cors-headers (CORS_URLS_REGEX).
    """
    authentication_classes = []
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]

    def post(self, request):
        try:
            serializer = TrackEventSerializer(data=request.data)
            if not serializer.is_valid():
                return Response(
                    {'error': 'Validation error', 'details': serializer.errors},
                    status=status.HTTP_400_BAD_REQUEST
                )
            event = services.ingest_event(request, serializer.validated_data)

        except (ParseError, UnsupportedMediaType) as e:
            return Response(
                {'error': 'Validation error', 'details': {'non_field_errors': [str(e.detail)]}},
                status=status.HTTP_400_BAD_REQUEST
            )
        except InvalidApiKey as e:
            logger.info(f"Rejected tracked event: {e.error_code}")
            return Response({'error': e.message}, status=e.status_code)
        except Exception as e:
            logger.error(f"Error tracking event: {str(e)}", exc_info=True)
            return Response(
                {'error': 'Internal server error'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response({'success': True, 'eventId': str(event.id)}, status=status.HTTP_200_OK)

    def options(self, request, *args, **kwargs):
        """Plain OPTIONS; browser preflights are answered by CorsMiddleware."""
        return Response(status=status.HTTP_200_OK)


class EventViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Lists stored events for staff users.
    Supports filtering by website, event type, device, session or user, and
    by date range via start_date / end_date (YYYY-MM-DD).
    """
    serializer_class = AnalyticsEventSerializer
    queryset = AnalyticsEvent.objects.select_related('website')
    permission_classes = [IsAdminUser]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ["website", "event_type", "device_type", "browser", "os", "session_id", "user_id"]
    ordering_fields = ["created_at"]
    ordering = ["-created_at"]

    def get_queryset(self):
        queryset = super().get_queryset()
        start_date = self._parse_date_param("start_date")
        end_date = self._parse_date_param("end_date")

        if start_date:
            queryset = queryset.filter(created_at__date__gte=start_date)
        if end_date:
            queryset = queryset.filter(created_at__date__lte=end_date)

        return queryset

    def _parse_date_param(self, name):
        value = self.request.query_params.get(name)
        if not value:
            return None
        try:
            parsed = parse_date(value)
        except ValueError:
            parsed = None
        if parsed is None:
            raise ValidationError({name: ["Date has wrong format. Use YYYY-MM-DD."]})
        return parsed
