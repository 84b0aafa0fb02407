"""
Exceptions raised while ingesting analytics events.

Each exception carries the HTTP status the ingestion endpoint answers with,
so the view can map failures to responses without inspecting messages.
"""
from typing import Optional


class IngestionException(Exception):
    """
    Base exception for event ingestion failures.

    Attributes:
        message: Message safe to return to the caller
        error_code: Machine-readable code used in logs
        status_code: HTTP status returned by the endpoint
    """
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, error_code: Optional[str] = None):
        self.message = message or self.default_message
        self.error_code = error_code
        super().__init__(self.message)


class InvalidApiKey(IngestionException):
    """
    The API key is unknown or belongs to an inactive website.
    Both cases share one message so callers cannot tell them apart.
    """
    status_code = 401
    default_message = "Invalid API key or website inactive"


class ImmutableEventError(IngestionException):
    """Raised when code attempts to update an already stored event."""
