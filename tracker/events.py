"""
Tracked event payloads and event type names.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

PAGEVIEW = 'pageview'
CLICK = 'click'
FORM_SUBMISSION = 'form_submission'
PERFORMANCE = 'performance'
PERFORMANCE_METRIC = 'performance_metric'
PAGE_VISIBILITY = 'page_visibility'
PAGE_EXIT = 'page_exit'


@dataclass
class TrackedEvent:
    """One event as sent to the ingestion endpoint."""
    event_type: str
    page_url: Optional[str] = None
    referrer: Optional[str] = None
    user_agent: Optional[str] = None
    session_id: Optional[str] = None
    user_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_payload(self, api_key: str) -> Dict[str, Any]:
        """Wire format (camelCase keys); unset fields are left out."""
        payload = {
            'apiKey': api_key,
            'eventType': self.event_type,
            'pageUrl': self.page_url,
            'referrer': self.referrer,
            'userAgent': self.user_agent,
            'sessionId': self.session_id,
            'userId': self.user_id,
            'metadata': self.metadata,
        }
        return {key: value for key, value in payload.items() if value is not None}
