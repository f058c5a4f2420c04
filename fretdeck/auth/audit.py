"""
OAuth Audit Logging
Logs authorization-flow events for security monitoring.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger("oauth.audit")


def log_oauth_event(
    event_type: str,
    provider: str,
    ip_address: Optional[str] = None,
    success: bool = True,
    details: Optional[str] = None,
) -> None:
    """
    Log an OAuth flow event for security auditing.

    Args:
        event_type: Type of event (e.g., "authorize", "callback", "logout")
        provider: Provider name ("youtube", "spotify")
        ip_address: IP address of the request
        success: Whether the event was successful
        details: Additional details about the event
    """
    log_data = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "event_type": event_type,
        "provider": provider,
        "ip_address": ip_address,
        "success": success,
        "details": details,
    }

    if success:
        logger.info(f"OAuth event: {provider} {event_type}", extra=log_data)
    else:
        logger.warning(f"OAuth event failed: {provider} {event_type}", extra=log_data)
