"""
Event logger utility for authentication events.
"""
import logging
import os
import sys
from typing import Optional

from fastapi import Request

from ..config import settings

# Create handlers list
handlers = [logging.StreamHandler(sys.stdout)]

# Try to add file handler, but continue without it if directory creation fails
if settings.LOG_DIR:
    try:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        handlers.append(logging.FileHandler(os.path.join(settings.LOG_DIR, "auth_events.log")))
    except OSError as e:
        print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    handlers=handlers
)

logger = logging.getLogger("blog_service.auth_events")


ALLOWED_EVENT_TYPES = {
    "register_success",
    "register_conflict",
    "login_success",
    "login_failure",
    "logout",
}


def client_ip(request: Request) -> Optional[str]:
    if request.client:
        return request.client.host
    # X-Forwarded-For can contain multiple IPs, take the first one
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return None


def log_auth_event(
    event_type: str,
    username: Optional[str],
    request: Request,
    user_id: Optional[str] = None,
    metadata: dict = None
) -> None:
    """
    Log an authentication event.

    Args:
        event_type: One of: register_success, register_conflict,
                    login_success, login_failure, logout
        username: Username the event concerns (may be unknown)
        request: FastAPI Request object
        user_id: Id of the user when known
        metadata: Optional dictionary of additional context

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    logger.info(
        "AUTH %s user_id=%s username=%s ip=%s user_agent=%s metadata=%s",
        event_type,
        user_id,
        username,
        client_ip(request),
        request.headers.get("user-agent"),
        metadata or {},
    )
