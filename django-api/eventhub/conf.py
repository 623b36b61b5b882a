"""Application settings with defaults, read from ``settings.EVENTHUB``."""

from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    # Attempts at inserting a freshly generated ticket code before giving up.
    "TICKET_ISSUE_MAX_ATTEMPTS": 5,
    # Seconds to wait for the session's account lookup; 0 resolves inline.
    "SESSION_TIMEOUT_SECONDS": 3.0,
    "EVENT_CACHE_TTL_SECONDS": 300,
    "ORGANIZER_REGISTRATIONS_LIMIT": 20,
}


def get_setting(name: str) -> Any:
    if name not in DEFAULTS:
        raise KeyError(f"Unknown eventhub setting: {name}")
    return getattr(settings, "EVENTHUB", {}).get(name, DEFAULTS[name])
