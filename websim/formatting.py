# =============================================================================
# websim/formatting.py  —  Text helpers shared by every handler
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns raw upstream values into the strings that appear in tool output:
#     - counters with thousands separators   121757 → "121,757"
#     - timestamps in one fixed format       "Jan 05, 2024, 03:04 PM UTC"
#     - relative ages                        "3h ago", "2d ago"
#     - deep links into the WebSim site      profile / project page / live site
#     - the "more results" pagination hint
#
# Handlers never format a value inline; they all come through here so that
# every tool renders dates and numbers the same way.
# =============================================================================

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import quote

_ABSOLUTE_FORMAT = "%b %d, %Y, %I:%M %p UTC"


def _parse_timestamp(timestamp: str) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(timestamp.strip().replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_number(value: int) -> str:
    """Format an integer with comma thousands separators."""
    return f"{value:,}"


def format_datetime(timestamp: str) -> str:
    """Render a timestamp in UTC, or return it unchanged if it won't parse."""
    parsed = _parse_timestamp(timestamp)
    if parsed is None:
        return timestamp
    return parsed.astimezone(timezone.utc).strftime(_ABSOLUTE_FORMAT)


def format_relative_time(timestamp: str, now: Optional[datetime] = None) -> str:
    """Humanize the age of a timestamp.

    Under a minute is "just now", then minutes, hours and days.  Anything a
    week or older falls back to the absolute format.  Timestamps in the
    future (clock skew) count as "just now".

    Args:
        timestamp: ISO-8601 string from the API.
        now: Reference time.  Defaults to the current UTC time.
    """
    parsed = _parse_timestamp(timestamp)
    if parsed is None:
        return timestamp
    if now is None:
        now = datetime.now(timezone.utc)

    seconds = (now - parsed).total_seconds()
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days < 7:
        return f"{days}d ago"
    return format_datetime(timestamp)


def format_when(timestamp: str) -> str:
    """Absolute time followed by the relative age in parentheses."""
    absolute = format_datetime(timestamp)
    relative = format_relative_time(timestamp)
    if relative == absolute:
        return absolute
    return f"{absolute} ({relative})"


def counter_lines(*pairs: tuple[str, Optional[int]]) -> list[str]:
    """One "- Label: 1,234" bullet per counter that the API reported."""
    return [f"- {label}: {format_number(value)}" for label, value in pairs if value is not None]


def pagination_hint(noun: str, offset: int, limit: int) -> str:
    """The line appended when the upstream page says more results exist."""
    return f"*More {noun} available. Use offset {offset + limit} with limit {limit} to see more.*"


@dataclass(frozen=True)
class Links:
    """Builds deep links into the WebSim site from known path conventions."""

    site_url: str

    def profile(self, username: str) -> str:
        return f"{self.site_url}/@{quote(username, safe='')}"

    def project(self, username: str, slug: str) -> str:
        return f"{self.site_url}/@{quote(username, safe='')}/{quote(slug, safe='')}"

    def live(self, project_id: str) -> str:
        return f"{self.site_url}/p/{quote(project_id, safe='')}"
