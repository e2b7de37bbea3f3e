# =============================================================================
# websim/context.py  —  What every handler receives
# =============================================================================
#
# Handlers never build their own client or read settings.  Each one takes a
# WebSimContext as its first argument:
#
#     ctx.client  →  the Request Client for its single upstream call
#     ctx.links   →  the site link builder for the markdown it returns
#
# main.py builds one context from Settings at startup; tests build one
# around a fake opener.  segment() is the one place path pieces get
# percent-encoded, so "pixel art" becomes "pixel%20art" in every URL.
# =============================================================================

from dataclasses import dataclass
from urllib.parse import quote

from websim.client import WebSimClient
from websim.config import Settings
from websim.formatting import Links


@dataclass(frozen=True)
class WebSimContext:
    """What every handler gets: the client for its one upstream call, and
    the link builder for the text it renders."""

    client: WebSimClient
    links: Links

    @classmethod
    def from_settings(cls, settings: Settings) -> "WebSimContext":
        return cls(
            client=WebSimClient(
                base_url=settings.api_base_url,
                user_agent=settings.user_agent,
                timeout_ms=settings.timeout_ms,
            ),
            links=Links(settings.site_url),
        )


def segment(value) -> str:
    """Percent-encode one path segment (ids, usernames, slugs, queries)."""
    return quote(str(value), safe="")
