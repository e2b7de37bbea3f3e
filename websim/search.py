# =============================================================================
# websim/search.py  —  Asset search, keyword discovery and API health
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Tools that query the /api/v1/search/* endpoints, plus health_check.
#
# THE ONE POST:
#   bulk_asset_search sends every sub-query in a single POST body.  It is
#   still one upstream call, so it succeeds or fails as a whole.
# =============================================================================

from datetime import datetime, timezone
from typing import Optional

from websim.context import WebSimContext
from websim.formatting import format_number, pagination_hint
from websim.models import Asset, AssetQueryResult, Keyword, Page, SearchTerm
from websim.render import asset_entry


def search_assets(
    ctx: WebSimContext,
    query: str,
    limit: int,
    offset: int,
    mime_type: Optional[str] = None,
) -> str:
    payload = ctx.client.get(
        "/api/v1/search/assets",
        {"q": query, "mime_type": mime_type, "limit": limit, "offset": offset},
    )
    page = Page.from_json(payload, Asset.from_json)

    lines = [f'# Asset Search Results for "{query}"', ""]
    if mime_type:
        lines.append(f"Filtered by MIME type: {mime_type}")
    lines += [f"Showing {len(page.items)} assets", ""]
    for position, asset in enumerate(page.items, start=1):
        lines += asset_entry(asset, position)
    if page.has_next_page:
        lines.append(pagination_hint("assets", offset, limit))
    return "\n".join(lines).rstrip() + "\n"


def bulk_asset_search(ctx: WebSimContext, assets: list[dict]) -> str:
    """Run several asset queries in one request.

    Args:
        assets: Validated sub-queries, each {"query": str, "limit": int}.
    """
    payload = ctx.client.post("/api/v1/search/assets/bulk", {"assets": assets})
    page = Page.from_json(payload, AssetQueryResult.from_json)

    lines = [
        "# Bulk Asset Search",
        "",
        f"Queries sent: {len(assets)}",
        f"Showing {len(page.items)} result groups",
        "",
    ]
    for group in page.items:
        lines += [f'## "{group.query}"', "", f"Showing {len(group.assets)} assets", ""]
        for asset in group.assets:
            name = f"**{asset.display_name}**"
            details = [d for d in (asset.mime_type, asset.url) if d]
            lines.append(f"- {name}" + (f": {' | '.join(details)}" if details else ""))
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def search_relevant_assets(ctx: WebSimContext, query: str, limit: int) -> str:
    payload = ctx.client.get("/api/v1/search/assets/relevant", {"q": query, "limit": limit})
    page = Page.from_json(payload, Asset.from_json)

    lines = [f'# Relevant Assets for "{query}"', "", f"Showing {len(page.items)} assets", ""]
    for position, asset in enumerate(page.items, start=1):
        lines += asset_entry(asset, position)
    return "\n".join(lines).rstrip() + "\n"


def get_related_keywords(ctx: WebSimContext, query: str, limit: int, min_frequency: int) -> str:
    payload = ctx.client.get(
        "/api/v1/search/related",
        {"q": query, "limit": limit, "min_frequency": min_frequency},
    )
    page = Page.from_json(payload, Keyword.from_json)

    lines = [
        f'# Related Keywords for "{query}"',
        "",
        f"Showing {len(page.items)} related keywords",
    ]
    if page.items:
        lines += ["", "## Related Terms", ""]
        for position, item in enumerate(page.items, start=1):
            lines.append(f"{position}. **{item.keyword}**")
            if item.frequency is not None:
                lines.append(f"   - Frequency: {format_number(item.frequency)}")
            if item.score is not None:
                lines.append(f"   - Relevance Score: {item.score:.2f}")
        lines += ["", "## Search Suggestions", "", "Try searching for:"]
        lines += [f'- "{item.keyword}"' for item in page.items[:5]]
    return "\n".join(lines) + "\n"


def get_top_searches(ctx: WebSimContext, limit: int, offset: int) -> str:
    payload = ctx.client.get("/api/v1/search/top", {"limit": limit, "offset": offset})
    page = Page.from_json(payload, SearchTerm.from_json)

    lines = ["# Top Searches on WebSim", "", f"Showing {len(page.items)} searches", ""]
    for position, term in enumerate(page.items, start=offset + 1):
        line = f'{position}. "{term.query}"'
        if term.count is not None:
            line += f" ({format_number(term.count)} searches)"
        lines.append(line)
    if page.has_next_page:
        lines += ["", pagination_hint("searches", offset, limit)]
    return "\n".join(lines) + "\n"


def health_check(ctx: WebSimContext) -> str:
    """Check the API with the cheapest list request.

    An unreachable API raises like any other upstream failure, so the caller
    sees an error result rather than a "healthy: false" success.
    """
    ctx.client.get("/api/v1/projects", {"limit": 1})
    checked = datetime.now(timezone.utc).isoformat(timespec="seconds")
    lines = [
        "# WebSim API Health",
        "",
        "**Status:** healthy",
        f"**API:** {ctx.client.base_url}",
        f"**Checked:** {checked}",
        f"**Timeout:** {ctx.client.timeout_ms} ms",
    ]
    return "\n".join(lines)
