# =============================================================================
# websim/feeds.py  —  Trending, posts and search feeds
# =============================================================================
#
# The three project feeds answer with the same page shape:
#
#   {"data": [{"project": {...}, ...}, ...],
#    "meta": {"has_next_page": true, ...}}
#
# The rooms feed uses the same envelope with {"room": {...}} entries.
# Entries without a project (or room) id are skipped.  When has_next_page is set, the
# rendered block ends with the offset to ask for next; the tool never
# fetches the next page itself.
# =============================================================================

from websim.context import WebSimContext, segment
from websim.formatting import format_relative_time, pagination_hint
from websim.models import Page, Project, Room
from websim.render import project_page


def list_trending_projects(
    ctx: WebSimContext, limit: int, offset: int, range: str, feed: str
) -> str:
    payload = ctx.client.get(
        "/api/v1/feed/trending",
        {"limit": limit, "offset": offset, "range": range, "feed": feed},
    )
    page = Page.from_json(payload, Project.from_json)
    return project_page(
        f"{feed.capitalize()} Projects",
        page,
        ctx.links,
        offset=offset,
        limit=limit,
        notes=(f"Time range: {range}",),
    )


def get_posts_feed(ctx: WebSimContext, limit: int, offset: int) -> str:
    payload = ctx.client.get("/api/v1/feed/posts", {"limit": limit, "offset": offset})
    page = Page.from_json(payload, Project.from_json)
    return project_page("Latest Posts", page, ctx.links, offset=offset, limit=limit)


def search_projects(ctx: WebSimContext, query: str, sort: str, limit: int, offset: int) -> str:
    payload = ctx.client.get(
        f"/api/v1/feed/search/{segment(sort)}/{segment(query)}",
        {"limit": limit, "offset": offset},
    )
    page = Page.from_json(payload, Project.from_json)
    return project_page(
        f'Search Results for "{query}"',
        page,
        ctx.links,
        offset=offset,
        limit=limit,
        notes=(f"Sorted by: {sort}",),
    )


def get_trending_rooms(ctx: WebSimContext, limit: int, offset: int) -> str:
    payload = ctx.client.get("/api/v1/feed/rooms", {"limit": limit, "offset": offset})
    page = Page.from_json(payload, Room.from_json)

    lines = ["# Trending Rooms", "", f"Showing {len(page.items)} rooms", ""]
    for position, room in enumerate(page.items, start=1):
        lines += [f"## {position}. {room.display_name}", "", f"**Room ID:** {room.id}"]
        if room.owner:
            lines.append(f"**Host:** [{room.owner.handle}]({ctx.links.profile(room.owner.username)})")
        if room.description:
            lines.append(f"**Description:** {room.description}")
        if room.active_users is not None:
            lines.append(f"**Active Users:** {room.active_users}")
        if room.created_at:
            lines.append(f"**Opened:** {format_relative_time(room.created_at)}")
        if room.project_id:
            lines.append(f"**Project:** {ctx.links.live(room.project_id)}")
        lines += ["", "---", ""]

    if page.has_next_page:
        lines.append(pagination_hint("rooms", offset, limit))
    return "\n".join(lines).rstrip() + "\n"
