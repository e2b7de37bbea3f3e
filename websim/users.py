# =============================================================================
# websim/users.py  —  User profile, statistics and social-graph tools
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   One function per user-scoped tool, each making exactly one request:
#
#     get_user            GET /api/v1/users/{username}
#     get_user_stats      GET /api/v1/users/{username}/stats
#     get_user_projects   GET /api/v1/users/{username}/projects
#     search_users        GET /api/v1/user-search?q=...
#     get_user_following  GET /api/v1/users/{username}/following
#     get_user_followers  GET /api/v1/users/{username}/followers
#
# DERIVED METRICS:
#   get_user_stats is the only tool that computes anything.  Per-project
#   averages appear only when the project count is above zero, and the
#   follower/following verdict only when both counters were reported.
# =============================================================================

from typing import Optional

from websim.context import WebSimContext, segment
from websim.errors import InvalidResponseError
from websim.formatting import counter_lines, format_number, format_when, pagination_hint
from websim.models import Page, Project, User, UserStats
from websim.render import project_page, user_entry


def get_user(ctx: WebSimContext, username: str) -> str:
    user = User.from_json(ctx.client.get(f"/api/v1/users/{segment(username)}"))
    if user is None:
        raise InvalidResponseError("WebSim API response did not contain a user")

    lines = [f"# User Profile: {user.display_name or user.username}", ""]
    lines.append(f"**Username:** {user.username}")
    if user.display_name:
        lines.append(f"**Display Name:** {user.display_name}")
    if user.bio:
        lines.append(f"**Bio:** {user.bio}")
    if user.created_at:
        lines.append(f"**Joined:** {format_when(user.created_at)}")
    if user.is_verified:
        lines.append("**Status:** Verified")
    if user.avatar_url:
        lines.append(f"**Avatar:** {user.avatar_url}")

    if user.stats:
        stats = counter_lines(
            ("Projects", user.stats.projects),
            ("Followers", user.stats.followers),
            ("Following", user.stats.following),
            ("Likes Received", user.stats.likes_received),
            ("Views Received", user.stats.views_received),
        )
        if stats:
            lines += ["", "## Statistics", ""] + stats

    lines += ["", f"**Profile URL:** {ctx.links.profile(user.username)}"]
    return "\n".join(lines)


def get_user_stats(ctx: WebSimContext, username: str) -> str:
    """Raw counters, per-project averages, and a follower/following verdict."""
    stats = UserStats.from_json(ctx.client.get(f"/api/v1/users/{segment(username)}/stats"))

    lines = [f"# User Statistics: {username}", "", "## Overview", ""]
    overview = counter_lines(
        ("Total Projects", stats.projects),
        ("Followers", stats.followers),
        ("Following", stats.following),
        ("Total Likes Received", stats.likes_received),
        ("Total Views Received", stats.views_received),
    )
    lines += overview or ["No statistics reported."]

    if stats.projects:
        averages = []
        if stats.views_received is not None:
            averages.append(
                f"- Avg Views per Project: {format_number(round(stats.views_received / stats.projects))}"
            )
        if stats.likes_received is not None:
            averages.append(
                f"- Avg Likes per Project: {format_number(round(stats.likes_received / stats.projects))}"
            )
        if stats.followers is not None:
            averages.append(
                f"- Followers per Project: {format_number(round(stats.followers / stats.projects))}"
            )
        if averages:
            lines += ["", "## Engagement Metrics", ""] + averages

    if stats.followers is not None and stats.following is not None:
        lines += ["", "## Community Standing", ""]
        if stats.followers > stats.following:
            lines.append("**Growing Influence** - More followers than following")
        elif stats.followers < stats.following:
            lines.append("**Active Explorer** - Following more than followers")
        else:
            lines.append("**Balanced Community** - Equal followers and following")

    lines += ["", f"**Profile URL:** {ctx.links.profile(username)}"]
    return "\n".join(lines)


def get_user_projects(
    ctx: WebSimContext,
    username: str,
    sort_by: str,
    limit: int,
    offset: int,
    query: Optional[str] = None,
) -> str:
    payload = ctx.client.get(
        f"/api/v1/users/{segment(username)}/projects",
        {"limit": limit, "offset": offset, "sort": sort_by, "query": query},
    )
    page = Page.from_json(payload, Project.from_json)

    notes = []
    if query:
        notes.append(f'Filtered by: "{query}"')
    notes.append(f"Sorted by: {sort_by}")
    return project_page(
        f"Projects by {username}",
        page,
        ctx.links,
        offset=offset,
        limit=limit,
        notes=tuple(notes),
        tag_limit=3,
        show_owner=False,
        show_updated=True,
    )


# -----------------------------------------------------------------------------
# People lists: search, following, followers
# -----------------------------------------------------------------------------
def _user_page(ctx: WebSimContext, title: str, page: Page[User], offset: int, limit: int) -> str:
    lines = [f"# {title}", "", f"Showing {len(page.items)} users", ""]
    for position, user in enumerate(page.items, start=1):
        lines += user_entry(user, position, ctx.links)
    if page.has_next_page:
        lines.append(pagination_hint("users", offset, limit))
    return "\n".join(lines).rstrip() + "\n"


def search_users(ctx: WebSimContext, query: str, limit: int, offset: int) -> str:
    payload = ctx.client.get("/api/v1/user-search", {"q": query, "limit": limit, "offset": offset})
    page = Page.from_json(payload, User.from_json)
    return _user_page(ctx, f'User Search Results for "{query}"', page, offset, limit)


def get_user_following(ctx: WebSimContext, username: str, limit: int, offset: int) -> str:
    payload = ctx.client.get(
        f"/api/v1/users/{segment(username)}/following", {"limit": limit, "offset": offset}
    )
    page = Page.from_json(payload, User.from_json)
    return _user_page(ctx, f"Accounts {username} Follows", page, offset, limit)


def get_user_followers(ctx: WebSimContext, username: str, limit: int, offset: int) -> str:
    payload = ctx.client.get(
        f"/api/v1/users/{segment(username)}/followers", {"limit": limit, "offset": offset}
    )
    page = Page.from_json(payload, User.from_json)
    return _user_page(ctx, f"Followers of {username}", page, offset, limit)
