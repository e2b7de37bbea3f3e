# =============================================================================
# websim/projects.py  —  Project, revision, comment, screenshot and asset tools
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   One function per project-scoped tool.  Each function:
#     1. makes exactly one upstream request through ctx.client
#     2. parses the body into records (websim/models.py)
#     3. returns a single markdown block
#
#   Arguments arrive already validated and defaulted by the tool layer, so
#   nothing here re-checks limits or enums.  Upstream errors propagate
#   untouched; the dispatcher turns them into an error envelope.
# =============================================================================

from websim.context import WebSimContext, segment
from websim.errors import InvalidResponseError
from websim.formatting import (
    counter_lines,
    format_number,
    format_when,
    pagination_hint,
)
from websim.models import Asset, Comment, Page, Project, ProjectStats, Revision, Screenshot
from websim.render import asset_entry, project_detail, project_page


def _single_project(payload) -> Project:
    project = Project.from_json(payload)
    if project is None:
        raise InvalidResponseError("WebSim API response did not contain a project")
    return project


# -----------------------------------------------------------------------------
# Single project lookups
# -----------------------------------------------------------------------------
def get_project(ctx: WebSimContext, project_id: str) -> str:
    payload = ctx.client.get(f"/api/v1/projects/{segment(project_id)}")
    return project_detail(_single_project(payload), ctx.links)


def get_project_by_slug(ctx: WebSimContext, user: str, slug: str) -> str:
    payload = ctx.client.get(f"/api/v1/users/{segment(user)}/slugs/{segment(slug)}")
    return project_detail(_single_project(payload), ctx.links)


def get_project_stats(ctx: WebSimContext, project_id: str) -> str:
    """Counters for one project plus a like rate when views are known."""
    stats = ProjectStats.from_json(ctx.client.get(f"/api/v1/projects/{segment(project_id)}/stats"))

    lines = [f"# Statistics for Project {project_id}", ""]
    counters = counter_lines(
        ("Views", stats.views),
        ("Likes", stats.likes),
        ("Forks", stats.forks),
        ("Comments", stats.comments),
        ("Revisions", stats.revisions),
    )
    lines += counters or ["No statistics reported."]

    if stats.views and stats.likes is not None:
        lines += ["", "## Engagement", "", f"- Like Rate: {stats.likes / stats.views:.2%}"]

    lines += ["", f"**Live Site:** {ctx.links.live(project_id)}"]
    return "\n".join(lines)


# -----------------------------------------------------------------------------
# Project lists
# -----------------------------------------------------------------------------
def list_projects(ctx: WebSimContext, limit: int, offset: int) -> str:
    payload = ctx.client.get("/api/v1/projects", {"limit": limit, "offset": offset})
    page = Page.from_json(payload, Project.from_json)
    return project_page("Public Projects", page, ctx.links, offset=offset, limit=limit)


def get_project_descendants(ctx: WebSimContext, project_id: str, limit: int, offset: int) -> str:
    payload = ctx.client.get(
        f"/api/v1/projects/{segment(project_id)}/descendants",
        {"limit": limit, "offset": offset},
    )
    page = Page.from_json(payload, Project.from_json)
    return project_page(
        f"Remixes of Project {project_id}", page, ctx.links, offset=offset, limit=limit
    )


def get_project_revisions(ctx: WebSimContext, project_id: str, limit: int, offset: int) -> str:
    payload = ctx.client.get(
        f"/api/v1/projects/{segment(project_id)}/revisions",
        {"limit": limit, "offset": offset},
    )
    page = Page.from_json(payload, Revision.from_json)

    lines = [f"# Revisions of Project {project_id}", "", f"Showing {len(page.items)} revisions", ""]
    for position, revision in enumerate(page.items, start=1):
        heading = f"Version {revision.version}" if revision.version is not None else "Revision"
        lines += [f"## {position}. {heading}", ""]
        if revision.title:
            lines.append(f"**Title:** {revision.title}")
        if revision.id:
            lines.append(f"**Revision ID:** {revision.id}")
        if revision.created_at:
            lines.append(f"**Created:** {format_when(revision.created_at)}")
        if revision.thumbnail_url:
            lines.append(f"**Thumbnail:** ![Thumbnail]({revision.thumbnail_url})")
        lines += ["", "---", ""]

    if page.has_next_page:
        lines.append(pagination_hint("revisions", offset, limit))
    return "\n".join(lines).rstrip() + "\n"


# -----------------------------------------------------------------------------
# Comments
# -----------------------------------------------------------------------------
def _comment_lines(comments: list[Comment], ctx: WebSimContext) -> list[str]:
    lines = []
    for position, comment in enumerate(comments, start=1):
        lines += [f"## Comment {position}", "", f"**Comment ID:** {comment.id}"]
        if comment.author:
            author = comment.author
            lines.append(f"**Author:** [{author.handle}]({ctx.links.profile(author.username)})")
        if comment.created_at:
            lines.append(f"**Posted:** {format_when(comment.created_at)}")
        lines += counter_lines(("Likes", comment.likes))
        if comment.replies:
            lines += counter_lines(("Replies", comment.replies))
        if comment.content:
            lines += ["", "**Content:**", comment.content]
        if comment.parent_id:
            lines += ["", f"*Reply to comment: {comment.parent_id}*"]
        lines += ["", "---", ""]
    return lines


def list_project_comments(
    ctx: WebSimContext,
    project_id: str,
    limit: int,
    offset: int,
    sort_by: str,
    sort_order: str,
) -> str:
    payload = ctx.client.get(
        f"/api/v1/projects/{segment(project_id)}/comments",
        {"limit": limit, "offset": offset, "sort_by": sort_by, "sort_order": sort_order},
    )
    page = Page.from_json(payload, Comment.from_json)

    lines = [
        f"# Comments on Project {project_id}",
        "",
        f"Sorted by: {sort_by} ({sort_order})",
        f"Showing {len(page.items)} comments",
        "",
    ]
    lines += _comment_lines(page.items, ctx)
    if page.has_next_page:
        lines.append(pagination_hint("comments", offset, limit))
    return "\n".join(lines).rstrip() + "\n"


def get_comment_replies(
    ctx: WebSimContext, project_id: str, comment_id: str, limit: int, offset: int
) -> str:
    payload = ctx.client.get(
        f"/api/v1/projects/{segment(project_id)}/comments/{segment(comment_id)}/replies",
        {"limit": limit, "offset": offset},
    )
    page = Page.from_json(payload, Comment.from_json)

    lines = [
        f"# Replies to Comment {comment_id}",
        "",
        f"Project: {project_id}",
        f"Showing {len(page.items)} replies",
        "",
    ]
    lines += _comment_lines(page.items, ctx)
    if page.has_next_page:
        lines.append(pagination_hint("replies", offset, limit))
    return "\n".join(lines).rstrip() + "\n"


# -----------------------------------------------------------------------------
# Revision contents
# -----------------------------------------------------------------------------
def list_project_screenshots(ctx: WebSimContext, project_id: str, version: int) -> str:
    payload = ctx.client.get(
        f"/api/v1/projects/{segment(project_id)}/revisions/{version}/screenshots"
    )
    page = Page.from_json(payload, Screenshot.from_json)

    lines = [
        f"# Screenshots for Project {project_id} (Version {version})",
        "",
        f"Showing {len(page.items)} screenshots",
        "",
    ]
    for position, shot in enumerate(page.items, start=1):
        lines += [f"## Screenshot {position}", ""]
        if shot.id:
            lines.append(f"**ID:** {shot.id}")
        if shot.width is not None and shot.height is not None:
            lines.append(f"**Dimensions:** {format_number(shot.width)} × {format_number(shot.height)}")
        if shot.created_at:
            lines.append(f"**Created:** {format_when(shot.created_at)}")
        if shot.url:
            lines += [f"**URL:** {shot.url}", "", f"![Screenshot {position}]({shot.url})"]
        lines += ["", "---", ""]
    return "\n".join(lines).rstrip() + "\n"


def get_project_assets(ctx: WebSimContext, project_id: str, version: str) -> str:
    payload = ctx.client.get(
        f"/api/v1/projects/{segment(project_id)}/revisions/{segment(version)}/assets"
    )
    page = Page.from_json(payload, Asset.from_json)

    lines = [
        f"# Assets for Project {project_id} (Version {version})",
        "",
        f"Showing {len(page.items)} assets",
        "",
    ]
    for position, asset in enumerate(page.items, start=1):
        lines += asset_entry(asset, position)
    return "\n".join(lines).rstrip() + "\n"
