# =============================================================================
# websim/render.py  —  Markdown blocks shared by several tools
# =============================================================================
#
# A project looks the same whether it came from get_project, a trending feed
# or a user's project list; an asset looks the same in a project listing and
# in a search.  Those shared blocks live here.  Each function returns a list
# of lines and only emits a line for a field the record actually has.
# =============================================================================

from typing import Optional

from websim.formatting import (
    Links,
    counter_lines,
    format_datetime,
    format_number,
    format_relative_time,
    format_when,
    pagination_hint,
)
from websim.models import Asset, Page, Project, User


def _tag_line(tags: list[str], limit: int) -> str:
    shown = " ".join(f"`{tag}`" for tag in tags[:limit])
    return f"**Tags:** {shown}{'...' if len(tags) > limit else ''}"


def project_link_lines(project: Project, links: Links) -> list[str]:
    lines = [f"**Live Site:** {links.live(project.id)}"]
    if project.owner and project.slug:
        lines.append(f"**URL:** {links.project(project.owner.username, project.slug)}")
    return lines


def project_detail(project: Project, links: Links) -> str:
    """The full single-project view used by get_project / get_project_by_slug."""
    lines = ["# WebSim Project Details", ""]
    lines.append(f"**Title:** {project.display_title}")
    lines.append(f"**Project ID:** {project.id}")
    if project.owner:
        lines.append(f"**Owner:** [{project.owner.handle}]({links.profile(project.owner.username)})")
    if project.slug:
        lines.append(f"**Slug:** {project.slug}")
    if project.description:
        lines.append(f"**Description:** {project.description}")
    if project.visibility:
        lines.append(f"**Visibility:** {project.visibility.capitalize()}")
    if project.is_featured:
        lines.append("**Featured:** Yes")
    if project.created_at:
        lines.append(f"**Created:** {format_when(project.created_at)}")
    if project.updated_at:
        lines.append(f"**Updated:** {format_when(project.updated_at)}")

    stats = counter_lines(
        ("Views", project.stats.views),
        ("Likes", project.stats.likes),
        ("Forks", project.stats.forks),
        ("Comments", project.stats.comments),
        ("Revisions", project.stats.revisions),
    )
    if stats:
        lines += ["", "## Statistics", ""] + stats

    if project.tags:
        lines += ["", "## Tags", "", " ".join(f"`{tag}`" for tag in project.tags)]

    revision = project.latest_revision
    if revision and (revision.version is not None or revision.created_at):
        lines += ["", "## Latest Revision", ""]
        if revision.version is not None:
            lines.append(f"**Version:** {revision.version}")
        if revision.created_at:
            lines.append(f"**Created:** {format_when(revision.created_at)}")
        if revision.thumbnail_url:
            lines.append(f"**Thumbnail:** ![Thumbnail]({revision.thumbnail_url})")

    lines.append("")
    lines += project_link_lines(project, links)
    return "\n".join(lines)


def project_entry(
    project: Project,
    position: int,
    links: Links,
    *,
    tag_limit: int = 5,
    show_owner: bool = True,
    show_updated: bool = False,
) -> list[str]:
    """One numbered project inside a list."""
    lines = [f"## {position}. {project.display_title}", ""]
    if show_owner and project.owner:
        lines.append(f"**Owner:** [{project.owner.handle}]({links.profile(project.owner.username)})")
    lines.append(f"**Project ID:** {project.id}")
    if project.slug:
        lines.append(f"**Slug:** {project.slug}")
    if project.description:
        lines.append(f"**Description:** {project.description}")
    lines += counter_lines(
        ("Views", project.stats.views),
        ("Likes", project.stats.likes),
        ("Forks", project.stats.forks),
    )
    if project.created_at:
        lines.append(f"**Created:** {format_relative_time(project.created_at)}")
    if show_updated and project.updated_at:
        lines.append(f"**Updated:** {format_relative_time(project.updated_at)}")
    if project.tags:
        lines.append(_tag_line(project.tags, tag_limit))
    if project.is_featured:
        lines.append("**Featured:** Yes")
    lines += project_link_lines(project, links)
    lines += ["", "---", ""]
    return lines


def project_page(
    title: str,
    page: Page[Project],
    links: Links,
    *,
    offset: Optional[int] = None,
    limit: Optional[int] = None,
    notes: tuple[str, ...] = (),
    **entry_options,
) -> str:
    """A titled list of projects with a "Showing N" header and, when the
    upstream page has more, the next-offset hint."""
    lines = [f"# {title}", ""]
    lines += list(notes)
    lines += [f"Showing {len(page.items)} projects", ""]
    for position, project in enumerate(page.items, start=1):
        lines += project_entry(project, position, links, **entry_options)
    if page.has_next_page and offset is not None and limit is not None:
        lines.append(pagination_hint("projects", offset, limit))
    return "\n".join(lines).rstrip() + "\n"


def asset_entry(asset: Asset, position: int) -> list[str]:
    lines = [f"## {position}. {asset.display_name}", ""]
    if asset.path:
        lines.append(f"**Path:** `{asset.path}`")
    if asset.mime_type:
        lines.append(f"**Type:** {asset.mime_type}")
    if asset.size is not None:
        lines.append(f"**Size:** {format_number(asset.size)} bytes")
    if asset.last_modified:
        lines.append(f"**Last Modified:** {format_datetime(asset.last_modified)}")
    if asset.project_id:
        lines.append(f"**Project ID:** {asset.project_id}")
    if asset.url:
        lines.append(f"**URL:** {asset.url}")
    lines += ["", "---", ""]
    return lines


def user_entry(user: User, position: int, links: Links) -> list[str]:
    lines = [f"## {position}. {user.display_name or user.username}", ""]
    lines.append(f"**Username:** [@{user.username}]({links.profile(user.username)})")
    if user.bio:
        lines.append(f"**Bio:** {user.bio}")
    if user.is_verified:
        lines.append("**Status:** Verified")
    if user.stats:
        lines += counter_lines(
            ("Projects", user.stats.projects),
            ("Followers", user.stats.followers),
        )
    lines += ["", "---", ""]
    return lines
