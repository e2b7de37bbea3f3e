# =============================================================================
# websim_tools/registry.py  —  The fixed catalogue of WebSim tools
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Declares every tool exactly once:
#
#     ToolDescriptor(name, description, params, handler)
#
#   The description is what the LLM reads when deciding which tool to call,
#   so it says both WHAT the tool returns and WHICH questions it answers.
#   The params tuple is the single source for both the published
#   inputSchema and the validator.
#
# THE REGISTRY IS IMMUTABLE:
#   build_registry() is called once at startup and returns a tuple.  Nothing
#   is registered or removed while the server runs.
# =============================================================================

from dataclasses import dataclass
from typing import Callable

from websim import feeds, projects, search, users
from websim_tools.schema import Param, identifier, limit, offset


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    params: tuple[Param, ...]
    handler: Callable[..., str]


_PROJECT_ID = identifier("project_id", "The unique identifier of the WebSim project")
_USERNAME = identifier("username", "The username of the WebSim user")


def _project_tools() -> list[ToolDescriptor]:
    return [
        ToolDescriptor(
            "get_project",
            "Get detailed information about a WebSim project by its ID. Perfect for "
            "'Show me project [ID]' or 'Tell me about project [ID]' questions.",
            (_PROJECT_ID,),
            projects.get_project,
        ),
        ToolDescriptor(
            "get_project_by_slug",
            "Get detailed information about a WebSim project using the owner's username "
            "and project slug. Perfect for 'Show me @username/project-slug' or "
            "'Tell me about [username]/[slug]' questions.",
            (
                identifier("user", "The username of the project owner"),
                identifier("slug", "The project slug/identifier"),
            ),
            projects.get_project_by_slug,
        ),
        ToolDescriptor(
            "list_projects",
            "List public WebSim projects with pagination. Use for 'Show me some WebSim "
            "projects' when no feed or user is named.",
            (limit("projects"), offset("projects")),
            projects.list_projects,
        ),
        ToolDescriptor(
            "get_project_revisions",
            "Get the revision history of a WebSim project. Perfect for 'How has project "
            "[ID] changed?' or 'List the versions of [project]' questions.",
            (_PROJECT_ID, limit("revisions"), offset("revisions")),
            projects.get_project_revisions,
        ),
        ToolDescriptor(
            "get_project_stats",
            "Get view, like, fork and comment counts for a WebSim project. Perfect for "
            "'How popular is project [ID]?' questions.",
            (_PROJECT_ID,),
            projects.get_project_stats,
        ),
        ToolDescriptor(
            "get_project_descendants",
            "Get projects remixed from a WebSim project. Perfect for 'Who remixed "
            "project [ID]?' or 'Show me forks of [project]' questions.",
            (_PROJECT_ID, limit("descendants"), offset("descendants")),
            projects.get_project_descendants,
        ),
        ToolDescriptor(
            "list_project_comments",
            "Get comments on a WebSim project. Perfect for 'Show me comments on project "
            "[ID]' or 'What are people saying about [project]?' questions. Supports "
            "pagination and different sorting orders.",
            (
                _PROJECT_ID,
                limit("comments"),
                offset("comments"),
                Param("sort_by", "string", "Sort comments by", default="created",
                      enum=("created", "likes")),
                Param("sort_order", "string", "Sort order", default="desc",
                      enum=("asc", "desc")),
            ),
            projects.list_project_comments,
        ),
        ToolDescriptor(
            "get_comment_replies",
            "Get replies to a specific comment on a WebSim project. Perfect for "
            "'Show me the replies to comment [ID]' questions.",
            (
                _PROJECT_ID,
                identifier("comment_id", "The unique identifier of the comment"),
                limit("replies"),
                offset("replies"),
            ),
            projects.get_comment_replies,
        ),
        ToolDescriptor(
            "list_project_screenshots",
            "Get screenshots of a WebSim project revision. Perfect for 'Show me "
            "screenshots of project [ID]' or 'What does [project] version [X] look "
            "like?' questions.",
            (
                _PROJECT_ID,
                Param("version", "integer", "Project revision version number (default: 1)",
                      default=1, minimum=1),
            ),
            projects.list_project_screenshots,
        ),
        ToolDescriptor(
            "get_project_assets",
            "Get the files and assets of a WebSim project revision. Perfect for "
            "'What files are in project [ID]?' questions.",
            (
                _PROJECT_ID,
                Param("version", "string", "Project version (default: latest)",
                      default="latest", min_length=1),
            ),
            projects.get_project_assets,
        ),
    ]


def _user_tools() -> list[ToolDescriptor]:
    return [
        ToolDescriptor(
            "get_user",
            "Get detailed information about a WebSim user profile. Perfect for "
            "'Tell me about user [username]' or 'Show me @[username]' questions.",
            (_USERNAME,),
            users.get_user,
        ),
        ToolDescriptor(
            "get_user_stats",
            "Get detailed statistics for a WebSim user. Perfect for 'Show me "
            "[username]'s statistics' or 'What are @[username]'s stats?' questions.",
            (_USERNAME,),
            users.get_user_stats,
        ),
        ToolDescriptor(
            "get_user_projects",
            "Get a list of projects created by a specific WebSim user. Perfect for "
            "'Show me [username]'s projects' or 'List projects by @[username]' "
            "questions. Supports sorting and pagination.",
            (
                _USERNAME,
                Param("query", "string", "Search query to filter projects"),
                Param("sort_by", "string", "Sort field", default="updated",
                      enum=("created", "updated", "views", "likes", "title")),
                limit("projects"),
                offset("projects"),
            ),
            users.get_user_projects,
        ),
        ToolDescriptor(
            "search_users",
            "Search for WebSim users by name. Perfect for 'Find users called [name]' "
            "questions.",
            (identifier("query", "Search query"), limit("users"), offset("users")),
            users.search_users,
        ),
        ToolDescriptor(
            "get_user_following",
            "Get the accounts a WebSim user follows. Perfect for 'Who does "
            "@[username] follow?' questions.",
            (_USERNAME, limit("users"), offset("users")),
            users.get_user_following,
        ),
        ToolDescriptor(
            "get_user_followers",
            "Get the followers of a WebSim user. Perfect for 'Who follows "
            "@[username]?' questions.",
            (_USERNAME, limit("users"), offset("users")),
            users.get_user_followers,
        ),
    ]


def _feed_tools() -> list[ToolDescriptor]:
    return [
        ToolDescriptor(
            "list_trending_projects",
            "Get a list of trending WebSim projects. Perfect for 'Show me trending "
            "projects' or 'What are the popular projects?' questions. Supports "
            "pagination and filtering by time range.",
            (
                limit("projects"),
                offset("projects"),
                Param("range", "string", "Time range for trending calculation",
                      default="day", enum=("hour", "day", "week", "month", "all")),
                Param("feed", "string", "Type of feed to fetch", default="trending",
                      enum=("trending", "popular", "new")),
            ),
            feeds.list_trending_projects,
        ),
        ToolDescriptor(
            "get_posts_feed",
            "Get the latest posts from the WebSim feed. Perfect for 'What's new on "
            "WebSim?' questions.",
            (limit("posts"), offset("posts")),
            feeds.get_posts_feed,
        ),
        ToolDescriptor(
            "search_projects",
            "Search for WebSim projects by keywords, tags, or descriptions. Perfect for "
            "'Find projects about [topic]' or 'Search for [keyword] projects' "
            "questions. Supports sorting and pagination.",
            (
                identifier("query", "Search query to find projects"),
                Param("sort", "string", "Sort method", default="trending",
                      enum=("trending", "newest", "popular")),
                limit("results"),
                offset("results"),
            ),
            feeds.search_projects,
        ),
        ToolDescriptor(
            "get_trending_rooms",
            "Get trending WebSim rooms, the live multiplayer sessions running on "
            "projects. Perfect for 'Where are people hanging out right now?' "
            "questions. Supports pagination.",
            (limit("rooms"), offset("rooms")),
            feeds.get_trending_rooms,
        ),
    ]


_BULK_QUERY = (
    identifier("query", "Search query"),
    limit("results per query", default=10),
)


def _search_tools() -> list[ToolDescriptor]:
    return [
        ToolDescriptor(
            "search_assets",
            "Search for assets (images, files, resources) in WebSim projects. Perfect "
            "for 'Find assets about [topic]' or 'Search for [keyword] files' "
            "questions. Supports MIME type filtering.",
            (
                identifier("query", "Search query to find assets"),
                Param("mime_type", "string",
                      "Filter by MIME type (e.g., 'image/', 'text/', 'application/json')"),
                limit("results"),
                offset("results"),
            ),
            search.search_assets,
        ),
        ToolDescriptor(
            "bulk_asset_search",
            "Run several asset searches in one request. Perfect for 'Find assets for "
            "[topic A], [topic B] and [topic C]' questions.",
            (
                Param("assets", "array", "Array of asset search queries (1-20)",
                      required=True, min_items=1, max_items=20, items=_BULK_QUERY),
            ),
            search.bulk_asset_search,
        ),
        ToolDescriptor(
            "search_relevant_assets",
            "Find the assets most relevant to a query. Perfect for 'What's the best "
            "image for [topic]?' questions.",
            (identifier("query", "Search query"), limit("results", default=10)),
            search.search_relevant_assets,
        ),
        ToolDescriptor(
            "get_related_keywords",
            "Get related keywords and search suggestions based on a query. Perfect for "
            "'What keywords are related to [topic]?' or 'Show me suggestions for "
            "[keyword]' questions. Helps discover related content and trending topics.",
            (
                identifier("query", "The search query to get related keywords for"),
                limit("related keywords", default=10, maximum=50),
                Param("min_frequency", "integer", "Minimum frequency threshold for keywords",
                      default=1, minimum=1),
            ),
            search.get_related_keywords,
        ),
        ToolDescriptor(
            "get_top_searches",
            "Get the most frequent search queries on WebSim. Perfect for 'What are "
            "people searching for?' questions.",
            (limit("searches"), offset("searches")),
            search.get_top_searches,
        ),
        ToolDescriptor(
            "health_check",
            "Check whether the WebSim API is reachable from this server.",
            (),
            search.health_check,
        ),
    ]


def build_registry() -> tuple[ToolDescriptor, ...]:
    """Return every tool in listing order.

    Raises:
        ValueError: if two descriptors share a name.
    """
    tools = _project_tools() + _user_tools() + _feed_tools() + _search_tools()
    seen = set()
    for tool in tools:
        if tool.name in seen:
            raise ValueError(f"Duplicate tool name: {tool.name}")
        seen.add(tool.name)
    return tuple(tools)
