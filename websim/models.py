# =============================================================================
# websim/models.py  —  Records parsed from WebSim API responses
# =============================================================================
#
# The upstream API owns these shapes; this server only reads them.  Each
# record lists exactly the fields a renderer uses, and every field is
# optional except the ones a renderer cannot do without.
#
# "ABSENT MEANS OMIT":
#   Every field goes through one of the _str/_int/... readers below.  A field
#   that is missing, null, or of the wrong type comes back as None (or an
#   empty list), and the renderers skip None.  Nothing in this module raises
#   on a malformed payload; a record with nothing useful in it just renders
#   short.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


# -----------------------------------------------------------------------------
# Field readers
# -----------------------------------------------------------------------------
def _dict(data: Any, key: str) -> dict:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, dict) else {}


def _str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if isinstance(value, str) and value:
        return value
    # Ids are sometimes numeric upstream.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


def _int(data: dict, key: str) -> Optional[int]:
    value = data.get(key)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _float(data: dict, key: str) -> Optional[float]:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _bool(data: dict, key: str) -> Optional[bool]:
    value = data.get(key)
    return value if isinstance(value, bool) else None


def _str_list(data: dict, key: str) -> list[str]:
    value = data.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item]


# -----------------------------------------------------------------------------
# Owner: the short user reference embedded in projects and comments
# -----------------------------------------------------------------------------
@dataclass
class Owner:
    username: str
    display_name: Optional[str] = None

    @property
    def handle(self) -> str:
        return self.display_name or self.username

    @classmethod
    def from_json(cls, data: Any) -> Optional["Owner"]:
        if not isinstance(data, dict):
            return None
        username = _str(data, "username")
        if username is None:
            return None
        return cls(
            username=username,
            display_name=_str(data, "display_name"),
        )


@dataclass
class Revision:
    version: Optional[int] = None
    id: Optional[str] = None
    created_at: Optional[str] = None
    thumbnail_url: Optional[str] = None
    title: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> Optional["Revision"]:
        if not isinstance(data, dict):
            return None
        return cls(
            version=_int(data, "version"),
            id=_str(data, "id"),
            created_at=_str(data, "created_at"),
            thumbnail_url=_str(data, "thumbnail_url"),
            title=_str(data, "title"),
        )


@dataclass
class ProjectStats:
    views: Optional[int] = None
    likes: Optional[int] = None
    forks: Optional[int] = None
    comments: Optional[int] = None
    revisions: Optional[int] = None

    @classmethod
    def from_json(cls, data: Any) -> "ProjectStats":
        if not isinstance(data, dict):
            data = {}
        return cls(
            views=_int(data, "views"),
            likes=_int(data, "likes"),
            forks=_int(data, "forks"),
            comments=_int(data, "comments"),
            revisions=_int(data, "revisions"),
        )


# -----------------------------------------------------------------------------
# Project: the main resource almost every tool renders
# -----------------------------------------------------------------------------
@dataclass
class Project:
    id: str
    title: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    owner: Optional[Owner] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    visibility: Optional[str] = None
    is_featured: Optional[bool] = None
    tags: list[str] = field(default_factory=list)
    stats: ProjectStats = field(default_factory=ProjectStats)
    latest_revision: Optional[Revision] = None

    @property
    def display_title(self) -> str:
        return self.title or self.slug or self.id

    @classmethod
    def from_json(cls, data: Any) -> Optional["Project"]:
        """Parse a project, unwrapping a feed entry's {"project": {...}}."""
        if not isinstance(data, dict):
            return None
        if isinstance(data.get("project"), dict):
            data = data["project"]
        project_id = _str(data, "id")
        if project_id is None:
            return None
        return cls(
            id=project_id,
            title=_str(data, "title"),
            slug=_str(data, "slug"),
            description=_str(data, "description"),
            owner=Owner.from_json(data.get("owner")),
            created_at=_str(data, "created_at"),
            updated_at=_str(data, "updated_at"),
            visibility=_str(data, "visibility"),
            is_featured=_bool(data, "is_featured"),
            tags=_str_list(data, "tags"),
            stats=ProjectStats.from_json(data.get("stats")),
            latest_revision=Revision.from_json(data.get("latest_revision")),
        )


# -----------------------------------------------------------------------------
# User
# -----------------------------------------------------------------------------
@dataclass
class UserStats:
    projects: Optional[int] = None
    followers: Optional[int] = None
    following: Optional[int] = None
    likes_received: Optional[int] = None
    views_received: Optional[int] = None

    @classmethod
    def from_json(cls, data: Any) -> "UserStats":
        if not isinstance(data, dict):
            data = {}
        return cls(
            projects=_int(data, "projects"),
            followers=_int(data, "followers"),
            following=_int(data, "following"),
            likes_received=_int(data, "likes_received"),
            views_received=_int(data, "views_received"),
        )


@dataclass
class User:
    username: str
    display_name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[str] = None
    is_verified: Optional[bool] = None
    stats: Optional[UserStats] = None

    @classmethod
    def from_json(cls, data: Any) -> Optional["User"]:
        if not isinstance(data, dict):
            return None
        # Follower/following lists wrap the account as {"user": {...}}.
        if isinstance(data.get("user"), dict):
            data = data["user"]
        username = _str(data, "username")
        if username is None:
            return None
        stats = data.get("stats")
        return cls(
            username=username,
            display_name=_str(data, "display_name"),
            bio=_str(data, "bio"),
            avatar_url=_str(data, "avatar_url"),
            created_at=_str(data, "created_at"),
            is_verified=_bool(data, "is_verified"),
            stats=UserStats.from_json(stats) if isinstance(stats, dict) else None,
        )


# -----------------------------------------------------------------------------
# Comments, screenshots, assets
# -----------------------------------------------------------------------------
@dataclass
class Comment:
    id: str
    author: Optional[Owner] = None
    content: Optional[str] = None
    created_at: Optional[str] = None
    likes: Optional[int] = None
    replies: Optional[int] = None
    parent_id: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> Optional["Comment"]:
        if not isinstance(data, dict):
            return None
        if isinstance(data.get("comment"), dict):
            data = data["comment"]
        comment_id = _str(data, "id")
        if comment_id is None:
            return None
        return cls(
            id=comment_id,
            author=Owner.from_json(data.get("author")),
            content=_str(data, "content"),
            created_at=_str(data, "created_at"),
            likes=_int(data, "likes"),
            replies=_int(data, "reply_count"),
            parent_id=_str(data, "parent_id"),
        )


@dataclass
class Screenshot:
    id: Optional[str] = None
    url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    created_at: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> Optional["Screenshot"]:
        if not isinstance(data, dict):
            return None
        return cls(
            id=_str(data, "id"),
            url=_str(data, "url"),
            width=_int(data, "width"),
            height=_int(data, "height"),
            created_at=_str(data, "created_at"),
        )


@dataclass
class Asset:
    path: Optional[str] = None
    name: Optional[str] = None
    mime_type: Optional[str] = None
    size: Optional[int] = None
    url: Optional[str] = None
    last_modified: Optional[str] = None
    project_id: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        if self.path:
            return self.path.rsplit("/", 1)[-1]
        return "(unnamed asset)"

    @classmethod
    def from_json(cls, data: Any) -> Optional["Asset"]:
        if not isinstance(data, dict):
            return None
        if isinstance(data.get("asset"), dict):
            data = data["asset"]
        return cls(
            path=_str(data, "path"),
            name=_str(data, "name"),
            mime_type=_str(data, "content_type"),
            size=_int(data, "size"),
            url=_str(data, "url"),
            last_modified=_str(data, "last_modified"),
            project_id=_str(data, "project_id"),
        )


@dataclass
class AssetQueryResult:
    """One sub-query's answer inside a bulk asset search."""

    query: str
    assets: list[Asset] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> Optional["AssetQueryResult"]:
        if not isinstance(data, dict):
            return None
        query = _str(data, "query")
        if query is None:
            return None
        results = data.get("results")
        if not isinstance(results, list):
            results = []
        return cls(
            query=query,
            assets=[a for a in (Asset.from_json(r) for r in results) if a is not None],
        )


# -----------------------------------------------------------------------------
# Search helpers
# -----------------------------------------------------------------------------
@dataclass
class Keyword:
    keyword: str
    frequency: Optional[int] = None
    score: Optional[float] = None

    @classmethod
    def from_json(cls, data: Any) -> Optional["Keyword"]:
        if isinstance(data, str) and data:
            return cls(keyword=data)
        if not isinstance(data, dict):
            return None
        keyword = _str(data, "keyword")
        if keyword is None:
            return None
        return cls(
            keyword=keyword,
            frequency=_int(data, "frequency"),
            score=_float(data, "score"),
        )


@dataclass
class SearchTerm:
    query: str
    count: Optional[int] = None

    @classmethod
    def from_json(cls, data: Any) -> Optional["SearchTerm"]:
        if isinstance(data, str) and data:
            return cls(query=data)
        if not isinstance(data, dict):
            return None
        query = _str(data, "query")
        if query is None:
            return None
        return cls(query=query, count=_int(data, "count"))


# -----------------------------------------------------------------------------
# Room: a live multiplayer session attached to a project
# -----------------------------------------------------------------------------
@dataclass
class Room:
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    owner: Optional[Owner] = None
    project_id: Optional[str] = None
    active_users: Optional[int] = None
    created_at: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.id

    @classmethod
    def from_json(cls, data: Any) -> Optional["Room"]:
        if not isinstance(data, dict):
            return None
        if isinstance(data.get("room"), dict):
            data = data["room"]
        room_id = _str(data, "id")
        if room_id is None:
            return None
        project_id = _str(data, "project_id") or _str(_dict(data, "project"), "id")
        active_users = _int(data, "active_users")
        if active_users is None:
            active_users = _int(data, "user_count")
        return cls(
            id=room_id,
            name=_str(data, "name") or _str(data, "title"),
            description=_str(data, "description"),
            owner=Owner.from_json(data.get("owner") or data.get("creator")),
            project_id=project_id,
            active_users=active_users,
            created_at=_str(data, "created_at"),
        )


# -----------------------------------------------------------------------------
# Page: one slice of a list endpoint
# -----------------------------------------------------------------------------
@dataclass
class Page(Generic[T]):
    """A list response.

    Upstream list endpoints answer with either a bare JSON array, or
    {"data": [...], "meta": {"has_next_page": bool, ...}}.
    Entries the parser rejects (returns None for) are dropped.
    """

    items: list[T] = field(default_factory=list)
    has_next_page: bool = False

    @classmethod
    def from_json(cls, payload: Any, parse: Callable[[Any], Optional[T]]) -> "Page[T]":
        if isinstance(payload, list):
            rows, meta = payload, {}
        else:
            data = payload.get("data") if isinstance(payload, dict) else None
            rows = data if isinstance(data, list) else []
            meta = _dict(payload, "meta")

        items = [item for item in (parse(row) for row in rows) if item is not None]
        return cls(
            items=items,
            has_next_page=meta.get("has_next_page") is True,
        )
