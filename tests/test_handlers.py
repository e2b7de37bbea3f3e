"""Tests for the tool handlers: one upstream call in, one markdown block out."""

import json

import pytest

from websim import feeds, projects, search, users
from websim.errors import InvalidResponseError, NotFoundError

from conftest import API_BASE, SITE_URL, make_project


# -- Projects --

def test_get_project_renders_details(context, opener) -> None:
    opener.respond("/api/v1/projects/p_abc123", {"project": make_project()})
    text = projects.get_project(context, "p_abc123")

    assert text.startswith("# WebSim Project Details")
    assert "**Title:** Pixel Garden" in text
    assert f"**Owner:** [Sprout]({SITE_URL}/@sprout)" in text
    assert "- Views: 121,757" in text
    assert "- Likes: 1,132" in text
    assert "**Created:** Jan 05, 2024, 03:04 PM UTC" in text
    assert f"**Live Site:** {SITE_URL}/p/p_abc123" in text
    assert f"**URL:** {SITE_URL}/@sprout/pixel-garden" in text
    assert "None" not in text
    assert len(opener.requests) == 1


def test_get_project_omits_missing_fields(context, opener) -> None:
    opener.respond("/api/v1/projects/bare", {"id": "bare"})
    text = projects.get_project(context, "bare")
    assert "**Title:** bare" in text
    for absent in ("Owner", "Description", "Statistics", "Tags", "**URL:**"):
        assert absent not in text


def test_get_project_without_project_in_body(context, opener) -> None:
    opener.respond("/api/v1/projects/weird", {"ok": True})
    with pytest.raises(InvalidResponseError):
        projects.get_project(context, "weird")


def test_project_id_is_percent_encoded(context, opener) -> None:
    opener.respond("/api/v1/projects/a%2Fb", make_project(id="a/b"))
    projects.get_project(context, "a/b")
    assert opener.last.full_url == f"{API_BASE}/api/v1/projects/a%2Fb"


def test_get_project_by_slug_path(context, opener) -> None:
    opener.respond("/api/v1/users/sprout/slugs/pixel-garden", make_project())
    text = projects.get_project_by_slug(context, "sprout", "pixel-garden")
    assert "**Slug:** pixel-garden" in text


def test_not_found_propagates(context, opener) -> None:
    with pytest.raises(NotFoundError):
        projects.get_project(context, "nope")
    assert len(opener.requests) == 1


def test_get_project_stats_like_rate(context, opener) -> None:
    opener.respond("/api/v1/projects/p1/stats", {"views": 2000, "likes": 50, "forks": 3})
    text = projects.get_project_stats(context, "p1")
    assert "- Views: 2,000" in text
    assert "- Like Rate: 2.50%" in text
    assert "Comments" not in text


def test_list_project_comments_query(context, opener) -> None:
    opener.respond(
        "/api/v1/projects/p1/comments",
        {"data": [{"comment": {"id": "c1", "author": {"username": "fern"}, "content": "Love it",
                               "created_at": "2023-12-01T00:00:00Z", "likes": 4}}]},
    )
    text = projects.list_project_comments(context, "p1", 20, 0, "likes", "asc")
    assert opener.last_query() == {"limit": "20", "offset": "0", "sort_by": "likes", "sort_order": "asc"}
    assert "Sorted by: likes (asc)" in text
    assert f"**Author:** [fern]({SITE_URL}/@fern)" in text
    assert "**Comment ID:** c1" in text
    assert "Love it" in text


def test_get_comment_replies_path(context, opener) -> None:
    opener.respond("/api/v1/projects/p1/comments/c1/replies", {"data": []})
    text = projects.get_comment_replies(context, "p1", "c1", 5, 0)
    assert "Showing 0 replies" in text


def test_list_project_screenshots(context, opener) -> None:
    opener.respond(
        "/api/v1/projects/p1/revisions/2/screenshots",
        [{"id": "s1", "url": "https://img.test/s1.png", "width": 1280, "height": 720}],
    )
    text = projects.list_project_screenshots(context, "p1", 2)
    assert "(Version 2)" in text
    assert "**Dimensions:** 1,280 × 720" in text
    assert "![Screenshot 1](https://img.test/s1.png)" in text


def test_get_project_assets(context, opener) -> None:
    opener.respond(
        "/api/v1/projects/p1/revisions/latest/assets",
        [{"path": "index.html", "content_type": "text/html", "size": 2048}],
    )
    text = projects.get_project_assets(context, "p1", "latest")
    assert "## 1. index.html" in text
    assert "**Size:** 2,048 bytes" in text


def test_revisions_pagination_hint(context, opener) -> None:
    opener.respond(
        "/api/v1/projects/p1/revisions",
        {"data": [{"version": 3, "created_at": "2023-01-01T00:00:00Z"}],
         "meta": {"has_next_page": True}},
    )
    text = projects.get_project_revisions(context, "p1", 1, 4)
    assert "## 1. Version 3" in text
    assert text.rstrip().endswith("Use offset 5 with limit 1 to see more.*")


def test_empty_list_shows_zero(context, opener) -> None:
    opener.respond("/api/v1/projects", {"data": [], "meta": {"has_next_page": False}})
    text = projects.list_projects(context, 20, 0)
    assert "Showing 0 projects" in text
    assert "More projects" not in text


# -- Users --

def test_get_user(context, opener) -> None:
    opener.respond(
        "/api/v1/users/sprout",
        {"user": {"username": "sprout", "display_name": "Sprout", "is_verified": True,
                  "stats": {"projects": 12, "followers": 3400}}},
    )
    text = users.get_user(context, "sprout")
    assert text.startswith("# User Profile: Sprout")
    assert "**Status:** Verified" in text
    assert "- Followers: 3,400" in text
    assert f"**Profile URL:** {SITE_URL}/@sprout" in text


def test_get_user_stats_derived_metrics(context, opener) -> None:
    opener.respond(
        "/api/v1/users/sprout/stats",
        {"projects": 4, "followers": 10, "following": 2, "views_received": 10000, "likes_received": 400},
    )
    text = users.get_user_stats(context, "sprout")
    assert "- Avg Views per Project: 2,500" in text
    assert "- Avg Likes per Project: 100" in text
    assert "**Growing Influence**" in text


def test_get_user_stats_no_projects_skips_averages(context, opener) -> None:
    opener.respond("/api/v1/users/new/stats", {"projects": 0, "followers": 0, "following": 0})
    text = users.get_user_stats(context, "new")
    assert "Engagement Metrics" not in text
    assert "**Balanced Community**" in text


def test_get_user_projects_maps_sort(context, opener) -> None:
    opener.respond("/api/v1/users/sprout/projects", {"data": [make_project()]})
    text = users.get_user_projects(context, "sprout", "views", 10, 0, query="garden")
    assert opener.last_query() == {"limit": "10", "offset": "0", "sort": "views", "query": "garden"}
    assert 'Filtered by: "garden"' in text
    assert "**Owner:**" not in text


def test_get_user_projects_without_query(context, opener) -> None:
    opener.respond("/api/v1/users/sprout/projects", {"data": []})
    users.get_user_projects(context, "sprout", "updated", 20, 0)
    assert "query" not in opener.last_query()


def test_search_users_sends_q(context, opener) -> None:
    opener.respond("/api/v1/user-search", {"data": [{"username": "fern", "bio": "plants"}]})
    text = users.search_users(context, "fern", 20, 0)
    assert opener.last_query()["q"] == "fern"
    assert f"**Username:** [@fern]({SITE_URL}/@fern)" in text


def test_followers_and_following(context, opener) -> None:
    opener.respond("/api/v1/users/sprout/followers", {"data": [{"user": {"username": "fern"}}],
                                                      "meta": {"has_next_page": True}})
    opener.respond("/api/v1/users/sprout/following", {"data": []})
    followers = users.get_user_followers(context, "sprout", 1, 0)
    following = users.get_user_following(context, "sprout", 20, 0)
    assert "## 1. fern" in followers
    assert "Use offset 1 with limit 1" in followers
    assert "Showing 0 users" in following


# -- Feeds --

def test_trending_two_items(context, opener) -> None:
    opener.respond(
        "/api/v1/feed/trending",
        {
            "data": [
                {"project": make_project(id="p_one", title="One")},
                {"project": make_project(id="p_two", title="Two", stats={"views": 5, "likes": 0})},
            ],
            "meta": {"has_next_page": False},
        },
    )
    text = feeds.list_trending_projects(context, 2, 0, "day", "trending")

    assert opener.last_query() == {"limit": "2", "offset": "0", "range": "day", "feed": "trending"}
    assert "## 1. One" in text and "## 2. Two" in text
    assert "- Views: 121,757" in text
    assert "- Likes: 1,132" in text
    assert f"**Live Site:** {SITE_URL}/p/p_one" in text
    assert "Time range: day" in text


def test_trending_has_next_page_hint(context, opener) -> None:
    opener.respond("/api/v1/feed/trending", {"data": [make_project()], "meta": {"has_next_page": True}})
    text = feeds.list_trending_projects(context, 20, 40, "week", "popular")
    assert text.startswith("# Popular Projects")
    assert "*More projects available. Use offset 60 with limit 20 to see more.*" in text


def test_posts_feed(context, opener) -> None:
    opener.respond("/api/v1/feed/posts", {"data": [{"project": make_project()}, {"post": {}}]})
    text = feeds.get_posts_feed(context, 20, 0)
    assert "Showing 1 projects" in text


def test_search_projects_path(context, opener) -> None:
    opener.respond("/api/v1/feed/search/newest/pixel%20art", {"data": []})
    text = feeds.search_projects(context, "pixel art", "newest", 20, 0)
    assert opener.last.full_url.startswith(f"{API_BASE}/api/v1/feed/search/newest/pixel%20art?")
    assert "Sorted by: newest" in text


def test_trending_rooms(context, opener) -> None:
    opener.respond(
        "/api/v1/feed/rooms",
        {
            "data": [
                {"room": {"id": "r1", "name": "Garden Party", "owner": {"username": "sprout"},
                          "project_id": "p_abc123", "active_users": 0}},
                {"room": {"id": "r2", "user_count": 7}},
                {"room": {"name": "no id"}},
            ],
            "meta": {"has_next_page": True},
        },
    )
    text = feeds.get_trending_rooms(context, 2, 4)

    assert opener.last_query() == {"limit": "2", "offset": "4"}
    assert text.startswith("# Trending Rooms\n")
    assert "Showing 2 rooms" in text
    assert "## 1. Garden Party" in text
    assert f"**Host:** [sprout]({SITE_URL}/@sprout)" in text
    assert "**Active Users:** 0" in text
    assert f"**Project:** {SITE_URL}/p/p_abc123" in text
    assert "## 2. r2" in text
    assert "**Active Users:** 7" in text
    assert "*More rooms available. Use offset 6 with limit 2 to see more.*" in text


# -- Search --

def test_search_assets_query(context, opener) -> None:
    opener.respond("/api/v1/search/assets", {"data": [{"name": "cat.png", "content_type": "image/png"}]})
    text = search.search_assets(context, "cat", 20, 0, mime_type="image/")
    assert opener.last_query() == {"q": "cat", "mime_type": "image/", "limit": "20", "offset": "0"}
    assert "Filtered by MIME type: image/" in text
    assert "**Type:** image/png" in text


def test_bulk_asset_search_single_post(context, opener) -> None:
    opener.respond(
        "/api/v1/search/assets/bulk",
        {"data": [{"query": "cat", "results": [{"name": "cat.png", "url": "https://a.test/cat.png"}]},
                  {"query": "dog", "results": []}]},
    )
    assets = [{"query": "cat", "limit": 10}, {"query": "dog", "limit": 2}]
    text = search.bulk_asset_search(context, assets)

    assert len(opener.requests) == 1
    assert json.loads(opener.last.data) == {"assets": assets}
    assert "Queries sent: 2" in text
    assert "- **cat.png**: https://a.test/cat.png" in text
    assert '## "dog"' in text


def test_relevant_assets(context, opener) -> None:
    opener.respond("/api/v1/search/assets/relevant", [{"path": "sprites/hero.png"}])
    text = search.search_relevant_assets(context, "hero", 10)
    assert opener.last_query() == {"q": "hero", "limit": "10"}
    assert "## 1. hero.png" in text


def test_related_keywords(context, opener) -> None:
    opener.respond(
        "/api/v1/search/related",
        {"data": [{"keyword": "pixel art", "frequency": 1500, "score": 0.9}, "sprite"]},
    )
    text = search.get_related_keywords(context, "pixel", 10, 2)
    assert opener.last_query()["min_frequency"] == "2"
    assert "   - Frequency: 1,500" in text
    assert "   - Relevance Score: 0.90" in text
    assert '- "sprite"' in text


def test_top_searches_numbering_continues_from_offset(context, opener) -> None:
    opener.respond("/api/v1/search/top", {"data": [{"query": "games", "count": 12000}]})
    text = search.get_top_searches(context, 20, 40)
    assert '41. "games" (12,000 searches)' in text


def test_health_check(context, opener) -> None:
    opener.respond("/api/v1/projects", {"data": []})
    text = search.health_check(context)
    assert opener.last_query() == {"limit": "1"}
    assert "**Status:** healthy" in text
    assert f"**API:** {API_BASE}" in text
