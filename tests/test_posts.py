"""
Post endpoint tests — covers CRUD scoped to the owning user, author and
tag enrichment on reads, and windowed listing.

Each test creates the users, posts and tags it needs through the API, so
test order does not matter.
"""
import pytest
from httpx import AsyncClient


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _create_user(client: AsyncClient, name: str) -> int:
    resp = await client.post("/api/create-user", json={"name": name})
    assert resp.status_code == 201
    return resp.json()["data"]["createdId"]


async def _create_post(client: AsyncClient, user_id: int, title: str, **extra) -> int:
    payload = {"title": title, "content": f"{title} content", **extra}
    resp = await client.post(f"/api/user/{user_id}/create-post", json=payload)
    assert resp.status_code == 201
    return resp.json()["data"]["createdId"]


# ---------------------------------------------------------------------------
# Create post
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_post(async_client: AsyncClient):
    user_id = await _create_user(async_client, "author")

    resp = await async_client.post(
        f"/api/user/{user_id}/create-post",
        json={"title": "Hello", "content": "World"},
    )
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["createdId"] > 0
    assert data["title"] == "Hello"
    assert data["content"] == "World"
    assert data["author_id"] == user_id
    assert data["tags_id"] is None
    assert data["tags"] == []


@pytest.mark.asyncio
async def test_create_post_with_tag_echoes_tag_name(async_client: AsyncClient):
    user_id = await _create_user(async_client, "tagger")
    first_post = await _create_post(async_client, user_id, "First")
    tag_resp = await async_client.post(
        f"/api/post/{first_post}/create-tag", json={"name": "python"}
    )
    tag_id = tag_resp.json()["data"]["createdId"]

    resp = await async_client.post(
        f"/api/user/{user_id}/create-post",
        json={"title": "Second", "content": "x", "tags_id": tag_id},
    )
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["tags_id"] == tag_id
    assert data["tags"] == ["python"]


@pytest.mark.asyncio
async def test_create_post_with_unknown_tag_is_server_error(async_client: AsyncClient):
    user_id = await _create_user(async_client, "author")
    resp = await async_client.post(
        f"/api/user/{user_id}/create-post",
        json={"title": "Orphan", "content": "x", "tags_id": 999},
    )
    assert resp.status_code == 500
    assert resp.json()["errors"][0]["detail"] == "tag does not exist"


@pytest.mark.asyncio
async def test_create_post_missing_title(async_client: AsyncClient):
    user_id = await _create_user(async_client, "author")
    resp = await async_client.post(f"/api/user/{user_id}/create-post", json={"content": "x"})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_create_post_duplicate_title(async_client: AsyncClient):
    user_id = await _create_user(async_client, "author")
    await _create_post(async_client, user_id, "Same")
    resp = await async_client.post(
        f"/api/user/{user_id}/create-post", json={"title": "Same", "content": "y"}
    )
    assert resp.status_code == 500


# ---------------------------------------------------------------------------
# Get post
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_get_post_enriched_with_author_and_tag(async_client: AsyncClient):
    user_id = await _create_user(async_client, "writer")
    first_post = await _create_post(async_client, user_id, "First")
    tag_resp = await async_client.post(
        f"/api/post/{first_post}/create-tag", json={"name": "news"}
    )
    tag_id = tag_resp.json()["data"]["createdId"]
    post_id = await _create_post(async_client, user_id, "Tagged", tags_id=tag_id)

    resp = await async_client.get(f"/api/user/{user_id}/post/{post_id}")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["title"] == "Tagged"
    assert data["author"]["id"] == user_id
    assert data["author"]["name"] == "writer"
    assert data["tag"]["id"] == tag_id
    assert data["tag"]["name"] == "news"


@pytest.mark.asyncio
async def test_get_post_without_tag(async_client: AsyncClient):
    user_id = await _create_user(async_client, "writer")
    post_id = await _create_post(async_client, user_id, "Plain")

    resp = await async_client.get(f"/api/user/{user_id}/post/{post_id}")
    assert resp.status_code == 200
    assert resp.json()["data"]["tag"] is None


@pytest.mark.asyncio
async def test_get_post_under_other_user_is_server_error(async_client: AsyncClient):
    owner = await _create_user(async_client, "owner")
    other = await _create_user(async_client, "other")
    post_id = await _create_post(async_client, owner, "Mine")

    resp = await async_client.get(f"/api/user/{other}/post/{post_id}")
    assert resp.status_code == 500
    assert resp.json()["errors"][0]["detail"] == "post does not exist"


# ---------------------------------------------------------------------------
# List posts
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_posts_includes_authors(async_client: AsyncClient):
    alice = await _create_user(async_client, "alice")
    bob = await _create_user(async_client, "bob")
    await _create_post(async_client, alice, "A1")
    await _create_post(async_client, bob, "B1")

    resp = await async_client.get("/api/posts")
    assert resp.status_code == 200
    posts = resp.json()["data"]
    assert [p["title"] for p in posts] == ["A1", "B1"]
    assert [p["author"]["name"] for p in posts] == ["alice", "bob"]
    assert resp.json()["header"]["totalData"] == 2


@pytest.mark.asyncio
async def test_list_posts_window(async_client: AsyncClient):
    user_id = await _create_user(async_client, "prolific")
    for i in range(4):
        await _create_post(async_client, user_id, f"P{i}")

    resp = await async_client.get("/api/posts", params={"from": 2, "to": 10})
    assert resp.status_code == 200
    assert [p["title"] for p in resp.json()["data"]] == ["P2", "P3"]


@pytest.mark.asyncio
async def test_list_posts_single_query(async_client: AsyncClient):
    """Author and tag are joined into the list SELECT; no query per post."""
    user_id = await _create_user(async_client, "counted")
    first = await _create_post(async_client, user_id, "C0")
    tag_resp = await async_client.post(f"/api/post/{first}/create-tag", json={"name": "counted"})
    tag_id = tag_resp.json()["data"]["createdId"]
    for i in range(1, 5):
        await _create_post(async_client, user_id, f"C{i}", tags_id=tag_id)

    resp = await async_client.get("/api/posts")
    assert resp.status_code == 200
    assert len(resp.json()["data"]) == 5
    count = int(resp.headers["x-query-count"])
    assert count == 1, f"Expected exactly 1 query for post list, got {count}"


@pytest.mark.asyncio
async def test_get_post_single_query(async_client: AsyncClient):
    user_id = await _create_user(async_client, "counted_detail")
    first = await _create_post(async_client, user_id, "D0")
    tag_resp = await async_client.post(f"/api/post/{first}/create-tag", json={"name": "detail"})
    tag_id = tag_resp.json()["data"]["createdId"]
    post_id = await _create_post(async_client, user_id, "D1", tags_id=tag_id)

    resp = await async_client.get(f"/api/user/{user_id}/post/{post_id}")
    assert resp.status_code == 200
    assert resp.json()["data"]["tag"]["name"] == "detail"
    count = int(resp.headers["x-query-count"])
    assert count == 1, f"Expected exactly 1 query for post detail, got {count}"


@pytest.mark.asyncio
async def test_list_posts_rejects_inverted_window(async_client: AsyncClient):
    resp = await async_client.get("/api/posts", params={"from": 3, "to": 1})
    assert resp.status_code == 400


# ---------------------------------------------------------------------------
# Update post
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_post_partial(async_client: AsyncClient):
    user_id = await _create_user(async_client, "editor")
    post_id = await _create_post(async_client, user_id, "Draft")

    resp = await async_client.put(
        f"/api/user/{user_id}/post/{post_id}", json={"title": "Final"}
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["title"] == "Final"
    assert data["content"] == "Draft content"
    assert data["author"]["name"] == "editor"


@pytest.mark.asyncio
async def test_update_post_content(async_client: AsyncClient):
    user_id = await _create_user(async_client, "editor")
    post_id = await _create_post(async_client, user_id, "Keep")

    resp = await async_client.put(
        f"/api/user/{user_id}/post/{post_id}", json={"content": "rewritten"}
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["title"] == "Keep"
    assert resp.json()["data"]["content"] == "rewritten"


@pytest.mark.asyncio
async def test_update_post_empty_body_keeps_fields(async_client: AsyncClient):
    user_id = await _create_user(async_client, "editor")
    post_id = await _create_post(async_client, user_id, "Steady")
    before = (await async_client.get(f"/api/user/{user_id}/post/{post_id}")).json()["data"]

    resp = await async_client.put(f"/api/user/{user_id}/post/{post_id}", json={})
    assert resp.status_code == 200
    after = resp.json()["data"]
    assert after["title"] == before["title"]
    assert after["content"] == before["content"]
    assert after["updated_at"] != before["updated_at"]


# ---------------------------------------------------------------------------
# Delete post
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_delete_post(async_client: AsyncClient):
    user_id = await _create_user(async_client, "deleter")
    post_id = await _create_post(async_client, user_id, "Gone")

    resp = await async_client.delete(f"/api/user/{user_id}/post/{post_id}")
    assert resp.status_code == 204

    resp = await async_client.get(f"/api/user/{user_id}/post/{post_id}")
    assert resp.status_code == 500


@pytest.mark.asyncio
async def test_delete_post_under_other_user_leaves_it(async_client: AsyncClient):
    owner = await _create_user(async_client, "owner")
    other = await _create_user(async_client, "other")
    post_id = await _create_post(async_client, owner, "Safe")

    resp = await async_client.delete(f"/api/user/{other}/post/{post_id}")
    assert resp.status_code == 204

    resp = await async_client.get(f"/api/user/{owner}/post/{post_id}")
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_delete_post_leaves_comments_orphaned(async_client: AsyncClient):
    user_id = await _create_user(async_client, "owner")
    post_id = await _create_post(async_client, user_id, "Parent")
    comment_resp = await async_client.post(
        f"/api/post/{post_id}/add-comment", json={"name": "n", "body": "b"}
    )
    comment_id = comment_resp.json()["data"]["createdId"]

    await async_client.delete(f"/api/user/{user_id}/post/{post_id}")

    resp = await async_client.get(f"/api/post/{post_id}/comments/{comment_id}")
    assert resp.status_code == 200
    assert resp.json()["data"]["post"] is None


@pytest.mark.asyncio
async def test_update_post_null_fields_are_ignored(async_client: AsyncClient):
    user_id = await _create_user(async_client, "nulls")
    post_id = await _create_post(async_client, user_id, "Untouched")

    resp = await async_client.put(
        f"/api/user/{user_id}/post/{post_id}", json={"title": None, "content": None}
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["title"] == "Untouched"
    assert resp.json()["data"]["content"] == "Untouched content"


@pytest.mark.asyncio
async def test_post_routes_reject_zero_ids(async_client: AsyncClient):
    resp = await async_client.get("/api/user/0/post/1")
    assert resp.status_code == 400
    resp = await async_client.delete("/api/user/1/post/-1")
    assert resp.status_code == 400
