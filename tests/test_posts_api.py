import pytest

from blogapi.core.exceptions import StorageError

POST_BODY = {
    "title": "My First Post",
    "content": "<p>Hello there, this is content.</p>",
    "status": "published",
    "category": "News",
    "tags": [" Launch ", "news"],
    "featuredImage": {"url": "/cover.png", "alt": "Cover"},
}


async def create(client, **overrides):
    body = {**POST_BODY, **overrides}
    return await client.post("/api/posts/create", json=body)


# ------------------------------------------------------------------
# health / ready
# ------------------------------------------------------------------
@pytest.mark.asyncio
async def test_health(client):
    res = await client.get("/api/health")
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Server is running"
    assert "timestamp" in body


@pytest.mark.asyncio
async def test_ready(client):
    res = await client.get("/api/ready")
    assert res.status_code == 200
    assert res.json() == {"success": True, "database": "up"}


@pytest.mark.asyncio
async def test_ready_database_down(client, database):
    await database.drop_all()
    await database.dispose()
    database.url = "sqlite+aiosqlite:////nonexistent/dir/blog.db"
    database.connect()

    res = await client.get("/api/ready")
    assert res.status_code == 503
    assert res.json()["database"] == "unreachable"


# ------------------------------------------------------------------
# POST /api/posts/create
# ------------------------------------------------------------------
@pytest.mark.asyncio
async def test_create_post(client):
    res = await create(client)
    assert res.status_code == 201

    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Post created successfully"

    post = body["post"]
    assert post["slug"] == "my-first-post"
    assert post["status"] == "published"
    assert post["publishedAt"] is not None
    assert post["readTime"] >= 1
    assert post["metaTitle"] == "My First Post"
    assert post["metaDescription"] == "Hello there, this is content."
    assert post["excerpt"] == "Hello there, this is content."
    assert post["tags"] == ["launch", "news"]
    assert post["author"] == {"name": "Admin", "email": "admin@example.com", "avatar": None}
    assert post["featuredImage"] == {"url": "/cover.png", "alt": "Cover", "caption": None}
    assert post["socialShares"] == {"facebook": 0, "twitter": 0, "linkedin": 0}
    assert post["viewCount"] == 0
    assert post["formattedDate"]


@pytest.mark.asyncio
async def test_create_duplicate_title_gets_suffix(client):
    await create(client)
    res = await create(client)
    assert res.status_code == 201
    assert res.json()["post"]["slug"] == "my-first-post-1"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"title": "Hi"}, "Title must be between 3 and 200 characters"),
        ({"content": "123456789"}, "Content must be at least 10 characters"),
        ({"title": None}, "Title and content are required"),
        ({"metaTitle": "m" * 61}, "Meta title cannot exceed 60 characters"),
    ],
)
async def test_create_validation_errors(client, overrides, message):
    res = await create(client, **overrides)
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["message"] == message


@pytest.mark.asyncio
async def test_create_invalid_status(client):
    res = await create(client, status="scheduled")
    assert res.status_code == 400
    body = res.json()
    assert body["message"] == "Validation failed"
    assert body["errors"]


@pytest.mark.asyncio
async def test_create_storage_error_is_500(client, repo, monkeypatch):
    async def broken(*args, **kwargs):
        raise StorageError("Database error")

    monkeypatch.setattr(repo, "insert", broken)
    res = await create(client)
    assert res.status_code == 500
    assert res.json()["message"] == "Internal server error"


# ------------------------------------------------------------------
# GET /api/posts
# ------------------------------------------------------------------
@pytest.mark.asyncio
async def test_list_posts_defaults_to_published(client):
    await create(client)
    await create(client, title="Second post")
    await create(client, title="Draft post", status="draft")

    res = await client.get("/api/posts")
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert len(body["posts"]) == 2
    assert body["pagination"] == {
        "currentPage": 1,
        "totalPages": 1,
        "totalPosts": 2,
        "hasNextPage": False,
        "hasPrevPage": False,
        "limit": 10,
    }
    # createdAt desc
    assert body["posts"][0]["title"] == "Second post"


@pytest.mark.asyncio
async def test_list_posts_filters(client):
    await create(client)
    await create(client, title="CSS tricks", category="CSS", tags=["css"])
    await create(client, title="Draft post", status="draft")

    res = await client.get("/api/posts", params={"status": "draft"})
    assert [p["title"] for p in res.json()["posts"]] == ["Draft post"]

    res = await client.get("/api/posts", params={"status": "all"})
    assert res.json()["pagination"]["totalPosts"] == 3

    res = await client.get("/api/posts", params={"category": "CSS"})
    assert [p["title"] for p in res.json()["posts"]] == ["CSS tricks"]

    res = await client.get("/api/posts", params={"tag": "launch"})
    assert [p["title"] for p in res.json()["posts"]] == ["My First Post"]

    res = await client.get("/api/posts", params={"author": "Admin"})
    assert res.json()["pagination"]["totalPosts"] == 2


@pytest.mark.asyncio
async def test_list_posts_pagination(client):
    for i in range(5):
        await create(client, title=f"Post number {i}")

    res = await client.get(
        "/api/posts",
        params={"limit": 2, "page": 2, "sort": "title", "order": "asc"},
    )
    body = res.json()
    assert [p["title"] for p in body["posts"]] == ["Post number 2", "Post number 3"]
    assert body["pagination"] == {
        "currentPage": 2,
        "totalPages": 3,
        "totalPosts": 5,
        "hasNextPage": True,
        "hasPrevPage": True,
        "limit": 2,
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [{"limit": 0}, {"page": 0}, {"sort": "slug"}, {"order": "up"}, {"status": "deleted"}],
)
async def test_list_posts_bad_query(client, params):
    res = await client.get("/api/posts", params=params)
    assert res.status_code == 400
    assert res.json()["success"] is False


# ------------------------------------------------------------------
# GET /api/posts/{slug}
# ------------------------------------------------------------------
@pytest.mark.asyncio
async def test_read_post_increments_views(client):
    await create(client)

    res = await client.get("/api/posts/my-first-post")
    assert res.status_code == 200
    assert res.json()["post"]["viewCount"] == 1

    res = await client.get("/api/posts/my-first-post")
    assert res.json()["post"]["viewCount"] == 2


@pytest.mark.asyncio
async def test_read_draft_by_slug(client):
    await create(client, status="draft")
    res = await client.get("/api/posts/my-first-post")
    assert res.status_code == 200
    assert res.json()["post"]["status"] == "draft"


@pytest.mark.asyncio
async def test_read_missing_post(client):
    res = await client.get("/api/posts/nope")
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Post not found"}


# ------------------------------------------------------------------
# PUT /api/posts/{slug}
# ------------------------------------------------------------------
@pytest.mark.asyncio
async def test_update_post(client):
    await create(client)

    res = await client.put(
        "/api/posts/my-first-post",
        json={
            "title": "My Edited Post",
            "content": "<p>Edited content for the post.</p>",
            "newSlug": "my-edited-post",
            "keywords": ["Edit"],
        },
    )
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Post updated successfully"
    post = body["post"]
    assert post["slug"] == "my-edited-post"
    assert post["keywords"] == ["edit"]
    assert post["tags"] == ["launch", "news"]
    assert post["category"] == "News"
    assert post["metaTitle"] == "My Edited Post"

    assert (await client.get("/api/posts/my-first-post")).status_code == 404
    assert (await client.get("/api/posts/my-edited-post")).status_code == 200


@pytest.mark.asyncio
async def test_update_content_only_keeps_slug(client):
    await create(client)
    res = await client.put(
        "/api/posts/my-first-post",
        json={"title": "My First Post", "content": "<p>Only the content changes.</p>"},
    )
    assert res.status_code == 200
    assert res.json()["post"]["slug"] == "my-first-post"


@pytest.mark.asyncio
async def test_update_slug_conflict(client):
    await create(client)
    await create(client, title="Other post")

    res = await client.put(
        "/api/posts/other-post",
        json={"title": "Renamed", "content": POST_BODY["content"], "newSlug": "my-first-post"},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "A post with this slug already exists"


@pytest.mark.asyncio
async def test_update_validation_and_missing(client):
    await create(client)

    res = await client.put("/api/posts/my-first-post", json={"title": "Hi", "content": "long enough"})
    assert res.status_code == 400

    res = await client.put("/api/posts/missing", json={"title": "Valid", "content": "long enough"})
    assert res.status_code == 404


# ------------------------------------------------------------------
# DELETE /api/posts/{slug}
# ------------------------------------------------------------------
@pytest.mark.asyncio
async def test_delete_post(client):
    await create(client)

    res = await client.delete("/api/posts/my-first-post")
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Post deleted successfully"}

    assert (await client.get("/api/posts/my-first-post")).status_code == 404
    assert (await client.delete("/api/posts/my-first-post")).status_code == 404

    res = await client.get("/api/posts", params={"status": "all"})
    assert res.json()["posts"] == []


# ------------------------------------------------------------------
# publish / unpublish
# ------------------------------------------------------------------
@pytest.mark.asyncio
async def test_publish_and_unpublish(client):
    await create(client, status="draft")

    res = await client.post("/api/posts/my-first-post/publish")
    assert res.status_code == 200
    post = res.json()["post"]
    assert post["status"] == "published"
    assert post["publishedAt"] is not None

    res = await client.post("/api/posts/my-first-post/unpublish")
    post = res.json()["post"]
    assert post["status"] == "draft"
    assert post["publishedAt"] is None

    assert (await client.post("/api/posts/missing/publish")).status_code == 404
