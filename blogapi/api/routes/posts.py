import math
from typing import Literal, Optional

from fastapi import APIRouter, Query, status

from blogapi.api.deps import RepoDep, SettingsDep
from blogapi.api.schemas import (
    MessageOut,
    PaginationOut,
    PostCreateIn,
    PostEnvelope,
    PostListOut,
    PostOut,
    PostUpdateIn,
)
from blogapi.core.exceptions import NotFoundError
from blogapi.db.models import Post
from blogapi.db.repository import PostFilter, PostRepository
from blogapi.services import posts as post_service

router = APIRouter()

SortField = Literal["createdAt", "updatedAt", "publishedAt", "title", "viewCount", "readTime"]


async def get_active_post(repo: PostRepository, slug: str) -> Post:
    post = await repo.find_by_slug(slug)
    if post is None:
        raise NotFoundError("Post not found")
    return post


# ---------------------------------------------------------
# GET /posts
# ---------------------------------------------------------
@router.get("/posts", response_model=PostListOut)
async def list_posts(
    repo: RepoDep,
    status_filter: Literal["published", "draft", "archived", "all"] = Query(
        "published", alias="status"
    ),
    category: Optional[str] = Query(None),
    tag: Optional[str] = Query(None),
    author: Optional[str] = Query(None, description="Author name"),
    limit: int = Query(10, ge=1, le=100),
    page: int = Query(1, ge=1),
    sort: SortField = Query("createdAt"),
    order: Literal["asc", "desc"] = Query("desc"),
):
    post_filter = PostFilter(
        status=status_filter,
        category=category,
        tag=tag,
        author=author,
    )
    posts, total = await repo.find_many(
        post_filter,
        sort=sort,
        order=order,
        skip=(page - 1) * limit,
        limit=limit,
    )

    total_pages = math.ceil(total / limit)
    return PostListOut(
        posts=[PostOut.from_post(p) for p in posts],
        pagination=PaginationOut(
            current_page=page,
            total_pages=total_pages,
            total_posts=total,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
            limit=limit,
        ),
    )


# ---------------------------------------------------------
# POST /posts/create
# ---------------------------------------------------------
@router.post(
    "/posts/create",
    response_model=PostEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_post(post_in: PostCreateIn, repo: RepoDep, settings: SettingsDep):
    post = await post_service.create_post(repo, post_in, settings)
    return PostEnvelope(message="Post created successfully", post=PostOut.from_post(post))


# ---------------------------------------------------------
# GET /posts/{slug} (suma una vista)
# ---------------------------------------------------------
@router.get("/posts/{slug}", response_model=PostEnvelope)
async def read_post(slug: str, repo: RepoDep):
    post = await get_active_post(repo, slug)
    post = await post_service.increment_view(repo, post)
    return PostEnvelope(post=PostOut.from_post(post))


# ---------------------------------------------------------
# PUT /posts/{slug}
# ---------------------------------------------------------
@router.put("/posts/{slug}", response_model=PostEnvelope)
async def update_post(slug: str, post_in: PostUpdateIn, repo: RepoDep, settings: SettingsDep):
    existing = await get_active_post(repo, slug)
    post = await post_service.update_post(repo, existing, post_in, settings)
    return PostEnvelope(message="Post updated successfully", post=PostOut.from_post(post))


# ---------------------------------------------------------
# DELETE /posts/{slug} (soft-delete)
# ---------------------------------------------------------
@router.delete("/posts/{slug}", response_model=MessageOut)
async def delete_post(slug: str, repo: RepoDep):
    existing = await get_active_post(repo, slug)
    await post_service.soft_delete(repo, existing)
    return MessageOut(message="Post deleted successfully")


# ---------------------------------------------------------
# POST /posts/{slug}/publish | /unpublish
# ---------------------------------------------------------
@router.post("/posts/{slug}/publish", response_model=PostEnvelope)
async def publish_post(slug: str, repo: RepoDep):
    existing = await get_active_post(repo, slug)
    post = await post_service.publish(repo, existing)
    return PostEnvelope(message="Post published successfully", post=PostOut.from_post(post))


@router.post("/posts/{slug}/unpublish", response_model=PostEnvelope)
async def unpublish_post(slug: str, repo: RepoDep):
    existing = await get_active_post(repo, slug)
    post = await post_service.unpublish(repo, existing)
    return PostEnvelope(message="Post unpublished successfully", post=PostOut.from_post(post))
