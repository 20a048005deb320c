# blogapi/services/posts.py
"""
Post operations: each one takes a repository plus the current snapshot,
builds the new state with `blogapi.domain.posts` and persists it with a
single repository call. The returned `Post` is the fresh row.
"""
from datetime import datetime, timezone
from typing import Optional

from blogapi.domain.inputs import PostCreateIn, PostUpdateIn
from blogapi.core.exceptions import ConflictError
from blogapi.core.logger import logger
from blogapi.core.settings import Settings, settings as default_settings
from blogapi.db.models import Post
from blogapi.db.repository import SLUG_CONFLICT_MESSAGE, PostRepository
from blogapi.domain import posts as rules
from blogapi.domain.slugify import slugify


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _image_dict(data) -> Optional[dict]:
    if data.featured_image is None:
        return None
    return data.featured_image.model_dump()


async def find_available_slug(
    repo: PostRepository,
    base: str,
    exclude_id: Optional[str] = None,
) -> str:
    """Probe base, base-1, base-2, ... against the active posts in the store."""
    for candidate in rules.slug_candidates(base):
        if not await repo.slug_exists(candidate, exclude_id=exclude_id):
            return candidate


# ---------------------------------------------------------
# create
# ---------------------------------------------------------
async def create_post(
    repo: PostRepository,
    data: PostCreateIn,
    settings: Optional[Settings] = None,
) -> Post:
    settings = settings or default_settings
    rules.validate_post_fields(
        data.title, data.content, data.meta_title, data.meta_description
    )

    base = rules.resolve_base_slug(data.title, data.slug)
    slug = await find_available_slug(repo, base)

    values = rules.build_new_post(
        title=data.title,
        content=data.content,
        slug=slug,
        author={
            "name": settings.author_name,
            "email": settings.author_email,
            "avatar": settings.author_avatar,
        },
        now=utcnow(),
        category=data.category,
        tags=data.tags,
        status=data.status or rules.PostStatus.DRAFT,
        meta_title=data.meta_title,
        meta_description=data.meta_description,
        keywords=data.keywords,
        featured_image=_image_dict(data),
        words_per_minute=settings.words_per_minute,
    )

    # El índice único parcial sigue siendo el backstop si otra request gana la carrera
    post = await repo.insert(Post(**values))
    logger.info("Post created: %s (%s)", post.slug, post.id)
    return post


# ---------------------------------------------------------
# update
# ---------------------------------------------------------
async def update_post(
    repo: PostRepository,
    existing: Post,
    data: PostUpdateIn,
    settings: Optional[Settings] = None,
) -> Post:
    settings = settings or default_settings
    rules.validate_post_fields(
        data.title, data.content, data.meta_title, data.meta_description
    )

    slug = None
    if data.new_slug and rules.title_changed(existing, data.title):
        slug = rules.resolve_base_slug(data.title, slugify(data.new_slug))
        if slug != existing.slug and await repo.slug_exists(slug, exclude_id=existing.id):
            raise ConflictError(SLUG_CONFLICT_MESSAGE)

    patch = rules.build_update_patch(
        existing,
        title=data.title,
        content=data.content,
        now=utcnow(),
        slug=slug,
        category=data.category,
        tags=data.tags,
        status=data.status,
        meta_title=data.meta_title,
        meta_description=data.meta_description,
        keywords=data.keywords,
        featured_image=_image_dict(data),
        words_per_minute=settings.words_per_minute,
    )

    post = await repo.update_by_id(existing.id, patch)
    logger.info("Post updated: %s (%s)", post.slug, post.id)
    return post


# ---------------------------------------------------------
# views / delete / publish
# ---------------------------------------------------------
async def increment_view(repo: PostRepository, existing: Post) -> Post:
    return await repo.increment_view_count(existing.id)


async def soft_delete(repo: PostRepository, existing: Post) -> Post:
    post = await repo.update_by_id(existing.id, rules.soft_delete_patch(utcnow()))
    logger.info("Post soft-deleted: %s (%s)", post.slug, post.id)
    return post


async def publish(repo: PostRepository, existing: Post) -> Post:
    post = await repo.update_by_id(existing.id, rules.publish_patch(utcnow()))
    logger.info("Post published: %s", post.slug)
    return post


async def unpublish(repo: PostRepository, existing: Post) -> Post:
    post = await repo.update_by_id(existing.id, rules.unpublish_patch(utcnow()))
    logger.info("Post unpublished: %s", post.slug)
    return post
