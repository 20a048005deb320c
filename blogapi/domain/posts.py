# blogapi/domain/posts.py
"""
Post entity rules: validation, derived fields and status transitions.

Nothing here touches the database. Each function returns the values (or the
patch) that `blogapi.services.posts` persists through the repository.
"""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from blogapi.core.exceptions import ValidationError
from blogapi.domain.slugify import (
    calculate_read_time,
    generate_excerpt,
    is_valid_slug,
    slugify,
)

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200
CONTENT_MIN_LENGTH = 10
META_TITLE_MAX_LENGTH = 60
META_DESCRIPTION_MAX_LENGTH = 160
DEFAULT_CATEGORY = "Uncategorized"


class PostStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


# =========================================================
# VALIDATION
# =========================================================

def validate_post_fields(
    title: Optional[str],
    content: Optional[str],
    meta_title: Optional[str] = None,
    meta_description: Optional[str] = None,
) -> None:
    """Raise ValidationError listing every violated constraint."""
    title = (title or "").strip()
    content = (content or "").strip()

    if not title or not content:
        raise ValidationError("Title and content are required")

    errors: List[str] = []
    if not TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
        errors.append(
            f"Title must be between {TITLE_MIN_LENGTH} and {TITLE_MAX_LENGTH} characters"
        )
    if len(content) < CONTENT_MIN_LENGTH:
        errors.append(f"Content must be at least {CONTENT_MIN_LENGTH} characters")
    if meta_title and len(meta_title.strip()) > META_TITLE_MAX_LENGTH:
        errors.append(f"Meta title cannot exceed {META_TITLE_MAX_LENGTH} characters")
    if meta_description and len(meta_description.strip()) > META_DESCRIPTION_MAX_LENGTH:
        errors.append(
            f"Meta description cannot exceed {META_DESCRIPTION_MAX_LENGTH} characters"
        )

    if len(errors) == 1:
        raise ValidationError(errors[0], errors)
    if errors:
        raise ValidationError("Validation failed", errors)


# =========================================================
# DERIVED FIELDS
# =========================================================

def normalize_terms(values: Optional[Iterable[str]]) -> List[str]:
    """Lowercase + trim, drop empties and duplicates (order kept)."""
    seen: Dict[str, None] = {}
    for value in values or []:
        term = str(value).strip().lower()
        if term:
            seen.setdefault(term, None)
    return list(seen)


def derive_meta_title(title: str, meta_title: Optional[str] = None) -> str:
    if meta_title and meta_title.strip():
        return meta_title.strip()
    return title.strip()[:META_TITLE_MAX_LENGTH].strip()


def derive_meta_description(content: str, meta_description: Optional[str] = None) -> str:
    if meta_description and meta_description.strip():
        return meta_description.strip()
    # 157 + "..." para no pasar de 160
    return generate_excerpt(content, META_DESCRIPTION_MAX_LENGTH - 3)


def resolve_base_slug(title: str, custom_slug: Optional[str] = None) -> str:
    """Custom slug (normalized) or slug from title; never empty."""
    slug = slugify(custom_slug) or slugify(title)
    if not is_valid_slug(slug):
        raise ValidationError(
            "Slug can only contain lowercase letters, numbers, and hyphens",
            ["Could not generate a slug from the given title"],
        )
    return slug


def slug_candidates(base: str):
    """base, base-1, base-2, ... (unbounded)."""
    yield base
    counter = 1
    while True:
        yield f"{base}-{counter}"
        counter += 1


# =========================================================
# CREATE / UPDATE
# =========================================================

def build_new_post(
    *,
    title: str,
    content: str,
    slug: str,
    author: Dict[str, Optional[str]],
    now: datetime,
    category: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    status: PostStatus = PostStatus.DRAFT,
    meta_title: Optional[str] = None,
    meta_description: Optional[str] = None,
    keywords: Optional[Iterable[str]] = None,
    featured_image: Optional[Dict[str, Any]] = None,
    words_per_minute: int = 200,
) -> Dict[str, Any]:
    """Column values for a brand new post. Fields must be validated already."""
    title = title.strip()
    content = content.strip()
    status = PostStatus(status)

    return {
        "title": title,
        "content": content,
        "slug": slug,
        "category": (category or "").strip() or DEFAULT_CATEGORY,
        "tags": normalize_terms(tags),
        "keywords": normalize_terms(keywords),
        "status": status.value,
        "meta_title": derive_meta_title(title, meta_title),
        "meta_description": derive_meta_description(content, meta_description),
        "featured_image": featured_image,
        "author_name": author["name"],
        "author_email": (author.get("email") or "").strip().lower(),
        "author_avatar": author.get("avatar"),
        "published_at": now if status is PostStatus.PUBLISHED else None,
        "read_time": calculate_read_time(content, words_per_minute),
        "view_count": 0,
        "created_at": now,
        "updated_at": now,
        "deleted_at": None,
    }


def build_update_patch(
    existing,
    *,
    title: str,
    content: str,
    now: datetime,
    slug: Optional[str] = None,
    category: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    status: Optional[PostStatus] = None,
    meta_title: Optional[str] = None,
    meta_description: Optional[str] = None,
    keywords: Optional[Iterable[str]] = None,
    featured_image: Optional[Dict[str, Any]] = None,
    words_per_minute: int = 200,
) -> Dict[str, Any]:
    """
    Patch for editing `existing`.

    - slug: the caller decides (None keeps the current one)
    - omitted category/tags/keywords/status/featured_image keep current values
    - omitted meta fields are derived again from the new title/content
    - published_at only set on entry to published when never set before
    """
    title = title.strip()
    content = content.strip()
    new_status = PostStatus(status) if status else PostStatus(existing.status)

    patch: Dict[str, Any] = {
        "title": title,
        "content": content,
        "slug": slug or existing.slug,
        "category": (category or "").strip() or existing.category,
        "tags": normalize_terms(tags) if tags is not None else existing.tags,
        "keywords": normalize_terms(keywords) if keywords is not None else existing.keywords,
        "status": new_status.value,
        "meta_title": derive_meta_title(title, meta_title),
        "meta_description": derive_meta_description(content, meta_description),
        "featured_image": featured_image if featured_image is not None else existing.featured_image,
        "read_time": calculate_read_time(content, words_per_minute),
        "updated_at": now,
    }

    if (
        new_status is PostStatus.PUBLISHED
        and existing.status != PostStatus.PUBLISHED.value
        and existing.published_at is None
    ):
        patch["published_at"] = now

    return patch


def title_changed(existing, title: str) -> bool:
    return title.strip() != existing.title


# =========================================================
# TRANSITIONS
# =========================================================

def publish_patch(now: datetime) -> Dict[str, Any]:
    return {"status": PostStatus.PUBLISHED.value, "published_at": now, "updated_at": now}


def unpublish_patch(now: datetime) -> Dict[str, Any]:
    return {"status": PostStatus.DRAFT.value, "published_at": None, "updated_at": now}


def soft_delete_patch(now: datetime) -> Dict[str, Any]:
    # publishedAt se conserva
    return {"status": PostStatus.ARCHIVED.value, "deleted_at": now, "updated_at": now}
