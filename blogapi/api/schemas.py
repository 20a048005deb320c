from datetime import datetime, timezone
from typing import Dict, List, Optional

from blogapi.db.models import Post
from blogapi.domain.inputs import (  # noqa: F401  re-exportados para las rutas
    CamelModel,
    FeaturedImage,
    PostCreateIn,
    PostUpdateIn,
    PostWriteBase,
)
from blogapi.domain.posts import PostStatus
from blogapi.domain.slugify import generate_excerpt


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite devuelve datetimes naive (guardados en UTC)
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def format_date(value: datetime) -> str:
    """`October 17, 2026`"""
    return f"{value:%B} {value.day}, {value.year}"


# =========================================================
# OUTPUT
# =========================================================

class AuthorOut(CamelModel):
    name: str
    email: str
    avatar: Optional[str] = None


class PostOut(CamelModel):
    id: str
    title: str
    slug: str
    excerpt: str
    content: str
    author: AuthorOut
    category: str
    tags: List[str]
    status: PostStatus
    view_count: int
    read_time: int
    featured_image: Optional[FeaturedImage] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: List[str]
    social_shares: Dict[str, int]
    created_at: datetime
    updated_at: datetime
    published_at: Optional[datetime] = None
    formatted_date: str

    @classmethod
    def from_post(cls, post: Post) -> "PostOut":
        created_at = as_utc(post.created_at)
        return cls(
            id=post.id,
            title=post.title,
            slug=post.slug,
            excerpt=generate_excerpt(post.content),
            content=post.content,
            author=AuthorOut(
                name=post.author_name,
                email=post.author_email,
                avatar=post.author_avatar,
            ),
            category=post.category,
            tags=post.tags or [],
            status=post.status,
            view_count=post.view_count,
            read_time=post.read_time,
            featured_image=post.featured_image,
            meta_title=post.meta_title,
            meta_description=post.meta_description,
            keywords=post.keywords or [],
            social_shares=post.social_shares or {},
            created_at=created_at,
            updated_at=as_utc(post.updated_at),
            published_at=as_utc(post.published_at),
            formatted_date=format_date(created_at),
        )


class PaginationOut(CamelModel):
    current_page: int
    total_pages: int
    total_posts: int
    has_next_page: bool
    has_prev_page: bool
    limit: int


class PostListOut(CamelModel):
    success: bool = True
    posts: List[PostOut]
    pagination: PaginationOut


class PostEnvelope(CamelModel):
    success: bool = True
    message: Optional[str] = None
    post: PostOut


class MessageOut(CamelModel):
    success: bool = True
    message: str


class HealthOut(CamelModel):
    success: bool = True
    message: str
    timestamp: datetime
