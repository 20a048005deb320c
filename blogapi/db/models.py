from datetime import datetime
from typing import Dict, List, Optional
import uuid

from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime, Index, JSON, text


def new_post_id() -> str:
    return str(uuid.uuid4())


class Post(SQLModel, table=True):
    __tablename__ = "blog_posts"
    __table_args__ = (
        # Slug único solo entre posts activos (soft-delete libera el slug)
        Index(
            "uq_blog_posts_slug_active",
            "slug",
            unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ),
        Index("ix_blog_posts_status_published_at", "status", "published_at"),
    )

    id: str = Field(default_factory=new_post_id, primary_key=True, max_length=36)

    # Contenido principal
    title: str = Field(nullable=False, max_length=200)
    content: str = Field(nullable=False)
    slug: str = Field(nullable=False, max_length=255, index=True)

    # SEO
    meta_title: Optional[str] = Field(default=None, max_length=60)
    meta_description: Optional[str] = Field(default=None, max_length=160)
    keywords: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )

    # Publicación
    status: str = Field(default="draft", nullable=False, max_length=20)
    published_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )

    # Autor (identidad fija, sin multi-autor)
    author_name: str = Field(nullable=False, max_length=100, index=True)
    author_email: str = Field(nullable=False, max_length=255)
    author_avatar: Optional[str] = Field(default=None, max_length=500)

    # Organización
    category: str = Field(default="Uncategorized", max_length=100, index=True)
    tags: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )

    featured_image: Optional[Dict[str, Optional[str]]] = Field(
        default=None,
        sa_column=Column(JSON, nullable=True),
    )

    # Métricas
    view_count: int = Field(default=0, ge=0, index=True)
    read_time: int = Field(default=0, ge=0)
    social_shares: Dict[str, int] = Field(
        default_factory=lambda: {"facebook": 0, "twitter": 0, "linkedin": 0},
        sa_column=Column(JSON, nullable=False),
    )

    # ----- Timestamps -----
    created_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )
    updated_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    deleted_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True, index=True),
    )
