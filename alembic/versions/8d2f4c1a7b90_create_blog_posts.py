"""create blog_posts

Revision ID: 8d2f4c1a7b90
Revises:
Create Date: 2026-10-17 10:12:31.418207
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
import sqlmodel

# revision identifiers, used by Alembic.
revision: str = "8d2f4c1a7b90"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "blog_posts",
        sa.Column("id", sqlmodel.sql.sqltypes.AutoString(length=36), nullable=False),
        sa.Column("title", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column("content", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("slug", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("meta_title", sqlmodel.sql.sqltypes.AutoString(length=60), nullable=True),
        sa.Column("meta_description", sqlmodel.sql.sqltypes.AutoString(length=160), nullable=True),
        sa.Column("keywords", sa.JSON(), nullable=False),
        sa.Column("status", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("author_name", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("author_email", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("author_avatar", sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column("category", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("featured_image", sa.JSON(), nullable=True),
        sa.Column("view_count", sa.Integer(), nullable=False),
        sa.Column("read_time", sa.Integer(), nullable=False),
        sa.Column("social_shares", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_blog_posts_slug"), "blog_posts", ["slug"], unique=False)
    op.create_index(op.f("ix_blog_posts_author_name"), "blog_posts", ["author_name"], unique=False)
    op.create_index(op.f("ix_blog_posts_category"), "blog_posts", ["category"], unique=False)
    op.create_index(op.f("ix_blog_posts_view_count"), "blog_posts", ["view_count"], unique=False)
    op.create_index(op.f("ix_blog_posts_created_at"), "blog_posts", ["created_at"], unique=False)
    op.create_index(op.f("ix_blog_posts_deleted_at"), "blog_posts", ["deleted_at"], unique=False)
    op.create_index(
        "ix_blog_posts_status_published_at",
        "blog_posts",
        ["status", "published_at"],
        unique=False,
    )
    # Slug único solo entre posts no borrados
    op.create_index(
        "uq_blog_posts_slug_active",
        "blog_posts",
        ["slug"],
        unique=True,
        sqlite_where=sa.text("deleted_at IS NULL"),
        postgresql_where=sa.text("deleted_at IS NULL"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("uq_blog_posts_slug_active", table_name="blog_posts")
    op.drop_index("ix_blog_posts_status_published_at", table_name="blog_posts")
    op.drop_index(op.f("ix_blog_posts_deleted_at"), table_name="blog_posts")
    op.drop_index(op.f("ix_blog_posts_created_at"), table_name="blog_posts")
    op.drop_index(op.f("ix_blog_posts_view_count"), table_name="blog_posts")
    op.drop_index(op.f("ix_blog_posts_category"), table_name="blog_posts")
    op.drop_index(op.f("ix_blog_posts_author_name"), table_name="blog_posts")
    op.drop_index(op.f("ix_blog_posts_slug"), table_name="blog_posts")
    op.drop_table("blog_posts")
