# blogapi/db/repository.py
from asyncio import TimeoutError, timeout as async_timeout
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import String, cast, delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from blogapi.core.exceptions import ConflictError, NotFoundError, StorageError
from blogapi.core.logger import logger
from blogapi.db.database import Database
from blogapi.db.models import Post

SLUG_CONFLICT_MESSAGE = "A post with this slug already exists"

# Campos ordenables (nombre público -> columna)
SORT_FIELDS = {
    "createdAt": Post.created_at,
    "updatedAt": Post.updated_at,
    "publishedAt": Post.published_at,
    "title": Post.title,
    "viewCount": Post.view_count,
    "readTime": Post.read_time,
}


@dataclass
class PostFilter:
    status: Optional[str] = "published"
    category: Optional[str] = None
    tag: Optional[str] = None
    author: Optional[str] = None
    include_deleted: bool = False


def build_filters(post_filter: PostFilter, now: Optional[datetime] = None) -> list:
    filters = []

    if not post_filter.include_deleted:
        filters.append(Post.deleted_at.is_(None))

    if post_filter.status == "published":
        filters.append(Post.status == "published")
        filters.append(Post.published_at <= (now or datetime.now(timezone.utc)))
    elif post_filter.status and post_filter.status != "all":
        filters.append(Post.status == post_filter.status)

    if post_filter.category:
        filters.append(Post.category == post_filter.category)

    if post_filter.tag:
        # tags es una lista JSON: el elemento se busca codificado igual que al guardarlo
        needle = json.dumps(post_filter.tag.strip().lower())
        filters.append(cast(Post.tags, String).contains(needle, autoescape=True))

    if post_filter.author:
        filters.append(Post.author_name == post_filter.author)

    return filters


class PostRepository:
    """Persistence of posts on top of an explicit `Database` handle."""

    def __init__(self, db: Database, timeout: float = 5.0):
        self.db = db
        self.timeout = timeout

    # ---------------------------------------------------------
    # Reads
    # ---------------------------------------------------------
    async def find_by_slug(self, slug: str, include_deleted: bool = False) -> Optional[Post]:
        stmt = select(Post).where(Post.slug == slug)
        if not include_deleted:
            stmt = stmt.where(Post.deleted_at.is_(None))
        # Con include_deleted puede haber varias filas borradas con el mismo slug
        stmt = stmt.order_by(Post.deleted_at.is_not(None), Post.created_at.desc()).limit(1)
        return await self._first(stmt, "find_by_slug")

    async def find_by_id(self, post_id: str) -> Optional[Post]:
        return await self._first(select(Post).where(Post.id == post_id), "find_by_id")

    async def slug_exists(self, slug: str, exclude_id: Optional[str] = None) -> bool:
        stmt = select(Post.id).where(Post.slug == slug, Post.deleted_at.is_(None))
        if exclude_id:
            stmt = stmt.where(Post.id != exclude_id)
        return await self._first(stmt.limit(1), "slug_exists") is not None

    async def find_many(
        self,
        post_filter: PostFilter,
        sort: str = "createdAt",
        order: str = "desc",
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Post], int]:
        filters = build_filters(post_filter)
        column = SORT_FIELDS.get(sort, Post.created_at)
        order_by = column.desc() if order == "desc" else column.asc()

        try:
            async with self.db.session() as session:
                async with async_timeout(self.timeout):
                    total = await session.scalar(
                        select(func.count(Post.id)).where(*filters)
                    )
                    result = await session.scalars(
                        select(Post)
                        .where(*filters)
                        .order_by(order_by, Post.id)
                        .offset(skip)
                        .limit(limit)
                    )
                    posts = list(result.all())
        except TimeoutError as e:
            logger.error("find_many timeout", exc_info=True)
            raise StorageError("Database timeout") from e
        except SQLAlchemyError as e:
            logger.error("DB error on find_many", exc_info=True)
            raise StorageError("Database error") from e

        return posts, total or 0

    # ---------------------------------------------------------
    # Writes
    # ---------------------------------------------------------
    async def insert(self, post: Post) -> Post:
        try:
            async with self.db.session() as session:
                async with async_timeout(self.timeout):
                    session.add(post)
                    await session.commit()
                    await session.refresh(post)
        except IntegrityError as e:
            logger.warning("Slug conflict on insert: %s", post.slug)
            raise ConflictError(SLUG_CONFLICT_MESSAGE) from e
        except TimeoutError as e:
            logger.error("insert timeout", exc_info=True)
            raise StorageError("Database timeout") from e
        except SQLAlchemyError as e:
            logger.error("DB error creating post", exc_info=True)
            raise StorageError("Database error") from e
        return post

    async def update_by_id(self, post_id: str, patch: Dict[str, Any]) -> Post:
        stmt = update(Post).where(Post.id == post_id).values(**patch)
        return await self._update(post_id, stmt, "update_by_id")

    async def increment_view_count(self, post_id: str) -> Post:
        # UPDATE atómico en la DB, sin read-modify-write
        stmt = (
            update(Post)
            .where(Post.id == post_id)
            .values(view_count=Post.view_count + 1)
        )
        return await self._update(post_id, stmt, "increment_view_count")

    async def delete_many(self, include_deleted: bool = True) -> int:
        """Hard delete. Solo lo usa el seeder para resetear datos."""
        stmt = delete(Post)
        if not include_deleted:
            stmt = stmt.where(Post.deleted_at.is_(None))
        try:
            async with self.db.session() as session:
                async with async_timeout(self.timeout):
                    result = await session.execute(stmt)
                    await session.commit()
        except TimeoutError as e:
            logger.error("delete_many timeout", exc_info=True)
            raise StorageError("Database timeout") from e
        except SQLAlchemyError as e:
            logger.error("DB error on delete_many", exc_info=True)
            raise StorageError("Database error") from e
        return result.rowcount or 0

    async def ping(self) -> None:
        try:
            async with async_timeout(self.timeout):
                await self.db.ping()
        except (TimeoutError, SQLAlchemyError, OSError) as e:
            raise StorageError("Database unreachable") from e

    # ---------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------
    async def _first(self, stmt, op: str):
        try:
            async with self.db.session() as session:
                async with async_timeout(self.timeout):
                    result = await session.execute(stmt)
                    return result.scalars().first()
        except TimeoutError as e:
            logger.error("%s timeout", op, exc_info=True)
            raise StorageError("Database timeout") from e
        except SQLAlchemyError as e:
            logger.error("DB error on %s", op, exc_info=True)
            raise StorageError("Database error") from e

    async def _update(self, post_id: str, stmt, op: str) -> Post:
        try:
            async with self.db.session() as session:
                async with async_timeout(self.timeout):
                    result = await session.execute(
                        stmt.execution_options(synchronize_session=False)
                    )
                    if result.rowcount == 0:
                        raise NotFoundError("Post not found")
                    await session.commit()
                    post = await session.get(Post, post_id, populate_existing=True)
        except IntegrityError as e:
            logger.warning("Slug conflict on %s (%s)", op, post_id)
            raise ConflictError(SLUG_CONFLICT_MESSAGE) from e
        except TimeoutError as e:
            logger.error("%s timeout", op, exc_info=True)
            raise StorageError("Database timeout") from e
        except SQLAlchemyError as e:
            logger.error("DB error on %s", op, exc_info=True)
            raise StorageError("Database error") from e
        return post
