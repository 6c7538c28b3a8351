"""
Storage accessor for the bookmarks table.

Every function takes the request's AsyncSession and uses flush(), never commit();
the session generator in db/session.py commits once per request. Absence is
reported with None/False, never with an exception. Database failures surface as
StorageError with the original error chained.
"""
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from services.exceptions import StorageError


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        raise StorageError(operation) from e


def parse_bookmark_id(bookmark_id: str | UUID) -> UUID | None:
    """Return the id as a UUID, or None if it cannot name a stored bookmark."""
    if isinstance(bookmark_id, UUID):
        return bookmark_id
    try:
        return UUID(bookmark_id)
    except (TypeError, ValueError):
        return None


async def list_all(db: AsyncSession) -> list[Bookmark]:
    """Get every bookmark, oldest first (ties broken by id so the order is stable)."""
    with _storage_errors("list_all"):
        result = await db.execute(
            select(Bookmark).order_by(Bookmark.created_at, Bookmark.id),
        )
        return list(result.scalars().all())


async def get_by_id(db: AsyncSession, bookmark_id: str | UUID) -> Bookmark | None:
    """
    Get a bookmark by id. Returns None if not found or if the id is malformed.

    A row already loaded in this session is returned from the identity map
    without another query.
    """
    uid = parse_bookmark_id(bookmark_id)
    if uid is None:
        return None
    with _storage_errors("get_by_id"):
        return await db.get(Bookmark, uid)


async def insert(
    db: AsyncSession,
    bookmark_id: UUID,
    values: dict[str, Any],
) -> Bookmark:
    """Insert a bookmark under a caller-supplied id and return the stored row."""
    bookmark = Bookmark(id=bookmark_id, **values)
    with _storage_errors("insert"):
        db.add(bookmark)
        await db.flush()
        await db.refresh(bookmark)
    return bookmark


async def update_by_id(
    db: AsyncSession,
    bookmark_id: str | UUID,
    values: dict[str, Any],
) -> Bookmark | None:
    """
    Apply only the given fields to a bookmark. Returns None if not found.

    Fields missing from `values` keep their stored value.
    """
    bookmark = await get_by_id(db, bookmark_id)
    if bookmark is None:
        return None
    if not values:
        return bookmark

    with _storage_errors("update_by_id"):
        for field, value in values.items():
            setattr(bookmark, field, value)
        await db.flush()
        await db.refresh(bookmark)
    return bookmark


async def delete_by_id(db: AsyncSession, bookmark_id: str | UUID) -> bool:
    """Delete a bookmark. Returns True if a row was deleted, False if not found."""
    uid = parse_bookmark_id(bookmark_id)
    if uid is None:
        return False
    with _storage_errors("delete_by_id"):
        result = await db.execute(delete(Bookmark).where(Bookmark.id == uid))
    return result.rowcount > 0
