"""Service layer for bookmark CRUD operations."""
import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from services import bookmark_store
from services.exceptions import BookmarkNotFoundError

logger = logging.getLogger(__name__)


async def list_bookmarks(db: AsyncSession) -> list[BookmarkResponse]:
    """Get all bookmarks. Empty list when there are none."""
    bookmarks = await bookmark_store.list_all(db)
    return [BookmarkResponse.model_validate(b) for b in bookmarks]


async def get_bookmark(db: AsyncSession, bookmark_id: str) -> BookmarkResponse:
    """
    Get a single bookmark.

    Raises:
        BookmarkNotFoundError: If no bookmark has this id.
    """
    bookmark = await bookmark_store.get_by_id(db, bookmark_id)
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)
    return BookmarkResponse.model_validate(bookmark)


async def create_bookmark(db: AsyncSession, data: BookmarkCreate) -> BookmarkResponse:
    """
    Store a validated bookmark under a freshly generated id.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark_id = uuid.uuid4()
    bookmark = await bookmark_store.insert(db, bookmark_id, data.model_dump())
    logger.info("Bookmark with id %s created", bookmark_id)
    return BookmarkResponse.model_validate(bookmark)


async def update_bookmark(
    db: AsyncSession,
    bookmark_id: str,
    data: BookmarkUpdate,
) -> BookmarkResponse:
    """
    Apply a partial update; fields not set on `data` are left alone.

    Raises:
        BookmarkNotFoundError: If no bookmark has this id.
    """
    bookmark = await bookmark_store.update_by_id(
        db, bookmark_id, data.model_dump(exclude_unset=True),
    )
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)
    logger.info("Bookmark with id %s updated", bookmark_id)
    return BookmarkResponse.model_validate(bookmark)


async def delete_bookmark(db: AsyncSession, bookmark_id: str) -> None:
    """
    Delete a bookmark.

    Raises:
        BookmarkNotFoundError: If no bookmark has this id.
    """
    deleted = await bookmark_store.delete_by_id(db, bookmark_id)
    if not deleted:
        raise BookmarkNotFoundError(bookmark_id)
    logger.info("Bookmark with id %s deleted", bookmark_id)
