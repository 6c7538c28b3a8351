"""Bookmark CRUD endpoints."""
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, require_api_token
from schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from services import bookmark_service
from services.exceptions import ValidationError

router = APIRouter(
    prefix="/bookmarks",
    tags=["bookmarks"],
    dependencies=[Depends(require_api_token)],
)

NOT_A_JSON_OBJECT = "Request body must be a JSON object"


def _require_object(payload: Any) -> dict[str, Any]:
    """Treat a missing body as empty; reject arrays, strings, and numbers."""
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError(NOT_A_JSON_OBJECT)
    return payload


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    db: AsyncSession = Depends(get_async_session),
) -> list[BookmarkResponse]:
    """List all bookmarks."""
    return await bookmark_service.list_bookmarks(db)


@router.post("", response_model=BookmarkResponse, status_code=201)
async def create_bookmark(
    request: Request,
    response: Response,
    payload: Any = Body(default=None),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """
    Create a new bookmark.

    Accepts `site_url` or `url`, and `site_description`, `desc` or `description`.
    `rating` defaults to 1. Validation failures return 400 with a plain-text reason.
    """
    data = BookmarkCreate.from_payload(_require_object(payload))
    bookmark = await bookmark_service.create_bookmark(db, data)
    response.headers["Location"] = request.url_for(
        "get_bookmark", bookmark_id=str(bookmark.id),
    ).path
    return bookmark


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark_id: str,
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    return await bookmark_service.get_bookmark(db, bookmark_id)


@router.patch("/{bookmark_id}", status_code=204)
async def update_bookmark(
    bookmark_id: str,
    payload: Any = Body(default=None),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """
    Update some fields of a bookmark.

    A missing bookmark is reported (404) before the body is looked at. The row
    loaded for that check is reused by the update through the session.
    """
    await bookmark_service.get_bookmark(db, bookmark_id)
    data = BookmarkUpdate.from_payload(_require_object(payload))
    await bookmark_service.update_bookmark(db, bookmark_id, data)


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark_id: str,
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a bookmark."""
    await bookmark_service.delete_bookmark(db, bookmark_id)
