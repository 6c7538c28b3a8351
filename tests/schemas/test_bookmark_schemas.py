"""Tests for bookmark request/response schemas."""
import uuid
from types import SimpleNamespace

import pytest

from schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from services.exceptions import PatchFieldsRequiredError, ValidationError


class TestBookmarkCreate:
    """Tests for BookmarkCreate.from_payload."""

    def test__normalizes_aliases_and_defaults(self) -> None:
        """Aliases map onto stored field names; optional fields get defaults."""
        data = BookmarkCreate.from_payload({"title": "T", "url": " https://example.com "})
        assert data.model_dump() == {
            "title": "T",
            "site_url": "https://example.com",
            "site_description": "",
            "rating": 1,
        }

    def test__rating_checked_after_url(self) -> None:
        """A bad rating is only reported once title and url pass."""
        with pytest.raises(ValidationError, match="Url is required"):
            BookmarkCreate.from_payload({"title": "T", "rating": "bad"})
        with pytest.raises(ValidationError, match="Rating must be a number"):
            BookmarkCreate.from_payload(
                {"title": "T", "site_url": "https://example.com", "rating": "bad"},
            )

    def test__explicit_null_rating_rejected(self) -> None:
        """Only an absent rating falls back to the default."""
        with pytest.raises(ValidationError, match="Rating must be a number"):
            BookmarkCreate.from_payload(
                {"title": "T", "site_url": "https://example.com", "rating": None},
            )


class TestBookmarkUpdate:
    """Tests for BookmarkUpdate.from_payload."""

    def test__only_present_fields_are_set(self) -> None:
        """Absent fields stay out of the dump so they are never overwritten."""
        data = BookmarkUpdate.from_payload({"desc": "new", "other": 1})
        assert data.model_dump(exclude_unset=True) == {"site_description": "new"}

    def test__empty_description_is_an_update(self) -> None:
        """Clearing the description counts as naming a field."""
        data = BookmarkUpdate.from_payload({"site_description": None})
        assert data.model_dump(exclude_unset=True) == {"site_description": ""}

    @pytest.mark.parametrize("payload", [{}, {"totallyWrongField": "x"}])
    def test__requires_a_known_field(self, payload: dict) -> None:
        """Bodies without any updatable field are rejected with the fixed message."""
        with pytest.raises(PatchFieldsRequiredError) as exc_info:
            BookmarkUpdate.from_payload(payload)
        assert exc_info.value.message == (
            "Request body must contain either 'title', 'site_description', "
            "'site_url', or 'rating'"
        )

    def test__present_fields_validated(self) -> None:
        """Present fields follow the create rules."""
        with pytest.raises(ValidationError, match="Rating cannot be less than 1"):
            BookmarkUpdate.from_payload({"rating": 9})


class TestBookmarkResponse:
    """Tests for BookmarkResponse."""

    def test__sanitizes_on_output(self) -> None:
        """Rows with markup are cleaned when turned into responses."""
        row = SimpleNamespace(
            id=uuid.uuid4(),
            title="<b>Bold</b> title",
            site_url="https://example.com",
            site_description=None,
            rating=3,
        )
        response = BookmarkResponse.model_validate(row)
        assert response.title == "Bold title"
        assert response.site_description == ""

    def test__wire_keys(self) -> None:
        """The JSON form has exactly the public keys."""
        response = BookmarkResponse(
            id=uuid.uuid4(),
            title="T",
            site_url="https://example.com",
            site_description="d",
            rating=2,
        )
        assert set(response.model_dump(mode="json")) == {
            "id", "title", "site_url", "site_description", "rating",
        }
