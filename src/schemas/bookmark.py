"""Pydantic schemas for bookmark endpoints."""
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from schemas.validators import (
    DEFAULT_RATING,
    MISSING,
    has_any_field,
    pick_field,
    sanitize_text,
    validate_description,
    validate_rating,
    validate_title,
    validate_url,
)
from services.exceptions import PatchFieldsRequiredError


class BookmarkCreate(BaseModel):
    """
    Normalized, fully validated bookmark ready to be inserted.

    Build it with `from_payload` so the checks run in their documented order and
    produce client-facing messages; the pydantic types are a second line of defense.
    """

    title: str
    site_url: str
    site_description: str = ""
    rating: int = DEFAULT_RATING

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "BookmarkCreate":
        """
        Validate a POST body.

        Order: title, url, rating. Description never fails except on a non-string.

        Raises:
            ValidationError: On the first violated rule.
        """
        title = validate_title(pick_field(payload, "title"))
        site_url = validate_url(pick_field(payload, "site_url"))

        raw_rating = pick_field(payload, "rating")
        rating = DEFAULT_RATING if raw_rating is MISSING else validate_rating(raw_rating)

        site_description = validate_description(pick_field(payload, "site_description"))
        return cls(
            title=title,
            site_url=site_url,
            site_description=site_description,
            rating=rating,
        )


class BookmarkUpdate(BaseModel):
    """Partial update; only fields present in the request are set."""

    title: str | None = None
    site_url: str | None = None
    site_description: str | None = None
    rating: int | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "BookmarkUpdate":
        """
        Validate a PATCH body.

        Unknown keys are ignored. Fields that are present follow the same rules
        as on create.

        Raises:
            PatchFieldsRequiredError: If none of the updatable fields are present.
            ValidationError: On the first violated rule among present fields.
        """
        if not has_any_field(payload):
            raise PatchFieldsRequiredError

        validators = {
            "title": validate_title,
            "site_url": validate_url,
            "rating": validate_rating,
            "site_description": validate_description,
        }
        values = {}
        for field, validate in validators.items():
            raw = pick_field(payload, field)
            if raw is not MISSING:
                values[field] = validate(raw)
        # model_dump(exclude_unset=True) later yields exactly these keys
        return cls(**values)


class BookmarkResponse(BaseModel):
    """
    Schema for bookmark responses.

    Title and description are sanitized again on the way out so rows written
    outside this API never reach a client with markup in them.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    site_url: str
    site_description: str
    rating: int

    @field_validator("title", "site_description", mode="before")
    @classmethod
    def strip_markup(cls, v: str | None) -> str:
        """Sanitize free-text fields."""
        return sanitize_text(v) or ""
