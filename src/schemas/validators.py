"""
Field validation and sanitization for bookmark payloads.

Validators take raw JSON values and either return the normalized value or raise
ValidationError with the message sent back to the client. Rules are checked in
a fixed order (title, url, rating) by the schema constructors in
schemas/bookmark.py; the first failure wins.
"""
import re
from collections.abc import Mapping
from typing import Any

from bs4 import BeautifulSoup, Comment

from services.exceptions import ValidationError

MIN_URL_LENGTH = 5
MIN_RATING = 1
MAX_RATING = 5
DEFAULT_RATING = 1

# Elements removed together with everything inside them
UNSAFE_ELEMENTS = ["script", "style", "iframe", "object", "embed", "noscript", "template"]

# A "<" that would open a tag, comment or declaration if the text were parsed again
MARKUP_OPEN = re.compile(r"<(?=[A-Za-z/!?])")

# Wire names accepted for each field, canonical name first
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "title": ("title",),
    "site_url": ("site_url", "url"),
    "site_description": ("site_description", "desc", "description"),
    "rating": ("rating",),
}

MISSING: Any = object()


def _strip_markup(value: str) -> str:
    soup = BeautifulSoup(value, "html.parser")
    for element in soup.find_all(UNSAFE_ELEMENTS):
        element.decompose()
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()
    return soup.get_text()


def sanitize_text(value: str | None) -> str | None:
    """
    Remove HTML from user-supplied text.

    Executable elements (script, style, iframe, ...) are dropped with their
    content; every other tag is unwrapped so its text survives. Text without
    a "<" is returned unchanged.

    Parsing decodes entities, so escaped text such as "&lt;script&gt;" comes out
    as a literal "<script>". Any "<" left that could open markup is re-escaped
    as "&lt;", which keeps that text and makes the result stable when sanitized
    again.
    """
    if not value or "<" not in value:
        return value
    return MARKUP_OPEN.sub("&lt;", _strip_markup(value))


def _require_encodable(value: str, label: str) -> None:
    # JSON allows lone surrogates ("\ud800") that no database driver can store
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise ValidationError(f"{label} must be valid text") from None


def pick_field(payload: Mapping[str, Any], field: str) -> Any:
    """Return the value for `field` under its canonical name or an alias, else MISSING."""
    for name in FIELD_ALIASES[field]:
        if name in payload:
            return payload[name]
    return MISSING


def has_any_field(payload: Mapping[str, Any]) -> bool:
    """True if the payload names at least one updatable field."""
    return any(pick_field(payload, field) is not MISSING for field in FIELD_ALIASES)


def validate_title(value: Any) -> str:
    """Sanitize the title and require something to be left over."""
    if value is MISSING or value is None or value == "":
        raise ValidationError("Title is required")
    if not isinstance(value, str):
        raise ValidationError("Title must be a string")
    _require_encodable(value, "Title")
    title = sanitize_text(value)
    if not title or not title.strip():
        raise ValidationError("Title is required")
    return title


def validate_url(value: Any) -> str:
    """Require a URL of at least MIN_URL_LENGTH characters."""
    if value is MISSING or value is None or value == "":
        raise ValidationError("Url is required")
    if not isinstance(value, str):
        raise ValidationError("Url must be a string")
    _require_encodable(value, "Url")
    url = value.strip()
    if not url:
        raise ValidationError("Url is required")
    if len(url) < MIN_URL_LENGTH:
        raise ValidationError(f"Url length must be {MIN_URL_LENGTH} or greater")
    return url


def validate_description(value: Any) -> str:
    """Description is optional; absent or null becomes an empty string."""
    if value is MISSING or value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError("Description must be a string")
    _require_encodable(value, "Description")
    return sanitize_text(value) or ""


def validate_rating(value: Any) -> int:
    """
    Parse a rating and check it is within [MIN_RATING, MAX_RATING].

    Accepts integers, integral floats (4.0), and numeric strings ("4").
    Booleans are not numbers here even though Python treats them as ints.
    """
    if value is MISSING or value is None or isinstance(value, bool):
        raise ValidationError("Rating must be a number")

    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise ValidationError("Rating must be a number") from None

    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError("Rating must be a whole number")
        value = int(value)

    if not isinstance(value, int):
        raise ValidationError("Rating must be a number")

    if value < MIN_RATING or value > MAX_RATING:
        raise ValidationError(
            f"Rating cannot be less than {MIN_RATING} or greater than {MAX_RATING}",
        )
    return value
