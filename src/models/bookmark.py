"""Bookmark model for storing saved sites."""
import uuid

from sqlalchemy import CheckConstraint, SmallInteger, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin


class Bookmark(Base, TimestampMixin):
    """Bookmark model - a saved URL with title, description, and a 1-5 rating."""

    __tablename__ = "bookmarks"
    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_bookmarks_rating_range"),
        CheckConstraint("length(site_url) >= 5", name="ck_bookmarks_site_url_length"),
    )

    # Generated by the service layer, never by the database
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    site_url: Mapped[str] = mapped_column(Text, nullable=False)
    site_description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    rating: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=1)
