"""Exceptions raised by the validation, storage, and service layers."""


class ValidationError(Exception):
    """
    Raised when a bookmark payload violates a field constraint.

    The message is human-readable and is returned to the client verbatim.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PatchFieldsRequiredError(ValidationError):
    """Raised when a partial update names none of the updatable fields."""

    def __init__(self) -> None:
        super().__init__(
            "Request body must contain either 'title', 'site_description', "
            "'site_url', or 'rating'",
        )


class BookmarkNotFoundError(Exception):
    """Raised when no bookmark exists for the requested id."""

    message = "Bookmark doesn't exist"

    def __init__(self, bookmark_id: str) -> None:
        self.bookmark_id = bookmark_id
        super().__init__(f"Bookmark not found: {bookmark_id}")


class StorageError(Exception):
    """Raised when the backing store fails unexpectedly. Never retried."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Storage operation failed: {operation}")
