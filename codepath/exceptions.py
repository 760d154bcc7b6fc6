"""Custom exception hierarchy for the codepath application."""

from starlette import status


class CodepathError(Exception):
    """Base exception for all codepath errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error: str | None = None,
    ) -> None:
        """Initialize exception with message, status code and optional diagnostic."""
        self.message = message
        self.status_code = status_code
        self.error = error
        super().__init__(self.message)


class NotFoundError(CodepathError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND)


class ContentNotFoundError(NotFoundError):
    """Content item not found error."""

    def __init__(self, content_id: int | None = None, *, message: str | None = None) -> None:
        """Initialize with content ID or custom message."""
        self.content_id = content_id
        if message:
            super().__init__(message)
        elif content_id is not None:
            super().__init__(f"Content with id {content_id} not found")
        else:
            super().__init__("Content not found")


class ValidationError(CodepathError):
    """Validation error."""

    def __init__(self, message: str, error: str | None = None) -> None:
        """Initialize with message and 400 status code."""
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST, error=error)


class UnauthenticatedError(CodepathError):
    """Missing or invalid identity token."""

    def __init__(self, message: str = "Could not validate credentials") -> None:
        """Initialize with message and 401 status code."""
        super().__init__(message, status_code=status.HTTP_401_UNAUTHORIZED)


class ForbiddenError(CodepathError):
    """Authenticated actor is not permitted to perform the operation."""

    def __init__(self, message: str = "Not authorized to perform this action") -> None:
        """Initialize with message and 403 status code."""
        super().__init__(message, status_code=status.HTTP_403_FORBIDDEN)


class ConcurrentUpdateError(CodepathError):
    """A versioned write kept losing to concurrent writers."""

    def __init__(self, entity_type: str, entity_key: object) -> None:
        """Initialize with the contested entity and 409 status code."""
        self.entity_type = entity_type
        self.entity_key = entity_key
        super().__init__(
            f"{entity_type} {entity_key} was modified concurrently, please retry",
            status_code=status.HTTP_409_CONFLICT,
        )


class InternalError(CodepathError):
    """Unhandled store or service failure surfaced as a 500."""

    def __init__(self, message: str, error: str | None = None) -> None:
        """Initialize with a generic message and the underlying diagnostic."""
        super().__init__(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, error=error)
