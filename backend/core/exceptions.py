"""
Application error taxonomy.

Services raise these; ``api.middleware.errors`` renders them as JSON with
the status code carried on the class.
"""

from typing import Any, Optional


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message}


class ValidationError(AppError):
    """A required field is missing or a value is out of range."""

    status_code = 400
    default_message = "Invalid request"


class AuthError(AppError):
    """Missing, invalid or expired credentials, or a deactivated account."""

    status_code = 401
    default_message = "Not authenticated"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Insufficient privileges"


class NotFoundError(AppError):
    """Resource is absent or owned by someone else; the two are indistinguishable."""

    status_code = 404
    default_message = "Resource not found"


class ConflictError(AppError):
    """A unique field is already taken."""

    status_code = 400
    default_message = "Resource already exists"


class ConcurrentModificationError(AppError):
    status_code = 409
    default_message = "The resource was modified by another request. Reload and try again."


class UpstreamError(AppError):
    """A third-party provider call failed."""

    status_code = 502
    default_message = "Upstream service failed"


class GenerationError(UpstreamError):
    """The generative text provider failed, timed out or returned nothing."""

    status_code = 500
    default_message = "Failed to generate article"

    def to_dict(self) -> dict[str, Any]:
        # Provider details stay in the logs
        return {"detail": self.default_message}


class PublishError(UpstreamError):
    """A WordPress call failed; ``kind`` classifies the failure."""

    def __init__(self, kind, message: Optional[str] = None):
        self.kind = kind
        super().__init__(message or kind.message)

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "error_kind": self.kind.value}
