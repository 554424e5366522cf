"""
Errors raised by ownership hooks.

Two families:
- ConfigurationError: the hook was wired up wrong (programmer error)
- NotAuthenticatedError / ForbiddenError: expected request outcomes,
  rendered by FastAPI as 401 / 403 responses without extra handlers
"""

from fastapi import HTTPException, status


class ConfigurationError(ValueError):
    """Raised when a hook is misused or misconfigured."""
    pass


class GuardHTTPException(HTTPException):
    """Base class for request outcomes that map to an HTTP status."""

    default_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(
        self,
        detail: str | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(
            status_code=self.default_status,
            detail=detail or self.default_detail,
            headers=headers,
        )

    @property
    def code(self) -> int:
        """Alias for status_code."""
        return self.status_code


class NotAuthenticatedError(GuardHTTPException):
    """No caller identity on an externally originated request."""

    default_status = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"

    def __init__(self, detail: str | None = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(GuardHTTPException):
    """Caller is authenticated but does not own the resource."""

    default_status = status.HTTP_403_FORBIDDEN
    default_detail = "You do not have the permissions to access this."
