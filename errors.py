"""HTTP error types raised by the route handlers.

Each error is a werkzeug ``HTTPException`` so the application-wide handler
registered in :mod:`app` renders it; handlers never build error responses
themselves.
"""

from werkzeug.exceptions import BadRequest, Conflict, NotFound, Unauthorized


class ValidationError(BadRequest):
    """Malformed or missing request input."""


class ConflictError(Conflict):
    """The resource already exists."""


class AuthError(Unauthorized):
    """Missing, invalid or stale credentials."""


class NotFoundError(NotFound):
    """Unknown user or verification token."""
