"""Exception hierarchy for meshclient.

All exceptions inherit from :class:`MeshClientError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`meshclient.exit_codes`.
The CLI entry point in :func:`meshclient.app.main` catches
``MeshClientError`` and exits with the appropriate code.

The nine classified remote-call failures share :class:`RemoteCallError` as
their base. Each one corresponds to exactly one :class:`ErrorKind` and
exposes the canonical ``http_status`` a hosting framework can use to map the
error back onto its own HTTP response.

Subclass hierarchy::

    MeshClientError                (exit 1)
    +-- InvalidUsageError          (exit 2)
    +-- ConfigError                (exit 1)
    +-- ConnectionError_           (exit 6)
    +-- RemoteCallError            (exit 1)
        +-- FoundError               302 (exit 7)
        +-- BadRequestError          400 (exit 8)
        +-- UnauthorizedError        401 (exit 3)
        +-- ForbiddenError           403 (exit 3)
        +-- NotFoundError            404 (exit 4)
        +-- ConflictError            409 (exit 8)
        +-- UnprocessableEntityError 422 (exit 8)
        +-- TooManyRequestsError     429 (exit 9)
        +-- InternalServerError      500 (exit 5)
"""

from __future__ import annotations

import enum
from typing import Optional

from meshclient.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CLIENT_ERROR,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_RATE_LIMITED,
    EXIT_REDIRECT,
    EXIT_SERVER_ERROR,
)


class ErrorKind(str, enum.Enum):
    """Closed set of categories a non-success response is classified into."""

    FOUND = "found"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNPROCESSABLE_ENTITY = "unprocessable_entity"
    TOO_MANY_REQUESTS = "too_many_requests"
    INTERNAL_SERVER_ERROR = "internal_server_error"


class MeshClientError(Exception):
    """Base exception for all meshclient errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`meshclient.exit_codes`.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(MeshClientError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(MeshClientError):
    """Raised for configuration problems (bad config file, bad env values, empty base URL)."""

    exit_code = EXIT_GENERIC_FAILURE


class ConnectionError_(MeshClientError):
    """Raised by the CLI on network-level failures (timeout, DNS resolution, connection refused).

    Factory-built clients never raise this themselves: transport errors pass
    through from :mod:`httpx` unchanged. Named with a trailing underscore to
    avoid shadowing the built-in ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class RemoteCallError(MeshClientError):
    """Base class for a non-2xx response from a remote service.

    Attributes:
        kind: The :class:`ErrorKind` this class represents.
        http_status: Canonical HTTP status for the kind, used when a hosting
            framework maps the error back onto an outbound response.
        status_code: The status code actually received.
        message: The human-readable message.

    Args:
        message: Human-readable error description.
        status_code: Observed status code. Defaults to :attr:`http_status`.
    """

    kind: ErrorKind
    http_status: int

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code if status_code is not None else self.http_status

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, status_code={self.status_code})"


class FoundError(RemoteCallError):
    """Raised when the remote service answers 302.

    The redirect is never followed; :attr:`location` holds the value of the
    ``Location`` header, or an empty string when the header is absent.
    """

    kind = ErrorKind.FOUND
    http_status = 302
    exit_code = EXIT_REDIRECT

    def __init__(self, location: str = "", status_code: Optional[int] = None):
        super().__init__(location, status_code)
        self.location = location

    def __str__(self) -> str:
        return f"Found: {self.location}" if self.location else "Found"


class BadRequestError(RemoteCallError):
    """Raised on HTTP 400 and on any 4xx without a more specific class."""

    kind = ErrorKind.BAD_REQUEST
    http_status = 400
    exit_code = EXIT_CLIENT_ERROR


class UnauthorizedError(RemoteCallError):
    """Raised on HTTP 401."""

    kind = ErrorKind.UNAUTHORIZED
    http_status = 401
    exit_code = EXIT_AUTH_FAILURE


class ForbiddenError(RemoteCallError):
    """Raised on HTTP 403."""

    kind = ErrorKind.FORBIDDEN
    http_status = 403
    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(RemoteCallError):
    """Raised on HTTP 404."""

    kind = ErrorKind.NOT_FOUND
    http_status = 404
    exit_code = EXIT_NOT_FOUND


class ConflictError(RemoteCallError):
    """Raised on HTTP 409."""

    kind = ErrorKind.CONFLICT
    http_status = 409
    exit_code = EXIT_CLIENT_ERROR


class UnprocessableEntityError(RemoteCallError):
    """Raised on HTTP 422."""

    kind = ErrorKind.UNPROCESSABLE_ENTITY
    http_status = 422
    exit_code = EXIT_CLIENT_ERROR


class TooManyRequestsError(RemoteCallError):
    """Raised on HTTP 429."""

    kind = ErrorKind.TOO_MANY_REQUESTS
    http_status = 429
    exit_code = EXIT_RATE_LIMITED


class InternalServerError(RemoteCallError):
    """Raised on HTTP 500 and on every other status without a more specific class."""

    kind = ErrorKind.INTERNAL_SERVER_ERROR
    http_status = 500
    exit_code = EXIT_SERVER_ERROR


ERROR_TYPES: dict[ErrorKind, type[RemoteCallError]] = {
    cls.kind: cls
    for cls in (
        FoundError,
        BadRequestError,
        UnauthorizedError,
        ForbiddenError,
        NotFoundError,
        ConflictError,
        UnprocessableEntityError,
        TooManyRequestsError,
        InternalServerError,
    )
}
"""Lookup from :class:`ErrorKind` to the exception class that represents it."""
