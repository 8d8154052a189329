"""Status-code classification for responses from remote services.

Every response a factory-built client receives passes through
:func:`raise_for_classified_status` before the caller sees it. A 2xx response
passes through untouched; anything else is turned into exactly one
:class:`~meshclient.exceptions.RemoteCallError` subclass using a closed
lookup table with class-based defaults:

======  ========================  ==================================
Status  Kind                      Message
======  ========================  ==================================
302     ``FOUND``                 the Location value, or ``""``
400     ``BAD_REQUEST``           ``Bad Request``
401     ``UNAUTHORIZED``          ``Unauthorized``
403     ``FORBIDDEN``             ``Forbidden``
404     ``NOT_FOUND``             ``Not Found``
409     ``CONFLICT``              ``Conflict``
422     ``UNPROCESSABLE_ENTITY``  ``Unprocessable Entity``
429     ``TOO_MANY_REQUESTS``     ``Too Many Requests``
4xx     ``BAD_REQUEST``           ``Client Error {status}: {reason}``
500     ``INTERNAL_SERVER_ERROR`` ``Internal Server Error``
other   ``INTERNAL_SERVER_ERROR`` ``Server Error {status}: {reason}``
======  ========================  ==================================

Only the status code and the ``Location`` header are consulted; the body is
never read.
"""

from __future__ import annotations

from typing import Optional

import httpx

from meshclient.exceptions import ERROR_TYPES, ErrorKind, FoundError, RemoteCallError

_EXACT: dict[int, tuple[ErrorKind, str]] = {
    302: (ErrorKind.FOUND, "Found"),
    400: (ErrorKind.BAD_REQUEST, "Bad Request"),
    401: (ErrorKind.UNAUTHORIZED, "Unauthorized"),
    403: (ErrorKind.FORBIDDEN, "Forbidden"),
    404: (ErrorKind.NOT_FOUND, "Not Found"),
    409: (ErrorKind.CONFLICT, "Conflict"),
    422: (ErrorKind.UNPROCESSABLE_ENTITY, "Unprocessable Entity"),
    429: (ErrorKind.TOO_MANY_REQUESTS, "Too Many Requests"),
    500: (ErrorKind.INTERNAL_SERVER_ERROR, "Internal Server Error"),
}


def is_success(status_code: int) -> bool:
    """Return ``True`` for a 2xx status code."""
    return 200 <= status_code < 300


def describe_status(status_code: int, reason: str = "") -> tuple[ErrorKind, str]:
    """Look up the :class:`ErrorKind` and message for a non-2xx status.

    Args:
        status_code: The numeric HTTP status.
        reason: The reason phrase, used only in the fallback messages.

    Returns:
        A ``(kind, message)`` tuple.
    """
    exact = _EXACT.get(status_code)
    if exact is not None:
        return exact
    if 400 <= status_code < 500:
        return ErrorKind.BAD_REQUEST, f"Client Error {status_code}: {reason}"
    return ErrorKind.INTERNAL_SERVER_ERROR, f"Server Error {status_code}: {reason}"


def classify(
    status_code: int,
    reason: str = "",
    location: Optional[str] = None,
) -> Optional[RemoteCallError]:
    """Build the exception for a status code, or ``None`` for a 2xx status.

    Args:
        status_code: The numeric HTTP status.
        reason: The response's reason phrase.
        location: Value of the ``Location`` header, if any. Only used for 302.

    Returns:
        The classified :class:`~meshclient.exceptions.RemoteCallError`
        instance (not raised), or ``None`` when the status is a success.
    """
    if is_success(status_code):
        return None

    kind, message = describe_status(status_code, reason)
    if kind is ErrorKind.FOUND:
        return FoundError(location or "", status_code=status_code)
    return ERROR_TYPES[kind](message, status_code=status_code)


def classify_response(response: httpx.Response) -> Optional[RemoteCallError]:
    """Classify an :class:`httpx.Response` by its status and ``Location`` header."""
    return classify(
        response.status_code,
        response.reason_phrase or "",
        response.headers.get("location"),
    )


def raise_for_classified_status(response: httpx.Response) -> None:
    """httpx ``response`` event hook that raises the classified error.

    Installed by the client factories on every client they build. httpx
    closes the response before the exception reaches the caller.

    Raises:
        RemoteCallError: The subclass matching the response status.
    """
    error = classify_response(response)
    if error is not None:
        raise error
