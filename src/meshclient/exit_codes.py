"""Numeric process exit codes used by the ``meshclient`` CLI.

Each constant maps to a failure category and is referenced by the
corresponding :class:`~meshclient.exceptions.MeshClientError` subclass.
Shell wrappers and CI scripts can branch on the exit code of
``meshclient request`` without parsing stderr.

Example::

    $ meshclient request GET http://orders.internal /orders/42
    $ echo $?
    4   # EXIT_NOT_FOUND -- the remote service answered 404
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_AUTH_FAILURE = 3
"""The remote service rejected the call (HTTP 401 or 403)."""

EXIT_NOT_FOUND = 4
"""The remote resource was not found (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The remote service failed (HTTP 5xx or an unrecognised status)."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_REDIRECT = 7
"""The remote service answered with a redirect (HTTP 302)."""

EXIT_CLIENT_ERROR = 8
"""The remote service rejected the request content (HTTP 400, 409, 422, other 4xx)."""

EXIT_RATE_LIMITED = 9
"""The remote service is throttling the caller (HTTP 429)."""
