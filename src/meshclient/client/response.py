"""Response rendering bridge -- maps :class:`httpx.Response` to the output system.

Used by the CLI after a successful call: the status line goes to stderr and
the body to stdout through :meth:`~meshclient.output.OutputManager.format_response`.
"""

from __future__ import annotations

from typing import Any

import httpx

from meshclient.output import get_output


def format_api_response(response: httpx.Response) -> None:
    """Print the status line to stderr and the response body to stdout.

    Args:
        response: The :class:`httpx.Response` to display.
    """
    output = get_output()
    output.info(f"HTTP {response.status_code} {response.reason_phrase or ''}".rstrip())

    content_type = response.headers.get("content-type", "text/plain")
    data = extract_response_data(response)
    if data is not None:
        output.format_response(data, content_type)


def extract_response_data(response: httpx.Response) -> Any:
    """Extract the body from an HTTP response.

    JSON bodies (by content type) are decoded; everything else is returned as
    text, byte for byte. Returns ``None`` for an empty body.
    """
    if not response.content:
        return None

    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            pass

    return response.text
