"""Request and classify commands.

``meshclient request`` sends one request through a factory-built client,
exactly as a service would, and prints the body on success. A classified
failure is reported on stderr and mapped to its exit code::

    $ meshclient request GET http://orders.internal /orders/42 --wiretap
    $ meshclient classify 418
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import httpx
import typer

from meshclient.builder import ClientBuilder
from meshclient.classification import is_success
from meshclient.exceptions import (
    ConnectionError_,
    FoundError,
    InvalidUsageError,
    MeshClientError,
)
from meshclient.models import ClientDefaults
from meshclient.output import debug, error, format_response, get_output, suggest


def _parse_headers(raw: list[str]) -> dict[str, str]:
    """Parse ``Name: value`` strings into a dict."""
    headers: dict[str, str] = {}
    for item in raw:
        name, sep, value = item.partition(":")
        if not sep or not name.strip():
            raise InvalidUsageError(f"Invalid header {item!r}, expected 'Name: value'")
        headers[name.strip()] = value.strip()
    return headers


def _load_builder(timeout: Optional[float]) -> tuple[ClientDefaults, ClientBuilder]:
    """Resolve defaults and create the shared builder for this invocation."""
    from meshclient.config import load_defaults

    overrides: dict[str, Any] = {}
    if timeout is not None:
        overrides["timeout"] = timeout
    defaults = load_defaults(overrides=overrides)
    return defaults, ClientBuilder.from_defaults(defaults)


def _send_sync(
    builder: ClientBuilder,
    base_url: str,
    headers: dict[str, str],
    wiretap: bool,
    method: str,
    path: str,
    content: Optional[str],
) -> httpx.Response:
    from meshclient.client import SyncClientFactory

    def customize(b: ClientBuilder) -> ClientBuilder:
        for name, value in headers.items():
            b.header(name, value)
        return b

    with SyncClientFactory(builder).new_client(base_url, customize, wiretap) as client:
        return client.request(method, path, content=content)


async def _send_async(
    builder: ClientBuilder,
    base_url: str,
    headers: dict[str, str],
    wiretap: bool,
    method: str,
    path: str,
    content: Optional[str],
) -> httpx.Response:
    from meshclient.client import AsyncClientFactory

    def customize(b: ClientBuilder) -> ClientBuilder:
        for name, value in headers.items():
            b.header(name, value)
        return b

    async with AsyncClientFactory(builder).new_client(base_url, customize, wiretap) as client:
        return await client.request(method, path, content=content)


def request_command(
    method: str = typer.Argument(help="HTTP method, e.g. GET or POST."),
    base_url: str = typer.Argument(help="Base URL of the target service."),
    path: str = typer.Argument("/", help="Request path relative to the base URL."),
    header: list[str] = typer.Option(
        [], "--header", "-H", help="Extra header as 'Name: value'. Repeatable."
    ),
    data: Optional[str] = typer.Option(
        None, "--data", "-d", help="Raw request body."
    ),
    wiretap: bool = typer.Option(
        False, "--wiretap", "-w", help="Trace request and response lines to stderr."
    ),
    use_async: bool = typer.Option(
        False, "--async", help="Use the non-blocking client."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="Request timeout in seconds."
    ),
) -> None:
    """Send a request through a factory-built client and print the response body.

    Exits with the classified error's exit code when the service answers
    with a non-2xx status.
    """
    from meshclient.client.response import format_api_response
    from meshclient.output import configure_logging

    output = get_output()
    try:
        headers = _parse_headers(header)
        defaults, builder = _load_builder(timeout)
        if wiretap or output.is_verbose:
            configure_logging(
                verbose=True,
                output=output,
                extra_loggers=[defaults.wiretap.logger_name],
            )

        debug(f"Timeout {defaults.timeout}s, verify_ssl={defaults.verify_ssl}")
        debug(
            f"Sending {method.upper()} {base_url} {path} via the "
            f"{'non-blocking' if use_async else 'blocking'} client"
        )
        args = (builder, base_url, headers, wiretap, method.upper(), path, data)
        try:
            if use_async:
                response = asyncio.run(_send_async(*args))
            else:
                response = _send_sync(*args)
        except httpx.TransportError as exc:
            raise ConnectionError_(f"Request to {base_url} failed: {exc}") from exc
    except FoundError as exc:
        error(str(exc))
        if exc.location:
            suggest(f"Redirect target: {exc.location}")
        raise typer.Exit(code=exc.exit_code)
    except MeshClientError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code)

    format_api_response(response)


def classify_command(
    status: int = typer.Argument(help="HTTP status code to classify."),
    location: str = typer.Option(
        "", "--location", "-l", help="Location header value for a 302."
    ),
) -> None:
    """Show how a client would classify a response status."""
    if status < 100 or status > 999:
        error(f"Invalid status code: {status}")
        raise typer.Exit(code=2)

    if is_success(status):
        format_response({"status": status, "kind": None, "message": "success"})
        return

    from meshclient.classification import classify

    reason = httpx.codes.get_reason_phrase(status)
    classified = classify(status, reason, location)
    result: dict[str, Any] = {
        "status": status,
        "kind": classified.kind.value,
        "exception": type(classified).__name__,
        "message": classified.message,
    }
    if isinstance(classified, FoundError):
        result["location"] = classified.location
    format_response(result)
