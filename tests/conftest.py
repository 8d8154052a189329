"""Shared test fixtures for meshclient.

Provides an in-process stand-in for a remote service (via
:class:`httpx.MockTransport`), environment isolation for configuration
loading, output-state cleanup, and a CLI runner. These fixtures are
automatically discovered by pytest.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import httpx
import pytest

from meshclient.builder import ClientBuilder
from meshclient.models import ClientDefaults
from meshclient.output import OutputFormat, OutputManager, reset_output, set_output


REDIRECT_TARGET = "http://example.com/redirect"


# ---------------------------------------------------------------------------
# Global state isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time; CliRunner swaps those streams per invocation.
    """
    yield
    reset_output()


@pytest.fixture(autouse=True)
def _reset_meshclient_logging() -> None:
    """Drop handlers installed by ``configure_logging`` and restore logger levels.

    Enabling the wiretap may lower the level of its own logger.
    """
    loggers = logging.root.manager.loggerDict
    levels = {
        name: logger.level for name, logger in loggers.items() if isinstance(logger, logging.Logger)
    }
    yield
    for name, logger in list(loggers.items()):
        if not isinstance(logger, logging.Logger):
            continue
        for handler in list(logger.handlers):
            if getattr(handler, "_meshclient", False):
                logger.removeHandler(handler)
        logger.setLevel(levels.get(name, logging.NOTSET))


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration loading from the real user environment.

    Points XDG_CONFIG_HOME at tmp_path and clears every MESHCLIENT_*
    environment variable.

    Returns:
        The XDG config home used for this test.
    """
    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    for var in [
        "MESHCLIENT_CONFIG",
        "MESHCLIENT_TIMEOUT",
        "MESHCLIENT_VERIFY_SSL",
        "MESHCLIENT_USER_AGENT",
        "MESHCLIENT_WIRETAP_LOGGER",
        "MESHCLIENT_WIRETAP_LEVEL",
    ]:
        monkeypatch.delenv(var, raising=False)
    return config_home


# ---------------------------------------------------------------------------
# Remote service double
# ---------------------------------------------------------------------------


def status_handler(request: httpx.Request) -> httpx.Response:
    """Answer ``/status/{code}`` with that status code.

    * ``/status/200`` answers with the body ``hello``.
    * ``/status/302`` carries ``Location: http://example.com/redirect``.
    * ``/redirect-without-location`` answers 302 with no Location header.
    * ``/echo`` answers 200 with the request body.
    * Anything else answers 404.
    """
    path = request.url.path
    if path.startswith("/status/"):
        try:
            code = int(path[len("/status/"):])
        except ValueError:
            return httpx.Response(404)
        if code == 200:
            return httpx.Response(200, text="hello")
        if code == 302:
            return httpx.Response(302, headers={"Location": REDIRECT_TARGET})
        return httpx.Response(code)
    if path == "/redirect-without-location":
        return httpx.Response(302)
    if path == "/echo":
        return httpx.Response(200, content=request.content)
    return httpx.Response(404)


@pytest.fixture
def status_transport() -> httpx.MockTransport:
    """A transport backed by :func:`status_handler`, usable by sync and async clients."""
    return httpx.MockTransport(status_handler)


@pytest.fixture
def shared_builder(status_transport: httpx.MockTransport) -> ClientBuilder:
    """The shared builder a hosting application would hand to a factory."""
    return ClientBuilder.from_defaults(ClientDefaults()).transport(status_transport)


@pytest.fixture
def recording_transport() -> tuple[httpx.MockTransport, list[httpx.Request]]:
    """A transport that records every request it receives and answers 200."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="ok")

    return httpx.MockTransport(handler), seen


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager for the test."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True, no_color=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def json_output() -> OutputManager:
    """Install a JSON-format OutputManager for the test."""
    output = OutputManager(format=OutputFormat.JSON, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


@pytest.fixture
def patch_cli_transport(
    monkeypatch: pytest.MonkeyPatch, status_transport: httpx.MockTransport
) -> Callable[[], None]:
    """Make ``meshclient request`` talk to :func:`status_handler` instead of the network."""
    from meshclient.commands import request as request_module

    original = request_module._load_builder

    def _load_builder(timeout):
        defaults, builder = original(timeout)
        return defaults, builder.transport(status_transport)

    monkeypatch.setattr(request_module, "_load_builder", _load_builder)
    return _load_builder
