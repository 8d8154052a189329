"""Request/response tracing through httpx event hooks.

A :class:`WireTap` turns a :class:`~meshclient.models.WiretapConfig` into a
pair of httpx event hooks. The hooks log through the configured logger at the
configured level. If that logger would drop records at this level, its own
level is lowered to match. Other loggers and all handlers are left to the
hosting application.

Trace lines::

    Request: POST http://orders.internal/orders
    Request body: {"sku": "A-1"}
    Response: 201 Created
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from meshclient.models import WiretapConfig


class WireTap:
    """Logs outgoing requests and incoming status lines.

    Args:
        config: Tracing configuration. Defaults to :class:`WiretapConfig`.
    """

    def __init__(self, config: Optional[WiretapConfig] = None) -> None:
        self.config = config or WiretapConfig()
        self._logger = logging.getLogger(self.config.logger_name)
        self._level = self.config.levelno
        if self._logger.getEffectiveLevel() > self._level:
            self._logger.setLevel(self._level)

    @property
    def logger(self) -> logging.Logger:
        """The logger trace lines are written to."""
        return self._logger

    def on_request(self, request: httpx.Request) -> None:
        """httpx ``request`` hook: log method, URL and (optionally) the body."""
        self._logger.log(self._level, "Request: %s %s", request.method, request.url)
        if not self.config.log_bodies:
            return
        body = _request_body(request)
        if body:
            self._logger.log(self._level, "Request body: %s", self._truncate(body))

    def on_response(self, response: httpx.Response) -> None:
        """httpx ``response`` hook: log the status line."""
        self._logger.log(
            self._level,
            "Response: %s %s",
            response.status_code,
            response.reason_phrase,
        )

    def _truncate(self, text: str) -> str:
        limit = self.config.max_body_chars
        if len(text) <= limit:
            return text
        return text[:limit] + "..."


def _request_body(request: httpx.Request) -> str:
    """Return the decoded request body, or ``""`` for streaming bodies."""
    try:
        content = request.content
    except httpx.RequestNotRead:
        # Streaming uploads are not buffered; reading them here would consume the stream.
        return ""
    return content.decode("utf-8", errors="replace")
