"""Factory for non-blocking service-to-service clients.

:class:`AsyncClientFactory` mirrors
:class:`~meshclient.client.sync_factory.SyncClientFactory` but returns
:class:`httpx.AsyncClient` instances. Requests suspend the calling coroutine
instead of a thread; the classification hook runs on the event loop when the
response headers arrive.

Example::

    factory = AsyncClientFactory()
    async with factory.new_client("http://inventory.internal", wiretap=True) as client:
        response = await client.get("/stock/A-1")
"""

from __future__ import annotations

from typing import Optional

import httpx

from meshclient.builder import Customizer
from meshclient.client.base import ClientFactory


class AsyncClientFactory(ClientFactory):
    """Builds :class:`httpx.AsyncClient` instances with classification and optional wiretap."""

    def new_client(
        self,
        base_url: str,
        customize: Optional[Customizer] = None,
        wiretap: bool = False,
    ) -> httpx.AsyncClient:
        """Build a non-blocking client for *base_url*.

        Takes the same arguments as
        :meth:`~meshclient.client.sync_factory.SyncClientFactory.new_client`.
        Hooks added by *customize* may be plain functions or coroutine
        functions.

        Returns:
            A ready-to-use :class:`httpx.AsyncClient`. Use it as an async
            context manager or ``await client.aclose()`` when done.

        Raises:
            ConfigError: If *base_url* is empty.
        """
        return self._prepare(base_url, customize, wiretap).build_async()
