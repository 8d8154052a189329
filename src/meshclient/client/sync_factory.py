"""Factory for blocking service-to-service clients.

:class:`SyncClientFactory` returns plain :class:`httpx.Client` instances.
Each client occupies the calling thread for the whole exchange and raises
a :class:`~meshclient.exceptions.RemoteCallError` subclass for every
non-2xx response, so callers only ever see successful responses.

Example::

    factory = SyncClientFactory()
    with factory.new_client("http://inventory.internal") as client:
        try:
            stock = client.get("/stock/A-1").json()
        except NotFoundError:
            stock = None

See Also:
    :class:`~meshclient.client.async_factory.AsyncClientFactory` for the
    non-blocking equivalent.
"""

from __future__ import annotations

from typing import Optional

import httpx

from meshclient.builder import Customizer
from meshclient.client.base import ClientFactory


class SyncClientFactory(ClientFactory):
    """Builds :class:`httpx.Client` instances with classification and optional wiretap."""

    def new_client(
        self,
        base_url: str,
        customize: Optional[Customizer] = None,
        wiretap: bool = False,
    ) -> httpx.Client:
        """Build a blocking client for *base_url*.

        Args:
            base_url: Base URL every relative request path is joined to.
            customize: Optional callback applied to the builder as the final
                step. It may override any default, including the ones set
                here.
            wiretap: Log every request line, request body and response
                status line through the configured wiretap logger.

        Returns:
            A ready-to-use :class:`httpx.Client`. Use it as a context
            manager or call ``close()`` when done.

        Raises:
            ConfigError: If *base_url* is empty.
        """
        return self._prepare(base_url, customize, wiretap).build()
