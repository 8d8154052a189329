"""Construction sequence shared by the blocking and non-blocking factories."""

from __future__ import annotations

import logging
from typing import Optional

from meshclient.builder import ClientBuilder, Customizer
from meshclient.classification import raise_for_classified_status
from meshclient.config import load_defaults

logger = logging.getLogger(__name__)


class ClientFactory:
    """Base class for factories that build service-to-service clients.

    Args:
        builder: The shared, pre-configured builder supplied by the hosting
            application. It is cloned for every client and never modified.
            When ``None``, one is created from :func:`~meshclient.config.load_defaults`.
    """

    def __init__(self, builder: Optional[ClientBuilder] = None) -> None:
        self._builder = builder if builder is not None else ClientBuilder.from_defaults(load_defaults())

    @property
    def builder(self) -> ClientBuilder:
        """The shared builder. Treat it as read-only."""
        return self._builder

    def _prepare(
        self,
        base_url: str,
        customize: Optional[Customizer],
        wiretap: bool,
    ) -> ClientBuilder:
        """Run the construction sequence and return the builder ready for ``build``.

        Order matters: the customization callback runs last so it can
        override every default set here.
        """
        builder = (
            self._builder.clone()
            .base_url(base_url)
            .follow_redirects(False)
            .response_hook(raise_for_classified_status)
        )
        builder.enable_wiretap(wiretap)
        builder = builder.apply(customize)
        logger.debug("Building client for %s (wiretap=%s)", base_url, wiretap)
        return builder
