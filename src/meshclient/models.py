"""Pydantic configuration models shared across meshclient.

:class:`ClientDefaults` holds the settings a hosting application applies to
the shared :class:`~meshclient.builder.ClientBuilder` before any factory
clones it. :class:`WiretapConfig` is the explicit tracing configuration handed
to the wiretap event hooks; enabling the wiretap touches no logger other than
the one named by ``logger_name``.

Both models are loaded from JSON by :mod:`meshclient.config` and use
``extra="forbid"`` so that typos in a config file surface as a
:class:`~meshclient.exceptions.ConfigError`.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from meshclient import __version__


class WiretapConfig(BaseModel):
    """How request/response tracing is emitted when a client enables the wiretap.

    Example::

        WiretapConfig(logger_name="orders.wire", level="INFO", log_bodies=False)
    """

    model_config = ConfigDict(extra="forbid")

    logger_name: str = Field(
        default="meshclient.wiretap", description="Name of the logger that receives trace lines"
    )
    level: str = Field(
        default="DEBUG", description="Level name used for every trace line"
    )
    log_bodies: bool = Field(
        default=True, description="Whether non-empty request bodies are logged"
    )
    max_body_chars: int = Field(
        default=2048, ge=0, description="Request bodies longer than this are truncated"
    )

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        name = value.upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"unknown logging level: {value!r}")
        return name

    @property
    def levelno(self) -> int:
        """Numeric logging level for :attr:`level`."""
        return logging.getLevelName(self.level)


class ClientDefaults(BaseModel):
    """Defaults applied to every client built from a shared builder.

    Fields here have sensible defaults so an empty config file (or no file
    at all) yields a usable configuration.
    """

    model_config = ConfigDict(extra="forbid")

    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    headers: dict[str, str] = Field(
        default_factory=dict, description="Headers sent with every request"
    )
    user_agent: Optional[str] = Field(
        default=f"meshclient/{__version__}",
        description="User-Agent header; None keeps the httpx default",
    )
    wiretap: WiretapConfig = Field(default_factory=WiretapConfig)
