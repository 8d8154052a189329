"""Clonable builder for pre-configured httpx clients.

A hosting application creates one shared :class:`ClientBuilder` (typically
from :class:`~meshclient.models.ClientDefaults`) and hands it to the client
factories. Each factory call works on a :meth:`~ClientBuilder.clone`, so
per-client settings never leak back into the shared builder.

Setters return the builder so calls can be chained::

    client = (
        ClientBuilder.from_defaults(defaults)
        .clone()
        .base_url("http://orders.internal")
        .header("X-Caller", "billing")
        .build()
    )

Hooks registered with :meth:`~ClientBuilder.request_hook` and
:meth:`~ClientBuilder.response_hook` run in registration order. When a
:class:`~meshclient.wiretap.WireTap` is installed its hooks always run first,
so traced status lines include responses that a later hook rejects.
"""

from __future__ import annotations

import copy
import inspect
from typing import Any, Callable, Optional, Union

import httpx

from meshclient.exceptions import ConfigError
from meshclient.models import ClientDefaults, WiretapConfig
from meshclient.wiretap import WireTap

Hook = Callable[[Any], Any]
Customizer = Callable[["ClientBuilder"], Optional["ClientBuilder"]]
Transport = Union[httpx.BaseTransport, httpx.AsyncBaseTransport]


class ClientBuilder:
    """Accumulates client settings and builds :class:`httpx.Client` or :class:`httpx.AsyncClient`.

    Args:
        defaults: Settings applied before anything else. Defaults to a
            plain :class:`~meshclient.models.ClientDefaults`.
    """

    def __init__(self, defaults: Optional[ClientDefaults] = None) -> None:
        defaults = defaults or ClientDefaults()
        self._base_url = ""
        self._follow_redirects = False
        self._timeout: float = defaults.timeout
        self._verify: bool = defaults.verify_ssl
        self._headers: dict[str, str] = dict(defaults.headers)
        if defaults.user_agent:
            self._headers.setdefault("User-Agent", defaults.user_agent)
        self._wiretap_config: WiretapConfig = defaults.wiretap
        self._wiretap: Optional[WireTap] = None
        self._request_hooks: list[Hook] = []
        self._response_hooks: list[Hook] = []
        self._transport: Optional[Transport] = None
        self._options: dict[str, Any] = {}

    @classmethod
    def from_defaults(cls, defaults: ClientDefaults) -> ClientBuilder:
        """Create a builder pre-configured with *defaults*."""
        return cls(defaults)

    def clone(self) -> ClientBuilder:
        """Return an independent copy; changes to the copy do not affect this builder."""
        other = copy.copy(self)
        other._headers = dict(self._headers)
        other._request_hooks = list(self._request_hooks)
        other._response_hooks = list(self._response_hooks)
        other._options = dict(self._options)
        return other

    # ------------------------------------------------------------------ #
    # Settings
    # ------------------------------------------------------------------ #

    def base_url(self, url: str) -> ClientBuilder:
        if not url:
            raise ConfigError("base_url must not be empty")
        self._base_url = url
        return self

    def follow_redirects(self, enabled: bool = True) -> ClientBuilder:
        self._follow_redirects = enabled
        return self

    def timeout(self, seconds: float) -> ClientBuilder:
        self._timeout = seconds
        return self

    def verify(self, enabled: bool) -> ClientBuilder:
        self._verify = enabled
        return self

    def header(self, name: str, value: str) -> ClientBuilder:
        self._headers[name] = value
        return self

    def transport(self, transport: Optional[Transport]) -> ClientBuilder:
        """Use a specific httpx transport (e.g. :class:`httpx.MockTransport` in tests)."""
        self._transport = transport
        return self

    def option(self, **kwargs: Any) -> ClientBuilder:
        """Pass extra keyword arguments straight to the httpx client constructor."""
        self._options.update(kwargs)
        return self

    def request_hook(self, hook: Hook) -> ClientBuilder:
        self._request_hooks.append(hook)
        return self

    def response_hook(self, hook: Hook) -> ClientBuilder:
        self._response_hooks.append(hook)
        return self

    def wiretap_config(self, config: WiretapConfig) -> ClientBuilder:
        """Replace the tracing configuration used by :meth:`enable_wiretap`."""
        self._wiretap_config = config
        return self

    def enable_wiretap(self, enabled: bool = True) -> ClientBuilder:
        """Install (or remove) the wiretap hooks using the current tracing configuration."""
        self._wiretap = WireTap(self._wiretap_config) if enabled else None
        return self

    def apply(self, customize: Optional[Customizer]) -> ClientBuilder:
        """Run a customization callback against this builder.

        The callback may mutate the builder and return ``None``, or return
        a builder to continue with.
        """
        if customize is None:
            return self
        result = customize(self)
        return self if result is None else result

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    @property
    def wiretap(self) -> Optional[WireTap]:
        return self._wiretap

    def event_hooks(self) -> dict[str, list[Hook]]:
        """Return the hooks in execution order, wiretap first."""
        request_hooks = list(self._request_hooks)
        response_hooks = list(self._response_hooks)
        if self._wiretap is not None:
            request_hooks.insert(0, self._wiretap.on_request)
            response_hooks.insert(0, self._wiretap.on_response)
        return {"request": request_hooks, "response": response_hooks}

    # ------------------------------------------------------------------ #
    # Build
    # ------------------------------------------------------------------ #

    def build(self) -> httpx.Client:
        """Build a blocking :class:`httpx.Client`.

        Raises:
            ConfigError: If no base URL was set or a hook is a coroutine function.
        """
        hooks = self.event_hooks()
        for hook in hooks["request"] + hooks["response"]:
            if inspect.iscoroutinefunction(hook):
                raise ConfigError(f"Async hook {hook!r} cannot be used with a blocking client")
        return httpx.Client(**self._client_kwargs(hooks))

    def build_async(self) -> httpx.AsyncClient:
        """Build a non-blocking :class:`httpx.AsyncClient`.

        Plain-function hooks are wrapped so httpx can await them.

        Raises:
            ConfigError: If no base URL was set.
        """
        hooks = {
            event: [_as_async(hook) for hook in event_hooks]
            for event, event_hooks in self.event_hooks().items()
        }
        return httpx.AsyncClient(**self._client_kwargs(hooks))

    def _client_kwargs(self, hooks: dict[str, list[Any]]) -> dict[str, Any]:
        if not self._base_url:
            raise ConfigError("base_url must be set before building a client")
        kwargs: dict[str, Any] = {
            "base_url": self._base_url,
            "follow_redirects": self._follow_redirects,
            "timeout": self._timeout,
            "verify": self._verify,
            "headers": self._headers,
            "event_hooks": hooks,
        }
        if self._transport is not None:
            kwargs["transport"] = self._transport
        kwargs.update(self._options)
        return kwargs


def _as_async(hook: Hook) -> Hook:
    """Adapt a hook so :class:`httpx.AsyncClient` can await it."""
    if inspect.iscoroutinefunction(hook):
        return hook

    async def _hook(obj: Any) -> None:
        result = hook(obj)
        if inspect.isawaitable(result):
            await result

    return _hook
