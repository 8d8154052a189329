"""Client factories for service-to-service HTTP calls.

Classes:
    :class:`SyncClientFactory` -- builds blocking :class:`httpx.Client` instances.
    :class:`AsyncClientFactory` -- builds non-blocking :class:`httpx.AsyncClient` instances.

Both factories clone a shared :class:`~meshclient.builder.ClientBuilder`,
set the base URL, disable redirect following, install the status
classification hook, optionally install the wiretap, and finally apply the
caller's customization callback.

Example::

    from meshclient.client import SyncClientFactory

    with SyncClientFactory().new_client("http://users.internal") as client:
        resp = client.get("/users/7")
"""

from meshclient.client.async_factory import AsyncClientFactory
from meshclient.client.sync_factory import SyncClientFactory

__all__ = ["SyncClientFactory", "AsyncClientFactory"]
