"""meshclient -- pre-configured httpx clients for service-to-service calls.

Every client built by :class:`SyncClientFactory` or :class:`AsyncClientFactory`
has a base URL, never follows redirects, optionally traces its traffic
("wiretap"), and turns every non-2xx response into one of nine typed
exceptions instead of handing the caller a failed response.

Typical use::

    from meshclient import NotFoundError, SyncClientFactory

    factory = SyncClientFactory()
    with factory.new_client("http://users.internal", wiretap=True) as client:
        try:
            user = client.get("/users/7").json()
        except NotFoundError:
            user = None

Modules:
    app: Typer CLI for probing services with a factory client.
    builder: Clonable builder shared by the factories.
    classification: Status-code to error-kind decision table.
    client: The blocking and non-blocking client factories.
    config: Defaults loaded from a config file and the environment.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes for the CLI.
    models: Pydantic configuration models.
    output: stdout/stderr formatting and logging setup with Rich.
    wiretap: Request/response tracing hooks.
"""

__version__ = "0.1.0"

from meshclient.builder import ClientBuilder  # noqa: E402
from meshclient.classification import classify, classify_response  # noqa: E402
from meshclient.client import AsyncClientFactory, SyncClientFactory  # noqa: E402
from meshclient.exceptions import (  # noqa: E402
    BadRequestError,
    ConfigError,
    ConflictError,
    ErrorKind,
    ForbiddenError,
    FoundError,
    InternalServerError,
    MeshClientError,
    NotFoundError,
    RemoteCallError,
    TooManyRequestsError,
    UnauthorizedError,
    UnprocessableEntityError,
)
from meshclient.models import ClientDefaults, WiretapConfig  # noqa: E402

__all__ = [
    "AsyncClientFactory",
    "BadRequestError",
    "ClientBuilder",
    "ClientDefaults",
    "ConfigError",
    "ConflictError",
    "ErrorKind",
    "ForbiddenError",
    "FoundError",
    "InternalServerError",
    "MeshClientError",
    "NotFoundError",
    "RemoteCallError",
    "SyncClientFactory",
    "TooManyRequestsError",
    "UnauthorizedError",
    "UnprocessableEntityError",
    "WiretapConfig",
    "classify",
    "classify_response",
]
