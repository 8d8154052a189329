"""Tests for the blocking client factory."""

from __future__ import annotations

import logging

import httpx
import pytest

from meshclient.builder import ClientBuilder
from meshclient.client import SyncClientFactory
from meshclient.exceptions import (
    BadRequestError,
    ConfigError,
    ConflictError,
    ForbiddenError,
    FoundError,
    InternalServerError,
    NotFoundError,
    RemoteCallError,
    TooManyRequestsError,
    UnauthorizedError,
    UnprocessableEntityError,
)

REDIRECT_TARGET = "http://example.com/redirect"

BASE_URL = "http://svc.internal"


@pytest.fixture
def factory(shared_builder: ClientBuilder) -> SyncClientFactory:
    return SyncClientFactory(shared_builder)


# ---------------------------------------------------------------------------
# Successful responses
# ---------------------------------------------------------------------------


class TestSuccess:
    def test_body_round_trips(self, factory: SyncClientFactory) -> None:
        with factory.new_client(BASE_URL) as client:
            response = client.get("/status/200")
        assert response.status_code == 200
        assert response.text == "hello"

    def test_request_body_reaches_service(self, factory: SyncClientFactory) -> None:
        with factory.new_client(BASE_URL) as client:
            response = client.post("/echo", content=b"payload")
        assert response.content == b"payload"

    def test_base_url_is_applied(self, recording_transport) -> None:
        transport, seen = recording_transport
        factory = SyncClientFactory(ClientBuilder().transport(transport))
        with factory.new_client("http://orders.internal/api") as client:
            client.get("/orders/1")
        assert str(seen[0].url) == "http://orders.internal/api/orders/1"


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


class TestClassification:
    @pytest.mark.parametrize(
        ("status", "expected", "message"),
        [
            (400, BadRequestError, "Bad Request"),
            (401, UnauthorizedError, "Unauthorized"),
            (403, ForbiddenError, "Forbidden"),
            (404, NotFoundError, "Not Found"),
            (409, ConflictError, "Conflict"),
            (422, UnprocessableEntityError, "Unprocessable Entity"),
            (429, TooManyRequestsError, "Too Many Requests"),
            (500, InternalServerError, "Internal Server Error"),
        ],
    )
    def test_status_maps_to_error(self, factory, status, expected, message) -> None:
        with factory.new_client(BASE_URL) as client:
            with pytest.raises(expected) as exc_info:
                client.get(f"/status/{status}")
        assert type(exc_info.value) is expected
        assert exc_info.value.message == message

    def test_found_exposes_location(self, factory) -> None:
        with factory.new_client(BASE_URL) as client:
            with pytest.raises(FoundError) as exc_info:
                client.get("/status/302")
        assert exc_info.value.location == REDIRECT_TARGET

    def test_found_without_location(self, factory) -> None:
        with factory.new_client(BASE_URL) as client:
            with pytest.raises(FoundError) as exc_info:
                client.get("/redirect-without-location")
        assert exc_info.value.location == ""

    def test_other_4xx_is_bad_request(self, factory) -> None:
        with factory.new_client(BASE_URL) as client:
            with pytest.raises(BadRequestError) as exc_info:
                client.get("/status/418")
        assert "418" in str(exc_info.value)

    def test_other_5xx_is_internal_server_error(self, factory) -> None:
        with factory.new_client(BASE_URL) as client:
            with pytest.raises(InternalServerError) as exc_info:
                client.get("/status/503")
        assert "503" in str(exc_info.value)
        assert exc_info.value.status_code == 503

    def test_errors_share_base_class(self, factory) -> None:
        with factory.new_client(BASE_URL) as client:
            with pytest.raises(RemoteCallError):
                client.get("/status/404")

    def test_each_error_raised_once_without_retry(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        factory = SyncClientFactory(ClientBuilder().transport(httpx.MockTransport(handler)))
        with factory.new_client(BASE_URL) as client:
            with pytest.raises(InternalServerError):
                client.get("/flaky")
        assert len(calls) == 1

    def test_transport_errors_pass_through(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        factory = SyncClientFactory(ClientBuilder().transport(httpx.MockTransport(handler)))
        with factory.new_client(BASE_URL) as client:
            with pytest.raises(httpx.ConnectError):
                client.get("/anything")


# ---------------------------------------------------------------------------
# Redirects
# ---------------------------------------------------------------------------


class TestRedirects:
    def test_redirect_is_not_followed(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            if request.url.path == "/start":
                return httpx.Response(302, headers={"Location": "/target"})
            return httpx.Response(200, text="target")

        factory = SyncClientFactory(ClientBuilder().transport(httpx.MockTransport(handler)))
        with factory.new_client(BASE_URL) as client:
            assert client.follow_redirects is False
            with pytest.raises(FoundError) as exc_info:
                client.get("/start")
        assert exc_info.value.location == "/target"
        assert seen == ["/start"]

    def test_redirect_classified_even_if_customization_enables_following(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            if request.url.path == "/start":
                return httpx.Response(302, headers={"Location": "/target"})
            return httpx.Response(200)

        factory = SyncClientFactory(ClientBuilder().transport(httpx.MockTransport(handler)))
        client = factory.new_client(BASE_URL, customize=lambda b: b.follow_redirects(True))
        with client:
            with pytest.raises(FoundError):
                client.get("/start")
        assert seen == ["/start"]


# ---------------------------------------------------------------------------
# Customization
# ---------------------------------------------------------------------------


class TestCustomization:
    def test_customization_runs_last_and_overrides_defaults(self, recording_transport) -> None:
        transport, seen = recording_transport
        shared = ClientBuilder().header("X-Caller", "default").transport(transport)

        def customize(b: ClientBuilder) -> ClientBuilder:
            return b.header("X-Caller", "custom").base_url("http://override.internal")

        with SyncClientFactory(shared).new_client(BASE_URL, customize) as client:
            client.get("/ping")
        assert seen[0].headers["X-Caller"] == "custom"
        assert seen[0].url.host == "override.internal"

    def test_customization_sees_configured_builder(self, shared_builder) -> None:
        observed: dict[str, object] = {}

        def customize(b: ClientBuilder) -> None:
            hooks = b.event_hooks()
            observed["response_hooks"] = len(hooks["response"])
            observed["wiretap"] = b.wiretap is not None

        SyncClientFactory(shared_builder).new_client(BASE_URL, customize, wiretap=True).close()
        # Classification hook plus the wiretap response hook.
        assert observed == {"response_hooks": 2, "wiretap": True}

    def test_customization_does_not_leak_into_shared_builder(self, shared_builder) -> None:
        factory = SyncClientFactory(shared_builder)
        factory.new_client(BASE_URL, lambda b: b.header("X-Once", "1")).close()
        assert "X-Once" not in shared_builder.headers
        assert shared_builder.event_hooks()["response"] == []

        with factory.new_client(BASE_URL) as client:
            assert "X-Once" not in client.headers

    def test_customization_can_swap_transport(self, factory) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="swapped"))
        with factory.new_client(BASE_URL, lambda b: b.transport(transport)) as client:
            assert client.get("/status/404").text == "swapped"

    def test_empty_base_url_rejected(self, factory) -> None:
        with pytest.raises(ConfigError):
            factory.new_client("")


# ---------------------------------------------------------------------------
# Wiretap
# ---------------------------------------------------------------------------


class TestWiretap:
    def test_wiretap_logs_request_and_response(self, factory, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="meshclient.wiretap")
        with factory.new_client(BASE_URL, wiretap=True) as client:
            client.get("/status/200")

        messages = [r.getMessage() for r in caplog.records if r.name == "meshclient.wiretap"]
        assert any("GET" in m and "/status/200" in m for m in messages)
        assert any(m.startswith("Response: 200") for m in messages)

    def test_wiretap_logs_request_body(self, factory, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="meshclient.wiretap")
        with factory.new_client(BASE_URL, wiretap=True) as client:
            client.post("/echo", content=b"order=1")

        messages = [r.getMessage() for r in caplog.records if r.name == "meshclient.wiretap"]
        assert "Request body: order=1" in messages

    def test_wiretap_traces_failing_responses(self, factory, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="meshclient.wiretap")
        with factory.new_client(BASE_URL, wiretap=True) as client:
            with pytest.raises(NotFoundError):
                client.get("/status/404")

        messages = [r.getMessage() for r in caplog.records if r.name == "meshclient.wiretap"]
        assert "Response: 404 Not Found" in messages

    def test_no_trace_without_wiretap(self, factory, caplog) -> None:
        caplog.set_level(logging.DEBUG)
        with factory.new_client(BASE_URL) as client:
            client.get("/status/200")

        assert not [r for r in caplog.records if r.name == "meshclient.wiretap"]
        assert not [r for r in caplog.records if "Response:" in r.getMessage()]


# ---------------------------------------------------------------------------
# Default builder
# ---------------------------------------------------------------------------


class TestDefaultBuilder:
    def test_builder_created_from_loaded_defaults(self, monkeypatch) -> None:
        monkeypatch.setenv("MESHCLIENT_TIMEOUT", "7")
        factory = SyncClientFactory()
        with factory.new_client(BASE_URL) as client:
            assert client.timeout.read == 7


class TestWiretapFlag:
    def test_flag_alone_produces_trace_records(self, factory, caplog) -> None:
        parent_level = logging.getLogger("meshclient").level
        with factory.new_client(BASE_URL, wiretap=True) as client:
            client.get("/status/200")

        messages = [r.getMessage() for r in caplog.records if r.name == "meshclient.wiretap"]
        assert "Request: GET http://svc.internal/status/200" in messages
        assert "Response: 200 OK" in messages
        assert logging.getLogger("meshclient").level == parent_level

    def test_disabled_flag_removes_wiretap_from_shared_builder(
        self, shared_builder, caplog
    ) -> None:
        caplog.set_level(logging.DEBUG, logger="meshclient.wiretap")
        shared_builder.enable_wiretap()
        with SyncClientFactory(shared_builder).new_client(BASE_URL, wiretap=False) as client:
            client.get("/status/200")

        assert not [r for r in caplog.records if r.name == "meshclient.wiretap"]
        assert shared_builder.wiretap is not None
