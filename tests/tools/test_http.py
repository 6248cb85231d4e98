import asyncio

import httpx
import pytest

from tools.exceptions import ServiceError
from tools.http import ServiceClient, abort_signal_of
from tools.adapters import StepContext


def _client(stub, abort_signal=None):
    return ServiceClient(
        base_url="https://api.example.test/v1",
        headers={"Authorization": "Bearer t"},
        transport=stub.transport,
        abort_signal=abort_signal,
    )


def test_get_drops_empty_params_and_sends_headers(stub_service):
    stub = stub_service((200, {"ok": True}))

    async def scenario():
        async with _client(stub) as client:
            return await client.get("/things", params={"a": 1, "b": None})

    assert asyncio.run(scenario()) == {"ok": True}
    request = stub.requests[0]
    assert request.url.path == "/v1/things"
    assert dict(request.url.params) == {"a": "1"}
    assert request.headers["Authorization"] == "Bearer t"


def test_error_response_becomes_service_error(stub_service):
    stub = stub_service((502, {"detail": "x"}))

    async def scenario():
        async with _client(stub) as client:
            await client.post("/things", json={})

    with pytest.raises(ServiceError) as exc_info:
        asyncio.run(scenario())
    assert str(exc_info.value) == "API Error: Bad Gateway"
    assert exc_info.value.status_code == 502


def test_transport_failure_becomes_service_error(stub_service):
    stub = stub_service(httpx.ConnectError("connection refused"))

    async def scenario():
        async with _client(stub) as client:
            await client.get("/things")

    with pytest.raises(ServiceError, match="ConnectError: connection refused"):
        asyncio.run(scenario())


def test_request_outside_context_is_rejected(stub_service):
    client = _client(stub_service())

    with pytest.raises(RuntimeError):
        asyncio.run(client.get("/things"))


def test_abort_signal_stops_request_before_sending(stub_service):
    stub = stub_service((200, {}))

    async def scenario():
        signal = asyncio.Event()
        signal.set()
        async with _client(stub, abort_signal=signal) as client:
            with pytest.raises(asyncio.CancelledError):
                await client.get("/things")

    asyncio.run(scenario())
    assert stub.requests == []


def test_abort_signal_of_runtime_configs():
    signal = asyncio.Event()

    assert abort_signal_of(StepContext("call_1", abort_signal=signal)) is signal
    assert abort_signal_of({"configurable": {}}) is None
    assert abort_signal_of(None) is None
