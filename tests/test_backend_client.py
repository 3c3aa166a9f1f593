import asyncio
import json

import httpx
import pytest

from lexbot.backend import (
    BackendClient,
    BackendError,
    BackendRequest,
    ClientError,
    DialogState,
    TransportError,
)

URL = "http://lex-api-gateway.test.com/messages"
REQUEST = BackendRequest(text="lex hello", sender="1", room="#test", channel="test")


def _send(backend, api_key=None):
    async def go():
        async with BackendClient(URL, api_key=api_key, transport=backend.transport) as client:
            return await client.send(REQUEST)

    return asyncio.run(go())


def test_posts_json_with_headers(backend):
    backend.reply(200, {"message": "hello!"})
    _send(backend)

    request = backend.requests[0]
    assert request.method == "POST"
    assert str(request.url) == URL
    assert request.headers["accept"] == "application/json"
    assert request.headers["content-type"] == "application/json"
    assert "x-api-key" not in request.headers
    assert json.loads(request.content) == {
        "text": "lex hello",
        "sender": "1",
        "room": "#test",
        "channel": "test",
    }


def test_sends_api_key_when_configured(backend):
    backend.reply(200, {})
    _send(backend, api_key="secret")
    assert backend.requests[0].headers["x-api-key"] == "secret"


def test_parses_dialog_state_and_message(backend):
    backend.reply(200, {"dialogState": "ElicitSlot", "message": "Which city?"})
    response = _send(backend)
    assert response.dialog_state is DialogState.ELICIT_SLOT
    assert response.message == "Which city?"


def test_unknown_dialog_state_is_none(backend):
    backend.reply(200, {"dialogState": "Pondering"})
    response = _send(backend)
    assert response.dialog_state is None
    assert response.message is None


def test_transport_failure(backend):
    backend.fail(httpx.ConnectError)
    with pytest.raises(TransportError):
        _send(backend)


def test_timeout_is_transport_failure(backend):
    backend.fail(httpx.ReadTimeout)
    with pytest.raises(TransportError):
        _send(backend)


def test_error_status_uses_message_field(backend):
    backend.reply(403, {"message": "Forbidden"})
    with pytest.raises(BackendError) as exc_info:
        _send(backend)
    assert exc_info.value.status == 403
    assert exc_info.value.message == "Forbidden"


def test_error_status_without_json_body(backend):
    backend.reply(502, content=b"<html>Bad Gateway</html>")
    with pytest.raises(BackendError) as exc_info:
        _send(backend)
    assert exc_info.value.status == 502
    assert exc_info.value.message == "Bad Gateway"


def test_non_200_success_status_is_an_error(backend):
    backend.reply(204)
    with pytest.raises(ClientError):
        _send(backend)


def test_malformed_success_body(backend):
    backend.reply(200, content=b"not json")
    with pytest.raises(BackendError, match="Malformed"):
        _send(backend)


def test_non_object_success_body(backend):
    backend.reply(200, ["hello"])
    with pytest.raises(BackendError, match="Malformed"):
        _send(backend)
