import json

import httpx
import pytest
from loguru import logger

from lexbot.bus.events import InboundMessage


class FakeBackend:
    """Records requests and answers with queued responses."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: list = []

    def reply(self, status: int = 200, json_body=None, **kwargs) -> None:
        self.responses.append(httpx.Response(status, json=json_body, **kwargs))

    def fail(self, exc_type=httpx.ConnectError) -> None:
        self.responses.append(exc_type)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.responses.pop(0)
        if isinstance(result, type) and issubclass(result, Exception):
            raise result("connection refused", request=request)
        return result

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def log_records():
    records = []
    handler_id = logger.add(lambda m: records.append(m.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


def make_message(text: str, sender_id: str = "1", room_id: str = "#test", channel: str = "test"):
    return InboundMessage(channel=channel, sender_id=sender_id, room_id=room_id, text=text)
