"""Errors raised by :class:`lexbot.backend.client.BackendClient`."""

from lexbot.errors import LexbotError


class ClientError(LexbotError):
    """The backend could not be reached or answered with an error."""


class TransportError(ClientError):
    """Network failure: DNS, connection refused, timeout."""


class BackendError(ClientError):
    """The backend answered with a non-200 status or an unreadable body."""

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(f"Backend returned {status}: {message}")
