"""Conversational backend integration.

- client: HTTP transport to the backend, error normalization.
- models: request/response types.
- interpreter: map ``dialogState`` to conversation transitions.
"""

from lexbot.backend.client import BackendClient
from lexbot.backend.errors import BackendError, ClientError, TransportError
from lexbot.backend.interpreter import Interpretation, Transition, apply, interpret
from lexbot.backend.models import BackendRequest, BackendResponse, DialogState

__all__ = [
    "BackendClient",
    "BackendError",
    "ClientError",
    "TransportError",
    "Interpretation",
    "Transition",
    "apply",
    "interpret",
    "BackendRequest",
    "BackendResponse",
    "DialogState",
]
