"""Request and response types exchanged with the backend."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class DialogState(str, Enum):
    CONFIRM_INTENT = "ConfirmIntent"
    ELICIT_SLOT = "ElicitSlot"
    ELICIT_INTENT = "ElicitIntent"
    FAILED = "Failed"
    FULFILLED = "Fulfilled"
    READY_FOR_FULFILLMENT = "ReadyForFulfillment"

    @classmethod
    def parse(cls, value: Any) -> "DialogState | None":
        """Return the matching member, or None for absent/unknown values."""
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class BackendRequest:
    text: str
    sender: str
    room: str
    channel: str = ""

    def to_payload(self) -> dict[str, Any]:
        payload = {"text": self.text, "sender": self.sender, "room": self.room}
        if self.channel:
            payload["channel"] = self.channel
        return payload


@dataclass(frozen=True)
class BackendResponse:
    dialog_state: DialogState | None = None
    message: str | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "BackendResponse":
        message = data.get("message")
        return cls(
            dialog_state=DialogState.parse(data.get("dialogState")),
            message=message if isinstance(message, str) else None,
        )
