"""Turn a backend response into a conversation transition and a reply."""

from dataclasses import dataclass
from enum import Enum

from lexbot.backend.models import BackendResponse, DialogState
from lexbot.conversation.state import ConversationStore


class Transition(Enum):
    START = "start"
    STOP = "stop"
    NONE = "none"


# The backend is waiting on the user
START_STATES = frozenset({DialogState.CONFIRM_INTENT, DialogState.ELICIT_SLOT})
# The dialog is over, one way or another
STOP_STATES = frozenset({
    DialogState.ELICIT_INTENT,
    DialogState.FAILED,
    DialogState.FULFILLED,
    DialogState.READY_FOR_FULFILLMENT,
})


@dataclass(frozen=True)
class Interpretation:
    transition: Transition
    reply: str | None


def interpret(response: BackendResponse) -> Interpretation:
    if response.dialog_state in START_STATES:
        transition = Transition.START
    elif response.dialog_state in STOP_STATES:
        transition = Transition.STOP
    else:
        transition = Transition.NONE

    reply = response.message if response.message else None
    return Interpretation(transition=transition, reply=reply)


def apply(interpretation: Interpretation, store: ConversationStore, room_id: str) -> None:
    """Write the transition for ``room_id`` to the store."""
    if interpretation.transition is Transition.START:
        store.set(room_id, True)
    elif interpretation.transition is Transition.STOP:
        store.set(room_id, False)
