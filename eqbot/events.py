"""
Inbound events: a closed set of kinds decoded from Telegram callback payloads,
free text and commands.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EventKind(Enum):
    OPEN_EMOTIONS = "menu:emotions"
    OPEN_MULTI = "menu:multi"
    OPEN_HISTORY = "menu:history"
    OPEN_ACHIEVEMENTS = "menu:achievements"
    CHOOSE_EMOTION = "emotion"
    CHOOSE_INTENSITY = "intensity"
    TOGGLE_EMOTION = "toggle"
    CONFIRM_MULTI = "multi:confirm"
    CANCEL = "journal:cancel"
    BACK = "nav:back"
    DONE_AND_DELETE = "nav:done_delete"
    START_BREATHING = "breath:start"
    STOP_BREATHING = "breath:stop"
    TEXT = "text"
    RESET = "reset"
    UNKNOWN = "unknown"


# Kinds whose payload is "<prefix>:<argument>"
ARGUMENT_KINDS = {
    EventKind.CHOOSE_EMOTION,
    EventKind.CHOOSE_INTENSITY,
    EventKind.TOGGLE_EMOTION,
}

# Kinds that never come from a button
_NON_CALLBACK_KINDS = {EventKind.TEXT, EventKind.RESET, EventKind.UNKNOWN}

_SIMPLE_PAYLOADS = {
    kind.value: kind for kind in EventKind
    if kind not in ARGUMENT_KINDS and kind not in _NON_CALLBACK_KINDS
}
_ARGUMENT_PREFIXES = {kind.value: kind for kind in ARGUMENT_KINDS}


@dataclass(frozen=True)
class Event:
    kind: EventKind
    argument: Optional[str] = None

    @classmethod
    def text(cls, content: str) -> "Event":
        return cls(EventKind.TEXT, content)

    @classmethod
    def reset(cls) -> "Event":
        return cls(EventKind.RESET)


def encode_callback(kind: EventKind, argument=None) -> str:
    """Build the callback payload for a button."""
    if kind in _NON_CALLBACK_KINDS:
        raise ValueError(f"{kind.name} is not a button event")
    if kind in ARGUMENT_KINDS:
        if argument is None or argument == "":
            raise ValueError(f"{kind.name} needs an argument")
        return f"{kind.value}:{argument}"
    return kind.value


def decode_callback(payload: Optional[str]) -> Event:
    """Decode a callback payload. Anything unrecognized becomes UNKNOWN."""
    if not payload:
        return Event(EventKind.UNKNOWN, payload)

    kind = _SIMPLE_PAYLOADS.get(payload)
    if kind is not None:
        return Event(kind)

    prefix, _, argument = payload.partition(":")
    kind = _ARGUMENT_PREFIXES.get(prefix)
    if kind is None or not argument:
        return Event(EventKind.UNKNOWN, payload)
    if kind is EventKind.CHOOSE_INTENSITY and not argument.isdigit():
        return Event(EventKind.UNKNOWN, payload)
    return Event(kind, argument)
