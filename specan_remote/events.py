"""Command event definitions for the LED display remote control.

An event is one of a closed set of symbols understood by the display's
remote-control listener. Two of them carry the slider value that was
submitted with them; the value text is appended to the symbol with no
separator, e.g. ``E_GAIN_VALUE75``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Container, List, Mapping, Optional, Tuple


class EventName(str, Enum):
    """Event symbols accepted by the display.

    Gain / brightness source:
        E_GAIN_BRIGHT_LOCAL: use the physical knobs
        E_GAIN_BRIGHT_REMOTE: use the values sent from this page

    Gain / brightness value:
        E_GAIN_VALUE: gain 0-100, value appended
        E_BRIGHT_VALUE: brightness 0.0-1.0, value appended

    Gradient / display:
        E_GRADIENT_POS, E_GRADIENT_NEG: step the colour gradient
        E_DISPLAY_CHANGE_POS, E_DISPLAY_CHANGE_NEG: step the display type
        E_REVERSE_GRADIENT_TOGGLE: flip the gradient direction
    """

    GAIN_BRIGHT_LOCAL = "E_GAIN_BRIGHT_LOCAL"
    GAIN_BRIGHT_REMOTE = "E_GAIN_BRIGHT_REMOTE"
    GAIN_VALUE = "E_GAIN_VALUE"
    BRIGHT_VALUE = "E_BRIGHT_VALUE"
    GRADIENT_POS = "E_GRADIENT_POS"
    GRADIENT_NEG = "E_GRADIENT_NEG"
    DISPLAY_CHANGE_POS = "E_DISPLAY_CHANGE_POS"
    DISPLAY_CHANGE_NEG = "E_DISPLAY_CHANGE_NEG"
    REVERSE_GRADIENT_TOGGLE = "E_REVERSE_GRADIENT_TOGGLE"


VALUE_EVENTS = frozenset({EventName.GAIN_VALUE, EventName.BRIGHT_VALUE})
"""Events that carry a slider value."""

GAIN_SLIDER_FIELD = "gain_slider"
BRIGHT_SLIDER_FIELD = "bright_slider"


@dataclass(frozen=True, slots=True)
class CommandEvent:
    name: EventName
    value: Optional[str] = None

    def __post_init__(self) -> None:
        if self.value is not None and self.name not in VALUE_EVENTS:
            raise ValueError(f"{self.name.value} does not take a value")

    @property
    def argument(self) -> str:
        """Single command-line argument understood by the display."""
        return f"{self.name.value}{self.value or ''}"

    @classmethod
    def parse(cls, text: str) -> "CommandEvent":
        """Parse an argument such as ``E_BRIGHT_VALUE0.74`` back into an event."""
        text = text.strip()
        for name in EventName:
            if name in VALUE_EVENTS and text.startswith(name.value):
                return cls(name, text[len(name.value):])
            if text == name.value:
                return cls(name)
        raise ValueError(f"Unknown event: {text!r}")


@dataclass(frozen=True, slots=True)
class Trigger:
    """Request fields that fire one event."""

    event: EventName
    fields: Tuple[str, ...]
    value_field: Optional[str] = None

    def fired_by(self, params: Container[str]) -> bool:
        return any(name in params for name in self.fields)

    def build(self, params: Mapping[str, str]) -> CommandEvent:
        if self.value_field is None:
            return CommandEvent(self.event)
        return CommandEvent(self.event, str(params.get(self.value_field, "")))


# Field check order is significant: events go out in this order.
TRIGGERS: Tuple[Trigger, ...] = (
    Trigger(EventName.GAIN_BRIGHT_LOCAL, ("gain_local", "E_GAIN_BRIGHT_LOCAL")),
    Trigger(EventName.GAIN_BRIGHT_REMOTE, ("gain_remote", "E_GAIN_BRIGHT_REMOTE")),
    Trigger(
        EventName.GAIN_VALUE,
        ("gain_val", "E_GAIN_VALUE"),
        value_field=GAIN_SLIDER_FIELD,
    ),
    Trigger(
        EventName.BRIGHT_VALUE,
        ("bright_val", "E_BRIGHT_VALUE"),
        value_field=BRIGHT_SLIDER_FIELD,
    ),
    Trigger(EventName.GRADIENT_POS, ("grad_pos", "E_GRADIENT_POS")),
    Trigger(EventName.GRADIENT_NEG, ("grad_neg", "E_GRADIENT_NEG")),
    Trigger(EventName.DISPLAY_CHANGE_POS, ("disp_pos", "E_DISPLAY_CHANGE_POS")),
    Trigger(EventName.DISPLAY_CHANGE_NEG, ("disp_neg", "E_DISPLAY_CHANGE_NEG")),
    Trigger(
        EventName.REVERSE_GRADIENT_TOGGLE,
        ("grad_rev", "E_REVERSE_GRADIENT_TOGGLE"),
    ),
)


def events_from_params(params: Mapping[str, str]) -> List[CommandEvent]:
    """Return the events fired by a request's fields, in field check order."""
    return [trigger.build(params) for trigger in TRIGGERS if trigger.fired_by(params)]
