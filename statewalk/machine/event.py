"""Events sent to a machine."""

from dataclasses import dataclass, field
from typing import Any, Mapping

INIT_EVENT_TYPE = "statewalk.init"


@dataclass(frozen=True)
class Event:
    """An event with a type and an optional payload.

    The payload never contains ``type``; use :meth:`to_dict` for the flat form.
    """

    type: str
    payload: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def of(cls, value: "Event | str | Mapping[str, Any]") -> "Event":
        """Normalize an event given as an Event, a type string or a mapping."""
        if isinstance(value, Event):
            return value
        if isinstance(value, str):
            return cls(value)
        if isinstance(value, Mapping):
            if "type" not in value:
                raise ValueError(f"Event mapping has no 'type': {dict(value)!r}")
            payload = {k: v for k, v in value.items() if k != "type"}
            return cls(value["type"], payload)
        raise TypeError(f"Cannot convert {type(value).__name__} to an event")

    def to_dict(self) -> dict[str, Any]:
        """Return the event as a flat mapping, ``type`` first."""
        return {"type": self.type, **self.payload}

    def __getitem__(self, key: str) -> Any:
        if key == "type":
            return self.type
        return self.payload[key]


INIT_EVENT = Event(INIT_EVENT_TYPE)
