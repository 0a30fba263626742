"""Machine states and state-value matching."""

from dataclasses import dataclass
from typing import Any, Union

from ..schema.models import TestMeta
from .event import INIT_EVENT, Event
from .state_node import StateNode

StateValue = Union[str, dict[str, Any]]


def to_state_value(value: StateValue) -> StateValue:
    """Expand dotted strings: ``"a.b.c"`` becomes ``{"a": {"b": "c"}}``."""
    if not isinstance(value, str):
        return value

    keys = value.split(".")
    result: StateValue = keys[-1]
    for key in reversed(keys[:-1]):
        result = {key: result}
    return result


def matches_state(parent: StateValue, child: StateValue) -> bool:
    """Check whether ``child`` is ``parent`` or one of its descendants.

    ``parent`` may be partial: ``"form"`` matches ``{"form": "editing"}``.
    """
    parent = to_state_value(parent)
    child = to_state_value(child)

    if isinstance(child, str):
        return isinstance(parent, str) and parent == child

    if isinstance(parent, str):
        return parent in child

    return all(
        key in child and matches_state(parent_value, child[key])
        for key, parent_value in parent.items()
    )


@dataclass(frozen=True)
class State:
    """A snapshot of a machine: its value, context and active nodes."""

    value: StateValue
    context: dict[str, Any] | None
    configuration: tuple[StateNode, ...]
    event: Event = INIT_EVENT
    changed: bool | None = None

    @property
    def meta(self) -> dict[str, TestMeta]:
        """Metadata of every active node that declares any, keyed by node id."""
        return {
            node.id: node.meta
            for node in self.configuration
            if node.meta is not None
        }

    @property
    def done(self) -> bool:
        """True once a top-level final state is active."""
        return any(
            node.type == "final" and node.parent is not None and node.parent.parent is None
            for node in self.configuration
        )

    def matches(self, value: StateValue) -> bool:
        """Check this state's value against a (partial) state value."""
        return matches_state(value, self.value)
