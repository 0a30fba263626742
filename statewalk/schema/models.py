"""Pydantic models for statewalk machine definitions."""

from typing import Any, Callable, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .importing import resolve_hook

StateType = Literal["atomic", "compound", "parallel", "final"]


class TestMeta(BaseModel):
    """Test metadata attached to a state node.

    ``test`` is called with ``(test_context, state)`` whenever a state with this
    node active is asserted. ``description`` is either a literal string or a
    callable receiving the state.
    """

    __test__ = False

    model_config = ConfigDict(extra="allow")

    test: Callable[..., Any] | None = None
    skip: bool = False
    description: str | Callable[..., str] | None = None

    @field_validator("test", mode="before")
    @classmethod
    def import_test(cls, value: Any) -> Any:
        """Allow ``test`` to be given as an import path."""
        return resolve_hook(value)


class TransitionConfig(BaseModel):
    """A transition taken when the owning state node receives an event."""

    target: str | None = None
    cond: Callable[..., bool] | None = None
    assign: Callable[..., dict[str, Any]] | None = None

    @field_validator("cond", "assign", mode="before")
    @classmethod
    def import_hooks(cls, value: Any) -> Any:
        """Allow guards and context updates to be given as import paths."""
        return resolve_hook(value)


class StateNodeConfig(BaseModel):
    """A state node and, recursively, its child states."""

    type: StateType | None = None
    initial: str | None = None
    states: dict[str, "StateNodeConfig"] = Field(default_factory=dict)
    on: dict[str, list[TransitionConfig]] = Field(default_factory=dict)
    meta: TestMeta | None = None

    @model_validator(mode="before")
    @classmethod
    def normalize_transitions(cls, data: Any) -> Any:
        """Normalize shorthand transitions.

        ``on: {NEXT: b}`` becomes ``on: {NEXT: [{target: b}]}``; a single mapping
        is wrapped in a list and ``None`` means a targetless transition.
        """
        if not isinstance(data, dict):
            return data

        on = data.get("on")
        if not isinstance(on, dict):
            return data

        normalized = {}
        for event_type, transitions in on.items():
            if transitions is None or isinstance(transitions, (str, dict)):
                transitions = [transitions]
            if isinstance(transitions, list):
                transitions = [
                    {"target": t} if t is None or isinstance(t, str) else t
                    for t in transitions
                ]
            normalized[event_type] = transitions

        return {**data, "on": normalized}

    @model_validator(mode="after")
    def check_structure(self) -> "StateNodeConfig":
        """Infer the node type and check initial states."""
        if self.type is None:
            self.type = "compound" if self.states else "atomic"

        if self.type in ("atomic", "final") and self.states:
            raise ValueError(f"{self.type} state cannot have child states")

        if self.type == "compound":
            if not self.states:
                raise ValueError("compound state must have child states")
            if self.initial is None:
                raise ValueError("compound state must declare an initial state")
            if self.initial not in self.states:
                raise ValueError(f"initial state '{self.initial}' is not a child state")

        if self.type == "parallel" and not self.states:
            raise ValueError("parallel state must have child states")

        return self


class MachineConfig(StateNodeConfig):
    """Root of a machine definition."""

    id: str = "machine"
    context: dict[str, Any] | None = None

    @field_validator("id")
    @classmethod
    def check_id(cls, value: str) -> str:
        """Machine ids are used as node id prefixes."""
        if not value or "." in value or value.startswith("#"):
            raise ValueError("machine id must be a non-empty name without '.' or '#'")
        return value
