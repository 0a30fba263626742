"""State nodes: the static tree a machine is built from."""

from dataclasses import dataclass
from typing import Any, Callable, Iterator

from ..errors import MachineDefinitionError
from ..schema.models import StateNodeConfig, StateType, TestMeta
from .event import Event


class StateNode:
    """A node in a machine's state hierarchy.

    Node ids are dotted paths from the machine id, e.g. ``form.editing.idle``.
    """

    def __init__(
        self,
        key: str,
        config: StateNodeConfig,
        parent: "StateNode | None" = None,
    ):
        self.key = key
        self.parent = parent
        self.id = key if parent is None else f"{parent.id}.{key}"
        self.type: StateType = config.type or "atomic"
        self.meta: TestMeta | None = config.meta
        self.initial_key = config.initial
        self.config = config
        self.order = 0
        self.children: dict[str, StateNode] = {
            child_key: StateNode(child_key, child_config, self)
            for child_key, child_config in config.states.items()
        }
        self.transitions: dict[str, list[Transition]] = {}

    def __repr__(self) -> str:
        return f"StateNode({self.id!r}, type={self.type!r})"

    @property
    def is_atomic(self) -> bool:
        """True for leaf nodes (atomic and final states)."""
        return self.type in ("atomic", "final")

    @property
    def ancestors(self) -> list["StateNode"]:
        """Proper ancestors, nearest first."""
        result = []
        node = self.parent
        while node is not None:
            result.append(node)
            node = node.parent
        return result

    def is_descendant_of(self, other: "StateNode") -> bool:
        """True if ``other`` is a proper ancestor of this node."""
        return other in self.ancestors

    def walk(self) -> Iterator["StateNode"]:
        """Yield this node and all descendants in document order."""
        yield self
        for child in self.children.values():
            yield from child.walk()

    def resolve_child_path(self, path: str) -> "StateNode | None":
        """Resolve a dotted child path such as ``editing.idle``."""
        node: StateNode | None = self
        for key in path.split("."):
            if node is None:
                return None
            node = node.children.get(key)
        return node


@dataclass(eq=False)
class Transition:
    """A resolved transition from ``source`` on ``event_type``."""

    source: StateNode
    event_type: str
    target: StateNode | None
    cond: Callable[..., bool] | None = None
    assign: Callable[..., dict[str, Any]] | None = None

    def enabled(self, context: dict[str, Any] | None, event: Event) -> bool:
        """Check the guard, if any."""
        if self.cond is None:
            return True
        return bool(self.cond(context, event))

    @property
    def domain(self) -> StateNode:
        """The node whose active descendants are exited when this transition fires."""
        if self.target is None:
            raise MachineDefinitionError(
                f"Targetless transition from '{self.source.id}' on '{self.event_type}' has no domain"
            )
        if self.target.is_descendant_of(self.source):
            return self.source
        for ancestor in self.source.ancestors:
            is_root = ancestor.parent is None
            if (ancestor.type == "compound" or is_root) and self.target.is_descendant_of(ancestor):
                return ancestor
        raise MachineDefinitionError(
            f"Transition from '{self.source.id}' to '{self.target.id}' leaves the machine"
        )


def resolve_transitions(node: StateNode, nodes_by_id: dict[str, StateNode]) -> None:
    """Resolve the target references of ``node``'s transitions in place."""
    for event_type, transition_configs in node.config.on.items():
        node.transitions[event_type] = [
            Transition(
                source=node,
                event_type=event_type,
                target=_resolve_target(node, tc.target, nodes_by_id),
                cond=tc.cond,
                assign=tc.assign,
            )
            for tc in transition_configs
        ]


def _resolve_target(
    node: StateNode, target: str | None, nodes_by_id: dict[str, StateNode]
) -> StateNode | None:
    """Resolve ``#id``, ``.child`` and sibling target references."""
    if target is None:
        return None

    if target.startswith("#"):
        resolved = nodes_by_id.get(target[1:])
    elif target.startswith("."):
        resolved = node.resolve_child_path(target[1:])
    elif node.parent is None:
        resolved = node.resolve_child_path(target)
    else:
        resolved = node.parent.resolve_child_path(target)

    if resolved is None:
        raise MachineDefinitionError(
            f"Cannot resolve target '{target}' of a transition from '{node.id}'"
        )
    return resolved
