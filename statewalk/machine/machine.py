"""A minimal hierarchical state machine used as the abstract test model."""

import copy
from dataclasses import replace
from typing import Any, Mapping

from ..errors import MachineDefinitionError
from ..schema.models import MachineConfig
from .event import Event
from .state import State, StateValue, matches_state
from .state_node import StateNode, Transition, resolve_transitions


class Machine:
    """A state machine built from a :class:`MachineConfig`.

    Supports atomic, compound, parallel and final states, guarded transitions
    and context updates. Transitions are pure: :meth:`transition` returns a new
    :class:`State` and never mutates its input.
    """

    def __init__(self, config: MachineConfig):
        self.config = config
        self.id = config.id
        self.root = StateNode(config.id, config)

        self._nodes_by_id: dict[str, StateNode] = {}
        for order, node in enumerate(self.root.walk()):
            node.order = order
            if node.id in self._nodes_by_id:
                raise MachineDefinitionError(f"Duplicate state node id '{node.id}'")
            self._nodes_by_id[node.id] = node

        for node in self._nodes_by_id.values():
            resolve_transitions(node, self._nodes_by_id)

    def __repr__(self) -> str:
        return f"Machine({self.id!r})"

    @property
    def state_nodes(self) -> list[StateNode]:
        """All state nodes except the root, in document order."""
        return [node for node in self._nodes_by_id.values() if node is not self.root]

    def get_state_node_by_id(self, node_id: str) -> StateNode:
        """Look up a state node by its full id."""
        try:
            return self._nodes_by_id[node_id]
        except KeyError:
            raise MachineDefinitionError(f"Unknown state node id '{node_id}'") from None

    @property
    def initial_state(self) -> State:
        """The state the machine starts in."""
        configuration = self._complete({self.root})
        return self._make_state(
            configuration,
            copy.deepcopy(self.config.context),
        )

    def transition(self, state: State, event: Event | str | Mapping[str, Any]) -> State:
        """Compute the state reached from ``state`` on ``event``.

        If no enabled transition handles the event, the returned state has
        ``changed`` set to False and is otherwise equal to ``state``.
        """
        event = Event.of(event)
        selected = self._select_transitions(state, event)

        if not selected:
            return replace(state, event=event, changed=False)

        configuration = set(state.configuration)
        context = state.context

        for transition in selected:
            if transition.source not in configuration:
                continue

            if transition.target is not None:
                domain = transition.domain
                exits = {node for node in configuration if node.is_descendant_of(domain)}
                entries = {transition.target}
                entries.update(
                    node for node in transition.target.ancestors
                    if node.is_descendant_of(domain)
                )
                configuration = self._complete((configuration - exits) | entries)

            if transition.assign is not None:
                context = {**(context or {}), **transition.assign(context, event)}

        return self._make_state(configuration, context, event=event, changed=True)

    def matches(self, parent: StateValue, child: StateValue) -> bool:
        """Check whether state value ``child`` matches ``parent``."""
        return matches_state(parent, child)

    def _select_transitions(self, state: State, event: Event) -> list[Transition]:
        """Pick at most one enabled transition per active leaf, innermost first."""
        selected: list[Transition] = []

        for leaf in state.configuration:
            if not leaf.is_atomic:
                continue
            for node in [leaf, *leaf.ancestors]:
                chosen = next(
                    (
                        t for t in node.transitions.get(event.type, [])
                        if t.enabled(state.context, event)
                    ),
                    None,
                )
                if chosen is not None:
                    if chosen not in selected:
                        selected.append(chosen)
                    break

        return selected

    def _complete(self, nodes: set[StateNode]) -> set[StateNode]:
        """Enter default descendants until every active non-leaf is filled."""
        result = set(nodes)
        pending = list(result)

        while pending:
            node = pending.pop()
            if node.type == "compound":
                if not any(child in result for child in node.children.values()):
                    child = node.children[node.initial_key]
                    result.add(child)
                    pending.append(child)
            elif node.type == "parallel":
                for child in node.children.values():
                    if child not in result:
                        result.add(child)
                        pending.append(child)

        return result

    def _make_state(
        self,
        configuration: set[StateNode],
        context: dict[str, Any] | None,
        event: Event | None = None,
        changed: bool | None = None,
    ) -> State:
        ordered = tuple(sorted(configuration, key=lambda node: node.order))
        kwargs: dict[str, Any] = {}
        if event is not None:
            kwargs["event"] = event
        return State(
            value=_state_value(self.root, configuration),
            context=context,
            configuration=ordered,
            changed=changed,
            **kwargs,
        )


def _state_value(node: StateNode, configuration: set[StateNode]) -> StateValue:
    """Compute the state value of the active subtree under ``node``."""
    if not node.children:
        return node.key

    if node.type == "parallel":
        return {
            child.key: _state_value(child, configuration) if child.children else {}
            for child in node.children.values()
        }

    active = next(child for child in node.children.values() if child in configuration)
    if not active.children:
        return active.key
    return {active.key: _state_value(active, configuration)}
