"""StateGraph wrapper around networkx for explored machines."""

import json
import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator

import networkx as nx

from ..errors import ExplorationLimitError
from ..machine import Event, Machine, State
from ..settings import get_settings

logger = logging.getLogger(__name__)


def serialize_state(state: State) -> str:
    """Return a stable key for a state: its value, plus its context if any."""
    value = json.dumps(state.value, sort_keys=True)
    if state.context is None:
        return value
    return f"{value} | {json.dumps(state.context, sort_keys=True, default=repr)}"


def serialize_event(event: Event) -> str:
    """Return a stable key for an event, payload included."""
    return json.dumps(event.to_dict(), sort_keys=True, default=repr)


@dataclass
class TraversalOptions:
    """Options controlling state-space exploration.

    Attributes:
        serialize_state: Maps a state to the key that identifies it. States
            with equal keys are treated as the same graph node.
        filter: If given, states for which it returns False are not visited.
            The initial state is always visited.
        max_states: Exploration bound; defaults to the ``max_states`` setting.
    """

    serialize_state: Callable[[State], str] = serialize_state
    filter: Callable[[State], bool] | None = None
    max_states: int | None = None


class StateGraph:
    """A directed multigraph of explored machine states.

    Nodes are serialized state keys carrying the first State seen for that key;
    edges carry the Event that moves between them, one edge per distinct event.
    """

    def __init__(self, serialize: Callable[[State], str] = serialize_state):
        """Initialize an empty state graph."""
        self._graph = nx.MultiDiGraph()
        self.serialize = serialize
        self.initial_key: str | None = None

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, key: str) -> bool:
        return self._graph.has_node(key)

    # -------------------------------------------------------------------------
    # Node and edge management
    # -------------------------------------------------------------------------

    def add_state(self, state: State) -> str:
        """Add a state node if its key is new.

        Returns:
            The node key.
        """
        key = self.serialize(state)
        if not self._graph.has_node(key):
            self._graph.add_node(key, state=state)
            if self.initial_key is None:
                self.initial_key = key
        return key

    def add_transition(self, source_key: str, target_key: str, event: Event) -> None:
        """Add an edge for ``event`` between two existing state nodes."""
        self._graph.add_edge(source_key, target_key, key=serialize_event(event), event=event)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def keys(self) -> list[str]:
        """State keys in discovery order."""
        return list(self._graph.nodes)

    def get_state(self, key: str) -> State:
        """Get the state stored for a key."""
        return self._graph.nodes[key]["state"]

    def get_event(self, source_key: str, target_key: str, edge_key: str | None = None) -> Event:
        """Get the event on an edge; the first one added if ``edge_key`` is None."""
        edges = self._graph.get_edge_data(source_key, target_key)
        if edge_key is None:
            edge_key = next(iter(edges))
        return edges[edge_key]["event"]

    def transitions_from(self, key: str) -> Iterator[tuple[str, Event]]:
        """Yield ``(target_key, event)`` for every edge leaving ``key``."""
        for _, target, data in self._graph.out_edges(key, data=True):
            yield target, data["event"]


def explore(
    machine: Machine,
    events: Iterable[Event],
    options: TraversalOptions | None = None,
) -> StateGraph:
    """Explore every state reachable from the initial state via ``events``.

    Breadth-first; each event sample is sent to each visited state, and only
    events that some transition handles produce an edge.

    Raises:
        ExplorationLimitError: If more than ``max_states`` states are found.
    """
    options = options or TraversalOptions()
    max_states = options.max_states or get_settings().max_states
    events = list(events)

    graph = StateGraph(options.serialize_state)
    initial_key = graph.add_state(machine.initial_state)

    queue: deque[str] = deque([initial_key])

    while queue:
        key = queue.popleft()
        state = graph.get_state(key)

        for event in events:
            next_state = machine.transition(state, event)
            if not next_state.changed:
                continue
            if options.filter is not None and not options.filter(next_state):
                continue

            next_key = options.serialize_state(next_state)
            if next_key not in graph:
                if len(graph) >= max_states:
                    raise ExplorationLimitError(max_states)
                graph.add_state(next_state)
                queue.append(next_key)

            graph.add_transition(key, next_key, event)

    logger.debug(
        "Explored %s: %d states, %d transitions",
        machine.id,
        len(graph),
        graph.graph.number_of_edges(),
    )
    return graph
