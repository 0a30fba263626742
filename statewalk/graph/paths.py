"""Path search over explored machines: shortest, simple and replayed paths."""

from dataclasses import dataclass
from itertools import pairwise
from typing import Any, Iterable, Mapping

import networkx as nx

from ..machine import Event, Machine, State
from .state_graph import (
    StateGraph,
    TraversalOptions,
    explore,
)


@dataclass(frozen=True)
class Segment:
    """One step of a path: the state before ``event`` fires, and the event."""

    state: State
    event: Event


@dataclass(frozen=True)
class StatePath:
    """A walk from the initial state to ``state``; ``weight`` is its length."""

    state: State
    segments: tuple[Segment, ...]
    weight: int


@dataclass(frozen=True)
class StatePaths:
    """All paths found to one target state."""

    state: State
    paths: tuple[StatePath, ...]


StatePathsMap = dict[str, StatePaths]


def get_shortest_paths(
    machine: Machine,
    events: Iterable[Event],
    options: TraversalOptions | None = None,
) -> StatePathsMap:
    """Find one shortest path to every reachable state.

    Args:
        machine: The machine to explore.
        events: Event samples sent to every visited state.
        options: Traversal options.

    Returns:
        Mapping of serialized state key to the shortest path reaching it, in
        discovery order.
    """
    graph = explore(machine, events, options)
    node_paths = nx.single_source_shortest_path(graph.graph, graph.initial_key)

    result: StatePathsMap = {}
    for key in graph.keys():
        state = graph.get_state(key)
        segments = tuple(
            Segment(graph.get_state(source), graph.get_event(source, target))
            for source, target in pairwise(node_paths[key])
        )
        result[key] = StatePaths(state, (StatePath(state, segments, len(segments)),))

    return result


def get_simple_paths(
    machine: Machine,
    events: Iterable[Event],
    options: TraversalOptions | None = None,
) -> StatePathsMap:
    """Find every path that visits no state twice, for every reachable state.

    Paths that differ only in which of several events connects two states are
    distinct paths.
    """
    graph = explore(machine, events, options)

    result: StatePathsMap = {}
    for key in graph.keys():
        state = graph.get_state(key)
        if key == graph.initial_key:
            paths = (StatePath(state, (), 0),)
        else:
            paths = tuple(
                _edge_path_to_state_path(graph, state, edge_path)
                for edge_path in nx.all_simple_edge_paths(graph.graph, graph.initial_key, key)
            )
        result[key] = StatePaths(state, paths)

    return result


def _edge_path_to_state_path(
    graph: StateGraph, state: State, edge_path: list[tuple[str, str, str]]
) -> StatePath:
    segments = tuple(
        Segment(graph.get_state(source), graph.get_event(source, target, edge_key))
        for source, target, edge_key in edge_path
    )
    return StatePath(state, segments, len(segments))


def get_path_from_events(
    machine: Machine,
    events: Iterable[Event | str | Mapping[str, Any]],
) -> StatePath:
    """Replay a literal event sequence from the initial state.

    An event the current state does not handle is kept as a step that leaves
    the state unchanged.
    """
    state = machine.initial_state
    segments: list[Segment] = []

    for value in events:
        event = Event.of(value)
        segments.append(Segment(state, event))
        state = machine.transition(state, event)

    return StatePath(state, tuple(segments), len(segments))
