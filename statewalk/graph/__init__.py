"""Graph layer: state-space exploration and path search with networkx."""

from .state_graph import (
    StateGraph,
    TraversalOptions,
    explore,
    serialize_event,
    serialize_state,
)
from .paths import (
    Segment,
    StatePath,
    StatePaths,
    StatePathsMap,
    get_path_from_events,
    get_shortest_paths,
    get_simple_paths,
)

__all__ = [
    "StateGraph",
    "TraversalOptions",
    "explore",
    "serialize_event",
    "serialize_state",
    "Segment",
    "StatePath",
    "StatePaths",
    "StatePathsMap",
    "get_path_from_events",
    "get_shortest_paths",
    "get_simple_paths",
]
