"""State machine layer: the abstract model that tests are generated from."""

from .event import INIT_EVENT, Event
from .state_node import StateNode, Transition
from .state import State, StateValue, matches_state, to_state_value
from .machine import Machine
from .builder import create_machine, load_machine, load_machine_from_string

__all__ = [
    "INIT_EVENT",
    "Event",
    "StateNode",
    "Transition",
    "State",
    "StateValue",
    "matches_state",
    "to_state_value",
    "Machine",
    "create_machine",
    "load_machine",
    "load_machine_from_string",
]
