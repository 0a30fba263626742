"""Exceptions raised by statewalk."""

import json
from typing import Any


class StatewalkError(Exception):
    """Base class for all statewalk errors."""


class MachineDefinitionError(StatewalkError):
    """Raised when a machine definition cannot be turned into a machine."""


class ExplorationLimitError(StatewalkError):
    """Raised when state-space exploration exceeds the configured bound."""

    def __init__(self, max_states: int):
        self.max_states = max_states
        super().__init__(
            f"Exploration exceeded {max_states} states; "
            "narrow the event cases or pass a traversal filter"
        )


class TargetMismatchError(StatewalkError):
    """Raised when a replayed event sequence ends outside the expected target."""

    def __init__(self, actual: Any, expected: Any):
        self.actual = actual
        self.expected = expected
        super().__init__(
            f"The last state {json.dumps(actual, default=repr)} "
            f"does not match the target: {json.dumps(expected, default=repr)}"
        )


class CoverageError(StatewalkError):
    """Raised when declared state nodes were never asserted."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            "Missing coverage for state nodes:\n"
            + "\n".join(f"\t{node_id}" for node_id in missing)
        )
