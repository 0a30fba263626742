"""Coverage of state nodes by executed assertions."""

from dataclasses import dataclass, field
from typing import Callable

from ..errors import CoverageError
from ..machine import Machine, StateNode

StateNodeFilter = Callable[[StateNode], bool]


@dataclass
class Coverage:
    """Assertion execution counts, keyed by state node id."""

    state_nodes: dict[str, int] = field(default_factory=dict)

    @property
    def missing(self) -> list[str]:
        """Ids of state nodes whose assertions never ran."""
        return [node_id for node_id, count in self.state_nodes.items() if not count]

    @property
    def ratio(self) -> float:
        """Fraction of state nodes covered at least once."""
        if not self.state_nodes:
            return 1.0
        return 1 - len(self.missing) / len(self.state_nodes)


class CoverageTracker:
    """Counts how often each state node's assertion has run."""

    def __init__(self):
        self.state_nodes: dict[str, int] = {}

    def record(self, node_id: str) -> None:
        """Count one assertion run for ``node_id``."""
        self.state_nodes[node_id] = self.state_nodes.get(node_id, 0) + 1

    def get_coverage(self, machine: Machine, filter: StateNodeFilter | None = None) -> Coverage:
        """Report counts for every declared state node (optionally filtered).

        Recorded counts are overlaid on zeroes for all declared nodes.
        """
        nodes = machine.state_nodes
        if filter is not None:
            nodes = [node for node in nodes if filter(node)]

        counts = {node.id: 0 for node in nodes}
        counts.update(self.state_nodes)
        return Coverage(counts)

    def test_coverage(self, machine: Machine, filter: StateNodeFilter | None = None) -> None:
        """Raise CoverageError listing every declared node never asserted."""
        missing = self.get_coverage(machine, filter).missing
        if missing:
            raise CoverageError(missing)
