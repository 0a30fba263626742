"""Execution results for generated test paths."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .plan import TestStep


@dataclass
class Outcome:
    """Whether an assertion or an event executor failed, and how."""

    error: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class TestStepResult:
    """Result of one step: its state assertion and its event executor."""

    __test__ = False

    step: "TestStep"
    state: Outcome = field(default_factory=Outcome)
    event: Outcome = field(default_factory=Outcome)


@dataclass
class TestPathResult:
    """Result of a path: every step run so far, then the target assertion."""

    __test__ = False

    steps: list[TestStepResult] = field(default_factory=list)
    state: Outcome = field(default_factory=Outcome)

    @property
    def passed(self) -> bool:
        """True if nothing in the path failed."""
        return not self.state.failed and not any(
            s.state.failed or s.event.failed for s in self.steps
        )


class StepStatus(Enum):
    """Status of one line in a failure trace."""

    PASSED = "passed"
    FAILED = "failed"
    UNKNOWN = "unknown"  # Not reached: an earlier entry failed


class TraceKind(Enum):
    """What a trace line describes."""

    STATE = "state"
    EVENT = "event"
    TARGET = "target"


@dataclass(frozen=True)
class TraceLine:
    """One rendered entry of a failure trace."""

    kind: TraceKind
    text: str
    status: StepStatus

    @property
    def label(self) -> str:
        return "Event" if self.kind is TraceKind.EVENT else "State"
