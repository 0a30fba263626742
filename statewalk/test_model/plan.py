"""Executable test plans compiled from machine paths."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..machine import Event, State
from .models import TestPathResult
from .runner import run_path

if TYPE_CHECKING:
    from .model import TestModel


@dataclass(frozen=True)
class TestStep:
    """A step of a path: assert ``state``, then send ``event`` to the SUT."""

    __test__ = False

    state: State
    event: Event
    description: str
    model: "TestModel" = field(repr=False, compare=False)

    async def test(self, test_context: Any) -> None:
        """Run the assertions of the state this step starts in."""
        await self.model.test_state(self.state, test_context)

    async def exec(self, test_context: Any) -> None:
        """Run the executor configured for this step's event."""
        await self.model.execute_event(self.event, test_context)


@dataclass(frozen=True)
class TestPath:
    """A sequence of steps that ends in ``state``."""

    __test__ = False

    state: State
    steps: tuple[TestStep, ...]
    weight: int
    description: str
    target: State = field(repr=False)
    model: "TestModel" = field(repr=False, compare=False)

    async def test_target(self, test_context: Any) -> None:
        """Assert the state this path's plan targets."""
        await self.model.test_state(self.target, test_context)

    async def test(self, test_context: Any) -> TestPathResult:
        """Run every step in order, then assert the target state.

        Raises:
            PathFailure: If any assertion or executor raises.
        """
        return await run_path(self, test_context)


@dataclass(frozen=True)
class TestPlan:
    """All paths found to one target state."""

    __test__ = False

    key: str
    state: State
    paths: tuple[TestPath, ...]
    description: str

    async def test(self, test_context: Any) -> list[TestPathResult]:
        """Run every path in order; the first failure propagates."""
        results = []
        for path in self.paths:
            results.append(await path.test(test_context))
        return results
