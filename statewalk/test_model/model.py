"""The TestModel: generate, compile and run tests from a machine."""

import json
from typing import Any, Iterable, Mapping

from ..errors import TargetMismatchError
from ..graph import (
    StatePaths,
    StatePathsMap,
    TraversalOptions,
    get_path_from_events,
    get_shortest_paths,
    get_simple_paths,
)
from ..machine import Event, Machine, State
from .compiler import compile_plans
from .coverage import Coverage, CoverageTracker, StateNodeFilter
from .events import (
    EventExecutor,
    EventExecutorResolver,
    EventTestConfig,
    TestModelOptions,
    get_event_samples,
)
from .invoke import call_hook
from .plan import TestPlan
from .planner import Target, filter_plans_to, select_shortest, target_predicate

EventsConfig = Mapping[str, EventTestConfig | EventExecutor | Mapping[str, Any]]


class TestModel:
    """An abstract model of a system under test (SUT).

    The model generates test plans that check every state of ``machine`` is
    reachable in the SUT. Event executors drive the SUT; state metadata
    ``test`` hooks assert it.

    Example::

        model = create_model(toggle_machine, events={
            "TOGGLE": {"exec": lambda page, event: page.click("input")},
        })
        for plan in model.get_shortest_path_plans():
            await plan.test(page)
        model.test_coverage()
    """

    __test__ = False

    def __init__(
        self,
        machine: Machine,
        options: TestModelOptions | Mapping[str, Any] | None = None,
    ):
        if options is None:
            options = TestModelOptions()
        elif not isinstance(options, TestModelOptions):
            options = TestModelOptions.model_validate(options)

        self.machine = machine
        self.options = options
        self.coverage = CoverageTracker()
        self._executors = EventExecutorResolver(options.events)

    def __repr__(self) -> str:
        return f"TestModel({self.machine!r}, events={list(self.options.events)})"

    # -------------------------------------------------------------------------
    # Plans
    # -------------------------------------------------------------------------

    def get_shortest_path_plans(self, options: TraversalOptions | None = None) -> list[TestPlan]:
        """One plan per reachable state, each with a shortest path to it."""
        state_paths = get_shortest_paths(
            self.machine, get_event_samples(self.options.events), options
        )
        return self.get_test_plans(state_paths)

    def get_shortest_path_plans_to(self, target: Target) -> list[TestPlan]:
        """Shortest-path plans to states matching ``target``.

        Only the plans at the minimum weight among the matches are returned;
        ties keep every plan at that weight.
        """
        plans = filter_plans_to(self.machine, target, self.get_shortest_path_plans())
        return select_shortest(plans)

    def get_simple_path_plans(self, options: TraversalOptions | None = None) -> list[TestPlan]:
        """One plan per reachable state, with every simple path to it."""
        state_paths = get_simple_paths(
            self.machine, get_event_samples(self.options.events), options
        )
        return self.get_test_plans(state_paths)

    def get_simple_path_plans_to(self, target: Target) -> list[TestPlan]:
        """Simple-path plans to states matching ``target``."""
        return filter_plans_to(self.machine, target, self.get_simple_path_plans())

    def get_plan_from_events(
        self,
        events: Iterable[Event | str | Mapping[str, Any]],
        *,
        target: Target,
    ) -> TestPlan:
        """Build a plan that replays a literal event sequence.

        Only the final state is checked against ``target``; intermediate
        states are asserted when the plan runs.

        Raises:
            TargetMismatchError: If the final state does not match ``target``.
        """
        path = get_path_from_events(self.machine, events)

        if not target_predicate(self.machine, target)(path.state):
            raise TargetMismatchError(path.state.value, target)

        key = json.dumps(path.state.value, sort_keys=True)
        return self.get_test_plans({key: StatePaths(path.state, (path,))})[0]

    def get_test_plans(self, state_paths_map: StatePathsMap) -> list[TestPlan]:
        """Compile raw paths into test plans bound to this model."""
        return compile_plans(self, state_paths_map)

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    async def test_state(self, state: State, test_context: Any) -> None:
        """Run the ``test`` hook of every active node in ``state``.

        Hooks marked ``skip`` are neither run nor counted for coverage.
        """
        for node_id, meta in state.meta.items():
            if meta.test is None or meta.skip:
                continue

            self.coverage.record(node_id)
            await call_hook(meta.test, test_context, state)

    def get_event_executor(self, event: Event | str | Mapping[str, Any]) -> EventExecutor | None:
        """Return the executor configured for the event's type, if any."""
        return self._executors.resolve(Event.of(event))

    async def execute_event(self, event: Event | str | Mapping[str, Any], test_context: Any) -> None:
        """Run the executor configured for the event's type, if any."""
        await self._executors.execute(Event.of(event), test_context)

    # -------------------------------------------------------------------------
    # Coverage
    # -------------------------------------------------------------------------

    def get_coverage(self, filter: StateNodeFilter | None = None) -> Coverage:
        """Assertion counts for the machine's state nodes."""
        return self.coverage.get_coverage(self.machine, filter)

    def test_coverage(self, filter: StateNodeFilter | None = None) -> None:
        """Raise CoverageError if any (filtered) state node was never asserted."""
        self.coverage.test_coverage(self.machine, filter)

    def with_events(self, events: EventsConfig) -> "TestModel":
        """Return a new model for the same machine with a different event config."""
        return TestModel(self.machine, {"events": events})


def create_model(machine: Machine, events: EventsConfig | None = None) -> TestModel:
    """Create a test model for ``machine``.

    Args:
        machine: The state machine representing the abstract model.
        events: Maps event types (e.g. ``"SUBMIT"``) to an executor, or to an
            event test config such as ``{"exec": fn, "cases": [...]}``.
    """
    return TestModel(machine, {"events": events or {}})
