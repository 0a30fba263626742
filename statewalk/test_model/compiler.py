"""Compile raw machine paths into executable test plans."""

import json
import logging
from typing import TYPE_CHECKING

from ..graph import StatePath, StatePathsMap
from ..machine import Event, State
from .plan import TestPath, TestPlan, TestStep

if TYPE_CHECKING:
    from .model import TestModel

logger = logging.getLogger(__name__)


def describe_state(state: State) -> str:
    """Describe the active leaf states of ``state``.

    Leaves without test metadata render as ``"#<id>"``. Otherwise the
    metadata's description is used: called with the state if it is callable,
    quoted if it is a string, and the state value is shown if there is none.
    The context is appended in parentheses when the state has one.
    """
    meta = state.meta
    descriptions = []

    for node in state.configuration:
        if not node.is_atomic:
            continue

        node_meta = meta.get(node.id)
        if node_meta is None:
            descriptions.append(f'"#{node.id}"')
        elif callable(node_meta.description):
            descriptions.append(node_meta.description(state))
        elif node_meta.description:
            descriptions.append(f'"{node_meta.description}"')
        else:
            descriptions.append(json.dumps(state.value, default=repr))

    label = "state" if len(descriptions) == 1 else "states"
    text = f"{label}: {', '.join(descriptions)}"

    if state.context is not None:
        text += f" ({json.dumps(state.context, default=repr)})"

    return text


def describe_event(event: Event) -> str:
    """Describe an event: its type, then its payload if it has one."""
    if not event.payload:
        return event.type
    return f"{event.type} ({json.dumps(dict(event.payload), default=repr)})"


def describe_path(path: StatePath) -> str:
    """Describe the chain of events a path sends."""
    if not path.segments:
        return "via (initial state)"
    return "via " + " → ".join(describe_event(s.event) for s in path.segments)


def compile_path(model: "TestModel", path: StatePath, target: State) -> TestPath:
    """Compile one raw path; ``target`` is the state its plan asserts last."""
    steps = tuple(
        TestStep(
            state=segment.state,
            event=segment.event,
            description=describe_state(segment.state),
            model=model,
        )
        for segment in path.segments
    )
    return TestPath(
        state=path.state,
        steps=steps,
        weight=path.weight,
        description=describe_path(path),
        target=target,
        model=model,
    )


def compile_plans(model: "TestModel", state_paths_map: StatePathsMap) -> list[TestPlan]:
    """Compile a state-paths map into one test plan per target state.

    Args:
        model: The test model whose assertions and executors the plans run.
        state_paths_map: Raw paths keyed by serialized target state.

    Returns:
        Test plans, in the order of the map.
    """
    plans = []

    for key, state_paths in state_paths_map.items():
        paths = tuple(
            compile_path(model, path, state_paths.state)
            for path in state_paths.paths
        )
        plans.append(
            TestPlan(
                key=key,
                state=state_paths.state,
                paths=paths,
                description=f"reaches {describe_state(state_paths.state)}",
            )
        )

    logger.debug("Compiled %d test plans", len(plans))
    return plans
