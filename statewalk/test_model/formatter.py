"""Rendering of failure traces for generated test paths."""

import json
import os
import sys
from functools import reduce
from typing import Any

import click

from ..machine import Event, State
from ..settings import get_settings
from .models import StepStatus, TestPathResult, TraceKind, TraceLine

_COLORS = {
    (TraceKind.STATE, StepStatus.PASSED): "bright_green",
    (TraceKind.STATE, StepStatus.FAILED): "bright_red",
    (TraceKind.EVENT, StepStatus.PASSED): "green",
    (TraceKind.EVENT, StepStatus.FAILED): "red",
    (TraceKind.TARGET, StepStatus.PASSED): "green",
    (TraceKind.TARGET, StepStatus.FAILED): "red",
}
_UNKNOWN_COLOR = "bright_black"


def format_state(state: State) -> str:
    """Render a state value, followed by its context when it has one."""
    text = json.dumps(state.value, default=repr)
    if state.context is not None:
        text += f" {json.dumps(state.context, default=repr)}"
    return text


def format_event(event: Event) -> str:
    """Render an event as a flat JSON object."""
    return json.dumps(event.to_dict(), default=repr)


def classify_trace(result: TestPathResult, target: State) -> tuple[TraceLine, ...]:
    """Classify every entry of a path result as passed, failed or unknown.

    Entries after the first failure are unknown: execution stopped there.
    """
    entries: list[tuple[TraceKind, str, Exception | None]] = []
    for step_result in result.steps:
        entries.append((TraceKind.STATE, format_state(step_result.step.state), step_result.state.error))
        entries.append((TraceKind.EVENT, format_event(step_result.step.event), step_result.event.error))
    entries.append((TraceKind.TARGET, format_state(target), result.state.error))

    def fold(
        acc: tuple[tuple[TraceLine, ...], bool],
        entry: tuple[TraceKind, str, Exception | None],
    ) -> tuple[tuple[TraceLine, ...], bool]:
        lines, failed = acc
        kind, text, error = entry
        if failed:
            status = StepStatus.UNKNOWN
        elif error is not None:
            status = StepStatus.FAILED
        else:
            status = StepStatus.PASSED
        return lines + (TraceLine(kind, text, status),), failed or error is not None

    lines, _ = reduce(fold, entries, ((), False))
    return lines


def use_color(color: bool | None = None) -> bool:
    """Decide whether to emit ANSI colors.

    An explicit ``color`` wins; otherwise the ``color`` setting decides, and in
    ``auto`` mode colors are used when stderr is a terminal and ``NO_COLOR`` is
    unset.
    """
    if color is not None:
        return color

    mode = get_settings().color
    if mode == "always":
        return True
    if mode == "never":
        return False
    return "NO_COLOR" not in os.environ and sys.stderr.isatty()


def style_line(line: TraceLine, color: bool) -> str:
    """Render one trace line, tab-indented."""
    text = line.text
    if color:
        fg = _COLORS.get((line.kind, line.status), _UNKNOWN_COLOR)
        text = click.style(text, fg=fg)
    return f"\t{line.label}: {text}"


def format_path_trace(
    result: TestPathResult,
    target: State,
    color: bool | None = None,
) -> str:
    """Render the state/event walk of a path result.

    Each step renders as a ``State:``/``Event:`` pair; the target state comes
    last.

    Args:
        result: The (possibly partial) result of running a path.
        target: The state the path was meant to reach.
        color: Force colors on or off; None defers to settings.

    Returns:
        The trace, starting with a ``Path:`` header line.
    """
    colored = use_color(color)
    lines = [style_line(line, colored) for line in classify_trace(result, target)]

    blocks = ["\n".join(lines[i:i + 2]) for i in range(0, len(lines) - 1, 2)]
    blocks.append(lines[-1])

    return "Path:\n" + "\n\n".join(blocks)


def describe_error(error: Any) -> str:
    """Render an exception for the first line of a failure message."""
    return str(error) or type(error).__name__
