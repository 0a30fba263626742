"""Sequential execution of generated test paths."""

import logging
from typing import TYPE_CHECKING, Any, Callable

from ..errors import StatewalkError
from ..machine import State
from .formatter import describe_error, format_path_trace
from .models import TestPathResult, TestStepResult

if TYPE_CHECKING:
    from .plan import TestPath

logger = logging.getLogger(__name__)

TraceFormatter = Callable[[TestPathResult, State], str]


class PathFailure(StatewalkError):
    """A generated path failed: an assertion or an event executor raised.

    Attributes:
        cause: The exception raised by the failing assertion or executor.
        result: The partial path result up to and including the failure.
        path: The path that was running.
    """

    def __init__(
        self,
        cause: Exception,
        result: TestPathResult,
        path: "TestPath",
        formatter: TraceFormatter = format_path_trace,
    ):
        self.cause = cause
        self.result = result
        self.path = path
        self.formatter = formatter
        super().__init__(self.render())

    def render(self, formatter: TraceFormatter | None = None) -> str:
        """Render the failure with a trace formatter (the default one if None)."""
        formatter = formatter or self.formatter
        return f"{describe_error(self.cause)}\n{formatter(self.result, self.path.target)}"


async def run_path(path: "TestPath", test_context: Any) -> TestPathResult:
    """Run a path's steps in order, then assert its target state.

    Each step asserts its state, then executes its event. The first failure
    stops the path.

    Raises:
        PathFailure: Wrapping the first exception raised.
    """
    result = TestPathResult()
    logger.debug("Running path %s", path.description)

    try:
        for step in path.steps:
            step_result = TestStepResult(step)
            result.steps.append(step_result)

            try:
                await step.test(test_context)
            except Exception as err:
                step_result.state.error = err
                raise

            try:
                await step.exec(test_context)
            except Exception as err:
                step_result.event.error = err
                raise

        try:
            await path.test_target(test_context)
        except Exception as err:
            result.state.error = err
            raise
    except Exception as err:
        raise PathFailure(err, result, path) from err

    return result
