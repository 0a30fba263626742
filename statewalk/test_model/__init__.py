"""Test model: generate, compile and run test plans from a machine."""

from .coverage import Coverage, CoverageTracker
from .events import (
    EventExecutorResolver,
    EventTestConfig,
    TestModelOptions,
    get_event_samples,
)
from .formatter import classify_trace, format_path_trace
from .model import TestModel, create_model
from .models import (
    Outcome,
    StepStatus,
    TestPathResult,
    TestStepResult,
    TraceKind,
    TraceLine,
)
from .plan import TestPath, TestPlan, TestStep
from .runner import PathFailure, run_path

__all__ = [
    "Coverage",
    "CoverageTracker",
    "EventExecutorResolver",
    "EventTestConfig",
    "TestModelOptions",
    "get_event_samples",
    "classify_trace",
    "format_path_trace",
    "TestModel",
    "create_model",
    "Outcome",
    "StepStatus",
    "TestPathResult",
    "TestStepResult",
    "TraceKind",
    "TraceLine",
    "TestPath",
    "TestPlan",
    "TestStep",
    "PathFailure",
    "run_path",
]
