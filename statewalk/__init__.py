"""statewalk: model-based test generation from state machines."""

from .errors import (
    CoverageError,
    ExplorationLimitError,
    MachineDefinitionError,
    StatewalkError,
    TargetMismatchError,
)
from .graph import TraversalOptions, serialize_state
from .machine import Event, Machine, State, create_machine, load_machine, load_machine_from_string
from .schema import MachineConfig, SchemaLoadError, SchemaValidationError, TestMeta
from .test_model import (
    Coverage,
    PathFailure,
    TestModel,
    TestPath,
    TestPlan,
    TestStep,
    create_model,
)

__version__ = "0.1.0"

__all__ = [
    "CoverageError",
    "ExplorationLimitError",
    "MachineDefinitionError",
    "StatewalkError",
    "TargetMismatchError",
    "TraversalOptions",
    "serialize_state",
    "Event",
    "Machine",
    "State",
    "create_machine",
    "load_machine",
    "load_machine_from_string",
    "MachineConfig",
    "SchemaLoadError",
    "SchemaValidationError",
    "TestMeta",
    "Coverage",
    "PathFailure",
    "TestModel",
    "TestPath",
    "TestPlan",
    "TestStep",
    "create_model",
]
