"""Schema layer for declaring and loading machine definitions."""

from .errors import SchemaLoadError, SchemaValidationError
from .models import MachineConfig, StateNodeConfig, TestMeta, TransitionConfig
from .loader import load_yaml, parse_machine, parse_machine_config, parse_machine_from_string

__all__ = [
    "SchemaLoadError",
    "SchemaValidationError",
    "MachineConfig",
    "StateNodeConfig",
    "TestMeta",
    "TransitionConfig",
    "load_yaml",
    "parse_machine",
    "parse_machine_config",
    "parse_machine_from_string",
]
