"""Build machines from definitions."""

from pathlib import Path
from typing import Any

from ..schema.loader import parse_machine, parse_machine_config, parse_machine_from_string
from ..schema.models import MachineConfig
from .machine import Machine


def create_machine(config: MachineConfig | dict[str, Any]) -> Machine:
    """Build a Machine from a MachineConfig or a raw definition mapping.

    Args:
        config: A validated MachineConfig, or a mapping in the same shape as
            the YAML format (callables may be used in place of import paths).

    Returns:
        The built Machine.

    Raises:
        SchemaValidationError: If a raw mapping fails validation.
        MachineDefinitionError: If a transition target cannot be resolved.
    """
    if not isinstance(config, MachineConfig):
        config = parse_machine_config(config)
    return Machine(config)


def load_machine(path: str | Path) -> Machine:
    """Load a YAML machine definition file and build the machine."""
    return Machine(parse_machine(path))


def load_machine_from_string(yaml_string: str) -> Machine:
    """Build a machine from a YAML definition string."""
    return Machine(parse_machine_from_string(yaml_string))
