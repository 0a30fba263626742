"""Load machine definitions from YAML."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import SchemaLoadError, SchemaValidationError
from .models import MachineConfig


def load_yaml(path: str | Path) -> dict:
    """Read a YAML machine definition file into a mapping.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.is_file():
        reason = "Not a file" if path.exists() else "File not found"
        raise SchemaLoadError(reason, str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaLoadError(f"Cannot read file: {e}", str(path)) from e

    return _parse_yaml(text, str(path))


def _parse_yaml(text: str, source: str | None = None) -> dict:
    """Parse definition text; an empty document is an empty mapping."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}", source) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SchemaLoadError(
            f"Expected a machine definition mapping, got {type(data).__name__}", source
        )
    return data


def parse_machine(path: str | Path) -> MachineConfig:
    """Load and validate a machine definition file.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
        SchemaValidationError: If the definition is invalid.
    """
    return parse_machine_config(load_yaml(path))


def parse_machine_from_string(yaml_string: str) -> MachineConfig:
    """Validate a machine definition given as YAML text."""
    return parse_machine_config(_parse_yaml(yaml_string))


def parse_machine_config(data: dict[str, Any]) -> MachineConfig:
    """Validate raw definition data into a MachineConfig.

    Raises:
        SchemaValidationError: If the data fails validation. Each error names
            the node path it was found at, e.g. ``states.editing.on.SUBMIT[0]``.
    """
    try:
        return MachineConfig.model_validate(data)
    except ValidationError as e:
        errors = [
            {"path": node_path(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in e.errors()
        ]
        raise SchemaValidationError(errors) from e


def node_path(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic error location as a definition path.

    ``("states", "editing", "on", "SUBMIT", 0)`` becomes
    ``states.editing.on.SUBMIT[0]``.
    """
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "(root)"
