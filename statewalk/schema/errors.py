"""Errors raised while loading machine definitions."""

from ..errors import StatewalkError


class SchemaLoadError(StatewalkError):
    """A definition file or string could not be read as a YAML mapping."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        super().__init__(message if source is None else f"{message} ({source})")


class SchemaValidationError(StatewalkError):
    """A machine definition is malformed.

    ``errors`` holds one ``{"path", "msg", "type"}`` dict per problem, where
    ``path`` locates the offending state node or transition.
    """

    def __init__(self, errors: list[dict]):
        self.errors = errors
        lines = [f"  {err['path']}: {err['msg']}" for err in errors]
        super().__init__(
            f"Invalid machine definition ({len(errors)} error(s)):\n" + "\n".join(lines)
        )
