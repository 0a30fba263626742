"""Event test configuration: sampling events and resolving their executors."""

import logging
from typing import Any, Callable, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..machine import Event
from .invoke import call_hook

logger = logging.getLogger(__name__)

EventExecutor = Callable[..., Any]


class EventTestConfig(BaseModel):
    """How to drive one event type against the system under test.

    ``exec`` is called with ``(test_context, event)``. Each entry of ``cases``
    is a payload; exploration sends one event per case.
    """

    __test__ = False

    model_config = ConfigDict(frozen=True)

    exec: EventExecutor | None = None
    cases: list[dict[str, Any]] | None = None

    @field_validator("cases")
    @classmethod
    def check_cases(cls, cases: list[dict[str, Any]] | None) -> list[dict[str, Any]] | None:
        """The event type comes from the configuration key, never a case."""
        if cases is not None and any("type" in case for case in cases):
            raise ValueError("event cases must not set 'type'")
        return cases


class TestModelOptions(BaseModel):
    """Options for a TestModel.

    ``events`` maps event types to an EventTestConfig; a bare callable is
    shorthand for ``EventTestConfig(exec=callable)``.
    """

    __test__ = False

    events: dict[str, EventTestConfig] = Field(default_factory=dict)

    @field_validator("events", mode="before")
    @classmethod
    def normalize_executors(cls, events: Any) -> Any:
        """Wrap bare executor callables."""
        if not isinstance(events, Mapping):
            return events
        return {
            event_type: {"exec": config} if callable(config) else config
            for event_type, config in events.items()
        }


def get_event_samples(events: Mapping[str, EventTestConfig]) -> list[Event]:
    """Expand an event configuration into representative events.

    Args:
        events: Event test configuration, keyed by event type.

    Returns:
        One event per configured case, or a single bare event for types
        without cases, in configuration order.
    """
    samples: list[Event] = []

    for event_type, config in events.items():
        if config.cases is not None:
            samples.extend(Event(event_type, dict(case)) for case in config.cases)
        else:
            samples.append(Event(event_type))

    return samples


class EventExecutorResolver:
    """Find and run the executor configured for an event's type."""

    def __init__(self, events: Mapping[str, EventTestConfig]):
        self.events = events

    def resolve(self, event: Event) -> EventExecutor | None:
        """Return the executor for ``event``, or None if there is none.

        A type with no configuration at all is logged as a warning.
        """
        config = self.events.get(event.type)

        if config is None:
            logger.warning('Missing config for event "%s".', event.type)
            return None

        return config.exec

    async def execute(self, event: Event, test_context: Any) -> None:
        """Run the executor for ``event``; a missing executor is a no-op."""
        executor = self.resolve(event)

        if executor is not None:
            await call_hook(executor, test_context, event)
