"""Shared fixtures for tests."""

import pytest

from statewalk.machine import create_machine, load_machine_from_string
from statewalk.settings import get_settings


class Recorder:
    """Collects calls made by state assertions and event executors."""

    def __init__(self):
        self.calls: list[tuple[str, str]] = []

    def assertion(self, name: str):
        def test(test_context, state):
            self.calls.append(("test", name))

        return test

    def executor(self, name: str):
        async def exec_(test_context, event):
            self.calls.append(("exec", name))

        return exec_


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    """Disable colors unless a test asks for them."""
    monkeypatch.setenv("STATEWALK_COLOR", "never")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def toggle_machine(recorder):
    """Two states, inactive and active, toggled by TOGGLE."""
    return create_machine({
        "id": "toggle",
        "initial": "inactive",
        "states": {
            "inactive": {
                "on": {"TOGGLE": "active"},
                "meta": {"test": recorder.assertion("inactive")},
            },
            "active": {
                "on": {"TOGGLE": "inactive"},
                "meta": {"test": recorder.assertion("active")},
            },
        },
    })


@pytest.fixture
def form_machine_yaml() -> str:
    """A hierarchical form machine with a final state."""
    return """
id: form
initial: editing
states:
  editing:
    initial: pristine
    states:
      pristine:
        on:
          TYPE: dirty
      dirty:
        on:
          CLEAR: pristine
    on:
      SUBMIT: submitted
  submitted:
    type: final
"""


@pytest.fixture
def form_machine(form_machine_yaml):
    return load_machine_from_string(form_machine_yaml)


@pytest.fixture
def player_machine():
    """A parallel machine: playback and volume regions."""
    return create_machine({
        "id": "player",
        "type": "parallel",
        "states": {
            "playback": {
                "initial": "paused",
                "states": {
                    "paused": {"on": {"PLAY": "playing"}},
                    "playing": {"on": {"PAUSE": "paused"}},
                },
            },
            "volume": {
                "initial": "normal",
                "states": {
                    "normal": {"on": {"MUTE": "muted"}},
                    "muted": {"on": {"UNMUTE": "normal"}},
                },
            },
        },
    })


@pytest.fixture
def counter_machine():
    """A machine with context: INC increments up to a limit of 2."""
    return create_machine({
        "id": "counter",
        "initial": "counting",
        "context": {"count": 0},
        "states": {
            "counting": {
                "on": {
                    "INC": {
                        "cond": lambda ctx, event: ctx["count"] < 2,
                        "assign": lambda ctx, event: {"count": ctx["count"] + event.payload.get("by", 1)},
                    },
                    "DONE": "finished",
                },
            },
            "finished": {"type": "final"},
        },
    })
