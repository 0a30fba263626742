"""Tests for Machine."""

import pytest

from statewalk.errors import MachineDefinitionError
from statewalk.machine import Event, create_machine


class TestInitialState:
    def test_atomic_initial(self, toggle_machine):
        state = toggle_machine.initial_state
        assert state.value == "inactive"
        assert state.context is None
        assert state.event.type == "statewalk.init"

    def test_compound_initial(self, form_machine):
        assert form_machine.initial_state.value == {"editing": "pristine"}

    def test_parallel_initial(self, player_machine):
        assert player_machine.initial_state.value == {
            "playback": "paused",
            "volume": "normal",
        }

    def test_configuration_in_document_order(self, form_machine):
        ids = [node.id for node in form_machine.initial_state.configuration]
        assert ids == ["form", "form.editing", "form.editing.pristine"]

    def test_initial_context_is_a_copy(self, counter_machine):
        first = counter_machine.initial_state
        first.context["count"] = 99
        assert counter_machine.initial_state.context == {"count": 0}


class TestTransition:
    def test_sibling_target(self, toggle_machine):
        state = toggle_machine.transition(toggle_machine.initial_state, "TOGGLE")
        assert state.value == "active"
        assert state.changed is True
        assert state.event == Event("TOGGLE")

    def test_unhandled_event(self, toggle_machine):
        initial = toggle_machine.initial_state
        state = toggle_machine.transition(initial, "UNKNOWN")
        assert state.changed is False
        assert state.value == initial.value

    def test_parent_handles_event(self, form_machine):
        dirty = form_machine.transition(form_machine.initial_state, "TYPE")
        assert dirty.value == {"editing": "dirty"}

        submitted = form_machine.transition(dirty, "SUBMIT")
        assert submitted.value == "submitted"
        assert submitted.done

    def test_parallel_regions_are_independent(self, player_machine):
        state = player_machine.transition(player_machine.initial_state, "PLAY")
        state = player_machine.transition(state, {"type": "MUTE"})
        assert state.value == {"playback": "playing", "volume": "muted"}

    def test_guard_and_assign(self, counter_machine):
        state = counter_machine.initial_state
        state = counter_machine.transition(state, "INC")
        state = counter_machine.transition(state, Event("INC", {"by": 1}))
        assert state.context == {"count": 2}

        blocked = counter_machine.transition(state, "INC")
        assert blocked.changed is False
        assert blocked.context == {"count": 2}

    def test_transition_does_not_mutate_input(self, counter_machine):
        initial = counter_machine.initial_state
        counter_machine.transition(initial, "INC")
        assert initial.context == {"count": 0}

    def test_targetless_transition_keeps_value(self):
        machine = create_machine({
            "initial": "idle",
            "context": {"pings": 0},
            "states": {
                "idle": {
                    "on": {
                        "PING": {
                            "assign": lambda ctx, e: {"pings": ctx["pings"] + 1},
                        },
                    },
                },
            },
        })
        state = machine.transition(machine.initial_state, "PING")
        assert state.value == "idle"
        assert state.context == {"pings": 1}
        assert state.changed is True

    def test_id_and_child_targets(self):
        machine = create_machine({
            "id": "app",
            "initial": "home",
            "states": {
                "home": {"on": {"OPEN": "#app.settings.audio"}},
                "settings": {
                    "initial": "general",
                    "states": {"general": {}, "audio": {}},
                    "on": {"GENERAL": ".general"},
                },
            },
        })
        state = machine.transition(machine.initial_state, "OPEN")
        assert state.value == {"settings": "audio"}

        state = machine.transition(state, "GENERAL")
        assert state.value == {"settings": "general"}


class TestMachineDefinition:
    def test_unresolved_target(self):
        with pytest.raises(MachineDefinitionError, match="nowhere"):
            create_machine({"initial": "a", "states": {"a": {"on": {"GO": "nowhere"}}}})

    def test_targetless_transition_has_no_domain(self):
        machine = create_machine({"initial": "a", "states": {"a": {"on": {"PING": None}}}})
        transition = machine.get_state_node_by_id("machine.a").transitions["PING"][0]

        with pytest.raises(MachineDefinitionError, match="Targetless transition"):
            transition.domain

    def test_state_nodes_exclude_root(self, form_machine):
        ids = [node.id for node in form_machine.state_nodes]
        assert ids == [
            "form.editing",
            "form.editing.pristine",
            "form.editing.dirty",
            "form.submitted",
        ]

    def test_get_state_node_by_id(self, form_machine):
        node = form_machine.get_state_node_by_id("form.editing.dirty")
        assert node.key == "dirty"
        assert node.is_atomic

    def test_unknown_state_node_id(self, form_machine):
        with pytest.raises(MachineDefinitionError):
            form_machine.get_state_node_by_id("form.nope")
