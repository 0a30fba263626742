"""Tests for event sampling and executor resolution."""

import logging

import pytest
from pydantic import ValidationError

from statewalk.machine import Event
from statewalk.test_model.events import (
    EventExecutorResolver,
    EventTestConfig,
    TestModelOptions,
    get_event_samples,
)


def noop(test_context, event):
    pass


class TestModelOptionsValidation:
    def test_defaults_to_no_events(self):
        assert TestModelOptions().events == {}

    def test_bare_callable_becomes_exec(self):
        options = TestModelOptions(events={"CLICK": noop})
        assert options.events["CLICK"].exec is noop
        assert options.events["CLICK"].cases is None

    def test_record_config(self):
        options = TestModelOptions(events={"SET": {"exec": noop, "cases": [{"value": 1}]}})
        assert options.events["SET"] == EventTestConfig(exec=noop, cases=[{"value": 1}])

    def test_cases_cannot_set_type(self):
        with pytest.raises(ValidationError, match="must not set 'type'"):
            TestModelOptions(events={"SET": {"cases": [{"type": "OTHER"}]}})

    def test_exec_must_be_callable(self):
        with pytest.raises(ValidationError):
            TestModelOptions(events={"SET": {"exec": "not callable"}})


class TestGetEventSamples:
    def test_empty_config(self):
        assert get_event_samples({}) == []

    def test_bare_executor_gives_one_sample(self):
        options = TestModelOptions(events={"CLICK": noop})
        assert get_event_samples(options.events) == [Event("CLICK")]

    def test_config_without_cases(self):
        options = TestModelOptions(events={"CLICK": {"exec": noop}})
        assert get_event_samples(options.events) == [Event("CLICK")]

    def test_one_sample_per_case(self):
        options = TestModelOptions(events={
            "CLICK": noop,
            "SET": {"cases": [{"value": 1}, {"value": 2, "label": "two"}]},
        })
        assert get_event_samples(options.events) == [
            Event("CLICK"),
            Event("SET", {"value": 1}),
            Event("SET", {"value": 2, "label": "two"}),
        ]

    def test_empty_cases_give_no_samples(self):
        options = TestModelOptions(events={"SET": {"cases": []}})
        assert get_event_samples(options.events) == []


class TestEventExecutorResolver:
    def test_resolves_executor(self):
        options = TestModelOptions(events={"CLICK": noop})
        resolver = EventExecutorResolver(options.events)
        assert resolver.resolve(Event("CLICK")) is noop

    def test_config_without_exec(self, caplog):
        options = TestModelOptions(events={"CLICK": {"cases": [{}]}})
        resolver = EventExecutorResolver(options.events)

        with caplog.at_level(logging.WARNING):
            assert resolver.resolve(Event("CLICK")) is None
        assert caplog.records == []

    def test_missing_config_warns(self, caplog):
        resolver = EventExecutorResolver({})

        with caplog.at_level(logging.WARNING, logger="statewalk.test_model.events"):
            assert resolver.resolve(Event("CLICK")) is None

        assert 'Missing config for event "CLICK".' in caplog.text

    @pytest.mark.asyncio
    async def test_execute_passes_context_and_event(self):
        received = []

        async def executor(test_context, event):
            received.append((test_context, event))

        options = TestModelOptions(events={"SET": executor})
        resolver = EventExecutorResolver(options.events)
        await resolver.execute(Event("SET", {"value": 3}), "page")

        assert received == [("page", Event("SET", {"value": 3}))]

    @pytest.mark.asyncio
    async def test_execute_missing_is_noop(self, caplog):
        resolver = EventExecutorResolver({})

        with caplog.at_level(logging.WARNING):
            await resolver.execute(Event("CLICK"), None)

        assert "CLICK" in caplog.text
