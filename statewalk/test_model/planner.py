"""Select test plans by target state and weight."""

from typing import Callable, Iterable, Union

from ..machine import Machine, State, StateValue
from .plan import TestPlan

StatePredicate = Callable[[State], bool]
Target = Union[StateValue, StatePredicate]


def target_predicate(machine: Machine, target: Target) -> StatePredicate:
    """Build a predicate from a state value or a predicate over states."""
    if callable(target):
        return lambda state: bool(target(state))
    return lambda state: machine.matches(target, state.value)


def filter_plans_to(machine: Machine, target: Target, plans: Iterable[TestPlan]) -> list[TestPlan]:
    """Keep the plans whose target state matches ``target``."""
    predicate = target_predicate(machine, target)
    return [plan for plan in plans if predicate(plan.state)]


def select_shortest(plans: Iterable[TestPlan]) -> list[TestPlan]:
    """Keep every plan whose weight is the minimum among ``plans``."""
    weighted = [(plan.paths[0].weight, plan) for plan in plans if plan.paths]
    if not weighted:
        return []

    min_weight = min(weight for weight, _ in weighted)
    return [plan for weight, plan in weighted if weight == min_weight]
