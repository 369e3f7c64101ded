from typing import Callable
from core.state import ChangeTrackingState


class ConstraintManager:
    """
    Runs business rules against a proposed assignment before it is committed.

    Each rule is a callable `rule(state, candidate)` that raises one of the
    custom scheduler errors when the candidate is not acceptable. Rules run in
    registration order and the first failure aborts the whole check, so the
    store never commits a partially validated change.
    """

    def __init__(self, state: ChangeTrackingState):
        self.state = state
        self.rules: list[Callable] = []

    def add_rule(self, rule_func: Callable, condition: bool = True):
        """Register a rule with optional enablement condition."""
        if condition:
            self.rules.append(rule_func)

    def apply_all(self, candidate):
        """Apply all registered rules in order."""
        for rule in self.rules:
            rule(self.state, candidate)
