"""
Rule Engine - Runs every registered rule against a method's facts.

Rules are pure functions of MethodFacts; the engine only concatenates their
output in registry order and splits it by severity into a MethodVerdict.
"""

from __future__ import annotations

from typing import Callable

from controller_lint.config import Conventions
from controller_lint.core.rules import (
    catalog_error_return,
    request_validation,
    typed_success_return,
)
from controller_lint.models.method_models import MethodFacts
from controller_lint.models.rule_models import MethodVerdict, RuleId, Severity, Violation

# Type for a rule check function
RuleCheckFn = Callable[[MethodFacts, Conventions], list[Violation]]

# Registry of all rules, in reporting order
RULE_REGISTRY: dict[RuleId, RuleCheckFn] = {
    request_validation.RULE_ID: request_validation.check,
    typed_success_return.RULE_ID: typed_success_return.check,
    catalog_error_return.RULE_ID: catalog_error_return.check,
}


class RuleEngine:
    """Evaluates handler methods against the registered rules."""

    def __init__(
        self,
        conventions: Conventions | None = None,
        rules: dict[RuleId, RuleCheckFn] | None = None,
    ) -> None:
        self.conventions = conventions or Conventions()
        self.rules = rules or RULE_REGISTRY

    def collect(self, facts: MethodFacts) -> list[Violation]:
        """All violations for a method, in registry order."""
        found: list[Violation] = []
        for check_fn in self.rules.values():
            found.extend(check_fn(facts, self.conventions))
        return found

    def evaluate(self, facts: MethodFacts) -> MethodVerdict:
        found = self.collect(facts)
        return MethodVerdict(
            controller_name=facts.controller_name,
            method_name=facts.method_name,
            file_path=facts.file_path,
            line=facts.declaration_line,
            violations=[v for v in found if v.severity == Severity.ERROR],
            warnings=[v for v in found if v.severity == Severity.WARNING],
        )
