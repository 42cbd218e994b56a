"""
Request Validation Rule - Handlers must validate what they read from the request.

  * destructures the request accessor but never calls the validator -> error
  * destructures only route params and never calls the validator -> warning
"""

from __future__ import annotations

from controller_lint.config import Conventions
from controller_lint.models.method_models import MethodFacts
from controller_lint.models.rule_models import RuleId, Severity, Violation


RULE_ID = RuleId.REQUEST_VALIDATION


def check(facts: MethodFacts, conventions: Conventions | None = None) -> list[Violation]:
    """At most one violation per method."""
    c = conventions or Conventions()

    if facts.calls_validation:
        return []

    if facts.consumes_request_param:
        return [
            Violation(
                rule_id=RULE_ID,
                severity=Severity.ERROR,
                line=facts.declaration_line,
                message=(
                    f"Method uses '{c.request_accessor}' but does not call "
                    f"'{c.request_accessor}.{c.validation_call}()'. "
                    "All request data must be validated."
                ),
            )
        ]

    if facts.consumes_route_params:
        return [
            Violation(
                rule_id=RULE_ID,
                severity=Severity.WARNING,
                line=facts.declaration_line,
                message=(
                    f"Method uses '{c.params_accessor}' but does not call "
                    f"'{c.request_accessor}.{c.validation_call}()'. "
                    "Consider adding parameter validation."
                ),
            )
        ]

    return []
