"""
Typed Success Return Rule - Success responses must name their result type.

`this.successResponse<User>(user)` passes; `this.successResponse(user)` fails.
One violation per offending return statement.
"""

from __future__ import annotations

from controller_lint.config import Conventions
from controller_lint.models.method_models import MethodFacts, ReturnKind
from controller_lint.models.rule_models import RuleId, Severity, Violation


RULE_ID = RuleId.TYPED_SUCCESS_RETURN


def check(facts: MethodFacts, conventions: Conventions | None = None) -> list[Violation]:
    ctor = (conventions or Conventions()).success_constructor
    return [
        Violation(
            rule_id=RULE_ID,
            severity=Severity.ERROR,
            line=ret.line,
            message=(
                f"{ctor}() missing generic type parameter. "
                f"Use {ctor}<Type>(data) for type safety."
            ),
        )
        for ret in facts.returns
        if ret.kind == ReturnKind.TYPED_SUCCESS and ret.has_explicit_type is False
    ]
