"""
Catalog Error Return Rule - Error responses must come from the error catalog.

`this.errorResponse(AppErrors.NOT_FOUND)` passes; an inline object literal
fails. One violation per offending return statement.
"""

from __future__ import annotations

from controller_lint.config import Conventions
from controller_lint.models.method_models import MethodFacts, ReturnKind
from controller_lint.models.rule_models import RuleId, Severity, Violation


RULE_ID = RuleId.CATALOG_ERROR_RETURN

EXCERPT_LENGTH = 50


def excerpt(text: str, limit: int = EXCERPT_LENGTH) -> str:
    """First `limit` characters of `text`, marked with '...' when cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def check(facts: MethodFacts, conventions: Conventions | None = None) -> list[Violation]:
    c = conventions or Conventions()
    return [
        Violation(
            rule_id=RULE_ID,
            severity=Severity.ERROR,
            line=ret.line,
            message=(
                f"{c.error_constructor}() must use {c.error_catalog} constants. "
                f"Found: {excerpt(ret.raw_text)}"
            ),
        )
        for ret in facts.returns
        if ret.kind == ReturnKind.ERROR_REPORT and ret.uses_error_catalog is False
    ]
