"""
Rule Engine Data Models - Violations, verdicts, and run summaries.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, computed_field

from controller_lint.models.base import ReportModel


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class RuleId(str, Enum):
    REQUEST_VALIDATION = "request-validation"
    TYPED_SUCCESS_RETURN = "typed-success-return"
    CATALOG_ERROR_RETURN = "catalog-error-return"


class SkipReason(str, Enum):
    WHITELISTED = "whitelisted"
    MISSING_CONTROLLER = "missing-controller"
    UNREADABLE_CONTROLLER = "unreadable-controller"
    MISSING_HANDLER = "missing-handler"


class Violation(ReportModel):
    """A single rule violation."""

    rule_id: RuleId
    message: str
    line: int = Field(..., description="Line the violation is cited at")
    severity: Severity


class MethodVerdict(ReportModel):
    """Pass/fail outcome for one handler method.

    Error-severity findings live in `violations` and decide `passed`;
    warning-severity findings are advisory and live in `warnings`.
    """

    controller_name: str
    method_name: str
    file_path: str
    line: int
    violations: list[Violation] = Field(default_factory=list)
    warnings: list[Violation] = Field(default_factory=list)

    @computed_field(alias="passed")
    @property
    def passed(self) -> bool:
        return not self.violations

    @property
    def key(self) -> str:
        return f"{self.controller_name}.{self.method_name}"


class SkippedRoute(ReportModel):
    """A route that was not evaluated, and why."""

    controller_name: str
    handler_name: str
    reason: SkipReason
    detail: str = ""


class RunSummary(ReportModel):
    """Aggregate result of a validation run."""

    all_verdicts: list[MethodVerdict] = Field(default_factory=list)
    skipped: list[SkippedRoute] = Field(default_factory=list)

    @computed_field(alias="totalMethods")
    @property
    def total_methods(self) -> int:
        return len(self.all_verdicts)

    @computed_field(alias="passedMethods")
    @property
    def passed_methods(self) -> int:
        return sum(1 for v in self.all_verdicts if v.passed)

    @computed_field(alias="failedMethods")
    @property
    def failed_methods(self) -> int:
        return len(self.failing_verdicts)

    @computed_field(alias="failingVerdicts")
    @property
    def failing_verdicts(self) -> list[MethodVerdict]:
        return [v for v in self.all_verdicts if not v.passed]

    @computed_field(alias="warningCount")
    @property
    def warning_count(self) -> int:
        return sum(len(v.warnings) for v in self.all_verdicts)
