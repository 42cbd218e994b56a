"""
Method Data Models - Syntactic facts about controller handler methods.

These models are the output of the method analyzer and the input to
the rule engine. Nothing here depends on the parser.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from controller_lint.models.base import ReportModel


class ReturnKind(str, Enum):
    TYPED_SUCCESS = "typed-success"
    ERROR_REPORT = "error-report"
    OTHER = "other"


class ReturnFact(ReportModel):
    """A single `return <expr>` inside a handler method."""

    line: int
    kind: ReturnKind
    # None means "not applicable to this kind", never "check failed"
    has_explicit_type: bool | None = Field(
        default=None, description="TypedSuccess only: constructor carries <Type>"
    )
    uses_error_catalog: bool | None = Field(
        default=None, description="ErrorReport only: error comes from the catalog"
    )
    raw_text: str = Field(default="", description="Source text of the returned expression")


class MethodFacts(ReportModel):
    """Everything the rules need to know about one controller method."""

    controller_name: str
    method_name: str
    file_path: str
    declaration_line: int
    consumes_request_param: bool = False
    consumes_route_params: bool = False
    calls_validation: bool = False
    returns: list[ReturnFact] = Field(default_factory=list)
