"""
Route Data Models - Route records extracted from the routing declarations.
"""

from __future__ import annotations

from enum import Enum

from pydantic import ConfigDict, Field, computed_field

from controller_lint.models.base import ReportModel


class HttpVerb(str, Enum):
    GET = "get"
    POST = "post"
    PATCH = "patch"
    PUT = "put"
    DELETE = "delete"
    ANY = "any"


class RouteRecord(ReportModel):
    """One route registration: verb + path mapped to a controller method."""

    model_config = ConfigDict(frozen=True)

    http_verb: HttpVerb
    path: str = Field(..., description="Route path, e.g. '/datasets/:dataset_id'")
    controller_name: str = Field(..., description="Controller reference, e.g. 'DatasetsController'")
    handler_name: str = Field(..., description="Handler method name, e.g. 'show'")
    source_line: int = Field(..., description="Line of the registration call in the routes file")
    path_param_names: tuple[str, ...] = Field(
        default=(), description="Path parameter names in declaration order"
    )

    @computed_field(alias="hasPathParams")
    @property
    def has_path_params(self) -> bool:
        return len(self.path_param_names) > 0

    @property
    def whitelist_key(self) -> str:
        return f"{self.controller_name}.{self.handler_name}"
