"""
Shared pydantic base for report models.

Fields are snake_case in Python and camelCase on the wire, matching the
JSON report consumed by CI tooling.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
