"""
Controller Path Resolver - controller reference -> expected source file.

`UsersController` lives in `<controllers_dir>/users_controller.ts`. This is a
pure string transform; existence is checked by the pipeline.
"""

from __future__ import annotations

import re
from pathlib import Path

_CASE_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def to_snake_case(name: str) -> str:
    """PascalCase -> snake_case (`DatasetItemsController` -> `dataset_items_controller`)."""
    return _CASE_BOUNDARY.sub(r"\1_\2", name).lower()


def resolve_controller_path(
    controller_name: str,
    controllers_dir: Path | str,
    extension: str = ".ts",
) -> Path:
    return Path(controllers_dir) / f"{to_snake_case(controller_name)}{extension}"
