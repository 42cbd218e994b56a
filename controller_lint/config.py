"""
controller-lint Configuration.

Two layers:
  * `Settings` - process-level knobs (logging, config file name) sourced
    from environment variables or a .env file via pydantic-settings.
  * `ValidatorConfig` - the per-run validation config, loaded from the
    project's JSON config file and merged with CLI overrides. It is an
    immutable value passed explicitly through the pipeline.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings

from controller_lint.errors import ConfigError
from controller_lint.models.base import ReportModel

logger = logging.getLogger("controller_lint.config")

DEFAULT_CONFIG_FILENAME = "adonis-validator.config.json"


class Settings(BaseSettings):
    """Process-wide settings sourced from environment variables."""

    log_level: str = Field(default="INFO", description="Root log level for the CLI")
    log_format: str = Field(
        default="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        description="logging.basicConfig format string",
    )
    log_datefmt: str = Field(default="%Y-%m-%d %H:%M:%S")
    config_filename: str = Field(
        default=DEFAULT_CONFIG_FILENAME,
        description="Config file looked up in the project root when --config is not given",
    )

    model_config = {
        "env_prefix": "CONTROLLER_LINT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Shared settings instance."""
    return Settings()


class Conventions(ReportModel):
    """Identifiers the analyzers look for in the target project's source."""

    model_config = ConfigDict(frozen=True)

    registrar: str = Field(default="router", description="Object routes are registered on")
    request_accessor: str = Field(default="request", description="Request-data context member")
    params_accessor: str = Field(default="params", description="Route-parameter context member")
    validation_call: str = Field(default="validateUsing", description="Validation method name")
    success_constructor: str = Field(default="successResponse")
    error_constructor: str = Field(default="errorResponse")
    error_catalog: str = Field(default="AppErrors", description="Error-catalog identifier")
    source_extension: str = Field(default=".ts")


class ValidatorConfig(ReportModel):
    """Validation settings for one run."""

    model_config = ConfigDict(frozen=True)

    routes_file: str = "start/routes.ts"
    controllers_dir: str = "app/controllers"
    whitelist: frozenset[str] = Field(
        default_factory=frozenset, description="'Controller.method' keys exempt from all rules"
    )
    strict_mode: bool = True
    fail_on_error: bool = True
    error_catalog_import_path: str = Field(
        default="#lib/errors",
        validation_alias=AliasChoices(
            "errorCatalogImportPath", "appErrorsPath", "error_catalog_import_path"
        ),
    )
    conventions: Conventions = Field(default_factory=Conventions)

    def is_whitelisted(self, controller_name: str, handler_name: str) -> bool:
        return f"{controller_name}.{handler_name}" in self.whitelist


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return data


def load_config(
    project_root: Path,
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> ValidatorConfig:
    """
    Build the run configuration.

    Precedence: explicit overrides (CLI flags) > config file > defaults.
    A missing config file is not an error. Override values of None are
    treated as "not given".

    Raises:
        ConfigError: if the config file is unreadable or fails validation.
    """
    explicit = config_path is not None
    path = Path(config_path) if explicit else Path(get_settings().config_filename)
    if not path.is_absolute():
        path = project_root / path

    file_data: dict[str, Any] = {}
    if path.is_file():
        file_data = _read_config_file(path)
        logger.debug(f"Loaded config from {path}")
    elif explicit:
        logger.warning(f"Config file not found: {path}; using defaults")
    else:
        logger.debug(f"No config file at {path}; using defaults")

    try:
        base = ValidatorConfig.model_validate(file_data)
        given = {k: v for k, v in (overrides or {}).items() if v is not None}
        if not given:
            return base
        return ValidatorConfig.model_validate({**base.model_dump(), **given})
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e


def write_default_config(project_root: Path) -> Path | None:
    """Write a default config file into the project root.

    Returns the written path, or None if a config file already exists.
    """
    path = project_root / get_settings().config_filename
    if path.exists():
        return None

    payload = ValidatorConfig().model_dump(mode="json", by_alias=True)
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    logger.info(f"Created {path}")
    return path
