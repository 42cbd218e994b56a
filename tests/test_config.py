"""
Tests for configuration loading - defaults, file merge, override precedence.
"""

import json

import pytest

from controller_lint.config import (
    DEFAULT_CONFIG_FILENAME,
    ValidatorConfig,
    load_config,
    write_default_config,
)
from controller_lint.errors import ConfigError


def _write(root, data, name=DEFAULT_CONFIG_FILENAME):
    (root / name).write_text(json.dumps(data), encoding="utf-8")


def test_defaults_without_file(tmp_path):
    config = load_config(tmp_path)
    assert config.routes_file == "start/routes.ts"
    assert config.controllers_dir == "app/controllers"
    assert config.whitelist == frozenset()
    assert config.strict_mode is True
    assert config.fail_on_error is True
    assert config.error_catalog_import_path == "#lib/errors"
    assert config.conventions.validation_call == "validateUsing"


def test_file_values_override_defaults(tmp_path):
    _write(tmp_path, {
        "routesFile": "start/api.ts",
        "whitelist": ["ClusterProxyController.proxy"],
        "failOnError": False,
        "appErrorsPath": "#errors",
        "conventions": {"errorCatalog": "Errors"},
        "somethingUnknown": 1,
    })
    config = load_config(tmp_path)
    assert config.routes_file == "start/api.ts"
    assert config.controllers_dir == "app/controllers"
    assert config.is_whitelisted("ClusterProxyController", "proxy")
    assert config.fail_on_error is False
    assert config.error_catalog_import_path == "#errors"
    assert config.conventions.error_catalog == "Errors"
    assert config.conventions.success_constructor == "successResponse"


def test_overrides_beat_file(tmp_path):
    _write(tmp_path, {"routesFile": "start/api.ts", "controllersDir": "src/controllers"})
    config = load_config(
        tmp_path,
        overrides={"routes_file": "start/cli.ts", "controllers_dir": None, "fail_on_error": False},
    )
    assert config.routes_file == "start/cli.ts"
    assert config.controllers_dir == "src/controllers"
    assert config.fail_on_error is False


def test_explicit_config_path(tmp_path):
    _write(tmp_path, {"strictMode": False}, name="lint.json")
    assert load_config(tmp_path, config_path="lint.json").strict_mode is False
    assert load_config(tmp_path, config_path=tmp_path / "lint.json").strict_mode is False


def test_explicit_missing_config_uses_defaults(tmp_path):
    assert load_config(tmp_path, config_path="missing.json") == ValidatorConfig()


def test_invalid_json_raises(tmp_path):
    (tmp_path / DEFAULT_CONFIG_FILENAME).write_text("{ not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_object_raises(tmp_path):
    _write(tmp_path, ["a", "b"])
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_schema_error_raises(tmp_path):
    _write(tmp_path, {"failOnError": "definitely"})
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_config_is_immutable():
    config = ValidatorConfig()
    with pytest.raises(Exception):
        config.routes_file = "other.ts"


def test_write_default_config(tmp_path):
    path = write_default_config(tmp_path)
    assert path == tmp_path / DEFAULT_CONFIG_FILENAME
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["routesFile"] == "start/routes.ts"
    assert data["whitelist"] == []
    assert data["errorCatalogImportPath"] == "#lib/errors"
    assert load_config(tmp_path) == ValidatorConfig()


def test_write_default_config_keeps_existing(tmp_path):
    _write(tmp_path, {"routesFile": "mine.ts"})
    assert write_default_config(tmp_path) is None
    assert load_config(tmp_path).routes_file == "mine.ts"
