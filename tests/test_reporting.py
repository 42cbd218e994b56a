"""
Tests for report rendering - text blocks per method and the JSON document.
"""

import json

from controller_lint.config import ValidatorConfig
from controller_lint.engine.pipeline import run_validation
from controller_lint.reporting import SEPARATOR, render_json, render_text


def test_failing_and_warning_only_headers(sample_project):
    text = render_text(run_validation(sample_project, ValidatorConfig()))
    assert "x UsersController.store" in text
    assert "x UsersController.destroy" in text
    assert "! PostsController.show" in text
    assert "x PostsController.show" not in text
    # clean methods get no block
    assert "UsersController.index" not in text


def test_summary_footer(sample_project):
    text = render_text(run_validation(sample_project, ValidatorConfig()))
    assert SEPARATOR in text
    assert "2 of 5 methods have violations" in text
    assert "Warnings: 2" in text


def test_all_pass_footer(sample_project):
    config = ValidatorConfig(whitelist=frozenset({"UsersController.store", "UsersController.destroy"}))
    text = render_text(run_validation(sample_project, config))
    assert "All 3 controller methods pass validation!" in text


def test_verbose_lists_skips(sample_project):
    config = ValidatorConfig(whitelist=frozenset({"UsersController.store"}))
    summary = run_validation(sample_project, config)
    assert "skipped UsersController.store (whitelisted)" in render_text(summary, verbose=True)
    assert "skipped" not in render_text(summary)


def test_json_uses_camel_case(sample_project):
    data = json.loads(render_json(run_validation(sample_project, ValidatorConfig())))
    show = next(v for v in data["allVerdicts"] if v["controllerName"] == "PostsController")
    assert show["passed"] is True
    assert show["warnings"][0]["severity"] == "warning"
