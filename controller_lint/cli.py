"""CLI entry point for controller-lint."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from controller_lint.config import get_settings, load_config, write_default_config
from controller_lint.engine.pipeline import run_validation
from controller_lint.errors import ConfigError, RoutesFileError
from controller_lint.reporting import render_json, render_text

logger = logging.getLogger("controller_lint")


def _configure_logging(verbose: bool) -> None:
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format=settings.log_format,
        datefmt=settings.log_datefmt,
        stream=sys.stderr,
    )


@click.group()
@click.version_option(package_name="controller-lint")
def main():
    """controller-lint - check AdonisJS route handlers for validation and response conventions."""
    pass


@main.command()
@click.option("-p", "--project", "project", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path), help="Path to project root.")
@click.option("-c", "--config", "config_path", default=None, type=click.Path(path_type=Path), help="Path to config file (relative to the project root).")
@click.option("--routes", default=None, help="Routes file, overrides the config file.")
@click.option("--controllers", default=None, help="Controllers directory, overrides the config file.")
@click.option("--fail/--no-fail", "fail_on_error", default=None, help="Exit non-zero when methods fail validation.")
@click.option("--json", "as_json", is_flag=True, help="Print the run summary as JSON.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output.")
def check(
    project: Path,
    config_path: Path | None,
    routes: str | None,
    controllers: str | None,
    fail_on_error: bool | None,
    as_json: bool,
    verbose: bool,
):
    """Validate every routed controller method in a project."""
    _configure_logging(verbose)
    project_root = project.resolve()

    try:
        config = load_config(
            project_root,
            config_path,
            overrides={
                "routes_file": routes,
                "controllers_dir": controllers,
                "fail_on_error": fail_on_error,
            },
        )
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        logger.debug(f"Configuration: {config.model_dump_json(by_alias=True)}")

    if not as_json:
        click.secho(f"Validating AdonisJS controllers in {project_root}...\n", fg="blue")

    try:
        summary = run_validation(project_root, config)
    except RoutesFileError as e:
        raise click.ClickException(f"Validation failed: {e}") from e

    if as_json:
        click.echo(render_json(summary))
    else:
        click.echo(render_text(summary, verbose=verbose))

    if config.fail_on_error and summary.failed_methods > 0:
        sys.exit(1)


@main.command()
@click.option("-p", "--project", "project", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path), help="Path to project root.")
def init(project: Path):
    """Write a default config file into the project root."""
    path = write_default_config(project.resolve())
    if path is None:
        click.echo("Config file already exists")
    else:
        click.echo(f"Created {path}")
