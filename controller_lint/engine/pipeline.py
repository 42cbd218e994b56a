"""
Validation Pipeline - End-to-end run over a project tree.

1. Extract routes from the routes file and group them by controller
2. Resolve each controller's source file (missing -> skip controller)
3. Analyze each controller file once
4. Evaluate each routed handler once (whitelisted / missing -> skip route)
5. Aggregate verdicts into a RunSummary

Only a missing or unreadable routes file aborts the run.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from controller_lint.config import ValidatorConfig
from controller_lint.core.controller_paths import resolve_controller_path
from controller_lint.core.method_analyzer import analyze_controller
from controller_lint.core.parser import SourceParser, TypeScriptParser
from controller_lint.core.route_extractor import group_routes_by_controller, parse_routes_file
from controller_lint.core.rule_engine import RuleEngine
from controller_lint.errors import ControllerFileError
from controller_lint.models.route_models import RouteRecord
from controller_lint.models.rule_models import (
    MethodVerdict,
    RunSummary,
    SkippedRoute,
    SkipReason,
)

logger = logging.getLogger("controller_lint.pipeline")


class ValidationPipeline:
    """Runs route extraction, method analysis and rules for one configuration."""

    def __init__(
        self,
        config: ValidatorConfig,
        parser: SourceParser | None = None,
        rule_engine: RuleEngine | None = None,
    ) -> None:
        self.config = config
        self.parser = parser or TypeScriptParser()
        self.rule_engine = rule_engine or RuleEngine(config.conventions)

    def run(self, project_root: Path) -> RunSummary:
        """
        Validate every routed controller method under `project_root`.

        Raises:
            RoutesFileError: if the routes file is missing or unreadable.
        """
        start = time.monotonic()
        project_root = Path(project_root)
        conventions = self.config.conventions

        routes = parse_routes_file(
            project_root / self.config.routes_file,
            registrar=conventions.registrar,
            parser=self.parser,
        )
        grouped = group_routes_by_controller(routes)

        verdicts: list[MethodVerdict] = []
        skipped: list[SkippedRoute] = []

        for controller_name, controller_routes in grouped.items():
            verdicts.extend(
                self._validate_controller(project_root, controller_name, controller_routes, skipped)
            )

        summary = RunSummary(all_verdicts=verdicts, skipped=skipped)
        elapsed = (time.monotonic() - start) * 1000
        logger.info(
            f"Validated {summary.total_methods} methods across {len(grouped)} controllers "
            f"({summary.failed_methods} failed, {len(skipped)} routes skipped) "
            f"in {elapsed:.1f}ms"
        )
        return summary

    def _validate_controller(
        self,
        project_root: Path,
        controller_name: str,
        routes: list[RouteRecord],
        skipped: list[SkippedRoute],
    ) -> list[MethodVerdict]:
        conventions = self.config.conventions
        path = resolve_controller_path(
            controller_name,
            project_root / self.config.controllers_dir,
            conventions.source_extension,
        )

        if not path.is_file():
            logger.warning(f"Controller not found: {path}")
            skipped.extend(
                SkippedRoute(
                    controller_name=controller_name,
                    handler_name=r.handler_name,
                    reason=SkipReason.MISSING_CONTROLLER,
                    detail=str(path),
                )
                for r in routes
            )
            return []

        try:
            methods = analyze_controller(
                path,
                controller_name=controller_name,
                conventions=conventions,
                parser=self.parser,
            )
        except ControllerFileError as e:
            logger.warning(str(e))
            skipped.extend(
                SkippedRoute(
                    controller_name=controller_name,
                    handler_name=r.handler_name,
                    reason=SkipReason.UNREADABLE_CONTROLLER,
                    detail=e.reason,
                )
                for r in routes
            )
            return []

        verdicts: list[MethodVerdict] = []
        evaluated: set[str] = set()

        for route in routes:
            handler = route.handler_name
            if handler in evaluated:
                continue

            # TODO: a whitelisted handler that no longer exists is indistinguishable
            # from an ordinary whitelist skip; surface it once there is a separate
            # stale-whitelist report.
            if self.config.is_whitelisted(controller_name, handler):
                logger.debug(f"Skipping whitelisted method: {route.whitelist_key}")
                skipped.append(
                    SkippedRoute(
                        controller_name=controller_name,
                        handler_name=handler,
                        reason=SkipReason.WHITELISTED,
                    )
                )
                evaluated.add(handler)
                continue

            facts = methods.get(handler)
            if facts is None:
                logger.warning(f"Method not found: {route.whitelist_key} (routes line {route.source_line})")
                skipped.append(
                    SkippedRoute(
                        controller_name=controller_name,
                        handler_name=handler,
                        reason=SkipReason.MISSING_HANDLER,
                        detail=str(path),
                    )
                )
                evaluated.add(handler)
                continue

            verdicts.append(self.rule_engine.evaluate(facts))
            evaluated.add(handler)

        return verdicts


def run_validation(
    project_root: Path,
    config: ValidatorConfig,
    parser: SourceParser | None = None,
) -> RunSummary:
    """Validate a project with the given configuration."""
    return ValidationPipeline(config, parser=parser).run(project_root)
