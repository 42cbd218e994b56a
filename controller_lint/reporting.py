"""
Report rendering for RunSummary: colored text for humans, JSON for CI.
"""

from __future__ import annotations

import click

from controller_lint.models.rule_models import MethodVerdict, RunSummary, Severity, Violation

SEPARATOR = "─" * 60

_SEVERITY_STYLE = {
    Severity.ERROR: ("error", "red"),
    Severity.WARNING: ("warning", "yellow"),
}


def _render_violation(violation: Violation, verbose: bool) -> list[str]:
    label, color = _SEVERITY_STYLE[violation.severity]
    lines = [f"   {click.style(f'[{label}]', fg=color)} {violation.message}"]
    if verbose:
        lines.append(click.style(f"      line {violation.line}: {violation.rule_id.value}", dim=True))
    return lines


def _render_verdict(verdict: MethodVerdict, verbose: bool) -> list[str]:
    if verdict.passed:
        header = click.style(f"! {verdict.key}", fg="yellow", bold=True)
    else:
        header = click.style(f"x {verdict.key}", fg="red", bold=True)

    lines = [header, click.style(f"   {verdict.file_path}:{verdict.line}", dim=True)]
    for violation in verdict.violations + verdict.warnings:
        lines.extend(_render_violation(violation, verbose))
    lines.append("")
    return lines


def render_text(summary: RunSummary, verbose: bool = False) -> str:
    """Human-readable report: one block per method with findings, then totals."""
    lines: list[str] = []
    for verdict in summary.all_verdicts:
        if verdict.violations or verdict.warnings:
            lines.extend(_render_verdict(verdict, verbose))

    if verbose and summary.skipped:
        for skip in summary.skipped:
            lines.append(
                click.style(
                    f"- skipped {skip.controller_name}.{skip.handler_name} ({skip.reason.value})",
                    dim=True,
                )
            )
        lines.append("")

    lines.append(SEPARATOR)
    if summary.failed_methods == 0:
        lines.append(
            click.style(
                f"All {summary.total_methods} controller methods pass validation!", fg="green"
            )
        )
    else:
        lines.append(
            click.style(
                f"{summary.failed_methods} of {summary.total_methods} methods have violations",
                fg="red",
            )
        )
    lines.append(
        f"   Total: {summary.total_methods}  "
        f"{click.style(f'Passed: {summary.passed_methods}', fg='green')}  "
        f"{click.style(f'Failed: {summary.failed_methods}', fg='red')}  "
        f"Warnings: {summary.warning_count}"
    )
    return "\n".join(lines)


def render_json(summary: RunSummary) -> str:
    """Machine-readable report: the whole RunSummary, camelCase keys."""
    return summary.model_dump_json(by_alias=True, indent=2)
