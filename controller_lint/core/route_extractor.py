"""
Route Extractor - Route records from an AdonisJS-style routes file.

Scans every call expression for `<registrar>.<verb>(path, [Controller, "method"])`.
Anything else (inline handlers, chained modifiers, unrelated calls) is not a
route and is skipped silently.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from tree_sitter import Node

from controller_lint.core.parser import (
    ARRAY,
    CALL_EXPRESSION,
    SourceParser,
    SyntaxTree,
    TypeScriptParser,
)
from controller_lint.errors import RoutesFileError
from controller_lint.models.route_models import HttpVerb, RouteRecord

logger = logging.getLogger("controller_lint.routes")

_VERBS = "|".join(v.value for v in HttpVerb)
_PATH_PARAM = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")
_QUOTES = "'\"`"


def extract_path_params(path: str) -> tuple[str, ...]:
    """`/users/:id/posts/:post_id` -> ('id', 'post_id'). Duplicates are kept."""
    return tuple(_PATH_PARAM.findall(path))


def _callee_pattern(registrar: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![\w$]){re.escape(registrar)}\.({_VERBS})$")


def _parse_route_call(tree: SyntaxTree, call: Node, pattern: re.Pattern[str]) -> RouteRecord | None:
    callee = tree.callee(call)
    if callee is None:
        return None
    match = pattern.search(tree.text(callee))
    if not match:
        return None

    args = tree.arguments(call)
    if len(args) < 2:
        return None

    path = tree.text(args[0]).strip(_QUOTES)

    # Inline handlers are not analyzable
    handler = args[1]
    if tree.kind(handler) != ARRAY:
        return None
    elements = tree.children(handler)
    if len(elements) != 2:
        return None

    return RouteRecord(
        http_verb=HttpVerb(match.group(1)),
        path=path,
        controller_name=tree.text(elements[0]),
        handler_name=tree.text(elements[1]).strip(_QUOTES),
        source_line=tree.line(call),
        path_param_names=extract_path_params(path),
    )


def extract_routes(
    source: str,
    registrar: str = "router",
    parser: SourceParser | None = None,
) -> list[RouteRecord]:
    """Extract route records from routing source text, in source order."""
    tree = (parser or TypeScriptParser()).parse(source)
    pattern = _callee_pattern(registrar)

    routes: list[RouteRecord] = []
    for call in tree.find_all(CALL_EXPRESSION):
        route = _parse_route_call(tree, call, pattern)
        if route is not None:
            routes.append(route)
    return routes


def parse_routes_file(
    path: Path,
    registrar: str = "router",
    parser: SourceParser | None = None,
) -> list[RouteRecord]:
    """
    Read and extract a routes file.

    Raises:
        RoutesFileError: if the file is missing or unreadable.
    """
    if not path.is_file():
        raise RoutesFileError(str(path), "file not found")
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RoutesFileError(str(path), str(e)) from e

    routes = extract_routes(source, registrar=registrar, parser=parser)
    logger.info(f"Extracted {len(routes)} routes from {path}")
    return routes


def group_routes_by_controller(routes: list[RouteRecord]) -> dict[str, list[RouteRecord]]:
    """Group routes by controller, keeping route order within each group."""
    grouped: dict[str, list[RouteRecord]] = {}
    for route in routes:
        grouped.setdefault(route.controller_name, []).append(route)
    return grouped
