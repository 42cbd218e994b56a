"""
Method Analyzer - Per-method syntactic facts for a controller file.

Finds the default-exported controller class and, for each handler method,
records which context members it destructures, whether it calls the
validator, and how each of its `return` expressions is shaped.

Detection is textual on top of parsed nodes: identifiers are matched by
name, not resolved. Aliased imports or wrapped response helpers are
therefore not recognized.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from tree_sitter import Node

from controller_lint.config import Conventions
from controller_lint.core.parser import (
    ABSTRACT_CLASS_DECLARATION,
    CALL_EXPRESSION,
    CLASS,
    CLASS_DECLARATION,
    EXPORT_STATEMENT,
    IDENTIFIER,
    METHOD_DEFINITION,
    RETURN_STATEMENT,
    SourceParser,
    SyntaxTree,
    TypeScriptParser,
)
from controller_lint.errors import ControllerFileError
from controller_lint.models.method_models import MethodFacts, ReturnFact, ReturnKind

logger = logging.getLogger("controller_lint.analyzer")

_CLASS_DECLARATIONS = (CLASS_DECLARATION, ABSTRACT_CLASS_DECLARATION)
_NOT_HANDLERS = {"constructor"}
_ACCESSOR_KEYWORDS = {"get", "set"}


def _word(identifier: str) -> re.Pattern[str]:
    """Match `identifier` as a whole JS identifier."""
    return re.compile(rf"(?<![\w$]){re.escape(identifier)}(?![\w$])")


def has_type_arguments(text: str, constructor: str) -> bool:
    """True if `constructor` is directly followed by a non-empty, balanced `<...>`."""
    for match in _word(constructor).finditer(text):
        pos = match.end()
        while pos < len(text) and text[pos].isspace():
            pos += 1
        if pos >= len(text) or text[pos] != "<":
            continue

        depth = 0
        for i in range(pos, len(text)):
            ch = text[i]
            if ch == "<":
                depth += 1
            elif ch == ">" and text[i - 1] != "=":
                depth -= 1
                if depth == 0:
                    if text[pos + 1:i].strip():
                        return True
                    break
    return False


def _class_name(tree: SyntaxTree, node: Node) -> str | None:
    name = tree.field(node, "name")
    return tree.text(name) if name is not None else None


def find_default_export_class(tree: SyntaxTree) -> Node | None:
    """Locate the class exported as default, if any."""
    classes: dict[str, Node] = {}
    exports: list[Node] = []

    for stmt in tree.statements():
        if tree.kind(stmt) in _CLASS_DECLARATIONS:
            name = _class_name(tree, stmt)
            if name:
                classes[name] = stmt
        elif tree.kind(stmt) == EXPORT_STATEMENT:
            decl = tree.field(stmt, "declaration")
            if decl is not None and tree.kind(decl) in _CLASS_DECLARATIONS:
                name = _class_name(tree, decl)
                if name:
                    classes[name] = decl
            if tree.has_token(stmt, "default"):
                exports.append(stmt)

    for stmt in exports:
        decl = tree.field(stmt, "declaration")
        if decl is not None and tree.kind(decl) in _CLASS_DECLARATIONS:
            return decl
        value = tree.field(stmt, "value")
        if value is None:
            continue
        if tree.kind(value) == CLASS:
            return value
        # class Foo {} ... export default Foo
        if tree.kind(value) == IDENTIFIER:
            target = classes.get(tree.text(value))
            if target is not None:
                return target
    return None


def _handler_methods(tree: SyntaxTree, class_node: Node) -> list[Node]:
    body = tree.field(class_node, "body")
    if body is None:
        return []

    methods: list[Node] = []
    for member in tree.children(body):
        if tree.kind(member) != METHOD_DEFINITION:
            continue
        if tree.field(member, "body") is None:
            continue
        if any(tree.has_token(member, kw) for kw in _ACCESSOR_KEYWORDS):
            continue
        if _method_name(tree, member) in _NOT_HANDLERS:
            continue
        methods.append(member)
    return methods


def _method_name(tree: SyntaxTree, method: Node) -> str:
    name = tree.field(method, "name")
    return tree.text(name).strip("'\"") if name is not None else ""


class MethodAnalyzer:
    """Extracts MethodFacts from one parsed controller file."""

    def __init__(self, conventions: Conventions | None = None) -> None:
        self.conventions = conventions or Conventions()
        c = self.conventions
        self._request = _word(c.request_accessor)
        self._params = _word(c.params_accessor)
        self._success = _word(c.success_constructor)
        self._error = _word(c.error_constructor)
        self._catalog = re.compile(rf"(?<![\w$]){re.escape(c.error_catalog)}\.[\w$]+")

    def analyze_tree(
        self, tree: SyntaxTree, file_path: str, controller_name: str | None = None
    ) -> dict[str, MethodFacts]:
        class_node = find_default_export_class(tree)
        if class_node is None:
            logger.debug(f"No default-exported class in {file_path}")
            return {}

        name = _class_name(tree, class_node) or controller_name or Path(file_path).stem
        results: dict[str, MethodFacts] = {}
        for method in _handler_methods(tree, class_node):
            facts = self._analyze_method(tree, method, name, file_path)
            results[facts.method_name] = facts
        return results

    def _analyze_method(
        self, tree: SyntaxTree, method: Node, controller_name: str, file_path: str
    ) -> MethodFacts:
        # Handlers take a single destructured HttpContext: ({ request, params }: HttpContext)
        params = tree.parameters(method)
        first_param = tree.text(params[0]) if params else ""
        body = tree.field(method, "body")

        return MethodFacts(
            controller_name=controller_name,
            method_name=_method_name(tree, method),
            file_path=file_path,
            declaration_line=tree.line(method),
            consumes_request_param=bool(self._request.search(first_param)),
            consumes_route_params=bool(self._params.search(first_param)),
            calls_validation=self._calls_validation(tree, body),
            returns=self._analyze_returns(tree, body),
        )

    def _calls_validation(self, tree: SyntaxTree, body: Node) -> bool:
        needle = self.conventions.validation_call
        for call in tree.find_all(CALL_EXPRESSION, within=body):
            callee = tree.callee(call)
            if callee is not None and needle in tree.text(callee):
                return True
        return False

    def _analyze_returns(self, tree: SyntaxTree, body: Node) -> list[ReturnFact]:
        facts: list[ReturnFact] = []
        for ret in tree.find_all(RETURN_STATEMENT, within=body):
            children = tree.children(ret)
            if not children:
                continue
            facts.append(self.classify_return(tree.text(children[0]), tree.line(ret)))
        return facts

    def classify_return(self, text: str, line: int) -> ReturnFact:
        """Classify a returned expression's text."""
        if self._success.search(text):
            return ReturnFact(
                line=line,
                kind=ReturnKind.TYPED_SUCCESS,
                has_explicit_type=has_type_arguments(text, self.conventions.success_constructor),
                raw_text=text,
            )
        if self._error.search(text):
            return ReturnFact(
                line=line,
                kind=ReturnKind.ERROR_REPORT,
                uses_error_catalog=bool(self._catalog.search(text)),
                raw_text=text,
            )
        return ReturnFact(line=line, kind=ReturnKind.OTHER, raw_text=text)


def analyze_source(
    source: str,
    file_path: str,
    controller_name: str | None = None,
    conventions: Conventions | None = None,
    parser: SourceParser | None = None,
) -> dict[str, MethodFacts]:
    """Analyze controller source text. Returns {method_name: MethodFacts}."""
    tree = (parser or TypeScriptParser()).parse(source)
    return MethodAnalyzer(conventions).analyze_tree(tree, file_path, controller_name)


def analyze_controller(
    path: Path,
    controller_name: str | None = None,
    conventions: Conventions | None = None,
    parser: SourceParser | None = None,
) -> dict[str, MethodFacts]:
    """
    Analyze a controller file.

    Raises:
        ControllerFileError: if the file cannot be read.
    """
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ControllerFileError(str(path), str(e)) from e
    return analyze_source(source, str(path), controller_name, conventions, parser)
