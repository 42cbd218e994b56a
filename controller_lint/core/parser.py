"""
controller-lint - TypeScript source parser using tree-sitter.

The analyzers only ever talk to `SyntaxTree`: find nodes by kind, read a
node's text, line and kind, and pull callee / arguments / parameters /
fields / named children. Anything implementing `SourceParser` can be injected in place of
`TypeScriptParser`.
"""

from __future__ import annotations

import logging
from typing import Protocol

import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser, Tree

logger = logging.getLogger("controller_lint.parser")

TS_LANGUAGE = Language(tstypescript.language_typescript())

# Node kinds used by the analyzers
ARRAY = "array"
CALL_EXPRESSION = "call_expression"
CLASS = "class"
CLASS_DECLARATION = "class_declaration"
ABSTRACT_CLASS_DECLARATION = "abstract_class_declaration"
COMMENT = "comment"
EXPORT_STATEMENT = "export_statement"
IDENTIFIER = "identifier"
METHOD_DEFINITION = "method_definition"
RETURN_STATEMENT = "return_statement"


def _named(node: Node) -> list[Node]:
    """Named children of a node, comments excluded."""
    return [c for c in node.named_children if c.type != COMMENT]


class SyntaxTree:
    """A parsed source file plus the queries the analyzers need."""

    def __init__(self, tree: Tree, source: bytes) -> None:
        self._tree = tree
        self._source = source

    @property
    def root(self) -> Node:
        return self._tree.root_node

    @property
    def has_error(self) -> bool:
        return self._tree.root_node.has_error

    def find_all(self, kind: str | tuple[str, ...], within: Node | None = None) -> list[Node]:
        """All descendants of `within` (default: root) of the given kind(s), in source order."""
        kinds = (kind,) if isinstance(kind, str) else kind
        start = within if within is not None else self.root
        found: list[Node] = []
        stack = list(reversed(start.children))
        while stack:
            node = stack.pop()
            if node.type in kinds:
                found.append(node)
            stack.extend(reversed(node.children))
        return found

    def text(self, node: Node) -> str:
        """Extract source text for a node."""
        return self._source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def line(self, node: Node) -> int:
        """1-based starting line of a node."""
        return node.start_point[0] + 1

    def callee(self, call: Node) -> Node | None:
        return call.child_by_field_name("function")

    def arguments(self, call: Node) -> list[Node]:
        args = call.child_by_field_name("arguments")
        if args is None:
            return []
        return _named(args)

    def parameters(self, declaration: Node) -> list[Node]:
        params = declaration.child_by_field_name("parameters")
        if params is None:
            return []
        return _named(params)

    def children(self, node: Node) -> list[Node]:
        """Named children, comments excluded (array elements, a return's expression)."""
        return _named(node)

    def kind(self, node: Node) -> str:
        return node.type

    def field(self, node: Node, name: str) -> Node | None:
        """Child stored under a grammar field (`name`, `body`, `declaration`, ...)."""
        return node.child_by_field_name(name)

    def statements(self) -> list[Node]:
        """Top-level statements of the file."""
        return _named(self.root)

    def has_token(self, node: Node, token: str) -> bool:
        """True if `node` has an anonymous child token such as `default` or `get`."""
        return any(not c.is_named and c.type == token for c in node.children)


class SourceParser(Protocol):
    def parse(self, code: str) -> SyntaxTree: ...


class TypeScriptParser:
    """Thin wrapper around tree-sitter for TypeScript source code."""

    def __init__(self) -> None:
        self._parser = Parser(TS_LANGUAGE)

    def parse(self, code: str) -> SyntaxTree:
        """Parse TypeScript source into a SyntaxTree.

        tree-sitter recovers from syntax errors, so a tree is always
        returned; error nodes are simply never matched by the analyzers.
        """
        source_bytes = code.encode("utf-8")
        syntax_tree = SyntaxTree(self._parser.parse(source_bytes), source_bytes)
        if syntax_tree.has_error:
            logger.debug("Source contains syntax errors; analyzing recovered tree")
        return syntax_tree
