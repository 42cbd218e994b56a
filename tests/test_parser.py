"""
Tests for the tree-sitter TypeScript wrapper - node queries used by the analyzers.
"""

from controller_lint.core.parser import (
    ARRAY,
    CALL_EXPRESSION,
    EXPORT_STATEMENT,
    METHOD_DEFINITION,
    RETURN_STATEMENT,
    TypeScriptParser,
)


SOURCE = """const a = 1
router.get('/x', [Widget, /* handler */ 'show'])
class Widget {
  show({ params }: HttpContext, extra: number) {
    return params
  }
}
"""


def test_find_all_calls_in_source_order():
    tree = TypeScriptParser().parse(SOURCE)
    calls = tree.find_all(CALL_EXPRESSION)
    assert len(calls) == 1
    assert tree.text(tree.callee(calls[0])) == "router.get"
    assert tree.line(calls[0]) == 2


def test_arguments_and_array_children_skip_comments():
    tree = TypeScriptParser().parse(SOURCE)
    call = tree.find_all(CALL_EXPRESSION)[0]
    args = tree.arguments(call)
    assert [tree.text(a) for a in args][0] == "'/x'"
    assert tree.kind(args[1]) == ARRAY
    assert [tree.text(e) for e in tree.children(args[1])] == ["Widget", "'show'"]


def test_parameters_of_method():
    tree = TypeScriptParser().parse(SOURCE)
    method = tree.find_all(METHOD_DEFINITION)[0]
    params = tree.parameters(method)
    assert len(params) == 2
    assert tree.text(params[0]) == "{ params }: HttpContext"


def test_find_all_within_subtree():
    tree = TypeScriptParser().parse(SOURCE)
    method = tree.find_all(METHOD_DEFINITION)[0]
    returns = tree.find_all(RETURN_STATEMENT, within=method)
    assert len(returns) == 1
    assert tree.line(returns[0]) == 5


def test_syntax_errors_still_yield_a_tree():
    tree = TypeScriptParser().parse("router.get('/x', [Widget, 'show'])\nconst = ;\n")
    assert tree.has_error
    assert tree.find_all(CALL_EXPRESSION)


def test_syntax_errors_logged_at_debug(caplog):
    caplog.set_level("DEBUG", logger="controller_lint.parser")
    TypeScriptParser().parse("const = ;\n")
    assert "syntax errors" in caplog.text


def test_clean_source_has_no_error(caplog):
    caplog.set_level("DEBUG", logger="controller_lint.parser")
    tree = TypeScriptParser().parse(SOURCE)
    assert not tree.has_error
    assert "syntax errors" not in caplog.text


def test_fields_statements_and_tokens():
    tree = TypeScriptParser().parse("// header\nexport default class Widget {\n  get size() { return 1 }\n}\n")
    statements = tree.statements()
    assert [tree.kind(s) for s in statements] == [EXPORT_STATEMENT]
    assert tree.has_token(statements[0], "default")

    decl = tree.field(statements[0], "declaration")
    assert tree.text(tree.field(decl, "name")) == "Widget"

    method = tree.find_all(METHOD_DEFINITION)[0]
    assert tree.has_token(method, "get")
    assert not tree.has_token(method, "set")
