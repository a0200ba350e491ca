from __future__ import annotations

import pytest

from parse.console_calls import extract_console_calls
from parse.nodes import ArgKind, CallSite
from parse.source import SourceText
from parse.treesitter_js import (
    ParseError,
    UnsupportedLanguageError,
    grammar_for,
    parse_region,
)
from parse.walk import Visit, walk


def _calls(code: str, lang: str = "js", **kwargs: object) -> list[CallSite]:
    source = SourceText(code)
    tree = parse_region(source, lang)
    return extract_console_calls(tree, source, **kwargs)  # type: ignore[arg-type]


def test_argument_kinds() -> None:
    calls = _calls('console.log("s", `t`, x, 1, a + b, ...rest)\n')

    assert len(calls) == 1
    assert [arg.kind for arg in calls[0].arguments] == [
        ArgKind.STRING,
        ArgKind.TEMPLATE,
        ArgKind.IDENTIFIER,
        ArgKind.NUMBER,
        ArgKind.OTHER,
        ArgKind.OTHER,
    ]


def test_call_site_offsets_and_position() -> None:
    code = "function f() {\n  console.warn(a, b)\n}\n"

    (call,) = _calls(code)

    assert call.callee == "console.warn"
    assert (call.line, call.column) == (2, 2)
    assert code[call.start : call.end] == "console.warn(a, b)"
    assert code[call.args_start : call.args_end] == "a, b"


def test_comments_inside_arguments_are_ignored() -> None:
    (call,) = _calls("console.log(/* note */ value)\n")

    assert len(call.arguments) == 1
    assert call.arguments[0].kind is ArgKind.IDENTIFIER


def test_zero_argument_call_is_reported_without_arguments() -> None:
    (call,) = _calls("console.log()\n")

    assert call.arguments == ()
    assert call.args_start is None
    assert call.first_kind is None


def test_nested_calls_in_source_order() -> None:
    calls = _calls("console.log(a, console.error(b), console.info(c))\n")

    assert [call.callee for call in calls] == [
        "console.log",
        "console.error",
        "console.info",
    ]


@pytest.mark.parametrize(
    "code",
    [
        "console.table(rows)\n",
        "logger.log(a)\n",
        "window.console.log(a)\n",
        "console['log'](a)\n",
        "console.log`tagged`\n",
        "log(a)\n",
    ],
)
def test_non_matching_calls(code: str) -> None:
    assert _calls(code) == []


def test_custom_logger_and_methods() -> None:
    calls = _calls(
        "logger.trace(a)\nconsole.log(b)\n",
        logger_object="logger",
        methods=("trace",),
    )

    assert [call.callee for call in calls] == ["logger.trace"]


def test_typescript_region() -> None:
    calls = _calls(
        "const x: number = 1\nconsole.info(x as number)\n",
        lang="ts",
    )

    assert len(calls) == 1
    assert calls[0].line == 2


def test_tsx_region() -> None:
    calls = _calls(
        "const el = <div onClick={() => console.log(id)} />\n",
        lang="tsx",
    )

    assert len(calls) == 1
    assert calls[0].arguments[0].kind is ArgKind.IDENTIFIER


def test_non_ascii_offsets_are_characters() -> None:
    code = 'const s = "日本"; console.log(s)\n'

    (call,) = _calls(code)

    assert call.column == 16
    assert code[call.args_start : call.args_end] == "s"


@pytest.mark.parametrize(
    ("lang", "grammar"),
    [("", "javascript"), ("JS", "javascript"), ("mts", "typescript"), ("tsx", "tsx")],
)
def test_grammar_for(lang: str, grammar: str) -> None:
    assert grammar_for(lang) == grammar


def test_unsupported_language() -> None:
    with pytest.raises(UnsupportedLanguageError):
        parse_region(SourceText("let a"), "coffee")


def test_parse_error_reports_region_position() -> None:
    with pytest.raises(ParseError) as excinfo:
        parse_region(SourceText("let a = 1;\nconst = ;\n"), "js", path="src/a.js")

    assert excinfo.value.path == "src/a.js"
    assert excinfo.value.line == 2
    assert str(excinfo.value).startswith("src/a.js:2:")


def test_walk_prunes_skipped_subtrees() -> None:
    source = SourceText("console.log(a)\n")
    tree = parse_region(source, "js")
    seen: list[str] = []

    def visit(node):  # type: ignore[no-untyped-def]
        seen.append(node.type)
        if node.type == "expression_statement":
            return Visit.SKIP
        return None

    walk(tree.root_node, visit)

    assert seen == ["program", "expression_statement"]
