from __future__ import annotations

import pytest

from rules.directives import Directive, DirectiveScope, is_suppressed, parse_directives


@pytest.mark.parametrize(
    ("line_text", "scope", "path"),
    [
        ("foo() // consoleline-disable-line", DirectiveScope.LINE, None),
        ("// consoleline-disable-next-line", DirectiveScope.NEXT_LINE, None),
        ("/* consoleline-disable */", DirectiveScope.FILE, None),
        ("// consoleline-disable src/app.ts", DirectiveScope.FILE, "src/app.ts"),
        ("x /* consoleline-disable-line a.js */", DirectiveScope.LINE, "a.js"),
    ],
)
def test_parse_directives(line_text: str, scope: DirectiveScope, path: str | None) -> None:
    assert parse_directives(line_text, 3) == [Directive(scope=scope, line=3, path=path)]


@pytest.mark.parametrize(
    "line_text",
    [
        "consoleline-disable-line",
        "// consoleline-disabled",
        "// consoleline-disable-lines",
        "const s = 'consoleline-disable'",
    ],
)
def test_non_directives(line_text: str) -> None:
    assert parse_directives(line_text, 1) == []


@pytest.mark.parametrize(
    ("qualifier", "file_id", "path_match", "expected"),
    [
        ("src/app.ts", "/repo/src/app.ts", "suffix", True),
        ("./src/app.ts", "/repo/src/app.ts", "suffix", True),
        ("app.ts", "/repo/src/myapp.ts", "suffix", False),
        ("src/App.vue", "/repo/src/App.vue?vue&type=script", "suffix", True),
        ("*/components/*.vue", "/repo/src/components/A.vue", "glob", True),
        ("*.ts", "/repo/src/app.js", "glob", False),
    ],
)
def test_path_qualifier_matching(
    qualifier: str, file_id: str, path_match: str, expected: bool
) -> None:
    directive = Directive(scope=DirectiveScope.LINE, line=1, path=qualifier)

    assert directive.applies_to(file_id, path_match) is expected  # type: ignore[arg-type]


def test_unqualified_directive_applies_everywhere() -> None:
    assert Directive(DirectiveScope.LINE, 1).applies_to("anything.js")


def test_is_suppressed_by_scope() -> None:
    lines = [
        "import x from 'x'",
        "console.log(a) // consoleline-disable-line",
        "// consoleline-disable-next-line",
        "console.log(b)",
        "console.log(c)",
    ]

    assert is_suppressed(lines, 2, "a.js")
    assert is_suppressed(lines, 4, "a.js")
    assert not is_suppressed(lines, 5, "a.js")
    assert not is_suppressed(lines, 3, "a.js")


def test_file_directive_only_counts_on_first_line() -> None:
    assert is_suppressed(["// consoleline-disable", "console.log(a)"], 2, "a.js")
    assert not is_suppressed(["", "// consoleline-disable", "console.log(a)"], 3, "a.js")


def test_line_outside_document_is_not_suppressed() -> None:
    assert not is_suppressed(["console.log(a)"], 7, "a.js")
