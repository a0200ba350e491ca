"""Tree-sitter parsers for JavaScript and TypeScript regions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tree_sitter import Language, Parser
from tree_sitter_javascript import language as get_javascript_language
from tree_sitter_typescript import language_tsx, language_typescript

from parse.walk import Visit, walk

if TYPE_CHECKING:
    from tree_sitter import Node, Tree

    from parse.source import SourceText

JAVASCRIPT = "javascript"
TYPESCRIPT = "typescript"
TSX = "tsx"

# Language tags as they appear in file extensions and <script lang="...">.
LANG_GRAMMARS: dict[str, str] = {
    "": JAVASCRIPT,
    "js": JAVASCRIPT,
    "jsx": JAVASCRIPT,
    "mjs": JAVASCRIPT,
    "cjs": JAVASCRIPT,
    "ts": TYPESCRIPT,
    "mts": TYPESCRIPT,
    "cts": TYPESCRIPT,
    "tsx": TSX,
}

_PARSERS: dict[str, Parser] = {}


class UnsupportedLanguageError(Exception):
    """Raised when a region declares a language no grammar is registered for."""


class ParseError(Exception):
    """Raised when a region's code does not parse cleanly."""

    def __init__(self, path: str, line: int, column: int, detail: str) -> None:
        self.path = path
        self.line = line
        self.column = column
        self.detail = detail
        super().__init__(f"{path}:{line}:{column}: {detail}")


def grammar_for(lang: str) -> str:
    """Map a language tag to the grammar that parses it."""
    try:
        return LANG_GRAMMARS[lang.strip().lower()]
    except KeyError:
        msg = (
            f"Unsupported script language '{lang}'. "
            f"Supported: {', '.join(sorted(tag for tag in LANG_GRAMMARS if tag))}"
        )
        raise UnsupportedLanguageError(msg) from None


def _get_parser(grammar: str) -> Parser:
    """Initialize and return the cached Tree-sitter parser for a grammar."""
    parser = _PARSERS.get(grammar)
    if parser is None:
        if grammar == TYPESCRIPT:
            lang = Language(language_typescript())
        elif grammar == TSX:
            lang = Language(language_tsx())
        else:
            lang = Language(get_javascript_language())
        parser = Parser(lang)
        _PARSERS[grammar] = parser

    return parser


def _first_error(root: Node) -> Node | None:
    found: list[Node] = []

    def visit(node: Node) -> Visit | None:
        if found:
            return Visit.SKIP
        if node.type == "ERROR" or node.is_missing:
            found.append(node)
            return Visit.SKIP
        if not node.has_error:
            return Visit.SKIP
        return None

    walk(root, visit)
    return found[0] if found else None


def parse_region(source: SourceText, lang: str, *, path: str = "<region>") -> Tree:
    """Parse region text and fail on any syntax error.

    Raises:
        UnsupportedLanguageError: ``lang`` has no registered grammar.
        ParseError: the tree contains ERROR or MISSING nodes. ``line`` is
            1-based and ``column`` 0-based, relative to the region.
    """
    parser = _get_parser(grammar_for(lang))
    tree = parser.parse(source.data)

    if tree.root_node.has_error:
        error_node = _first_error(tree.root_node) or tree.root_node
        if error_node.is_missing:
            detail = f"missing '{error_node.type}'"
        else:
            snippet = source.slice_bytes(error_node.start_byte, error_node.end_byte)
            detail = f"unexpected '{snippet[:40]}'"
        raise ParseError(
            path,
            error_node.start_point[0] + 1,
            source.char_column(error_node.start_byte),
            detail,
        )

    return tree


__all__ = [
    "LANG_GRAMMARS",
    "ParseError",
    "UnsupportedLanguageError",
    "grammar_for",
    "parse_region",
]
