"""Tree-sitter based ``<script>`` block extraction for Vue single-file components.

Only top-level blocks are considered. The content of a block is everything
between the end of its start tag and the start of its end tag, so its start
position is the character right after ``>``.

Problems are reported as ``ExtractError`` entries on the descriptor instead
of being raised; callers decide whether to fail open.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from parse.nodes import Position
from parse.source import SourceText

if TYPE_CHECKING:
    from tree_sitter import Node, Parser


@dataclass(frozen=True)
class ExtractError:
    """A structural problem found in the document (1-based line)."""

    message: str
    line: int
    column: int


@dataclass(frozen=True)
class ScriptBlock:
    """Content of one ``<script>`` block and where it starts.

    ``start.line`` is 1-based, ``start.column`` and ``start.offset`` are
    0-based character counts into the whole document.
    """

    content: str
    lang: str
    setup: bool
    start: Position
    attrs: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SfcDescriptor:
    script: ScriptBlock | None = None
    script_setup: ScriptBlock | None = None
    errors: tuple[ExtractError, ...] = ()


def _attribute_pairs(source: SourceText, start_tag: Node) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for child in start_tag.named_children:
        if child.type != "attribute":
            continue
        name = ""
        value = ""
        for part in child.named_children:
            if part.type == "attribute_name":
                name = source.slice_bytes(part.start_byte, part.end_byte)
            elif part.type == "attribute_value":
                value = source.slice_bytes(part.start_byte, part.end_byte)
            elif part.type == "quoted_attribute_value":
                inner = [n for n in part.named_children if n.type == "attribute_value"]
                if inner:
                    value = source.slice_bytes(inner[0].start_byte, inner[0].end_byte)
        if name:
            attrs[name.lower()] = value
    return attrs


def _error_at(source: SourceText, node: Node, message: str) -> ExtractError:
    return ExtractError(
        message=message,
        line=node.start_point[0] + 1,
        column=source.char_column(node.start_byte),
    )


class SfcExtractor:
    """Extracts script blocks from an SFC document using an HTML grammar."""

    def __init__(self, parser: Parser) -> None:
        self._parser = parser

    def extract(self, document: str) -> SfcDescriptor:
        source = SourceText(document)
        tree = self._parser.parse(source.data)

        errors: list[ExtractError] = []
        scripts: list[ScriptBlock] = []
        setups: list[ScriptBlock] = []

        for node in tree.root_node.children:
            if node.type == "ERROR" or node.is_missing:
                errors.append(_error_at(source, node, "Malformed top-level markup"))
                continue
            if node.type != "script_element":
                continue

            block, block_error = self._script_block(source, node)
            if block_error is not None:
                errors.append(block_error)
                continue
            if block is not None:
                (setups if block.setup else scripts).append(block)

        if len(scripts) > 1:
            errors.append(
                ExtractError(
                    "Single file component can contain only one <script> element",
                    scripts[1].start.line,
                    scripts[1].start.column,
                )
            )
        if len(setups) > 1:
            errors.append(
                ExtractError(
                    "Single file component can contain only one <script setup> element",
                    setups[1].start.line,
                    setups[1].start.column,
                )
            )

        return SfcDescriptor(
            script=scripts[0] if scripts else None,
            script_setup=setups[0] if setups else None,
            errors=tuple(errors),
        )

    def _script_block(
        self, source: SourceText, node: Node
    ) -> tuple[ScriptBlock | None, ExtractError | None]:
        if node.has_error:
            return None, _error_at(source, node, "Malformed <script> element")

        start_tag = next((c for c in node.children if c.type == "start_tag"), None)
        end_tag = next((c for c in node.children if c.type == "end_tag"), None)
        if start_tag is None or end_tag is None or end_tag.is_missing:
            return None, _error_at(source, node, "Element is missing end tag")

        attrs = _attribute_pairs(source, start_tag)
        content_start = source.char_offset(start_tag.end_byte)
        content_end = source.char_offset(end_tag.start_byte)
        block = ScriptBlock(
            content=source.text[content_start:content_end],
            lang=attrs.get("lang", ""),
            setup="setup" in attrs,
            start=Position(
                line=start_tag.end_point[0] + 1,
                column=source.char_column(start_tag.end_byte),
                offset=content_start,
            ),
            attrs=attrs,
        )
        return block, None


_EXTRACTOR: SfcExtractor | None = None


def get_sfc_extractor() -> SfcExtractor:
    """Create the extractor on first use and return the shared instance.

    The HTML grammar is only imported when an SFC is actually seen.
    """
    global _EXTRACTOR
    if _EXTRACTOR is None:
        from tree_sitter import Language, Parser
        from tree_sitter_html import language as get_html_language

        _EXTRACTOR = SfcExtractor(Parser(Language(get_html_language())))

    return _EXTRACTOR


__all__ = [
    "ExtractError",
    "ScriptBlock",
    "SfcDescriptor",
    "SfcExtractor",
    "get_sfc_extractor",
]
