"""Resolve which part of a source file is parsed as code.

Plain script files are analyzed whole. Vue single-file components are
reduced to their script block; the block's start becomes the region origin
so positions found inside it can be mapped back onto the document.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from parse.nodes import ORIGIN, Position
from sfc.extract import get_sfc_extractor
from utils import lang_from_path

if TYPE_CHECKING:
    from collections.abc import Callable

    from sfc.extract import ScriptBlock, SfcExtractor

logger = logging.getLogger(__name__)

SFC_PATTERNS = (
    re.compile(r"\.vue$"),
    re.compile(r"\.vue\?vue"),
    re.compile(r"\.vue\?v="),
)

# Language used when a whole document has to be read as plain code.
FALLBACK_LANG = "js"


@dataclass(frozen=True)
class SourceUnit:
    """One file handed to the transform: id, full text and language tag."""

    path: str
    text: str
    lang: str = ""

    @classmethod
    def from_code(cls, path: str, text: str) -> SourceUnit:
        return cls(path=path, text=text, lang=lang_from_path(path))


@dataclass(frozen=True)
class Region:
    """Sub-span of a SourceUnit chosen for parsing.

    ``origin.line`` is the block's 1-based start line minus one, so that
    ``origin.line + reported_line`` lands on the document line.
    """

    text: str
    lang: str
    origin: Position = field(default=ORIGIN)

    def map_line(self, line: int) -> int:
        """Translate a 1-based region line into a 1-based document line."""
        return self.origin.line + line

    def map_offset(self, offset: int) -> int:
        """Translate a region character offset into a document offset."""
        return self.origin.offset + offset


def is_sfc(path: str) -> bool:
    return any(pattern.search(path) for pattern in SFC_PATTERNS)


def _identity(unit: SourceUnit, lang: str | None = None) -> Region:
    return Region(text=unit.text, lang=unit.lang if lang is None else lang)


def _region_from_block(block: ScriptBlock) -> Region:
    start = block.start
    return Region(
        text=block.content,
        lang=block.lang,
        origin=Position(line=start.line - 1, column=start.column, offset=start.offset),
    )


def resolve_region(
    unit: SourceUnit,
    extractor_factory: Callable[[], SfcExtractor] = get_sfc_extractor,
) -> Region:
    """Return the region of ``unit`` to parse.

    Extraction errors fall back to the whole document read as JavaScript.
    A component without a script block yields an empty region, so nothing
    gets rewritten.
    """
    if not is_sfc(unit.path):
        return _identity(unit)

    descriptor = extractor_factory().extract(unit.text)
    if descriptor.errors:
        logger.debug(
            "SFC extraction failed for %s, reading it as plain code: %s",
            unit.path,
            "; ".join(
                f"{error.line}:{error.column} {error.message}"
                for error in descriptor.errors
            ),
        )
        return _identity(unit, FALLBACK_LANG)

    block = descriptor.script or descriptor.script_setup
    if block is None:
        logger.debug("No script block in %s", unit.path)
        return Region(text="", lang=FALLBACK_LANG)

    logger.debug(
        "Using %s block of %s starting at line %d",
        "<script setup>" if block.setup else "<script>",
        unit.path,
        block.start.line,
    )
    return _region_from_block(block)


__all__ = [
    "FALLBACK_LANG",
    "Region",
    "SFC_PATTERNS",
    "SourceUnit",
    "is_sfc",
    "resolve_region",
]
