"""Parsing utilities for JavaScript and TypeScript regions."""

from parse.console_calls import extract_console_calls
from parse.nodes import ArgKind, Argument, CallSite, Position
from parse.source import SourceText
from parse.treesitter_js import ParseError, UnsupportedLanguageError, parse_region
from parse.walk import Visit, walk

__all__ = [
    "ArgKind",
    "Argument",
    "CallSite",
    "ParseError",
    "Position",
    "SourceText",
    "UnsupportedLanguageError",
    "Visit",
    "extract_console_calls",
    "parse_region",
    "walk",
]
