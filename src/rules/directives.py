"""Inline comments that switch off metadata injection.

Recognized forms, in line or block comments:

- ``consoleline-disable-line [path]`` on the line of the call;
- ``consoleline-disable-next-line [path]`` on the line above the call;
- ``consoleline-disable [path]`` on the first line of the file.

An optional path qualifier limits a directive to matching module ids.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from fnmatch import fnmatch
from typing import TYPE_CHECKING

from utils import normalize_id

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rules.config import DirectivePathMatch

DIRECTIVE_TOKEN = "consoleline-disable"

_DIRECTIVE_PATTERN = re.compile(
    r"(?://|/\*)\s*consoleline-disable(?P<scope>-line|-next-line)?(?![\w-])"
    r"(?:[ \t]+(?P<path>[^\s*]+))?"
)


class DirectiveScope(str, Enum):
    FILE = "file"
    LINE = "line"
    NEXT_LINE = "next-line"


_SCOPES = {
    None: DirectiveScope.FILE,
    "-line": DirectiveScope.LINE,
    "-next-line": DirectiveScope.NEXT_LINE,
}


@dataclass(frozen=True)
class Directive:
    """A suppression comment found on a 1-based ``line``."""

    scope: DirectiveScope
    line: int
    path: str | None = None

    def applies_to(self, file_id: str, path_match: DirectivePathMatch = "suffix") -> bool:
        if self.path is None:
            return True

        target = normalize_id(file_id)
        qualifier = self.path.replace("\\", "/")
        if path_match == "glob":
            return fnmatch(target, qualifier)

        qualifier = qualifier.removeprefix("./")
        return target == qualifier or target.endswith("/" + qualifier)


def parse_directives(line_text: str, line: int) -> list[Directive]:
    """Return every directive written on one line."""
    return [
        Directive(
            scope=_SCOPES[match.group("scope")],
            line=line,
            path=match.group("path"),
        )
        for match in _DIRECTIVE_PATTERN.finditer(line_text)
    ]


def _line_at(lines: Sequence[str], line: int) -> str:
    if 1 <= line <= len(lines):
        return lines[line - 1]
    return ""


def is_suppressed(
    lines: Sequence[str],
    line: int,
    file_id: str,
    *,
    path_match: DirectivePathMatch = "suffix",
) -> bool:
    """Check whether a call on 1-based document ``line`` is switched off."""
    candidates = (
        (1, DirectiveScope.FILE),
        (line, DirectiveScope.LINE),
        (line - 1, DirectiveScope.NEXT_LINE),
    )
    for line_number, scope in candidates:
        text = _line_at(lines, line_number)
        if DIRECTIVE_TOKEN not in text:
            continue
        for directive in parse_directives(text, line_number):
            if directive.scope is scope and directive.applies_to(file_id, path_match):
                return True
    return False


__all__ = [
    "DIRECTIVE_TOKEN",
    "Directive",
    "DirectiveScope",
    "is_suppressed",
    "parse_directives",
]
