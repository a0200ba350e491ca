"""Decide which logging call sites receive injected metadata."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from rules.directives import is_suppressed

if TYPE_CHECKING:
    from collections.abc import Sequence

    from parse.nodes import CallSite
    from rules.config import TransformOptions
    from transform.region import Region, SourceUnit

# printf-style CSS directive; such calls format their own output.
FORMAT_SPECIFIER = "%c"


class Exclusion(str, Enum):
    """Why a call site is left untouched."""

    NO_ARGUMENTS = "no-arguments"
    FORMAT_SPECIFIER = "format-specifier"
    SUPPRESSED = "suppressed"


def check_eligibility(
    site: CallSite,
    *,
    unit: SourceUnit,
    region: Region,
    lines: Sequence[str],
    options: TransformOptions,
) -> Exclusion | None:
    """Return the exclusion reason for ``site``, or None when it is eligible.

    ``lines`` is the SourceUnit text split on newlines; directives are read
    from the raw document, not from the parsed region.
    """
    args_start = site.args_start
    args_end = site.args_end
    if args_start is None or args_end is None:
        return Exclusion.NO_ARGUMENTS

    args_text = unit.text[region.map_offset(args_start) : region.map_offset(args_end)]
    if FORMAT_SPECIFIER in args_text:
        return Exclusion.FORMAT_SPECIFIER

    if is_suppressed(
        lines,
        region.map_line(site.line),
        unit.path,
        path_match=options.directive_path_match,
    ):
        return Exclusion.SUPPRESSED

    return None


__all__ = ["Exclusion", "FORMAT_SPECIFIER", "check_eligibility"]
