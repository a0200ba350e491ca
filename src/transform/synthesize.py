"""Render the metadata spliced into an eligible logging call.

The prefix is a run of string-literal arguments inserted before the first
original argument, the suffix a run appended after the last one. The
original argument list is never reordered or shortened.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import orjson

from parse.nodes import ArgKind
from splice.buffer import Side, Splice
from utils import file_identifier, relative_id

if TYPE_CHECKING:
    from parse.nodes import CallSite
    from rules.config import TransformOptions
    from transform.region import Region, SourceUnit

_SNAPSHOT_STRIP = str.maketrans("", "", '`\n"')

# First-argument kinds whose source is already readable in the console.
_SELF_DESCRIBING = frozenset({ArgKind.STRING, ArgKind.NUMBER})


@dataclass(frozen=True)
class CallMetadata:
    """Document coordinates and argument echo for one call site."""

    line: int
    column: int
    call_offset: int
    args_start: int
    args_end: int
    arg_kind: ArgKind
    snapshot: str


def js_string(value: str) -> str:
    """Quote ``value`` as a JavaScript string literal."""
    return orjson.dumps(value).decode("utf8")


def snapshot_args(args_text: str) -> str:
    """Single-line, quote-free echo of the argument source."""
    return args_text.translate(_SNAPSHOT_STRIP)


def locate(site: CallSite, unit: SourceUnit, region: Region) -> CallMetadata:
    """Map a region call site onto the coordinates of the whole document."""
    if not site.arguments:
        msg = f"Call at {site.line}:{site.column} has no arguments to anchor on"
        raise ValueError(msg)

    args_start = region.map_offset(site.arguments[0].start)
    args_end = region.map_offset(site.arguments[-1].end)
    return CallMetadata(
        line=region.map_line(site.line),
        column=site.column,
        call_offset=region.map_offset(site.start),
        args_start=args_start,
        args_end=args_end,
        arg_kind=site.arguments[0].kind,
        snapshot=snapshot_args(unit.text[args_start:args_end]),
    )


def _location_label(meta: CallMetadata, path: str, options: TransformOptions) -> str:
    location = (
        file_identifier(path, options.extended_path_file_names)
        if options.show_file
        else ""
    )
    if options.show_line:
        location = f"{location}:{meta.line}" if location else str(meta.line)
        if options.show_column:
            location = f"{location}:{meta.column}"

    label = " ".join(part for part in (options.prefix, location) if part)
    if options.show_args and meta.snapshot and meta.arg_kind not in _SELF_DESCRIBING:
        label = f"{label} ~ {meta.snapshot}" if label else meta.snapshot
    return label


def render_prefix(meta: CallMetadata, path: str, options: TransformOptions) -> str:
    """Arguments inserted before the first original argument, comma included."""
    values: list[str] = []

    label = _location_label(meta, path, options)
    if label and options.highlight:
        values.extend((f"%c{label}", options.highlight_style))
    elif label:
        values.append(label)

    if options.launch_editor:
        target = relative_id(path, options.root)
        values.append(
            f"http://localhost:{options.port}"
            f"?path={target}:{meta.line}:{meta.column + 1}"
        )

    return "".join(f"{js_string(value)}," for value in values)


def render_suffix(meta: CallMetadata, options: TransformOptions) -> str:
    """Arguments appended after the last original argument, comma included."""
    values: list[str] = []
    if options.suffix:
        values.append(options.suffix)
    if options.arg_type_tag:
        values.append(meta.arg_kind.value)
    return "".join(f",{js_string(value)}" for value in values)


def synthesize(
    site: CallSite,
    *,
    unit: SourceUnit,
    region: Region,
    options: TransformOptions,
) -> list[Splice]:
    """Produce the insertions for one eligible call site."""
    meta = locate(site, unit, region)

    splices: list[Splice] = []
    prefix = render_prefix(meta, unit.path, options)
    if prefix:
        splices.append(Splice(meta.args_start, Side.LEFT, prefix, meta.call_offset))
    suffix = render_suffix(meta, options)
    if suffix:
        splices.append(Splice(meta.args_end, Side.RIGHT, suffix, meta.call_offset))
    return splices


__all__ = [
    "CallMetadata",
    "js_string",
    "locate",
    "render_prefix",
    "render_suffix",
    "snapshot_args",
    "synthesize",
]
