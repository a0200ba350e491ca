"""Source Map v3 generation and lookup for spliced text.

Every original run gets a mapping where it starts and at the start of each
following line inside it; inserted runs map to their splice origin.
Columns count characters.
"""

from __future__ import annotations

from base64 import b64encode
from bisect import bisect_right
from dataclasses import dataclass
from typing import TYPE_CHECKING

import orjson
from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from splice.buffer import SpliceSet

_BASE64 = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_BASE64_VALUES = {char: index for index, char in enumerate(_BASE64)}
_VLQ_SHIFT = 5
_VLQ_MASK = (1 << _VLQ_SHIFT) - 1
_VLQ_CONTINUATION = 1 << _VLQ_SHIFT

SOURCE_MAP_VERSION = 3


def encode_vlq(value: int) -> str:
    """Encode one signed integer as a base64 VLQ string."""
    vlq = (-value << 1) | 1 if value < 0 else value << 1
    out = []
    while True:
        digit = vlq & _VLQ_MASK
        vlq >>= _VLQ_SHIFT
        if vlq:
            digit |= _VLQ_CONTINUATION
        out.append(_BASE64[digit])
        if not vlq:
            return "".join(out)


def decode_vlq(segment: str) -> list[int]:
    """Decode a base64 VLQ segment into its signed integers."""
    values: list[int] = []
    shift = 0
    accum = 0
    for char in segment:
        try:
            digit = _BASE64_VALUES[char]
        except KeyError:
            msg = f"Invalid base64 VLQ character '{char}'"
            raise ValueError(msg) from None
        accum += (digit & _VLQ_MASK) << shift
        if digit & _VLQ_CONTINUATION:
            shift += _VLQ_SHIFT
            continue
        values.append(-(accum >> 1) if accum & 1 else accum >> 1)
        shift = 0
        accum = 0
    if shift:
        msg = "Truncated base64 VLQ segment"
        raise ValueError(msg)
    return values


@dataclass(frozen=True)
class OriginalPosition:
    """A position in a source file: 1-based line, 0-based column."""

    source: str
    line: int
    column: int


class _LineIndex:
    def __init__(self, text: str) -> None:
        self._starts = [0]
        for index, char in enumerate(text):
            if char == "\n":
                self._starts.append(index + 1)

    def locate(self, offset: int) -> tuple[int, int]:
        """Return the 0-based (line, column) of a character offset."""
        line = bisect_right(self._starts, offset) - 1
        return line, offset - self._starts[line]


class SourceMap(BaseModel):
    """A Source Map v3 object."""

    model_config = ConfigDict(populate_by_name=True)

    version: int = SOURCE_MAP_VERSION
    file: str | None = None
    sources: list[str]
    sources_content: list[str | None] | None = Field(
        default=None, alias="sourcesContent"
    )
    names: list[str] = Field(default_factory=list)
    mappings: str = ""

    def to_dict(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return orjson.dumps(self.to_dict()).decode("utf8")

    def to_url(self) -> str:
        """Render the map as a ``data:`` URL for inline sourceMappingURL comments."""
        payload = b64encode(orjson.dumps(self.to_dict())).decode("ascii")
        return f"data:application/json;charset=utf-8;base64,{payload}"

    def decoded(self) -> list[list[tuple[int, int, int, int]]]:
        """Absolute ``(gen_col, source, orig_line, orig_col)`` per output line."""
        lines: list[list[tuple[int, int, int, int]]] = []
        source = orig_line = orig_col = 0
        for raw_line in self.mappings.split(";"):
            gen_col = 0
            decoded_line: list[tuple[int, int, int, int]] = []
            for raw_segment in raw_line.split(","):
                if not raw_segment:
                    continue
                values = decode_vlq(raw_segment)
                gen_col += values[0]
                if len(values) >= 4:
                    source += values[1]
                    orig_line += values[2]
                    orig_col += values[3]
                    decoded_line.append((gen_col, source, orig_line, orig_col))
            lines.append(decoded_line)
        return lines

    def original_position_for(self, line: int, column: int) -> OriginalPosition | None:
        """Resolve a generated position (1-based line, 0-based column).

        Like other source map consumers, the closest mapping at or before
        ``column`` wins and its original position is returned as is.
        """
        decoded = self.decoded()
        if not 1 <= line <= len(decoded):
            return None

        best: tuple[int, int, int, int] | None = None
        for segment in decoded[line - 1]:
            if segment[0] > column:
                break
            best = segment
        if best is None:
            return None

        _, source, orig_line, orig_col = best
        return OriginalPosition(
            source=self.sources[source], line=orig_line + 1, column=orig_col
        )


def _encode(lines: list[list[tuple[int, int, int]]]) -> str:
    out_lines: list[str] = []
    prev_line = prev_col = 0
    for segments in lines:
        prev_gen_col = 0
        encoded: list[str] = []
        for gen_col, orig_line, orig_col in segments:
            encoded.append(
                encode_vlq(gen_col - prev_gen_col)
                + encode_vlq(0)
                + encode_vlq(orig_line - prev_line)
                + encode_vlq(orig_col - prev_col)
            )
            prev_gen_col = gen_col
            prev_line = orig_line
            prev_col = orig_col
        out_lines.append(",".join(encoded))
    return ";".join(out_lines)


def build_source_map(
    text: str,
    splices: SpliceSet,
    *,
    source: str,
    file: str | None = None,
    include_content: bool = False,
) -> SourceMap:
    """Build the map from ``splices`` applied over original ``text``."""
    index = _LineIndex(text)
    lines: list[list[tuple[int, int, int]]] = [[]]
    gen_col = 0

    for segment in splices.segments(text):
        if segment.inserted:
            orig_line, orig_col = index.locate(segment.source_offset)
            lines[-1].append((gen_col, orig_line, orig_col))
            for char in segment.text:
                if char == "\n":
                    lines.append([])
                    gen_col = 0
                else:
                    gen_col += 1
            continue

        orig_line, orig_col = index.locate(segment.source_offset)
        lines[-1].append((gen_col, orig_line, orig_col))
        piece = segment.text
        for position, char in enumerate(piece):
            if char != "\n":
                gen_col += 1
                continue
            lines.append([])
            gen_col = 0
            if position + 1 < len(piece):
                lines[-1].append((0, orig_line + 1, 0))
            orig_line += 1

    return SourceMap(
        file=file,
        sources=[source],
        sources_content=[text] if include_content else None,
        mappings=_encode(lines),
    )


__all__ = [
    "OriginalPosition",
    "SOURCE_MAP_VERSION",
    "SourceMap",
    "build_source_map",
    "decode_vlq",
    "encode_vlq",
]
