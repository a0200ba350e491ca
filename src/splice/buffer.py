"""Offset-indexed insertions over an unmodified original text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class SpliceError(Exception):
    """Raised when a splice does not fit the text it is applied to."""


class Side(str, Enum):
    """Which neighbour an insertion sticks to.

    LEFT text attaches to the content before ``offset`` and RIGHT text to
    the content after it; at one offset LEFT insertions render first.
    """

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Splice:
    """Insert ``text`` at character ``offset`` of the original text.

    ``origin`` is the original offset the inserted text maps back to in the
    source map; it defaults to ``offset``.
    """

    offset: int
    side: Side
    text: str
    origin: int | None = None

    @property
    def source_offset(self) -> int:
        return self.offset if self.origin is None else self.origin


@dataclass(frozen=True)
class Segment:
    """A run of output text and the original offset it starts at."""

    text: str
    source_offset: int
    inserted: bool


_SIDE_ORDER = {Side.LEFT: 0, Side.RIGHT: 1}


@dataclass(frozen=True)
class SpliceSet:
    """Immutable collection of insertions, consumed by the emitter."""

    operations: tuple[Splice, ...] = ()

    @classmethod
    def of(cls, operations: Iterable[Splice]) -> SpliceSet:
        return cls(tuple(operations))

    def __len__(self) -> int:
        return len(self.operations)

    def __bool__(self) -> bool:
        return bool(self.operations)

    def ordered(self) -> list[Splice]:
        """Operations by offset, LEFT before RIGHT, then insertion order."""
        indexed = sorted(
            enumerate(self.operations),
            key=lambda item: (item[1].offset, _SIDE_ORDER[item[1].side], item[0]),
        )
        return [op for _, op in indexed]

    def segments(self, text: str) -> list[Segment]:
        """Split the output into original and inserted runs, in order."""
        out: list[Segment] = []
        cursor = 0
        for op in self.ordered():
            if op.offset < 0 or op.offset > len(text):
                msg = f"Splice offset {op.offset} outside text of length {len(text)}"
                raise SpliceError(msg)
            if op.offset > cursor:
                out.append(Segment(text[cursor : op.offset], cursor, inserted=False))
                cursor = op.offset
            if op.text:
                out.append(Segment(op.text, op.source_offset, inserted=True))
        if cursor < len(text):
            out.append(Segment(text[cursor:], cursor, inserted=False))
        return out

    def apply(self, text: str) -> str:
        if not self.operations:
            return text
        return "".join(segment.text for segment in self.segments(text))


__all__ = ["Segment", "Side", "Splice", "SpliceError", "SpliceSet"]
