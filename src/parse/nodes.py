"""Positions, arguments and call sites produced by the parse layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Position:
    """A point inside a document.

    ``line`` is 1-based when it describes a node and carries the
    decremented start line when used as a region origin. ``column`` and
    ``offset`` are 0-based character counts.
    """

    line: int
    column: int
    offset: int


ORIGIN = Position(line=0, column=0, offset=0)


class ArgKind(str, Enum):
    """Syntactic kind of a logging call argument."""

    STRING = "StringLiteral"
    TEMPLATE = "TemplateLiteral"
    IDENTIFIER = "Identifier"
    NUMBER = "NumericLiteral"
    OTHER = "Expression"


@dataclass(frozen=True)
class Argument:
    """One argument of a call, as a ``[start, end)`` character span."""

    start: int
    end: int
    kind: ArgKind


@dataclass(frozen=True)
class CallSite:
    """A logging call expression found inside a region.

    Offsets are relative to the region text. ``line`` is 1-based and
    ``column`` 0-based, both relative to the region as well.
    """

    start: int
    end: int
    callee: str
    arguments: tuple[Argument, ...]
    line: int
    column: int

    @property
    def args_start(self) -> int | None:
        if not self.arguments:
            return None
        return self.arguments[0].start

    @property
    def args_end(self) -> int | None:
        if not self.arguments:
            return None
        return self.arguments[-1].end

    @property
    def first_kind(self) -> ArgKind | None:
        if not self.arguments:
            return None
        return self.arguments[0].kind


__all__ = ["ArgKind", "Argument", "CallSite", "ORIGIN", "Position"]
