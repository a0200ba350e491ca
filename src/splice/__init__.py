"""Text splicing and source maps for rewritten modules."""

from splice.buffer import Segment, Side, Splice, SpliceError, SpliceSet
from splice.sourcemap import OriginalPosition, SourceMap, build_source_map

__all__ = [
    "OriginalPosition",
    "Segment",
    "Side",
    "SourceMap",
    "Splice",
    "SpliceError",
    "SpliceSet",
    "build_source_map",
]
