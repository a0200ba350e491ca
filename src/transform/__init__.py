"""Source rewriting pipeline for logging calls."""

from transform.pipeline import TransformResult, collect_splices, emit, transform
from transform.region import Region, SourceUnit, is_sfc, resolve_region

__all__ = [
    "Region",
    "SourceUnit",
    "TransformResult",
    "collect_splices",
    "emit",
    "is_sfc",
    "resolve_region",
    "transform",
]
