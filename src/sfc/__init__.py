"""Single-file component (SFC) block extraction."""

from sfc.extract import (
    ExtractError,
    ScriptBlock,
    SfcDescriptor,
    SfcExtractor,
    get_sfc_extractor,
)

__all__ = [
    "ExtractError",
    "ScriptBlock",
    "SfcDescriptor",
    "SfcExtractor",
    "get_sfc_extractor",
]
