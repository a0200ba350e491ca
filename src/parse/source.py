"""Source text paired with its UTF-8 encoding.

Tree-sitter reports byte offsets and byte columns; everything downstream of
the parse layer works in character offsets over Python ``str`` text.
"""

from __future__ import annotations


class SourceText:
    """Text plus its UTF-8 bytes, with byte -> character conversions."""

    __slots__ = ("text", "data", "_ascii")

    def __init__(self, text: str) -> None:
        self.text = text
        self.data = text.encode("utf8")
        self._ascii = len(self.data) == len(text)

    def char_offset(self, byte_offset: int) -> int:
        """Convert a byte offset into a character offset."""
        if self._ascii:
            return byte_offset
        return len(self.data[:byte_offset].decode("utf8", errors="ignore"))

    def char_column(self, byte_offset: int) -> int:
        """Return the 0-based character column of a byte offset."""
        line_start = self.data.rfind(b"\n", 0, byte_offset) + 1
        if self._ascii:
            return byte_offset - line_start
        return len(self.data[line_start:byte_offset].decode("utf8", errors="ignore"))

    def slice_bytes(self, start_byte: int, end_byte: int) -> str:
        return self.data[start_byte:end_byte].decode("utf8", errors="ignore")


__all__ = ["SourceText"]
