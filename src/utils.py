"""Shared path utilities for bundler module ids."""

from __future__ import annotations

from pathlib import Path, PurePosixPath


def strip_query(file_id: str) -> str:
    """Drop a bundler query string from a module id.

    Examples:
        >>> strip_query("src/App.vue?vue&type=script&lang.ts")
        'src/App.vue'
        >>> strip_query("src/main.ts")
        'src/main.ts'
    """
    return file_id.split("?", 1)[0]


def normalize_id(file_id: str) -> str:
    """Return the query-free id with forward slashes."""
    return strip_query(file_id).replace("\\", "/")


def lang_from_path(file_id: str) -> str:
    """Return the lowercase extension of a module id, without the dot.

    Examples:
        >>> lang_from_path("src/components/Button.tsx")
        'tsx'
        >>> lang_from_path("src/App.vue?vue&type=script")
        'vue'
        >>> lang_from_path("Makefile")
        ''
    """
    suffix = PurePosixPath(normalize_id(file_id)).suffix
    return suffix[1:].lower() if suffix else ""


def file_identifier(file_id: str, extended_names: list[str] | None = None) -> str:
    """Return the short file label rendered next to a log line.

    File stems listed in ``extended_names`` (``index`` by default in the
    options) are ambiguous on their own, so they keep their parent directory.

    Examples:
        >>> file_identifier("/repo/src/app.ts")
        'app.ts'
        >>> file_identifier("/repo/src/store/index.ts", ["index"])
        'store/index.ts'
    """
    path = PurePosixPath(normalize_id(file_id))
    if extended_names and path.stem in extended_names and path.parent.name:
        return f"{path.parent.name}/{path.name}"
    return path.name


def relative_id(file_id: str, root: str | Path | None) -> str:
    """Express a module id relative to ``root`` when it lies inside it."""
    normalized = normalize_id(file_id)
    if root is None:
        return normalized

    root_posix = Path(root).as_posix().rstrip("/")
    if normalized.startswith(root_posix + "/"):
        return normalized[len(root_posix) + 1 :]
    return normalized
