"""Depth-first tree traversal with subtree pruning."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from tree_sitter import Node


class Visit(Enum):
    """Signal a visitor returns to steer the walk."""

    CONTINUE = "continue"
    SKIP = "skip"


def walk(root: Node, visitor: Callable[[Node], Visit | None]) -> None:
    """Visit ``root`` and its descendants in pre-order, source order.

    Returning ``Visit.SKIP`` from the visitor prunes the children of the
    node just visited; siblings are still visited.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        if visitor(node) is Visit.SKIP:
            continue
        stack.extend(reversed(node.children))


__all__ = ["Visit", "walk"]
