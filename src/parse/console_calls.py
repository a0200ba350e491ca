"""Tree-sitter based logging call extraction for JavaScript/TypeScript regions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from parse.nodes import ArgKind, Argument, CallSite
from parse.walk import walk

if TYPE_CHECKING:
    from collections.abc import Collection

    from tree_sitter import Node, Tree

    from parse.source import SourceText

DEFAULT_LOGGER_OBJECT = "console"
DEFAULT_METHODS = ("log", "info", "debug", "warn", "error")

_ARG_KINDS: dict[str, ArgKind] = {
    "string": ArgKind.STRING,
    "template_string": ArgKind.TEMPLATE,
    "identifier": ArgKind.IDENTIFIER,
    "number": ArgKind.NUMBER,
}


def _node_text(source: SourceText, node: Node | None) -> str:
    if node is None:
        return ""
    return source.slice_bytes(node.start_byte, node.end_byte).strip()


def _callee_name(
    source: SourceText,
    callee_node: Node | None,
    logger_object: str,
    methods: Collection[str],
) -> str | None:
    """Return ``object.method`` when the callee is a matching logging member."""
    if callee_node is None or callee_node.type != "member_expression":
        return None

    object_node = callee_node.child_by_field_name("object")
    property_node = callee_node.child_by_field_name("property")
    if object_node is None or object_node.type != "identifier":
        return None
    if property_node is None or property_node.type != "property_identifier":
        return None

    object_name = _node_text(source, object_node)
    method_name = _node_text(source, property_node)
    if object_name != logger_object or method_name not in methods:
        return None
    return f"{object_name}.{method_name}"


def _make_argument(source: SourceText, node: Node) -> Argument:
    return Argument(
        start=source.char_offset(node.start_byte),
        end=source.char_offset(node.end_byte),
        kind=_ARG_KINDS.get(node.type, ArgKind.OTHER),
    )


def _make_call_site(source: SourceText, node: Node, callee: str) -> CallSite | None:
    args_node = node.child_by_field_name("arguments")
    # Tagged templates (console.log`x`) carry a template_string here.
    if args_node is None or args_node.type != "arguments":
        return None

    arguments = tuple(
        _make_argument(source, child)
        for child in args_node.named_children
        if child.type != "comment"
    )
    return CallSite(
        start=source.char_offset(node.start_byte),
        end=source.char_offset(node.end_byte),
        callee=callee,
        arguments=arguments,
        line=node.start_point[0] + 1,
        column=source.char_column(node.start_byte),
    )


def extract_console_calls(
    tree: Tree,
    source: SourceText,
    *,
    logger_object: str = DEFAULT_LOGGER_OBJECT,
    methods: Collection[str] = DEFAULT_METHODS,
) -> list[CallSite]:
    """Collect logging call sites in pre-order (source order).

    Calls nested inside another call's arguments are reported on their own;
    the walk never prunes at a matching call.
    """
    call_sites: list[CallSite] = []

    def visit(node: Node) -> None:
        if node.type != "call_expression":
            return
        callee = _callee_name(
            source, node.child_by_field_name("function"), logger_object, methods
        )
        if callee is None:
            return
        call_site = _make_call_site(source, node, callee)
        if call_site is not None:
            call_sites.append(call_site)

    walk(tree.root_node, visit)
    return call_sites


__all__ = ["DEFAULT_LOGGER_OBJECT", "DEFAULT_METHODS", "extract_console_calls"]
