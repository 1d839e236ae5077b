"""Tree-sitter adapter: node shapes, text slices, comments, and positions."""

from __future__ import annotations

from collections.abc import Iterator

from tree_sitter import Node

from snuts.tree.shape import (
    KIND_CALL,
    KIND_FUNCTION,
    KIND_OTHER,
    KIND_STRING,
    NodeShape,
)

FUNCTION_NODE_TYPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        # Older javascript grammars call function expressions "function".
        "function",
        "function_expression",
        "generator_function",
        "arrow_function",
        # Object methods, class methods and #private methods.
        "method_definition",
    }
)
COMMENT_NODE_TYPE = "comment"


def node_text(node: Node) -> str:
    return (node.text or b"").decode("utf-8", errors="replace")


_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v"}
_LINE_TERMINATORS = ("\r\n", "\n", "\r", "\u2028", "\u2029")


def unescape_sequence(sequence: str) -> str:
    """Value of one escape sequence such as ``\\n``, ``\\x41`` or ``\\u{1F600}``."""
    body = sequence[1:]
    if not body or body in _LINE_TERMINATORS:
        # Line continuation.
        return ""
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    if body[0] in "xu" and len(body) > 1:
        try:
            return chr(int(body[1:].strip("{}"), 16))
        except ValueError:
            return body
    if body.isdigit() and all(c in "01234567" for c in body):
        return chr(int(body, 8))
    return body


def string_value(node: Node) -> str:
    """Value of a string literal: quotes dropped, escapes resolved."""
    return "".join(
        unescape_sequence(node_text(child))
        if child.type == "escape_sequence"
        else node_text(child)
        for child in node.named_children
    )


def call_arguments(node: Node) -> list[Node]:
    args = node.child_by_field_name("arguments")
    if args is None:
        return []
    return [c for c in args.named_children if c.type != COMMENT_NODE_TYPE]


def callee_path(node: Node | None) -> tuple[str, ...]:
    if node is None:
        return ()
    if node.type == "identifier":
        return (node_text(node),)
    if node.type == "member_expression":
        obj = callee_path(node.child_by_field_name("object"))
        prop = node.child_by_field_name("property")
        if not obj or prop is None or prop.type != "property_identifier":
            return ()
        return (*obj, node_text(prop))
    return ()


def root_identifier(node: Node | None) -> str | None:
    """Follow member/call chains down to the identifier they start from.

    ``expect(a).not.toBe(b)`` roots at ``expect``.
    """
    current = node
    while current is not None:
        if current.type == "identifier":
            return node_text(current)
        if current.type == "member_expression":
            current = current.child_by_field_name("object")
        elif current.type == "call_expression":
            current = current.child_by_field_name("function")
        else:
            return None
    return None


def _kind(node: Node) -> str:
    if node.type in FUNCTION_NODE_TYPES:
        return KIND_FUNCTION
    if node.type == "string":
        return KIND_STRING
    if node.type == "call_expression":
        return KIND_CALL
    return KIND_OTHER


def node_shape(node: Node) -> NodeShape:
    kind = _kind(node)
    if kind != KIND_CALL:
        return NodeShape(kind=kind)
    args = call_arguments(node)
    first_string = string_value(args[0]) if args and args[0].type == "string" else None
    return NodeShape(
        kind=KIND_CALL,
        callee=callee_path(node.child_by_field_name("function")),
        args=tuple(_kind(a) for a in args),
        first_string=first_string,
    )


def iter_descendants(node: Node) -> Iterator[Node]:
    """Depth-first, source-ordered walk that excludes ``node`` itself."""
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def leading_comments(node: Node) -> list[Node]:
    comments: list[Node] = []
    sibling = node.prev_sibling
    while sibling is not None and sibling.type == COMMENT_NODE_TYPE:
        comments.append(sibling)
        sibling = sibling.prev_sibling
    comments.reverse()
    return comments


def trailing_comments(node: Node) -> list[Node]:
    """Comments after ``node`` that start on the row where it ends.

    Comments on later rows belong to the next statement as leading comments.
    """
    comments: list[Node] = []
    end_row = node.end_point[0]
    sibling = node.next_sibling
    while (
        sibling is not None
        and sibling.type == COMMENT_NODE_TYPE
        and sibling.start_point[0] == end_row
    ):
        comments.append(sibling)
        sibling = sibling.next_sibling
    return comments


def inner_comments(node: Node) -> list[Node]:
    return [n for n in iter_descendants(node) if n.type == COMMENT_NODE_TYPE]


def char_column(byte_offset: int, byte_column: int, source: bytes) -> int:
    """Convert a tree-sitter byte column to a character column."""
    line_start = byte_offset - byte_column
    return len(source[line_start:byte_offset].decode("utf-8", errors="replace"))


def contains(outer: Node, inner: Node) -> bool:
    """True when ``inner`` lies inside ``outer`` and is not ``outer`` itself."""
    if outer.start_byte > inner.start_byte or inner.end_byte > outer.end_byte:
        return False
    return (outer.start_byte, outer.end_byte, outer.type) != (
        inner.start_byte,
        inner.end_byte,
        inner.type,
    )
