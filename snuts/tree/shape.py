"""Library-independent node shapes and the classification predicates over them.

The predicates here only look at a ``NodeShape``; turning parser nodes into
shapes is the adapter's job (see ``_adapter.py``). Swapping the parsing
library means writing a new adapter, not new predicates.
"""

from __future__ import annotations

from dataclasses import dataclass

from snuts.constants import CALL_MODIFIERS, HOOK_NAMES, SUITE_ALIASES, TEST_ALIASES

KIND_CALL = "call"
KIND_FUNCTION = "function"
KIND_STRING = "string"
KIND_OTHER = "other"


@dataclass(frozen=True)
class NodeShape:
    """What the classifiers need to know about one node.

    ``callee`` is the dotted callee path of a call (``("it",)`` or
    ``("it", "skip")``); empty when the callee is not a plain name chain.
    ``args`` holds the kind of each argument in order.
    """

    kind: str
    callee: tuple[str, ...] = ()
    args: tuple[str, ...] = ()
    first_string: str | None = None


@dataclass(frozen=True)
class AliasConfig:
    tests: tuple[str, ...] = TEST_ALIASES
    suites: tuple[str, ...] = SUITE_ALIASES
    hooks: tuple[str, ...] = HOOK_NAMES
    modifiers: tuple[str, ...] = CALL_MODIFIERS


def callee_resolves_to(
    callee: tuple[str, ...], names: tuple[str, ...], modifiers: tuple[str, ...]
) -> bool:
    """True for ``name(...)`` or ``name.modifier(...)`` chains over known modifiers."""
    if not callee or callee[0] not in names:
        return False
    return all(part in modifiers for part in callee[1:])


def is_function_shape(shape: NodeShape) -> bool:
    return shape.kind == KIND_FUNCTION


def _titled_callback(shape: NodeShape) -> bool:
    return (
        len(shape.args) >= 2
        and shape.args[0] == KIND_STRING
        and shape.args[1] == KIND_FUNCTION
    )


def is_test_case_shape(shape: NodeShape, aliases: AliasConfig) -> bool:
    return (
        shape.kind == KIND_CALL
        and callee_resolves_to(shape.callee, aliases.tests, aliases.modifiers)
        and _titled_callback(shape)
    )


def is_describe_shape(shape: NodeShape, aliases: AliasConfig) -> bool:
    return (
        shape.kind == KIND_CALL
        and callee_resolves_to(shape.callee, aliases.suites, aliases.modifiers)
        and _titled_callback(shape)
    )


def is_hook_shape(shape: NodeShape, aliases: AliasConfig) -> bool:
    """Hooks accept ``hook(fn[, timeout])`` as well as ``hook("name", fn)``."""
    if shape.kind != KIND_CALL:
        return False
    if not callee_resolves_to(shape.callee, aliases.hooks, aliases.modifiers):
        return False
    if _titled_callback(shape):
        return True
    return bool(shape.args) and shape.args[0] == KIND_FUNCTION


def count_words(description: str) -> int:
    """Word count after trimming and collapsing internal whitespace."""
    return len(description.split())


__all__ = [
    "AliasConfig",
    "KIND_CALL",
    "KIND_FUNCTION",
    "KIND_OTHER",
    "KIND_STRING",
    "NodeShape",
    "callee_resolves_to",
    "count_words",
    "is_describe_shape",
    "is_function_shape",
    "is_hook_shape",
    "is_test_case_shape",
]
