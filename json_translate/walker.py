"""
Depth-first walk over a decoded JSON value.

A JSON value here is whatever json.load returns: dict, list, str, int, float,
bool or None. The walk rebuilds every container and replaces each string leaf
with the result of a caller-supplied resolve function. Object keys and
non-string scalars are copied through untouched.

Both walks keep an explicit stack instead of recursing, so nesting depth is
bounded by what the JSON parser accepts, not by the interpreter's recursion
limit.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from json_translate.errors import TranslationError

Resolver = Callable[[str], str]


def translate_value(value: Any, resolve: Resolver) -> Any:
    """
    Return a copy of `value` with every string leaf replaced by resolve(leaf).

    Args:
        value:   decoded JSON value (the original is never modified)
        resolve: maps a source string to its translation

    Returns:
        A new value with the same shape: same container types, same keys in
        the same order, same list lengths.

    Raises:
        TranslationError: as soon as resolve fails for any leaf. The walk does
            not continue past a failure, and the error carries the text that
            could not be translated.
    """
    root: list[Any] = [None]
    # (container being built, slot in it, source node); children are pushed
    # in reverse so they pop in insertion order.
    stack: list[tuple[Any, Any, Any]] = [(root, 0, value)]

    while stack:
        target, slot, node = stack.pop()
        if isinstance(node, dict):
            copy = dict.fromkeys(node)
            target[slot] = copy
            stack.extend((copy, key, node[key]) for key in reversed(node))
        elif isinstance(node, list):
            copy = [None] * len(node)
            target[slot] = copy
            stack.extend((copy, i, node[i]) for i in reversed(range(len(node))))
        elif isinstance(node, str):
            target[slot] = _resolve_leaf(node, resolve)
        else:
            target[slot] = node

    return root[0]


def _resolve_leaf(text: str, resolve: Resolver) -> str:
    if not text:
        return text
    try:
        return resolve(text)
    except TranslationError as exc:
        if exc.text is None:
            exc.text = text
        raise
    except Exception as exc:
        raise TranslationError(f"Translation failed: {exc}", text=text) from exc


def iter_strings(value: Any) -> Iterator[str]:
    """Yield every non-empty string leaf of `value` in walk order."""
    stack = [value]
    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            stack.extend(reversed(list(node.values())))
        elif isinstance(node, list):
            stack.extend(reversed(node))
        elif isinstance(node, str) and node:
            yield node
