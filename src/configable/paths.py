"""Dotted-path resolution over nested configuration dictionaries."""

from collections.abc import Iterator
from typing import Any

SEPARATOR = "."


def split_path(path: str) -> list[str]:
    """Split a dotted path into segments.

    Empty segments are kept, so ``"a..b"`` addresses the key ``""`` inside
    ``a``.

    Examples:
        >>> split_path("server.port")
        ['server', 'port']

        >>> split_path("a..b")
        ['a', '', 'b']
    """
    return path.split(SEPARATOR)


def join_path(prefix: str, key: str) -> str:
    """Join a parent path and a child key."""
    return f"{prefix}{SEPARATOR}{key}" if prefix else key


def resolve(tree: dict[str, Any], path: str, create: bool = False) -> tuple[dict[str, Any], str] | None:
    """Locate the container holding the last segment of a path.

    Walks every segment but the last. A missing intermediate, or one that
    holds a non-dict value, is replaced by a new empty dict when ``create``
    is set; otherwise resolution fails.

    Args:
        tree: Root dictionary to walk
        path: Dotted path
        create: Insert missing intermediate sections

    Returns:
        ``(container, leaf_key)``, or None if an intermediate is missing

    Examples:
        >>> tree = {"a": {"b": 1}}
        >>> resolve(tree, "a.b")
        ({'b': 1}, 'b')

        >>> resolve(tree, "x.y") is None
        True

        >>> resolve(tree, "x.y", create=True)
        ({}, 'y')
    """
    *parents, leaf = split_path(path)
    node = tree

    for segment in parents:
        child = node.get(segment)
        if not isinstance(child, dict):
            if not create:
                return None
            child = {}
            node[segment] = child
        node = child

    return node, leaf


def iter_keys(tree: dict[str, Any], deep: bool = False, prefix: str = "") -> Iterator[str]:
    """Yield key paths of a tree.

    With ``deep`` every intermediate section and every leaf is yielded as a
    dot-joined path; otherwise only the immediate children.
    """
    for key, value in tree.items():
        path = join_path(prefix, key)
        yield path
        if deep and isinstance(value, dict):
            yield from iter_keys(value, deep=True, prefix=path)


def iter_leaves(tree: dict[str, Any], prefix: str = "") -> Iterator[tuple[str, Any]]:
    """Yield ``(path, value)`` for every non-section value of a tree."""
    for key, value in tree.items():
        path = join_path(prefix, key)
        if isinstance(value, dict):
            yield from iter_leaves(value, prefix=path)
        else:
            yield path, value
