"""Accessors for deserialized XML documents.

Transformers receive XML already turned into nested dicts: attributes under
``@``-prefixed keys, element text under ``#text``, repeated children as
lists. Deserializers differ on the details (a single child may be a dict
rather than a one-item list, a text-only element may be a bare string), so
transformers read nodes through these helpers only.
"""

from __future__ import annotations

from typing import Any


def children(node: Any, tag: str) -> list[Any]:
    """Return the child elements named ``tag`` as a list (possibly empty)."""
    if not isinstance(node, dict):
        return []
    value = node.get(tag)
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def first(node: Any, tag: str) -> Any | None:
    """Return the first child element named ``tag``, or None."""
    found = children(node, tag)
    return found[0] if found else None


def attr(node: Any, name: str) -> str | None:
    """Return the attribute ``name`` of an element, or None."""
    if not isinstance(node, dict):
        return None
    value = node.get(f"@{name}")
    if value is None:
        return None
    return str(value)


def text(node: Any) -> str | None:
    """Return the text content of an element, or None when it has none."""
    if node is None:
        return None
    if isinstance(node, str):
        return node or None
    if isinstance(node, dict):
        value = node.get("#text")
        return str(value) if value else None
    return str(node)


def child_text(node: Any, tag: str) -> str | None:
    """Return the text content of the first child named ``tag``."""
    return text(first(node, tag))


def pairs(node: Any, container: str, item: str) -> list[tuple[str, str]]:
    """Collect name/value pairs such as ``<properties><property name value/>``."""
    collected = []
    for group in children(node, container):
        for entry in children(group, item):
            name = attr(entry, "name")
            if name is None:
                continue
            collected.append((name, attr(entry, "value") or ""))
    return collected
