"""Hierarchical metadata resolution.

Metadata flows down the tree (assembly -> suite -> case) by copying the
parent's map and applying the child's own pairs on top. A child can add or
override keys, never remove inherited ones, and it never writes through to
its parent or siblings.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

Pairs = Mapping[str, str] | Iterable[tuple[str, str]]


def resolve_metadata(parent: Mapping[str, str] | None, own_pairs: Pairs | None = None) -> dict[str, str]:
    """Return a copy of ``parent`` with ``own_pairs`` applied (own wins).

    Args:
        parent: Inherited metadata snapshot. Never mutated.
        own_pairs: The child's own key/value pairs, as a mapping or an
            iterable of (key, value) tuples, applied in order.

    Returns:
        A new dict owned by the caller.
    """
    resolved = dict(parent) if parent else {}
    if own_pairs:
        items = own_pairs.items() if isinstance(own_pairs, Mapping) else own_pairs
        for key, value in items:
            resolved[key] = value
    return resolved


def merge_csv(existing: str | None, values: Iterable[str]) -> str:
    """Extend a comma-joined list with new values.

    Order is first-seen, duplicates and blank items are dropped.

    >>> merge_csv("FixtureCategory", ["MockCategory", "FixtureCategory"])
    'FixtureCategory,MockCategory'
    """
    merged: list[str] = []
    for item in [*(existing.split(",") if existing else []), *values]:
        if item and item not in merged:
            merged.append(item)
    return ",".join(merged)
