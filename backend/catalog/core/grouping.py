"""Bulk Child Grouping — partition flat (parent_key, child) rows by parent.

Invariants:
    - Output has exactly one group per parent key, in parent-key order
    - Parents with no child rows get an empty list, never a missing entry
    - parent_keys must be the very sequence used to scope the child fetch:
      duplicate keys or child rows for a key outside the set raise
      GroupingMismatchError instead of producing shifted groups
    - Child order within a group follows row order

Design Decisions:
    - Keyed dict built once from parent_keys, then read back in parent order:
      no positional zip against a second parent list
"""

from typing import Hashable, Iterable, Sequence, TypeVar

from catalog.core.errors import GroupingMismatchError

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


def group_by_parent(
    parent_keys: Sequence[K], rows: Iterable[tuple[K, T]],
) -> list[list[T]]:
    """Group child rows under their parent keys, preserving parent order."""
    groups: dict[K, list[T]] = {}
    for key in parent_keys:
        if key in groups:
            raise GroupingMismatchError(
                f"Parent key {key!r} appears more than once",
            )
        groups[key] = []

    for key, child in rows:
        group = groups.get(key)
        if group is None:
            raise GroupingMismatchError(
                f"Child row for parent {key!r} outside the fetched parent set",
            )
        group.append(child)

    return [groups[key] for key in parent_keys]
