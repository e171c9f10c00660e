"""List operations behind the built-in chain methods.

Replacing adapters take the current list and return the new one; the
chain hands the result to Container.set. append/prepend mutate the
list they are given.
"""
from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any


def map_items(seq: list[Any], fn: Callable[[Any], Any]) -> list[Any]:
    return [fn(item) for item in seq]


def filter_items(seq: list[Any], fn: Callable[[Any], object]) -> list[Any]:
    return [item for item in seq if fn(item)]


def reverse_items(seq: list[Any]) -> list[Any]:
    return seq[::-1]


def slice_items(
    seq: list[Any],
    start: int | None = 0,
    end: int | None = None,
) -> list[Any]:
    return seq[start:end]


def splice_items(
    seq: list[Any],
    start: int,
    delete_count: int | None = None,
    *items: Any,
) -> list[Any]:
    """Remove and insert in place; return the removed items.

    A negative start counts from the end. delete_count=None removes
    everything from start onwards.
    """
    begin = max(len(seq) + start, 0) if start < 0 else min(start, len(seq))
    if delete_count is None:
        stop = len(seq)
    else:
        stop = begin + max(delete_count, 0)
    removed = seq[begin:stop]
    seq[begin:stop] = items
    return removed


def sort_items(
    seq: list[Any],
    key: Callable[[Any], Any] | None = None,
    *,
    reverse: bool = False,
    compare: Callable[[Any, Any], int] | None = None,
) -> list[Any]:
    """Sorted copy. compare is a two-argument comparator."""
    if compare is not None:
        key = functools.cmp_to_key(compare)
    return sorted(seq, key=key, reverse=reverse)


def concat_items(seq: list[Any], *values: Any) -> list[Any]:
    """Copy of seq extended by values, flattening list values one level."""
    result = list(seq)
    for value in values:
        if isinstance(value, list):
            result.extend(value)
        else:
            result.append(value)
    return result


def append_items(seq: list[Any], *values: Any) -> int:
    seq.extend(values)
    return len(seq)


def prepend_items(seq: list[Any], *values: Any) -> int:
    seq[:0] = values
    return len(seq)
