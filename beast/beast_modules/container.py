"""Container owning the wrapped list."""
from __future__ import annotations


class Container:
    """Holds the wrapped list.

    get() hands out the live list by reference. set() accepts only
    lists; anything else is ignored and the current list is kept.
    """

    def __init__(self, sequence: object = None) -> None:
        self._sequence: list[object] = []
        self.set(sequence)

    def get(self) -> list[object]:
        return self._sequence

    def set(self, candidate: object) -> None:
        if isinstance(candidate, list):
            self._sequence = candidate
