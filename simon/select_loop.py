"""Circular selection container used by every list in the UI."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

from .errors import EmptySelectionError

T = TypeVar("T")


class SelectLoop(Generic[T]):
    """Fixed ordered items plus a cursor that wraps at both ends.

    Contents never change after construction, so the cursor always points at
    a valid item.
    """

    def __init__(self, items: Iterable[T], label: str = "selection") -> None:
        self._items: tuple[T, ...] = tuple(items)
        if not self._items:
            raise EmptySelectionError(f"{label} is empty")
        self._index = 0

    @property
    def items(self) -> tuple[T, ...]:
        return self._items

    @property
    def index(self) -> int:
        return self._index

    def next(self) -> None:
        """Advance one item, wrapping from last to first."""
        self._index = (self._index + 1) % len(self._items)

    def previous(self) -> None:
        """Step back one item, wrapping from first to last."""
        self._index = self._index - 1 if self._index > 0 else len(self._items) - 1

    def current(self) -> T:
        return self._items[self._index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"SelectLoop(len={len(self._items)}, index={self._index})"


__all__ = ["SelectLoop"]
