"""A fixed-capacity array that refuses to grow past its capacity."""

from __future__ import annotations

from typing import Any, Generic, Iterator, List, TypeVar

T = TypeVar("T")


class BoundedArray(Generic[T]):
    """Sequence with a fixed capacity; adding beyond it raises OverflowError."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self._items: List[T] = []

    def _check_index(self, idx: int) -> None:
        if not 0 <= idx < len(self._items):
            raise IndexError(f"index {idx} out of range for {len(self._items)} items")

    def clear(self) -> None:
        """Drop all items, keeping the capacity."""
        self._items.clear()

    def copy(self) -> "BoundedArray[T]":
        """Return a new array sized exactly to hold this one's items."""
        result: BoundedArray[T] = BoundedArray(len(self._items))
        result.extend(self)
        return result

    def extend(self, other: "BoundedArray[T]") -> None:
        """Append every item of other; all or nothing if they would not fit."""
        if len(self._items) + len(other) > self.capacity:
            raise OverflowError("not enough capacity to extend array")
        self._items.extend(other)

    def release(self) -> None:
        """Drop all items and give up the capacity."""
        self._items = []
        self.capacity = 0

    def add(self, item: T) -> None:
        """Append an item."""
        if len(self._items) >= self.capacity:
            raise OverflowError("array is full")
        self._items.append(item)

    def add_unique(self, item: T) -> None:
        """Append an item unless an equal one is already present."""
        if item not in self._items:
            self.add(item)

    def index_of(self, item: Any) -> int:
        """Position of the first equal item, or the length if there is none."""
        try:
            return self._items.index(item)
        except ValueError:
            return len(self._items)

    def swap(self, i: int, j: int) -> None:
        """Exchange the items at positions i and j."""
        self._check_index(i)
        self._check_index(j)
        self._items[i], self._items[j] = self._items[j], self._items[i]

    def is_full(self) -> bool:
        return len(self._items) == self.capacity

    def is_empty(self) -> bool:
        return not self._items

    def __getitem__(self, idx: int) -> T:
        self._check_index(idx)
        return self._items[idx]

    def __setitem__(self, idx: int, item: T) -> None:
        self._check_index(idx)
        self._items[idx] = item

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"BoundedArray(capacity={self.capacity}, items={self._items!r})"