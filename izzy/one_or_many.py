"""A sequence that always holds at least one item."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class EmptyListError(ValueError):
    """Raised when a :class:`OneOrMany` would be created without any item."""

    def __init__(self) -> None:
        super().__init__("Cannot create OneOrMany with an empty list.")


class OneOrMany(Generic[T]):
    """Either a single item or a list of items, never empty.

    Create instances with :meth:`one`, :meth:`many` or :meth:`merge`.
    """

    __slots__ = ("_items",)

    def __init__(self, first: T, *rest: T) -> None:
        self._items: list[T] = [first, *rest]

    @classmethod
    def one(cls, item: T) -> OneOrMany[T]:
        """Create an instance holding the single ``item``."""
        return cls(item)

    @classmethod
    def many(cls, items: Iterable[T]) -> OneOrMany[T]:
        """Create an instance from ``items``; raise :class:`EmptyListError` if there are none."""
        values = list(items)
        if not values:
            raise EmptyListError()
        return cls(*values)

    @classmethod
    def merge(cls, items: Iterable[OneOrMany[T]]) -> OneOrMany[T]:
        """Concatenate several instances into one; raise :class:`EmptyListError` if none are given."""
        return cls.many(item for group in items for item in group)

    def first(self) -> T:
        """Return the first item."""
        return self._items[0]

    def rest(self) -> list[T]:
        """Return a new list of every item after the first."""
        return self._items[1:]

    def push(self, item: T) -> None:
        """Append ``item`` at the end."""
        self._items.append(item)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: Any) -> Any:
        return self._items[index]

    def __setitem__(self, index: int, value: T) -> None:
        if not isinstance(index, int):
            raise TypeError("OneOrMany indices must be integers")
        self._items[index] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OneOrMany):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"OneOrMany({', '.join(repr(item) for item in self._items)})"