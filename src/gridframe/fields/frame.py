"""Keyed container of fields."""

from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

from gridframe.errors import FieldLookupError
from gridframe.fields.grid import Grid

K = TypeVar("K")
V = TypeVar("V")


class GridFrame(Generic[K, V]):
    """
    Mapping from field key to field.

    Access comes in two flavours: get_or_insert() creates a default value
    for a missing key, get() never inserts and raises instead. Iteration
    order is not part of the contract.
    """

    def __init__(
        self,
        default_factory: Callable[[], V] = Grid.empty,  # type: ignore[assignment]
        *,
        path: str | None = None,
    ) -> None:
        """
        Create an empty frame.

        Args:
            default_factory: Builds the value inserted by get_or_insert().
            path: Source identifier included in lookup errors.
        """
        self._storage: dict[K, V] = {}
        self._default_factory = default_factory
        self.path = path

    def has(self, key: K) -> bool:
        """Whether key is present."""
        return key in self._storage

    def get_or_insert(self, key: K) -> V:
        """Return the value for key, inserting a default one if missing."""
        if key not in self._storage:
            self._storage[key] = self._default_factory()
        return self._storage[key]

    def get(self, key: K) -> V:
        """
        Return the value for key without modifying the frame.

        Raises:
            FieldLookupError: If key is not present.
        """
        try:
            return self._storage[key]
        except KeyError:
            raise FieldLookupError(key, path=self.path) from None

    def __setitem__(self, key: K, value: V) -> None:
        self._storage[key] = value

    def __getitem__(self, key: K) -> V:
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._storage

    def __len__(self) -> int:
        return len(self._storage)

    def __iter__(self) -> Iterator[K]:
        return iter(self._storage)

    def keys(self) -> set[K]:
        """Set of all keys."""
        return set(self._storage)

    def items(self) -> Iterator[tuple[K, V]]:
        """Iterate over (key, value) pairs."""
        return iter(self._storage.items())

    def __repr__(self) -> str:
        return f"GridFrame(keys={sorted(map(str, self._storage))})"
