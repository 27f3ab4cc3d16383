# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from __future__ import annotations
from typing import Callable, Iterator, Optional
import numpy as np

from .errors import VacantSlotError, OccupiedSlotError

class FixedStorage[T]:
    """
    Fixed number of linearly addressed slots. Each slot is either occupied or vacant,
    tracked by a presence mask, so that values can be moved out and in again without
    a placeholder value of the cell type. The storage only guards its capacity, which
    slots are live is decided by the owner.
    """

    _values: list[Optional[T]]
    _present: np.ndarray

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"Capacity must not be negative, got {capacity}")
        self._values = [None] * capacity
        self._present = np.zeros(capacity, dtype=np.bool_)

    @classmethod
    def build(cls, capacity: int, init: Callable[[int], T]) -> FixedStorage[T]:
        """
        Occupy every slot with ``init(index)`` in index order. If ``init`` raises, the
        slots filled so far are released and the exception propagates.
        """
        storage = cls(capacity)
        try:
            for index in range(capacity):
                storage._values[index] = init(index)
                storage._present[index] = True
        except BaseException:
            storage.release()
            raise
        return storage

    #-------------------------------------------------------------------------
    #slot access

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._values):
            raise IndexError(f"Index {index} out of range for capacity {len(self._values)}")

    def is_occupied(self, index: int) -> bool:
        self._check_index(index)
        return bool(self._present[index])

    def get(self, index: int) -> Optional[T]:
        """The value of a slot or None if it is vacant."""
        self._check_index(index)
        return self._values[index]

    def put(self, index: int, value: T) -> None:
        """Occupy a vacant slot."""
        self._check_index(index)
        if self._present[index]:
            raise OccupiedSlotError(f"Slot {index} is already occupied")
        self._values[index] = value
        self._present[index] = True

    def replace(self, index: int, value: T) -> Optional[T]:
        """Occupy a slot with ``value`` and hand back the previous value, if any."""
        self._check_index(index)
        old = self._values[index] if self._present[index] else None
        self._values[index] = value
        self._present[index] = True
        return old

    def replace_with(self, index: int, func: Callable[[T], T]) -> None:
        """Swap the value of an occupied slot for ``func(old)``. The slot is unchanged if ``func`` raises."""
        value = self.peek(index)
        self._values[index] = func(value)

    def peek(self, index: int) -> T:
        """Borrow the value of an occupied slot."""
        self._check_index(index)
        if not self._present[index]:
            raise VacantSlotError(f"Slot {index} is vacant")
        return self._values[index] # type: ignore

    def take(self, index: int) -> T:
        """Move the value out of an occupied slot, leaving it vacant."""
        value = self.peek(index)
        self._values[index] = None
        self._present[index] = False
        return value

    #-------------------------------------------------------------------------
    #block management

    def occupied(self) -> int:
        return int(np.count_nonzero(self._present))

    def vacant_indices(self) -> np.ndarray:
        return np.flatnonzero(~self._present)

    def reallocate(self, capacity: int) -> FixedStorage[T]:
        """
        Provide a vacant block of a new capacity. The owner moves values over with
        ``take`` and ``put`` and releases this block afterwards, which drops only what
        was not moved.
        """
        return type(self)(capacity)

    def release(self) -> int:
        """Drop every occupied slot and return how many values were dropped."""
        dropped = self.occupied()
        self._values = [None] * len(self._values)
        self._present[:] = False
        return dropped

    #-------------------------------------------------------------------------
    #some magic

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[tuple[int, T]]:
        for index in np.flatnonzero(self._present):
            yield int(index), self._values[index] # type: ignore
