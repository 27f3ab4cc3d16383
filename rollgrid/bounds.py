# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from __future__ import annotations
from typing import Iterator, Optional, Sequence
from dataclasses import dataclass
from itertools import product
from math import prod

Coord = tuple[int, ...]

def storage_order(ndims: int) -> tuple[int, ...]:
    """
    Axes from slowest to fastest. X is always the fastest axis, 3D grids are laid out
    as ``x -> z -> y``.
    """
    if ndims == 3:
        return (1, 2, 0)
    return tuple(reversed(range(ndims)))

@dataclass(frozen=True, init=False)
class Bounds:
    """
    Axis aligned box with an inclusive minimum and an exclusive maximum corner.
    """

    #-------------------------------------------------------------------------
    #members & properties

    #: Inclusive minimum corner.
    min: Coord
    #: Exclusive maximum corner.
    max: Coord

    #-------------------------------------------------------------------------
    #constructor

    def __init__(self, min: Sequence[int], max: Sequence[int]) -> None:
        if len(min) != len(max):
            raise ValueError(f"Corners have different dimensions: {len(min)} and {len(max)}")
        object.__setattr__(self, "min", tuple(int(v) for v in min))
        object.__setattr__(self, "max", tuple(int(v) for v in max))

    @classmethod
    def from_size(cls, offset: Sequence[int], size: Sequence[int]) -> Bounds:
        return cls(offset, [o + s for o, s in zip(offset, size)])

    @classmethod
    def from_corners(cls, a: Sequence[int], b: Sequence[int]) -> Bounds:
        """Resolve the minimum and maximum corner from two arbitrary corners."""
        return cls([min(u, v) for u, v in zip(a, b)], [max(u, v) for u, v in zip(a, b)])

    #-------------------------------------------------------------------------
    #methods

    @property
    def ndims(self) -> int:
        return len(self.min)

    @property
    def size(self) -> Coord:
        return tuple(max(hi - lo, 0) for lo, hi in zip(self.min, self.max))

    @property
    def volume(self) -> int:
        return prod(self.size)

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    @property
    def depth(self) -> int:
        return self.size[2]

    def is_empty(self) -> bool:
        return any(hi <= lo for lo, hi in zip(self.min, self.max))

    def contains(self, point: Sequence[int]) -> bool:
        return len(point) == self.ndims\
               and all(lo <= p < hi for p, lo, hi in zip(point, self.min, self.max))

    def intersects(self, other: Bounds) -> bool:
        return all(alo < bhi and blo < ahi
                   for alo, ahi, blo, bhi in zip(self.min, self.max, other.min, other.max))

    def intersection(self, other: Bounds) -> Optional[Bounds]:
        if not self.intersects(other):
            return None
        return Bounds([max(a, b) for a, b in zip(self.min, other.min)],
                      [min(a, b) for a, b in zip(self.max, other.max)])

    def subtract(self, other: Bounds) -> list[Bounds]:
        """
        Decompose the part of this box outside ``other`` into disjoint slabs. For each axis
        the slab below and then the slab above ``other`` is emitted, restricted to the overlap
        on the axes handled before.
        """
        inner = self.intersection(other)
        if inner is None:
            return [self] if not self.is_empty() else []
        slabs = []
        lower, upper = list(self.min), list(self.max)
        for axis in range(self.ndims):
            if lower[axis] < inner.min[axis]:
                hi = list(upper)
                hi[axis] = inner.min[axis]
                slabs.append(Bounds(lower, hi))
            if inner.max[axis] < upper[axis]:
                lo = list(lower)
                lo[axis] = inner.max[axis]
                slabs.append(Bounds(lo, upper))
            lower[axis], upper[axis] = inner.min[axis], inner.max[axis]
        return slabs

    def iter(self) -> Iterator[Coord]:
        """Iterate the coordinates in storage order."""
        order = storage_order(self.ndims)
        ranges = [range(self.min[axis], self.max[axis]) for axis in order]
        for pos in product(*ranges):
            coord = [0] * self.ndims
            for axis, value in zip(order, pos):
                coord[axis] = value
            yield tuple(coord)

    #-------------------------------------------------------------------------
    #some magic

    def __iter__(self) -> Iterator[Coord]:
        return self.iter()

    def __len__(self) -> int:
        return self.volume

    def __contains__(self, point: object) -> bool:
        return isinstance(point, tuple) and self.contains(point)

    def __str__(self) -> str:
        return f"Bounds({self.min}, {self.max})"
