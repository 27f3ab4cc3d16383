# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from __future__ import annotations
from typing import Optional, Sequence
from dataclasses import dataclass
from math import prod

from .backend import ArrayLike, namespace_of_arrays, get_index_dtype, is_integer_array, device
from .bounds import Bounds, Coord, storage_order
from .errors import InvalidBoundsError, InvalidSizeError, OutOfBoundsError
from .options import OptionType, get_options

@dataclass(frozen=True, init=False)
class CoordinateSpace:
    """
    Toroidal mapping between world coordinates inside a window and the linear slots of
    its storage. The window is given by a size and a minimum corner (offset). Each axis
    carries a wrap offset, the storage position of the minimum corner along that axis,
    so moving the window only changes offset and wrap, never the storage.
    """

    #-------------------------------------------------------------------------
    #members & properties

    #: Number of cells per axis.
    size: Coord
    #: Minimum corner of the window.
    offset: Coord
    #: Storage position of the minimum corner per axis.
    wrap: Coord
    #: Linear distance between neighbouring slots per axis.
    strides: Coord
    #: Number of slots, the product of the size.
    capacity: int

    #-------------------------------------------------------------------------
    #constructor

    def __init__(self,
                 size: Sequence[int],
                 offset: Sequence[int],
                 wrap: Optional[Sequence[int]] = None) -> None:
        size = tuple(size)
        offset = tuple(offset)
        wrap = (0,) * len(size) if wrap is None else tuple(wrap)
        self._check_input(size, offset, wrap)
        object.__setattr__(self, "size", tuple(int(s) for s in size))
        object.__setattr__(self, "offset", tuple(int(o) for o in offset))
        object.__setattr__(self, "wrap", tuple(int(w) for w in wrap))
        object.__setattr__(self, "capacity", prod(self.size))

        strides = [0] * len(size)
        stride = 1
        for axis in reversed(storage_order(len(size))):
            strides[axis] = stride
            stride *= self.size[axis]
        object.__setattr__(self, "strides", tuple(strides))

    def _check_input(self, size: Coord, offset: Coord, wrap: Coord) -> None:
        limits = get_options(OptionType.LIMITS)
        if len(size) == 0:
            raise InvalidSizeError("Size must have at least one axis")
        if len(offset) != len(size) or len(wrap) != len(size):
            raise InvalidBoundsError(f"Expected {len(size)} components, "\
                                     f"got offset={offset} and wrap={wrap}")
        if any(s <= 0 for s in size):
            raise InvalidSizeError(f"Size must be positive on every axis, got {size}")
        if prod(size) > limits.max_capacity:
            raise InvalidSizeError(f"Size is too large: {size} exceeds {limits.max_capacity} cells")
        for o, s in zip(offset, size):
            if o < limits.coord_min or o + s > limits.coord_max:
                raise InvalidBoundsError(f"Offset {offset} is too close to the coordinate limits "\
                                         f"for size {size}")
        if any(not 0 <= w < s for w, s in zip(wrap, size)):
            raise InvalidBoundsError(f"Wrap offset {wrap} must lie within the size {size}")

    #-------------------------------------------------------------------------
    #derived spaces

    @property
    def ndims(self) -> int:
        return len(self.size)

    @property
    def bounds(self) -> Bounds:
        return Bounds.from_size(self.offset, self.size)

    @property
    def wrap_index(self) -> int:
        """Storage slot of the minimum corner."""
        return sum(w * st for w, st in zip(self.wrap, self.strides))

    def repositioned(self, offset: Sequence[int], roll: bool = True) -> CoordinateSpace:
        """
        The same window moved to ``offset``. With ``roll`` the wrap follows the move so that
        every slot keeps its coordinate modulo the size, otherwise it stays as it is.
        """
        if not roll:
            return CoordinateSpace(self.size, offset, self.wrap)
        wrap = [(w + o - old) % s for w, o, old, s in zip(self.wrap, offset, self.offset, self.size)]
        return CoordinateSpace(self.size, offset, wrap)

    def resized(self, size: Sequence[int], offset: Sequence[int]) -> CoordinateSpace:
        """A fresh window without residual wrap."""
        return CoordinateSpace(size, offset)

    #-------------------------------------------------------------------------
    #scalar mapping

    def contains(self, coord: Sequence[int]) -> bool:
        return len(coord) == self.ndims\
               and all(0 <= c - o < s for c, o, s in zip(coord, self.offset, self.size))

    def to_index(self, coord: Sequence[int]) -> int:
        """Storage slot of a coordinate inside the window."""
        if not self.contains(coord):
            raise OutOfBoundsError(tuple(coord))
        return sum(((c - o + w) % s) * st
                   for c, o, w, s, st in zip(coord, self.offset, self.wrap, self.size, self.strides))

    def to_coord(self, index: int) -> Coord:
        """World coordinate held by a storage slot."""
        if not 0 <= index < self.capacity:
            raise IndexError(f"Index {index} out of range for capacity {self.capacity}")
        return tuple(o + ((index // st) % s - w) % s
                     for o, w, s, st in zip(self.offset, self.wrap, self.size, self.strides))

    def relative_offset(self, coord: Sequence[int]) -> Coord:
        """Displacement of a coordinate from the minimum corner, reduced modulo the size."""
        return tuple((c - o) % s for c, o, s in zip(coord, self.offset, self.size))

    #-------------------------------------------------------------------------
    #array mapping

    def to_indices[T: ArrayLike](self, coords: T) -> T:
        """
        Convert coordinates with shape (ndims, ...) to storage slots with shape (...).
        Coordinates outside the window are mapped to -1.
        """
        xp = namespace_of_arrays(coords)
        int_type = get_index_dtype(xp)
        self._check_input_tensor(xp, coords)
        if coords.shape[0] != self.ndims:
            raise ValueError(f"Expect a tensor of shape ({self.ndims}, ...), got {coords.shape}")
        dev = device(coords)
        idxs = xp.zeros(coords.shape[1:], dtype=int_type, device=dev)
        inside = xp.ones(coords.shape[1:], dtype=xp.bool, device=dev)
        for axis in range(self.ndims):
            local = xp.astype(coords[axis, ...], int_type) - self.offset[axis]
            inside = xp.logical_and(inside, xp.logical_and(local >= 0, local < self.size[axis]))
            idxs = idxs + ((local + self.wrap[axis]) % self.size[axis]) * self.strides[axis]
        return xp.where(inside, idxs, xp.full_like(idxs, -1))

    def to_coords[T: ArrayLike](self, idxs: T) -> T:
        """Convert storage slots with shape (...) to coordinates with shape (ndims, ...)."""
        xp = namespace_of_arrays(idxs)
        int_type = get_index_dtype(xp)
        self._check_input_tensor(xp, idxs)
        idxs = xp.astype(idxs, int_type)
        if bool(xp.any(xp.logical_or(idxs < 0, idxs >= self.capacity))):
            raise ValueError(f"Indices must lie in [0, {self.capacity})")
        coords = xp.zeros((self.ndims, *idxs.shape), dtype=int_type, device=device(idxs))
        for axis in range(self.ndims):
            slot = (idxs // self.strides[axis]) % self.size[axis]
            coords[axis, ...] = (slot - self.wrap[axis]) % self.size[axis] + self.offset[axis]
        return coords

    def _check_input_tensor(self, xp, tensor: ArrayLike) -> None:
        if not is_integer_array(xp, tensor):
            raise ValueError(f"Expected an integer tensor, got {tensor.dtype}")

    #-------------------------------------------------------------------------
    #some magic

    def __str__(self) -> str:
        return f"CoordinateSpace(size={self.size}, offset={self.offset}, wrap={self.wrap})"
