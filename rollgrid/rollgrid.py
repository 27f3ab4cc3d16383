# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from __future__ import annotations
from typing import Any, Callable, Iterator, Optional, Sequence, Self
from itertools import combinations
from numbers import Integral
import logging

from .backend import default_namespace, get_index_dtype
from .bounds import Bounds, Coord
from .cellmanager import CellManager, CellStage, ReloadFunc, as_reload
from .coordinatespace import CoordinateSpace
from .errors import InvalidBoundsError, InvalidSizeError, OutOfBoundsError
from .fixedstorage import FixedStorage

logger = logging.getLogger(__name__)

def _invoke(fallible: bool, stage: CellStage, coord: Coord, func: Callable, *args: Any) -> Any:
    if not fallible:
        return func(*args)
    try:
        return func(*args)
    except Exception as err:
        logger.warning("%s callback failed at %s: %r", stage.name.lower(), coord, err)
        err.add_note(f"{stage.name.lower()} callback failed at {coord}")
        raise

def _roll_pairs(space: CoordinateSpace, delta: Coord) -> Iterator[tuple[Coord, Coord]]:
    """
    Pairs of (old, new) coordinates for the cells a window of ``space`` gains by a move of
    ``delta``, with every |delta| below the size. Per axis the new window splits into a kept
    and an exposed range. Every non-empty choice of exposed axes forms one box, visited
    by the number of exposed axes and then by axis. The old coordinate lies one size
    away on the exposed axes, so both coordinates share a storage slot.
    """
    kept, exposed, shift = [], [], []
    for axis, d in enumerate(delta):
        lo = space.offset[axis]
        hi = lo + space.size[axis]
        if d >= 0:
            kept.append((lo, hi - d))
            exposed.append((hi - d, hi))
            shift.append(-space.size[axis])
        else:
            exposed.append((lo, lo - d))
            kept.append((lo - d, hi))
            shift.append(space.size[axis])

    for count in range(1, space.ndims + 1):
        for axes in combinations(range(space.ndims), count):
            ranges = [exposed[a] if a in axes else kept[a] for a in range(space.ndims)]
            box = Bounds([r[0] for r in ranges], [r[1] for r in ranges])
            if box.is_empty():
                continue
            for coord in box.iter():
                prior = tuple(c + shift[a] if a in axes else c for a, c in enumerate(coord))
                yield prior, coord

def _per_axis(amount: int | Sequence[int], ndims: int, name: str) -> Coord:
    values = (int(amount),) * ndims if isinstance(amount, Integral) else tuple(int(a) for a in amount)
    if len(values) != ndims:
        raise InvalidSizeError(f"Expected {ndims} components for {name}, got {values}")
    if any(v < 0 for v in values):
        raise InvalidSizeError(f"{name} must not be negative, got {values}")
    return values

class RollGrid[T]:
    """
    Fixed size window over an unbounded integer grid. Moving or resizing the window keeps
    the cells that stay inside in place and only visits the cells that leave or enter it,
    through the load, reload and unload callbacks given to each call.

    A failing callback aborts the operation with whatever has been applied so far. After
    a failed move the new bounds are in force and the cells not reached yet keep their
    previous values. After a failed resize some slots may be vacant: ``get`` returns None
    for them, iteration skips them, ``vacant`` counts them and ``set`` refills them.
    The ``try_`` forms raise the callback's own exception as well, after logging it and
    adding a note with the callback kind and coordinate.
    """

    #: Number of axes, fixed by the 2D and 3D grids.
    ndims: Optional[int] = None

    _space: CoordinateSpace
    _cells: FixedStorage[T]

    #-------------------------------------------------------------------------
    #constructor

    def __init__(self,
                 size: Sequence[int],
                 offset: Sequence[int],
                 load: Callable[[Coord], T]) -> None:
        self._construct(size, offset, load, fallible=False)

    @classmethod
    def try_new(cls,
                size: Sequence[int],
                offset: Sequence[int],
                load: Callable[[Coord], T]) -> Self:
        """Like the constructor, but a failing load is logged and noted with its coordinate."""
        grid = cls.__new__(cls)
        grid._construct(size, offset, load, fallible=True)
        return grid

    def _construct(self, size: Sequence[int], offset: Sequence[int],
                   load: Callable[[Coord], T], fallible: bool) -> None:
        self._check_ndims(size, "size")
        space = CoordinateSpace(size, offset)

        def init(index: int) -> T:
            coord = space.to_coord(index)
            return _invoke(fallible, CellStage.LOAD, coord, load, coord)

        self._cells = FixedStorage.build(space.capacity, init)
        self._space = space
        logger.debug("created grid of size %s at %s", space.size, space.offset)

    def _check_ndims(self, values: Sequence[int], name: str) -> Coord:
        values = tuple(values)
        if self.ndims is not None and len(values) != self.ndims:
            raise InvalidBoundsError(f"Expected {self.ndims} components for {name}, got {values}")
        return values

    #-------------------------------------------------------------------------
    #translate & reposition

    def translate(self, delta: Sequence[int], reload: ReloadFunc | CellManager[T]) -> None:
        """Move the window by ``delta``, see ``reposition``."""
        delta = self._check_ndims(delta, "delta")
        self._reposition(tuple(o + d for o, d in zip(self._space.offset, delta)), reload, False)

    def try_translate(self, delta: Sequence[int], reload: ReloadFunc | CellManager[T]) -> None:
        delta = self._check_ndims(delta, "delta")
        self._reposition(tuple(o + d for o, d in zip(self._space.offset, delta)), reload, True)

    def reposition(self, offset: Sequence[int], reload: ReloadFunc | CellManager[T]) -> None:
        """
        Move the minimum corner of the window to ``offset``. Every slot that changes its
        coordinate is passed to ``reload(old, new, value)`` once and takes the returned value.
        Slots whose coordinate stays inside the window are not visited.
        """
        self._reposition(offset, reload, False)

    def try_reposition(self, offset: Sequence[int], reload: ReloadFunc | CellManager[T]) -> None:
        self._reposition(offset, reload, True)

    def _plan_move(self, offset: Sequence[int]) -> Optional[tuple[CoordinateSpace, Iterator[tuple[Coord, Coord]]]]:
        offset = self._check_ndims(offset, "offset")
        old = self._space
        delta = tuple(n - o for n, o in zip(offset, old.offset))
        if not any(delta):
            return None
        if all(abs(d) < s for d, s in zip(delta, old.size)):
            new = old.repositioned(offset)
            return new, _roll_pairs(new, delta)
        # no overlap, every slot is reused for the cell at the same local position
        new = old.repositioned(offset, roll=False)
        logger.debug("move by %s exceeds the size %s, reloading every cell", delta, old.size)
        return new, zip(old.bounds.iter(), new.bounds.iter())

    def _reposition(self, offset: Sequence[int], reload: ReloadFunc | CellManager[T], fallible: bool) -> None:
        func = as_reload(reload)
        plan = self._plan_move(offset)
        if plan is None:
            return
        new, pairs = plan
        self._space = new
        count = 0
        for prior, coord in pairs:
            index = new.to_index(coord)
            if not self._cells.is_occupied(index):
                continue
            self._cells.replace_with(
                index, lambda value: _invoke(fallible, CellStage.RELOAD, coord, func, prior, coord, value))
            count += 1
        logger.debug("repositioned grid to %s with %d reloads", new.offset, count)

    #-------------------------------------------------------------------------
    #resize

    def resize(self, size: Sequence[int], manager: CellManager[T]) -> None:
        """Change the size of the window, keeping its minimum corner."""
        self._resize(size, self._space.offset, manager, False)

    def try_resize(self, size: Sequence[int], manager: CellManager[T]) -> None:
        self._resize(size, self._space.offset, manager, True)

    def resize_and_reposition(self, size: Sequence[int], offset: Sequence[int], manager: CellManager[T]) -> None:
        """
        Change size and minimum corner of the window. Cells leaving it are handed to
        ``manager.unload``, cells entering it are created by ``manager.load`` and the
        cells in both windows are moved to the new storage untouched.
        """
        self._resize(size, offset, manager, False)

    def try_resize_and_reposition(self, size: Sequence[int], offset: Sequence[int], manager: CellManager[T]) -> None:
        self._resize(size, offset, manager, True)

    def inflate_size(self, growth: int | Sequence[int], manager: CellManager[T]) -> None:
        """Grow the window by ``growth`` cells on both sides of every axis."""
        self._resize(*self._inflated(growth), manager, False)

    def try_inflate_size(self, growth: int | Sequence[int], manager: CellManager[T]) -> None:
        self._resize(*self._inflated(growth), manager, True)

    def deflate_size(self, shrink: int | Sequence[int], manager: CellManager[T]) -> None:
        """Shrink the window by ``shrink`` cells on both sides of every axis."""
        self._resize(*self._deflated(shrink), manager, False)

    def try_deflate_size(self, shrink: int | Sequence[int], manager: CellManager[T]) -> None:
        self._resize(*self._deflated(shrink), manager, True)

    def _inflated(self, growth: int | Sequence[int]) -> tuple[Coord, Coord]:
        growth = _per_axis(growth, self._space.ndims, "growth")
        size = tuple(s + 2 * g for s, g in zip(self._space.size, growth))
        offset = tuple(o - g for o, g in zip(self._space.offset, growth))
        return size, offset

    def _deflated(self, shrink: int | Sequence[int]) -> tuple[Coord, Coord]:
        shrink = _per_axis(shrink, self._space.ndims, "shrink")
        size = tuple(s - 2 * d for s, d in zip(self._space.size, shrink))
        if any(s <= 0 for s in size):
            raise InvalidSizeError(f"Deflating {self._space.size} by {shrink} leaves no cells")
        offset = tuple(o + d for o, d in zip(self._space.offset, shrink))
        return size, offset

    def _resize(self, size: Sequence[int], offset: Sequence[int], manager: CellManager[T], fallible: bool) -> None:
        size = self._check_ndims(size, "size")
        offset = self._check_ndims(offset, "offset")
        old = self._space
        new = old.resized(size, offset)
        if new.size == old.size:
            self._exchange(offset, manager, fallible)
            return

        unloaded = 0
        for slab in old.bounds.subtract(new.bounds):
            for coord in slab.iter():
                index = old.to_index(coord)
                if not self._cells.is_occupied(index):
                    continue
                value = self._cells.take(index)
                try:
                    _invoke(fallible, CellStage.UNLOAD, coord, manager.unload, coord, value)
                except BaseException:
                    self._cells.put(index, value)
                    raise
                unloaded += 1

        cells = self._cells.reallocate(new.capacity)
        inner = old.bounds.intersection(new.bounds)
        moved = 0
        if inner is not None:
            for coord in inner.iter():
                src = old.to_index(coord)
                if self._cells.is_occupied(src):
                    cells.put(new.to_index(coord), self._cells.take(src))
                    moved += 1
        previous = self._cells
        self._space, self._cells = new, cells
        previous.release()

        loaded = 0
        for index, coord in enumerate(new.bounds.iter()):
            # a fresh space has no wrap, so slots follow the bounds order
            if cells.is_occupied(index):
                continue
            cells.put(index, _invoke(fallible, CellStage.LOAD, coord, manager.load, coord))
            loaded += 1
        logger.debug("resized grid to %s at %s: %d unloaded, %d kept, %d loaded",
                     new.size, new.offset, unloaded, moved, loaded)

    def _exchange(self, offset: Sequence[int], manager: CellManager[T], fallible: bool) -> None:
        """Move without resizing, unloading and loading every cell that changes its coordinate."""
        plan = self._plan_move(offset)
        if plan is None:
            return
        new, pairs = plan
        self._space = new
        count = 0
        for prior, coord in pairs:
            index = new.to_index(coord)
            if self._cells.is_occupied(index):
                value = self._cells.take(index)
                try:
                    _invoke(fallible, CellStage.UNLOAD, prior, manager.unload, prior, value)
                except BaseException:
                    self._cells.put(index, value)
                    raise
            self._cells.put(index, _invoke(fallible, CellStage.LOAD, coord, manager.load, coord))
            count += 1
        logger.debug("moved grid to %s, exchanging %d cells", new.offset, count)

    #-------------------------------------------------------------------------
    #cell access

    def get(self, coord: Sequence[int]) -> Optional[T]:
        """The cell at ``coord`` or None if it lies outside the bounds."""
        coord = tuple(coord)
        if not self._space.contains(coord):
            return None
        return self._cells.get(self._space.to_index(coord))

    def set(self, coord: Sequence[int], value: T) -> Optional[T]:
        """Replace the cell at ``coord`` and return the previous value."""
        return self._cells.replace(self._space.to_index(tuple(coord)), value)

    def take(self, coord: Sequence[int]) -> Optional[T]:
        """Move the cell at ``coord`` out of the grid, leaving its slot vacant."""
        coord = tuple(coord)
        if not self._space.contains(coord):
            return None
        index = self._space.to_index(coord)
        if not self._cells.is_occupied(index):
            return None
        return self._cells.take(index)

    def get_or_insert_with(self, coord: Sequence[int], factory: Callable[[], T]) -> T:
        """The cell at ``coord``, filling a vacant slot with ``factory()`` first."""
        index = self._space.to_index(tuple(coord))
        if not self._cells.is_occupied(index):
            self._cells.put(index, factory())
        return self._cells.peek(index)

    def get_or_insert(self, coord: Sequence[int], value: T) -> T:
        return self.get_or_insert_with(coord, lambda: value)

    def relative_offset(self, coord: Sequence[int]) -> Coord:
        return self._space.relative_offset(tuple(coord))

    def vacant(self) -> int:
        """Number of slots left without a value by a failed operation."""
        return len(self._cells) - self._cells.occupied()

    def release(self) -> int:
        """Drop every cell. The grid keeps its bounds but holds no values afterwards."""
        dropped = self._cells.release()
        logger.debug("released %d cells", dropped)
        return dropped

    #-------------------------------------------------------------------------
    #iteration

    def items(self) -> Iterator[tuple[Coord, T]]:
        """Yield (coordinate, cell) pairs in storage order."""
        xp = default_namespace
        idxs = xp.arange(len(self._cells), dtype=get_index_dtype(xp))
        coords = self._space.to_coords(idxs)
        for index, value in self._cells:
            yield tuple(int(c) for c in coords[:, index]), value

    def values(self) -> Iterator[T]:
        for _, value in self._cells:
            yield value

    def coords(self) -> Iterator[Coord]:
        """Yield the coordinates of the bounds in storage axis order."""
        return self._space.bounds.iter()

    #-------------------------------------------------------------------------
    #properties

    @property
    def space(self) -> CoordinateSpace:
        return self._space

    @property
    def bounds(self) -> Bounds:
        return self._space.bounds

    @property
    def offset(self) -> Coord:
        return self._space.offset

    @property
    def size(self) -> Coord:
        return self._space.size

    @property
    def wrap_offset(self) -> Coord:
        return self._space.wrap

    #-------------------------------------------------------------------------
    #some magic

    def __len__(self) -> int:
        return self._space.capacity

    def __iter__(self) -> Iterator[tuple[Coord, T]]:
        return self.items()

    def __contains__(self, coord: object) -> bool:
        return isinstance(coord, (tuple, list)) and self._space.contains(tuple(coord))

    def __getitem__(self, coord: Sequence[int]) -> T:
        return self._cells.peek(self._space.to_index(tuple(coord)))

    def __setitem__(self, coord: Sequence[int], value: T) -> None:
        self.set(coord, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size}, offset={self.offset})"
