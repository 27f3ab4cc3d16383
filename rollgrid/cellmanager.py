# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Protocol, Callable, Optional
from dataclasses import dataclass
from enum import Enum

Coord = tuple[int, ...]

class CellStage(Enum):
    LOAD = 1
    RELOAD = 2
    UNLOAD = 3

class CellManager[T](Protocol):
    """
    Capability a grid drives while it changes its bounds. It is only borrowed for the
    duration of one mutating call.
    """

    def load(self, coord: Coord) -> T:
        """Produce the value for a coordinate that enters the bounds."""
        ...

    def unload(self, coord: Coord, value: T) -> None:
        """Take over a value whose coordinate left the bounds."""
        ...

    def reload(self, old: Coord, new: Coord, value: T) -> T:
        """Return the value of a reused slot for its new coordinate."""
        ...

@dataclass(frozen=True)
class FunctionCellManager[T]:
    """
    Cell manager built from plain callables. Without a reload function, a reload
    unloads the old coordinate and loads the new one.
    """

    load_func: Callable[[Coord], T]
    unload_func: Callable[[Coord, T], None]
    reload_func: Optional[Callable[[Coord, Coord, T], T]] = None

    def load(self, coord: Coord) -> T:
        return self.load_func(coord)

    def unload(self, coord: Coord, value: T) -> None:
        self.unload_func(coord, value)

    def reload(self, old: Coord, new: Coord, value: T) -> T:
        if self.reload_func is not None:
            return self.reload_func(old, new, value)
        self.unload_func(old, value)
        return self.load_func(new)

def cell_manager[T](
        load: Callable[[Coord], T],
        unload: Callable[[Coord, T], None],
        reload: Optional[Callable[[Coord, Coord, T], T]] = None) -> FunctionCellManager[T]:
    return FunctionCellManager(load, unload, reload)

ReloadFunc = Callable[[Coord, Coord, object], object]

def as_reload(reload: "ReloadFunc | CellManager") -> ReloadFunc:
    """Accept a reload callable or anything with a reload method."""
    method = getattr(reload, "reload", None)
    if callable(method):
        return method
    if callable(reload):
        return reload
    raise TypeError(f"Expected a reload function or a cell manager, got {type(reload).__name__}")
