from typing import Any
import numpy as np
import array_api_compat as api

backends = [api.array_namespace(np.zeros(1))]

#import torch as tr
#backends.append(api.array_namespace(tr.zeros(1)))

class CellFailure(Exception):
    """Error raised by a failing Recorder callback."""

class Recorder:
    """Cell manager storing every call. Cells are their own coordinate."""

    def __init__(self, fail_at: Any = None, fail_stage: str = "") -> None:
        self.loads: list[tuple[int, ...]] = []
        self.unloads: list[tuple[tuple[int, ...], Any]] = []
        self.reloads: list[tuple[tuple[int, ...], tuple[int, ...]]] = []
        self.fail_at = fail_at
        self.fail_stage = fail_stage

    def _maybe_fail(self, stage: str, coord: tuple[int, ...]) -> None:
        if stage == self.fail_stage and coord == self.fail_at:
            raise CellFailure(coord)

    def load(self, coord):
        self._maybe_fail("load", coord)
        self.loads.append(coord)
        return coord

    def unload(self, coord, value):
        self._maybe_fail("unload", coord)
        self.unloads.append((coord, value))

    def reload(self, old, new, value):
        self._maybe_fail("reload", new)
        self.reloads.append((old, new))
        return new

def identity(coord):
    return coord

def check_grid(test, grid) -> None:
    """Every coordinate inside the bounds holds itself, the surrounding ring is empty."""
    bounds = grid.bounds
    for coord in bounds.iter():
        test.assertEqual(grid.get(coord), coord)
    lower = [lo - 1 for lo in bounds.min]
    upper = [hi + 1 for hi in bounds.max]
    outer = type(bounds)(lower, upper)
    for coord in outer.iter():
        if not bounds.contains(coord):
            test.assertIsNone(grid.get(coord))
