# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Hashable, Any, Self
from enum import Enum
import threading

class OptionType(Enum):
    LIMITS = 0

class Options:

    key: Hashable

    def __init__(self, category: OptionType):
        self.key = (category, threading.get_ident())

    def __enter__(self) -> Self:
        global _opts
        if self.key in _opts:
            self._tmp = _opts[self.key]
        else:
            self._tmp = None
        _opts[self.key] = self
        return self

    def __exit__(self, *_) -> None:
        global _opts
        if self._tmp is not None:
            _opts[self.key] = self._tmp
        else:
            del _opts[self.key]

class LimitOptions(Options):
    """
    Context manager for the limits a coordinate space is checked against on construction.
    The defaults mirror 32 bit signed coordinates and a 32 bit signed linear index.
    """

    #: Largest number of cells a grid may hold.
    max_capacity: int
    #: Width of the signed integer type coordinates have to fit into.
    coord_bits: int

    def __init__(
            self, *,
            max_capacity: int = 2**31 - 1,
            coord_bits: int = 32):
        if max_capacity < 1:
            raise ValueError(f"max_capacity must be above zero, got {max_capacity}")
        if coord_bits < 2:
            raise ValueError(f"coord_bits must be at least two, got {coord_bits}")
        self.max_capacity = max_capacity
        self.coord_bits = coord_bits
        super().__init__(OptionType.LIMITS)

    @property
    def coord_min(self) -> int:
        """Smallest representable coordinate."""
        return -(1 << (self.coord_bits - 1))

    @property
    def coord_max(self) -> int:
        """Largest representable coordinate."""
        return (1 << (self.coord_bits - 1)) - 1

_opts: dict[Any, Options] = {}

def get_options(otype: OptionType) -> Any:
    global _opts
    key = (otype, threading.get_ident())
    if key in _opts:
        return _opts[key]
    return _defaults[otype]

def set_options(opts: LimitOptions) -> None:
    global _opts
    _opts[opts.key] = opts

def reset_options(otype: OptionType) -> None:
    """Drop the options set for the current thread, falling back to the defaults."""
    global _opts
    _opts.pop((otype, threading.get_ident()), None)

_defaults: dict[OptionType, Options] = {OptionType.LIMITS: LimitOptions()}
