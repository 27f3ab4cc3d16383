# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

class InvalidBoundsError(ValueError):
    """Bounds that cannot be represented with the active limits."""

class InvalidSizeError(InvalidBoundsError):
    """Zero, negative or too large window size."""

class OutOfBoundsError(IndexError):
    """Coordinate outside the live bounds of a grid."""

    coord: tuple[int, ...]

    def __init__(self, coord: tuple[int, ...], msg: str = "Out of bounds") -> None:
        super().__init__(f"{msg}: {coord}")
        self.coord = coord

class VacantSlotError(LookupError):
    """Read or take from a storage slot that holds no value."""

class OccupiedSlotError(LookupError):
    """Initialization of a storage slot that already holds a value."""
