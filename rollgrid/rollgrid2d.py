# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from .rollgrid import RollGrid

class RollGrid2D[T](RollGrid[T]):
    """
    Rolling window over a 2D grid. Cells are stored ``x -> y``, construction loads
    ``(0, 0), (1, 0), (0, 1), (1, 1)`` for a 2x2 window at the origin.
    """

    ndims = 2

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    @property
    def x_min(self) -> int:
        return self.offset[0]

    @property
    def x_max(self) -> int:
        """Largest X coordinate inside the window."""
        return self.offset[0] + self.size[0] - 1

    @property
    def y_min(self) -> int:
        return self.offset[1]

    @property
    def y_max(self) -> int:
        """Largest Y coordinate inside the window."""
        return self.offset[1] + self.size[1] - 1
