# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from .rollgrid import RollGrid

class RollGrid3D[T](RollGrid[T]):
    """
    Rolling window over a 3D grid. Cells are stored ``x -> z -> y``, so horizontal
    layers of constant Y are contiguous.
    """

    ndims = 3

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    @property
    def depth(self) -> int:
        return self.size[2]

    @property
    def x_min(self) -> int:
        return self.offset[0]

    @property
    def x_max(self) -> int:
        return self.offset[0] + self.size[0] - 1

    @property
    def y_min(self) -> int:
        return self.offset[1]

    @property
    def y_max(self) -> int:
        return self.offset[1] + self.size[1] - 1

    @property
    def z_min(self) -> int:
        return self.offset[2]

    @property
    def z_max(self) -> int:
        return self.offset[2] + self.size[2] - 1
