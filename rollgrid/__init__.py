# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from .bounds import Bounds
from .coordinatespace import CoordinateSpace
from .fixedstorage import FixedStorage
from .cellmanager import CellManager, CellStage, FunctionCellManager, cell_manager
from .errors import (
    InvalidBoundsError,
    InvalidSizeError,
    OutOfBoundsError,
    VacantSlotError,
    OccupiedSlotError
)
from .options import LimitOptions, OptionType, get_options, set_options, reset_options
from .rollgrid import RollGrid
from .rollgrid2d import RollGrid2D
from .rollgrid3d import RollGrid3D
