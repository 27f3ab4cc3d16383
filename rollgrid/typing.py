# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

"""typing has all classes used in the external API of rollgrid."""

from .bounds import Bounds, Coord
from .coordinatespace import CoordinateSpace
from .fixedstorage import FixedStorage
from .cellmanager import CellManager, CellStage, FunctionCellManager, ReloadFunc

from .options import Options, LimitOptions, OptionType

from .rollgrid import RollGrid
from .rollgrid2d import RollGrid2D
from .rollgrid3d import RollGrid3D
