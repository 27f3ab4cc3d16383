# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any
import numpy as np
import array_api_compat as api
from array_api_compat import device

ArrayLike = Any
ArrayNamespace = Any

#: Namespace used when the grid has to create index arrays on its own.
default_namespace: ArrayNamespace = api.array_namespace(np.zeros(1))

def namespace_of_arrays(*arrays: ArrayLike) -> ArrayNamespace:
    return api.array_namespace(*arrays)

def get_index_dtype(xp: ArrayNamespace) -> Any:
    # coordinates are signed, so only signed types qualify
    info = xp.__array_namespace_info__()
    dtypes = info.dtypes(kind=None)
    for name in ["int64", "int32", "int16"]:
        if name in dtypes:
            return dtypes[name]
    raise ValueError("No suitable index dtype found")

def is_integer_array(xp: ArrayNamespace, array: ArrayLike) -> bool:
    return xp.isdtype(array.dtype, "integral")
