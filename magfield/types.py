from __future__ import annotations

from typing import Literal, TypeAlias

import numpy as np
from numpy.typing import NDArray

FloatArray: TypeAlias = NDArray[np.float64]
BoolArray: TypeAlias = NDArray[np.bool_]

Axis = Literal["x", "y", "z"]
SingularPolicy = Literal["zero", "raise"]

__all__ = ["Axis", "BoolArray", "FloatArray", "SingularPolicy"]
