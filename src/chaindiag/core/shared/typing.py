"""Shared typing aliases used across chaindiag."""

from collections.abc import Mapping, Sequence

import numpy as np
import numpy.typing as npt

FloatArray = npt.NDArray[np.float64]

# Anything accepted as a raw diagnostic vector
VectorLike = npt.ArrayLike | Mapping[str, float] | Sequence[float | None]
