from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.typing import NDArray

# typing only
type FloatArray = NDArray[np.floating]
type ArrayLike = float | np.ndarray | np.floating
type ScalarFn = Callable[[float], float]

# f(x) evaluated either pointwise or on a whole array of quadrature points
type SourceFn = Callable[[ArrayLike], ArrayLike]
