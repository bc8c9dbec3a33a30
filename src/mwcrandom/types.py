from collections.abc import Callable

import numpy as np
import numpy.typing as npt

NumericArray = npt.NDArray[np.number[npt.NBitBase]]
WordArray = npt.NDArray[np.uint32]

# Returns one unsigned 32-bit integer per call.
EntropySource = Callable[[], int]
