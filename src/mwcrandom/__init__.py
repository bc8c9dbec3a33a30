import numpy

numpy.seterr(all="raise")

from mwcrandom.__about__ import (
    __author__,
    __copyright__,
    __email__,
    __license__,
    __summary__,
    __title__,
    __uri__,
    __version__,
)
from mwcrandom.engine import (
    C_MAX,
    CYCLE,
    RESIDUAL_CHOICE,
    GeneratorState,
    MWCStream,
    SeededEntropy,
    StreamManager,
    advance,
    construct,
    read,
    reset,
    system_entropy,
)
from mwcrandom.exceptions import MWCError
