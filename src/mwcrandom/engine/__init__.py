"""
==============================
The Multiply-With-Carry Engine
==============================

This package contains Marsaglia's Multiply-With-Carry generator and the
tools built around it.

The engine itself is four functions over an immutable
:class:`~mwcrandom.engine.state.GeneratorState`: :func:`construct` seeds a new
state from an entropy source, :func:`read` returns the current output,
:func:`advance` computes the next state and :func:`reset` returns to the
state as originally seeded. Everything except :func:`construct` is a pure
function, which makes runs reproducible and states easy to store.

:class:`MWCStream` wraps a single live state for callers that prefer a
mutable handle, and :class:`StreamManager` hands out named, independently
seeded streams from configuration.

"""
from mwcrandom.engine.core import advance, construct, read, reset
from mwcrandom.engine.entropy import SeededEntropy, get_hash, system_entropy
from mwcrandom.engine.exceptions import (
    EntropySourceError,
    GeneratorStateError,
    RandomnessError,
)
from mwcrandom.engine.manager import StreamManager
from mwcrandom.engine.serialization import (
    load_state,
    save_state,
    state_from_dict,
    state_to_dict,
)
from mwcrandom.engine.state import (
    C_MAX,
    CYCLE,
    MODULUS,
    MULTIPLIER,
    UINT32_MAX,
    GeneratorState,
)
from mwcrandom.engine.stream import RESIDUAL_CHOICE, MWCStream
