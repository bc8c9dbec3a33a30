"""
================================
Multiply-With-Carry Engine Core
================================

This module implements Marsaglia's lag-4096 Multiply-With-Carry generator as
four functions over :class:`~mwcrandom.engine.state.GeneratorState` values.

Only :func:`construct` touches an entropy source. Every other function is a
pure function of its argument, so a state can be stored, compared, or
replayed freely. A typical sequence looks like::

    state = construct()

    value1 = read(state)
    state = advance(state)

    value2 = read(state)
    state = advance(state)

Reference: https://en.wikipedia.org/wiki/Multiply-with-carry_pseudorandom_number_generator

"""
from __future__ import annotations

import numpy as np
from loguru import logger

from mwcrandom.engine.entropy import draw, system_entropy
from mwcrandom.engine.state import (
    C_MAX,
    CYCLE,
    MODULUS,
    MULTIPLIER,
    UINT32_MAX,
    GeneratorState,
)
from mwcrandom.types import EntropySource


def construct(entropy_source: EntropySource | None = None) -> GeneratorState:
    """Creates a freshly seeded generator state.

    The carry is drawn first, rejecting candidates until one falls below
    ``C_MAX``, and then the ring is filled with ``CYCLE`` draws. The seeded
    ring and carry are kept as the snapshot :func:`reset` returns to.

    Parameters
    ----------
    entropy_source
        A callable returning an unsigned 32-bit integer per call. Defaults
        to the host's secure random source.

    Returns
    -------
        A new state positioned on its first output.

    Raises
    ------
    EntropySourceError
        If the entropy source fails or produces an out-of-range value.
    """
    if entropy_source is None:
        entropy_source = system_entropy

    carry = draw(entropy_source)
    rejected = 0
    while carry >= C_MAX:
        rejected += 1
        carry = draw(entropy_source)

    ring = np.fromiter(
        (draw(entropy_source) for _ in range(CYCLE)), dtype=np.uint32, count=CYCLE
    )
    ring.flags.writeable = False
    logger.debug(
        f"Seeded generator from {entropy_source!r} after rejecting {rejected} carry candidates."
    )

    return GeneratorState(
        ring=ring,
        carry=carry,
        cursor=CYCLE - 1,
        initial_ring=ring.copy(),
        initial_carry=carry,
    )


def reset(state: GeneratorState) -> GeneratorState:
    """Returns the state exactly as it was when it was constructed."""
    return GeneratorState(
        ring=state.initial_ring,
        carry=state.initial_carry,
        cursor=CYCLE - 1,
        initial_ring=state.initial_ring,
        initial_carry=state.initial_carry,
    )


def read(state: GeneratorState) -> int:
    """Returns the current output of the state.

    Reading never advances the state: calling this any number of times on
    the same state returns the same value. Call :func:`advance` to move to
    the next output.
    """
    return int(state.ring[state.cursor])


def advance(state: GeneratorState) -> GeneratorState:
    """Computes the state holding the next output.

    The new value is not returned; read it with :func:`read`.

    Parameters
    ----------
    state
        The current state.

    Returns
    -------
        The next state in the sequence.
    """
    cursor = (state.cursor + 1) & (CYCLE - 1)
    t = MULTIPLIER * int(state.ring[cursor]) + state.carry
    # Let carry = t / 0xFFFFFFFF and x = t mod 0xFFFFFFFF.
    carry = t >> 32
    x = (t + carry) & UINT32_MAX
    if x < carry:
        x += 1
        carry += 1

    ring = state.ring.copy()
    ring[cursor] = (MODULUS - x) & UINT32_MAX
    ring.flags.writeable = False

    return GeneratorState(
        ring=ring,
        carry=carry,
        cursor=cursor,
        initial_ring=state.initial_ring,
        initial_carry=state.initial_carry,
    )
