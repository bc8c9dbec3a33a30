"""
===========================
mwcrandom Testing Utilities
===========================

Utility functions and classes to make testing code built on ``mwcrandom``
easier: deterministic entropy sources and hand-built generator states.

"""
from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from mwcrandom.engine.state import CYCLE, GeneratorState


class SequenceEntropy:
    """An entropy source that replays a fixed sequence of values.

    Raises ``StopIteration`` once the sequence is exhausted, which the engine
    reports as an entropy failure.
    """

    def __init__(self, values: Iterable[int]):
        self._values = iter(values)
        self.draws = 0

    def __call__(self) -> int:
        value = next(self._values)
        self.draws += 1
        return value

    def __repr__(self) -> str:
        return f"SequenceEntropy(draws={self.draws})"


def build_state(
    ring_value: int | Iterable[int],
    carry: int,
    cursor: int = CYCLE - 1,
) -> GeneratorState:
    """Builds a state with a known ring and carry.

    Parameters
    ----------
    ring_value
        Either a single value to fill the ring with, or ``CYCLE`` values.
    carry
        The carry, also used as the initial carry.
    cursor
        The cursor position.

    Returns
    -------
        A state whose snapshot matches its current ring and carry.
    """
    if isinstance(ring_value, int):
        ring = np.full(CYCLE, ring_value, dtype=np.uint32)
    else:
        ring = np.array(list(ring_value), dtype=np.uint32)
    return GeneratorState(
        ring=ring,
        carry=carry,
        cursor=cursor,
        initial_ring=ring,
        initial_carry=carry,
    )
