"""
===============
Entropy Sources
===============

Sources of raw 32-bit integers used to seed a generator. The engine only
calls an entropy source while constructing a state; nothing after that point
is non-deterministic.

"""
from __future__ import annotations

import hashlib
import numbers
import secrets

import numpy as np

from mwcrandom.engine.exceptions import EntropySourceError
from mwcrandom.engine.state import UINT32_MAX
from mwcrandom.types import EntropySource


def system_entropy() -> int:
    """Draws an unsigned 32-bit integer from the host's secure random source."""
    return secrets.randbits(32)


def get_hash(key: str) -> int:
    """Gets a hash of the provided key.

    Parameters
    ----------
    key
        A string used to create a seed for the random number generator.

    Returns
    -------
        A hash of the provided key.
    """
    max_allowable_numpy_seed = 4294967295  # 2**32 - 1
    return int(hashlib.sha1(key.encode("utf8")).hexdigest(), 16) % max_allowable_numpy_seed


class SeededEntropy:
    """A reproducible entropy source.

    Useful when a run has to be repeated exactly, e.g. when comparing
    scenarios that must share their random numbers. Values are drawn from a
    `numpy.random.RandomState` in blocks.

    Parameters
    ----------
    seed
        Seed for the underlying `numpy.random.RandomState`.
    block_size
        How many values to draw from the underlying state at a time.
    """

    def __init__(self, seed: int, block_size: int = 4096):
        self.seed = seed
        self._random_state = np.random.RandomState(seed=seed)
        self._block_size = block_size
        self._block: list[int] = []

    def __call__(self) -> int:
        if not self._block:
            block = self._random_state.randint(
                0, UINT32_MAX + 1, size=self._block_size, dtype=np.int64
            )
            # Reversed so pop() hands values out in draw order.
            self._block = block[::-1].tolist()
        return self._block.pop()

    def __repr__(self) -> str:
        return f"SeededEntropy(seed={self.seed!r})"


def draw(entropy_source: EntropySource) -> int:
    """Draws a single value from an entropy source and checks it.

    Parameters
    ----------
    entropy_source
        The source to draw from.

    Returns
    -------
        An integer in the range ``[0, 2**32 - 1]``.

    Raises
    ------
    EntropySourceError
        If the source fails or returns something other than an unsigned
        32-bit integer.
    """
    try:
        value = entropy_source()
    except Exception as e:
        raise EntropySourceError(
            f"Entropy source {entropy_source!r} failed to produce a value."
        ) from e
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise EntropySourceError(
            f"Entropy source {entropy_source!r} returned {value!r}, which is not an integer."
        )
    if not 0 <= value <= UINT32_MAX:
        raise EntropySourceError(
            f"Entropy source {entropy_source!r} returned {value}, which is outside "
            f"the unsigned 32-bit range."
        )
    return int(value)
