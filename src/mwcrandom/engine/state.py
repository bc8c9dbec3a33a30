"""
===============
Generator State
===============

The value type threaded through the Multiply-With-Carry engine along with
the constants that parameterize it.

Attributes
----------
CYCLE : int
    The length of the ring of pending outputs. Must be a power of two so the
    cursor can wrap with a bit mask.
C_MAX : int
    Exclusive upper bound on the carry drawn at construction.
MULTIPLIER : int
    The multiplier applied to the lagged ring value on every step.
MODULUS : int
    The value each new ring entry is subtracted from.

"""
from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any

import numpy as np

from mwcrandom.engine.exceptions import GeneratorStateError
from mwcrandom.types import WordArray

CYCLE = 4096  # as Marsaglia recommends
C_MAX = 809430660  # as Marsaglia recommends
MULTIPLIER = 18782
MODULUS = 0xFFFFFFFE
UINT32_MAX = 0xFFFFFFFF


def _frozen_words(words: Any, field_name: str) -> WordArray:
    words = np.asarray(words)
    if words.dtype != np.uint32:
        raise GeneratorStateError(
            f"{field_name} must hold unsigned 32-bit words. Got dtype {words.dtype}."
        )
    if words.shape != (CYCLE,):
        raise GeneratorStateError(
            f"{field_name} must have shape ({CYCLE},). Got shape {words.shape}."
        )
    if words.flags.writeable or not words.flags.owndata:
        words = words.copy()
        words.flags.writeable = False
    return words


def _checked_int(value: Any, field_name: str, upper: int) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise GeneratorStateError(f"{field_name} must be an integer. Got {value!r}.")
    if not 0 <= value < upper:
        raise GeneratorStateError(
            f"{field_name} must be in the range [0, {upper}). Got {value}."
        )
    return int(value)


@dataclass(frozen=True, eq=False)
class GeneratorState:
    """An immutable snapshot of a Multiply-With-Carry generator.

    States are produced by :func:`mwcrandom.engine.core.construct` and
    transformed by :func:`~mwcrandom.engine.core.advance` and
    :func:`~mwcrandom.engine.core.reset`, each of which returns a new value.
    The ring arrays are always read-only. Arrays passed in are copied unless
    they own their data and are already read-only, so no caller keeps a
    mutable handle on a live state.

    """

    ring: WordArray
    """The circular queue of upcoming outputs."""
    carry: int
    """The carry fed into the next multiply-add step."""
    cursor: int
    """Index of the current output in ``ring``."""
    initial_ring: WordArray
    """The ring as it was seeded. Only used to reset."""
    initial_carry: int
    """The carry as it was seeded. Only used to reset."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "ring", _frozen_words(self.ring, "ring"))
        object.__setattr__(
            self, "initial_ring", _frozen_words(self.initial_ring, "initial_ring")
        )
        for name in ["carry", "initial_carry"]:
            object.__setattr__(self, name, _checked_int(getattr(self, name), name, UINT32_MAX + 1))
        object.__setattr__(self, "cursor", _checked_int(self.cursor, "cursor", CYCLE))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeneratorState):
            return NotImplemented
        return (
            self.carry == other.carry
            and self.cursor == other.cursor
            and self.initial_carry == other.initial_carry
            and np.array_equal(self.ring, other.ring)
            and np.array_equal(self.initial_ring, other.initial_ring)
        )

    def __repr__(self) -> str:
        return "GeneratorState(cursor={!r}, carry={!r}, initial_carry={!r})".format(
            self.cursor, self.carry, self.initial_carry
        )
