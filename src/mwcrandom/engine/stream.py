"""
=================
Generator Streams
=================

This module provides :class:`MWCStream`, an owned and mutable handle over a
single live :class:`~mwcrandom.engine.state.GeneratorState`, along with the
helpers simulations usually want on top of raw 32-bit words.

Attributes
----------
RESIDUAL_CHOICE : object
    A probability placeholder to be used in an un-normalized array of weights
    to absorb leftover weight so that the array sums to unity.
    For example::

        [0.2, 0.2, RESIDUAL_CHOICE] => [0.2, 0.2, 0.6]

Notes
-----
Currently this object is only used in the `choice` method of this module.

"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import numpy as np
import numpy.typing as npt
import pandas as pd
from scipy import stats

from mwcrandom.engine import core
from mwcrandom.engine.exceptions import RandomnessError
from mwcrandom.engine.state import GeneratorState
from mwcrandom.types import EntropySource, NumericArray, WordArray
from mwcrandom.utilities import rate_to_probability

RESIDUAL_CHOICE = object()

PandasObject = TypeVar("PandasObject", pd.DataFrame, pd.Series, pd.Index)  # type: ignore [type-arg]

_TWO_TO_THE_32 = 2.0**32


class MWCStream:
    """A stream of Multiply-With-Carry random numbers.

    The stream owns exactly one live generator state and replaces it on every
    draw. Streams are never split: two independent sequences need two
    streams, each constructed from its own entropy.

    Parameters
    ----------
    name
        The name of the stream, used in logs and by the
        :class:`~mwcrandom.engine.manager.StreamManager`.
    entropy_source
        Source of seed values. Defaults to the host's secure random source.
        Ignored if ``state`` is provided.
    state
        An existing state to continue from, e.g. one loaded from disk.
    """

    def __init__(
        self,
        name: str,
        entropy_source: EntropySource | None = None,
        state: GeneratorState | None = None,
    ):
        self.name = name
        """The name of the stream."""
        self._state = state if state is not None else core.construct(entropy_source)

    @property
    def state(self) -> GeneratorState:
        """The live generator state."""
        return self._state

    def read(self) -> int:
        """Returns the current value without advancing."""
        return core.read(self._state)

    def advance(self) -> None:
        """Moves the stream to its next value."""
        self._state = core.advance(self._state)

    def reset(self) -> None:
        """Rewinds the stream to the state it was seeded with."""
        self._state = core.reset(self._state)

    def next_u32(self) -> int:
        """Returns the current value and advances past it."""
        value = core.read(self._state)
        self._state = core.advance(self._state)
        return value

    def draw_u32(self, size: int) -> WordArray:
        """Returns the next ``size`` values of the stream."""
        if size < 0:
            raise ValueError(f"Cannot draw a negative number of values. Got {size}.")
        return np.fromiter((self.next_u32() for _ in range(size)), dtype=np.uint32, count=size)

    def random(self) -> float:
        """A uniform float in [0, 1)."""
        return self.next_u32() / _TWO_TO_THE_32

    def randint(self, low: int, high: int) -> int:
        """A uniform integer in [low, high] inclusive.

        Ranges wider than 2**32 combine as many consecutive words as needed
        so every integer in the range can be drawn.
        """
        if high < low:
            raise ValueError(f"Empty range: low={low} is greater than high={high}.")
        span = high - low + 1
        if span <= 2**32:
            return low + int(self.random() * span)

        n_words = -(-span.bit_length() // 32)
        value = 0
        for _ in range(n_words):
            value = (value << 32) | self.next_u32()
        return low + ((value * span) >> (32 * n_words))

    def get_draw(self, index: pd.Index[Any]) -> pd.Series[float]:
        """Get an indexed set of numbers uniformly drawn from [0, 1).

        Parameters
        ----------
        index
            An index whose length is the number of random draws made
            and which indexes the returned `pandas.Series`.

        Returns
        -------
            A series of random numbers indexed by the provided `pandas.Index`.
        """
        # Return a structured null value if an empty index is passed
        if index.empty:
            return pd.Series(index=index, dtype=float)
        draws = self.draw_u32(len(index)) / _TWO_TO_THE_32
        return pd.Series(draws, index=index)

    def filter_for_rate(
        self,
        population: PandasObject,
        rate: float | list[float] | tuple[float] | NumericArray | pd.Series[float],
    ) -> PandasObject:
        """Decide an event outcome for each individual from rates.

        Given a population or its index and an array of associated rates for
        some event to happen, we create and return the subpopulation for whom
        the event occurred.

        Parameters
        ----------
        population
            The individuals for which we are determining the outcome of an
            event.
        rate
            A scalar float value or a 1d list of rates of the event under
            consideration occurring which corresponds (i.e.
            `len(population) == len(rate)`) to the population passed in. The
            rates must already be scaled to the time step. If a scalar is
            provided, it is applied to every row in the population.

        Returns
        -------
            The subpopulation for whom the event occurred. The return type
            will be the same as type(population).
        """
        return self.filter_for_probability(population, rate_to_probability(rate))

    def filter_for_probability(
        self,
        population: PandasObject,
        probability: float | list[float] | tuple[float] | NumericArray | pd.Series[float],
    ) -> PandasObject:
        """Decide an outcome for each individual from probabilities.

        Parameters
        ----------
        population
            The individuals for which we are determining the outcome of an
            event.
        probability
            A scalar float value or a 1d list of probabilities of the event
            under consideration occurring which corresponds (i.e.
            `len(population) == len(probability)`) to the population passed
            in. If a scalar is provided, it is applied to every row in the
            population.

        Returns
        -------
            The subpopulation for whom the event occurred. The return type
            will be the same as type(population).
        """
        if population.empty:
            return population

        if isinstance(population, pd.Index):
            index = population
        else:
            index = population.index

        draws = self.get_draw(index)
        mask = draws.to_numpy() < np.asarray(probability, dtype=float)
        return population[mask]

    def choice(
        self,
        index: pd.Index[Any],
        choices: list[Any] | tuple[Any] | npt.NDArray[Any] | pd.Series[Any],
        p: (
            list[float | object]
            | tuple[float | object]
            | npt.NDArray[np.number[npt.NBitBase] | np.object_]
            | pd.Series[Any]
            | None
        ) = None,
    ) -> pd.Series[Any]:
        """Decides between a weighted or unweighted set of choices.

        Parameters
        ----------
        index
            An index whose length is the number of random draws made
            and which indexes the returned `pandas.Series`.
        choices
            A set of options to choose from.
        p
            The relative weights of the choices. Can be either a 1-d array of
            the same length as `choices` or a 2-d array with `len(index)` rows
            and `len(choices)` columns. In the 1-d case, the same set of
            weights are used to decide among the choices for every item in
            the `index`. In the 2-d case, each row in `p` contains a separate
            set of weights for every item in the `index`.

        Returns
        -------
            An indexed set of decisions from among the available `choices`.

        Raises
        ------
        RandomnessError
            If any row in `p` contains `RESIDUAL_CHOICE` and the remaining
            weights in the row are not normalized or any row of `p` contains
            more than one reference to `RESIDUAL_CHOICE`.
        """
        draws = self.get_draw(index)
        return _choice(draws, choices, p)

    def sample_from_distribution(
        self,
        index: pd.Index[Any],
        distribution: stats.rv_continuous | None = None,
        ppf: Callable[..., Any] | None = None,
        **distribution_kwargs: Any,
    ) -> pd.Series[Any]:
        """Given a distribution, returns an indexed set of samples from it.

        Parameters
        ----------
        index
            An index whose length is the number of random draws made
            and which indexes the returned `pandas.Series`.
        distribution
            A scipy.stats distribution object.
        ppf
            A function that takes a series of draws and returns a series of samples.
        distribution_kwargs
            Additional keyword arguments to pass to the ppf function.

        Returns
        -------
            An indexed set of samples from the provided distribution.
        """
        if ppf is None:
            if distribution is None:
                raise ValueError("Either distribution or ppf must be provided")
            ppf = distribution.ppf
        elif distribution is not None:
            raise ValueError("Only one of distribution or ppf can be provided")

        draws = self.get_draw(index)
        return pd.Series(ppf(draws, **distribution_kwargs), index=index)

    def __repr__(self) -> str:
        return "MWCStream(name={!r}, cursor={!r})".format(self.name, self._state.cursor)


def _choice(
    draws: pd.Series[float],
    choices: list[Any] | tuple[Any] | npt.NDArray[Any] | pd.Series[Any],
    p: (
        list[float | object]
        | tuple[float | object]
        | npt.NDArray[np.number[npt.NBitBase] | np.object_]
        | pd.Series[Any]
        | None
    ) = None,
) -> pd.Series[Any]:
    # Convert p to normalized probabilities broadcasted over index.
    p_norm = (
        _set_residual_probability(_normalize_shape(p, draws.index))
        if p is not None
        else np.ones((len(draws.index), len(choices)))
    )
    p_norm = p_norm / p_norm.sum(axis=1, keepdims=True)

    p_bins = np.cumsum(p_norm, axis=1)
    # Use the random draw to make a choice for every row in index.
    choice_index = (draws.to_numpy()[np.newaxis].T > p_bins).sum(axis=1)

    return pd.Series(np.array(choices)[choice_index], index=draws.index)


def _normalize_shape(
    p: (
        list[float | object]
        | tuple[float | object]
        | npt.NDArray[np.number[npt.NBitBase] | np.object_]
        | pd.Series[Any]
    ),
    index: pd.Index[Any],
) -> npt.NDArray[np.number[npt.NBitBase] | np.object_]:
    p = np.array(p)
    # We got a 1-d array => same weights for every index.
    if len(p.shape) == 1:
        # Turn 1-d array into 2-d array with same weights in every row.
        p = np.array(np.broadcast_to(p, (len(index), p.shape[0])))
    return p


def _set_residual_probability(
    p: npt.NDArray[np.number[npt.NBitBase] | np.object_],
) -> npt.NDArray[np.float64]:
    """Turns any use of `RESIDUAL_CHOICE` into a residual probability.

    Parameters
    ----------
    p
        Array where each row is a set of probability weights and potentially
        a `RESIDUAL_CHOICE` placeholder.

    Returns
    -------
        Array where each row is a set of normalized probability weights.

    Raises
    ------
    RandomnessError
        If more than one residual choice is supplied for a single set of
        weights, or if residual choice is supplied with weights that sum to
        more than 1.
    """
    residual_mask = p == RESIDUAL_CHOICE
    if residual_mask.any():  # I.E. if we have any placeholders.
        if np.any(np.sum(residual_mask, axis=1) - 1):
            raise RandomnessError(
                "More than one residual choice supplied for a single "
                f"set of weights. Weights: {p}."
            )

        p[residual_mask] = 0
        residual_p = 1 - np.sum(p, axis=1)  # Probabilities sum to 1.

        if np.any(residual_p < 0):  # We got un-normalized probability weights.
            raise RandomnessError(
                "Residual choice supplied with weights that summed to more than 1. "
                f"Weights: {p}."
            )

        p[residual_mask] = residual_p
    return p.astype(np.float64)
