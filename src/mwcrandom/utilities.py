"""
===========================
Miscellaneous Utility Tools
===========================

"""
from __future__ import annotations

import functools
from bdb import BdbQuit
from collections.abc import Callable, Sequence
from typing import Any, Literal, Union

import numpy as np
from loguru import logger

from mwcrandom.types import NumericArray

NumberLike = Union[NumericArray, float, int]


def rate_to_probability(
    rate: Sequence[float] | NumberLike,
    time_scaling_factor: float | int = 1.0,
    rate_conversion_type: Literal["linear", "exponential"] = "linear",
) -> NumericArray:
    """Converts a rate to a probability.

    Parameters
    ----------
    rate
        The rate to convert to a probability.
    time_scaling_factor
        The time factor to scale the rates by. This is usually the time step.
    rate_conversion_type
        The type of conversion to use. Default is "linear" for a simple
        multiplication of rate and time_scaling_factor. The other option is
        "exponential" which should be used for continuous time models.

    Returns
    -------
        An array of floats representing the probability of the converted rates
    """
    if rate_conversion_type not in ["linear", "exponential"]:
        raise ValueError(
            f"Rate conversion type {rate_conversion_type} is not implemented. "
            "Allowable types are 'linear' or 'exponential'."
        )
    if rate_conversion_type == "linear":
        probability = np.array(np.multiply(rate, time_scaling_factor), dtype=float)

        exceeds_one = probability > 1.0
        if exceeds_one.any():
            probability[exceeds_one] = 1.0
            logger.warning(
                "The rate to probability conversion resulted in a probability greater than 1.0. "
                "The probability has been clipped to 1.0 and indicates the rate is too high."
            )
    else:
        # exp(-rate) underflows for very large rates
        rate = np.array(rate, dtype=float)
        rate[rate > 250] = 250.0
        probability = 1 - np.exp(-rate * time_scaling_factor)

    return probability


def handle_exceptions(
    func: Callable[..., Any], logger: Any, with_debugger: bool
) -> Callable[..., Any]:
    """Drops a user into an interactive debugger if func raises an error."""

    @functools.wraps(func)
    def wrapped(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (BdbQuit, KeyboardInterrupt):
            raise
        except Exception as e:
            logger.exception("Uncaught exception {}".format(e))
            if with_debugger:
                import pdb
                import traceback

                traceback.print_exc()
                pdb.post_mortem()
            else:
                raise

    return wrapped
