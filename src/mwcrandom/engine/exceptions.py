"""
=======================
Generator Engine Errors
=======================

Errors related to improper use of the generator engine and its helpers.

"""
from mwcrandom.exceptions import MWCError


class RandomnessError(MWCError):
    """Raised for inconsistencies in random number and choice generation."""

    pass


class EntropySourceError(RandomnessError):
    """Raised when the entropy source cannot provide a usable seed value."""

    pass


class GeneratorStateError(RandomnessError):
    """Raised when generator state fields are malformed."""

    pass
