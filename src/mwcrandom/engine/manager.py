"""
==============
Stream Manager
==============

"""
from __future__ import annotations

from layered_config_tree import ConfigurationError, LayeredConfigTree
from loguru import logger

from mwcrandom.engine.entropy import SeededEntropy, get_hash, system_entropy
from mwcrandom.engine.exceptions import RandomnessError
from mwcrandom.engine.stream import MWCStream
from mwcrandom.logging import get_logger
from mwcrandom.types import EntropySource

ENTROPY_SOURCES = ["system", "seeded"]


class StreamManager:
    """Access point for named Multiply-With-Carry streams.

    Every stream the manager hands out is constructed from its own entropy
    draws, so streams never share or split a sequence. When the
    configuration selects the ``seeded`` entropy source, the seed of each
    stream is derived from its name and the configured random seed, which
    makes whole runs reproducible.
    """

    CONFIGURATION_DEFAULTS = {
        "randomness": {
            "entropy_source": "system",
            "random_seed": 0,
            "additional_seed": None,
        }
    }

    def __init__(self) -> None:
        self._entropy_source: str = "system"
        self._seed: str = ""
        self._streams: dict[str, MWCStream] = dict()

    def setup(self, configuration: LayeredConfigTree) -> None:
        """Reads the ``randomness`` block of the configuration.

        Raises
        ------
        ConfigurationError
            If the configured entropy source is not one of
            ``ENTROPY_SOURCES``.
        """
        entropy_source = configuration.randomness.entropy_source
        if entropy_source not in ENTROPY_SOURCES:
            raise ConfigurationError(
                f"Unknown entropy source {entropy_source!r}. "
                f"Valid entropy sources are {ENTROPY_SOURCES}.",
                value_name="entropy_source",
            )
        self._entropy_source = entropy_source
        self._seed = str(configuration.randomness.random_seed)
        if configuration.randomness.additional_seed is not None:
            self._seed += "_" + str(configuration.randomness.additional_seed)
        logger.debug(
            f"Stream manager using {self._entropy_source} entropy with seed {self._seed!r}."
        )

    def get_entropy_source(self, stream_name: str) -> EntropySource:
        """Provides the entropy source a stream with the given name is seeded from."""
        if self._entropy_source == "seeded":
            return SeededEntropy(get_hash("_".join([stream_name, self._seed])))
        return system_entropy

    def get_stream(self, stream_name: str) -> MWCStream:
        """Provides a new, independently seeded stream of random numbers.

        Parameters
        ----------
        stream_name
            A unique identifier for the stream. Typically, this represents a
            decision that needs random numbers, like 'moves_left' or
            'gets_disease'.

        Returns
        -------
            A freshly constructed stream.

        Raises
        ------
        RandomnessError
            If a stream with the same name was already handed out.
        """
        if stream_name in self._streams:
            raise RandomnessError(
                f"Two separate places are attempting to create "
                f"the same randomness stream for {stream_name}"
            )
        stream = MWCStream(stream_name, self.get_entropy_source(stream_name))
        self._streams[stream_name] = stream
        get_logger(stream_name).info(f"Created stream {stream_name!r}.")
        return stream

    def __str__(self) -> str:
        return "StreamManager()"

    def __repr__(self) -> str:
        return f"StreamManager(entropy_source={self._entropy_source}, seed={self._seed})"
