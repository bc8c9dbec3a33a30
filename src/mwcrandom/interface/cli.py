"""
============================
mwcrandom Command Line Tools
============================

``mwcrandom`` provides the tool :command:`mwc` for drawing values from the
generator from the command line. It provides two subcommands:

.. list-table:: ``mwc`` sub-commands
    :header-rows: 1
    :widths: 30, 40

    *   - Name
        - Description
    *   - | **generate**
        - | Prints values drawn from a freshly seeded or saved generator.
    *   - | **check**
        - | Draws a sample and checks that it looks uniformly distributed.

.. click:: mwcrandom.interface.cli:mwc
   :prog: mwc
   :show-nested:

"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import click
import numpy as np
from layered_config_tree import LayeredConfigTree
from loguru import logger

from mwcrandom.configuration import build_configuration, load_configuration_file
from mwcrandom.engine import (
    UINT32_MAX,
    MWCStream,
    StreamManager,
    load_state,
    save_state,
)
from mwcrandom.logging import configure_logging_to_terminal
from mwcrandom.utilities import handle_exceptions

CLI_STREAM_NAME = "cli"

_seed_option = click.option(
    "--seed",
    "-s",
    type=int,
    default=None,
    help="Seed the generator reproducibly from this number instead of system entropy.",
)
_configuration_option = click.option(
    "--configuration",
    "-c",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    help="A yaml file with configuration overrides.",
)
_verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Logs verbosely. Useful for debugging and development.",
)
_quiet_option = click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppresses all logging except for warnings and errors.",
)


@click.group()
def mwc() -> None:
    """A command line utility for the Multiply-With-Carry generator.

    Draw values with the ``generate`` sub-command or check the distribution
    of a sample with the ``check`` sub-command.
    """
    pass


@mwc.command()
@click.argument("count", type=click.IntRange(min=0))
@_seed_option
@_configuration_option
@click.option(
    "--float",
    "as_float",
    is_flag=True,
    help="Print floats in [0, 1) instead of unsigned 32-bit integers.",
)
@click.option(
    "--load-state",
    "load_state_path",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    help="Continue from a generator state saved with --save-state.",
)
@click.option(
    "--save-state",
    "save_state_path",
    type=click.Path(dir_okay=False, resolve_path=True),
    help="Save the generator state after drawing to this .npz file.",
)
@_verbose_option
@_quiet_option
@click.option(
    "--pdb",
    "with_debugger",
    is_flag=True,
    help="Drop into python debugger if an error occurs.",
)
def generate(
    count: int,
    seed: int | None,
    configuration: str | None,
    as_float: bool,
    load_state_path: str | None,
    save_state_path: str | None,
    verbose: bool,
    quiet: bool,
    with_debugger: bool,
) -> None:
    """Print COUNT values from the generator, one per line.

    Values follow the generator's read/advance sequence, so the first value
    printed from a fresh generator is its first seeded output.
    """
    config = _build_configuration(configuration, seed)
    _configure_logging(config, verbose, quiet)

    def _generate() -> None:
        if load_state_path:
            stream = MWCStream(CLI_STREAM_NAME, state=load_state(load_state_path))
            logger.info(f"Loaded generator state from {load_state_path}.")
        else:
            stream = _get_stream(config)

        for _ in range(count):
            value = stream.random() if as_float else stream.next_u32()
            click.echo(value)

        if save_state_path:
            path = save_state(stream.state, save_state_path)
            logger.info(f"Saved generator state to {path}.")

    main = handle_exceptions(_generate, logger, with_debugger)
    main()


@mwc.command()
@click.option(
    "--iterations",
    "-n",
    type=click.IntRange(min=1),
    default=10_000,
    show_default=True,
    help="The number of values to draw.",
)
@click.option(
    "--tolerance",
    "-t",
    type=click.FloatRange(min=0.0),
    default=0.02,
    show_default=True,
    help="The allowed absolute deviation from the expected statistics.",
)
@_seed_option
@_configuration_option
@_verbose_option
@_quiet_option
def check(
    iterations: int,
    tolerance: float,
    seed: int | None,
    configuration: str | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """Draw a sample and check that it looks uniformly distributed.

    The mean of the values scaled to [0, 1] should be close to 0.5 and about
    10% of the values should fall below 10% of the maximum.
    """
    config = _build_configuration(configuration, seed)
    _configure_logging(config, verbose, quiet)

    values = _get_stream(config).draw_u32(iterations)
    mean = float(np.mean(values / UINT32_MAX))
    below_ten_percent = float(np.mean(values < UINT32_MAX // 10))
    click.echo(f"Mean: {mean:.6f}")
    click.echo(f"Fraction below 10% of the maximum: {below_ten_percent:.6f}")

    failures = []
    if abs(mean - 0.5) > tolerance:
        failures.append(f"mean {mean:.6f} is not within {tolerance} of 0.5")
    if abs(below_ten_percent - 0.1) > tolerance:
        failures.append(
            f"fraction below 10% {below_ten_percent:.6f} is not within {tolerance} of 0.1"
        )
    if failures:
        raise click.ClickException("Uniformity check failed: " + "; ".join(failures))

    click.secho("Uniformity check passed.", fg="green")


def _build_configuration(
    configuration_file: str | None, seed: int | None
) -> LayeredConfigTree:
    overrides: dict[str, Any] = (
        load_configuration_file(Path(configuration_file)) if configuration_file else {}
    )
    if seed is not None:
        overrides.setdefault("randomness", {}).update(
            {"entropy_source": "seeded", "random_seed": seed}
        )
    return build_configuration(overrides)


def _configure_logging(configuration: LayeredConfigTree, verbose: bool, quiet: bool) -> None:
    if verbose and quiet:
        raise click.UsageError("Cannot be both verbose and quiet.")
    verbosity = configuration.logging.verbosity
    if verbose:
        verbosity = 2
    elif quiet:
        verbosity = 0
    configure_logging_to_terminal(
        verbosity=verbosity, long_format=configuration.logging.long_format
    )


def _get_stream(configuration: LayeredConfigTree) -> MWCStream:
    manager = StreamManager()
    manager.setup(configuration)
    return manager.get_stream(CLI_STREAM_NAME)
