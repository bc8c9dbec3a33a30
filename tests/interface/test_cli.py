from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import numpy as np
import pytest
import yaml
from click.testing import CliRunner
from loguru import logger

from mwcrandom.engine import CYCLE, UINT32_MAX, load_state
from mwcrandom.interface.cli import mwc


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[CliRunner, None, None]:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    yield CliRunner()
    # The commands attach sinks to the runner's temporary streams.
    logger.remove()


def _values(output: str) -> list[str]:
    return [line for line in output.splitlines() if line]


def test_generate_parameters() -> None:
    generate_parameters = {param.name for param in mwc.commands["generate"].params}
    expected_parameters = {
        "count",
        "seed",
        "configuration",
        "as_float",
        "load_state_path",
        "save_state_path",
        "verbose",
        "quiet",
        "with_debugger",
    }
    assert generate_parameters == expected_parameters


def test_generate(runner: CliRunner) -> None:
    result = runner.invoke(mwc, ["generate", "5"])

    assert result.exit_code == 0, result.output
    values = [int(value) for value in _values(result.stdout)]
    assert len(values) == 5
    assert all(0 <= value <= UINT32_MAX for value in values)


def test_generate_seeded_is_reproducible(runner: CliRunner) -> None:
    first = runner.invoke(mwc, ["generate", "20", "--seed", "42"])
    second = runner.invoke(mwc, ["generate", "20", "-s", "42"])
    other = runner.invoke(mwc, ["generate", "20", "-s", "43"])

    assert first.exit_code == second.exit_code == other.exit_code == 0
    assert _values(first.stdout) == _values(second.stdout)
    assert _values(first.stdout) != _values(other.stdout)


def test_generate_floats(runner: CliRunner) -> None:
    result = runner.invoke(mwc, ["generate", "10", "--float", "-s", "1"])

    assert result.exit_code == 0, result.output
    values = [float(value) for value in _values(result.stdout)]
    assert len(values) == 10
    assert all(0.0 <= value < 1.0 for value in values)


def test_generate_save_and_load_state(runner: CliRunner, tmp_path: Path) -> None:
    state_path = tmp_path / "state.npz"

    first = runner.invoke(mwc, ["generate", "10", "-s", "7", "--save-state", str(state_path)])
    assert first.exit_code == 0, first.output
    assert load_state(state_path).cursor == (CYCLE - 1 + 10) % CYCLE

    resumed = runner.invoke(mwc, ["generate", "10", "--load-state", str(state_path)])
    straight = runner.invoke(mwc, ["generate", "20", "-s", "7"])

    assert resumed.exit_code == straight.exit_code == 0
    assert _values(first.stdout) + _values(resumed.stdout) == _values(straight.stdout)


def test_generate_configuration_file(runner: CliRunner, tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    with config_path.open("w") as f:
        yaml.dump({"randomness": {"entropy_source": "seeded", "random_seed": 3}}, f)

    from_file = runner.invoke(mwc, ["generate", "5", "-c", str(config_path)])
    from_seed = runner.invoke(mwc, ["generate", "5", "-s", "3"])

    assert from_file.exit_code == from_seed.exit_code == 0
    assert _values(from_file.stdout) == _values(from_seed.stdout)


def test_generate_verbose_and_quiet(runner: CliRunner) -> None:
    result = runner.invoke(mwc, ["generate", "1", "-v", "-q"])

    assert result.exit_code != 0
    assert "Cannot be both verbose and quiet" in result.output


def test_generate_negative_count(runner: CliRunner) -> None:
    result = runner.invoke(mwc, ["generate", "-1"])

    assert result.exit_code != 0


def test_check(runner: CliRunner) -> None:
    result = runner.invoke(mwc, ["check", "-n", "10000", "-s", "2024"])

    assert result.exit_code == 0, result.output
    assert "Mean:" in result.stdout
    assert "Fraction below 10% of the maximum:" in result.stdout
    assert "Uniformity check passed." in result.stdout

    mean = float(result.stdout.split("Mean:")[1].split()[0])
    assert np.isclose(mean, 0.5, atol=0.02)


def test_check_fails_outside_tolerance(runner: CliRunner) -> None:
    result = runner.invoke(mwc, ["check", "-n", "10", "-t", "0", "-s", "2024"])

    assert result.exit_code == 1
    assert "Uniformity check failed" in result.output
