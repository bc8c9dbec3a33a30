from __future__ import annotations

import pytest

from mwcrandom.engine import UINT32_MAX, GeneratorState, SeededEntropy, construct
from mwcrandom.testing_utilities import build_state


@pytest.fixture
def fresh_state() -> GeneratorState:
    return construct()


@pytest.fixture
def seeded_state() -> GeneratorState:
    return construct(SeededEntropy(2024))


@pytest.fixture
def ones_state() -> GeneratorState:
    return build_state(1, carry=100)


@pytest.fixture
def max_state() -> GeneratorState:
    return build_state(UINT32_MAX, carry=100)
