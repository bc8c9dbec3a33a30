"""
===================
State Serialization
===================

Conversion of :class:`~mwcrandom.engine.state.GeneratorState` values to and
from plain Python data and ``.npz`` archives. Only the five plain fields are
stored, so a saved state resumes exactly where it left off and still resets
to its original seed.

"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np

from mwcrandom.engine.exceptions import GeneratorStateError
from mwcrandom.engine.state import CYCLE, UINT32_MAX, GeneratorState
from mwcrandom.types import WordArray

STATE_FIELDS = ["ring", "carry", "cursor", "initial_ring", "initial_carry"]


def state_to_dict(state: GeneratorState) -> dict[str, Any]:
    """Converts a state to a dictionary of builtin types."""
    return {
        "ring": state.ring.tolist(),
        "carry": state.carry,
        "cursor": state.cursor,
        "initial_ring": state.initial_ring.tolist(),
        "initial_carry": state.initial_carry,
    }


def state_from_dict(data: dict[str, Any]) -> GeneratorState:
    """Builds a state from a dictionary of its fields.

    Parameters
    ----------
    data
        A mapping with the keys in ``STATE_FIELDS``.

    Returns
    -------
        The state described by ``data``.

    Raises
    ------
    GeneratorStateError
        If a field is missing or holds a value a state cannot have.
    """
    missing = [field for field in STATE_FIELDS if field not in data]
    if missing:
        raise GeneratorStateError(f"State data is missing the fields {missing}.")

    return GeneratorState(
        ring=_to_words(data["ring"], "ring"),
        carry=_to_scalar(data["carry"], "carry"),
        cursor=_to_scalar(data["cursor"], "cursor"),
        initial_ring=_to_words(data["initial_ring"], "initial_ring"),
        initial_carry=_to_scalar(data["initial_carry"], "initial_carry"),
    )


def save_state(state: GeneratorState, path: str | Path) -> Path:
    """Writes a state to an ``.npz`` archive and returns the path written."""
    path = Path(path)
    if path.suffix != ".npz":
        path = path.with_suffix(".npz")
    np.savez(
        path,
        ring=state.ring,
        carry=np.int64(state.carry),
        cursor=np.int64(state.cursor),
        initial_ring=state.initial_ring,
        initial_carry=np.int64(state.initial_carry),
    )
    return path


def load_state(path: str | Path) -> GeneratorState:
    """Reads a state written by :func:`save_state`."""
    with np.load(Path(path)) as archive:
        data = {key: archive[key] for key in archive.files}
    return state_from_dict(data)


def _to_words(values: Any, field_name: str) -> WordArray:
    words = np.asarray(values)
    if words.shape != (CYCLE,):
        raise GeneratorStateError(
            f"{field_name} must hold {CYCLE} values. Got shape {words.shape}."
        )
    if not np.issubdtype(words.dtype, np.integer):
        raise GeneratorStateError(
            f"{field_name} must hold integers. Got dtype {words.dtype}."
        )
    if words.min() < 0 or words.max() > UINT32_MAX:
        raise GeneratorStateError(
            f"{field_name} holds values outside the unsigned 32-bit range."
        )
    return words.astype(np.uint32)


def _to_scalar(value: Any, field_name: str) -> int:
    value = np.asarray(value)
    if value.shape != () or not np.issubdtype(value.dtype, np.integer):
        raise GeneratorStateError(f"{field_name} must be a single integer. Got {value!r}.")
    return int(value)
