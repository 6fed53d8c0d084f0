"""Validation helpers for hopping family tables."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from hoppingpy.modeling.schema import HoppingFamily


def validate_families(families: Sequence[HoppingFamily], num_families: int | None = None) -> None:
    if num_families is not None and len(families) != num_families:
        raise ValueError(f"Expected {num_families} hopping families, got {len(families)}.")
    names = [f.name for f in families]
    if any(not name for name in names):
        raise ValueError("Hopping family names must be non-empty.")
    if len(set(names)) != len(names):
        raise ValueError("Hopping family names must be unique.")
    for family in families:
        if not np.isfinite(complex(family.energy)):
            raise ValueError(f"Hopping family '{family.name}' has a non-finite energy.")
        if len(family.offset) == 0:
            raise ValueError(f"Hopping family '{family.name}' must define a cell offset.")
