"""Builder configuration for hopping assembly."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping


@dataclass(frozen=True)
class BuildConfig:
    """Config knobs for hopping block assembly and Hamiltonian construction."""

    index_dtype: str = "int32"
    value_dtype: str | None = None
    validate: bool = False
    hermitian: bool = True
    hamiltonian_dtype: str = "complex128"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BuildConfig:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown BuildConfig keys: {', '.join(unknown)}")
        return cls(**dict(data))
