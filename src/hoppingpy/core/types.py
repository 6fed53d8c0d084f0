"""Shared dtypes and containers for per-family hopping storage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from hoppingpy.core.hopping_blocks import HoppingBlocks
    from hoppingpy.modeling.schema import HoppingFamily


Array = np.ndarray

# 32-bit site indices cover lattices with up to ~2e9 sites.
DEFAULT_INDEX_DTYPE = np.dtype(np.int32)


def as_index_dtype(dtype: str | np.dtype | type | None) -> np.dtype:
    """Normalise a dtype spec and require a signed or unsigned integer type."""

    out = DEFAULT_INDEX_DTYPE if dtype is None else np.dtype(dtype)
    if out.kind not in "iu":
        raise ValueError(f"Index dtype must be an integer type, got {out}.")
    return out


@dataclass(frozen=True)
class HoppingModel:
    """Hopping structure of a finite system together with its family table."""

    num_sites: int
    blocks: HoppingBlocks
    families: tuple[HoppingFamily, ...]
    onsite: Array | None = None

    def __post_init__(self) -> None:
        if self.blocks.num_sites != self.num_sites:
            raise ValueError("blocks.num_sites must match num_sites.")
        if self.blocks.num_families != len(self.families):
            raise ValueError("families must contain one entry per hopping block.")
        if self.onsite is not None and np.shape(self.onsite) != (self.num_sites,):
            raise ValueError("onsite must be a 1D array of length num_sites.")

    @property
    def num_families(self) -> int:
        return len(self.families)
