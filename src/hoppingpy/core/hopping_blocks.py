"""Hopping coordinates arranged in per-family blocks.

Each block is a COO sparse matrix whose data array would hold the same value
for every entry: the index of the block, i.e. the hopping family ID::

        block 0            block 1            block 2
     row  col  data     row  col  data     row  col  data
      0    1    0        0    4    1        1    3    2
      0    4    0        2    3    1        4    4    2
      1    2    0        2    0    1        7    9    2
      3    2    0                           8    1    2
      7    5    0

Because the data array is trivial it is never stored. The full matrix is
recovered by concatenating the blocks and regenerating the family IDs, see
``hoppingpy.core.csr``.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Sequence

import numpy as np
from scipy.sparse import coo_matrix, csr_matrix

from .block import CooBlock
from .types import Array, as_index_dtype


logger = logging.getLogger(__name__)

BlockLike = CooBlock | tuple[Array, Array]


class HoppingBlocks:
    """Per-family COO blocks of a square ``num_sites x num_sites`` matrix."""

    def __init__(
        self,
        num_sites: int,
        num_families: int = 0,
        *,
        family_names: Sequence[str] | None = None,
        index_dtype: str | np.dtype | None = None,
    ) -> None:
        if num_sites < 0:
            raise ValueError("num_sites must be non-negative.")
        if num_families < 0:
            raise ValueError("num_families must be non-negative.")
        self._num_sites = int(num_sites)
        self._index_dtype = as_index_dtype(index_dtype)
        self._blocks = [CooBlock(dtype=self._index_dtype) for _ in range(num_families)]
        self._names = _check_family_names(family_names, num_families)

    @classmethod
    def from_blocks(
        cls,
        blocks: Iterable[BlockLike],
        num_sites: int | None = None,
        *,
        family_names: Sequence[str] | None = None,
        index_dtype: str | np.dtype | None = None,
    ) -> HoppingBlocks:
        """Wrap a pre-built block collection, e.g. after deserialization.

        ``num_sites`` defaults to one past the largest site index present.
        """

        dtype = as_index_dtype(index_dtype)
        coo_blocks = []
        for block in blocks:
            if isinstance(block, CooBlock):
                coo_blocks.append(CooBlock(block.rows, block.cols, dtype=dtype))
            else:
                rows, cols = block
                coo_blocks.append(CooBlock(rows, cols, dtype=dtype))

        if num_sites is None:
            num_sites = 0
            for b in coo_blocks:
                if len(b):
                    num_sites = max(num_sites, int(b.rows.max()) + 1, int(b.cols.max()) + 1)

        out = cls(num_sites, 0, index_dtype=dtype)
        out._blocks = coo_blocks
        out._names = _check_family_names(family_names, len(coo_blocks))
        return out

    @classmethod
    def from_csr(
        cls,
        matrix: csr_matrix,
        num_families: int | None = None,
        *,
        family_names: Sequence[str] | None = None,
        index_dtype: str | np.dtype | None = None,
    ) -> HoppingBlocks:
        """Regroup a CSR matrix whose values are family IDs into blocks."""

        from .csr import csr_to_blocks

        return csr_to_blocks(
            matrix,
            num_families=num_families,
            family_names=family_names,
            index_dtype=index_dtype,
        )

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[tuple[int, CooBlock]]:
        return enumerate(self._blocks)

    def __getitem__(self, key: int | str) -> CooBlock:
        if isinstance(key, str):
            key = self.family_id(key)
        return self._blocks[self._check_family(key)]

    def __repr__(self) -> str:
        return (
            f"HoppingBlocks(num_sites={self._num_sites}, num_families={self.num_families}, "
            f"nnz={self.nnz()})"
        )

    @property
    def num_sites(self) -> int:
        return self._num_sites

    @property
    def num_families(self) -> int:
        return len(self._blocks)

    @property
    def shape(self) -> tuple[int, int]:
        return self._num_sites, self._num_sites

    @property
    def index_dtype(self) -> np.dtype:
        return self._index_dtype

    @property
    def blocks(self) -> tuple[CooBlock, ...]:
        return tuple(self._blocks)

    @property
    def family_names(self) -> tuple[str, ...] | None:
        return self._names

    def family_id(self, name: str) -> int:
        if self._names is None:
            raise KeyError(f"Unknown hopping family '{name}': families are unnamed.")
        try:
            return self._names.index(name)
        except ValueError as exc:
            available = ", ".join(self._names) or "<none>"
            raise KeyError(f"Unknown hopping family '{name}'. Available families: {available}") from exc

    def nnz(self) -> int:
        """Number of non-zeros, i.e. the total number of hoppings."""

        return sum(len(b) for b in self._blocks)

    def counts(self) -> Array:
        return np.array([len(b) for b in self._blocks], dtype=np.int64)

    def capacities(self) -> Array:
        return np.array([b.capacity for b in self._blocks], dtype=np.int64)

    def reserve(self, counts: Sequence[int] | Array) -> None:
        """Reserve space for the given number of hoppings per family.

        The counts are estimates: reserving too little only costs extra
        reallocations later, reserving too much only costs memory.
        """

        arr = np.asarray(counts, dtype=np.int64).reshape(-1)
        if arr.size != len(self._blocks):
            raise ValueError("counts must contain one entry per hopping family.")
        if np.any(arr < 0):
            raise ValueError("counts must be non-negative.")
        for block, n in zip(self._blocks, arr.tolist()):
            block.reserve(n)
        logger.debug("Reserved %d hoppings across %d families", int(arr.sum()), arr.size)

    def add(self, family_id: int, row: int, col: int) -> None:
        """Add a single coordinate pair to the given family block."""

        self._blocks[self._check_family(family_id)].push(row, col)

    def append(self, family_id: int, rows: Array, cols: Array) -> None:
        """Append a range of coordinates to the given family block."""

        self._blocks[self._check_family(family_id)].extend(rows, cols)

    def to_coo(self, dtype: str | np.dtype | None = None) -> coo_matrix:
        from .csr import blocks_to_coo

        return blocks_to_coo(self, dtype=dtype)

    def to_csr(self, dtype: str | np.dtype | None = None) -> csr_matrix:
        """Return the matrix in CSR format with family IDs as values."""

        from .csr import blocks_to_csr

        return blocks_to_csr(self, dtype=dtype)

    def _check_family(self, family_id: int) -> int:
        if not 0 <= family_id < len(self._blocks):
            raise IndexError(f"family_id {family_id} out of range for {len(self._blocks)} families.")
        return family_id


def _check_family_names(names: Sequence[str] | None, num_families: int) -> tuple[str, ...] | None:
    if names is None:
        return None
    out = tuple(str(n) for n in names)
    if len(out) != num_families:
        raise ValueError("family_names must contain one name per hopping family.")
    if any(not n for n in out):
        raise ValueError("family_names must be non-empty strings.")
    if len(set(out)) != len(out):
        raise ValueError("family_names must be unique.")
    return out
