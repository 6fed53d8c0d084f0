"""Conversion between per-family hopping blocks and compressed sparse formats."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from scipy.sparse import coo_matrix, csr_matrix, issparse

from .hopping_blocks import HoppingBlocks
from .types import Array, as_index_dtype


logger = logging.getLogger(__name__)


def flatten_blocks(
    blocks: HoppingBlocks,
    dtype: str | np.dtype | None = None,
) -> tuple[Array, Array, Array]:
    """Concatenate all blocks into ``(rows, cols, family_ids)`` arrays.

    Entries appear block by block in insertion order. The family ID array is
    regenerated from the block sizes since it is never stored.
    """

    value_dtype = blocks.index_dtype if dtype is None else np.dtype(dtype)
    idx = blocks.index_dtype
    counts = blocks.counts()
    if counts.sum() == 0:
        empty = np.empty(0, dtype=idx)
        return empty, empty.copy(), np.empty(0, dtype=value_dtype)

    rows = np.concatenate([b.rows for _, b in blocks]).astype(idx, copy=False)
    cols = np.concatenate([b.cols for _, b in blocks]).astype(idx, copy=False)
    family_ids = np.repeat(np.arange(blocks.num_families), counts).astype(value_dtype, copy=False)
    return rows, cols, family_ids


def blocks_to_coo(blocks: HoppingBlocks, dtype: str | np.dtype | None = None) -> coo_matrix:
    rows, cols, data = flatten_blocks(blocks, dtype=dtype)
    return coo_matrix((data, (rows, cols)), shape=blocks.shape)


def blocks_to_csr(blocks: HoppingBlocks, dtype: str | np.dtype | None = None) -> csr_matrix:
    """Return a CSR matrix whose values are the hopping family IDs.

    Entries are sorted by row, then by column, with a stable sort so that the
    output is deterministic. Duplicate (row, col) pairs are kept as separate
    slots and never summed.
    """

    n = blocks.num_sites
    rows, cols, data = flatten_blocks(blocks, dtype=dtype)

    # lexsort uses the last key as the primary one
    order = np.lexsort((cols, rows))
    indices = cols[order]
    data = data[order]

    # int64 counts; scipy narrows the index arrays itself
    indptr = np.zeros(n + 1, dtype=np.int64)
    indptr[1:] = np.cumsum(np.bincount(rows.astype(np.intp, copy=False), minlength=n))

    out = csr_matrix((data, indices, indptr), shape=(n, n))
    logger.debug("Converted %d hoppings in %d families to CSR (%d x %d)", data.size, blocks.num_families, n, n)
    return out


def csr_to_blocks(
    matrix: csr_matrix,
    num_families: int | None = None,
    *,
    family_names: Sequence[str] | None = None,
    index_dtype: str | np.dtype | None = None,
) -> HoppingBlocks:
    """Group the entries of a family-ID valued CSR matrix back into blocks.

    Within each family the entries keep the row-major order of the matrix.
    """

    if not issparse(matrix):
        raise ValueError("matrix must be a scipy sparse matrix.")
    csr = csr_matrix(matrix)
    n_rows, n_cols = csr.shape
    if n_rows != n_cols:
        raise ValueError("Hopping matrix must be square.")

    dtype = as_index_dtype(index_dtype)
    data = np.asarray(csr.data)
    integral = data.dtype.kind in "iu" or (data.dtype.kind == "f" and bool(np.all(np.mod(data, 1) == 0)))
    if not integral:
        raise ValueError(f"Family IDs must be integers, got matrix values of dtype {data.dtype}.")
    family_ids = data.astype(np.int64)
    if np.any(family_ids < 0):
        raise ValueError("Family IDs stored in the matrix must be non-negative.")
    if num_families is None:
        num_families = int(family_ids.max()) + 1 if family_ids.size else 0
    elif family_ids.size and int(family_ids.max()) >= num_families:
        raise ValueError("Matrix contains family IDs beyond num_families.")

    rows = np.repeat(np.arange(n_rows), np.diff(csr.indptr))
    cols = np.asarray(csr.indices)
    order = np.argsort(family_ids, kind="stable")
    bounds = np.concatenate(([0], np.cumsum(np.bincount(family_ids, minlength=num_families))))

    out = HoppingBlocks(n_rows, num_families, family_names=family_names, index_dtype=dtype)
    for family_id in range(num_families):
        sel = order[bounds[family_id] : bounds[family_id + 1]]
        out.append(family_id, rows[sel], cols[sel])
    return out
