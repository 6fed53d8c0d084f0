"""Explicit consistency checks for hopping blocks.

Insertion into ``HoppingBlocks`` is unchecked; these helpers are meant for
tests and debug runs where the cost of a full scan is acceptable.
"""

from __future__ import annotations

import numpy as np

from hoppingpy.core import HoppingBlocks, flatten_blocks


Array = np.ndarray


def find_duplicate_hoppings(blocks: HoppingBlocks) -> Array:
    """Return the distinct (row, col) pairs stored more than once, shape (n, 2)."""

    rows, cols, _ = flatten_blocks(blocks)
    if rows.size < 2:
        return np.empty((0, 2), dtype=blocks.index_dtype)
    order = np.lexsort((cols, rows))
    r = rows[order]
    c = cols[order]
    repeated = (r[1:] == r[:-1]) & (c[1:] == c[:-1])
    pairs = np.column_stack((r[1:][repeated], c[1:][repeated]))
    return np.unique(pairs, axis=0)


def validate_hopping_blocks(blocks: HoppingBlocks) -> None:
    n = blocks.num_sites
    for family_id, block in blocks:
        if len(block) == 0:
            continue
        bad = (block.rows < 0) | (block.rows >= n) | (block.cols < 0) | (block.cols >= n)
        if np.any(bad):
            i = int(np.argmax(bad))
            raise ValueError(
                f"Hopping ({int(block.rows[i])}, {int(block.cols[i])}) in family {family_id} "
                f"is out of range for {n} sites."
            )

    duplicates = find_duplicate_hoppings(blocks)
    if duplicates.size:
        row, col = (int(v) for v in duplicates[0])
        owners = [
            family_id
            for family_id, block in blocks
            if np.any((block.rows == row) & (block.cols == col))
        ]
        raise ValueError(
            f"Found {len(duplicates)} duplicate hopping coordinate(s); "
            f"first is ({row}, {col}) in families {owners}."
        )
