"""NumPy ``.npz`` archive format for hopping blocks.

Layout: ``num_sites`` (scalar), ``counts`` (entries per family), ``rows`` and
``cols`` (all blocks concatenated in family order) and ``family_names``
(empty when the families are unnamed).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import numpy as np

from hoppingpy.core import HoppingBlocks


logger = logging.getLogger(__name__)


def write_npz_blocks(blocks: HoppingBlocks, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    counts = blocks.counts()
    if counts.sum():
        rows = np.concatenate([b.rows for _, b in blocks])
        cols = np.concatenate([b.cols for _, b in blocks])
    else:
        rows = np.empty(0, dtype=blocks.index_dtype)
        cols = np.empty(0, dtype=blocks.index_dtype)
    names = np.array(blocks.family_names or (), dtype=str)
    with path.open("wb") as fh:
        np.savez_compressed(
            fh,
            num_sites=np.int64(blocks.num_sites),
            counts=counts,
            rows=rows,
            cols=cols,
            family_names=names,
        )
    logger.debug("Wrote %d hoppings to %s", rows.size, path)
    return path


def read_npz_blocks(source: Any) -> HoppingBlocks:
    path = Path(source)
    with np.load(path, allow_pickle=False) as archive:
        num_sites = int(archive["num_sites"])
        counts = np.asarray(archive["counts"], dtype=np.int64)
        rows = np.asarray(archive["rows"])
        cols = np.asarray(archive["cols"])
        names = [str(n) for n in archive["family_names"]]

    if rows.shape != cols.shape or int(counts.sum()) != rows.size:
        raise ValueError(f"Inconsistent hopping block archive: {path}")
    bounds = np.concatenate(([0], np.cumsum(counts)))
    blocks = [(rows[a:b], cols[a:b]) for a, b in zip(bounds[:-1], bounds[1:])]
    logger.debug("Read %d hoppings in %d families from %s", rows.size, counts.size, path)
    return HoppingBlocks.from_blocks(
        blocks,
        num_sites=num_sites,
        family_names=names or None,
        index_dtype=rows.dtype,
    )
