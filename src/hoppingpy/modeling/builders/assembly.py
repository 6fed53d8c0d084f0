"""Assemble hopping blocks from per-family coordinate streams."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

import numpy as np

from hoppingpy.core import HoppingBlocks
from hoppingpy.modeling.schema import BuildConfig
from hoppingpy.modeling.validators import validate_hopping_blocks


logger = logging.getLogger(__name__)

Array = np.ndarray
Chunk = tuple[Array, Array]


def _is_pair(source: Any) -> bool:
    # A tuple, or a 2-item list whose items are not tuples, is one (rows, cols)
    # pair; anything else is a stream of (rows, cols) tuples.
    if isinstance(source, tuple):
        return True
    return isinstance(source, list) and len(source) == 2 and not isinstance(source[0], tuple)


def _chunks(source: Chunk | Iterable[Chunk]) -> Iterable[Chunk]:
    if _is_pair(source):
        return (tuple(source),)
    return source


def _known_count(source: Any) -> int:
    if _is_pair(source):
        return int(np.size(source[0]))
    return 0


def assemble_hopping_blocks(
    num_sites: int,
    pairs: Sequence[Chunk | Iterable[Chunk]],
    *,
    family_names: Sequence[str] | None = None,
    estimated_counts: Sequence[int] | None = None,
    config: BuildConfig | None = None,
) -> HoppingBlocks:
    """Build a block store with one family per item of ``pairs``.

    Each item is either one ``(rows, cols)`` pair, given as a tuple or a
    two-element list of arrays, or an iterable of ``(rows, cols)`` tuple
    chunks, e.g. a generator yielding the hoppings of one relative offset at a
    time. Capacity is reserved up front from ``estimated_counts`` or, when
    omitted, from the sizes of the single-pair items.
    """

    config = config or BuildConfig()
    blocks = HoppingBlocks(
        num_sites,
        len(pairs),
        family_names=family_names,
        index_dtype=config.index_dtype,
    )
    if estimated_counts is None:
        estimated_counts = [_known_count(p) for p in pairs]
    blocks.reserve(estimated_counts)

    for family_id, source in enumerate(pairs):
        for rows, cols in _chunks(source):
            blocks.append(family_id, rows, cols)

    if config.validate:
        validate_hopping_blocks(blocks)
    logger.debug(
        "Assembled %d hoppings in %d families for %d sites", blocks.nnz(), blocks.num_families, num_sites
    )
    return blocks
