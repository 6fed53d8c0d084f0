"""Schema for hopping family definitions."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HoppingFamily:
    """One hopping definition: a sublattice pair joined across a cell offset.

    All hoppings generated from the same family share ``energy``; the
    family's position in a family table is its ID in ``HoppingBlocks``.
    """

    name: str
    energy: complex
    from_sublattice: int = 0
    to_sublattice: int = 0
    offset: tuple[int, ...] = (0, 0, 0)
