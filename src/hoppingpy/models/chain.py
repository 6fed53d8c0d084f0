"""Toy 1D chain emitters for hopping-block benchmarks."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from hoppingpy.core import HoppingBlocks, HoppingModel
from hoppingpy.modeling.schema import BuildConfig, HoppingFamily
from hoppingpy.modeling.validators import validate_hopping_blocks


Array = np.ndarray


@dataclass(frozen=True)
class ChainParams:
    n_sites: int
    t1: float = -1.0
    t2: float | None = None
    onsite: float = 0.0
    periodic: bool = False


def _bonds(n: int, distance: int, periodic: bool) -> tuple[Array, Array]:
    if periodic:
        src = np.arange(n)
        return src, (src + distance) % n
    src = np.arange(max(n - distance, 0))
    return src, src + distance


def chain_model(params: ChainParams, config: BuildConfig | None = None) -> HoppingModel:
    config = config or BuildConfig()
    n = params.n_sites
    if n <= 0:
        raise ValueError("n_sites must be positive.")
    # Each bond is stored in one direction only, so a periodic ring needs
    # enough sites that i->i+d and j->j+d never describe the same pair.
    min_periodic = 5 if params.t2 is not None else 3
    if params.periodic and n < min_periodic:
        raise ValueError(f"A periodic chain with these hoppings needs at least {min_periodic} sites.")

    families = [HoppingFamily(name="t1", energy=params.t1, offset=(1, 0, 0))]
    if params.t2 is not None:
        families.append(HoppingFamily(name="t2", energy=params.t2, offset=(2, 0, 0)))

    bonds = [_bonds(n, d, params.periodic) for d in range(1, len(families) + 1)]
    blocks = HoppingBlocks(n, len(families), family_names=[f.name for f in families], index_dtype=config.index_dtype)
    blocks.reserve([src.size for src, _ in bonds])
    for family_id, (src, dst) in enumerate(bonds):
        blocks.append(family_id, src, dst)

    if config.validate:
        validate_hopping_blocks(blocks)
    return HoppingModel(
        num_sites=n,
        blocks=blocks,
        families=tuple(families),
        onsite=np.full(n, params.onsite, dtype=float),
    )


def chain_band_energies(params: ChainParams) -> Array:
    """Analytic spectrum of the periodic chain, sorted ascending."""

    k = 2.0 * np.pi * np.arange(params.n_sites) / params.n_sites
    e = params.onsite + 2.0 * params.t1 * np.cos(k)
    if params.t2 is not None:
        e = e + 2.0 * params.t2 * np.cos(2.0 * k)
    return np.sort(e)
