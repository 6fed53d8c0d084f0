"""Toy square-lattice emitter with separate x and y hopping families."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from hoppingpy.core import HoppingBlocks, HoppingModel
from hoppingpy.modeling.schema import BuildConfig, HoppingFamily
from hoppingpy.modeling.validators import validate_hopping_blocks


Array = np.ndarray


@dataclass(frozen=True)
class SquareLatticeParams:
    nx: int
    ny: int
    tx: float = -1.0
    ty: float = -1.0
    onsite: float = 0.0
    periodic_x: bool = False
    periodic_y: bool = False


def _axis_bonds(nx: int, ny: int, axis: int, periodic: bool) -> tuple[Array, Array]:
    # Sites are numbered row-major: index = ix * ny + iy.
    ix, iy = np.meshgrid(np.arange(nx), np.arange(ny), indexing="ij")
    size = (nx, ny)[axis]
    coord = (ix, iy)[axis]
    keep = np.ones_like(coord, dtype=bool) if periodic else coord < size - 1
    src_x, src_y = ix[keep], iy[keep]
    if axis == 0:
        dst_x, dst_y = (src_x + 1) % nx, src_y
    else:
        dst_x, dst_y = src_x, (src_y + 1) % ny
    return src_x * ny + src_y, dst_x * ny + dst_y


def square_lattice_model(params: SquareLatticeParams, config: BuildConfig | None = None) -> HoppingModel:
    config = config or BuildConfig()
    nx, ny = params.nx, params.ny
    if nx <= 0 or ny <= 0:
        raise ValueError("nx and ny must be positive.")
    if params.periodic_x and nx < 3:
        raise ValueError("periodic_x needs nx >= 3.")
    if params.periodic_y and ny < 3:
        raise ValueError("periodic_y needs ny >= 3.")

    families = (
        HoppingFamily(name="tx", energy=params.tx, offset=(1, 0, 0)),
        HoppingFamily(name="ty", energy=params.ty, offset=(0, 1, 0)),
    )
    bonds = (
        _axis_bonds(nx, ny, axis=0, periodic=params.periodic_x),
        _axis_bonds(nx, ny, axis=1, periodic=params.periodic_y),
    )
    n = nx * ny
    blocks = HoppingBlocks(n, len(families), family_names=[f.name for f in families], index_dtype=config.index_dtype)
    blocks.reserve([src.size for src, _ in bonds])
    for family_id, (src, dst) in enumerate(bonds):
        blocks.append(family_id, src, dst)

    if config.validate:
        validate_hopping_blocks(blocks)
    return HoppingModel(
        num_sites=n,
        blocks=blocks,
        families=families,
        onsite=np.full(n, params.onsite, dtype=float),
    )
