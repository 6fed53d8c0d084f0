"""Build a numeric Hamiltonian from hopping blocks and family energies."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from scipy.sparse import csr_matrix, diags

from hoppingpy.core import HoppingBlocks
from hoppingpy.modeling.schema import BuildConfig, HoppingFamily
from hoppingpy.modeling.validators import validate_families


Array = np.ndarray


def family_energies(
    families: Sequence[HoppingFamily] | Sequence[complex] | Array,
    dtype: str | np.dtype = "complex128",
) -> Array:
    """Return the energy lookup table indexed by family ID."""

    items = list(families)
    if items and all(isinstance(f, HoppingFamily) for f in items):
        validate_families(items)
        return np.array([f.energy for f in items], dtype=dtype)
    return np.asarray(items, dtype=dtype).reshape(-1)


def build_hamiltonian(
    blocks: HoppingBlocks,
    families: Sequence[HoppingFamily] | Sequence[complex] | Array,
    onsite: Array | None = None,
    *,
    hermitian: bool | None = None,
    dtype: str | np.dtype | None = None,
    config: BuildConfig | None = None,
) -> csr_matrix:
    """Map every hopping to its family energy and return H as CSR.

    The blocks are expected to hold each bond in one direction only; with
    ``hermitian`` the conjugate direction is added as ``T + T^H``. ``dtype``
    overrides ``config.hamiltonian_dtype``.
    """

    config = config or BuildConfig()
    hermitian = config.hermitian if hermitian is None else hermitian
    dtype = config.hamiltonian_dtype if dtype is None else dtype
    energies = family_energies(families, dtype=dtype)
    if energies.size != blocks.num_families:
        raise ValueError("families must provide one energy per hopping family.")

    ids = blocks.to_csr()
    t = csr_matrix((energies[ids.data], ids.indices, ids.indptr), shape=ids.shape)
    h = t + t.conj().T if hermitian else t

    if onsite is not None:
        onsite_arr = np.asarray(onsite, dtype=dtype)
        if onsite_arr.shape != (blocks.num_sites,):
            raise ValueError("onsite must be a 1D array of length num_sites.")
        h = h + diags(onsite_arr, format="csr")
    return csr_matrix(h)
