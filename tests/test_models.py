import numpy as np
import pytest

from hoppingpy.modeling import BuildConfig, build_hamiltonian, validate_hopping_blocks
from hoppingpy.models import ChainParams, SquareLatticeParams, chain_band_energies, chain_model, square_lattice_model


def test_open_chain_hoppings() -> None:
    model = chain_model(ChainParams(n_sites=5, t1=-1.0, t2=-0.1))
    assert model.num_families == 2
    assert model.blocks.counts().tolist() == [4, 3]
    assert model.blocks["t2"].cols.tolist() == [2, 3, 4]
    validate_hopping_blocks(model.blocks)


def test_periodic_chain_spectrum_matches_analytic_band() -> None:
    params = ChainParams(n_sites=12, t1=-1.0, t2=0.2, onsite=0.3, periodic=True)
    model = chain_model(params, config=BuildConfig(validate=True))
    h = build_hamiltonian(model.blocks, model.families, model.onsite)
    evals = np.linalg.eigvalsh(h.toarray())
    assert np.allclose(evals, chain_band_energies(params))


def test_periodic_chain_requires_enough_sites() -> None:
    with pytest.raises(ValueError):
        chain_model(ChainParams(n_sites=2, periodic=True))
    with pytest.raises(ValueError):
        chain_model(ChainParams(n_sites=4, t2=0.1, periodic=True))
    with pytest.raises(ValueError):
        chain_model(ChainParams(n_sites=0))


def test_square_lattice_counts_and_bandwidth() -> None:
    params = SquareLatticeParams(nx=6, ny=4, tx=-1.0, ty=-0.5, periodic_x=True)
    model = square_lattice_model(params, config=BuildConfig(validate=True))
    assert model.num_sites == 24
    assert model.blocks.counts().tolist() == [6 * 4, 6 * 3]

    csr = model.blocks.to_csr()
    assert csr.indptr[-1] == model.blocks.nnz()
    h = build_hamiltonian(model.blocks, model.families, model.onsite)
    evals = np.linalg.eigvalsh(h.toarray())
    assert evals.min() >= -3.0 - 1e-12
    assert evals.max() <= 3.0 + 1e-12


def test_square_lattice_site_numbering() -> None:
    model = square_lattice_model(SquareLatticeParams(nx=2, ny=3))
    assert model.blocks["tx"].rows.tolist() == [0, 1, 2]
    assert model.blocks["tx"].cols.tolist() == [3, 4, 5]
    assert model.blocks["ty"].rows.tolist() == [0, 1, 3, 4]
    assert model.blocks["ty"].cols.tolist() == [1, 2, 4, 5]
