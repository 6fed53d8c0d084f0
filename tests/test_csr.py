import numpy as np
import pytest
from scipy.sparse import csr_matrix

from hoppingpy.core import HoppingBlocks, blocks_to_csr, csr_to_blocks, flatten_blocks


def _scenario_blocks() -> HoppingBlocks:
    blocks = HoppingBlocks(num_sites=5, num_families=2)
    blocks.append(0, np.array([0, 0, 1]), np.array([1, 4, 2]))
    blocks.append(1, np.array([2, 2]), np.array([0, 3]))
    return blocks


def _random_blocks(seed: int, num_sites: int = 40, num_families: int = 4) -> HoppingBlocks:
    rng = np.random.default_rng(seed)
    pairs = rng.permutation(num_sites * num_sites)[:150]
    family = rng.integers(0, num_families, size=pairs.size)
    blocks = HoppingBlocks(num_sites=num_sites, num_families=num_families)
    for p, f in zip(pairs, family):
        blocks.add(int(f), int(p // num_sites), int(p % num_sites))
    return blocks


def test_scenario_csr_layout() -> None:
    csr = _scenario_blocks().to_csr()
    assert csr.shape == (5, 5)
    assert csr.indptr.tolist() == [0, 2, 3, 5, 5, 5]
    assert csr.indices.tolist() == [1, 4, 2, 0, 3]
    assert csr.data.tolist() == [0, 0, 0, 1, 1]


def test_csr_values_default_to_index_dtype() -> None:
    blocks = _scenario_blocks()
    assert blocks.to_csr().dtype == np.int32
    assert blocks.to_csr(dtype=np.float64).dtype == np.float64


def test_indptr_properties_and_sorted_columns() -> None:
    blocks = _random_blocks(seed=3)
    csr = blocks.to_csr()
    indptr = csr.indptr
    assert indptr.size == blocks.num_sites + 1
    assert np.all(np.diff(indptr) >= 0)
    assert indptr[-1] == blocks.nnz()
    for row in range(blocks.num_sites):
        cols = csr.indices[indptr[row] : indptr[row + 1]]
        assert np.all(np.diff(cols) > 0)


def test_csr_values_match_block_membership() -> None:
    blocks = _random_blocks(seed=11)
    dense = blocks.to_csr().toarray()
    for family_id, block in blocks:
        assert np.all(dense[block.rows, block.cols] == family_id)


def test_round_trip_through_csr_preserves_family_entries() -> None:
    blocks = _random_blocks(seed=5)
    back = HoppingBlocks.from_csr(blocks.to_csr(), num_families=blocks.num_families)
    assert back.num_sites == blocks.num_sites
    assert back.counts().tolist() == blocks.counts().tolist()
    for (_, a), (_, b) in zip(blocks, back):
        assert sorted(a) == sorted(b)


def test_empty_store_converts_to_zero_row_pointer() -> None:
    for blocks in (HoppingBlocks(num_sites=4), HoppingBlocks(num_sites=4, num_families=3)):
        csr = blocks.to_csr()
        assert blocks.nnz() == 0
        assert csr.indptr.tolist() == [0, 0, 0, 0, 0]
        assert csr.indices.size == 0
        assert csr.data.size == 0


def test_csr_is_independent_of_later_mutation() -> None:
    blocks = _scenario_blocks()
    csr = blocks.to_csr()
    blocks.add(0, 4, 4)
    assert csr.nnz == 5
    assert blocks.to_csr().nnz == 6


def test_duplicate_coordinates_are_kept_as_separate_slots() -> None:
    blocks = HoppingBlocks(num_sites=3, num_families=2)
    blocks.add(1, 0, 2)
    blocks.add(0, 0, 2)
    csr = blocks_to_csr(blocks)
    assert csr.indptr.tolist() == [0, 2, 2, 2]
    assert csr.indices.tolist() == [2, 2]
    # stable sort keeps flatten order (family 0 first) for equal coordinates
    assert csr.data.tolist() == [0, 1]


def test_flatten_and_coo_follow_block_order() -> None:
    blocks = _scenario_blocks()
    rows, cols, ids = flatten_blocks(blocks)
    assert rows.tolist() == [0, 0, 1, 2, 2]
    assert cols.tolist() == [1, 4, 2, 0, 3]
    assert ids.tolist() == [0, 0, 0, 1, 1]
    coo = blocks.to_coo()
    assert coo.data.tolist() == ids.tolist()
    assert np.array_equal(coo.toarray(), blocks.to_csr().toarray())


def test_csr_to_blocks_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        csr_to_blocks(np.eye(3))
    with pytest.raises(ValueError):
        csr_to_blocks(csr_matrix(np.ones((2, 3))))
    with pytest.raises(ValueError):
        csr_to_blocks(csr_matrix(np.array([[0, 2], [0, 0]])), num_families=2)


def test_narrow_index_dtype_keeps_row_pointer_exact() -> None:
    blocks = HoppingBlocks(num_sites=100, num_families=1, index_dtype="int8")
    sites = np.arange(100)
    blocks.append(0, sites, (sites + 1) % 100)
    blocks.append(0, sites, (sites + 2) % 100)
    csr = blocks.to_csr()
    assert blocks.nnz() == 200
    assert csr.indptr[-1] == 200
    assert np.all(np.diff(csr.indptr) == 2)
    assert csr.indices.max() == 99


def test_csr_to_blocks_rejects_non_integral_values() -> None:
    hamiltonian = csr_matrix(np.array([[0.0, -1.0 + 0.5j], [0.0, 0.0]]))
    with pytest.raises(ValueError, match="integers"):
        csr_to_blocks(hamiltonian)
    with pytest.raises(ValueError, match="integers"):
        csr_to_blocks(csr_matrix(np.array([[0.0, 0.5], [0.0, 0.0]])))


def test_float_valued_csr_round_trips() -> None:
    blocks = _scenario_blocks()
    back = csr_to_blocks(blocks.to_csr(dtype=np.float64))
    assert back.counts().tolist() == [3, 2]
