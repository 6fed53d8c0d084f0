import numpy as np
import pytest

from hoppingpy.core import HoppingBlocks
from hoppingpy.modeling import HoppingFamily, find_duplicate_hoppings, validate_families, validate_hopping_blocks


def test_valid_blocks_pass() -> None:
    blocks = HoppingBlocks(num_sites=4, num_families=2)
    blocks.append(0, np.array([0, 1, 2]), np.array([1, 2, 3]))
    blocks.append(1, np.array([0]), np.array([2]))
    validate_hopping_blocks(blocks)
    assert find_duplicate_hoppings(blocks).shape == (0, 2)


def test_out_of_range_index_is_reported() -> None:
    blocks = HoppingBlocks(num_sites=3, num_families=2)
    blocks.add(0, 0, 1)
    blocks.add(1, 1, 3)
    with pytest.raises(ValueError, match="family 1"):
        validate_hopping_blocks(blocks)


def test_negative_index_is_reported() -> None:
    blocks = HoppingBlocks(num_sites=3, num_families=1)
    blocks.add(0, -1, 0)
    with pytest.raises(ValueError, match="out of range"):
        validate_hopping_blocks(blocks)


def test_duplicates_across_families_are_detected() -> None:
    blocks = HoppingBlocks(num_sites=4, num_families=2)
    blocks.append(0, np.array([0, 2]), np.array([1, 3]))
    blocks.append(1, np.array([2, 0]), np.array([3, 3]))
    dups = find_duplicate_hoppings(blocks)
    assert dups.tolist() == [[2, 3]]
    with pytest.raises(ValueError, match=r"\(2, 3\) in families \[0, 1\]"):
        validate_hopping_blocks(blocks)


def test_validate_families() -> None:
    families = [HoppingFamily("t1", -1.0), HoppingFamily("t2", 0.5j)]
    validate_families(families, num_families=2)
    with pytest.raises(ValueError):
        validate_families(families, num_families=3)
    with pytest.raises(ValueError):
        validate_families([HoppingFamily("t", 1.0), HoppingFamily("t", 2.0)])
    with pytest.raises(ValueError):
        validate_families([HoppingFamily("t", float("nan"))])
    with pytest.raises(ValueError):
        validate_families([HoppingFamily("", 1.0)])
