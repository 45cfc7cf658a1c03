"""Tests for MemoTable and the subset bitmask helpers."""

import numpy as np
import pytest

from tspsolver.core.errors import SolverError
from tspsolver.core.memo import (
    MAX_NODES,
    MemoTable,
    mask_members,
    node_bit,
    subset_mask,
)


def test_mask_encoding_skips_origin():
    assert node_bit(1) == 0b1
    assert node_bit(3) == 0b100
    assert subset_mask([]) == 0
    assert subset_mask([1, 3]) == 0b101
    assert mask_members(0b101) == [1, 3]
    assert mask_members(0) == []


def test_mask_roundtrip_for_all_subsets_of_four():
    for mask in range(1 << 4):
        assert subset_mask(mask_members(mask)) == mask


def test_insert_and_get():
    memo = MemoTable(4)
    memo.insert(2, 0, 6)
    memo.insert(1, subset_mask([2]), 15, 2)

    assert memo.get(2, 0) == (6, None)
    assert memo.get(1, 0b10) == (15, 2)
    assert memo.get(3, 0) is None
    assert len(memo) == 2
    assert (2, 0) in memo
    assert memo.has(1, 0b10)
    assert not memo.has(1, 0)


def test_insert_only():
    memo = MemoTable(3)
    memo.insert(1, 0, 4)
    with pytest.raises(SolverError, match="insert-only"):
        memo.insert(1, 0, 2)
    assert memo.get(1, 0) == (4, None)


def test_insert_many_and_lookup_many():
    memo = MemoTable(4)
    memo.insert_many(
        np.array([1, 2]), subset_mask([3]), np.array([7, 9]), np.array([3, 3])
    )
    assert len(memo) == 2
    assert memo.get(2, 0b100) == (9, 3)

    costs, present = memo.lookup_many(np.array([1, 2, 3]), np.array([0b100, 0b100, 0b100]))
    assert present.tolist() == [True, True, False]
    assert costs[:2].tolist() == [7, 9]

    with pytest.raises(SolverError):
        memo.insert_many(np.array([2]), 0b100, np.array([1]), np.array([3]))


@pytest.mark.parametrize("size", [0, 1, MAX_NODES + 1])
def test_size_bounds(size):
    with pytest.raises(SolverError):
        MemoTable(size)


def test_dense_width():
    memo = MemoTable(5)
    assert memo.width == 16
    assert "states=0" in repr(memo)
