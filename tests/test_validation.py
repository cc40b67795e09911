"""Tests for graphon_usvt.validation — binary adjacency predicates."""

import numpy as np
import pytest
from scipy import sparse

from graphon_usvt.validation import (
    as_dense_matrix,
    is_binary_adjacency,
    is_binary_adjacency_list,
)


def _path_graph(n: int) -> np.ndarray:
    A = np.zeros((n, n), dtype=int)
    for i in range(n - 1):
        A[i, i + 1] = A[i + 1, i] = 1
    return A


# ═══════════════════════════════════════════════════════════════════
# is_binary_adjacency
# ═══════════════════════════════════════════════════════════════════

class TestIsBinaryAdjacencyAccepts:
    """Valid adjacency inputs in every accepted form."""

    def test_two_node_edge(self):
        assert is_binary_adjacency(np.array([[0, 1], [1, 0]]))

    def test_path_graph(self):
        assert is_binary_adjacency(_path_graph(6))

    def test_empty_graph(self):
        assert is_binary_adjacency(np.zeros((4, 4)))

    def test_float_entries(self):
        assert is_binary_adjacency(_path_graph(5).astype(float))

    def test_bool_entries(self):
        assert is_binary_adjacency(_path_graph(5).astype(bool))

    def test_nested_list(self):
        assert is_binary_adjacency([[0, 1, 0], [1, 0, 1], [0, 1, 0]])

    def test_sparse_matrix(self):
        assert is_binary_adjacency(sparse.csr_matrix(_path_graph(7)))

    def test_single_node(self):
        assert is_binary_adjacency(np.zeros((1, 1)))


class TestIsBinaryAdjacencyRejects:
    """Shape, value, symmetry and diagonal violations."""

    def test_non_symmetric(self):
        A = np.array([[0, 1, 0], [0, 0, 1], [0, 1, 0]])
        assert not is_binary_adjacency(A)

    def test_non_binary_entry(self):
        A = np.array([[0, 2], [2, 0]])
        assert not is_binary_adjacency(A)

    def test_fractional_entry(self):
        A = np.array([[0, 0.5], [0.5, 0]])
        assert not is_binary_adjacency(A)

    def test_negative_entry(self):
        A = np.array([[0, -1], [-1, 0]])
        assert not is_binary_adjacency(A)

    def test_self_loop(self):
        A = np.array([[1, 1], [1, 0]])
        assert not is_binary_adjacency(A)

    def test_non_square(self):
        assert not is_binary_adjacency(np.zeros((2, 3)))

    def test_one_dimensional(self):
        assert not is_binary_adjacency(np.array([0, 1, 0]))

    def test_three_dimensional(self):
        assert not is_binary_adjacency(np.zeros((2, 3, 3)))

    def test_zero_size(self):
        assert not is_binary_adjacency(np.zeros((0, 0)))

    def test_nan_entry(self):
        A = np.array([[0.0, np.nan], [np.nan, 0.0]])
        assert not is_binary_adjacency(A)

    def test_complex_entries(self):
        A = np.array([[0, 1], [1, 0]], dtype=complex)
        assert not is_binary_adjacency(A)

    def test_string_entries(self):
        assert not is_binary_adjacency([["0", "1"], ["1", "0"]])

    def test_ragged_nested_list(self):
        assert not is_binary_adjacency([[0, 1], [1]])

    @pytest.mark.parametrize("obj", [None, 1, "adjacency", {"a": 1}])
    def test_non_matrix_objects(self, obj):
        assert not is_binary_adjacency(obj)


# ═══════════════════════════════════════════════════════════════════
# is_binary_adjacency_list
# ═══════════════════════════════════════════════════════════════════

class TestIsBinaryAdjacencyList:
    """Every member checked; sizes are not compared."""

    def test_all_valid(self):
        assert is_binary_adjacency_list([_path_graph(4), np.zeros((4, 4))])

    def test_one_invalid(self):
        bad = np.ones((4, 4))
        assert not is_binary_adjacency_list([_path_graph(4), bad])

    def test_empty_is_vacuously_valid(self):
        assert is_binary_adjacency_list([])

    def test_sizes_not_checked(self):
        assert is_binary_adjacency_list([_path_graph(3), _path_graph(5)])


# ═══════════════════════════════════════════════════════════════════
# as_dense_matrix
# ═══════════════════════════════════════════════════════════════════

class TestAsDenseMatrix:
    """Coercion to a real-valued ndarray, or None."""

    def test_sparse_is_densified(self):
        out = as_dense_matrix(sparse.csr_matrix(_path_graph(4)))
        assert isinstance(out, np.ndarray)
        np.testing.assert_array_equal(out, _path_graph(4))

    def test_bool_becomes_float(self):
        out = as_dense_matrix(np.array([[False, True], [True, False]]))
        assert out.dtype == np.float64
        np.testing.assert_array_equal(out, [[0.0, 1.0], [1.0, 0.0]])

    def test_nested_list(self):
        out = as_dense_matrix([[0, 1], [1, 0]])
        assert out.shape == (2, 2)

    @pytest.mark.parametrize("obj", [
        None, "ab", [[0, 1], [1]], np.array([[0, 1j], [1j, 0]]),
    ])
    def test_uncoercible_returns_none(self, obj):
        assert as_dense_matrix(obj) is None
