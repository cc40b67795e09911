"""Observed networks — one adjacency matrix or several.

USVT accepts either a single binary adjacency matrix or a collection of
equally sized ones.  Rather than branching on the input type at every
step, the input is resolved once into one of two variants:

* :class:`SingleObservation` — one ``(n, n)`` matrix;
* :class:`MultipleObservations` — ``k ≥ 1`` matrices sharing ``n``.

Both validate themselves on construction and expose the same interface
(``n``, ``n_observations``, ``average()``), so downstream code only ever
sees an :data:`Observations` value.

Dispatch rules for :func:`as_observations`
------------------------------------------
=====================================  ==========================
input                                  variant
=====================================  ==========================
``SingleObservation`` / ``Multiple…``  passed through
2-D ndarray, ``scipy.sparse`` matrix   ``SingleObservation``
3-D ndarray of shape ``(k, n, n)``     ``MultipleObservations``
2-D nested list/tuple of numbers       ``SingleObservation``
any other list or tuple                ``MultipleObservations``
=====================================  ==========================

A list of 1-D rows can never be a valid collection, so a nested list
that reads as a 2-D array is taken as one matrix.  Lists of matrices
(3-D when stacked, ragged, or holding sparse members) are collections.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple, Union

import numpy as np
from scipy import sparse

from .errors import InvalidInputError
from .validation import as_dense_matrix, is_binary_adjacency

__all__ = [
    "SingleObservation",
    "MultipleObservations",
    "Observations",
    "as_observations",
    "average_adjacency",
]


def _row_count(matrix: Any) -> Optional[int]:
    try:
        shape = np.shape(matrix)
    except ValueError:  # ragged nested sequence
        return None
    return shape[0] if len(shape) >= 1 else None


def _is_nested_matrix(A: Sequence[Any]) -> bool:
    """True if the list/tuple *A* reads as one 2-D array of numbers."""
    if any(sparse.issparse(m) for m in A):
        return False
    try:
        return np.ndim(A) == 2
    except ValueError:  # ragged members
        return False


# ═══════════════════════════════════════════════════════════════════
# Variants
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True, eq=False)
class SingleObservation:
    """One observed binary adjacency matrix.

    Raises
    ------
    InvalidInputError
        ``check="not_adjacency"`` if *matrix* is not a binary adjacency
        matrix.
    """

    matrix: np.ndarray

    def __post_init__(self):
        if not is_binary_adjacency(self.matrix):
            raise InvalidInputError(
                "input A is not a valid binary adjacency matrix "
                "(square, symmetric, entries in {0, 1}, zero diagonal)",
                check="not_adjacency",
            )
        object.__setattr__(self, "matrix", as_dense_matrix(self.matrix))

    @property
    def n(self) -> int:
        return self.matrix.shape[0]

    @property
    def n_observations(self) -> int:
        return 1

    def average(self) -> np.ndarray:
        """The observation itself as a fresh float64 array."""
        return np.array(self.matrix, dtype=np.float64)


@dataclass(frozen=True, eq=False)
class MultipleObservations:
    """A non-empty collection of equally sized binary adjacency matrices.

    Checks run in order and the first failure is raised:

    1. the collection is non-empty (``check="empty_collection"``);
    2. all members have the same row count (``check="dimension_mismatch"``);
    3. every member is a binary adjacency matrix
       (``check="invalid_member"``, ``index`` = first offender).
    """

    matrices: Tuple[np.ndarray, ...]

    def __post_init__(self):
        members = tuple(self.matrices)
        if len(members) == 0:
            raise InvalidInputError(
                "input collection A is empty", check="empty_collection")

        rows = [_row_count(m) for m in members]
        if len(set(rows)) > 1:
            raise InvalidInputError(
                f"matrices in collection A have different sizes: "
                f"row counts {rows}",
                check="dimension_mismatch",
            )

        for i, m in enumerate(members):
            if not is_binary_adjacency(m):
                raise InvalidInputError(
                    f"member {i} of collection A is not a valid binary "
                    f"adjacency matrix",
                    check="invalid_member",
                    index=i,
                )

        object.__setattr__(
            self, "matrices", tuple(as_dense_matrix(m) for m in members))

    @property
    def n(self) -> int:
        return self.matrices[0].shape[0]

    @property
    def n_observations(self) -> int:
        return len(self.matrices)

    def average(self) -> np.ndarray:
        """Elementwise arithmetic mean of all members (float64)."""
        stack = np.stack(self.matrices).astype(np.float64)
        return stack.sum(axis=0) / len(self.matrices)


Observations = Union[SingleObservation, MultipleObservations]


# ═══════════════════════════════════════════════════════════════════
# Entry-boundary dispatch
# ═══════════════════════════════════════════════════════════════════

def as_observations(A: Any) -> Observations:
    """Resolve raw input into a validated :data:`Observations` variant.

    Parameters
    ----------
    A : array_like, scipy.sparse matrix, sequence of matrices, or Observations
        See the module docstring for the dispatch table.

    Returns
    -------
    SingleObservation or MultipleObservations

    Raises
    ------
    InvalidInputError
        If validation of the resolved variant fails.
    """
    if isinstance(A, (SingleObservation, MultipleObservations)):
        return A
    if isinstance(A, (list, tuple)):
        if _is_nested_matrix(A):
            return SingleObservation(A)
        return MultipleObservations(tuple(A))
    if isinstance(A, np.ndarray) and A.ndim == 3:
        return MultipleObservations(tuple(A))
    return SingleObservation(A)


def average_adjacency(A: Any) -> np.ndarray:
    """Return the empirical average matrix of one or more observations."""
    return as_observations(A).average()
