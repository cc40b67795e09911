"""Binary adjacency predicates.

A *binary adjacency matrix* encodes an undirected simple graph:

* two-dimensional and square,
* every entry finite and exactly 0 or 1,
* symmetric (``A == A.T`` elementwise, no tolerance),
* zero diagonal (no self-loops).

The predicates here answer "is this a valid observation?" and never
raise; turning a ``False`` into an error is the caller's business
(see :mod:`graphon_usvt.observations`).

Usage
-----
>>> import numpy as np
>>> from graphon_usvt.validation import is_binary_adjacency
>>> is_binary_adjacency(np.array([[0, 1], [1, 0]]))
True
>>> is_binary_adjacency(np.array([[1, 1], [1, 0]]))    # self-loop
False
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

import numpy as np
from scipy import sparse

__all__ = [
    "as_dense_matrix",
    "is_binary_adjacency",
    "is_binary_adjacency_list",
]


def as_dense_matrix(matrix: Any) -> Optional[np.ndarray]:
    """Coerce *matrix* to a real-valued ndarray, or ``None`` if impossible.

    ``scipy.sparse`` inputs are densified.  Boolean arrays are accepted
    (``True``/``False`` read as 1/0); object, string and complex arrays
    are not.
    """
    if sparse.issparse(matrix):
        matrix = matrix.toarray()
    try:
        arr = np.asarray(matrix)
    except (TypeError, ValueError):
        return None
    if arr.dtype == np.bool_:
        return arr.astype(np.float64)
    if not (np.issubdtype(arr.dtype, np.integer)
            or np.issubdtype(arr.dtype, np.floating)):
        return None
    return arr


def is_binary_adjacency(matrix: Any) -> bool:
    """Return ``True`` iff *matrix* is a binary adjacency matrix.

    Parameters
    ----------
    matrix : array_like or scipy.sparse matrix
        Candidate observation.

    Returns
    -------
    bool
    """
    arr = as_dense_matrix(matrix)
    if arr is None or arr.ndim != 2:
        return False
    n, m = arr.shape
    if n != m or n == 0:
        return False
    if not np.all(np.isfinite(arr)):
        return False
    if not np.all((arr == 0) | (arr == 1)):
        return False
    if not np.array_equal(arr, arr.T):
        return False
    return bool(np.all(np.diag(arr) == 0))


def is_binary_adjacency_list(matrices: Sequence[Any]) -> bool:
    """Return ``True`` iff every member of *matrices* is a binary adjacency.

    Equal sizes are not checked here.  An empty sequence is vacuously
    valid.
    """
    return all(is_binary_adjacency(m) for m in matrices)
