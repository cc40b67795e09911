"""Universal Singular Value Thresholding (USVT) graphon estimation.

Given one or more observed binary adjacency matrices on ``n`` nodes,
USVT estimates the matrix of edge probabilities ``P`` by

1. averaging the observations into ``Ā`` (entries in [0, 1]),
2. taking the full singular value decomposition ``Ā = U Σ Vᵀ``,
3. keeping only the singular values at or above

   .. math::

       \\tau = (2 + \\eta)\\sqrt{n}

   (the random-matrix bound on the spectral norm of the noise, inflated
   by the control parameter η ∈ (0, 1)),
4. rebuilding ``P̂ = Σ_{σ_i ≥ τ} σ_i u_i v_iᵀ`` and
5. clamping every entry to the closed interval [0, 1].

If no singular value reaches τ the estimate is the all-zero matrix.

Usage
-----
>>> import numpy as np
>>> from graphon_usvt import estimate_usvt
>>> A = np.array([[0, 1], [1, 0]])
>>> res = estimate_usvt(A, eta=0.1)
>>> res.threshold                # 2.1 * sqrt(2) ≈ 2.9698
>>> res.rank                     # both singular values are 1.0
>>> res.probability_matrix       # all zeros

References
----------
Chatterjee, S. (2015).  Matrix estimation by universal singular value
thresholding.  *The Annals of Statistics* 43(1), 177–214.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Tuple

import numpy as np
from scipy import linalg

from .errors import DecompositionError, InvalidParameterError
from .observations import as_observations

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_ETA",
    "ETA_BOUNDS",
    "THRESHOLD_BASE",
    "USVTResult",
    "validate_eta",
    "usvt_threshold",
    "decompose",
    "select_rank",
    "reconstruct",
    "clip_probabilities",
    "estimate_usvt",
]

DEFAULT_ETA: float = 0.01
ETA_BOUNDS: Tuple[float, float] = (0.0, 1.0)  # open interval
THRESHOLD_BASE: float = 2.0


def _numpy_safe(obj: Any) -> Any:
    """Recursively convert numpy scalars/arrays to native Python types."""
    if isinstance(obj, dict):
        return {k: _numpy_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_numpy_safe(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


# ═══════════════════════════════════════════════════════════════════
# USVTResult
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True, eq=False)
class USVTResult:
    """Output of :func:`estimate_usvt`.

    Attributes
    ----------
    singular_values : (n,) ndarray
        All singular values of the averaged matrix, sorted descending.
    threshold : float
        ``(2 + eta) * sqrt(n)``.
    probability_matrix : (n, n) ndarray
        Estimated edge probabilities, every entry in [0, 1].
    """

    singular_values: np.ndarray
    threshold: float
    probability_matrix: np.ndarray

    @property
    def n(self) -> int:
        return self.probability_matrix.shape[0]

    @property
    def rank(self) -> int:
        """Number of singular values at or above the threshold."""
        return int(np.count_nonzero(self.singular_values >= self.threshold))

    @property
    def retained_singular_values(self) -> np.ndarray:
        return self.singular_values[self.singular_values >= self.threshold]

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-safe dict (numpy arrays become nested lists)."""
        return _numpy_safe({
            "singular_values": self.singular_values,
            "threshold": self.threshold,
            "probability_matrix": self.probability_matrix,
            "rank": self.rank,
        })

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "USVTResult":
        """Rebuild a result from :meth:`to_dict` output.

        Derived keys such as ``"rank"`` are ignored.
        """
        return cls(
            singular_values=np.asarray(d["singular_values"], dtype=float),
            threshold=float(d["threshold"]),
            probability_matrix=np.asarray(
                d["probability_matrix"], dtype=float),
        )

    def summary(self) -> str:
        top = ", ".join(f"{v:.3f}" for v in self.singular_values[:3])
        return (
            f"USVT n={self.n} rank={self.rank} "
            f"threshold={self.threshold:.4f} top_svs=[{top}]"
        )


# ═══════════════════════════════════════════════════════════════════
# Pipeline stages
# ═══════════════════════════════════════════════════════════════════

def validate_eta(eta: Any) -> float:
    """Check the control parameter and return it as a float.

    *eta* must be a single finite real number strictly between 0 and 1.
    Booleans, strings, complex numbers and multi-element arrays are
    rejected.

    Raises
    ------
    InvalidParameterError
    """
    lo, hi = ETA_BOUNDS
    message = f"a parameter eta should be a real number in ({lo:g}, {hi:g})"
    try:
        arr = np.asarray(eta)
    except (TypeError, ValueError):
        raise InvalidParameterError(
            f"{message}, got {eta!r}", value=eta) from None
    if arr.size != 1 or not (np.issubdtype(arr.dtype, np.integer)
                             or np.issubdtype(arr.dtype, np.floating)):
        raise InvalidParameterError(f"{message}, got {eta!r}", value=eta)
    value = float(arr.reshape(-1)[0])
    if not np.isfinite(value) or value <= lo or value >= hi:
        raise InvalidParameterError(f"{message}, got {value!r}", value=eta)
    return value


def usvt_threshold(n: int, eta: float) -> float:
    """Singular value cut-off ``(2 + eta) * sqrt(n)``."""
    return float((THRESHOLD_BASE + eta) * np.sqrt(n))


def decompose(matrix: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Full dense SVD with singular values sorted descending.

    Parameters
    ----------
    matrix : (n, n) ndarray

    Returns
    -------
    U : (n, n) ndarray
        Left singular vectors as columns.
    s : (n,) ndarray
        Non-negative singular values, descending.
    V : (n, n) ndarray
        Right singular vectors as columns, so that
        ``matrix ≈ U @ np.diag(s) @ V.T``.

    Raises
    ------
    DecompositionError
        If LAPACK fails to converge.  Not retried.
    """
    try:
        U, s, Vt = linalg.svd(matrix, full_matrices=True,
                              lapack_driver="gesdd")
    except linalg.LinAlgError as exc:
        raise DecompositionError(
            f"SVD of the ({matrix.shape[0]}x{matrix.shape[1]}) averaged "
            f"matrix did not converge: {exc}") from exc

    # gesdd already returns descending values; the stable sort keeps
    # columns aligned with values whatever the driver does.
    order = np.argsort(-s, kind="stable")
    return U[:, order], s[order], Vt[order, :].T


def select_rank(singular_values: np.ndarray, threshold: float) -> np.ndarray:
    """Positions of singular values ``>= threshold`` (may be empty)."""
    return np.flatnonzero(np.asarray(singular_values) >= threshold)


def reconstruct(
    U: np.ndarray,
    s: np.ndarray,
    V: np.ndarray,
    indices: np.ndarray,
) -> np.ndarray:
    """Rebuild ``Σ_{i ∈ indices} s_i u_i v_iᵀ`` as an ``(n, n)`` array.

    Three explicit paths:

    * no index  → all-zero matrix;
    * one index → scaled outer product ``s_i · u_i v_iᵀ``;
    * otherwise → ``U_k @ diag(s_k) @ V_kᵀ``.
    """
    idx = np.asarray(indices, dtype=int).reshape(-1)
    n_rows, n_cols = U.shape[0], V.shape[0]

    if idx.size == 0:
        return np.zeros((n_rows, n_cols))
    if idx.size == 1:
        i = idx[0]
        return np.outer(U[:, i], V[:, i]) * s[i]
    return U[:, idx] @ np.diag(s[idx]) @ V[:, idx].T


def clip_probabilities(P: np.ndarray) -> np.ndarray:
    """Clamp entries to [0, 1]: ``>= 1`` becomes 1, ``<= 0`` becomes 0."""
    out = np.array(P, dtype=np.float64)
    out[out >= 1] = 1.0
    out[out <= 0] = 0.0
    return out


# ═══════════════════════════════════════════════════════════════════
# Estimator
# ═══════════════════════════════════════════════════════════════════

def estimate_usvt(A: Any, eta: float = DEFAULT_ETA) -> USVTResult:
    """Estimate edge probabilities by universal singular value thresholding.

    Parameters
    ----------
    A : array_like, scipy.sparse matrix, or sequence of matrices
        Either one ``(n, n)`` binary adjacency matrix or a non-empty
        collection of them sharing ``n`` (a list or tuple of matrices, or a
        ``(k, n, n)`` array).  A nested list of numbers is one matrix.
        Collections are averaged elementwise.
    eta : float
        Control parameter in the open interval (0, 1).  Larger values
        raise the threshold and keep fewer singular values.

    Returns
    -------
    USVTResult

    Raises
    ------
    InvalidInputError
        If *A* is not a valid adjacency matrix or collection.
    InvalidParameterError
        If *eta* is not a finite real scalar in (0, 1).
    DecompositionError
        If the SVD does not converge.
    """
    observations = as_observations(A)
    eta = validate_eta(eta)

    averaged = observations.average()
    n = observations.n
    thr = usvt_threshold(n, eta)

    U, s, V = decompose(averaged)
    idx = select_rank(s, thr)
    logger.debug(
        f"USVT: n={n}, observations={observations.n_observations}, "
        f"eta={eta:g}, threshold={thr:.4f}, rank={idx.size}")
    if idx.size == 0:
        logger.info(
            f"USVT: no singular value reaches threshold {thr:.4f} "
            f"(largest {s[0]:.4f}); estimate is the zero matrix")

    P = clip_probabilities(reconstruct(U, s, V, idx))
    return USVTResult(singular_values=s, threshold=thr, probability_matrix=P)
