"""graphon-usvt: graphon estimation by Universal Singular Value Thresholding.

Estimates the edge-probability matrix of an exchangeable random graph
from one or several observed binary adjacency matrices.  The averaged
observation is decomposed by SVD, singular values below
``(2 + eta) * sqrt(n)`` are discarded, and the low-rank reconstruction
is clamped to [0, 1].
"""
from .errors import (
    GraphonError, InvalidInputError, InvalidParameterError, DecompositionError,
)
from .validation import (
    as_dense_matrix, is_binary_adjacency, is_binary_adjacency_list,
)
from .observations import (
    SingleObservation, MultipleObservations, Observations,
    as_observations, average_adjacency,
)
from .usvt import (
    DEFAULT_ETA, ETA_BOUNDS, THRESHOLD_BASE,
    USVTResult, estimate_usvt,
    validate_eta, usvt_threshold, decompose, select_rank,
    reconstruct, clip_probabilities,
)

__all__ = [
    # Errors
    "GraphonError", "InvalidInputError", "InvalidParameterError",
    "DecompositionError",
    # Adjacency predicates
    "as_dense_matrix", "is_binary_adjacency", "is_binary_adjacency_list",
    # Observations
    "SingleObservation", "MultipleObservations", "Observations",
    "as_observations", "average_adjacency",
    # USVT estimator
    "DEFAULT_ETA", "ETA_BOUNDS", "THRESHOLD_BASE",
    "USVTResult", "estimate_usvt",
    "validate_eta", "usvt_threshold", "decompose", "select_rank",
    "reconstruct", "clip_probabilities",
]
