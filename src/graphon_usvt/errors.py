"""Error taxonomy for graphon estimation.

Every error raised by :mod:`graphon_usvt` derives from
:class:`GraphonError`.  The input and parameter errors also derive from
:class:`ValueError`, and the decomposition error from
:class:`RuntimeError`, so code that already catches the built-in types
keeps working.

Errors are raised where they are detected and are never caught inside
the package; a failed call produces no partial result.
"""

from __future__ import annotations

from typing import Any, Optional

__all__ = [
    "GraphonError",
    "InvalidInputError",
    "InvalidParameterError",
    "DecompositionError",
]


class GraphonError(Exception):
    """Base class for all graphon_usvt errors."""


class InvalidInputError(GraphonError, ValueError):
    """Observed adjacency data failed validation.

    Parameters
    ----------
    message : str
        Human-readable description.
    check : str
        Which check failed: ``"not_adjacency"``, ``"empty_collection"``,
        ``"dimension_mismatch"`` or ``"invalid_member"``.
    index : int, optional
        Position of the offending member for ``"invalid_member"``.
    """

    def __init__(self, message: str, *, check: str,
                 index: Optional[int] = None):
        super().__init__(message)
        self.check = check
        self.index = index


class InvalidParameterError(GraphonError, ValueError):
    """A control parameter is not a finite real scalar in its range."""

    def __init__(self, message: str, *, name: str = "eta",
                 value: Any = None):
        super().__init__(message)
        self.name = name
        self.value = value


class DecompositionError(GraphonError, RuntimeError):
    """The dense singular value decomposition did not converge."""
