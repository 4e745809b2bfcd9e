"""
Linear system design.

The design owns the pristine augmented matrix of a square system. It is
immutable: elimination never touches it and instead asks for a private
working copy, so the original is still intact for verification.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinsolve.core.datasource import MatrixSource
from pylinsolve.core.exceptions import InconsistentSystemError
from pylinsolve.core.validation import (
    check_array,
    check_2d,
    check_finite,
    check_augmented_shape,
)


@dataclass(frozen=True)
class LinearSystemDesign:
    """
    Square linear system Ax = b stored as an augmented matrix [A | b].

    Construction:
        LinearSystemDesign.from_arrays([[2, 1, 3], [1, -1, 0]])
        LinearSystemDesign.from_datasource(MatrixSource.from_file(path))
        LinearSystemDesign.from_file("matrix.txt")
    """
    _augmented: NDArray[np.floating[Any]]
    _n: int
    _source: MatrixSource | None = None

    @classmethod
    def from_arrays(cls, matrix: ArrayLike) -> LinearSystemDesign:
        """Build a design directly from an array-like augmented matrix."""
        arr = check_array(matrix, 'matrix')
        return cls._build(np.array(arr, dtype=np.float64), source=None)

    @classmethod
    def from_datasource(cls, source: MatrixSource) -> LinearSystemDesign:
        """Build a design from an already validated MatrixSource."""
        return cls._build(np.array(source.matrix, dtype=np.float64), source=source)

    @classmethod
    def from_file(cls, path: str | Path) -> LinearSystemDesign:
        """Load a matrix file and build a design from it."""
        return cls.from_datasource(MatrixSource.from_file(path))

    @classmethod
    def _build(
        cls,
        matrix: NDArray[np.floating[Any]],
        source: MatrixSource | None,
    ) -> LinearSystemDesign:
        """Internal builder with validation."""
        check_2d(matrix, 'matrix')
        check_finite(matrix, 'matrix')
        # An equation 0 = c (c != 0) has no solution whatever the shape
        # of the rest of the system, so it is reported before the shape.
        _check_contradictory_rows(matrix)
        check_augmented_shape(matrix, 'matrix')

        matrix.setflags(write=False)
        return cls(_augmented=matrix, _n=matrix.shape[0], _source=source)

    # === Properties ===

    @property
    def augmented(self) -> NDArray[np.floating[Any]]:
        """Augmented matrix [A | b], shape (n, n+1), read-only."""
        return self._augmented

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        """Coefficient block A (n x n), read-only view."""
        return self._augmented[:, :-1]

    @property
    def rhs(self) -> NDArray[np.floating[Any]]:
        """Right-hand side b (n,), read-only view."""
        return self._augmented[:, -1]

    @property
    def n(self) -> int:
        """Number of equations and unknowns."""
        return self._n

    @property
    def source(self) -> MatrixSource | None:
        """Original MatrixSource, if the design was loaded from one."""
        return self._source

    def working_copy(self) -> NDArray[np.floating[Any]]:
        """Fresh writable copy of the augmented matrix, owned by the caller."""
        return np.array(self._augmented, dtype=np.float64, copy=True)


def _check_contradictory_rows(matrix: NDArray[np.floating[Any]]) -> None:
    """Raise on any row whose coefficients are exactly zero but whose RHS is not."""
    if matrix.shape[1] < 2:
        return
    zero_coef = np.all(matrix[:, :-1] == 0.0, axis=1)
    bad = np.flatnonzero(zero_coef & (matrix[:, -1] != 0.0))
    if bad.size:
        row = int(bad[0])
        rhs = float(matrix[row, -1])
        raise InconsistentSystemError(
            f"System is inconsistent: equation {row + 1} reads 0 = {rhs:g}",
            row=row,
            stage='input',
            rhs=rhs,
        )
