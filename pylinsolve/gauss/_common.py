"""
Common data structures for Gaussian elimination.

EliminationParams, SubstitutionParams and GaussParams are the parameter
payloads wrapped by Result[P]; VerificationReport is the informational
outcome of re-substituting a solution into the original system.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class EliminationParams:
    """
    Payload of the forward pass.

    - matrix: working copy after elimination, upper triangular in its
      coefficient block except in skipped pivot columns
    - permutation: permutation[k] is the original equation now at row k
    - skipped_pivots: columns whose pivot was below tolerance
    - swaps: number of row exchanges performed
    """
    matrix: NDArray[np.floating[Any]]            # shape (n, n+1)
    permutation: NDArray[np.intp]                # shape (n,)
    skipped_pivots: tuple[int, ...]
    swaps: int

    @property
    def n(self) -> int:
        return self.matrix.shape[0]


@dataclass(frozen=True)
class SubstitutionParams:
    """
    Payload of back-substitution.

    placeholder_unknowns lists the unknowns whose pivot was zero and
    whose equation was satisfied trivially; they are set to 0.0. The
    system then has infinitely many solutions and this is just one.
    """
    solution: NDArray[np.floating[Any]]          # shape (n,)
    placeholder_unknowns: tuple[int, ...]


@dataclass(frozen=True)
class VerificationReport:
    """
    Outcome of checking a solution against the original system.

    A mismatch is not an error: it says the computed solution misses
    some equation by more than the tolerance, which can happen for
    near-singular systems or placeholder unknowns.

    Unpacks as (valid, failing_row):
        >>> valid, row = verify(A_b, x)
    """
    valid: bool
    failing_row: int | None                      # first row over tolerance
    expected: float | None                       # b[failing_row]
    actual: float | None                         # (A @ x)[failing_row]
    residuals: NDArray[np.floating[Any]]         # A @ x - b, shape (n,)
    atol: float

    @property
    def max_abs_residual(self) -> float:
        if self.residuals.size == 0:
            return 0.0
        return float(np.max(np.abs(self.residuals)))

    @property
    def failing_rows(self) -> tuple[int, ...]:
        """Every row whose residual exceeds the tolerance."""
        return tuple(int(i) for i in np.flatnonzero(np.abs(self.residuals) > self.atol))

    def __bool__(self) -> bool:
        return self.valid

    def __iter__(self) -> Iterator[Any]:
        return iter((self.valid, self.failing_row))

    def describe(self) -> str:
        """One-line human-readable verdict."""
        if self.valid:
            return (
                f"Solution verified: every equation holds within {self.atol:g} "
                f"(max residual {self.max_abs_residual:.3e})"
            )
        return (
            f"Equation {self.failing_row + 1} does not hold: "
            f"left side {self.actual:.6f}, right side {self.expected:.6f} "
            f"(tolerance {self.atol:g})"
        )


@dataclass(frozen=True)
class GaussParams:
    """
    Parameter payload of a full solve.

    Combines the forward pass, back-substitution and, when requested,
    verification against the original matrix.
    """
    solution: NDArray[np.floating[Any]]          # shape (n,)
    triangular: NDArray[np.floating[Any]]        # shape (n, n+1)
    permutation: NDArray[np.intp]                # shape (n,)
    skipped_pivots: tuple[int, ...]
    placeholder_unknowns: tuple[int, ...]
    verification: VerificationReport | None
