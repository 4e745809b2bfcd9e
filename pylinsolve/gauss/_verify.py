"""
Re-substitution check of a solution against the original system.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinsolve.core.compute.tolerances import Tolerance
from pylinsolve.gauss._common import VerificationReport


def verify_solution(
    augmented: NDArray[np.floating[Any]],
    solution: NDArray[np.floating[Any]],
    tolerance: Tolerance,
) -> VerificationReport:
    """
    Compare A @ x with b row by row.

    Must be given the ORIGINAL matrix, not the triangularized one: row
    swaps and elimination change the equations but not the solution set,
    and the check is meant to be independent of them.

    Args:
        augmented: Original augmented matrix [A | b], shape (n, n+1)
        solution: Candidate solution, shape (n,)
        tolerance: Absolute tolerance on each residual

    Returns:
        VerificationReport; valid is False if any |(A @ x - b)[i]| > atol,
        with the first such row reported
    """
    A = augmented[:, :-1]
    b = augmented[:, -1]

    actual = A @ solution
    residuals = actual - b

    over = np.flatnonzero(np.abs(residuals) > tolerance.atol)
    if over.size == 0:
        return VerificationReport(
            valid=True,
            failing_row=None,
            expected=None,
            actual=None,
            residuals=residuals,
            atol=tolerance.atol,
        )

    row = int(over[0])
    return VerificationReport(
        valid=False,
        failing_row=row,
        expected=float(b[row]),
        actual=float(actual[row]),
        residuals=residuals,
        atol=tolerance.atol,
    )
