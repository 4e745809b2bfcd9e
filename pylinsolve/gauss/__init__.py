"""
Gaussian elimination with partial pivoting.

Solves square linear systems Ax = b given as an augmented matrix [A | b],
detects inconsistent systems, and verifies solutions by re-substitution.
Forward elimination runs either sequentially or with the row updates of
each pivot step spread over a thread pool.

Public API:
    solve(matrix, ...) -> GaussSolution
    eliminate(matrix, ...) -> Result[EliminationParams]
    back_substitute(triangular, ...) -> ndarray
    verify(original, solution, ...) -> VerificationReport

Example:
    >>> from pylinsolve.gauss import solve
    >>> result = solve("matrix.txt", backend="threaded")
    >>> print(result.summary())
"""

from pylinsolve.gauss.design import LinearSystemDesign
from pylinsolve.gauss.solution import GaussSolution
from pylinsolve.gauss._common import (
    EliminationParams,
    GaussParams,
    SubstitutionParams,
    VerificationReport,
)
from pylinsolve.gauss.solvers import solve, eliminate, back_substitute, verify

__all__ = [
    "solve",
    "eliminate",
    "back_substitute",
    "verify",
    "LinearSystemDesign",
    "GaussSolution",
    "EliminationParams",
    "GaussParams",
    "SubstitutionParams",
    "VerificationReport",
]
