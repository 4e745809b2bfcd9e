"""
Back-substitution on a triangularized augmented matrix.
"""

import logging
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinsolve.core.exceptions import InconsistentSystemError
from pylinsolve.core.compute.tolerances import Tolerance
from pylinsolve.gauss._common import SubstitutionParams

logger = logging.getLogger(__name__)


def back_substitute(
    a: NDArray[np.floating[Any]],
    tolerance: Tolerance,
) -> SubstitutionParams:
    """
    Solve an upper-triangular augmented system from the last row up.

    For each row i, from n-1 down to 0:
        s = sum(a[i, j] * x[j] for j > i)
        x[i] = (a[i, n] - s) / a[i, i]

    A diagonal entry below tolerance means x[i] is not determined by its
    equation. If that equation still demands a nonzero value
    (|a[i, n] - s| > atol) the system is inconsistent; otherwise x[i] is
    set to the placeholder 0.0 and recorded.

    Args:
        a: Triangularized matrix, shape (n, n+1). Not modified.
        tolerance: Zero threshold

    Returns:
        SubstitutionParams with the solution vector

    Raises:
        InconsistentSystemError: A zero-pivot row is contradicted by the
            unknowns already solved
    """
    n = a.shape[0]
    x = np.zeros(n, dtype=np.float64)
    placeholders: list[int] = []

    for i in range(n - 1, -1, -1):
        s = float(a[i, i + 1:n] @ x[i + 1:])
        remainder = a[i, n] - s

        if tolerance.is_zero(a[i, i]):
            if tolerance.exceeds(remainder):
                raise InconsistentSystemError(
                    f"System is inconsistent, no solution exists: row {i + 1} has "
                    f"a zero pivot but requires {remainder:g} (back substitution)",
                    row=i,
                    stage='back_substitution',
                    rhs=float(a[i, n]),
                    residual=float(remainder),
                )
            x[i] = 0.0
            placeholders.append(i)
            logger.debug(f"Unknown x{i + 1} undetermined, placeholder 0 assigned")
        else:
            x[i] = remainder / a[i, i]

    return SubstitutionParams(
        solution=x,
        placeholder_unknowns=tuple(sorted(placeholders)),
    )


def placeholder_warnings(placeholder_unknowns: tuple[int, ...]) -> tuple[str, ...]:
    """Human-readable warning for unknowns assigned the placeholder zero."""
    if not placeholder_unknowns:
        return ()
    names = ", ".join(f"x{i + 1}" for i in placeholder_unknowns)
    return (
        f"Unknown(s) {names} are not determined by the system and were set "
        f"to 0; this is one of infinitely many solutions",
    )
