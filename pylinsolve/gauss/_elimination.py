"""
Forward elimination with partial pivoting.

The algorithm is shared by every backend. Backends differ only in how the
row updates of a single pivot step are scheduled, which is passed in as
an ``eliminate_below(a, i)`` callable. Whatever the schedule, each row
update is performed by eliminate_row(), so every backend does the same
floating-point operations in the same order per row.

Per pivot step i:
    1. pick the row r >= i with the largest |a[r, i]| (first one on ties)
    2. swap it into row i
    3. if |a[i, i]| < atol: a row of zero coefficients with a nonzero RHS
       is a contradiction; otherwise the step is skipped
    4. subtract a[j, i] / a[i, i] times row i from every row j > i,
       columns i..n inclusive

Skipping a zero pivot leaves that column unreduced. Rank-deficient
systems therefore get one particular solution with placeholder zeros at
best, never a parametric family.
"""

import logging
from typing import Any, Callable, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pylinsolve.core.exceptions import InconsistentSystemError
from pylinsolve.core.result import Result
from pylinsolve.core.compute.timing import Timer
from pylinsolve.core.compute.tolerances import Tolerance
from pylinsolve.gauss._common import EliminationParams

if TYPE_CHECKING:
    from pylinsolve.gauss.design import LinearSystemDesign

logger = logging.getLogger(__name__)

# eliminate_below(a, i): zero a[i+1:, i] using pivot row i, in place
RowScheduler = Callable[[NDArray[np.floating[Any]], int], None]


def select_pivot(a: NDArray[np.floating[Any]], i: int) -> int:
    """Index of the row in i..n-1 with the largest |a[r, i]|, lowest index on ties."""
    # argmax returns the first occurrence of the maximum
    return i + int(np.argmax(np.abs(a[i:, i])))


def eliminate_row(
    row: NDArray[np.floating[Any]],
    pivot_row: NDArray[np.floating[Any]],
    col: int,
) -> NDArray[np.floating[Any]]:
    """
    Zero row[col] by subtracting a multiple of pivot_row.

    Updates columns col..n of ``row`` in place and returns it. pivot_row
    is only read.
    """
    factor = row[col] / pivot_row[col]
    row[col:] -= factor * pivot_row[col:]
    return row


def eliminate_below_sequential(a: NDArray[np.floating[Any]], i: int) -> None:
    """Update rows i+1..n-1 one after another on a single thread."""
    pivot_row = a[i]
    for j in range(i + 1, a.shape[0]):
        eliminate_row(a[j], pivot_row, i)


def check_zero_row(
    a: NDArray[np.floating[Any]],
    i: int,
    tolerance: Tolerance,
    stage: str,
) -> None:
    """
    Raise if row i reads 0 = c with c beyond tolerance.

    Raises:
        InconsistentSystemError: The row is a contradiction
    """
    n = a.shape[0]
    if np.all(np.abs(a[i, :n]) < tolerance.atol) and tolerance.exceeds(a[i, n]):
        rhs = float(a[i, n])
        raise InconsistentSystemError(
            f"System is inconsistent, no solution exists: "
            f"row {i + 1} reduces to 0 = {rhs:g} ({stage.replace('_', ' ')})",
            row=i,
            stage=stage,
            rhs=rhs,
        )


def forward_eliminate(
    a: NDArray[np.floating[Any]],
    tolerance: Tolerance,
    eliminate_below: RowScheduler,
) -> EliminationParams:
    """
    Triangularize an augmented matrix in place.

    Args:
        a: Writable working copy, shape (n, n+1). Mutated.
        tolerance: Zero threshold
        eliminate_below: Row-update scheduler for one pivot step. Must
            not return before every row below the pivot is updated.

    Returns:
        EliminationParams referencing ``a``

    Raises:
        InconsistentSystemError: A zero-coefficient row with nonzero RHS
            surfaced as a pivot row
    """
    n = a.shape[0]
    permutation = np.arange(n)
    skipped: list[int] = []
    swaps = 0

    for i in range(n):
        pivot = select_pivot(a, i)
        if pivot != i:
            a[[i, pivot]] = a[[pivot, i]]
            permutation[[i, pivot]] = permutation[[pivot, i]]
            swaps += 1
            logger.debug(f"Step {i}: swapped rows {i} and {pivot}")

        if tolerance.is_zero(a[i, i]):
            check_zero_row(a, i, tolerance, stage='elimination')
            skipped.append(i)
            logger.debug(f"Step {i}: pivot {a[i, i]:.3e} below tolerance, step skipped")
            continue

        if i + 1 < n:
            eliminate_below(a, i)

    return EliminationParams(
        matrix=a,
        permutation=permutation,
        skipped_pivots=tuple(skipped),
        swaps=swaps,
    )


def consistency_sweep(a: NDArray[np.floating[Any]], tolerance: Tolerance) -> None:
    """
    Re-scan every row of a triangularized matrix for 0 = c contradictions.

    Catches rows that were zeroed after their own pivot step had passed.

    Raises:
        InconsistentSystemError: On the first contradictory row
    """
    for i in range(a.shape[0]):
        check_zero_row(a, i, tolerance, stage='final_sweep')


def skipped_pivot_warnings(skipped_pivots: tuple[int, ...]) -> tuple[str, ...]:
    """Human-readable warnings for pivot columns left unreduced."""
    if not skipped_pivots:
        return ()
    cols = ", ".join(str(c + 1) for c in skipped_pivots)
    return (
        f"Zero pivot in column(s) {cols}: elimination skipped. The system is "
        f"singular or rank-deficient; the solution, if any, is not unique",
    )


def run_elimination(
    design: 'LinearSystemDesign',
    tolerance: Tolerance,
    eliminate_below: RowScheduler,
    backend_name: str,
    info: dict[str, Any] | None = None,
) -> Result[EliminationParams]:
    """
    Forward pass plus consistency sweep on a private copy of the design.

    Shared body of every backend's solve(). The design's matrix is never
    touched.

    Raises:
        InconsistentSystemError: From the forward pass or the sweep
    """
    timer = Timer()
    timer.start()

    a = design.working_copy()

    with timer.section('forward_elimination'):
        params = forward_eliminate(a, tolerance, eliminate_below)

    with timer.section('consistency_sweep'):
        consistency_sweep(a, tolerance)

    timer.stop()

    result_info: dict[str, Any] = {
        'method': 'gaussian_partial_pivoting',
        'n': design.n,
        'swaps': params.swaps,
        'skipped_pivots': params.skipped_pivots,
        'tolerance': tolerance.atol,
    }
    if info:
        result_info.update(info)

    return Result(
        params=params,
        info=result_info,
        timing=timer.result(),
        backend_name=backend_name,
        warnings=skipped_pivot_warnings(params.skipped_pivots),
    )
