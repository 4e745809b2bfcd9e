"""
Solver dispatch for Gaussian elimination.

This module provides the public entry points (solve, eliminate,
back_substitute, verify) and backend selection. Inputs are validated
here, at the boundary; the algorithm modules trust what they are given.
"""

from __future__ import annotations

import logging
import os
import warnings
from pathlib import Path
from typing import Any, Literal, Union
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinsolve.core.result import Result
from pylinsolve.core.datasource import MatrixSource
from pylinsolve.core.compute.timing import Timer
from pylinsolve.core.compute.tolerances import Tolerance, resolve_tolerance
from pylinsolve.core.validation import (
    check_array,
    check_1d,
    check_finite,
    check_augmented_matrix,
    check_solution_length,
)
from pylinsolve.gauss.design import LinearSystemDesign
from pylinsolve.gauss.solution import GaussSolution
from pylinsolve.gauss._common import EliminationParams, GaussParams, VerificationReport
from pylinsolve.gauss._substitution import back_substitute as _back_substitute
from pylinsolve.gauss._substitution import placeholder_warnings
from pylinsolve.gauss._verify import verify_solution
from pylinsolve.gauss.backends.cpu import CPUSequentialBackend
from pylinsolve.gauss.backends.threaded import CPUThreadedBackend

logger = logging.getLogger(__name__)

# Type alias for backend selection
BackendChoice = Literal[
    'auto', 'sequential', 'threaded', 'cpu', 'cpu_sequential', 'cpu_threaded'
]

# Below this size thread start-up and write-back cost more than the
# row updates they parallelize.
THREADED_MIN_SIZE = 256

MatrixInput = Union[ArrayLike, MatrixSource, LinearSystemDesign, str, Path]


def solve(
    matrix: MatrixInput,
    *,
    backend: BackendChoice = 'auto',
    tolerance: Tolerance | float | None = None,
    max_workers: int | None = None,
    check: bool = True,
) -> GaussSolution:
    """
    Solve a square linear system Ax = b given as an augmented matrix.

    Runs the full pipeline: forward elimination with partial pivoting on
    a private copy, back-substitution, and (with check=True) verification
    against the untouched original.

    Args:
        matrix: Augmented matrix [A | b] of shape (n, n+1). Any
            array-like, a MatrixSource, a LinearSystemDesign, or the path
            of a matrix text file.
        backend: Row-update scheduling:
            - 'auto': threaded for n >= 256 on multi-core machines, else sequential
            - 'sequential' / 'cpu' / 'cpu_sequential': single thread
            - 'threaded' / 'cpu_threaded': one task per row per pivot step
        tolerance: Zero threshold (Tolerance or float). Default 1e-9.
        max_workers: Thread pool size for the threaded backend
        check: Verify the solution by re-substitution

    Returns:
        GaussSolution with the solution vector and diagnostics

    Raises:
        LoadError: If a path was given and the file cannot be loaded
        ValidationError: If inputs are invalid
        DimensionError: If the matrix is not n x (n+1)
        InconsistentSystemError: If the system has no solution

    Note:
        Singular but consistent systems are solved with placeholder
        zeros for undetermined unknowns and a RuntimeWarning; the result
        is one solution among infinitely many.

    Example:
        >>> from pylinsolve.gauss import solve
        >>> result = solve([[2, 1, -1, 8], [-3, -1, 2, -11], [-2, 1, 2, -3]])
        >>> result.as_dict()
        {'x1': 2.0, 'x2': 3.0, 'x3': -1.0}
    """
    # === Input Validation ===
    tol = resolve_tolerance(tolerance)
    design = _as_design(matrix)

    # === Select Backend ===
    backend_impl = _get_backend(backend, design, tol, max_workers)

    # === Forward Pass ===
    elimination = backend_impl.solve(design)

    timer = Timer()
    timer.start()

    # === Back Substitution ===
    with timer.section('back_substitution'):
        substitution = _back_substitute(elimination.params.matrix, tol)

    # === Verification ===
    report: VerificationReport | None = None
    if check:
        with timer.section('verification'):
            report = verify_solution(design.augmented, substitution.solution, tol)

    timer.include(elimination.timing, total_as='elimination_seconds')
    timer.stop()

    result_warnings = list(elimination.warnings)
    result_warnings += placeholder_warnings(substitution.placeholder_unknowns)
    if report is not None and not report.valid:
        result_warnings.append(f"Verification failed: {report.describe()}")

    for message in result_warnings:
        warnings.warn(message, RuntimeWarning, stacklevel=2)

    # === Wrap and Return ===
    info: dict[str, Any] = dict(elimination.info)
    info['placeholder_unknowns'] = substitution.placeholder_unknowns
    info['verified'] = None if report is None else report.valid

    params = GaussParams(
        solution=substitution.solution,
        triangular=elimination.params.matrix,
        permutation=elimination.params.permutation,
        skipped_pivots=elimination.params.skipped_pivots,
        placeholder_unknowns=substitution.placeholder_unknowns,
        verification=report,
    )
    result = Result(
        params=params,
        info=info,
        timing=timer.result(),
        backend_name=elimination.backend_name,
        warnings=tuple(result_warnings),
    )
    return GaussSolution(_result=result, _design=design)


def eliminate(
    matrix: MatrixInput,
    *,
    backend: BackendChoice = 'auto',
    tolerance: Tolerance | float | None = None,
    max_workers: int | None = None,
) -> Result[EliminationParams]:
    """
    Forward elimination with partial pivoting.

    The input is never modified; elimination runs on a private copy
    returned as ``result.params.matrix``.

    Args:
        matrix: Augmented matrix, see solve()
        backend: Row-update scheduling, see solve()
        tolerance: Zero threshold (Tolerance or float). Default 1e-9.
        max_workers: Thread pool size for the threaded backend

    Returns:
        Result[EliminationParams] with the triangularized matrix, the row
        permutation and the skipped pivot columns

    Raises:
        InconsistentSystemError: If a contradictory row 0 = c is found
    """
    tol = resolve_tolerance(tolerance)
    design = _as_design(matrix)
    result = _get_backend(backend, design, tol, max_workers).solve(design)

    for message in result.warnings:
        warnings.warn(message, RuntimeWarning, stacklevel=2)

    return result


def back_substitute(
    triangular: ArrayLike | Result[EliminationParams] | EliminationParams,
    *,
    tolerance: Tolerance | float | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Solution vector of a triangularized augmented matrix.

    Args:
        triangular: Output of eliminate() (the Result, its params, or the
            matrix itself), shape (n, n+1)
        tolerance: Zero threshold (Tolerance or float). Default 1e-9.

    Returns:
        Solution vector, shape (n,). Unknowns with a zero pivot and a
        consistent equation are set to 0.

    Raises:
        InconsistentSystemError: If a zero-pivot row is contradicted
    """
    if isinstance(triangular, Result):
        triangular = triangular.params
    if isinstance(triangular, EliminationParams):
        triangular = triangular.matrix

    tol = resolve_tolerance(tolerance)
    a = check_augmented_matrix(triangular, 'triangular')
    return _back_substitute(a, tol).solution


def verify(
    original: ArrayLike | LinearSystemDesign | MatrixSource,
    solution: ArrayLike,
    *,
    tolerance: Tolerance | float | None = None,
) -> VerificationReport:
    """
    Check a solution against the original system.

    Never raises on a mismatch: an invalid report is informational.

    Args:
        original: The augmented matrix BEFORE elimination
        solution: Candidate solution vector, shape (n,)
        tolerance: Absolute tolerance per equation. Default 1e-9.

    Returns:
        VerificationReport; unpacks as (valid, failing_row)

    Raises:
        ValidationError: If inputs are non-numeric or non-finite
        DimensionError: If shapes do not match
    """
    if isinstance(original, LinearSystemDesign):
        original = original.augmented
    elif isinstance(original, MatrixSource):
        original = original.matrix

    tol = resolve_tolerance(tolerance)
    a = check_augmented_matrix(original, 'original')
    x = check_array(solution, 'solution')
    check_1d(x, 'solution')
    check_solution_length(x, a.shape[0], 'solution')
    check_finite(x, 'solution')
    return verify_solution(a, x, tol)


def _as_design(matrix: MatrixInput) -> LinearSystemDesign:
    """Coerce any accepted matrix input to a validated design."""
    if isinstance(matrix, LinearSystemDesign):
        return matrix
    if isinstance(matrix, MatrixSource):
        return LinearSystemDesign.from_datasource(matrix)
    if isinstance(matrix, (str, Path)):
        return LinearSystemDesign.from_file(matrix)
    return LinearSystemDesign.from_arrays(matrix)


def _get_backend(
    choice: BackendChoice,
    design: LinearSystemDesign,
    tolerance: Tolerance,
    max_workers: int | None,
) -> CPUSequentialBackend | CPUThreadedBackend:
    """
    Select and instantiate the appropriate backend.

    Args:
        choice: User's backend preference
        design: The linear system (its size drives 'auto')
        tolerance: Zero threshold handed to the backend
        max_workers: Thread pool size, threaded backend only

    Returns:
        Backend instance ready to solve

    Raises:
        ValueError: If unknown backend specified, or max_workers given
            for the sequential backend
    """
    if choice == 'auto':
        if design.n >= THREADED_MIN_SIZE and (os.cpu_count() or 1) > 1:
            impl = CPUThreadedBackend(tolerance, max_workers=max_workers)
        else:
            impl = CPUSequentialBackend(tolerance)

    elif choice in ('sequential', 'cpu', 'cpu_sequential'):
        if max_workers is not None:
            raise ValueError(
                f"max_workers={max_workers} has no effect with backend={choice!r}; "
                f"use backend='threaded'"
            )
        impl = CPUSequentialBackend(tolerance)

    elif choice in ('threaded', 'cpu_threaded'):
        impl = CPUThreadedBackend(tolerance, max_workers=max_workers)

    else:
        raise ValueError(f"Unknown backend: {choice!r}")

    logger.debug(f"Backend {impl.name} selected for n={design.n} ({choice!r} requested)")
    return impl
