"""
Boundary checks for matrix and vector arguments.

Public entry points run these once, on the way in; the elimination code
behind them assumes a finite float64 array of shape (n, n+1) and does
not check again. Every check raises on the first problem and names the
offending argument. Nothing is repaired: a ragged list, a boolean mask
or a NaN is an error, never coerced into something solvable.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinsolve.core.exceptions import ValidationError, DimensionError

FloatArray = NDArray[np.floating[Any]]


def check_array(array: ArrayLike, name: str) -> FloatArray:
    """
    Convert an array-like to float64, rejecting anything non-numeric.

    Ragged nested lists and mixed types (object dtype), strings, booleans
    and complex numbers are all refused.

    Raises:
        ValidationError: Input is not real numeric data
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        # numpy refuses ragged nesting outright
        raise ValidationError(f"{name}: not a rectangular numeric array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating ragged rows, "
            f"mixed types or non-numeric data"
        )

    # Booleans are numbers to numpy but never a coefficient matrix
    if result.dtype == np.bool_ or not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, a matrix of real numbers is required"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: complex dtype {result.dtype} is not supported"
        )

    return result.astype(np.float64, copy=False)


def check_finite(array: FloatArray, name: str) -> None:
    """Raise ValidationError if any entry is NaN or infinite."""
    finite = np.isfinite(array)
    if finite.all():
        return
    n_nan = int(np.isnan(array).sum())
    n_inf = int(finite.size - finite.sum()) - n_nan
    raise ValidationError(
        f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
    )


def check_ndim(array: FloatArray, ndim: int, name: str) -> None:
    """Raise DimensionError unless ``array.ndim == ndim``."""
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: FloatArray, name: str) -> None:
    check_ndim(array, 1, name)


def check_2d(array: FloatArray, name: str) -> None:
    check_ndim(array, 2, name)


def check_augmented_shape(matrix: FloatArray, name: str) -> None:
    """
    Verify a 2D array is a square system with one right-hand-side column.

    Args:
        matrix: 2D array to check
        name: Parameter name for error messages

    Raises:
        DimensionError: If the shape is not (n, n+1) with n >= 1
    """
    n_rows, n_cols = matrix.shape
    if n_rows == 0:
        raise DimensionError(f"{name}: augmented matrix has no rows")
    if n_cols != n_rows + 1:
        raise DimensionError(
            f"{name}: expected shape ({n_rows}, {n_rows + 1}) for {n_rows} equations, "
            f"got {matrix.shape}"
        )


def check_solution_length(
    solution: FloatArray,
    n: int,
    name: str,
) -> None:
    """
    Verify a solution vector has one entry per unknown.

    Args:
        solution: 1D array to check
        n: Number of unknowns in the system
        name: Parameter name for error messages

    Raises:
        DimensionError: If the length does not match
    """
    if solution.shape[0] != n:
        raise DimensionError(
            f"{name}: expected {n} values for {n} unknowns, got {solution.shape[0]}"
        )


def check_augmented_matrix(matrix: ArrayLike, name: str) -> FloatArray:
    """
    Full boundary validation for an augmented matrix argument.

    Args:
        matrix: Array-like to validate
        name: Parameter name for error messages

    Returns:
        float64 array of shape (n, n+1)

    Raises:
        ValidationError: Non-numeric or non-finite data
        DimensionError: Wrong dimensionality or shape
    """
    arr = check_array(matrix, name)
    check_2d(arr, name)
    check_augmented_shape(arr, name)
    check_finite(arr, name)
    return arr
