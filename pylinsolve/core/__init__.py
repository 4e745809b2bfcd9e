"""
Core infrastructure for pylinsolve.

This module provides shared abstractions, utilities, and compute
infrastructure used by the elimination domain package.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    datasource: MatrixSource, the text/file/array matrix loader
    compute: Timing and tolerance
"""

from pylinsolve.core.protocols import Backend
from pylinsolve.core.result import Result
from pylinsolve.core.datasource import MatrixSource
from pylinsolve.core.exceptions import (
    PyLinsolveError,
    ValidationError,
    DimensionError,
    LoadError,
    MatrixFileError,
    MalformedNumberError,
    EmptyMatrixError,
    MatrixShapeError,
    NumericalError,
    InconsistentSystemError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Loading
    "MatrixSource",
    # Exceptions
    "PyLinsolveError",
    "ValidationError",
    "DimensionError",
    "LoadError",
    "MatrixFileError",
    "MalformedNumberError",
    "EmptyMatrixError",
    "MatrixShapeError",
    "NumericalError",
    "InconsistentSystemError",
]
