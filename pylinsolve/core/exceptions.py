"""
Errors raised by pylinsolve.

Three families hang off PyLinsolveError: bad arguments
(ValidationError), matrices that cannot be read (LoadError) and systems
with no solution (NumericalError). Each carries the details needed to
point at the problem: the file, line and token for load errors; the row
and pipeline stage for an inconsistent system.
"""


class PyLinsolveError(Exception):
    """Base exception for all pylinsolve errors."""
    pass


class ValidationError(PyLinsolveError):
    """An argument (matrix, solution vector, tolerance) failed a boundary check."""
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when an augmented matrix is not n x (n+1), or when a solution
    vector does not match the system it is checked against.
    """
    pass


class LoadError(PyLinsolveError):
    """
    An augmented matrix could not be loaded.

    Base class for every failure of reading a matrix from text or file.
    Load errors are reported before any solving begins.

    Attributes:
        source: Path of the file, or '<string>' for in-memory text
    """

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class MatrixFileError(LoadError):
    """The matrix file is missing or unreadable."""
    pass


class MalformedNumberError(LoadError):
    """
    A field is not a finite number.

    Attributes:
        token: The offending text
        line: 1-based line number in the source
        column: 1-based field index within the line
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        token: str | None = None,
        line: int | None = None,
        column: int | None = None
    ):
        super().__init__(message, source=source)
        self.token = token
        self.line = line
        self.column = column


class EmptyMatrixError(LoadError):
    """The source contains no matrix rows."""
    pass


class MatrixShapeError(LoadError):
    """
    The rows do not form an n x (n+1) augmented matrix.

    Attributes:
        line: 1-based line number of the offending row, if a single row is at fault
        expected: Expected count (fields per row, or number of rows)
        actual: Count actually found
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        line: int | None = None,
        expected: int | None = None,
        actual: int | None = None
    ):
        super().__init__(message, source=source)
        self.line = line
        self.expected = expected
        self.actual = actual


class NumericalError(PyLinsolveError):
    """Elimination or substitution cannot produce a solution."""
    pass


class InconsistentSystemError(NumericalError):
    """
    The linear system has no solution.

    Raised as soon as a contradictory equation (0 = c with c != 0) is
    found. Retrying is meaningless: the input itself is unsolvable.

    Attributes:
        row: Row position in the working (pivoted) matrix where the
             contradiction was found
        stage: 'input', 'elimination', 'final_sweep' or 'back_substitution'
        rhs: Right-hand side value of the contradictory row
        residual: Value that should have been zero, if different from rhs
    """

    def __init__(
        self,
        message: str,
        row: int | None = None,
        stage: str | None = None,
        rhs: float | None = None,
        residual: float | None = None
    ):
        super().__init__(message)
        self.row = row
        self.stage = stage
        self.rhs = rhs
        self.residual = residual
