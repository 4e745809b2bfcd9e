"""
MatrixSource: the "I have an augmented matrix" abstraction.

MatrixSource reads a square linear system written as text, one equation
per line: the coefficients followed by the right-hand side, separated by
whitespace. It knows nothing about elimination; it only guarantees that
what it hands out is an n x (n+1) grid of finite floats.

Usage:
    from pylinsolve.core.datasource import MatrixSource

    src = MatrixSource.from_file("matrix.txt")
    src = MatrixSource.from_text("2 1 -1 8\\n-3 -1 2 -11\\n-2 1 2 -3\\n")
    src = MatrixSource.from_arrays([[2, 1, 3], [1, -1, 0]])

    A_b = src.matrix
    src.n_equations  # 3
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinsolve.core.exceptions import (
    MatrixFileError,
    MalformedNumberError,
    EmptyMatrixError,
    MatrixShapeError,
)
from pylinsolve.core.validation import check_augmented_matrix

STRING_SOURCE = '<string>'


@dataclass(frozen=True)
class MatrixSource:
    """
    Validated augmented matrix container.

    Construct via factory classmethods, not directly. The stored matrix
    is read-only; consumers that need to mutate must copy.
    """
    _matrix: NDArray[np.floating[Any]]
    _metadata: dict[str, Any] = field(default_factory=dict)

    # === Properties ===

    @property
    def matrix(self) -> NDArray[np.floating[Any]]:
        """Augmented matrix, shape (n, n+1), read-only."""
        return self._matrix

    @property
    def n_equations(self) -> int:
        """Number of equations (and unknowns)."""
        return self._matrix.shape[0]

    @property
    def metadata(self) -> dict[str, Any]:
        """Where the matrix came from and its shape."""
        return self._metadata.copy()

    # === Factory Methods ===

    @classmethod
    def from_arrays(cls, matrix: ArrayLike) -> MatrixSource:
        """
        Construct from an array-like.

        Raises:
            ValidationError: Non-numeric or non-finite entries
            DimensionError: Not an n x (n+1) matrix
        """
        arr = np.array(check_augmented_matrix(matrix, 'matrix'), dtype=np.float64)
        return cls._build(arr, source='arrays')

    @classmethod
    def from_text(cls, text: str, *, source: str = STRING_SOURCE) -> MatrixSource:
        """
        Parse an augmented matrix from text.

        Each non-blank line is one row; blank lines are skipped. Every
        row must have the same number of fields, and the number of rows
        must be one less than that.

        Args:
            text: Matrix text
            source: Name used in error messages

        Raises:
            MalformedNumberError: A field is not a finite number
            EmptyMatrixError: No rows at all
            MatrixShapeError: Ragged rows or non-square coefficient block
        """
        rows: list[list[float]] = []
        first_line: int | None = None

        for line_no, line in enumerate(text.splitlines(), start=1):
            fields = line.split()
            if not fields:
                continue

            row = [_parse_field(tok, source, line_no, col)
                   for col, tok in enumerate(fields, start=1)]

            if first_line is None:
                first_line = line_no
            elif len(row) != len(rows[0]):
                raise MatrixShapeError(
                    f"{source}: line {line_no} has {len(row)} fields, "
                    f"expected {len(rows[0])} as on line {first_line}",
                    source=source,
                    line=line_no,
                    expected=len(rows[0]),
                    actual=len(row),
                )
            rows.append(row)

        if not rows:
            raise EmptyMatrixError(
                f"{source}: no matrix rows found (empty or blank input)",
                source=source,
            )

        n_cols = len(rows[0])
        if len(rows) != n_cols - 1:
            raise MatrixShapeError(
                f"{source}: {len(rows)} rows with {n_cols} fields each; "
                f"a square system with {n_cols - 1} unknowns needs "
                f"{n_cols - 1} rows of coefficients plus one right-hand side",
                source=source,
                expected=n_cols - 1,
                actual=len(rows),
            )

        return cls._build(np.array(rows, dtype=np.float64), source=source)

    @classmethod
    def from_file(cls, path: str | Path) -> MatrixSource:
        """
        Read an augmented matrix from a text file.

        Raises:
            MatrixFileError: File missing or unreadable
            MalformedNumberError, EmptyMatrixError, MatrixShapeError:
                see from_text()
        """
        path = Path(path)
        try:
            text = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise MatrixFileError(
                f"{path}: cannot read matrix file: {e}",
                source=str(path),
            ) from e

        parsed = cls.from_text(text, source=str(path))
        return cls._build(
            np.array(parsed.matrix),
            source=str(path),
            source_path=str(path.resolve()),
        )

    @classmethod
    def _build(
        cls,
        matrix: NDArray[np.floating[Any]],
        source: str,
        source_path: str | None = None,
    ) -> MatrixSource:
        """Internal builder: freeze the array and record provenance."""
        matrix.setflags(write=False)
        metadata: dict[str, Any] = {
            'source': source,
            'n_equations': matrix.shape[0],
            'n_columns': matrix.shape[1],
        }
        if source_path:
            metadata['source_path'] = source_path
        return cls(_matrix=matrix, _metadata=metadata)


def _parse_field(token: str, source: str, line: int, column: int) -> float:
    """Convert one whitespace-separated field to a finite float."""
    try:
        value = float(token)
    except ValueError as e:
        raise MalformedNumberError(
            f"{source}: line {line}, field {column}: cannot parse {token!r} as a number",
            source=source,
            token=token,
            line=line,
            column=column,
        ) from e
    if not math.isfinite(value):
        raise MalformedNumberError(
            f"{source}: line {line}, field {column}: {token!r} is not a finite number",
            source=source,
            token=token,
            line=line,
            column=column,
        )
    return value
