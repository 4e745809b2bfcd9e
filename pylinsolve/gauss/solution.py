"""
Solution types for Gaussian elimination.

Contains the user-facing solution wrapper around Result[GaussParams].
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pylinsolve.core.result import Result
from pylinsolve.gauss._common import GaussParams, VerificationReport

if TYPE_CHECKING:
    from pylinsolve.gauss.design import LinearSystemDesign


@dataclass
class GaussSolution:
    """
    User-facing result of solving Ax = b.

    Wraps the backend Result and provides convenient accessors for the
    solution vector, the triangularized matrix, degeneracy diagnostics
    and the verification outcome.
    """
    _result: Result[GaussParams]
    _design: 'LinearSystemDesign'

    @property
    def solution(self) -> NDArray[np.floating[Any]]:
        """Solution vector x, shape (n,)."""
        return self._result.params.solution

    @property
    def n(self) -> int:
        return self._design.n

    @property
    def original(self) -> NDArray[np.floating[Any]]:
        """The augmented matrix as given, untouched by elimination."""
        return self._design.augmented

    @property
    def triangular(self) -> NDArray[np.floating[Any]]:
        """Augmented matrix after forward elimination."""
        return self._result.params.triangular

    @property
    def permutation(self) -> NDArray[np.intp]:
        """permutation[k] is the original equation at row k of triangular."""
        return self._result.params.permutation

    @property
    def skipped_pivots(self) -> tuple[int, ...]:
        return self._result.params.skipped_pivots

    @property
    def placeholder_unknowns(self) -> tuple[int, ...]:
        return self._result.params.placeholder_unknowns

    @property
    def is_unique(self) -> bool:
        """False if any pivot was zero, i.e. the coefficient matrix is singular."""
        return not self.skipped_pivots and not self.placeholder_unknowns

    @property
    def verification(self) -> VerificationReport | None:
        """Re-substitution outcome, or None if solve() ran with check=False."""
        return self._result.params.verification

    @property
    def is_verified(self) -> bool:
        report = self.verification
        return report is not None and report.valid

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def as_dict(self) -> dict[str, float]:
        """Map of unknown labels x1..xn to values."""
        return {f"x{i + 1}": float(v) for i, v in enumerate(self.solution)}

    def format_solution(self, precision: int = 6) -> list[str]:
        """One 'xi = value' line per unknown."""
        return [f"{name} = {value:.{precision}f}" for name, value in self.as_dict().items()]

    def summary(self, precision: int = 6) -> str:
        """Generate a plain-text report of the solve."""
        lines = [
            "Gaussian Elimination Results",
            "=" * 60,
            f"Unknowns: {self.n}",
            f"Row swaps: {self.info.get('swaps', 0)}",
        ]
        if self.skipped_pivots:
            cols = ", ".join(str(c + 1) for c in self.skipped_pivots)
            lines.append(f"Zero pivots (skipped): column(s) {cols}")
        lines += [
            "",
            "Solution:",
            "-" * 60,
        ]
        for i, line in enumerate(self.format_solution(precision)):
            suffix = "  (undetermined, set to 0)" if i in self.placeholder_unknowns else ""
            lines.append(f"  {line}{suffix}")
        lines.append("-" * 60)

        if self.verification is not None:
            lines.append(self.verification.describe())
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"GaussSolution(n={self.n}, unique={self.is_unique}, "
            f"verified={self.is_verified}, backend={self.backend_name!r})"
        )
