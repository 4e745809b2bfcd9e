"""
Tolerance for treating near-zero magnitudes as zero.

One absolute tolerance governs every zero test in the pipeline: pivot
degeneracy, the consistency sweep, back-substitution and residual
verification. It is an immutable value passed explicitly into each
component, never read from module state, so callers and tests can vary it.
"""

import math
from dataclasses import dataclass

from pylinsolve.core.exceptions import ValidationError


@dataclass(frozen=True)
class Tolerance:
    """Absolute zero threshold for numerical comparison."""
    atol: float
    name: str
    description: str

    def __post_init__(self) -> None:
        if not (math.isfinite(self.atol) and self.atol > 0):
            raise ValidationError(
                f"tolerance: must be a finite positive number, got {self.atol!r}"
            )

    def is_zero(self, value: float) -> bool:
        """True if |value| is below the threshold."""
        return abs(value) < self.atol

    def exceeds(self, value: float) -> bool:
        """True if |value| is above the threshold."""
        return abs(value) > self.atol


# Floating-point noise guard for pivots, sweeps and residuals
DEFAULT_TOLERANCE = Tolerance(
    atol=1e-9,
    name='default',
    description='Absolute 1e-9: magnitudes below are treated as zero',
)


def resolve_tolerance(tolerance: 'Tolerance | float | None') -> Tolerance:
    """
    Normalize a tolerance argument.

    Args:
        tolerance: None for the default, a Tolerance, or a bare float atol

    Returns:
        Tolerance instance

    Raises:
        ValidationError: If a float is not finite and positive, or the
            argument is of an unsupported type
    """
    if tolerance is None:
        return DEFAULT_TOLERANCE
    if isinstance(tolerance, Tolerance):
        return tolerance
    if isinstance(tolerance, bool) or not isinstance(tolerance, (int, float)):
        raise ValidationError(
            f"tolerance: expected Tolerance or float, got {type(tolerance).__name__}"
        )
    return Tolerance(
        atol=float(tolerance),
        name='custom',
        description=f'Absolute {float(tolerance):g}',
    )
