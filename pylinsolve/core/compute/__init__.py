"""
Shared compute infrastructure for pylinsolve.

IMPORTANT: This is NOT where elimination backends live. Those go in
gauss/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: The zero threshold shared by every pipeline stage
"""

from pylinsolve.core.compute.timing import Timer, timed
from pylinsolve.core.compute.tolerances import (
    Tolerance,
    DEFAULT_TOLERANCE,
    resolve_tolerance,
)

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "Tolerance",
    "DEFAULT_TOLERANCE",
    "resolve_tolerance",
]
