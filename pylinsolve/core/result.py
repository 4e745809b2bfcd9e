"""
The envelope every backend returns.

Sequential and threaded elimination hand back the same shape: a payload
plus metadata, timing, the backend's name and any non-fatal caveats
(skipped pivots, placeholder unknowns, failed verification). Callers can
then treat backends interchangeably and compare their outputs directly.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Frozen payload-plus-metadata record.

    Attributes:
        params: The payload, e.g. EliminationParams or GaussParams
        info: Method name, swap count, skipped pivot columns, tolerance,
            scheduling details
        timing: Seconds per pipeline stage plus 'total_seconds'; None
            when nothing was timed
        backend_name: 'cpu_sequential' or 'cpu_threaded'
        warnings: Human-readable caveats, also emitted as RuntimeWarning
            by the public solvers

    Example:
        >>> r = Result(params=..., info={'swaps': 2}, timing=None,
        ...            backend_name='cpu_sequential')
        >>> r.has_warning('Zero pivot')
        False
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """True if some warning contains ``substring``."""
        return any(substring in w for w in self.warnings)
