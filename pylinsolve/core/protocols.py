"""
Structural interface shared by the elimination backends.

A backend is anything with a ``name`` and a ``solve(design)`` that
returns a Result. Protocol rather than a base class, so tests and
alternative schedulers need no inheritance to plug in.
"""

from typing import Protocol, TypeVar, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from pylinsolve.core.result import Result

D = TypeVar('D')  # design accepted
P = TypeVar('P')  # payload produced


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    A forward-elimination scheduler.

    Backends run the same algorithm and differ only in how the row
    updates of a pivot step are executed (one thread, a thread pool).
    """

    @property
    def name(self) -> str:
        """'cpu_sequential', 'cpu_threaded', ..."""
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Triangularize a private copy of the design's matrix.

        Raises:
            NumericalError: The system has no solution
        """
        ...
