"""
CPU reference backend for Gaussian elimination.

Single thread of control, no suspension points. This is the reference
the threaded backend is validated against.
"""

from pylinsolve.core.result import Result
from pylinsolve.core.compute.tolerances import Tolerance, DEFAULT_TOLERANCE
from pylinsolve.gauss.design import LinearSystemDesign
from pylinsolve.gauss._common import EliminationParams
from pylinsolve.gauss._elimination import run_elimination, eliminate_below_sequential


class CPUSequentialBackend:
    """
    CPU backend with sequential row updates.

    Implements the Backend protocol for LinearSystemDesign -> EliminationParams.
    """

    def __init__(self, tolerance: Tolerance = DEFAULT_TOLERANCE):
        self._tolerance = tolerance

    @property
    def name(self) -> str:
        return 'cpu_sequential'

    @property
    def tolerance(self) -> Tolerance:
        return self._tolerance

    def solve(self, design: LinearSystemDesign) -> Result[EliminationParams]:
        """
        Triangularize a private copy of the design's matrix.

        Args:
            design: Validated linear system

        Returns:
            Result containing EliminationParams

        Raises:
            InconsistentSystemError: If the system has no solution
        """
        return run_elimination(
            design,
            self._tolerance,
            eliminate_below_sequential,
            backend_name=self.name,
            info={'scheduling': 'sequential'},
        )
