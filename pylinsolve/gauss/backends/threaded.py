"""
Thread-pool backend for Gaussian elimination.

The row updates of one pivot step are independent of each other, so each
is submitted as its own task. Tasks never share writable memory: every
task gets a private copy of its row plus the pivot row, which no task
writes, and returns the updated row. The coordinator waits for all tasks
of the step and only then writes the rows back, so the next pivot
search always sees a fully updated matrix.

NumPy releases the GIL inside its array kernels, which is where the
row updates spend their time for large n.
"""

from concurrent.futures import ThreadPoolExecutor, Executor
from functools import partial
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinsolve.core.result import Result
from pylinsolve.core.compute.tolerances import Tolerance, DEFAULT_TOLERANCE
from pylinsolve.gauss.design import LinearSystemDesign
from pylinsolve.gauss._common import EliminationParams
from pylinsolve.gauss._elimination import run_elimination, eliminate_row


def eliminate_below_threaded(
    executor: Executor,
    a: NDArray[np.floating[Any]],
    i: int,
) -> None:
    """
    Update rows i+1..n-1 as one task per row, then write them back.

    Blocks until every task of this step has finished. If a task raises,
    the exception propagates and no row of this step is written.
    """
    pivot_row = a[i].copy()
    pivot_row.setflags(write=False)

    futures = [
        executor.submit(eliminate_row, a[j].copy(), pivot_row, i)
        for j in range(i + 1, a.shape[0])
    ]
    # Barrier: collect every row before touching the shared matrix
    updated = [f.result() for f in futures]

    for offset, row in enumerate(updated, start=i + 1):
        a[offset] = row


class CPUThreadedBackend:
    """
    CPU backend with concurrent row updates on a thread pool.

    Produces the same matrix as CPUSequentialBackend bit for bit: the
    per-row arithmetic is identical and only its scheduling differs.

    Implements the Backend protocol for LinearSystemDesign -> EliminationParams.
    """

    def __init__(
        self,
        tolerance: Tolerance = DEFAULT_TOLERANCE,
        max_workers: int | None = None,
    ):
        """
        Initialize threaded backend.

        Args:
            tolerance: Zero threshold
            max_workers: Thread pool size. None lets ThreadPoolExecutor
                pick its default.
        """
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self._tolerance = tolerance
        self._max_workers = max_workers

    @property
    def name(self) -> str:
        return 'cpu_threaded'

    @property
    def tolerance(self) -> Tolerance:
        return self._tolerance

    @property
    def max_workers(self) -> int | None:
        return self._max_workers

    def solve(self, design: LinearSystemDesign) -> Result[EliminationParams]:
        """
        Triangularize a private copy of the design's matrix.

        One pool serves every pivot step of this call and is shut down
        before returning.

        Raises:
            InconsistentSystemError: If the system has no solution
        """
        with ThreadPoolExecutor(
            max_workers=self._max_workers,
            thread_name_prefix='pylinsolve-row',
        ) as executor:
            return run_elimination(
                design,
                self._tolerance,
                partial(eliminate_below_threaded, executor),
                backend_name=self.name,
                info={
                    'scheduling': 'threaded',
                    'max_workers': self._max_workers,
                },
            )
