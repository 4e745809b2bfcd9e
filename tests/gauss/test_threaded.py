"""
Tests for the thread-pool elimination backend.

The threaded backend must produce exactly the matrix the sequential one
does: same pivots, same swaps, same floating-point results.
"""

from concurrent.futures import Future, ThreadPoolExecutor

import numpy as np
import pytest

from pylinsolve.core.compute import DEFAULT_TOLERANCE
from pylinsolve.core.exceptions import InconsistentSystemError
from pylinsolve.core.protocols import Backend
from pylinsolve.gauss import LinearSystemDesign, solve
from pylinsolve.gauss._elimination import eliminate_below_sequential
from pylinsolve.gauss.backends import CPUSequentialBackend, CPUThreadedBackend
from pylinsolve.gauss.backends.threaded import eliminate_below_threaded


class _FailingExecutor:
    """Executor whose n-th submitted task fails."""

    def __init__(self, fail_at):
        self.fail_at = fail_at
        self.submitted = 0

    def submit(self, fn, *args):
        future = Future()
        if self.submitted == self.fail_at:
            future.set_exception(RuntimeError("worker died"))
        else:
            future.set_result(fn(*args))
        self.submitted += 1
        return future


# ═══════════════════════════════════════════════════════════════════════
# Single pivot step
# ═══════════════════════════════════════════════════════════════════════


class TestEliminateBelowThreaded:

    def test_matches_sequential_step(self, random_system):
        augmented, _ = random_system(10)
        seq = augmented.copy()
        thr = augmented.copy()
        eliminate_below_sequential(seq, 0)
        with ThreadPoolExecutor(max_workers=4) as executor:
            eliminate_below_threaded(executor, thr, 0)
        np.testing.assert_array_equal(thr, seq)

    def test_rows_at_and_above_pivot_untouched(self, random_system):
        augmented, _ = random_system(6)
        a = augmented.copy()
        with ThreadPoolExecutor(max_workers=2) as executor:
            eliminate_below_threaded(executor, a, 2)
        np.testing.assert_array_equal(a[:3], augmented[:3])
        np.testing.assert_allclose(a[3:, 2], 0.0, atol=1e-12)

    def test_one_task_per_row(self, random_system):
        augmented, _ = random_system(5)
        executor = _FailingExecutor(fail_at=-1)
        eliminate_below_threaded(executor, augmented.copy(), 1)
        assert executor.submitted == 3

    def test_failed_task_leaves_step_unwritten(self, random_system):
        augmented, _ = random_system(5)
        a = augmented.copy()
        with pytest.raises(RuntimeError, match="worker died"):
            eliminate_below_threaded(_FailingExecutor(fail_at=2), a, 0)
        np.testing.assert_array_equal(a, augmented)

    def test_last_row_submits_nothing(self, random_system):
        augmented, _ = random_system(4)
        executor = _FailingExecutor(fail_at=-1)
        a = augmented.copy()
        eliminate_below_threaded(executor, a, 3)
        assert executor.submitted == 0
        np.testing.assert_array_equal(a, augmented)


# ═══════════════════════════════════════════════════════════════════════
# Backend
# ═══════════════════════════════════════════════════════════════════════


class TestCPUThreadedBackend:

    def test_implements_protocol(self):
        assert isinstance(CPUThreadedBackend(), Backend)
        assert isinstance(CPUSequentialBackend(), Backend)

    def test_defaults(self):
        backend = CPUThreadedBackend()
        assert backend.name == "cpu_threaded"
        assert backend.tolerance is DEFAULT_TOLERANCE
        assert backend.max_workers is None

    @pytest.mark.parametrize("workers", [0, -3])
    def test_invalid_workers(self, workers):
        with pytest.raises(ValueError, match="max_workers must be >= 1"):
            CPUThreadedBackend(max_workers=workers)

    @pytest.mark.parametrize("n", [2, 9, 40])
    @pytest.mark.parametrize("workers", [1, 3, 8])
    def test_bit_for_bit_with_sequential(self, random_system, n, workers):
        augmented, _ = random_system(n)
        design = LinearSystemDesign.from_arrays(augmented)
        seq = CPUSequentialBackend().solve(design)
        thr = CPUThreadedBackend(max_workers=workers).solve(design)
        np.testing.assert_array_equal(thr.params.matrix, seq.params.matrix)
        np.testing.assert_array_equal(thr.params.permutation, seq.params.permutation)
        assert thr.params.swaps == seq.params.swaps

    def test_singular_system_same_as_sequential(self):
        design = LinearSystemDesign.from_arrays([
            [1.0, 1.0, 1.0, 3.0],
            [1.0, 1.0, 2.0, 4.0],
            [2.0, 2.0, 3.0, 7.0],
        ])
        seq = CPUSequentialBackend().solve(design)
        thr = CPUThreadedBackend(max_workers=2).solve(design)
        np.testing.assert_array_equal(thr.params.matrix, seq.params.matrix)
        assert thr.params.skipped_pivots == seq.params.skipped_pivots == (1,)
        assert thr.warnings == seq.warnings

    def test_info_and_timing(self, classic_system):
        design = LinearSystemDesign.from_arrays(classic_system[0])
        result = CPUThreadedBackend(max_workers=2).solve(design)
        assert result.backend_name == "cpu_threaded"
        assert result.info["scheduling"] == "threaded"
        assert result.info["max_workers"] == 2
        assert result.timing["forward_elimination"] >= 0.0

    def test_design_not_mutated(self, classic_system):
        design = LinearSystemDesign.from_arrays(classic_system[0])
        before = design.augmented.copy()
        CPUThreadedBackend().solve(design)
        np.testing.assert_array_equal(design.augmented, before)

    def test_inconsistent(self, contradictory_system):
        design = LinearSystemDesign.from_arrays(contradictory_system)
        with pytest.raises(InconsistentSystemError) as exc_info:
            CPUThreadedBackend(max_workers=2).solve(design)
        assert exc_info.value.stage == "elimination"


class TestThreadedSolve:

    def test_same_solution_as_sequential(self, random_system):
        augmented, _ = random_system(25)
        x_seq = solve(augmented, backend="sequential").solution
        x_thr = solve(augmented, backend="threaded", max_workers=4).solution
        np.testing.assert_array_equal(x_thr, x_seq)

    def test_classic(self, classic_system):
        augmented, x_true = classic_system
        result = solve(augmented, backend="threaded")
        np.testing.assert_allclose(result.solution, x_true, atol=1e-12)
        assert result.is_verified

    def test_redundant(self, redundant_system):
        with pytest.warns(RuntimeWarning):
            result = solve(redundant_system, backend="threaded", max_workers=2)
        np.testing.assert_array_equal(result.solution, [2.0, 0.0])
