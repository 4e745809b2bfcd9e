"""
Tests for back-substitution.
"""

import numpy as np
import pytest

from pylinsolve.core.compute import DEFAULT_TOLERANCE, Tolerance
from pylinsolve.core.exceptions import InconsistentSystemError
from pylinsolve.gauss._substitution import back_substitute, placeholder_warnings


class TestBackSubstitute:

    def test_upper_triangular(self):
        # x + 2y + 3z = 14, 4y + 5z = 23, 6z = 18
        a = np.array([
            [1.0, 2.0, 3.0, 14.0],
            [0.0, 4.0, 5.0, 23.0],
            [0.0, 0.0, 6.0, 18.0],
        ])
        params = back_substitute(a, DEFAULT_TOLERANCE)
        np.testing.assert_allclose(params.solution, [1.0, 2.0, 3.0])
        assert params.placeholder_unknowns == ()

    def test_single_equation(self):
        params = back_substitute(np.array([[4.0, 8.0]]), DEFAULT_TOLERANCE)
        np.testing.assert_array_equal(params.solution, [2.0])

    def test_input_not_modified(self):
        a = np.array([[2.0, 1.0, 5.0], [0.0, 1.0, 1.0]])
        before = a.copy()
        back_substitute(a, DEFAULT_TOLERANCE)
        np.testing.assert_array_equal(a, before)

    def test_below_diagonal_ignored(self):
        # Entries below the diagonal are never read
        a = np.array([[2.0, 1.0, 5.0], [99.0, 1.0, 1.0]])
        params = back_substitute(a, DEFAULT_TOLERANCE)
        np.testing.assert_allclose(params.solution, [2.0, 1.0])

    def test_zero_row_gives_placeholder(self):
        a = np.array([[2.0, 2.0, 4.0], [0.0, 0.0, 0.0]])
        params = back_substitute(a, DEFAULT_TOLERANCE)
        np.testing.assert_array_equal(params.solution, [2.0, 0.0])
        assert params.placeholder_unknowns == (1,)

    def test_consistent_zero_pivot_with_later_terms(self):
        # Row 1 has a zero pivot but 0.5 * x3 = 0.5 is satisfied by x3 = 1
        a = np.array([
            [2.0, 2.0, 3.0, 7.0],
            [0.0, 0.0, 0.5, 0.5],
            [0.0, 0.0, -0.5, -0.5],
        ])
        params = back_substitute(a, DEFAULT_TOLERANCE)
        np.testing.assert_allclose(params.solution, [2.0, 0.0, 1.0])
        assert params.placeholder_unknowns == (1,)

    def test_placeholders_sorted(self):
        a = np.array([
            [0.0, 0.0, 0.0, 0.0],
            [0.0, 1.0, 0.0, 3.0],
            [0.0, 0.0, 0.0, 0.0],
        ])
        params = back_substitute(a, DEFAULT_TOLERANCE)
        assert params.placeholder_unknowns == (0, 2)
        np.testing.assert_array_equal(params.solution, [0.0, 3.0, 0.0])

    def test_contradicted_zero_pivot_raises(self):
        a = np.array([[0.0, 1.0, 5.0], [0.0, 1.0, 2.0]])
        with pytest.raises(InconsistentSystemError) as exc_info:
            back_substitute(a, DEFAULT_TOLERANCE)
        err = exc_info.value
        assert err.stage == "back_substitution"
        assert err.row == 0
        assert err.rhs == 5.0
        assert err.residual == pytest.approx(3.0)

    def test_tolerance_governs_zero_pivot(self):
        a = np.array([[1e-6, 1.0]])
        np.testing.assert_allclose(
            back_substitute(a, DEFAULT_TOLERANCE).solution, [1e6]
        )
        loose = Tolerance(atol=1e-3, name="loose", description="")
        with pytest.raises(InconsistentSystemError):
            back_substitute(a, loose)


class TestPlaceholderWarnings:

    def test_none(self):
        assert placeholder_warnings(()) == ()

    def test_names_unknowns_one_based(self):
        (msg,) = placeholder_warnings((0, 2))
        assert "x1, x3" in msg
        assert "set to 0" in msg
