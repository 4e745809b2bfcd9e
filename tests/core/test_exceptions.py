"""
Tests for the pylinsolve exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyLinsolveError)
    - Load errors are distinct from each other and from validation errors
    - Diagnostic attributes on load and inconsistency errors
    - Default attribute values (None for optional attributes)
"""

import pytest

from pylinsolve.core.exceptions import (
    DimensionError,
    EmptyMatrixError,
    InconsistentSystemError,
    LoadError,
    MalformedNumberError,
    MatrixFileError,
    MatrixShapeError,
    NumericalError,
    PyLinsolveError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyLinsolveError."""

    def test_validation_error_is_base_error(self):
        with pytest.raises(PyLinsolveError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    @pytest.mark.parametrize("cls", [
        MatrixFileError, MalformedNumberError, EmptyMatrixError, MatrixShapeError,
    ])
    def test_load_errors_are_load_errors(self, cls):
        with pytest.raises(LoadError):
            raise cls("cannot load")

    @pytest.mark.parametrize("cls", [
        MatrixFileError, MalformedNumberError, EmptyMatrixError, MatrixShapeError,
    ])
    def test_load_errors_are_not_validation_errors(self, cls):
        assert not isinstance(cls("cannot load"), ValidationError)

    def test_inconsistent_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise InconsistentSystemError("no solution")

    def test_inconsistent_is_base_error(self):
        with pytest.raises(PyLinsolveError):
            raise InconsistentSystemError("no solution")

    def test_load_error_is_not_numerical_error(self):
        assert not isinstance(LoadError("x"), NumericalError)


# ═══════════════════════════════════════════════════════════════════════
# Load errors
# ═══════════════════════════════════════════════════════════════════════


class TestLoadErrors:
    """Load errors carry their source and location."""

    def test_source_default_none(self):
        err = LoadError("oops")
        assert err.source is None
        assert str(err) == "oops"

    def test_malformed_number_attributes(self):
        err = MalformedNumberError(
            "bad token", source="m.txt", token="1,5", line=3, column=2
        )
        assert err.source == "m.txt"
        assert err.token == "1,5"
        assert err.line == 3
        assert err.column == 2

    def test_malformed_number_defaults(self):
        err = MalformedNumberError("bad token")
        assert err.token is None
        assert err.line is None
        assert err.column is None

    def test_shape_error_attributes(self):
        err = MatrixShapeError("ragged", source="<string>", line=4, expected=3, actual=2)
        assert err.line == 4
        assert err.expected == 3
        assert err.actual == 2


# ═══════════════════════════════════════════════════════════════════════
# InconsistentSystemError
# ═══════════════════════════════════════════════════════════════════════


class TestInconsistentSystemError:
    """InconsistentSystemError carries where the contradiction was found."""

    def test_all_attributes(self):
        err = InconsistentSystemError(
            "0 = 5", row=2, stage="elimination", rhs=5.0, residual=5.0
        )
        assert str(err) == "0 = 5"
        assert err.row == 2
        assert err.stage == "elimination"
        assert err.rhs == 5.0
        assert err.residual == 5.0

    def test_defaults_are_none(self):
        err = InconsistentSystemError("no solution")
        assert err.row is None
        assert err.stage is None
        assert err.rhs is None
        assert err.residual is None

    def test_catchable_with_attributes(self):
        with pytest.raises(InconsistentSystemError) as exc_info:
            raise InconsistentSystemError("no solution", row=0, stage="final_sweep")
        assert exc_info.value.stage == "final_sweep"
