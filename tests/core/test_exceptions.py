"""
Tests for the exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via OLSToolkitError)
    - Diagnostic attributes on RankDeficiencyError, InsufficientDataError,
      SchemaMismatchError, DegenerateModelError
    - Default attribute values
"""

import pytest

from olstoolkit.core.exceptions import (
    DegenerateModelError,
    DimensionError,
    InsufficientDataError,
    MissingDataWarning,
    NumericalError,
    OLSToolkitError,
    RankDeficiencyError,
    SchemaError,
    SchemaMismatchError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via OLSToolkitError."""

    @pytest.mark.parametrize("exc", [
        ValidationError("x"),
        DimensionError("x"),
        SchemaError("x"),
        SchemaMismatchError("x"),
        InsufficientDataError("x", n_complete=1, n_required=2),
        NumericalError("x"),
        RankDeficiencyError("x"),
        DegenerateModelError("x"),
    ])
    def test_catchable_as_base(self, exc):
        with pytest.raises(OLSToolkitError):
            raise exc

    def test_schema_mismatch_is_schema_error(self):
        with pytest.raises(SchemaError):
            raise SchemaMismatchError("bad row")

    def test_input_errors_are_validation_errors(self):
        assert issubclass(SchemaError, ValidationError)
        assert issubclass(InsufficientDataError, ValidationError)

    def test_numerical_errors(self):
        assert issubclass(RankDeficiencyError, NumericalError)
        assert issubclass(DegenerateModelError, NumericalError)
        assert not issubclass(RankDeficiencyError, ValidationError)

    def test_missing_data_warning_is_user_warning(self):
        assert issubclass(MissingDataWarning, UserWarning)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestAttributes:

    def test_rank_deficiency_attributes(self):
        err = RankDeficiencyError(
            "rank 2 of 3",
            rank=2,
            expected_rank=3,
            dependent_columns=(2,),
            dependent_names=("x3",),
            condition_number=1e17,
        )
        assert str(err) == "rank 2 of 3"
        assert err.rank == 2
        assert err.expected_rank == 3
        assert err.dependent_columns == (2,)
        assert err.dependent_names == ("x3",)
        assert err.condition_number == 1e17

    def test_rank_deficiency_defaults(self):
        err = RankDeficiencyError("singular")
        assert err.rank is None
        assert err.dependent_columns == ()
        assert err.dependent_names == ()

    def test_insufficient_data_attributes(self):
        err = InsufficientDataError("too few", n_complete=2, n_required=4, n_dropped=5)
        assert (err.n_complete, err.n_required, err.n_dropped) == (2, 4, 5)

    def test_schema_mismatch_attributes(self):
        err = SchemaMismatchError("unseen level", column="race", row=3)
        assert err.column == "race"
        assert err.row == 3

    def test_schema_error_available(self):
        err = SchemaError("no column", column="z", available=("x", "y"))
        assert err.available == ("x", "y")

    def test_degenerate_attributes(self):
        err = DegenerateModelError("p >= n", n=3, p=3)
        assert (err.n, err.p) == (3, 3)
