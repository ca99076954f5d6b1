"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype coercion, object rejection
    - check_finite: NaN/Inf detection
    - check_ndim / check_1d / check_2d: dimensionality checks
    - check_consistent_length: multi-array length matching
    - check_level / check_positive_int: scalar arguments
"""

import numpy as np
import pytest

from olstoolkit.core.exceptions import DimensionError, ValidationError
from olstoolkit.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_consistent_length,
    check_finite,
    check_level,
    check_ndim,
    check_positive_int,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to ndarray and rejects non-numeric data."""

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "X")
        assert np.issubdtype(result.dtype, np.floating)
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_nested_list_to_2d(self):
        result = check_array([[1, 2], [3, 4]], "X")
        assert result.shape == (2, 2)

    def test_rejects_mixed_types(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array([None, 1, 2.0], "X")

    def test_rejects_strings(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array(["a", "b", "c"], "X")

    def test_error_message_includes_name(self):
        with pytest.raises(ValidationError, match="my_var"):
            check_array(["a", "b"], "my_var")


# ═══════════════════════════════════════════════════════════════════════
# check_finite
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0, 3.0]), "X")

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="1 NaN"):
            check_finite(np.array([1.0, np.nan, 3.0]), "X")

    def test_mixed_nan_inf(self):
        with pytest.raises(ValidationError, match="2 NaN.*1 Inf"):
            check_finite(np.array([np.nan, np.inf, np.nan]), "X")


# ═══════════════════════════════════════════════════════════════════════
# check_ndim / check_1d / check_2d
# ═══════════════════════════════════════════════════════════════════════


class TestCheckNdim:

    def test_wrong_ndim_raises(self):
        with pytest.raises(DimensionError, match="expected 1D.*got 2D"):
            check_ndim(np.array([[1.0, 2.0]]), 1, "X")

    def test_check_1d_rejects_2d(self):
        with pytest.raises(DimensionError):
            check_1d(np.array([[1.0, 2.0]]), "y")

    def test_check_2d_rejects_1d(self):
        with pytest.raises(DimensionError, match="my_matrix"):
            check_2d(np.array([1.0]), "my_matrix")


# ═══════════════════════════════════════════════════════════════════════
# check_consistent_length
# ═══════════════════════════════════════════════════════════════════════


class TestLengths:

    def test_same_length_passes(self):
        check_consistent_length(np.ones(3), np.ones(3), names=("X", "y"))

    def test_different_length_raises(self):
        with pytest.raises(DimensionError, match="X=3, y=2"):
            check_consistent_length(np.ones(3), np.ones(2), names=("X", "y"))

    def test_names_must_match_arrays(self):
        with pytest.raises(ValueError):
            check_consistent_length(np.ones(3), names=("X", "y"))


# ═══════════════════════════════════════════════════════════════════════
# scalar checks
# ═══════════════════════════════════════════════════════════════════════


class TestScalars:

    @pytest.mark.parametrize("level", [0.5, 0.95, 0.999])
    def test_valid_level(self, level):
        assert check_level(level) == level

    @pytest.mark.parametrize("level", [0.0, 1.0, -0.1, 95])
    def test_invalid_level(self, level):
        with pytest.raises(ValidationError, match="level"):
            check_level(level)

    def test_positive_int(self):
        assert check_positive_int(3, "n") == 3
        assert check_positive_int(np.int64(3), "n") == 3

    @pytest.mark.parametrize("value", [0, -1, 2.5, True, "3"])
    def test_positive_int_rejects(self, value):
        with pytest.raises(ValidationError, match="n"):
            check_positive_int(value, "n")
