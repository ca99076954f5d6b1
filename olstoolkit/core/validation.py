"""
Input validation utilities for the OLS Toolkit.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from olstoolkit.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like. Rejects inputs that result in object dtype
    (mixed types) or any other non-numeric dtype.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_level(level: float, name: str = "level") -> float:
    """
    Verify a confidence level lies strictly between 0 and 1.

    Returns:
        The level as a float

    Raises:
        ValidationError: If level is outside (0, 1)
    """
    level = float(level)
    if not 0.0 < level < 1.0:
        raise ValidationError(f"{name}: must be in (0, 1), got {level}")
    return level


def check_positive_int(value: int, name: str, minimum: int = 1) -> int:
    """
    Verify value is an integer no smaller than minimum.

    Raises:
        ValidationError: If value is not an int or is below minimum
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValidationError(f"{name}: expected an integer, got {type(value).__name__}")
    if value < minimum:
        raise ValidationError(f"{name}: must be >= {minimum}, got {value}")
    return int(value)
