"""
Input checks shared by Design and the inference engine.

Every check raises on the first problem it finds and names the offending
column. Nothing is coerced beyond converting numeric input to float64.
"""

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pytreatreg.core.exceptions import ValidationError, DimensionError


def as_numeric(values: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """
    Convert a column (or matrix) to float64.

    Raises:
        ValidationError: If the values are not numeric (strings, objects,
            mixed types, datetimes)
    """
    try:
        arr = np.asarray(values)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if arr.dtype == object or not np.issubdtype(arr.dtype, np.number):
        raise ValidationError(f"{name}: expected numeric data, got dtype {arr.dtype}")
    return arr.astype(np.float64, copy=False)


def check_shape(
    arr: NDArray[np.floating[Any]],
    shape: tuple[int | None, ...],
    name: str,
) -> None:
    """
    Verify an array against an expected shape.

    None in `shape` matches any length along that axis, so (None,) is a
    column, (None, 3) is a design matrix and (3, 3) is a Gram matrix.

    Raises:
        DimensionError: On a wrong number of axes or a fixed axis mismatch
    """
    expected = "(" + ", ".join("n" if s is None else str(s) for s in shape) + ")"
    if arr.ndim != len(shape) or any(
        s is not None and s != actual for s, actual in zip(shape, arr.shape)
    ):
        raise DimensionError(f"{name}: expected shape {expected}, got {arr.shape}")


def check_finite(arr: NDArray[np.floating[Any]], name: str) -> None:
    """Raise ValidationError if the array holds NaN or Inf."""
    bad = ~np.isfinite(arr)
    if bad.any():
        raise ValidationError(
            f"{name}: {int(bad.sum())} non-finite value(s), "
            f"first at index {int(np.flatnonzero(bad.ravel())[0])}"
        )


def check_same_length(**columns: NDArray[np.floating[Any]]) -> int:
    """
    Verify all columns have the same number of rows.

    Returns:
        The common row count

    Raises:
        DimensionError: Listing every column's length on mismatch
    """
    lengths = {name: arr.shape[0] for name, arr in columns.items()}
    if len(set(lengths.values())) > 1:
        details = ", ".join(f"{name}={n}" for name, n in lengths.items())
        raise DimensionError(f"Inconsistent lengths: {details}")
    return next(iter(lengths.values()))


def check_residual_df(n: int, n_params: int) -> None:
    """
    Require at least one residual degree of freedom.

    Raises:
        DimensionError: If n <= n_params
    """
    if n <= n_params:
        raise DimensionError(
            f"requires at least {n_params + 1} observations for "
            f"{n_params} parameters, got {n}"
        )
