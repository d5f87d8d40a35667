"""
featkit Type Definitions and Input Dispatch.

This module provides type aliases and conversion helpers for the matrix and
label inputs accepted across the package:

    - NumPy arrays (ndarray)
    - SciPy sparse matrices (densified where a dense view is required)
    - Python sequences (List, Tuple)

Missing values are represented by NaN in every format.

Example:
    >>> from featkit._typing import MatrixInput, ensure_dense_matrix
    >>>
    >>> def my_func(x: MatrixInput):
    ...     arr = ensure_dense_matrix(x)
    ...     # ... operations ...
"""

from __future__ import annotations

from typing import Any, List, Sequence, Union

import numpy as np
from scipy import sparse as sp

from featkit.error import InvalidLabelError, InvalidParameterError, SizeMismatchError


# =============================================================================
# Type Aliases
# =============================================================================

# Dense matrix inputs
DenseInput = Union[
    "np.ndarray",
    Sequence[Sequence[float]],
    List[List[float]],
]

# Any matrix input (sparse accepted where densifying is acceptable)
MatrixInput = Union[
    "sp.spmatrix",
    DenseInput,
]

# Label vector inputs
LabelInput = Union[
    "np.ndarray",
    Sequence[int],
    List[int],
]


# =============================================================================
# Format Detection
# =============================================================================

def is_scipy_sparse(obj: Any) -> bool:
    """Check if object is any scipy sparse matrix or array.

    Args:
        obj: Object to check.

    Returns:
        True if obj is a scipy.sparse matrix.
    """
    return sp.issparse(obj)


def is_numpy_array(obj: Any) -> bool:
    """Check if object is a numpy ndarray."""
    return isinstance(obj, np.ndarray)


def _is_mutable_row(row: Any) -> bool:
    if isinstance(row, list):
        return True
    return (isinstance(row, np.ndarray) and row.ndim == 1
            and row.dtype.kind == "f" and row.flags.writeable)


def is_row_list(obj: Any) -> bool:
    """Check if object is a list whose rows can be written cell by cell.

    Rows may be lists or writeable 1-D floating point ndarrays.
    """
    return isinstance(obj, list) and all(_is_mutable_row(row) for row in obj)


def get_format(obj: Any) -> str:
    """Detect the format of a matrix.

    Args:
        obj: Matrix object.

    Returns:
        Format string: 'scipy_sparse', 'numpy', 'row_list', 'sequence',
        or 'unknown'.
    """
    if is_scipy_sparse(obj):
        return "scipy_sparse"
    elif is_numpy_array(obj):
        return "numpy"
    elif is_row_list(obj):
        return "row_list"
    elif isinstance(obj, (list, tuple)):
        return "sequence"
    else:
        return "unknown"


# =============================================================================
# Conversion Functions
# =============================================================================

def _check_shape(arr: "np.ndarray") -> None:
    if arr.ndim != 2:
        raise InvalidParameterError(
            f"Expected a 2-D matrix, got an array with {arr.ndim} dimension(s)"
        )
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise InvalidParameterError(
            f"Matrix must have at least one row and one column, got shape {arr.shape}"
        )


def ensure_dense_matrix(mat: MatrixInput, copy: bool = False) -> "np.ndarray":
    """Convert any matrix input to a 2-D float64 numpy array.

    Sparse inputs are densified: implicit zeros become explicit zeros and
    stored NaN entries stay missing.

    Args:
        mat: Input matrix in any supported format.
        copy: If True, always return a new array.

    Returns:
        2-D float64 ndarray. Shares memory with ``mat`` when ``mat`` is
        already a float64 ndarray and ``copy`` is False.

    Raises:
        InvalidParameterError: If the input is not a non-empty 2-D numeric
            matrix (ragged rows included).
    """
    fmt = get_format(mat)

    if fmt == "scipy_sparse":
        arr = np.asarray(mat.toarray(), dtype=np.float64)
    elif fmt == "unknown":
        raise InvalidParameterError(f"Unsupported matrix type: {type(mat).__name__}")
    else:
        try:
            if copy:
                arr = np.array(mat, dtype=np.float64)
            else:
                arr = np.asarray(mat, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidParameterError(f"Matrix is not a rectangular numeric array: {e}") from e

    _check_shape(arr)
    return arr


def ensure_label_vector(
    labels: LabelInput,
    size: int | None = None,
) -> "np.ndarray":
    """Convert a label input to a 1-D int64 numpy array (always a copy).

    Args:
        labels: Class labels, one per row.
        size: Expected length (number of matrix rows).

    Returns:
        1-D int64 ndarray.

    Raises:
        SizeMismatchError: If the length differs from ``size``.
        InvalidLabelError: If labels are not 1-D or not integral.
    """
    arr = np.asarray(labels)
    if arr.ndim != 1:
        raise InvalidLabelError(f"Class labels must be a 1-D vector, got {arr.ndim} dimension(s)")

    if size is not None and arr.shape[0] != size:
        raise SizeMismatchError(
            f"The sizes of X and Y don't match: {size} != {arr.shape[0]}"
        )

    if arr.dtype.kind == "b":
        arr = arr.astype(np.int64)
    elif arr.dtype.kind == "f":
        if not np.all(np.isfinite(arr)) or not np.all(arr == np.floor(arr)):
            raise InvalidLabelError("Class labels must be integers")
        arr = arr.astype(np.int64)
    elif arr.dtype.kind in "iu":
        arr = arr.astype(np.int64, copy=True)
    elif arr.size == 0:
        arr = arr.astype(np.int64)
    else:
        raise InvalidLabelError(f"Class labels must be integers, got dtype {arr.dtype}")

    return arr


def writeable_float_view(mat: Any) -> "np.ndarray | None":
    """Return ``mat`` itself when it can be filled in place, else None.

    A matrix can be filled in place when it is a writeable 2-D ndarray of a
    floating point dtype.
    """
    if (is_numpy_array(mat) and mat.dtype.kind == "f"
            and mat.ndim == 2 and mat.flags.writeable):
        return mat
    return None


__all__ = [
    "DenseInput",
    "MatrixInput",
    "LabelInput",
    "is_scipy_sparse",
    "is_numpy_array",
    "is_row_list",
    "get_format",
    "ensure_dense_matrix",
    "ensure_label_vector",
    "writeable_float_view",
]
