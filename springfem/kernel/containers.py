# springfem/kernel/containers.py
"""
DENSE CONTAINERS: Matrix and Vector
===================================

PURPOSE:
--------
Fixed-shape, row-major dense storage for the global stiffness matrix,
force vector and displacement vector.

Both classes are thin value-semantic wrappers around a contiguous numpy
float64 array. The wrapper exists so that every access is bounds-checked
and every shape mismatch surfaces as one of our own errors instead of
numpy broadcasting silently doing something else:

    Matrix[r, c]          r in [0, rows), c in [0, cols)  else IndexOutOfRangeError
    Vector[i]             i in [0, size)                  else IndexOutOfRangeError
    Matrix @ Vector       cols == size                    else DimensionMismatchError
    euclidean_distance    equal shapes                    else DimensionMismatchError

Negative indices are out of range (no Python-style wrap-around).

USAGE:
------
    >>> K = Matrix.from_rows([[500, -500], [-500, 500]])
    >>> u = Vector.from_values([0.0, 2.0])
    >>> print(K @ u)
    -1000 1000
"""

import math
import operator
from typing import Callable, Iterable, Iterator, Sequence, Tuple, Union

import numpy as np

from ..config import CONFIG
from .errors import DimensionMismatchError, IndexOutOfRangeError


Predicate = Callable[[int], bool]


def _format_value(value: float) -> str:
    return CONFIG.float_format.format(float(value))


def _check_index(i, size: int, what: str) -> int:
    i = operator.index(i)
    if not 0 <= i < size:
        raise IndexOutOfRangeError(f"{what} index {i} out of range [0, {size})")
    return i


def _is_nested(values) -> bool:
    if isinstance(values, np.ndarray):
        return values.ndim == 2
    return len(values) > 0 and isinstance(values[0], (list, tuple, np.ndarray))


def _rows_to_array(values) -> np.ndarray:
    rows = [list(r) for r in values]
    ncols = len(rows[0]) if rows else 0
    for r, row in enumerate(rows):
        if len(row) != ncols:
            raise DimensionMismatchError(
                f"Row {r} has {len(row)} values, expected {ncols}"
            )
    return np.array(rows, dtype=float).reshape(len(rows), ncols)


class Matrix:
    """
    Dense rows × cols matrix of floats.

    Parameters:
    -----------
    rows, cols : int
        Shape of the zero-filled matrix.

    Examples:
    ---------
    >>> m = Matrix(2, 3)
    >>> m[1, 2] = 4.0
    >>> m.shape
    (2, 3)
    """

    __hash__ = None

    def __init__(self, rows: int = 0, cols: int = 0):
        if rows < 0 or cols < 0:
            raise DimensionMismatchError(f"Invalid matrix shape ({rows}, {cols})")
        self._a = np.zeros((rows, cols), dtype=float)

    @classmethod
    def _wrap(cls, array: np.ndarray) -> "Matrix":
        m = cls.__new__(cls)
        m._a = array
        return m

    @classmethod
    def from_rows(cls, values: Sequence[Sequence[float]]) -> "Matrix":
        """Build a matrix from nested row data; every row must have the same length."""
        return cls._wrap(_rows_to_array(values))

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> "Matrix":
        array = np.array(array, dtype=float)
        if array.ndim != 2:
            raise DimensionMismatchError(f"Expected a 2-D array, got shape {array.shape}")
        return cls._wrap(array)

    def copy(self) -> "Matrix":
        return Matrix._wrap(self._a.copy())

    def to_numpy(self) -> np.ndarray:
        return self._a.copy()

    @property
    def rows(self) -> int:
        return self._a.shape[0]

    @property
    def cols(self) -> int:
        return self._a.shape[1]

    @property
    def size(self) -> int:
        return self._a.size

    @property
    def shape(self) -> Tuple[int, int]:
        return self._a.shape

    def resize(self, rows: int, cols: int) -> None:
        """
        Change the shape in place.

        The row-major sequence of existing values is kept as far as it fits
        into the new shape; any new positions are zero.
        """
        if rows < 0 or cols < 0:
            raise DimensionMismatchError(f"Invalid matrix shape ({rows}, {cols})")
        flat = np.zeros(rows * cols, dtype=float)
        n = min(flat.size, self._a.size)
        flat[:n] = self._a.ravel()[:n]
        self._a = flat.reshape(rows, cols)

    def assign(self, values) -> "Matrix":
        """
        Fill the matrix from literal data.

        A flat sequence must contain exactly rows × cols values and is written
        row by row. A nested sequence replaces both shape and content.
        """
        if not isinstance(values, np.ndarray):
            values = list(values)
        if _is_nested(values):
            self._a = _rows_to_array(values)
            return self
        flat = np.asarray(values, dtype=float).ravel()
        if flat.size != self.size:
            raise DimensionMismatchError(
                f"Cannot assign {flat.size} values to a {self.rows}x{self.cols} matrix"
            )
        self._a = flat.reshape(self.rows, self.cols)
        return self

    def _key(self, key) -> Tuple[int, int]:
        try:
            row, col = key
        except (TypeError, ValueError):
            raise TypeError("Matrix indices must be a (row, col) pair") from None
        return _check_index(row, self.rows, "Row"), _check_index(col, self.cols, "Column")

    def __getitem__(self, key) -> float:
        return float(self._a[self._key(key)])

    def __setitem__(self, key, value: float) -> None:
        self._a[self._key(key)] = value

    def swap_rows(self, i: int, j: int) -> None:
        i = _check_index(i, self.rows, "Row")
        j = _check_index(j, self.rows, "Row")
        if i == j:
            return
        self._a[[i, j]] = self._a[[j, i]]

    def delete_rows_and_columns(self, predicate: Predicate) -> "Matrix":
        """
        Return a copy without the rows and columns selected by predicate.

        The predicate is asked once per index of the combined row/column
        index space, range(max(rows, cols)). A row or column survives when
        predicate(index) is false; survivors keep their relative order.

        Example:
        --------
        >>> m = Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        >>> print(m.delete_rows_and_columns(lambda i: i == 1))
        1 3
        7 9
        """
        n = max(self.rows, self.cols)
        drop = np.array([bool(predicate(i)) for i in range(n)], dtype=bool)
        keep_rows = np.flatnonzero(~drop[:self.rows])
        keep_cols = np.flatnonzero(~drop[:self.cols])
        return Matrix._wrap(self._a[np.ix_(keep_rows, keep_cols)].copy())

    def is_symmetric(self) -> bool:
        return self.rows == self.cols and np.array_equal(self._a, self._a.T)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self._a, other._a)

    def __matmul__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        if self.cols != other.size:
            raise DimensionMismatchError(
                f"Cannot multiply a {self.rows}x{self.cols} matrix "
                f"with a vector of size {other.size}"
            )
        return Vector._wrap(self._a @ other._v)

    __mul__ = __matmul__

    def __str__(self) -> str:
        return "".join(
            " ".join(_format_value(x) for x in row) + "\n" for row in self._a
        )

    def __repr__(self) -> str:
        return f"Matrix({self._a.tolist()!r})"


class Vector:
    """
    Dense vector of floats.

    Parameters:
    -----------
    size : int
        Length of the zero-filled vector.
    """

    __hash__ = None

    def __init__(self, size: int = 0):
        if size < 0:
            raise DimensionMismatchError(f"Invalid vector size {size}")
        self._v = np.zeros(size, dtype=float)

    @classmethod
    def _wrap(cls, array: np.ndarray) -> "Vector":
        v = cls.__new__(cls)
        v._v = array
        return v

    @classmethod
    def from_values(cls, values: Iterable[float]) -> "Vector":
        array = np.asarray(list(values), dtype=float)
        if array.ndim != 1:
            raise DimensionMismatchError(f"Expected flat values, got shape {array.shape}")
        return cls._wrap(array)

    def copy(self) -> "Vector":
        return Vector._wrap(self._v.copy())

    def to_numpy(self) -> np.ndarray:
        return self._v.copy()

    @property
    def size(self) -> int:
        return self._v.size

    def __len__(self) -> int:
        return self._v.size

    def __iter__(self) -> Iterator[float]:
        return (float(x) for x in self._v)

    def resize(self, size: int) -> None:
        if size < 0:
            raise DimensionMismatchError(f"Invalid vector size {size}")
        v = np.zeros(size, dtype=float)
        n = min(size, self._v.size)
        v[:n] = self._v[:n]
        self._v = v

    def assign(self, values: Iterable[float]) -> "Vector":
        """Replace size and content with the given values."""
        self._v = Vector.from_values(values)._v
        return self

    def __getitem__(self, i) -> float:
        return float(self._v[_check_index(i, self.size, "Vector")])

    def __setitem__(self, i, value: float) -> None:
        self._v[_check_index(i, self.size, "Vector")] = value

    def swap_elements(self, i: int, j: int) -> None:
        i = _check_index(i, self.size, "Vector")
        j = _check_index(j, self.size, "Vector")
        if i == j:
            return
        self._v[[i, j]] = self._v[[j, i]]

    def delete_elements(self, predicate: Predicate) -> "Vector":
        """Return a copy without the elements for which predicate(index) is true."""
        keep = [i for i in range(self.size) if not predicate(i)]
        return Vector._wrap(self._v[keep].copy())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.size == other.size and np.array_equal(self._v, other._v)

    def __matmul__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        if self.size != other.size:
            raise DimensionMismatchError(
                f"Cannot take the dot product of vectors of size {self.size} and {other.size}"
            )
        return float(np.dot(self._v, other._v))

    __mul__ = __matmul__

    def __str__(self) -> str:
        return " ".join(_format_value(x) for x in self._v)

    def __repr__(self) -> str:
        return f"Vector({self._v.tolist()!r})"


def euclidean_distance(a: Union[Matrix, Vector], b: Union[Matrix, Vector]) -> float:
    """
    sqrt(sum((a_i - b_i)^2)) over all elements of two equally shaped containers.

    Raises:
        DimensionMismatchError: If the containers differ in kind or shape
    """
    if isinstance(a, Matrix) and isinstance(b, Matrix):
        x, y = a._a, b._a
    elif isinstance(a, Vector) and isinstance(b, Vector):
        x, y = a._v, b._v
    else:
        raise DimensionMismatchError(
            f"Cannot compare {type(a).__name__} with {type(b).__name__}"
        )
    if x.shape != y.shape:
        raise DimensionMismatchError(f"Shape mismatch: {x.shape} vs {y.shape}")
    d = x - y
    return math.sqrt(float(np.sum(d * d)))
