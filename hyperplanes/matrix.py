"""Small dense row-major matrices built on NumPy."""

from typing import Callable, Iterable

import numpy as np

from hyperplanes.errors import DimensionMismatchError
from hyperplanes.rounding import round_factory
from hyperplanes.vector import Vector


class Matrix:
    """An immutable ``row x col`` matrix of floats."""

    __slots__ = ("_data",)

    def __init__(self, rows: Iterable[Iterable[float]]):
        if isinstance(rows, Matrix):
            data = rows._data
        elif isinstance(rows, np.ndarray):
            data = rows.astype(np.float64)
        else:
            try:
                data = np.array([list(r) for r in rows], dtype=np.float64)
            except ValueError as e:
                raise DimensionMismatchError(
                    f"Matrix rows must all have the same length: {e}")
            if data.size == 0:
                data = data.reshape(data.shape[0], 0)
        if data.ndim != 2:
            raise DimensionMismatchError("Matrix rows must all have the same length.")
        data = data.copy()
        data.setflags(write=False)
        self._data = data

    @property
    def row(self) -> int:
        return self._data.shape[0]

    @property
    def col(self) -> int:
        return self._data.shape[1]

    def __len__(self) -> int:
        return self.row

    def __iter__(self):
        return (Vector(r) for r in self._data)

    def __getitem__(self, index: int) -> Vector:
        return Vector(self._data[index])

    def to_array(self) -> np.ndarray:
        return self._data.copy()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return (self._data.shape == other._data.shape
                and bool(np.array_equal(self._data, other._data)))

    __hash__ = None

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()!r})"

    def __str__(self) -> str:
        return "\n".join(str(r) for r in self)

    # ── Element-wise ─────────────────────────────────────────────────────

    def map(self, f: Callable[[float], float]) -> "Matrix":
        return Matrix([[f(float(x)) for x in r] for r in self._data])

    def round(self, precision: int) -> "Matrix":
        return self.map(round_factory(precision))

    def scale(self, scalar: float) -> "Matrix":
        return Matrix(self._data * scalar)

    def _check_shape(self, other: "Matrix") -> None:
        if self._data.shape != other._data.shape:
            raise DimensionMismatchError(
                f"Matrix shapes differ: {self._data.shape} and {other._data.shape}")

    def __add__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_shape(other)
        return Matrix(self._data + other._data)

    def __sub__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_shape(other)
        return Matrix(self._data - other._data)

    # ── Products ─────────────────────────────────────────────────────────

    def get_row(self, row: int) -> Vector:
        return self[row]

    def get_col(self, col: int) -> Vector:
        return Vector(self._data[:, col])

    def transpose(self) -> "Matrix":
        return Matrix(self._data.T)

    def multiply(self, other: "Matrix") -> "Matrix":
        """Matrix product; ``self.col`` must equal ``other.row``."""
        if self.col != other.row:
            raise DimensionMismatchError(
                f"Cannot multiply {self.row}x{self.col} by {other.row}x{other.col}")
        return Matrix(self._data @ other._data)

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return self.multiply(other)
        if isinstance(other, (int, float, np.floating, np.integer)):
            return self.scale(float(other))
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, (int, float, np.floating, np.integer)):
            return self.scale(float(other))
        return NotImplemented


def matrix(rows: Iterable[Iterable[float]]) -> Matrix:
    return Matrix(rows)


def identity(n: int) -> Matrix:
    return Matrix(np.eye(n))

