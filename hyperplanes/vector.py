"""
Fixed-size real vectors.

A ``Vector`` wraps a read-only 1-D NumPy array. Its dimension is fixed at
construction and every operation returns a new ``Vector``.
"""

import math
from typing import Callable, Iterable, NamedTuple, Optional

import numpy as np

from hyperplanes.errors import DimensionMismatchError, ZeroVectorError
from hyperplanes.rounding import fmt_num, round_factory
from hyperplanes.tolerance import first_nonzero_index, is_zero

ZERO_VECTOR_HAS_NO_NORMALIZE = "Zero vector has no normalize."


class Projection(NamedTuple):
    """Decomposition of a vector against a basis direction."""
    parallel: "Vector"
    orthogonal: "Vector"


class Vector:
    """An immutable tuple of ``dim`` real components."""

    __slots__ = ("_data",)

    def __init__(self, components: Iterable[float]):
        if isinstance(components, Vector):
            data = components._data
        else:
            data = np.array(list(components), dtype=np.float64)
        if data.ndim != 1:
            raise ValueError("Vector components must be a flat sequence of numbers.")
        data = data.copy()
        data.setflags(write=False)
        self._data = data

    # ── Container protocol ───────────────────────────────────────────────

    @property
    def dim(self) -> int:
        return self._data.shape[0]

    def __len__(self) -> int:
        return self.dim

    def __iter__(self):
        return (float(x) for x in self._data)

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def to_array(self) -> np.ndarray:
        """Return a writable copy of the components."""
        return self._data.copy()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.dim == other.dim and bool(np.array_equal(self._data, other._data))

    def __hash__(self) -> int:
        return hash(tuple(self._data.tolist()))

    def __repr__(self) -> str:
        return f"Vector({self._data.tolist()!r})"

    def __str__(self) -> str:
        return "[" + ", ".join(fmt_num(x) for x in self) + "]"

    # ── Arithmetic ───────────────────────────────────────────────────────

    def _check_dim(self, other: "Vector") -> None:
        if self.dim != other.dim:
            raise DimensionMismatchError(
                f"Vector dimensions differ: {self.dim} and {other.dim}")

    def map(self, f: Callable[[float], float]) -> "Vector":
        return Vector(f(x) for x in self)

    def round(self, precision: int) -> "Vector":
        return self.map(round_factory(precision))

    def scale(self, scalar: float) -> "Vector":
        return Vector(self._data * scalar)

    def __add__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_dim(other)
        return Vector(self._data + other._data)

    def __sub__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_dim(other)
        return Vector(self._data - other._data)

    def __mul__(self, scalar: float) -> "Vector":
        if isinstance(scalar, Vector):
            return NotImplemented
        return self.scale(scalar)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector":
        return self.scale(-1.0)

    # ── Geometry ─────────────────────────────────────────────────────────

    def magnitude(self) -> float:
        return float(np.sqrt(np.sum(self._data ** 2)))

    def normalize(self) -> "Vector":
        """Return the unit vector in the same direction.

        Raises ZeroVectorError for the zero vector instead of producing NaN.
        """
        magnitude = self.magnitude()
        if magnitude == 0.0:
            raise ZeroVectorError(ZERO_VECTOR_HAS_NO_NORMALIZE)
        return self.scale(1.0 / magnitude)

    def dot(self, other: "Vector") -> float:
        self._check_dim(other)
        return float(np.dot(self._data, other._data))

    def _cosine(self, other: "Vector") -> float:
        # Round-off can push |cos| slightly past 1, which acos rejects.
        cosine = self.normalize().dot(other.normalize())
        return float(np.clip(cosine, -1.0, 1.0))

    def angle(self, other: "Vector") -> float:
        """Angle between the two vectors in radians, in ``[0, pi]``."""
        return math.acos(self._cosine(other))

    def is_zero(self, tolerance: Optional[float] = None) -> bool:
        return is_zero(self.magnitude(), tolerance)

    def is_parallel(self, other: "Vector") -> bool:
        """True when the angle is 0 or pi.

        Compares the unit vectors directly, so the test scales with the
        angle rather than its square. The zero vector is parallel to every
        vector.
        """
        self._check_dim(other)
        try:
            u, v = self.normalize(), other.normalize()
        except ZeroVectorError:
            return True
        return (u - v).is_zero() or (u + v).is_zero()

    def is_orthogonal(self, other: "Vector", tolerance: Optional[float] = None) -> bool:
        return is_zero(self.dot(other), tolerance)

    def first_nonzero_index(self, tolerance: Optional[float] = None) -> int:
        return first_nonzero_index(self, tolerance)

    def project(self, basis: "Vector") -> Projection:
        """Split the vector into components parallel and orthogonal to *basis*."""
        unit = basis.normalize()
        parallel = unit.scale(self.dot(unit))
        return Projection(parallel=parallel, orthogonal=self - parallel)

    # ── 3-D only ─────────────────────────────────────────────────────────

    def _require_3d(self, other: "Vector") -> None:
        if self.dim != 3 or other.dim != 3:
            raise DimensionMismatchError(
                f"Cross product needs two 3-D vectors, got {self.dim} and {other.dim}")

    def cross(self, other: "Vector") -> "Vector":
        self._require_3d(other)
        return Vector(np.cross(self._data, other._data))

    def area_of_parallelogram(self, other: "Vector") -> float:
        return self.cross(other).magnitude()

    def area_of_triangle(self, other: "Vector") -> float:
        return self.area_of_parallelogram(other) / 2.0


def vector(components: Iterable[float]) -> Vector:
    return Vector(components)
