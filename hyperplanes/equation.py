"""
Affine hyperplanes: ``normal_vector · x = constant_term``.

A line in 2-D, a plane in 3-D. Two equations compare equal when they describe
the same hyperplane, whatever their scale.
"""

from typing import Iterable, Optional, Union

import numpy as np

from hyperplanes.errors import NoNonzeroElementsError
from hyperplanes.rounding import fmt_num, round_factory
from hyperplanes.tolerance import eq, first_nonzero_index, is_zero
from hyperplanes.vector import Vector


def _build_base_point(normal_vector: Vector, constant_term: float) -> Optional[Vector]:
    """Return one point on the hyperplane, or None for a zero normal vector."""
    try:
        index = first_nonzero_index(normal_vector)
    except NoNonzeroElementsError:
        return None
    coords = np.zeros(normal_vector.dim)
    coords[index] = constant_term / normal_vector[index]
    return Vector(coords)


class Equation:
    """A hyperplane with a derived, read-only ``base_point``."""

    __slots__ = ("_normal_vector", "_constant_term", "_base_point")

    def __init__(self, normal_vector: Union[Vector, Iterable[float]],
                 constant_term: float):
        if not isinstance(normal_vector, Vector):
            normal_vector = Vector(normal_vector)
        self._normal_vector = normal_vector
        self._constant_term = float(constant_term)
        self._base_point = _build_base_point(normal_vector, self._constant_term)

    @property
    def normal_vector(self) -> Vector:
        return self._normal_vector

    @property
    def constant_term(self) -> float:
        return self._constant_term

    @property
    def base_point(self) -> Optional[Vector]:
        return self._base_point

    @property
    def dim(self) -> int:
        return self._normal_vector.dim

    # ── Transformations ──────────────────────────────────────────────────

    def scale(self, scalar: float) -> "Equation":
        return Equation(self._normal_vector.scale(scalar),
                        self._constant_term * scalar)

    def round(self, precision: int) -> "Equation":
        """Round every stored number, base point included.

        The rounded base point is kept as is rather than re-derived from the
        rounded coefficients.
        """
        round_ = round_factory(precision)
        rounded = Equation.__new__(Equation)
        rounded._normal_vector = self._normal_vector.map(round_)
        rounded._constant_term = round_(self._constant_term)
        rounded._base_point = (self._base_point.map(round_)
                               if self._base_point is not None else None)
        return rounded

    def is_parallel(self, other: "Equation") -> bool:
        return self._normal_vector.is_parallel(other._normal_vector)

    def __add__(self, other: "Equation") -> "Equation":
        if not isinstance(other, Equation):
            return NotImplemented
        return Equation(self._normal_vector + other._normal_vector,
                        self._constant_term + other._constant_term)

    def __sub__(self, other: "Equation") -> "Equation":
        if not isinstance(other, Equation):
            return NotImplemented
        return Equation(self._normal_vector - other._normal_vector,
                        self._constant_term - other._constant_term)

    def __mul__(self, scalar: float) -> "Equation":
        if isinstance(scalar, (Equation, Vector)):
            return NotImplemented
        return self.scale(scalar)

    __rmul__ = __mul__

    # ── Comparison ───────────────────────────────────────────────────────

    def __eq__(self, other) -> bool:
        if not isinstance(other, Equation):
            return NotImplemented
        if self._base_point is None or other._base_point is None:
            # Only two "0 = k" equations can match each other.
            if self._base_point is None and other._base_point is None:
                return eq(self._constant_term, other._constant_term)
            return False
        if not self.is_parallel(other):
            return False
        connect = self._base_point - other._base_point
        return (connect.is_orthogonal(self._normal_vector)
                and connect.is_orthogonal(other._normal_vector))

    __hash__ = None

    # ── Display ──────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        return (f"Equation({list(self._normal_vector)!r}, "
                f"{self._constant_term!r})")

    def __str__(self) -> str:
        return self.format()

    def __format__(self, spec: str) -> str:
        if not spec:
            return self.format()
        if not spec.startswith(".") or not spec[1:].isdigit():
            raise ValueError(f"Unsupported format spec for Equation: '{spec}'")
        return self.format(precision=int(spec[1:]))

    def format(self, precision: Optional[int] = None) -> str:
        """Render as ``a·x_0 + b·x_1 + … = c``.

        Zero coefficients are skipped and a coefficient of (minus) one is
        written as a bare (negated) variable. With *precision*, numbers are
        printed with that many decimals. A zero normal vector gives ``0 = c``.
        """
        parts = []
        for index, coefficient in enumerate(self._normal_vector):
            if is_zero(coefficient):
                continue
            negative = coefficient < 0
            if not parts:
                sign = "-" if negative else ""
            else:
                sign = " - " if negative else " + "
            magnitude = abs(coefficient)
            shown = "" if eq(magnitude, 1.0) else fmt_num(magnitude, precision)
            parts.append(f"{sign}{shown}x_{index}")
        lhs = "".join(parts) if parts else "0"
        return f"{lhs} = {fmt_num(self._constant_term, precision)}"


def equation(normal_vector: Union[Vector, Iterable[float]],
             constant_term: float) -> Equation:
    return Equation(normal_vector, constant_term)
