"""
Systems of linear equations solved by Gaussian elimination.

A ``LinearSystem`` holds N equations sharing one dimension D. It reduces
them to triangular form, then to reduced row-echelon form (RREF), and
classifies the result as a unique point, no solution, or infinitely many
solutions.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

import numpy as np

from hyperplanes.equation import Equation
from hyperplanes.errors import DimensionMismatchError, NoNonzeroElementsError
from hyperplanes.tolerance import first_nonzero_index, is_zero
from hyperplanes.vector import Vector

logger = logging.getLogger(__name__)

NO_SOLUTIONS_MSG = "No solutions"
INF_SOLUTIONS_MSG = "Infinitely many solutions"


# ── Solution variants ───────────────────────────────────────────────────

@dataclass(frozen=True)
class Solution:
    """Base class of the three possible outcomes of ``compute_solution``."""


@dataclass(frozen=True)
class UniqueSolution(Solution):
    point: Vector


@dataclass(frozen=True)
class NoSolution(Solution):
    message: str = NO_SOLUTIONS_MSG


@dataclass(frozen=True)
class InfiniteSolutions(Solution):
    message: str = INF_SOLUTIONS_MSG


# ── Linear system ───────────────────────────────────────────────────────

class LinearSystem:
    """An ordered, fixed-length list of equations of one dimension.

    The row primitives (``swap_rows``, ``scale_row``,
    ``add_multiple_of_row_to_row``) and indexed assignment mutate the system
    in place. ``compute_triangular_form`` and ``compute_rref`` work on a copy
    and leave this instance untouched.
    """

    def __init__(self, equations: Iterable[Equation], dim: Optional[int] = None):
        rows = list(equations)
        if dim is None:
            if not rows:
                raise ValueError("An empty system needs an explicit dimension.")
            dim = rows[0].dim
        for i, row in enumerate(rows):
            if row.dim != dim:
                raise DimensionMismatchError(
                    f"Equation {i + 1} has dimension {row.dim}, expected {dim}")
        self._rows: List[Equation] = rows
        self._dim = dim

    @classmethod
    def from_matrix(cls, coefficients, constants) -> "LinearSystem":
        """Build a system from a coefficient matrix A and constants b (Ax = b)."""
        A = np.asarray(coefficients, dtype=np.float64)
        b = np.asarray(constants, dtype=np.float64)
        if A.ndim != 2:
            raise DimensionMismatchError(
                f"Coefficient matrix must be 2-D, got {A.ndim}-D")
        if b.ndim != 1 or b.shape[0] != A.shape[0]:
            raise DimensionMismatchError(
                f"Expected {A.shape[0]} constants, got shape {b.shape}")
        return cls((Equation(A[i], b[i]) for i in range(A.shape[0])),
                   dim=A.shape[1])

    # ── Accessors ────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._rows)

    @property
    def dim(self) -> int:
        return self._dim

    @property
    def equations(self) -> tuple:
        return tuple(self._rows)

    def __iter__(self):
        return iter(self._rows)

    def _check_row(self, row: int) -> None:
        if not 0 <= row < len(self._rows):
            raise IndexError(
                f"Row index {row} out of range for a system of {len(self._rows)} equations")

    def __getitem__(self, row: int) -> Equation:
        self._check_row(row)
        return self._rows[row]

    def __setitem__(self, row: int, value: Equation) -> None:
        self._check_row(row)
        if value.dim != self._dim:
            raise DimensionMismatchError(
                f"Equation has dimension {value.dim}, expected {self._dim}")
        self._rows[row] = value

    def coefficient(self, row: int, col: int) -> float:
        return self[row].normal_vector[col]

    def copy(self) -> "LinearSystem":
        return LinearSystem(self._rows, dim=self._dim)

    def to_augmented_matrix(self) -> np.ndarray:
        """Return the ``N x (D + 1)`` array ``[A | b]``."""
        augmented = np.zeros((len(self._rows), self._dim + 1))
        for i, row in enumerate(self._rows):
            augmented[i, :-1] = row.normal_vector.to_array()
            augmented[i, -1] = row.constant_term
        return augmented

    def __repr__(self) -> str:
        return f"LinearSystem({self._rows!r}, dim={self._dim})"

    def __str__(self) -> str:
        if not self._rows:
            return "No Equation"
        lines = ["Linear System:"]
        lines += [f"Equation {i + 1}: {row}" for i, row in enumerate(self._rows)]
        return "\n".join(lines) + "\n"

    # ── Row primitives ───────────────────────────────────────────────────

    def swap_rows(self, row1: int, row2: int) -> None:
        self._check_row(row1)
        self._check_row(row2)
        self._rows[row1], self._rows[row2] = self._rows[row2], self._rows[row1]

    def scale_row(self, coefficient: float, row: int) -> None:
        self._check_row(row)
        self._rows[row] = self._rows[row].scale(coefficient)

    def add_multiple_of_row_to_row(self, coefficient: float, row_to_add: int,
                                   row_to_be_added_to: int) -> None:
        self._check_row(row_to_add)
        self._check_row(row_to_be_added_to)
        self._rows[row_to_be_added_to] = (
            self._rows[row_to_add].scale(coefficient) + self._rows[row_to_be_added_to]
        )

    # ── Pivots ───────────────────────────────────────────────────────────

    def first_nonzero_index_per_row(self) -> List[Optional[int]]:
        """Pivot column of each row, or None where the normal vector is zero."""
        indices = []
        for row in self._rows:
            try:
                indices.append(first_nonzero_index(row.normal_vector))
            except NoNonzeroElementsError:
                indices.append(None)
        return indices

    def _swap_with_row_below_for_nonzero_coefficient(self, row: int, col: int) -> bool:
        for below in range(row + 1, len(self._rows)):
            if not is_zero(self.coefficient(below, col)):
                logger.debug("swap rows %d and %d for a pivot in column %d",
                             row, below, col)
                self.swap_rows(row, below)
                return True
        return False

    def _clear_coefficient(self, row: int, col: int, target_row: int) -> None:
        pivot = self.coefficient(row, col)
        target = self.coefficient(target_row, col)
        self.add_multiple_of_row_to_row(-target / pivot, row, target_row)

    def _clear_coefficients_below(self, row: int, col: int) -> None:
        for target_row in range(row + 1, len(self._rows)):
            self._clear_coefficient(row, col, target_row)

    def _clear_coefficients_above(self, row: int, col: int) -> None:
        for target_row in range(row):
            self._clear_coefficient(row, col, target_row)

    # ── Elimination ──────────────────────────────────────────────────────

    def compute_triangular_form(self) -> "LinearSystem":
        """Forward elimination on a copy.

        Each row takes the first column (at or right of the cursor) where it,
        or a row below swapped into its place, has a non-zero coefficient.
        The first usable row is taken, not the largest pivot.
        """
        system = self.copy()
        col = 0
        for row in range(len(system)):
            while col < system.dim:
                if is_zero(system.coefficient(row, col)):
                    if not system._swap_with_row_below_for_nonzero_coefficient(row, col):
                        col += 1
                        continue
                logger.debug("pivot at row %d, column %d", row, col)
                system._clear_coefficients_below(row, col)
                col += 1
                break
        return system

    def compute_rref(self) -> "LinearSystem":
        """Reduced row-echelon form, computed from the triangular form."""
        system = self.compute_triangular_form()
        pivots = system.first_nonzero_index_per_row()
        for row in reversed(range(len(system))):
            col = pivots[row]
            if col is None:
                continue
            system.scale_row(1.0 / system.coefficient(row, col), row)
            system._clear_coefficients_above(row, col)
        return system

    # ── Classification ───────────────────────────────────────────────────

    def _has_contradictory_equation(self) -> bool:
        for row in self._rows:
            if row.base_point is None and not is_zero(row.constant_term):
                return True
        return False

    def _has_too_few_pivots(self) -> bool:
        pivots = self.first_nonzero_index_per_row()
        return sum(1 for p in pivots if p is not None) < self._dim

    def compute_solution(self) -> Solution:
        """Classify the system; contradictions win over free variables."""
        rref = self.compute_rref()

        if rref._has_contradictory_equation():
            logger.info("System of %d equations in %d unknowns: no solution",
                        len(self), self._dim)
            return NoSolution()

        if rref._has_too_few_pivots():
            logger.info("System of %d equations in %d unknowns: infinitely many solutions",
                        len(self), self._dim)
            return InfiniteSolutions()

        point = Vector(rref[i].constant_term for i in range(self._dim))
        logger.info("System of %d equations in %d unknowns: unique solution %s",
                    len(self), self._dim, point)
        return UniqueSolution(point)


def linear_system(equations: Sequence[Equation], dim: Optional[int] = None) -> LinearSystem:
    return LinearSystem(equations, dim=dim)
