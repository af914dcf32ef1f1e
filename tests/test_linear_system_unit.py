import numpy as np
import pytest

from hyperplanes.equation import equation
from hyperplanes.errors import DimensionMismatchError
from hyperplanes.linear_system import (
    INF_SOLUTIONS_MSG, NO_SOLUTIONS_MSG, InfiniteSolutions, LinearSystem, NoSolution,
    UniqueSolution, linear_system,
)


def _rows_close(a: LinearSystem, b: LinearSystem) -> bool:
    return np.allclose(a.to_augmented_matrix(), b.to_augmented_matrix(), atol=1e-9)


@pytest.fixture
def four_rows():
    return linear_system([
        equation([1.0, 1.0, 1.0], 1.0),
        equation([0.0, 1.0, 0.0], 2.0),
        equation([1.0, 1.0, -1.0], 3.0),
        equation([1.0, 0.0, -2.0], 2.0),
    ])


@pytest.fixture
def unique_three():
    return linear_system([
        equation([0.0, 1.0, 1.0], 1.0),
        equation([1.0, -1.0, 1.0], 2.0),
        equation([1.0, 2.0, -5.0], 3.0),
    ])


class TestConstruction:
    def test_dimension_is_shared(self, four_rows):
        assert len(four_rows) == 4
        assert four_rows.dim == 3
        assert four_rows.equations[1] == equation([0.0, 1.0, 0.0], 2.0)

    def test_mismatched_dimension_rejected(self):
        with pytest.raises(DimensionMismatchError, match="Equation 2"):
            linear_system([equation([1.0, 1.0], 1.0), equation([1.0], 1.0)])

    def test_empty_system_needs_dim(self):
        with pytest.raises(ValueError):
            linear_system([])
        empty = linear_system([], dim=2)
        assert len(empty) == 0
        assert empty.dim == 2
        assert str(empty) == "No Equation"

    def test_from_matrix(self):
        s = LinearSystem.from_matrix([[1.0, 1.0], [1.0, -1.0]], [10.0, 2.0])
        assert s.dim == 2
        assert s[1] == equation([1.0, -1.0], 2.0)
        np.testing.assert_array_equal(
            s.to_augmented_matrix(), np.array([[1.0, 1.0, 10.0], [1.0, -1.0, 2.0]]))

    def test_from_matrix_shape_checks(self):
        with pytest.raises(DimensionMismatchError):
            LinearSystem.from_matrix([1.0, 2.0], [1.0])
        with pytest.raises(DimensionMismatchError):
            LinearSystem.from_matrix([[1.0, 2.0]], [1.0, 2.0])

    def test_setitem(self, four_rows):
        four_rows[0] = equation([2.0, 2.0, 2.0], 2.0)
        assert four_rows[0].constant_term == 2.0
        with pytest.raises(DimensionMismatchError):
            four_rows[0] = equation([1.0, 1.0], 1.0)

    def test_index_errors(self, four_rows):
        with pytest.raises(IndexError):
            four_rows[4]
        with pytest.raises(IndexError):
            four_rows[-1]
        with pytest.raises(IndexError):
            four_rows.swap_rows(0, 4)
        with pytest.raises(IndexError):
            four_rows.scale_row(2.0, 7)
        with pytest.raises(IndexError):
            four_rows.add_multiple_of_row_to_row(1.0, 5, 0)

    def test_str(self):
        s = linear_system([equation([1.0, 1.0, 1.0], 1.0), equation([0.0, 1.0, 0.0], 2.0)])
        assert str(s) == "Linear System:\nEquation 1: x_0 + x_1 + x_2 = 1\nEquation 2: x_1 = 2\n"


class TestRowOperations:
    def test_primitives_in_sequence(self, four_rows):
        s = four_rows
        p0, p1, p2, p3 = (s[i] for i in range(4))

        s.swap_rows(0, 1)
        assert (s[0], s[1], s[2], s[3]) == (p1, p0, p2, p3)

        s.swap_rows(1, 3)
        assert (s[0], s[1], s[2], s[3]) == (p1, p3, p2, p0)

        s.swap_rows(3, 1)
        assert (s[0], s[1], s[2], s[3]) == (p1, p0, p2, p3)

        s.scale_row(1.0, 0)
        assert s[0] == p1

        s.scale_row(-1.0, 2)
        assert s[2] == equation([-1.0, -1.0, 1.0], -3.0)

        s.scale_row(10.0, 1)
        assert s[1].normal_vector.to_array().tolist() == [10.0, 10.0, 10.0]
        assert s[1].constant_term == 10.0

        s.add_multiple_of_row_to_row(0.0, 0, 1)
        assert s[1].constant_term == 10.0

        s.add_multiple_of_row_to_row(1.0, 0, 1)
        assert s[1].normal_vector.to_array().tolist() == [10.0, 11.0, 10.0]
        assert s[1].constant_term == 12.0

        s.add_multiple_of_row_to_row(-1.0, 1, 0)
        assert s[0].normal_vector.to_array().tolist() == [-10.0, -10.0, -10.0]
        assert s[0].constant_term == -10.0

    def test_swap_same_row_is_noop(self, four_rows):
        before = four_rows.to_augmented_matrix()
        four_rows.swap_rows(2, 2)
        np.testing.assert_array_equal(four_rows.to_augmented_matrix(), before)

    def test_row_operations_preserve_solution(self, unique_three):
        expected = unique_three.compute_solution().point
        unique_three.swap_rows(0, 2)
        unique_three.scale_row(3.0, 1)
        unique_three.add_multiple_of_row_to_row(-2.0, 0, 2)
        point = unique_three.compute_solution().point
        assert list(point) == pytest.approx(list(expected), abs=1e-9)

    def test_first_nonzero_index_per_row(self):
        s = linear_system([
            equation([0.0, 0.0, 4.0], 1.0),
            equation([0.0, 0.0, 0.0], 0.0),
            equation([3.0, 0.0, 0.0], 1.0),
        ])
        assert s.first_nonzero_index_per_row() == [2, None, 0]


class TestTriangularForm:
    def test_already_triangular(self):
        s = linear_system([
            equation([1.0, 1.0, 1.0], 1.0),
            equation([0.0, 1.0, 1.0], 2.0),
        ])
        t = s.compute_triangular_form()
        assert t[0] == s[0]
        assert t[1] == s[1]

    def test_identical_rows_leave_contradiction(self):
        s = linear_system([
            equation([1.0, 1.0, 1.0], 1.0),
            equation([1.0, 1.0, 1.0], 2.0),
        ])
        t = s.compute_triangular_form()
        assert t[0] == equation([1.0, 1.0, 1.0], 1.0)
        assert t[1] == equation([0.0, 0.0, 0.0], 1.0)

    def test_swap_for_pivot(self, unique_three):
        t = unique_three.compute_triangular_form()
        assert t[0] == equation([1.0, -1.0, 1.0], 2.0)
        assert t[1] == equation([0.0, 1.0, 1.0], 1.0)
        assert t[2] == equation([0.0, 0.0, -9.0], -2.0)

    def test_does_not_mutate_receiver(self, unique_three):
        before = unique_three.to_augmented_matrix()
        unique_three.compute_triangular_form()
        unique_three.compute_rref()
        unique_three.compute_solution()
        np.testing.assert_array_equal(unique_three.to_augmented_matrix(), before)

    def test_four_rows(self, four_rows):
        t = four_rows.compute_triangular_form()
        assert t[0] == equation([1.0, 1.0, 1.0], 1.0)
        assert t[1] == equation([0.0, 1.0, 0.0], 2.0)
        assert t[2] == equation([0.0, 0.0, -2.0], 2.0)
        assert t[3] == equation([0.0, 0.0, 0.0], 0.0)


class TestRref:
    def test_two_rows(self):
        s = linear_system([
            equation([1.0, 1.0, 1.0], 1.0),
            equation([0.0, 1.0, 1.0], 2.0),
        ])
        r = s.compute_rref()
        assert r[0] == equation([1.0, 0.0, 0.0], -1.0)
        assert r[1] == s[1]

    def test_contradiction_row_stays(self):
        s = linear_system([
            equation([1.0, 1.0, 1.0], 1.0),
            equation([1.0, 1.0, 1.0], 2.0),
        ])
        r = s.compute_rref()
        assert r[0] == s[0]
        assert r[1] == equation([0.0, 0.0, 0.0], 1.0)

    def test_unique(self, unique_three):
        r = unique_three.compute_rref()
        assert r[0] == equation([1.0, 0.0, 0.0], 23.0 / 9.0)
        assert r[1] == equation([0.0, 1.0, 0.0], 7.0 / 9.0)
        assert r[2] == equation([0.0, 0.0, 1.0], 2.0 / 9.0)

    def test_four_rows(self, four_rows):
        r = four_rows.compute_rref()
        assert r[0] == equation([1.0, 0.0, 0.0], 0.0)
        assert r[1] == equation([0.0, 1.0, 0.0], 2.0)
        assert r[2] == equation([0.0, 0.0, -2.0], 2.0)
        assert list(r[2].normal_vector) == pytest.approx([0.0, 0.0, 1.0])
        assert r[2].constant_term == pytest.approx(-1.0)
        assert r.coefficient(0, 0) == pytest.approx(1.0)
        assert r.coefficient(1, 1) == pytest.approx(1.0)
        assert r[3] == equation([0.0, 0.0, 0.0], 0.0)

    def test_pivots_are_one(self, unique_three):
        r = unique_three.compute_rref()
        for row, col in enumerate(r.first_nonzero_index_per_row()):
            assert r.coefficient(row, col) == pytest.approx(1.0)

    def test_idempotent(self, four_rows, unique_three):
        for s in (four_rows, unique_three):
            once = s.compute_rref()
            assert _rows_close(once.compute_rref(), once)

    def test_triangular_form_preserves_solution(self, unique_three):
        direct = unique_three.compute_solution().point
        via_triangular = unique_three.compute_triangular_form().compute_solution().point
        assert list(via_triangular) == pytest.approx(list(direct), abs=1e-9)


class TestSolution:
    def test_no_solution(self):
        s = linear_system([
            equation([5.862, 1.178, -10.366], -8.15),
            equation([-2.931, -0.589, 5.183], -4.075),
        ])
        solution = s.compute_solution()
        assert solution == NoSolution()
        assert solution.message == NO_SOLUTIONS_MSG

    def test_infinitely_many(self):
        s = linear_system([
            equation([8.631, 5.112, -1.816], -5.113),
            equation([4.315, 11.132, -5.27], -6.775),
            equation([-2.158, 3.01, -1.727], -0.831),
        ])
        solution = s.compute_solution()
        assert isinstance(solution, InfiniteSolutions)
        assert solution.message == INF_SOLUTIONS_MSG

    def test_unique_with_redundant_row(self):
        s = linear_system([
            equation([5.262, 2.739, -9.878], -3.441),
            equation([5.111, 6.358, 7.638], -2.152),
            equation([2.016, -9.924, -1.367], -9.278),
            equation([2.167, -13.543, -18.883], -10.567),
        ])
        solution = s.compute_solution()
        assert isinstance(solution, UniqueSolution)
        assert list(solution.point) == pytest.approx([-1.177, 0.707, -0.083], abs=1e-3)

    def test_unique_exact(self, unique_three):
        solution = unique_three.compute_solution()
        assert list(solution.point) == pytest.approx([23 / 9, 7 / 9, 2 / 9])

    def test_contradiction_wins_over_free_variables(self):
        s = linear_system([
            equation([1.0, 1.0, 1.0], 1.0),
            equation([1.0, 1.0, 1.0], 2.0),
        ])
        assert isinstance(s.compute_solution(), NoSolution)

    def test_fewer_equations_than_unknowns(self):
        s = linear_system([equation([1.0, 2.0, 3.0], 4.0)])
        assert isinstance(s.compute_solution(), InfiniteSolutions)

    def test_empty_system_is_underdetermined(self):
        assert isinstance(linear_system([], dim=2).compute_solution(), InfiniteSolutions)

    def test_tiny_residue_counts_as_zero(self):
        s = linear_system([
            equation([1.0, 1.0], 1.0),
            equation([1.0, 1.0 + 1e-13], 1.0),
        ])
        assert isinstance(s.compute_solution(), InfiniteSolutions)

    @pytest.mark.parametrize("factor", [1e-3, 2.0, -7.5, 1e4])
    def test_scaling_an_equation_keeps_unique_point(self, unique_three, factor):
        expected = unique_three.compute_solution().point
        unique_three.scale_row(factor, 1)
        point = unique_three.compute_solution().point
        assert list(point) == pytest.approx(list(expected), abs=1e-9)

    def test_unique_point_satisfies_every_equation(self, unique_three):
        point = unique_three.compute_solution().point
        for row in unique_three:
            assert row.normal_vector.dot(point) == pytest.approx(row.constant_term)
