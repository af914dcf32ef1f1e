"""
hyperplanes — affine hyperplanes and linear systems solved by Gaussian elimination.
"""

from hyperplanes.config import get_settings, load_settings
from hyperplanes.equation import Equation, equation
from hyperplanes.errors import (
    DimensionMismatchError, HyperplanesError, NoNonzeroElementsError, ZeroVectorError,
)
from hyperplanes.linear_system import (
    InfiniteSolutions, LinearSystem, NoSolution, Solution, UniqueSolution, linear_system,
)
from hyperplanes.logging_config import setup_logging
from hyperplanes.matrix import Matrix, identity, matrix
from hyperplanes.parser import parse_equation, parse_system
from hyperplanes.rounding import round_factory
from hyperplanes.tolerance import eq, first_nonzero_index, is_zero, ne, to_deg, to_rad
from hyperplanes.vector import Projection, Vector, vector

__all__ = [
    "DimensionMismatchError", "Equation", "HyperplanesError", "InfiniteSolutions",
    "LinearSystem", "Matrix", "NoNonzeroElementsError", "NoSolution", "Projection",
    "Solution", "UniqueSolution", "Vector", "ZeroVectorError",
    "eq", "equation", "first_nonzero_index", "get_settings", "identity", "is_zero",
    "linear_system", "load_settings", "matrix", "ne", "parse_equation",
    "parse_system", "round_factory", "setup_logging", "to_deg", "to_rad", "vector",
]
