"""
Tolerance-based float comparisons.

Every zero / equality test in the package goes through these helpers rather
than ``==``. The default threshold comes from the ``tolerance`` setting
(1e-10 unless configured) and can be overridden per call.
"""

import math
from typing import Iterable, Optional

from hyperplanes.config import get_settings
from hyperplanes.errors import NoNonzeroElementsError

NO_NONZERO_ELEMENTS_FOUND = "No nonzero elements found."


def default_tolerance() -> float:
    return get_settings()["tolerance"]


def is_zero(value: float, tolerance: Optional[float] = None) -> bool:
    """True when ``|value|`` is strictly below *tolerance*."""
    if tolerance is None:
        tolerance = default_tolerance()
    return abs(value) < tolerance


def eq(a: float, b: float, tolerance: Optional[float] = None) -> bool:
    return is_zero(a - b, tolerance)


def ne(a: float, b: float, tolerance: Optional[float] = None) -> bool:
    return not eq(a, b, tolerance)


def first_nonzero_index(values: Iterable[float],
                        tolerance: Optional[float] = None) -> int:
    """Return the index of the first element that is not zero.

    Raises NoNonzeroElementsError when all elements are zero within
    *tolerance* (or *values* is empty).
    """
    for index, value in enumerate(values):
        if not is_zero(value, tolerance):
            return index
    raise NoNonzeroElementsError(NO_NONZERO_ELEMENTS_FOUND)


def to_rad(deg: float) -> float:
    return deg * math.pi / 180.0


def to_deg(rad: float) -> float:
    return rad * 180.0 / math.pi
