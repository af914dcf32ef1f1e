"""Rounding to a fixed number of decimals, and compact number formatting."""

import math
from typing import Callable, Optional


def round_factory(precision: int) -> Callable[[float], float]:
    """Return a function rounding a float to *precision* decimals.

    Halves round away from zero (``0.5 -> 1``, ``-0.5 -> -1``), unlike the
    built-in ``round`` which rounds halves to even.
    """
    if precision < 0:
        raise ValueError(f"precision must be >= 0, got {precision}")
    factor = 10.0 ** precision

    def _round(value: float) -> float:
        scaled = value * factor
        rounded = math.floor(abs(scaled) + 0.5)
        return math.copysign(rounded, scaled) / factor

    return _round


def fmt_num(value: float, precision: Optional[int] = None,
            max_decimals: int = 10) -> str:
    """Format a float into a clean decimal string.

    - With *precision*, always print exactly that many decimals (``2.52``).
    - Otherwise strip trailing zeros, keep up to *max_decimals* digits and
      print integral values without a decimal point (``7`` not ``7.0``).
    """
    if precision is not None:
        return f"{value:.{precision}f}"
    if abs(value - round(value)) < 1e-12:
        return str(int(round(value)))
    return f"{value:.{max_decimals}f}".rstrip("0").rstrip(".")
