"""
Reads linear equations written as text.

Parses single equations (e.g. ``"2x + 3y = 7"`` or ``"x_0 - 2x_2 = 2"``) and
systems separated by ``,``, ``;`` or newlines (e.g. ``"x + y = 10, x - y = 2"``)
into ``Equation`` / ``LinearSystem`` objects. SymPy is only used to expand
each side and read the coefficients off; nothing is solved symbolically.
"""

import logging
import re
from typing import List, Optional, Sequence

from sympy import Poly, expand, symbols
from sympy.polys.polyerrors import PolynomialError
from sympy.parsing.sympy_parser import (
    parse_expr, standard_transformations, implicit_multiplication_application,
    convert_xor, rationalize,
)

from hyperplanes.equation import Equation
from hyperplanes.linear_system import LinearSystem

logger = logging.getLogger(__name__)

TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication_application,
    convert_xor,
    rationalize,  # "12.5" -> Rational(25, 2), so coefficients stay exact until float()
)

# A variable is one letter, optionally indexed: x, y, x_0, x_12.
_VAR_PATTERN = re.compile(r"[A-Za-z](?:_\d+)?")
_VAR_RUN = re.compile(r"(?:[A-Za-z](?:_\d+)?)+")
# A number literal, exponent included (2, 0.5, .5, 2e5, 1.5E-3); digits of x_12 are not one.
_NUMBER = re.compile(r"(?<![A-Za-z_\d.])(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_ALLOWED_CHARS = set("abcdefghijklmnopqrstuvwxyz"
                     "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
                     "0123456789"
                     " \t_+-*/^=().")
_SYSTEM_SEPARATORS = re.compile(r"\s*[;,\n]\s*")


def _validate_characters(text: str) -> None:
    bad = sorted({ch for ch in text if ch not in _ALLOWED_CHARS})
    if bad:
        raise ValueError(
            f"Invalid character(s): {' '.join(bad)}\n"
            f"Only letters, numbers, '_' and math symbols "
            f"(+ - * / ^ = ( ) .) are allowed."
        )


def _variable_names(text: str) -> set:
    return set(_VAR_PATTERN.findall(_NUMBER.sub(" ", text)))


def _variable_key(name: str):
    letter, _, index = name.partition("_")
    return (letter, int(index) if index else -1)


def detect_variables(text: str) -> List[str]:
    """Return the variable names found in *text*, ordered by letter then index.

    Runs of letters such as ``xy`` count as the product of their variables,
    so ``xy`` contributes both ``x`` and ``y``.
    """
    names = _variable_names(text)
    if not names:
        raise ValueError("No variable found. Include a letter like x, y, or x_0.")
    return sorted(names, key=_variable_key)


def _expand_implicit_vars(s: str) -> str:
    """Write runs of adjacent variables as explicit products (``xy`` -> ``x*y``)."""
    return _VAR_RUN.sub(lambda m: "*".join(_VAR_PATTERN.findall(m.group(0))), s)


def _parse_side(expr_str: str, local: dict):
    s = _expand_implicit_vars(expr_str.strip())
    try:
        return parse_expr(s, local_dict=local, transformations=TRANSFORMATIONS)
    except Exception as e:
        raise ValueError(f"Could not parse expression: '{expr_str}'. Error: {e}")


def _split_sides(text: str):
    if "=" not in text:
        raise ValueError(f"Equation must contain '='. Example: 2x + 3y = 7. Problem: {text}")
    parts = text.split("=")
    if len(parts) != 2:
        raise ValueError(f"Equation must contain exactly one '=' sign. Problem: {text}")
    lhs, rhs = parts[0].strip(), parts[1].strip()
    if not lhs or not rhs:
        raise ValueError("Both sides of the equation must have expressions.")
    return lhs, rhs


def parse_equation(text: str, variables: Optional[Sequence[str]] = None) -> Equation:
    """Parse one linear equation into an ``Equation``.

    *variables* fixes the order (and thus the dimension) of the normal
    vector; when omitted, the variables found in *text* are used.
    Raises ValueError for malformed or non-linear input.
    """
    _validate_characters(text)
    lhs_str, rhs_str = _split_sides(text)

    if variables is None:
        variables = detect_variables(text)
    else:
        found = _variable_names(text)
        variables = list(variables)
        if not variables:
            raise ValueError("At least one variable is required.")
        for name in variables:
            if not _VAR_PATTERN.fullmatch(name):
                raise ValueError(f"Invalid variable name: '{name}'")
        unknown = sorted(found - set(variables), key=_variable_key)
        if unknown:
            raise ValueError(f"Unexpected variable(s) {', '.join(unknown)} in '{text}'")

    var_symbols = [symbols(name) for name in variables]
    local = {sym.name: sym for sym in var_symbols}

    combined = expand(_parse_side(lhs_str, local) - _parse_side(rhs_str, local))
    stray = combined.free_symbols - set(var_symbols)
    if stray:
        names = ", ".join(sorted(str(s) for s in stray))
        raise ValueError(f"Unknown symbol(s) {names} in '{text}'")

    try:
        poly = Poly(combined, *var_symbols)
    except PolynomialError:
        raise ValueError(f"Equation is not linear: '{text}'")
    if poly.total_degree() > 1:
        raise ValueError(
            f"Equation is not linear (degree {poly.total_degree()}): '{text}'")

    coefficients = [float(poly.coeff_monomial(sym)) for sym in var_symbols]
    constant = -float(poly.coeff_monomial(1))
    logger.debug("parsed '%s' as %s = %s", text, coefficients, constant)
    return Equation(coefficients, constant)


def parse_system(text: str, variables: Optional[Sequence[str]] = None) -> LinearSystem:
    """Parse equations separated by ``,``, ``;`` or newlines into a ``LinearSystem``.

    Variables are collected across every equation, so all rows share one
    dimension even when an equation omits some variable.
    """
    raw_equations = [eq for eq in _SYSTEM_SEPARATORS.split(text.strip()) if eq]
    if not raw_equations:
        raise ValueError("No equation found.")
    if variables is None:
        variables = detect_variables(" ".join(raw_equations))
    equations = [parse_equation(eq, variables) for eq in raw_equations]
    return LinearSystem(equations, dim=len(variables))
