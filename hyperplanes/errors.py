"""Exception types raised by hyperplanes."""


class HyperplanesError(Exception):
    """Base class for every error raised by this package."""


class ZeroVectorError(HyperplanesError, ValueError):
    """A direction was requested from the zero vector (normalize, angle, project)."""


class NoNonzeroElementsError(HyperplanesError, ValueError):
    """Every element of a scanned sequence is zero within tolerance."""


class DimensionMismatchError(HyperplanesError, ValueError):
    """Operands (or the rows of a system) do not share one dimension."""
