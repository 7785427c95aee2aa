"""
Error taxonomy.

All errors are local and recoverable: a failing operation is aborted
and previously cached state remains valid.
"""


class CrystviewError(ValueError):
    """Base class of all crystview errors."""


class InvalidCellError(CrystviewError):
    """Lattice parameters do not describe a physically valid cell."""


class SingularMatrixError(CrystviewError):
    """Matrix has zero determinant and cannot be inverted."""


class DegenerateVectorError(CrystviewError):
    """Vector has (near) zero length."""


class ParallelAxesError(CrystviewError):
    """No up vector that is not parallel to the projection vector was found."""


class NoIntegerRepresentationError(CrystviewError):
    """
    No small-integer representation exists within the searched range.

    This is an expected outcome; callers fall back to displaying floats.
    """
