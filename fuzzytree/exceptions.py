"""
Exception types raised by fuzzytree.
"""


class FuzzyTreeError(Exception):
    """Base class for all fuzzytree errors."""


class InvalidArgumentError(FuzzyTreeError, ValueError):
    """Raised when a caller passes an unusable argument.

    Covers a missing distance function, ``None`` items or query values and
    negative search radii. Always raised before the tree is touched.
    """


class InvariantViolationError(FuzzyTreeError, RuntimeError):
    """Raised when an internal invariant no longer holds.

    Examples are a phonetic symbol without a nibble mapping or an edge
    label that no longer matches the distance between its endpoints.
    """
