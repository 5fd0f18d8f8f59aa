"""
Exception types for ordinal-bloom.
"""


class InvalidParameterError(ValueError):
    """
    Raised when a filter cannot be built from the given parameters.

    This covers a false positive rate outside (0, 1), a capacity below 1, and
    an ordinal filter whose derived hash round count does not fit in its cells.
    No filter state is allocated when this is raised.
    """
