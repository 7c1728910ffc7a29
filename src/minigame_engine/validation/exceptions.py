"""
Input boundary exceptions.
"""


class InputValidationError(ValueError):
    """Raised when a resolution submission is malformed."""

    pass
