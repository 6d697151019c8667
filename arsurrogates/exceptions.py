"""
Exceptions raised by arsurrogates.

Each error also derives from the built-in exception a caller would expect
(TypeError for a bad call, ValueError for bad values), so existing
``except ValueError`` handlers keep working.
"""


class ARSurrogateError(Exception):
    """Base class for all arsurrogates errors."""


class ArgumentCountError(ARSurrogateError, TypeError):
    """Raised when the positional entry point gets fewer than 3 or more than 4 arguments."""


class InvalidDistributionError(ARSurrogateError, ValueError):
    """Raised when the noise distribution is not 'gaussian' or 'nongaussian'."""


class DegenerateInputError(ARSurrogateError, ValueError):
    """
    Raised when a time course cannot support an AR fit.

    This covers inputs with no active (non-zero) channel, too few timepoints
    for the requested order, non-finite values, or the wrong dimensionality.
    """
