"""
arsurrogates: autoregressive surrogate data for functional-connectivity testing.

This package provides tools for:
- Removing degenerate (all-zero) channels from a time course
- Fitting multivariate AR(p) models by least squares
- Generating gaussian and non-gaussian AR surrogates
- Testing static and dynamic functional connectivity against them
"""

__version__ = "0.1.0"

# Import main modules for convenient access
from . import preprocessing
from . import ar
from . import surrogates

from .exceptions import (
    ARSurrogateError,
    ArgumentCountError,
    InvalidDistributionError,
    DegenerateInputError,
)

# Import key functions for direct access
from .preprocessing import (
    find_active_channels,
    remove_zero_channels,
)

from .ar import (
    ARModel,
    ar_mls,
    fit_ar_model,
)

from .surrogates import (
    generate_ar_surrogates,
    get_ar_surrogate,
    test_connectivity,
)

__all__ = [
    'preprocessing',
    'ar',
    'surrogates',
    # Exceptions
    'ARSurrogateError',
    'ArgumentCountError',
    'InvalidDistributionError',
    'DegenerateInputError',
    # Preprocessing
    'find_active_channels',
    'remove_zero_channels',
    # AR
    'ARModel',
    'ar_mls',
    'fit_ar_model',
    # Surrogates
    'generate_ar_surrogates',
    'get_ar_surrogate',
    'test_connectivity',
]
