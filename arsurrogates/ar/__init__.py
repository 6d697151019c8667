"""
Multivariate autoregressive model estimation.

This module fits AR(p) models by multivariate least squares and exposes
the fitted intercept, lag coefficients and residuals used to drive
surrogate generation.
"""

from .model import ARModel

from .fitting import (
    ar_mls,
    coefficients_from_matrix,
    fit_ar_model,
)

__all__ = [
    'ARModel',
    'ar_mls',
    'coefficients_from_matrix',
    'fit_ar_model',
]
