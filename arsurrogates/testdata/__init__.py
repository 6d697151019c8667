"""
Test data generation for AR surrogate validation and demonstration.

This module provides synthetic VAR time courses with known coefficients
and noise covariance.
"""

from .generators import (
    make_var_process,
    make_ar1_time_course,
    make_test_dataframe,
)

__all__ = [
    'make_var_process',
    'make_ar1_time_course',
    'make_test_dataframe',
]
