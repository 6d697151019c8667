"""
Preprocessing for AR surrogate generation.

This module validates input time courses and removes degenerate
(all-zero) channels before the AR model is fitted.
"""

from .channels import (
    find_active_channels,
    remove_zero_channels,
    check_time_course,
)

__all__ = [
    'find_active_channels',
    'remove_zero_channels',
    'check_time_course',
]
