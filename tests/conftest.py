"""
Shared fixtures for the arsurrogates test suite.
"""
import numpy as np
import pytest

from arsurrogates.testdata import make_ar1_time_course, make_test_dataframe


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def ar1_time_course():
    """100 x 3 AR(1) time course with A1 = 0.5 I."""
    return make_ar1_time_course(n=100, n_channels=3, phi=0.5, seed=0)


@pytest.fixture
def time_course_with_zero_channel(ar1_time_course):
    """AR(1) time course with an all-zero channel inserted at column 1."""
    return np.insert(ar1_time_course, 1, 0.0, axis=1)


@pytest.fixture
def roi_dataframe():
    """ROI dataframe with coupled, independent, skewed and empty channels."""
    return make_test_dataframe(n=200, seed=7)
