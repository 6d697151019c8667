"""
Tests for channel pruning and input validation.
"""

import numpy as np
import pandas as pd
import pytest

from arsurrogates.exceptions import DegenerateInputError
from arsurrogates.preprocessing import (
    find_active_channels,
    remove_zero_channels,
    check_time_course,
)


class TestActiveChannels:
    """Test detection of all-zero channels."""

    def test_zero_channel_is_dropped(self, time_course_with_zero_channel):
        active = find_active_channels(time_course_with_zero_channel)
        np.testing.assert_array_equal(active, [0, 2, 3])

    def test_zero_mean_channel_is_kept(self):
        """A channel summing to zero is not the same as an empty one."""
        x = np.array([[1.0, 0.0],
                      [-1.0, 0.0],
                      [2.0, 0.0],
                      [-2.0, 0.0]])
        np.testing.assert_array_equal(find_active_channels(x), [0])

    def test_dataframe_input(self, roi_dataframe):
        active = find_active_channels(roi_dataframe)
        assert list(roi_dataframe.columns[active]) == ['roi_1', 'roi_2', 'roi_3', 'roi_4']

    def test_one_dimensional_input_rejected(self):
        with pytest.raises(DegenerateInputError, match="2-D"):
            find_active_channels(np.ones(10))


class TestRemoveZeroChannels:
    """Test the transposed, pruned series."""

    def test_shape_and_orientation(self, time_course_with_zero_channel):
        ts, active = remove_zero_channels(time_course_with_zero_channel)

        assert ts.shape == (3, 100)
        np.testing.assert_array_equal(ts, time_course_with_zero_channel[:, active].T)

    def test_input_not_modified(self, time_course_with_zero_channel):
        original = time_course_with_zero_channel.copy()
        ts, _ = remove_zero_channels(time_course_with_zero_channel)
        ts[:] = 0.0
        np.testing.assert_array_equal(time_course_with_zero_channel, original)

    def test_all_zero_raises(self):
        with pytest.raises(DegenerateInputError, match="identically zero"):
            remove_zero_channels(np.zeros((50, 4)))


class TestCheckTimeCourse:
    """Test precondition checks before fitting."""

    def test_valid_input_passes(self, ar1_time_course):
        x = check_time_course(ar1_time_course, order=2)
        assert x.dtype == float
        assert x.shape == ar1_time_course.shape

    def test_dataframe_converted(self, roi_dataframe):
        x = check_time_course(roi_dataframe, order=1)
        assert isinstance(x, np.ndarray)
        assert x.shape == (200, 5)

    @pytest.mark.parametrize("order", [10, 11])
    def test_too_few_timepoints(self, order):
        x = np.random.default_rng(0).standard_normal((10, 2))
        with pytest.raises(DegenerateInputError, match="more timepoints"):
            check_time_course(x, order)

    def test_nan_rejected(self, ar1_time_course):
        x = ar1_time_course.copy()
        x[5, 1] = np.nan
        with pytest.raises(DegenerateInputError, match="NaN"):
            check_time_course(x, 1)

    def test_all_zero_rejected(self):
        with pytest.raises(DegenerateInputError):
            check_time_course(pd.DataFrame(np.zeros((20, 3))), 1)

    def test_degenerate_error_is_value_error(self):
        with pytest.raises(ValueError):
            check_time_course(np.zeros((20, 3)), 1)
