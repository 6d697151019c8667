"""
Channel pruning and input validation for AR surrogate generation.

Channels that are identically zero (e.g. ROIs outside the acquired field of
view) make the AR regression singular, so they are removed before fitting.
"""

import numpy as np
import pandas as pd
from typing import Tuple, Union

from ..exceptions import DegenerateInputError


def _as_array(time_course: Union[pd.DataFrame, np.ndarray]) -> np.ndarray:
    """Convert a DataFrame or array-like time course to a float array."""
    if isinstance(time_course, pd.DataFrame):
        return time_course.to_numpy(dtype=float)
    return np.asarray(time_course, dtype=float)


def find_active_channels(time_course: Union[pd.DataFrame, np.ndarray]) -> np.ndarray:
    """
    Find channels whose time course is not identically zero.

    Parameters
    ----------
    time_course : pd.DataFrame or np.ndarray, shape (T, K)
        Time course with timepoints as rows and channels as columns

    Returns
    -------
    np.ndarray of int
        Indices of the active channels, in increasing order
    """
    x = _as_array(time_course)
    if x.ndim != 2:
        raise DegenerateInputError(
            f"time_course must be 2-D (timepoints x channels), got {x.ndim}-D"
        )
    return np.flatnonzero(np.any(x != 0, axis=0))


def remove_zero_channels(time_course: Union[pd.DataFrame, np.ndarray]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Transpose a time course and drop its all-zero channels.

    Parameters
    ----------
    time_course : pd.DataFrame or np.ndarray, shape (T, K)
        Time course with timepoints as rows and channels as columns

    Returns
    -------
    ts : np.ndarray, shape (K', T)
        Pruned series with channels as rows
    active : np.ndarray of int, shape (K',)
        Indices of the retained channels in the input

    Raises
    ------
    DegenerateInputError
        If every channel is identically zero
    """
    x = _as_array(time_course)
    active = find_active_channels(x)

    if active.size == 0:
        raise DegenerateInputError("All channels are identically zero; nothing to fit")

    return x[:, active].T.copy(), active


def check_time_course(time_course: Union[pd.DataFrame, np.ndarray],
                      order: int) -> np.ndarray:
    """
    Validate a time course for an AR(order) fit.

    Parameters
    ----------
    time_course : pd.DataFrame or np.ndarray, shape (T, K)
        Input time course
    order : int
        AR model order

    Returns
    -------
    np.ndarray, shape (T, K)
        The time course as a float array

    Raises
    ------
    DegenerateInputError
        If the input is not 2-D, contains NaN/inf, has T <= order,
        or has no active channel
    """
    x = _as_array(time_course)

    if x.ndim != 2:
        raise DegenerateInputError(
            f"time_course must be 2-D (timepoints x channels), got {x.ndim}-D"
        )

    if not np.all(np.isfinite(x)):
        raise DegenerateInputError("time_course contains NaN or infinite values")

    n_timepoints = x.shape[0]
    if n_timepoints <= order:
        raise DegenerateInputError(
            f"Need more timepoints than the AR order: T={n_timepoints}, order={order}"
        )

    if find_active_channels(x).size == 0:
        raise DegenerateInputError("All channels are identically zero; nothing to fit")

    return x
