"""
Synthetic VAR time courses with known ground truth.

Used to validate that AR surrogates reproduce the lag structure and
noise covariance of the process that generated the data.
"""

import numpy as np
import pandas as pd
from typing import Optional

from ..surrogates.parameters import SeedLike


def make_var_process(n: int,
                     coefs: np.ndarray,
                     intercept: Optional[np.ndarray] = None,
                     noise_cov: Optional[np.ndarray] = None,
                     burn_in: int = 100,
                     seed: SeedLike = None) -> np.ndarray:
    """
    Simulate a vector autoregressive process.

    Parameters
    ----------
    n : int
        Number of time points returned
    coefs : np.ndarray, shape (p, K, K)
        Lag coefficient matrices; ``coefs[j - 1]`` multiplies x[t - j]
    intercept : np.ndarray or None, shape (K,)
        Constant term (zeros if None)
    noise_cov : np.ndarray or None, shape (K, K)
        Innovation covariance (identity if None)
    burn_in : int, default 100
        Initial samples discarded so the output starts near stationarity
    seed : None, int, SeedSequence or Generator
        Random seed for reproducibility

    Returns
    -------
    np.ndarray, shape (n, K)
        Simulated time course
    """
    rng = np.random.default_rng(seed)
    coefs = np.asarray(coefs, dtype=float)
    p, k, _ = coefs.shape

    intercept = np.zeros(k) if intercept is None else np.asarray(intercept, dtype=float)
    noise_cov = np.eye(k) if noise_cov is None else np.asarray(noise_cov, dtype=float)

    total = n + burn_in + p
    eps = rng.multivariate_normal(np.zeros(k), noise_cov, size=total)

    x = np.zeros((total, k))
    for t in range(p, total):
        x[t] = intercept + eps[t]
        for j in range(1, p + 1):
            x[t] += coefs[j - 1] @ x[t - j]

    return x[-n:]


def make_ar1_time_course(n: int = 100,
                         n_channels: int = 3,
                         phi: float = 0.5,
                         noise_cov: Optional[np.ndarray] = None,
                         seed: SeedLike = None) -> np.ndarray:
    """
    AR(1) time course with A1 = phi * I and zero intercept.

    Parameters
    ----------
    n : int, default 100
        Number of time points
    n_channels : int, default 3
        Number of channels
    phi : float, default 0.5
        Diagonal autoregressive coefficient
    noise_cov : np.ndarray or None
        Innovation covariance. Default has unit variances and 0.3
        correlation between neighbouring channels.
    seed : None, int, SeedSequence or Generator
        Random seed for reproducibility

    Returns
    -------
    np.ndarray, shape (n, n_channels)
    """
    if noise_cov is None:
        noise_cov = np.eye(n_channels)
        for i in range(n_channels - 1):
            noise_cov[i, i + 1] = noise_cov[i + 1, i] = 0.3

    coefs = (phi * np.eye(n_channels))[np.newaxis]
    return make_var_process(n, coefs, noise_cov=noise_cov, seed=seed)


def make_test_dataframe(n: int = 200,
                        seed: SeedLike = None) -> pd.DataFrame:
    """
    ROI-style dataframe for surrogate and connectivity demos.

    Columns:
    - roi_1, roi_2: coupled AR(1) pair (roi_1 drives roi_2)
    - roi_3: independent AR(1)
    - roi_4: skewed (non-gaussian) AR(1) driven by exponential noise
    - roi_empty: all zeros (e.g. ROI outside the field of view)

    Parameters
    ----------
    n : int, default 200
        Number of time points
    seed : None, int, SeedSequence or Generator
        Random seed for reproducibility

    Returns
    -------
    pd.DataFrame
    """
    rng = np.random.default_rng(seed)

    coefs = np.array([[[0.6, 0.0, 0.0],
                       [0.3, 0.5, 0.0],
                       [0.0, 0.0, 0.4]]])
    gaussian = make_var_process(n, coefs, seed=rng)

    skewed = np.zeros(n + 100)
    innovations = rng.exponential(1.0, size=n + 100) - 1.0
    for t in range(1, n + 100):
        skewed[t] = 0.5 * skewed[t - 1] + innovations[t]

    return pd.DataFrame({
        'roi_1': gaussian[:, 0],
        'roi_2': gaussian[:, 1],
        'roi_3': gaussian[:, 2],
        'roi_4': skewed[-n:],
        'roi_empty': np.zeros(n),
    })
