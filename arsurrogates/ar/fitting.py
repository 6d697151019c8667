"""
Multivariate least-squares estimation of AR(p) models.

The regression is written in the stacked form Y = B Z + E, with

    Y : (K, T-p)        targets x[p], ..., x[T-1]
    Z : (K*p + 1, T-p)  a row of ones, then x lagged by 1, ..., p
    B : (K, K*p + 1)    [w, A1, A2, ..., Ap]
    E : (K, T-p)        residuals
"""

import warnings
import numpy as np
from typing import Literal, Tuple

from .model import ARModel
from ..exceptions import DegenerateInputError


def is_positive_int(value) -> bool:
    return (isinstance(value, (int, np.integer))
            and not isinstance(value, (bool, np.bool_))
            and value >= 1)


def _check_order(order: int) -> int:
    if not is_positive_int(order):
        raise ValueError(f"order must be a positive integer, got {order!r}")
    return int(order)


def ar_mls(ts: np.ndarray, order: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Fit a multivariate AR model by least squares.

    Parameters
    ----------
    ts : np.ndarray, shape (K, T)
        Time series with channels as rows
    order : int
        Model order p

    Returns
    -------
    Y : np.ndarray, shape (K, T - p)
        Regression targets
    B : np.ndarray, shape (K, K * p + 1)
        Coefficients; column 0 is the intercept, then the p lag blocks
        ordered by increasing lag
    Z : np.ndarray, shape (K * p + 1, T - p)
        Design matrix
    E : np.ndarray, shape (K, T - p)
        Residuals Y - B Z
    """
    p = _check_order(order)
    ts = np.atleast_2d(np.asarray(ts, dtype=float))
    k, n_timepoints = ts.shape
    n_obs = n_timepoints - p

    if n_obs < 1:
        raise DegenerateInputError(
            f"Need more timepoints than the AR order: T={n_timepoints}, order={p}"
        )

    if n_obs < k * p + 1:
        warnings.warn(
            f"AR({p}) fit on {k} channels is underdetermined with only {n_obs} "
            f"observations; residuals will be (near) zero",
            RuntimeWarning,
        )

    Y = ts[:, p:]

    Z = np.ones((k * p + 1, n_obs))
    for j in range(1, p + 1):
        Z[1 + k * (j - 1):1 + k * j, :] = ts[:, p - j:n_timepoints - j]

    # Solve Z' B' = Y' in the least-squares sense
    B = np.linalg.lstsq(Z.T, Y.T, rcond=None)[0].T
    E = Y - B @ Z

    return Y, B, Z, E


def coefficients_from_matrix(B: np.ndarray, order: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split the stacked coefficient matrix into intercept and lag matrices.

    Parameters
    ----------
    B : np.ndarray, shape (K, K * p + 1)
        Coefficient matrix as returned by :func:`ar_mls`
    order : int
        Model order p

    Returns
    -------
    intercept : np.ndarray, shape (K,)
    coefs : np.ndarray, shape (p, K, K)
        ``coefs[j - 1]`` multiplies x[t - j]
    """
    p = _check_order(order)
    B = np.asarray(B, dtype=float)
    k = B.shape[0]

    if B.shape[1] != k * p + 1:
        raise ValueError(
            f"B must have shape ({k}, {k * p + 1}) for order {p}, got {B.shape}"
        )

    intercept = B[:, 0].copy()
    coefs = np.stack([B[:, 1 + k * (j - 1):1 + k * j] for j in range(1, p + 1)])

    return intercept, coefs


def _fit_statsmodels(ts: np.ndarray, order: int) -> ARModel:
    """Fit the same model through statsmodels' VAR with a constant trend."""
    from statsmodels.tsa.api import VAR

    if ts.shape[0] < 2:
        raise ValueError("statsmodels VAR needs at least 2 channels; use method='ols'")

    results = VAR(ts.T).fit(maxlags=order, trend='c')

    # params rows: const, L1.x1..L1.xK, L2.x1.., ...
    intercept, coefs = coefficients_from_matrix(np.asarray(results.params).T, order)
    return ARModel(intercept=intercept, coefs=coefs,
                   residuals=np.asarray(results.resid))


def fit_ar_model(ts: np.ndarray,
                 order: int,
                 method: Literal["ols", "statsmodels"] = "ols") -> ARModel:
    """
    Fit a multivariate AR(p) model to a channels-by-time series.

    Parameters
    ----------
    ts : np.ndarray, shape (K, T)
        Time series with channels as rows (see
        :func:`arsurrogates.preprocessing.remove_zero_channels`)
    order : int
        Model order p, with p < T
    method : {'ols', 'statsmodels'}, default 'ols'
        - 'ols': direct least squares (:func:`ar_mls`)
        - 'statsmodels': ``statsmodels.tsa.api.VAR`` with a constant term;
          gives the same estimates, needs K >= 2

    Returns
    -------
    ARModel
        Intercept, lag coefficients and residuals (channels as columns)
    """
    p = _check_order(order)
    ts = np.atleast_2d(np.asarray(ts, dtype=float))

    if method == "ols":
        _, B, _, E = ar_mls(ts, p)
        intercept, coefs = coefficients_from_matrix(B, p)
        return ARModel(intercept=intercept, coefs=coefs, residuals=E.T)

    if method == "statsmodels":
        if ts.shape[1] <= p:
            raise DegenerateInputError(
                f"Need more timepoints than the AR order: T={ts.shape[1]}, order={p}"
            )
        return _fit_statsmodels(ts, p)

    raise ValueError(f"Unknown fitting method: {method}. Must be 'ols' or 'statsmodels'")
