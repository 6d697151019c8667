"""
Container for a fitted multivariate autoregressive (AR) model.
"""

import numpy as np
from dataclasses import dataclass


@dataclass
class ARModel:
    """
    Fitted multivariate AR(p) model.

    The model reads

        x[t] = w + A[1] x[t-1] + ... + A[p] x[t-p] + e[t]

    Attributes
    ----------
    intercept : np.ndarray, shape (K,)
        Constant term w
    coefs : np.ndarray, shape (p, K, K)
        Lag coefficient matrices; ``coefs[j - 1]`` is A[j]
    residuals : np.ndarray, shape (T - p, K)
        One-step-ahead residuals, one row per fitted timepoint
    """
    intercept: np.ndarray
    coefs: np.ndarray
    residuals: np.ndarray

    def __post_init__(self):
        self.intercept = np.asarray(self.intercept, dtype=float)
        self.coefs = np.asarray(self.coefs, dtype=float)
        self.residuals = np.asarray(self.residuals, dtype=float)

        if self.coefs.ndim != 3 or self.coefs.shape[1] != self.coefs.shape[2]:
            raise ValueError(f"coefs must have shape (p, K, K), got {self.coefs.shape}")

        k = self.coefs.shape[1]
        if self.intercept.shape != (k,):
            raise ValueError(f"intercept must have shape ({k},), got {self.intercept.shape}")
        if self.residuals.ndim != 2 or self.residuals.shape[1] != k:
            raise ValueError(f"residuals must have shape (n, {k}), got {self.residuals.shape}")

    @property
    def order(self) -> int:
        return self.coefs.shape[0]

    @property
    def n_channels(self) -> int:
        return self.coefs.shape[1]

    @property
    def n_residuals(self) -> int:
        return self.residuals.shape[0]

    def noise_mean(self) -> np.ndarray:
        """Per-channel mean of the residuals."""
        return self.residuals.mean(axis=0)

    def noise_cov(self) -> np.ndarray:
        """Residual covariance (ddof=1) with channels as variables, shape (K, K)."""
        return np.atleast_2d(np.cov(self.residuals, rowvar=False))

    def step(self, history: np.ndarray, noise: np.ndarray) -> np.ndarray:
        """
        Advance the recursion by one timepoint.

        Parameters
        ----------
        history : np.ndarray, shape (>= p, K)
            Past samples, most recent last
        noise : np.ndarray, shape (K,)
            Innovation added to the prediction

        Returns
        -------
        np.ndarray, shape (K,)
            w + sum_j A[j] history[-j] + noise
        """
        x_next = self.intercept + noise
        for j in range(1, self.order + 1):
            x_next = x_next + self.coefs[j - 1] @ history[-j]
        return x_next
