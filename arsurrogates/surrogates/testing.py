"""
Functional-connectivity significance testing against AR surrogates.

Static FC (Pearson correlation between channels) and dynamic FC
variability (standard deviation of sliding-window correlations) are
compared edge by edge with their null distribution over AR surrogates.
"""

import numpy as np
import pandas as pd
from typing import Literal, Optional, Tuple, Union

from ..preprocessing import remove_zero_channels
from .generators import generate_ar_surrogates
from .parameters import SeedLike


def functional_connectivity(time_course: np.ndarray) -> np.ndarray:
    """
    Static functional connectivity.

    Parameters
    ----------
    time_course : np.ndarray, shape (T, K)
        Time course with channels as columns

    Returns
    -------
    np.ndarray, shape (K, K)
        Pearson correlation matrix
    """
    x = np.asarray(time_course, dtype=float)
    return np.atleast_2d(np.corrcoef(x, rowvar=False))


def sliding_window_connectivity(time_course: np.ndarray,
                                window: int,
                                step: int = 1) -> np.ndarray:
    """
    Sliding-window functional connectivity.

    Parameters
    ----------
    time_course : np.ndarray, shape (T, K)
        Time course with channels as columns
    window : int
        Window length in timepoints (at least 2, at most T)
    step : int, default 1
        Shift between consecutive windows

    Returns
    -------
    np.ndarray, shape (n_windows, K, K)
        One correlation matrix per window
    """
    x = np.asarray(time_course, dtype=float)
    n_timepoints = x.shape[0]

    if window < 2 or window > n_timepoints:
        raise ValueError(f"window must be between 2 and T={n_timepoints}, got {window}")
    if step < 1:
        raise ValueError(f"step must be a positive integer, got {step}")

    starts = range(0, n_timepoints - window + 1, step)
    return np.stack([functional_connectivity(x[s:s + window]) for s in starts])


def fc_variability(time_course: np.ndarray,
                   window: int,
                   step: int = 1) -> np.ndarray:
    """
    Temporal variability of functional connectivity.

    Returns
    -------
    np.ndarray, shape (K, K)
        Standard deviation over windows of the sliding-window correlations
    """
    return sliding_window_connectivity(time_course, window, step).std(axis=0)


def _connectivity_statistic(time_course: np.ndarray,
                            statistic: str,
                            window: Optional[int],
                            step: int) -> np.ndarray:
    if statistic == "static":
        return functional_connectivity(time_course)
    if statistic == "variability":
        if window is None:
            raise ValueError("window is required for statistic='variability'")
        return fc_variability(time_course, window, step)
    raise ValueError(f"Unknown statistic: {statistic}. Must be 'static' or 'variability'")


def surrogate_connectivity(surrogates: np.ndarray,
                           statistic: Literal["static", "variability"] = "static",
                           window: Optional[int] = None,
                           step: int = 1) -> np.ndarray:
    """
    Connectivity statistic of every surrogate.

    Parameters
    ----------
    surrogates : np.ndarray, shape (T, K, n_surr)
        Output of :func:`generate_ar_surrogates`
    statistic : {'static', 'variability'}, default 'static'
        - 'static': Pearson correlation matrix
        - 'variability': std of sliding-window correlations
    window : int or None
        Window length, required for 'variability'
    step : int, default 1
        Window shift

    Returns
    -------
    np.ndarray, shape (n_surr, K, K)
        Null distribution of the statistic
    """
    surrogates = np.asarray(surrogates, dtype=float)
    if surrogates.ndim != 3:
        raise ValueError("surrogates must be a 3D array of shape (T, K, n_surr)")

    return np.stack([
        _connectivity_statistic(surrogates[:, :, u], statistic, window, step)
        for u in range(surrogates.shape[2])
    ])


def empirical_p(observed: Union[float, np.ndarray],
                null: np.ndarray,
                tail: Literal["greater", "less", "two-sided"] = "greater") -> Union[float, np.ndarray]:
    """
    Empirical p-value(s) of an observed statistic against a null distribution.

    Parameters
    ----------
    observed : float or np.ndarray
        Observed statistic (scalar, or one value per edge)
    null : np.ndarray, shape (n_surr,) or (n_surr, *observed.shape)
        Surrogate statistics, surrogates along the first axis
    tail : {'greater', 'less', 'two-sided'}, default 'greater'
        - 'greater': observed larger than the null
        - 'less': observed smaller than the null
        - 'two-sided': distance from the null median

    Returns
    -------
    float or np.ndarray
        p = (k + 1) / (n + 1), with k the number of surrogates at least as
        extreme as the observation
    """
    observed = np.asarray(observed, dtype=float)
    null = np.asarray(null, dtype=float)
    n = null.shape[0]

    if tail == "greater":
        k = np.sum(null >= observed, axis=0)
    elif tail == "less":
        k = np.sum(null <= observed, axis=0)
    elif tail == "two-sided":
        med = np.median(null, axis=0)
        k = np.sum(np.abs(null - med) >= np.abs(observed - med), axis=0)
    else:
        raise ValueError("tail must be 'greater', 'less', or 'two-sided'")

    p = (k + 1) / (n + 1)
    return float(p) if np.ndim(p) == 0 else p


def fdr_correction(p_values: np.ndarray,
                   alpha: float = 0.05,
                   method: Literal["bh", "by"] = "bh") -> Tuple[np.ndarray, float]:
    """
    False Discovery Rate correction for multiple testing.

    Parameters
    ----------
    p_values : np.ndarray
        Array of p-values
    alpha : float, default 0.05
        Target false discovery rate
    method : {'bh', 'by'}, default 'bh'
        - 'bh': Benjamini-Hochberg
        - 'by': Benjamini-Yekutieli (valid under arbitrary dependence)

    Returns
    -------
    significant : np.ndarray of bool
        Rejections, in the order of ``p_values``
    threshold : float
        Largest rejected p-value threshold (0 if nothing is rejected)

    References
    ----------
    Benjamini, Y., & Hochberg, Y. (1995). Controlling the false discovery rate:
    a practical and powerful approach to multiple testing.
    Journal of the Royal Statistical Society, Series B, 57(1), 289-300.
    """
    p_values = np.asarray(p_values, dtype=float)
    n = p_values.size

    if method == "bh":
        thresholds = (np.arange(1, n + 1) / n) * alpha
    elif method == "by":
        c = np.sum(1.0 / np.arange(1, n + 1))
        thresholds = (np.arange(1, n + 1) / (n * c)) * alpha
    else:
        raise ValueError("method must be 'bh' or 'by'")

    order = np.argsort(p_values)
    below = p_values[order] <= thresholds
    significant = np.zeros(n, dtype=bool)

    if not np.any(below):
        return significant, 0.0

    last = np.flatnonzero(below)[-1]
    significant[order[:last + 1]] = True
    return significant, float(thresholds[last])


def test_connectivity(time_course: Union[pd.DataFrame, np.ndarray],
                      n_surr: int,
                      order: int,
                      distribution: Literal["gaussian", "nongaussian"] = "gaussian",
                      statistic: Literal["static", "variability"] = "static",
                      window: Optional[int] = None,
                      step: int = 1,
                      tail: Literal["greater", "less", "two-sided"] = "greater",
                      alpha: float = 0.05,
                      correction: Optional[Literal["fdr", "bonferroni"]] = "fdr",
                      seed: SeedLike = None,
                      n_jobs: int = 1,
                      verbose: bool = False) -> dict:
    """
    Test functional connectivity against an AR null model.

    Edges whose observed statistic is more extreme than expected from
    the linear AR structure alone are flagged as significant.

    Parameters
    ----------
    time_course : pd.DataFrame or np.ndarray, shape (T, K)
        Original time course
    n_surr : int
        Number of surrogates
    order : int
        AR model order
    distribution : {'gaussian', 'nongaussian'}, default 'gaussian'
        Noise model of the surrogates
    statistic : {'static', 'variability'}, default 'static'
        Connectivity statistic to test
    window, step : int
        Sliding-window settings for 'variability'
    tail : {'greater', 'less', 'two-sided'}, default 'greater'
        Test direction
    alpha : float, default 0.05
        Significance level
    correction : {'fdr', 'bonferroni'} or None, default 'fdr'
        Multiple-comparison correction over the upper-triangle edges
    seed : None, int, SeedSequence or Generator
        Random seed for reproducibility
    n_jobs : int, default 1
        Worker processes for surrogate generation
    verbose : bool, default False
        Print progress

    Returns
    -------
    dict
        'observed' (K', K'), 'null' (n_surr, K', K'), 'p_values' (K', K'),
        'significant' (K', K' bool), 'threshold', 'channels', 'alpha',
        'n_surrogates', 'statistic'
    """
    ts, active = remove_zero_channels(time_course)
    x = ts.T

    observed = _connectivity_statistic(x, statistic, window, step)

    surr = generate_ar_surrogates(x, n_surr, order, distribution,
                                  seed=seed, n_jobs=n_jobs, verbose=verbose)
    null = surrogate_connectivity(surr, statistic, window, step)

    p_values = empirical_p(observed, null, tail=tail)
    p_values = np.atleast_2d(p_values)

    k = x.shape[1]
    iu = np.triu_indices(k, 1)
    edge_p = p_values[iu]

    if correction == "fdr":
        edge_sig, threshold = fdr_correction(edge_p, alpha)
    elif correction == "bonferroni":
        threshold = alpha / max(edge_p.size, 1)
        edge_sig = edge_p < threshold
    elif correction is None:
        threshold = alpha
        edge_sig = edge_p < alpha
    else:
        raise ValueError("correction must be 'fdr', 'bonferroni' or None")

    significant = np.zeros((k, k), dtype=bool)
    significant[iu] = edge_sig
    significant = significant | significant.T

    return {
        'observed': observed,
        'null': null,
        'p_values': p_values,
        'significant': significant,
        'threshold': threshold,
        'channels': active,
        'alpha': alpha,
        'n_surrogates': n_surr,
        'statistic': statistic,
    }


def summarize_connectivity_test(result: dict,
                                channel_names: Optional[list] = None) -> pd.DataFrame:
    """
    One-row-per-edge summary of :func:`test_connectivity` results.

    Parameters
    ----------
    result : dict
        Output of :func:`test_connectivity`
    channel_names : list of str or None
        Names of the original input channels; indices are used if None

    Returns
    -------
    pd.DataFrame
        Columns: source, target, observed, surr_mean, surr_std, surr_95p,
        p_value, significant
    """
    channels = result['channels']
    if channel_names is None:
        labels = [int(c) for c in channels]
    else:
        labels = [channel_names[c] for c in channels]

    null = result['null']
    rows = []
    for i, j in zip(*np.triu_indices(len(channels), 1)):
        rows.append({
            'source': labels[i],
            'target': labels[j],
            'observed': result['observed'][i, j],
            'surr_mean': np.mean(null[:, i, j]),
            'surr_std': np.std(null[:, i, j]),
            'surr_95p': np.percentile(null[:, i, j], 95),
            'p_value': result['p_values'][i, j],
            'significant': bool(result['significant'][i, j]),
        })

    return pd.DataFrame(rows, columns=['source', 'target', 'observed', 'surr_mean',
                                       'surr_std', 'surr_95p', 'p_value', 'significant'])
