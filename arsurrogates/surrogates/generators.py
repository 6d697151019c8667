"""
Autoregressive surrogate time series generation.

Surrogates keep the linear AR(p) structure of the observed data (lagged
auto- and cross-correlations) and randomize everything else. Each
surrogate is seeded with a random window of the original series and
rolled forward through the fitted AR recursion, driven either by gaussian
noise matched to the residual covariance or by the real residuals in a
permuted order.

Reference: R. Liegeois et al. (2017). Interpreting temporal fluctuations
in resting-state functional connectivity MRI. NeuroImage.
"""

import multiprocessing
import warnings
import numpy as np
import pandas as pd
from typing import Callable, Literal, Optional, Tuple, Union
from tqdm import tqdm

from ..ar import ARModel, fit_ar_model
from ..exceptions import ArgumentCountError, DegenerateInputError
from ..preprocessing import check_time_course, remove_zero_channels
from .parameters import SeedLike, SurrogateParams, check_distribution, spawn_generators


def gaussian_noise(model: ARModel, rng: np.random.Generator) -> np.ndarray:
    """
    Draw a gaussian noise bank matched to the model residuals.

    Parameters
    ----------
    model : ARModel
        Fitted model whose residual mean and covariance are matched
    rng : np.random.Generator
        Random stream

    Returns
    -------
    np.ndarray, shape (T - p, K)
        One multivariate normal draw per residual row
    """
    if model.n_residuals < 2:
        raise DegenerateInputError(
            "Need at least 2 residuals to estimate the noise covariance"
        )

    mean = model.noise_mean()
    cov = model.noise_cov()

    if np.linalg.eigvalsh(cov).min() <= 1e-10 * np.abs(cov).max():
        warnings.warn("Residual covariance is not positive definite; gaussian noise "
                      "will be degenerate along some directions", RuntimeWarning)

    return rng.multivariate_normal(mean, cov, size=model.n_residuals)


def empirical_noise(model: ARModel, rng: np.random.Generator) -> np.ndarray:
    """Return the model residuals themselves as the noise bank."""
    return model.residuals


def get_noise_sampler(distribution: str) -> Callable[[ARModel, np.random.Generator], np.ndarray]:
    """
    Get a noise-bank function by distribution name.

    Parameters
    ----------
    distribution : str
        'gaussian' or 'nongaussian'

    Returns
    -------
    callable
        Function ``(model, rng) -> noise bank of shape (T - p, K)``
    """
    samplers = {
        'gaussian': gaussian_noise,
        'nongaussian': empirical_noise,
    }

    return samplers[check_distribution(distribution)]


def generate_ar_surrogate(ts: np.ndarray,
                          model: ARModel,
                          distribution: Literal["gaussian", "nongaussian"] = "gaussian",
                          rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Generate a single AR surrogate.

    Draws happen in a fixed order: window start, noise bank (gaussian only),
    then the noise injection permutation.

    Parameters
    ----------
    ts : np.ndarray, shape (K, T)
        Pruned original series (channels as rows) the model was fitted on
    model : ARModel
        Fitted AR(p) model
    distribution : {'gaussian', 'nongaussian'}, default 'gaussian'
        - 'gaussian': noise drawn from N(mean(E), cov(E))
        - 'nongaussian': permuted residual rows of E
    rng : np.random.Generator or None
        Random stream; a fresh unseeded one if None

    Returns
    -------
    np.ndarray, shape (T, K)
        Surrogate time course
    """
    if rng is None:
        rng = np.random.default_rng()

    sampler = get_noise_sampler(distribution)

    p = model.order
    k, n_timepoints = ts.shape
    n_obs = n_timepoints - p

    if model.n_channels != k or model.n_residuals != n_obs:
        raise ValueError(
            f"Model (K={model.n_channels}, {model.n_residuals} residuals) does not "
            f"match series of shape {ts.shape} at order {p}"
        )

    start = rng.integers(n_obs)
    surr = np.zeros((n_timepoints, k))
    surr[:p] = ts[:, start:start + p].T

    noise = sampler(model, rng)
    perm = rng.permutation(n_obs)

    for i in range(p, n_timepoints):
        surr[i] = model.step(surr[i - p:i], noise[perm[i - p]])

    return surr


def _surrogate_worker(args):
    """
    Generate one surrogate in a worker process.

    Module level so that multiprocessing can pickle it.
    """
    ts, model, distribution, rng = args
    return generate_ar_surrogate(ts, model, distribution, rng)


def generate_ar_surrogates(time_course: Union[pd.DataFrame, np.ndarray],
                           n_surr: int,
                           order: int,
                           distribution: Literal["gaussian", "nongaussian"] = "gaussian",
                           *,
                           seed: SeedLike = None,
                           n_jobs: int = 1,
                           return_channels: bool = False,
                           verbose: bool = False) -> Union[np.ndarray, Tuple[np.ndarray, np.ndarray]]:
    """
    Generate autoregressive (AR) surrogates of a multivariate time course.

    All-zero channels are dropped, an AR(order) model is fitted to the
    remaining ones, and ``n_surr`` independent surrogates are synthesized
    from it.

    Parameters
    ----------
    time_course : pd.DataFrame or np.ndarray, shape (T, K)
        Original time course, timepoints as rows and channels (e.g. ROIs)
        as columns
    n_surr : int
        Number of surrogates to generate
    order : int
        Order of the AR model, with order < T
    distribution : {'gaussian', 'nongaussian'}, default 'gaussian'
        - 'gaussian': noise from a gaussian matched to the residual covariance
        - 'nongaussian': noise generated by permuting the residuals
    seed : None, int, SeedSequence or Generator
        Random seed for reproducibility. Each surrogate gets its own child
        stream, so results do not depend on ``n_jobs``.
    n_jobs : int, default 1
        Number of worker processes
    return_channels : bool, default False
        Also return the indices of the retained channels
    verbose : bool, default False
        Print status and show progress bar

    Returns
    -------
    surr : np.ndarray, shape (T, K', n_surr)
        Surrogates; ``surr[:, :, u]`` is the u-th surrogate over the K'
        channels that are not identically zero
    active : np.ndarray of int, shape (K',)
        Retained channel indices (only if ``return_channels``)
    """
    params = SurrogateParams(n_surr=n_surr, order=order,
                             distribution=distribution, n_jobs=n_jobs)

    x = check_time_course(time_course, params.order)
    ts, active = remove_zero_channels(x)
    n_timepoints = ts.shape[1]

    model = fit_ar_model(ts, params.order)

    if verbose:
        print(f"Computing surrogates using a {params.distribution} approach")

    streams = spawn_generators(seed, params.n_surr)
    surr = np.zeros((n_timepoints, ts.shape[0], params.n_surr))

    if params.n_jobs == 1:
        iterator = tqdm(range(params.n_surr), desc="AR surrogates", disable=not verbose)
        for u in iterator:
            surr[:, :, u] = generate_ar_surrogate(ts, model, params.distribution, streams[u])
    else:
        args_list = [(ts, model, params.distribution, rng) for rng in streams]
        with multiprocessing.Pool(processes=params.n_jobs) as pool:
            results = list(tqdm(
                pool.imap(_surrogate_worker, args_list),
                total=params.n_surr,
                desc="AR surrogates",
                disable=not verbose
            ))
        for u, result in enumerate(results):
            surr[:, :, u] = result

    if return_channels:
        return surr, active
    return surr


def get_ar_surrogate(*args, seed: SeedLike = None, verbose: bool = False) -> np.ndarray:
    """
    Positional entry point: ``get_ar_surrogate(TC, n_surr, order[, distribution])``.

    Parameters
    ----------
    *args
        ``time_course, n_surr, order`` and optionally ``distribution``
        (default 'gaussian')
    seed : None, int, SeedSequence or Generator
        Random seed for reproducibility
    verbose : bool, default False
        Print status and show progress bar

    Returns
    -------
    np.ndarray, shape (T, K', n_surr)
        Surrogate datasets

    Raises
    ------
    ArgumentCountError
        If fewer than 3 or more than 4 positional arguments are given
    """
    if len(args) < 3:
        raise ArgumentCountError(
            f"Not enough input arguments: expected 3 or 4, got {len(args)}"
        )
    if len(args) > 4:
        raise ArgumentCountError(
            f"Too many input arguments: expected 3 or 4, got {len(args)}"
        )

    return generate_ar_surrogates(*args, seed=seed, verbose=verbose)
