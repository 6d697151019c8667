"""
Parameters for AR surrogate generation.
"""

import numpy as np
from dataclasses import dataclass
from typing import Union

from ..ar.fitting import is_positive_int
from ..exceptions import InvalidDistributionError


DISTRIBUTIONS = ('gaussian', 'nongaussian')

SeedLike = Union[None, int, np.random.SeedSequence, np.random.Generator]


def check_distribution(distribution: str) -> str:
    """Return ``distribution`` if it names a known noise model, else raise."""
    if distribution not in DISTRIBUTIONS:
        raise InvalidDistributionError(
            f"Unknown distribution: {distribution!r}. "
            f"Must be 'gaussian' or 'nongaussian'"
        )
    return distribution


@dataclass
class SurrogateParams:
    """
    Validated settings for one surrogate-generation run.

    Attributes
    ----------
    n_surr : int
        Number of surrogates to generate
    order : int
        AR model order p
    distribution : str
        Noise model, 'gaussian' or 'nongaussian'
    n_jobs : int
        Worker processes; 1 runs in the calling process
    """
    n_surr: int
    order: int
    distribution: str = 'gaussian'
    n_jobs: int = 1

    def __post_init__(self):
        if not is_positive_int(self.n_surr):
            raise ValueError(f"n_surr must be a positive integer, got {self.n_surr!r}")
        if not is_positive_int(self.order):
            raise ValueError(f"order must be a positive integer, got {self.order!r}")
        if not is_positive_int(self.n_jobs):
            raise ValueError(f"n_jobs must be a positive integer, got {self.n_jobs!r}")

        self.n_surr = int(self.n_surr)
        self.order = int(self.order)
        self.n_jobs = int(self.n_jobs)
        check_distribution(self.distribution)


def spawn_generators(seed: SeedLike, n: int) -> list:
    """
    Create ``n`` independent random generators from one seed.

    Parameters
    ----------
    seed : None, int, SeedSequence or Generator
        Root of the random stream. An int or SeedSequence always yields
        the same children; spawning twice from the same Generator yields
        different ones.
    n : int
        Number of child generators

    Returns
    -------
    list of np.random.Generator
    """
    if isinstance(seed, np.random.SeedSequence):
        # spawn() advances the caller's sequence, so work on a copy
        seed = np.random.SeedSequence(seed.entropy, spawn_key=seed.spawn_key,
                                      pool_size=seed.pool_size)
    return np.random.default_rng(seed).spawn(n)
